from dataclasses import dataclass, field
from typing import Any, Dict, List, Set, Tuple

import numpy as np
import pytest
from PIL import Image

from tabletop.types import Key


class RecordingShader:
    """Shader stage double that remembers the last value of every uniform."""

    def __init__(self) -> None:
        self.program = object()
        self.uniforms: Dict[str, Any] = {}
        self.calls: List[Tuple[str, str, Any]] = []
        self.use_count = 0

    def _record(self, kind: str, name: str, value: Any) -> None:
        self.uniforms[name] = value
        self.calls.append((kind, name, value))

    def use(self) -> None:
        self.use_count += 1

    def set_int(self, name, value):
        self._record("int", name, int(value))

    def set_bool(self, name, value):
        self._record("bool", name, bool(value))

    def set_float(self, name, value):
        self._record("float", name, float(value))

    def set_vec2(self, name, value):
        self._record("vec2", name, tuple(float(c) for c in value))

    def set_vec3(self, name, value):
        self._record("vec3", name, tuple(float(c) for c in value))

    def set_vec4(self, name, value):
        self._record("vec4", name, tuple(float(c) for c in value))

    def set_mat4(self, name, value):
        self._record("mat4", name, np.array(value, dtype=np.float32))

    def set_sampler2d(self, name, unit):
        self._record("sampler2d", name, int(unit))


class FakeTexture:
    _next_glo = 1

    def __init__(self, size, components, data=None):
        self.size = size
        self.components = components
        self.data = data
        self.repeat_x = False
        self.repeat_y = False
        self.filter = None
        self.mipmaps_built = False
        self.bound_unit = None
        self.released = 0
        self.glo = FakeTexture._next_glo
        FakeTexture._next_glo += 1

    def build_mipmaps(self):
        self.mipmaps_built = True

    def use(self, location=0):
        self.bound_unit = location

    def release(self):
        self.released += 1


class FakeContext:
    """Stands in for moderngl.Context where only textures are needed."""

    def __init__(self) -> None:
        self.textures: List[FakeTexture] = []

    def texture(self, size, components, data=None, **kwargs):
        tex = FakeTexture(size, components, data)
        self.textures.append(tex)
        return tex


@dataclass
class FakeKeys:
    down: Set[Key] = field(default_factory=set)

    def is_down(self, key: Key) -> bool:
        return key in self.down


class FakeMeshes:
    def __init__(self) -> None:
        self.loaded: List[str] = []
        self.draws: List[Tuple[str, Any]] = []
        self.released = False

    def load_plane_mesh(self):
        self.loaded.append("plane")

    def load_tapered_cylinder_mesh(self):
        self.loaded.append("tapered_cylinder")

    def load_torus_mesh(self):
        self.loaded.append("torus")

    def draw(self, name, program):
        self.draws.append((name, program))

    def release(self):
        self.released = True


@pytest.fixture
def shader():
    return RecordingShader()


@pytest.fixture
def gl():
    return FakeContext()


@pytest.fixture
def keys():
    return FakeKeys()


@pytest.fixture
def meshes():
    return FakeMeshes()


@pytest.fixture
def make_image(tmp_path):
    """Write a small image with Pillow and return its path."""

    def _make(name: str = "img.png", mode: str = "RGB", size=(4, 2), color=None):
        if color is None:
            color = tuple(range(10, 10 + len(Image.new(mode, (1, 1)).getbands())))
            if len(color) == 1:
                color = color[0]
        path = tmp_path / name
        Image.new(mode, size, color=color).save(path)
        return path

    return _make
