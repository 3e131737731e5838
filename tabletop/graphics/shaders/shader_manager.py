# tabletop/graphics/shaders/shader_manager.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol, Set

import moderngl
import numpy as np

from tabletop.assets.importers.shader import ShaderImporter
from tabletop.graphics.utils.uniforms import (
    pack_mat4,
    pack_vec2,
    pack_vec3,
    pack_vec4,
    set_uniform,
)
from tabletop.types import Vec3Like

logger = logging.getLogger(__name__)

GLSL_DIR = Path(__file__).parent / "glsl"


class ShaderStage(Protocol):
    """Anything that accepts named uniform values for the next draw calls."""

    def set_int(self, name: str, value: int) -> None: ...

    def set_bool(self, name: str, value: bool) -> None: ...

    def set_float(self, name: str, value: float) -> None: ...

    def set_vec2(self, name: str, value: tuple[float, float]) -> None: ...

    def set_vec3(self, name: str, value: Vec3Like) -> None: ...

    def set_vec4(self, name: str, value: tuple[float, float, float, float]) -> None: ...

    def set_mat4(self, name: str, value: np.ndarray) -> None: ...

    def set_sampler2d(self, name: str, unit: int) -> None: ...


@dataclass(frozen=True, slots=True)
class ShaderStages:
    """Vertex and fragment sources for a single GPU program."""

    vertex: Path = GLSL_DIR / "scene.vert"
    fragment: Path = GLSL_DIR / "scene.frag"


class ShaderProgram:
    """
    A compiled moderngl program with typed uniform setters.

    Writes to uniforms the linker optimised away are skipped; each missing
    name is reported once at debug level.
    """

    def __init__(self, program: moderngl.Program, label: str = "") -> None:
        self.program = program
        self.label = label
        self._missing: Set[str] = set()

    @classmethod
    def from_files(
        cls, gl: moderngl.Context, stages: ShaderStages = ShaderStages()
    ) -> ShaderProgram:
        importer = ShaderImporter()
        vert = importer.import_file(stages.vertex)
        frag = importer.import_file(stages.fragment)

        program = gl.program(vertex_shader=vert.source, fragment_shader=frag.source)
        logger.info("Compiled shader program from %s, %s", vert.path, frag.path)
        return cls(program, label=stages.vertex.stem)

    def use(self) -> None:
        # moderngl binds the program at render time; nothing to activate.
        pass

    def _set(self, name: str, value) -> None:
        if not set_uniform(self.program, name, value) and name not in self._missing:
            self._missing.add(name)
            logger.debug("Uniform '%s' not active in program '%s'", name, self.label)

    def set_int(self, name: str, value: int) -> None:
        self._set(name, int(value))

    def set_bool(self, name: str, value: bool) -> None:
        self._set(name, 1 if value else 0)

    def set_float(self, name: str, value: float) -> None:
        self._set(name, float(value))

    def set_vec2(self, name: str, value: tuple[float, float]) -> None:
        self._set(name, pack_vec2(*(float(c) for c in value)))

    def set_vec3(self, name: str, value: Vec3Like) -> None:
        x, y, z = (float(c) for c in value)
        self._set(name, pack_vec3(x, y, z))

    def set_vec4(self, name: str, value: tuple[float, float, float, float]) -> None:
        self._set(name, pack_vec4(*(float(c) for c in value)))

    def set_mat4(self, name: str, value: np.ndarray) -> None:
        self._set(name, pack_mat4(value))

    def set_sampler2d(self, name: str, unit: int) -> None:
        self._set(name, int(unit))

    def release(self) -> None:
        self.program.release()
