from __future__ import annotations

from enum import Enum
from typing import NewType, Sequence, Tuple, Union

import numpy as np

TextureTag = NewType("TextureTag", str)
MaterialTag = NewType("MaterialTag", str)
MeshName = NewType("MeshName", str)

Color3 = Tuple[float, float, float]
Color4 = Tuple[float, float, float, float]

# Anything numpy can turn into a length-3 float vector.
Vec3Like = Union[Sequence[float], np.ndarray]


class Key(str, Enum):
    """Keys the camera controller and application react to."""

    W = "w"
    A = "a"
    S = "s"
    D = "d"
    Q = "q"
    E = "e"
    P = "p"
    O = "o"  # noqa: E741
    ESCAPE = "escape"


class ProjectionMode(str, Enum):
    PERSPECTIVE = "perspective"
    ORTHOGRAPHIC = "orthographic"
