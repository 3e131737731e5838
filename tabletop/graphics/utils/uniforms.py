# tabletop/graphics/utils/uniforms.py
import struct
from typing import Any

import moderngl
import numpy as np


def pack_vec2(x: float, y: float) -> bytes:
    return struct.pack("2f", x, y)


def pack_vec3(x: float, y: float, z: float) -> bytes:
    return struct.pack("3f", x, y, z)


def pack_vec4(x: float, y: float, z: float, w: float) -> bytes:
    return struct.pack("4f", x, y, z, w)


def pack_mat4(mat: np.ndarray) -> bytes:
    """
    Packs a 4x4 numpy matrix for a GLSL mat4 uniform.

    Matrices in tabletop.math are row-major numpy arrays using column vectors,
    GLSL reads column-major, so the matrix is transposed before packing.
    """
    mat = np.asarray(mat)
    if mat.shape != (4, 4):
        raise ValueError("Matrix must be 4x4")
    return np.ascontiguousarray(mat.T, dtype="f4").tobytes()


def set_uniform(program: moderngl.Program | None, name: str, value: Any) -> bool:
    """
    Write `value` to uniform `name`. Returns False when the program does not
    expose it (unused uniforms are stripped by the GLSL linker).
    """
    if not program:
        return False

    if name not in program:
        return False

    member = program[name]

    if isinstance(member, moderngl.Uniform):
        if isinstance(value, bytes):
            member.write(value)
        else:
            member.value = value
        return True

    return False
