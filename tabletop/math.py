import math

import numpy as np

from tabletop.types import Vec3Like

# All matrices use the column-vector convention (v' = M @ v) and are stored
# row-major in numpy. Transpose before handing them to GLSL.


def vec3(v: Vec3Like) -> np.ndarray:
    return np.asarray(v, dtype=np.float32).reshape(3)


# -- Vector Math --
def norm_vec(v: Vec3Like) -> np.ndarray:
    v = vec3(v)
    mag = float(np.linalg.norm(v))
    if mag == 0:
        return v
    return v / mag


def cross_vec3(a: Vec3Like, b: Vec3Like) -> np.ndarray:
    return np.cross(vec3(a), vec3(b)).astype(np.float32)


# -- Affine building blocks --
def scale_matrix(scale: Vec3Like) -> np.ndarray:
    sx, sy, sz = (float(c) for c in vec3(scale))
    return np.diag([sx, sy, sz, 1.0]).astype(np.float32)


def translation_matrix(position: Vec3Like) -> np.ndarray:
    mat = np.eye(4, dtype=np.float32)
    mat[:3, 3] = vec3(position)
    return mat


def rotation_x(degrees: float) -> np.ndarray:
    rad = math.radians(degrees)
    c, s = math.cos(rad), math.sin(rad)
    return np.array(
        [
            [1.0, 0.0, 0.0, 0.0],
            [0.0, c, -s, 0.0],
            [0.0, s, c, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ],
        dtype=np.float32,
    )


def rotation_y(degrees: float) -> np.ndarray:
    rad = math.radians(degrees)
    c, s = math.cos(rad), math.sin(rad)
    return np.array(
        [
            [c, 0.0, s, 0.0],
            [0.0, 1.0, 0.0, 0.0],
            [-s, 0.0, c, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ],
        dtype=np.float32,
    )


def rotation_z(degrees: float) -> np.ndarray:
    rad = math.radians(degrees)
    c, s = math.cos(rad), math.sin(rad)
    return np.array(
        [
            [c, -s, 0.0, 0.0],
            [s, c, 0.0, 0.0],
            [0.0, 0.0, 1.0, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ],
        dtype=np.float32,
    )


def compose_model_matrix(
    scale: Vec3Like,
    rotation_degrees: Vec3Like,
    position: Vec3Like,
) -> np.ndarray:
    """
    Build a model matrix from scale, XYZ Euler angles (degrees) and position.

    Composition is T @ Rx @ Ry @ Rz @ S: a vertex is scaled first, then
    rotated about Z, Y and X, then translated. Keep this order; scenes are
    authored against it.
    """
    rx, ry, rz = (float(a) for a in vec3(rotation_degrees))

    return (
        translation_matrix(position)
        @ rotation_x(rx)
        @ rotation_y(ry)
        @ rotation_z(rz)
        @ scale_matrix(scale)
    )


# -- Camera matrices --
def look_at(eye: Vec3Like, target: Vec3Like, up: Vec3Like) -> np.ndarray:
    """Right-handed view matrix looking from `eye` towards `target`."""
    eye = vec3(eye)
    f = norm_vec(vec3(target) - eye)
    s = norm_vec(np.cross(f, vec3(up)))
    u = np.cross(s, f)

    view = np.eye(4, dtype=np.float32)
    view[0, :3] = s
    view[1, :3] = u
    view[2, :3] = -f
    view[0, 3] = -np.dot(s, eye)
    view[1, 3] = -np.dot(u, eye)
    view[2, 3] = np.dot(f, eye)
    return view


def create_perspective_projection(
    fov_deg: float, aspect: float, near: float, far: float
) -> np.ndarray:
    """
    Creates a standard OpenGL Perspective Projection Matrix.
    fov_deg: Field of View in Degrees (Vertical)
    aspect: Width / Height
    near: Distance to near plane
    far: Distance to far plane
    """
    fov_rad = math.radians(fov_deg)
    tan_half_fov = math.tan(fov_rad / 2.0)

    # Avoid division by zero
    if tan_half_fov == 0:
        tan_half_fov = 0.001
    if near == far:
        far += 0.001
    if aspect == 0:
        aspect = 1.0

    mat = np.zeros((4, 4), dtype=np.float32)

    mat[0, 0] = 1.0 / (aspect * tan_half_fov)
    mat[1, 1] = 1.0 / tan_half_fov

    # Remap Z (Depth)
    mat[2, 2] = (far + near) / (near - far)
    mat[2, 3] = (2.0 * far * near) / (near - far)

    # Perspective Division (w = -z)
    mat[3, 2] = -1.0

    return mat


def create_orthographic_projection(
    left: float,
    right: float,
    bottom: float,
    top: float,
    near: float,
    far: float,
) -> np.ndarray:
    """Standard OpenGL orthographic box mapped to NDC [-1, 1]^3."""
    mat = np.eye(4, dtype=np.float32)

    mat[0, 0] = 2.0 / (right - left)
    mat[1, 1] = 2.0 / (top - bottom)
    mat[2, 2] = -2.0 / (far - near)

    mat[0, 3] = -(right + left) / (right - left)
    mat[1, 3] = -(top + bottom) / (top - bottom)
    mat[2, 3] = -(far + near) / (far - near)

    return mat
