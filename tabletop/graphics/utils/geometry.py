# tabletop/graphics/utils/geometry.py
"""
Triangle-list generators for the basic scene primitives.

Every generator returns a float32 array of shape (N, 8), one row per vertex:
position (x, y, z), normal (nx, ny, nz), uv (u, v). N is a multiple of 3.
"""

import math

import numpy as np

VERTEX_FORMAT = "3f 3f 2f"
VERTEX_ATTRIBUTES = ("in_position", "in_normal", "in_texcoord")
FLOATS_PER_VERTEX = 8


def _quads_to_triangles(grid: np.ndarray) -> np.ndarray:
    """
    Split a (rows+1, cols+1, 8) vertex grid into two counter-clockwise
    triangles per cell.
    """
    a = grid[:-1, :-1]
    b = grid[1:, :-1]
    c = grid[1:, 1:]
    d = grid[:-1, 1:]
    tris = np.stack([a, b, c, a, c, d], axis=2)
    return tris.reshape(-1, FLOATS_PER_VERTEX).astype(np.float32)


def create_plane(half_extent: float = 1.0) -> np.ndarray:
    """Flat square in the XZ plane facing +Y, centered at the origin."""
    h = half_extent
    # x, y, z, nx, ny, nz, u, v
    corners = np.array(
        [
            [-h, 0.0, h, 0.0, 1.0, 0.0, 0.0, 0.0],
            [h, 0.0, h, 0.0, 1.0, 0.0, 1.0, 0.0],
            [h, 0.0, -h, 0.0, 1.0, 0.0, 1.0, 1.0],
            [-h, 0.0, -h, 0.0, 1.0, 0.0, 0.0, 1.0],
        ],
        dtype=np.float32,
    )
    return corners[[0, 1, 2, 0, 2, 3]]


def _disc(radius: float, y: float, segments: int, facing_up: bool) -> np.ndarray:
    theta = np.linspace(0.0, 2.0 * math.pi, segments + 1)
    ny = 1.0 if facing_up else -1.0

    center = np.array([0.0, y, 0.0, 0.0, ny, 0.0, 0.5, 0.5], dtype=np.float32)
    rim = np.zeros((segments + 1, FLOATS_PER_VERTEX), dtype=np.float32)
    rim[:, 0] = radius * np.cos(theta)
    rim[:, 1] = y
    rim[:, 2] = radius * np.sin(theta)
    rim[:, 4] = ny
    rim[:, 6] = 0.5 + 0.5 * np.cos(theta)
    rim[:, 7] = 0.5 + 0.5 * np.sin(theta)

    tris = []
    for i in range(segments):
        if facing_up:
            tris.extend([center, rim[i + 1], rim[i]])
        else:
            tris.extend([center, rim[i], rim[i + 1]])
    return np.array(tris, dtype=np.float32)


def create_tapered_cylinder(
    bottom_radius: float = 1.0,
    top_radius: float = 0.5,
    height: float = 1.0,
    segments: int = 36,
    caps: bool = True,
) -> np.ndarray:
    """
    Cone frustum around the Y axis, centered at the origin so its base sits
    at y = -height / 2.
    """
    half = height / 2.0
    theta = np.linspace(0.0, 2.0 * math.pi, segments + 1)

    # Side normal leans outward by the taper slope
    slope = (bottom_radius - top_radius) / height
    n_len = math.sqrt(1.0 + slope * slope)

    grid = np.zeros((2, segments + 1, FLOATS_PER_VERTEX), dtype=np.float32)
    for row, (radius, y) in enumerate(((top_radius, half), (bottom_radius, -half))):
        grid[row, :, 0] = radius * np.cos(theta)
        grid[row, :, 1] = y
        grid[row, :, 2] = radius * np.sin(theta)
        grid[row, :, 3] = np.cos(theta) / n_len
        grid[row, :, 4] = slope / n_len
        grid[row, :, 5] = np.sin(theta) / n_len
        grid[row, :, 6] = theta / (2.0 * math.pi)
        grid[row, :, 7] = 1.0 - row

    parts = [_quads_to_triangles(grid)]
    if caps:
        parts.append(_disc(top_radius, half, segments, facing_up=True))
        parts.append(_disc(bottom_radius, -half, segments, facing_up=False))
    return np.concatenate(parts).astype(np.float32)


def create_torus(
    main_radius: float = 1.0,
    tube_radius: float = 0.25,
    main_segments: int = 48,
    tube_segments: int = 24,
) -> np.ndarray:
    """Ring lying in the XY plane around the Z axis."""
    u = np.linspace(0.0, 2.0 * math.pi, main_segments + 1)
    v = np.linspace(0.0, 2.0 * math.pi, tube_segments + 1)
    uu, vv = np.meshgrid(u, v, indexing="ij")

    nx = np.cos(vv) * np.cos(uu)
    ny = np.cos(vv) * np.sin(uu)
    nz = np.sin(vv)

    grid = np.zeros(
        (main_segments + 1, tube_segments + 1, FLOATS_PER_VERTEX), dtype=np.float32
    )
    grid[..., 0] = (main_radius + tube_radius * np.cos(vv)) * np.cos(uu)
    grid[..., 1] = (main_radius + tube_radius * np.cos(vv)) * np.sin(uu)
    grid[..., 2] = tube_radius * nz
    grid[..., 3] = nx
    grid[..., 4] = ny
    grid[..., 5] = nz
    grid[..., 6] = uu / (2.0 * math.pi)
    grid[..., 7] = vv / (2.0 * math.pi)

    return _quads_to_triangles(grid)
