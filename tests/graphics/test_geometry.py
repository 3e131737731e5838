import numpy as np
import pytest

from tabletop.graphics.utils.geometry import (
    FLOATS_PER_VERTEX,
    create_plane,
    create_tapered_cylinder,
    create_torus,
)


@pytest.mark.parametrize(
    "vertices",
    [create_plane(), create_tapered_cylinder(), create_torus()],
    ids=["plane", "tapered_cylinder", "torus"],
)
def test_triangle_list_layout(vertices):
    assert vertices.dtype == np.float32
    assert vertices.shape[1] == FLOATS_PER_VERTEX
    assert len(vertices) % 3 == 0

    normals = vertices[:, 3:6]
    np.testing.assert_allclose(np.linalg.norm(normals, axis=1), 1.0, atol=1e-5)


def test_plane_faces_up():
    plane = create_plane()
    assert len(plane) == 6
    np.testing.assert_allclose(plane[:, 1], 0.0)
    np.testing.assert_allclose(plane[:, 3:6], np.tile([0.0, 1.0, 0.0], (6, 1)))
    assert plane[:, 0].min() == -1.0 and plane[:, 0].max() == 1.0
    assert set(plane[:, 6]) == {0.0, 1.0}


def test_tapered_cylinder_bounds():
    verts = create_tapered_cylinder(bottom_radius=1.0, top_radius=0.5, height=1.0, segments=16)

    y = verts[:, 1]
    assert y.min() == pytest.approx(-0.5)
    assert y.max() == pytest.approx(0.5)

    radius = np.hypot(verts[:, 0], verts[:, 2])
    assert radius[np.isclose(y, 0.5)].max() == pytest.approx(0.5, abs=1e-5)
    assert radius[np.isclose(y, -0.5)].max() == pytest.approx(1.0, abs=1e-5)

    # side (16 quads) + two caps (16 triangles each)
    assert len(verts) == 16 * 6 + 2 * 16 * 3


def test_tapered_cylinder_without_caps():
    assert len(create_tapered_cylinder(segments=8, caps=False)) == 8 * 6


def test_torus_lies_in_xy_plane():
    verts = create_torus(main_radius=1.0, tube_radius=0.25, main_segments=12, tube_segments=8)

    assert len(verts) == 12 * 8 * 6
    assert np.abs(verts[:, 2]).max() == pytest.approx(0.25, abs=1e-5)

    ring = np.hypot(verts[:, 0], verts[:, 1])
    assert ring.min() == pytest.approx(0.75, abs=1e-5)
    assert ring.max() == pytest.approx(1.25, abs=1e-5)
