import math

import numpy as np
import pytest

from tabletop.camera import ViewController
from tabletop.config import CameraSettings
from tabletop.math import look_at
from tabletop.types import Key, ProjectionMode


@pytest.fixture
def view():
    return ViewController(CameraSettings())


def test_initial_state(view):
    cam = view.camera
    np.testing.assert_allclose(cam.position, (0.0, 5.0, 12.0))
    assert np.linalg.norm(cam.front) == pytest.approx(1.0)
    assert cam.front[1] < 0.0 and cam.front[2] < 0.0
    assert view.projection_mode is ProjectionMode.PERSPECTIVE
    assert view.speed_multiplier == 1.0


def test_first_pointer_sample_only_records(view):
    front_before = view.camera.front.copy()

    view.process_pointer(500.0, 400.0)

    assert view.camera.yaw == -90.0
    assert view.camera.pitch == 0.0
    # Front is recomputed from yaw/pitch, which now points straight ahead
    np.testing.assert_allclose(view.camera.front, (0.0, 0.0, -1.0), atol=1e-6)
    assert not np.allclose(view.camera.front, front_before)


def test_pointer_deltas_scale_by_sensitivity(view):
    view.process_pointer(100.0, 100.0)
    view.process_pointer(110.0, 90.0)  # right and up

    assert view.camera.yaw == pytest.approx(-90.0 + 10 * 0.35)
    assert view.camera.pitch == pytest.approx(10 * 0.35)

    yaw, pitch = math.radians(view.camera.yaw), math.radians(view.camera.pitch)
    expected = np.array(
        [math.cos(yaw) * math.cos(pitch), math.sin(pitch), math.sin(yaw) * math.cos(pitch)]
    )
    np.testing.assert_allclose(view.camera.front, expected, atol=1e-6)
    assert np.linalg.norm(view.camera.front) == pytest.approx(1.0)


def test_pitch_clamps_at_limits(view):
    view.process_pointer(0.0, 0.0)
    view.process_pointer(0.0, -1000.0)  # 350 degrees up
    assert view.camera.pitch == 89.0

    view.process_pointer(0.0, -1200.0)
    assert view.camera.pitch == 89.0

    view.process_pointer(0.0, 5000.0)
    assert view.camera.pitch == -89.0
    assert view.camera.front[1] == pytest.approx(math.sin(math.radians(-89.0)), abs=1e-6)


def test_pointer_ignored_in_orthographic(view, keys):
    keys.down.add(Key.O)
    view.process_keyboard(keys, 0.0)

    view.process_pointer(0.0, 0.0)
    view.process_pointer(300.0, 300.0)

    assert view.camera.yaw == -90.0
    assert view.camera.pitch == 0.0


def test_scroll_accumulates_and_clamps(view):
    view.process_scroll(10.0)
    assert view.speed_multiplier == pytest.approx(2.0)

    view.process_scroll(100.0)
    assert view.speed_multiplier == 4.0

    view.process_scroll(-100.0)
    assert view.speed_multiplier == 0.2


def test_orthographic_toggle_is_edge_triggered(view, keys):
    changes = []
    last = view.projection_mode

    keys.down.add(Key.O)
    for _ in range(5):
        view.process_keyboard(keys, 0.016)
        if view.projection_mode is not last:
            changes.append(view.projection_mode)
            last = view.projection_mode
        # Something else flips it back while O stays held
        view.projection_mode = ProjectionMode.PERSPECTIVE
        last = view.projection_mode

    assert changes == [ProjectionMode.ORTHOGRAPHIC]

    keys.down.clear()
    view.process_keyboard(keys, 0.016)
    keys.down.add(Key.O)
    view.process_keyboard(keys, 0.016)
    assert view.projection_mode is ProjectionMode.ORTHOGRAPHIC


def test_perspective_key_restores_perspective(view, keys):
    keys.down.add(Key.O)
    view.process_keyboard(keys, 0.0)
    keys.down = {Key.P}
    view.process_keyboard(keys, 0.0)
    assert view.projection_mode is ProjectionMode.PERSPECTIVE


def test_forward_movement(view, keys):
    start = view.camera.position.copy()
    front = view.camera.front.copy()

    keys.down.add(Key.W)
    view.process_keyboard(keys, 0.5)

    np.testing.assert_allclose(view.camera.position, start + front * 3.5 * 0.5, atol=1e-5)


def test_movement_uses_speed_multiplier(view, keys):
    view.process_scroll(10.0)
    start = view.camera.position.copy()

    keys.down.add(Key.E)
    view.process_keyboard(keys, 1.0)

    np.testing.assert_allclose(view.camera.position, start + (0.0, 7.0, 0.0), atol=1e-5)


def test_opposite_keys_cancel_and_strafe_is_horizontal(view, keys):
    start = view.camera.position.copy()

    keys.down.update({Key.W, Key.S, Key.Q, Key.E})
    view.process_keyboard(keys, 1.0)
    np.testing.assert_allclose(view.camera.position, start, atol=1e-5)

    keys.down = {Key.D}
    view.process_keyboard(keys, 1.0)
    delta = view.camera.position - start
    assert delta[0] == pytest.approx(3.5, abs=1e-4)
    assert delta[1] == pytest.approx(0.0, abs=1e-6)


def test_escape_requests_close(view, keys):
    assert view.process_keyboard(keys, 0.0) is False
    keys.down.add(Key.ESCAPE)
    assert view.process_keyboard(keys, 0.0) is True


def test_prepare_scene_view_perspective(view, keys, shader):
    closing = view.prepare_scene_view(shader, keys, 0.0, 1000 / 800)

    assert closing is False
    cam = view.camera
    np.testing.assert_allclose(
        shader.uniforms["view"], look_at(cam.position, cam.position + cam.front, cam.up)
    )
    proj = shader.uniforms["projection"]
    assert proj[3, 2] == -1.0
    f = 1.0 / math.tan(math.radians(80.0) / 2)
    assert proj[1, 1] == pytest.approx(f)
    assert proj[0, 0] == pytest.approx(f / 1.25)
    assert shader.uniforms["viewPosition"] == pytest.approx((0.0, 5.0, 12.0))


def test_prepare_scene_view_orthographic(view, keys, shader):
    keys.down.add(Key.O)
    view.prepare_scene_view(shader, keys, 0.0, 2.0)

    expected_view = look_at((0.0, 2.35, 3.2), (0.0, 0.85, -2.8), (0.0, 1.0, 0.0))
    np.testing.assert_allclose(shader.uniforms["view"], expected_view, atol=1e-5)

    proj = shader.uniforms["projection"]
    assert proj[3, 3] == 1.0
    assert proj[0, 0] == pytest.approx(2.0 / (2 * 3.5 * 2.0))
    assert proj[1, 1] == pytest.approx(2.0 / (2 * 3.5))
    # Camera position is still published
    assert "viewPosition" in shader.uniforms
