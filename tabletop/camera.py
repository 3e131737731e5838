import math
from dataclasses import dataclass, field

import numpy as np

from tabletop.config import CameraSettings
from tabletop.graphics.shaders.shader_manager import ShaderStage
from tabletop.input.handler import KeyState
from tabletop.math import (
    create_orthographic_projection,
    create_perspective_projection,
    cross_vec3,
    look_at,
    norm_vec,
    vec3,
)
from tabletop.types import Key, ProjectionMode

WORLD_UP = np.array([0.0, 1.0, 0.0], dtype=np.float32)


@dataclass
class CameraState:
    """Pose of the free-fly camera. `front` and `up` are unit vectors."""

    position: np.ndarray = field(
        default_factory=lambda: np.array([0.0, 5.0, 12.0], dtype=np.float32)
    )
    front: np.ndarray = field(
        default_factory=lambda: norm_vec((0.0, -0.25, -1.0))
    )
    up: np.ndarray = field(default_factory=lambda: WORLD_UP.copy())
    yaw: float = -90.0
    pitch: float = 0.0
    fov: float = 80.0

    @classmethod
    def from_settings(cls, settings: CameraSettings) -> "CameraState":
        return cls(
            position=vec3(settings.position).copy(),
            front=norm_vec(settings.front),
            up=norm_vec(settings.up),
            yaw=settings.yaw,
            pitch=settings.pitch,
            fov=settings.fov,
        )


class ViewController:
    """
    Free-fly camera driven by keyboard, pointer and scroll input.

    Owns all per-session view state: camera pose, projection mode, movement
    speed multiplier, pointer history and the previous P/O key levels used
    for edge detection.
    """

    def __init__(self, settings: CameraSettings = CameraSettings()):
        self.settings = settings
        self.camera = CameraState.from_settings(settings)

        self.projection_mode = ProjectionMode.PERSPECTIVE
        self.speed_multiplier = 1.0

        self._first_pointer = True
        self._last_x = 0.0
        self._last_y = 0.0

        self._prev_p_down = False
        self._prev_o_down = False

    @property
    def is_orthographic(self) -> bool:
        return self.projection_mode is ProjectionMode.ORTHOGRAPHIC

    # -- Input --
    def process_pointer(self, x: float, y: float) -> None:
        """Turn a pointer sample into yaw/pitch and a new front direction."""
        # Orthographic view is fixed on its target
        if self.is_orthographic:
            return

        if self._first_pointer:
            self._last_x = x
            self._last_y = y
            self._first_pointer = False

        x_offset = (x - self._last_x) * self.settings.mouse_sensitivity
        y_offset = (self._last_y - y) * self.settings.mouse_sensitivity  # reversed

        self._last_x = x
        self._last_y = y

        cam = self.camera
        cam.yaw += x_offset
        cam.pitch += y_offset

        limit = self.settings.pitch_limit
        cam.pitch = max(-limit, min(limit, cam.pitch))

        yaw = math.radians(cam.yaw)
        pitch = math.radians(cam.pitch)
        cam.front = norm_vec(
            (
                math.cos(yaw) * math.cos(pitch),
                math.sin(pitch),
                math.sin(yaw) * math.cos(pitch),
            )
        )

    def process_scroll(self, y_offset: float) -> None:
        """Scroll up speeds movement up, scroll down slows it down."""
        s = self.settings
        multiplier = self.speed_multiplier + y_offset * s.scroll_rate
        self.speed_multiplier = max(
            s.min_speed_multiplier, min(s.max_speed_multiplier, multiplier)
        )

    def process_keyboard(self, keys: KeyState, dt: float) -> bool:
        """
        Apply projection toggles and movement for one frame.

        Returns True when Escape is held (close request).
        """
        p_down = keys.is_down(Key.P)
        o_down = keys.is_down(Key.O)

        if p_down and not self._prev_p_down:
            self.projection_mode = ProjectionMode.PERSPECTIVE
        if o_down and not self._prev_o_down:
            self.projection_mode = ProjectionMode.ORTHOGRAPHIC

        self._prev_p_down = p_down
        self._prev_o_down = o_down

        cam = self.camera
        velocity = self.settings.base_move_speed * self.speed_multiplier * dt

        if keys.is_down(Key.W):
            cam.position = cam.position + cam.front * velocity
        if keys.is_down(Key.S):
            cam.position = cam.position - cam.front * velocity

        right = norm_vec(cross_vec3(cam.front, cam.up))
        if keys.is_down(Key.A):
            cam.position = cam.position - right * velocity
        if keys.is_down(Key.D):
            cam.position = cam.position + right * velocity

        if keys.is_down(Key.Q):
            cam.position = cam.position - cam.up * velocity
        if keys.is_down(Key.E):
            cam.position = cam.position + cam.up * velocity

        return keys.is_down(Key.ESCAPE)

    # -- Matrices --
    def view_matrix(self) -> np.ndarray:
        if self.is_orthographic:
            target = vec3(self.settings.ortho_target)
            eye = target + vec3(self.settings.ortho_eye_offset)
            return look_at(eye, target, WORLD_UP)

        cam = self.camera
        return look_at(cam.position, cam.position + cam.front, cam.up)

    def projection_matrix(self, aspect: float) -> np.ndarray:
        s = self.settings
        if self.is_orthographic:
            half_h = s.ortho_half_height
            return create_orthographic_projection(
                -half_h * aspect, half_h * aspect, -half_h, half_h, s.near, s.far
            )

        return create_perspective_projection(self.camera.fov, aspect, s.near, s.far)

    def prepare_scene_view(
        self, shader: ShaderStage, keys: KeyState, dt: float, aspect: float
    ) -> bool:
        """
        Per-frame update: handle keyboard input, then push `view`,
        `projection` and `viewPosition`. Returns the close request.
        """
        close_requested = self.process_keyboard(keys, dt)

        shader.set_mat4("view", self.view_matrix())
        shader.set_mat4("projection", self.projection_matrix(aspect))
        shader.set_vec3("viewPosition", self.camera.position)

        return close_requested
