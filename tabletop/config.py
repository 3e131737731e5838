# tabletop/config.py
from dataclasses import dataclass, field
from pathlib import Path
from typing import Tuple

Vec3 = Tuple[float, float, float]


@dataclass(frozen=True, slots=True)
class WindowSettings:
    """Size and title of the OS window."""

    width: int = 1000
    height: int = 800
    title: str = "Tabletop"
    vsync: bool = True

    @property
    def aspect(self) -> float:
        if self.height == 0:
            return 1.0
        return self.width / self.height


@dataclass(frozen=True, slots=True)
class CameraSettings:
    """
    Tuning for the free-fly camera.

    Angles are in degrees, speeds in world units per second.
    """

    position: Vec3 = (0.0, 5.0, 12.0)
    front: Vec3 = (0.0, -0.25, -1.0)
    up: Vec3 = (0.0, 1.0, 0.0)
    yaw: float = -90.0
    pitch: float = 0.0
    fov: float = 80.0

    near: float = 0.1
    far: float = 100.0

    mouse_sensitivity: float = 0.35
    pitch_limit: float = 89.0

    base_move_speed: float = 3.5
    scroll_rate: float = 0.1
    min_speed_multiplier: float = 0.2
    max_speed_multiplier: float = 4.0

    # Fixed orthographic view, framed on the mug
    ortho_half_height: float = 3.5
    ortho_target: Vec3 = (0.0, 0.85, -2.8)
    ortho_eye_offset: Vec3 = (0.0, 1.5, 6.0)


@dataclass(frozen=True, slots=True)
class AppSettings:
    """Top-level configuration assembled by the entry point."""

    window: WindowSettings = field(default_factory=WindowSettings)
    camera: CameraSettings = field(default_factory=CameraSettings)

    texture_dir: Path = Path("resources") / "textures"
    target_fps: int = 60
    log_level: str = "INFO"
