"""
Command line entry point for the tabletop demo.

Controls:
    - W/S: forward/back, A/D: strafe, Q/E: down/up
    - Mouse: look, wheel: movement speed
    - P: perspective, O: orthographic
    - ESC: quit
"""

from __future__ import annotations

import argparse
from dataclasses import replace
from pathlib import Path
from typing import Optional, Sequence

from tabletop.config import AppSettings, CameraSettings, WindowSettings
from tabletop.logging_config import setup_logging


def build_parser() -> argparse.ArgumentParser:
    defaults = AppSettings()
    parser = argparse.ArgumentParser(
        prog="tabletop",
        description="Textured, lit desk scene with a free-fly camera",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("--width", type=int, default=defaults.window.width)
    parser.add_argument("--height", type=int, default=defaults.window.height)
    parser.add_argument(
        "--textures",
        type=Path,
        default=defaults.texture_dir,
        help="Directory holding wood.png and ceramic.png",
    )
    parser.add_argument(
        "--fov",
        type=float,
        default=defaults.camera.fov,
        help="Vertical field of view in degrees",
    )
    parser.add_argument("--fps", type=int, default=defaults.target_fps)
    parser.add_argument(
        "--log-level",
        default=defaults.log_level,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    return parser


def settings_from_args(args: argparse.Namespace) -> AppSettings:
    if args.width <= 0 or args.height <= 0:
        raise ValueError("Window size must be positive")

    return AppSettings(
        window=replace(WindowSettings(), width=args.width, height=args.height),
        camera=replace(CameraSettings(), fov=args.fov),
        texture_dir=args.textures,
        target_fps=args.fps,
        log_level=args.log_level,
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = settings_from_args(args)
    except ValueError as e:
        parser.error(str(e))

    setup_logging(settings.log_level)

    # pygame/moderngl are only needed once a window is opened
    from tabletop.core.application import Application

    Application(settings).run()
    return 0
