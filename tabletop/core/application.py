# tabletop/core/application.py
import logging
from typing import Optional

import pygame

from tabletop.camera import ViewController
from tabletop.config import AppSettings
from tabletop.core.timing import FrameTimer
from tabletop.graphics.assets.meshes import MeshLibrary
from tabletop.graphics.assets.texture_manager import TextureRegistry
from tabletop.graphics.core.window import Window
from tabletop.graphics.shaders.shader_manager import ShaderProgram
from tabletop.input.handler import InputHandler
from tabletop.scene import SceneManager

logger = logging.getLogger(__name__)


class Application:
    """Creates the window and runs the frame loop until a close request."""

    def __init__(self, settings: AppSettings = AppSettings()):
        self.settings = settings
        self.window: Optional[Window] = None
        self.scene: Optional[SceneManager] = None
        self.shader: Optional[ShaderProgram] = None

        self.input = InputHandler()
        self.view = ViewController(settings.camera)
        self.timer = FrameTimer()
        self.clock: Optional[pygame.time.Clock] = None
        self.running = False

    def _setup(self) -> None:
        self.window = Window(self.settings.window)
        ctx = self.window.ctx

        self.shader = ShaderProgram.from_files(ctx)
        self.scene = SceneManager(
            shader=self.shader,
            textures=TextureRegistry(ctx),
            meshes=MeshLibrary(ctx),
        )
        self.scene.prepare_scene(self.settings.texture_dir)

        # Capture the mouse for camera look
        self.input.set_mouse_lock(True)
        self.clock = pygame.time.Clock()

    def _poll_events(self) -> None:
        for event in pygame.event.get():
            self.input.process_event(event)

        for x, y in self.input.drain_pointer_samples():
            self.view.process_pointer(x, y)

        scroll = self.input.drain_scroll()
        if scroll:
            self.view.process_scroll(scroll)

    def frame(self) -> None:
        assert self.window is not None
        assert self.scene is not None and self.shader is not None

        dt = self.timer.tick()
        self._poll_events()

        self.window.clear()

        close_requested = self.view.prepare_scene_view(
            self.shader, self.input, dt, self.window.aspect
        )
        if close_requested or self.input.quit_requested:
            self.running = False

        self.scene.render_scene(self.view.camera.position)
        self.window.present()

        if self.clock is not None:
            self.clock.tick(self.settings.target_fps)

    def run(self) -> None:
        self._setup()
        self.running = True
        self.timer.start()

        try:
            while self.running:
                self.frame()
        finally:
            self.shutdown()

    def shutdown(self) -> None:
        if self.scene is not None:
            self.scene.release()
            self.scene = None
        if self.shader is not None:
            self.shader.release()
            self.shader = None
        if self.window is not None:
            self.window.destroy()
            self.window = None
        logger.info("Shut down")
