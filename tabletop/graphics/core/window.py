# tabletop/graphics/core/window.py
import logging

import moderngl
import pygame

from tabletop.config import WindowSettings

logger = logging.getLogger(__name__)


class Window:
    """
    Manages the OS Window and OpenGL Context.
    """

    def __init__(self, settings: WindowSettings = WindowSettings()):
        if not pygame.get_init():
            pygame.init()

        pygame.display.gl_set_attribute(pygame.GL_CONTEXT_MAJOR_VERSION, 3)
        pygame.display.gl_set_attribute(pygame.GL_CONTEXT_MINOR_VERSION, 3)
        pygame.display.gl_set_attribute(
            pygame.GL_CONTEXT_PROFILE_MASK, pygame.GL_CONTEXT_PROFILE_CORE
        )
        pygame.display.gl_set_attribute(pygame.GL_DEPTH_SIZE, 24)
        pygame.display.gl_set_attribute(pygame.GL_DOUBLEBUFFER, 1)

        self._screen = pygame.display.set_mode(
            (settings.width, settings.height),
            pygame.OPENGL | pygame.DOUBLEBUF,
            vsync=1 if settings.vsync else 0,
        )
        pygame.display.set_caption(settings.title)

        self.ctx = moderngl.create_context()
        # Blending for transparent objects
        self.ctx.enable(moderngl.DEPTH_TEST | moderngl.BLEND)
        self.ctx.blend_func = moderngl.SRC_ALPHA, moderngl.ONE_MINUS_SRC_ALPHA

        version = self.ctx.version_code
        logger.info("OpenGL Context Created: %s.%s", str(version)[0], str(version)[1:])

    @property
    def size(self) -> tuple[int, int]:
        return self._screen.get_size()

    @property
    def aspect(self) -> float:
        w, h = self.size
        return w / h if h else 1.0

    def clear(self) -> None:
        self.ctx.clear(0.0, 0.0, 0.0, 1.0, depth=1.0)

    def present(self) -> None:
        pygame.display.flip()

    def destroy(self) -> None:
        pygame.quit()
