from typing import Dict, List, Optional, Protocol, Set, Tuple

import pygame

from tabletop.types import Key

DEFAULT_BINDINGS: Dict[int, Key] = {
    pygame.K_w: Key.W,
    pygame.K_a: Key.A,
    pygame.K_s: Key.S,
    pygame.K_d: Key.D,
    pygame.K_q: Key.Q,
    pygame.K_e: Key.E,
    pygame.K_p: Key.P,
    pygame.K_o: Key.O,
    pygame.K_ESCAPE: Key.ESCAPE,
}


class KeyState(Protocol):
    def is_down(self, key: Key) -> bool: ...


class InputHandler:
    """
    Collects pygame events between frames.

    Key state is level-based (down until the matching KEYUP). Pointer motion
    is tracked as an unbounded virtual cursor built from relative motion, so
    look input keeps working while the mouse is grabbed at a window edge.
    """

    def __init__(self, bindings: Optional[Dict[int, Key]] = None):
        self.bindings: Dict[int, Key] = dict(bindings or DEFAULT_BINDINGS)
        self._down: Set[Key] = set()

        self._pointer: Optional[Tuple[float, float]] = None
        self._pointer_samples: List[Tuple[float, float]] = []
        self._scroll_y = 0.0
        self.quit_requested = False

    def set_mouse_lock(self, locked: bool) -> None:
        """Helper to lock/hide the mouse for FPS controls."""
        pygame.mouse.set_visible(not locked)
        pygame.event.set_grab(locked)

    def process_event(self, event: pygame.event.Event) -> None:
        """Feed Pygame events here to update state."""
        if event.type == pygame.QUIT:
            self.quit_requested = True

        elif event.type == pygame.KEYDOWN:
            key = self.bindings.get(event.key)
            if key is not None:
                self._down.add(key)

        elif event.type == pygame.KEYUP:
            key = self.bindings.get(event.key)
            if key is not None:
                self._down.discard(key)

        elif event.type == pygame.MOUSEMOTION:
            if self._pointer is None:
                self._pointer = (float(event.pos[0]), float(event.pos[1]))
            else:
                self._pointer = (
                    self._pointer[0] + event.rel[0],
                    self._pointer[1] + event.rel[1],
                )
            self._pointer_samples.append(self._pointer)

        elif event.type == pygame.MOUSEWHEEL:
            self._scroll_y += event.y

    def is_down(self, key: Key) -> bool:
        return key in self._down

    def drain_pointer_samples(self) -> List[Tuple[float, float]]:
        """Pointer positions seen since the last call, oldest first."""
        samples = self._pointer_samples
        self._pointer_samples = []
        return samples

    def drain_scroll(self) -> float:
        """Vertical wheel delta accumulated since the last call."""
        dy = self._scroll_y
        self._scroll_y = 0.0
        return dy
