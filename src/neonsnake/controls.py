# controls.py
import logging
from typing import Callable, Dict, List, Optional

import pygame # type: ignore

from .config import Direction, INITIAL_DIRECTION

log = logging.getLogger(__name__)

# ---------- Key table ----------
# Browser-style key identifiers; letters are matched case-sensitively.
KEY_MAP: Dict[str, Direction] = {
    "ArrowUp": Direction.UP,       "w": Direction.UP,
    "ArrowDown": Direction.DOWN,   "s": Direction.DOWN,
    "ArrowLeft": Direction.LEFT,   "a": Direction.LEFT,
    "ArrowRight": Direction.RIGHT, "d": Direction.RIGHT,
}
PAUSE_KEY = " "

_ARROWS = {
    pygame.K_UP: "ArrowUp",
    pygame.K_DOWN: "ArrowDown",
    pygame.K_LEFT: "ArrowLeft",
    pygame.K_RIGHT: "ArrowRight",
}

def is_opposite(a: Direction, b: Direction) -> bool:
    return a.opposite is b

def key_name(event: pygame.event.Event) -> Optional[str]:
    """Translate a KEYDOWN event into its key identifier ('ArrowUp', 'w', ' ', ...)."""
    if event.type != pygame.KEYDOWN:
        return None
    if event.key in _ARROWS:
        return _ARROWS[event.key]
    return getattr(event, "unicode", "") or None

# ---------- Input mapper ----------
class InputMapper:
    """
    Turns key presses into the pending direction consulted by the next tick.
    Reversals are checked against the pending direction, not the drawn one,
    so two quick presses between ticks can't fold the snake onto its neck.
    """

    def __init__(self, on_pause: Callable[[], None], direction: Direction = INITIAL_DIRECTION):
        self.on_pause = on_pause
        self.pending = direction

    def reset(self, direction: Direction = INITIAL_DIRECTION) -> None:
        self.pending = direction

    def on_key(self, key: str) -> None:
        cand = KEY_MAP.get(key)
        if cand is not None:
            if is_opposite(cand, self.pending):
                log.debug("Ignoring reversal %s while heading %s", cand.name, self.pending.name)
            else:
                self.pending = cand
        elif key == PAUSE_KEY:
            self.on_pause()

# ---------- Keyboard channel ----------
class Subscription:
    """Handle returned by KeyboardChannel.subscribe; close() or leave the with-block to stop listening."""

    def __init__(self, channel: "KeyboardChannel", handler: Callable[[str], None]):
        self._channel = channel
        self.handler = handler

    @property
    def active(self) -> bool:
        return self.handler in self._channel._handlers

    def close(self) -> None:
        if self.active:
            self._channel._handlers.remove(self.handler)

    def __enter__(self) -> "Subscription":
        return self

    def __exit__(self, *exc) -> None:
        self.close()


class KeyboardChannel:
    """Fans pygame KEYDOWN events out to subscribed key handlers."""

    def __init__(self):
        self._handlers: List[Callable[[str], None]] = []

    def subscribe(self, handler: Callable[[str], None]) -> Subscription:
        self._handlers.append(handler)
        return Subscription(self, handler)

    def dispatch(self, event: pygame.event.Event) -> bool:
        """Deliver a key event; returns False when it wasn't a recognizable key press."""
        key = key_name(event)
        if key is None:
            return False
        for handler in list(self._handlers):
            handler(key)
        return True
