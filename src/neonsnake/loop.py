# loop.py
import logging
from typing import Callable, Optional

import pygame # type: ignore

log = logging.getLogger(__name__)

TICK_EVENT = pygame.event.custom_type()


class GameLoop:
    """
    Repeating tick timer on top of pygame.time.set_timer.

    update() always swaps in the newest callback, but only touches the timer
    when the interval changes. Each schedule stamps its events with a
    generation number; firings left in the queue by a cancelled schedule are
    dropped in handle().
    """

    def __init__(self, timer: Optional[Callable] = None, event_type: int = TICK_EVENT):
        self._timer = timer or pygame.time.set_timer
        self.event_type = event_type
        self.callback: Optional[Callable[[], None]] = None
        self.interval: Optional[int] = None   # None == disabled
        self.generation = 0

    @property
    def enabled(self) -> bool:
        return self.interval is not None

    def update(self, callback: Callable[[], None], interval_ms: Optional[int]) -> None:
        self.callback = callback
        if interval_ms == self.interval:
            return

        self._cancel()
        self.interval = interval_ms
        if interval_ms is None:
            log.debug("Tick timer stopped")
            return

        self.generation += 1
        event = pygame.event.Event(self.event_type, generation=self.generation)
        self._timer(event, interval_ms)
        log.debug("Tick timer every %dms (generation %d)", interval_ms, self.generation)

    def stop(self) -> None:
        self._cancel()
        self.interval = None

    def handle(self, event: pygame.event.Event) -> bool:
        """Run the callback for a live tick event. Returns True if the event was a tick event at all."""
        if event.type != self.event_type:
            return False
        if self.enabled and getattr(event, "generation", None) == self.generation:
            if self.callback is not None:
                self.callback()
        return True

    def _cancel(self) -> None:
        if self.interval is not None:
            self._timer(self.event_type, 0)
