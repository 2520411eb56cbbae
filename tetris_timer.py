"""Gravity timer: one pending pygame timer event at a time"""
from typing import Callable, Optional

import pygame

GRAVITY_EVENT = pygame.USEREVENT + 1


class GravityTimer:
    """
    Wraps ``pygame.time.set_timer`` for the gravity tick.

    pygame keeps a single timer per event type, so arming replaces whatever
    was pending and ``set_timer(event, 0)`` disarms it. ``interval`` mirrors
    what is currently pending (None when disarmed).
    """

    def __init__(self, event_type: int = GRAVITY_EVENT,
                 set_timer: Optional[Callable[[int, int], None]] = None):
        self.event_type = event_type
        self._set_timer = set_timer or pygame.time.set_timer
        self.interval: Optional[int] = None

    def arm(self, interval_ms: int):
        interval_ms = max(1, int(interval_ms))
        self.cancel()
        self._set_timer(self.event_type, interval_ms)
        self.interval = interval_ms

    def cancel(self):
        if self.interval is not None:
            self._set_timer(self.event_type, 0)
            self.interval = None

    @property
    def armed(self) -> bool:
        return self.interval is not None
