"""
Discrete event scheduler

Time-ordered priority queue of pending events, truncated at an inclusive
horizon.
"""

import heapq
import logging
from typing import List, Optional

from ..events import Event

logger = logging.getLogger(__name__)


class Scheduler:
    """
    Min-heap of events ordered by timestamp.

    ``current_time`` only moves when an event is successfully dequeued and
    always equals the timestamp of the last event handed out (0 before the
    first one).
    """

    def __init__(self, horizon: int):
        """
        Args:
            horizon: Inclusive upper bound on simulation time
        """
        if horizon < 0:
            raise ValueError(f"horizon must be >= 0, got {horizon}")
        self.current_time: int = 0
        self.horizon: int = horizon
        self._event_queue: List[Event] = []

    def add_event(self, event: Event):
        """
        Schedule an event.

        Timestamps are not checked against ``current_time`` or ``horizon``;
        events past the horizon are dropped when they reach the front.
        """
        heapq.heappush(self._event_queue, event)

    def next_event(self) -> Optional[Event]:
        """
        Pop the earliest pending event.

        Returns:
            The event, or None if the queue is empty or the earliest event lies
            beyond the horizon. In the latter case the event is discarded.
        """
        if not self._event_queue:
            return None

        event = heapq.heappop(self._event_queue)
        if event.timestamp > self.horizon:
            logger.debug(
                f"Dropping {event.type_name} event at t={event.timestamp} "
                f"beyond horizon {self.horizon} ({len(self._event_queue)} still queued)"
            )
            return None

        self.current_time = event.timestamp
        return event

    def peek(self) -> Optional[Event]:
        """Earliest pending event without removing it."""
        return self._event_queue[0] if self._event_queue else None

    def is_empty(self) -> bool:
        return not self._event_queue

    def __len__(self) -> int:
        return len(self._event_queue)

    def __repr__(self) -> str:
        return (f"Scheduler(current_time={self.current_time}, horizon={self.horizon}, "
                f"pending={len(self._event_queue)})")
