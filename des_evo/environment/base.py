"""
Environment base class

Defines the contract every simulated domain implements to plug into the
simulation driver.
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Callable, Dict, List
import logging

from ..events import Event, EventType
from ..exceptions import UnknownEventTypeError
from ..statistics import Stats

if TYPE_CHECKING:
    from ..des import Scheduler

logger = logging.getLogger(__name__)

EventHandlerFn = Callable[["Scheduler", Stats, Event], None]


class Environment(ABC):
    """
    Domain state machine driven by events.

    Subclasses register one handler per event type, usually in ``__init__``.
    ``apply_event`` is the only entry point that mutates state. Errors raised
    while dispatching are fatal and propagate out of the simulation.
    """

    def __init__(self):
        self.name = "base_environment"
        self._handlers: Dict[EventType, EventHandlerFn] = {}

    def register_handler(self, event_type: EventType, handler: EventHandlerFn):
        """
        Route events of ``event_type`` to ``handler``.

        Args:
            event_type: Dispatch key, normally a member of the domain's event Enum
            handler: Callable taking (scheduler, stats, event)
        """
        if not callable(handler):
            raise TypeError(f"Handler for {event_type} must be callable: {type(handler)}")
        self._handlers[event_type] = handler
        logger.debug(f"{self.name}: registered handler for {event_type}")

    @property
    def handled_event_types(self) -> List[EventType]:
        return list(self._handlers)

    def apply_event(self, scheduler: "Scheduler", stats: Stats, event: Event):
        """
        Dispatch an event to its registered handler.

        Raises:
            UnknownEventTypeError: if no handler is registered for the event type
        """
        handler = self._handlers.get(event.event_type)
        if handler is None:
            raise UnknownEventTypeError(event.event_type)
        handler(scheduler, stats, event)

    @abstractmethod
    def get_state(self) -> str:
        """Serialised snapshot of the environment. Must not change any state."""

    @abstractmethod
    def terminating_event(self, scheduler: "Scheduler") -> Event:
        """
        Build the single final event, timestamped at ``scheduler.horizon``,
        used to settle accounts once the main loop has stopped.
        """
