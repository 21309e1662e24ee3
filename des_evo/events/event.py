"""
Event definitions for discrete-event scheduling.

An event is an immutable unit of causality: it carries a dispatch key, the
id of whatever produced it, the logical time it happens at and an opaque
JSON payload whose structure belongs to the environment consuming it.
"""

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union

from ..exceptions import PayloadDecodeError

EventType = Union[Enum, str]


@dataclass(frozen=True, order=True)
class Event:
    """
    Scheduled event in the simulation timeline.

    Events are ordered by timestamp only. Two events with the same timestamp
    compare equal, so the order in which ties leave the scheduler is
    unspecified.

    Attributes:
        timestamp: Logical simulation time (non-negative)
        event_type: Dispatch key, normally a member of a domain event Enum
        uid: Identifier of the event's origin, not necessarily unique
        data: Serialised JSON payload
    """
    timestamp: int
    event_type: EventType = field(compare=False)
    uid: int = field(default=0, compare=False)
    data: str = field(default="null", compare=False)

    def __post_init__(self):
        if self.timestamp < 0:
            raise ValueError(f"Event timestamp must be non-negative, got {self.timestamp}")

    @classmethod
    def create(cls, event_type: EventType, uid: int, timestamp: int, payload: Any = None) -> "Event":
        """Build an event, serialising ``payload`` to JSON."""
        return cls(timestamp=timestamp, event_type=event_type, uid=uid, data=json.dumps(payload))

    @property
    def type_name(self) -> str:
        if isinstance(self.event_type, Enum):
            return str(self.event_type.value)
        return str(self.event_type)

    def payload(self) -> Any:
        """
        Decode the JSON payload.

        Raises:
            PayloadDecodeError: if the payload is not valid JSON
        """
        try:
            return json.loads(self.data)
        except (TypeError, ValueError) as e:
            raise PayloadDecodeError(
                f"Cannot decode payload of {self.type_name} event (uid={self.uid}): {e}"
            ) from e

    def __str__(self) -> str:
        return f"{self.type_name}Event: uid: {self.uid}, t={self.timestamp}, data: {self.data}"
