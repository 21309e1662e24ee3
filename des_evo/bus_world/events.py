"""
Bus world event kinds and their payloads.
"""

from dataclasses import dataclass, asdict
from enum import Enum
from typing import Any, Dict, List, Type, TypeVar

from ..events import Event
from ..exceptions import PayloadDecodeError


class BusEventKind(Enum):
    NEW_BUS = "NewBus"
    IMPORT_BUS = "ImportBus"
    LOAD_PASSENGERS = "LoadPassengers"
    UNLOAD_PASSENGERS = "UnloadPassengers"
    MOVE_BUS_TO_STOP = "MoveBusToStop"
    TERMINAL = "Terminal"


@dataclass(frozen=True)
class NewBusesPayload:
    number_of_buses: int
    capacity: int


@dataclass(frozen=True)
class BusPayload:
    bus_uid: int


@dataclass(frozen=True)
class BusToStopPayload:
    bus_uid: int
    stop_name: str


P = TypeVar("P")


def decode_payload(event: Event, payload_type: Type[P]) -> P:
    """
    Decode an event payload into ``payload_type``.

    Raises:
        PayloadDecodeError: if the payload is not a JSON object matching the type
    """
    raw = event.payload()
    if not isinstance(raw, dict):
        raise PayloadDecodeError(f"{event.type_name} payload must be an object, got {raw!r}")
    try:
        return payload_type(**raw)
    except TypeError as e:
        raise PayloadDecodeError(f"Invalid {event.type_name} payload {raw!r}: {e}") from e


def decode_bus_list(event: Event) -> List[Dict[str, Any]]:
    """Decode an ImportBus payload: a list of bus DNA objects."""
    raw = event.payload()
    if not isinstance(raw, list) or not all(isinstance(item, dict) for item in raw):
        raise PayloadDecodeError(f"{event.type_name} payload must be a list of objects, got {raw!r}")
    return raw


def new_bus_event(uid: int, timestamp: int, number_of_buses: int, capacity: int) -> Event:
    return Event.create(BusEventKind.NEW_BUS, uid, timestamp,
                        asdict(NewBusesPayload(number_of_buses, capacity)))


def import_bus_event(uid: int, timestamp: int, buses: List[Any]) -> Event:
    return Event.create(BusEventKind.IMPORT_BUS, uid, timestamp, [bus.get_dna() for bus in buses])


def load_passengers_event(uid: int, timestamp: int, bus_uid: int) -> Event:
    return Event.create(BusEventKind.LOAD_PASSENGERS, uid, timestamp, asdict(BusPayload(bus_uid)))


def unload_passengers_event(uid: int, timestamp: int, bus_uid: int) -> Event:
    return Event.create(BusEventKind.UNLOAD_PASSENGERS, uid, timestamp, asdict(BusPayload(bus_uid)))


def move_bus_to_stop_event(uid: int, timestamp: int, bus_uid: int, stop_name: str) -> Event:
    return Event.create(BusEventKind.MOVE_BUS_TO_STOP, uid, timestamp,
                        asdict(BusToStopPayload(bus_uid, stop_name)))


def terminal_event(uid: int, timestamp: int) -> Event:
    return Event.create(BusEventKind.TERMINAL, uid, timestamp)
