"""
Bus world environment

Buses circulate along their routes between stops, picking up waiting
passengers and dropping them off at their destinations. Each bus lives in
exactly one stop's ``buses_at_stop`` at any time; moving it means draining it
from the source stop and adding it to the destination.

Event flow for one bus:
    ImportBus/NewBus -> LoadPassengers -> MoveBusToStop -> UnloadPassengers -> LoadPassengers ...
"""

from typing import TYPE_CHECKING, Dict, List, Optional
import json
import logging

import numpy as np

from ..environment import Environment
from ..events import Event
from ..exceptions import EntityNotFoundError, PayloadDecodeError, SimulationStateError
from ..statistics import DataPoint, Stats
from .bus import Bus
from .bus_stop import BusStop
from .events import (
    BusEventKind, BusPayload, BusToStopPayload, NewBusesPayload,
    decode_bus_list, decode_payload, load_passengers_event,
    move_bus_to_stop_event, terminal_event, unload_passengers_event,
)
from .passenger import Passenger
from .settings import BusEnvironmentSettings

if TYPE_CHECKING:
    from ..des import Scheduler

logger = logging.getLogger(__name__)

WAIT_TIME_LABEL = "Total Passenger Wait Time"
DELIVERED_LABEL = "Passengers Delivered"
WAITING_LABEL = "Passengers Waiting"


class BusEnvironment(Environment):

    def __init__(self, settings: Optional[BusEnvironmentSettings] = None,
                 rng: Optional[np.random.Generator] = None, seed: Optional[int] = None):
        """
        Args:
            settings: Timing settings, defaults to BusEnvironmentSettings()
            rng: Random generator used for passenger generation
            seed: Seed used when ``rng`` is not given
        """
        super().__init__()
        self.name = "bus_environment"
        self.settings = settings or BusEnvironmentSettings()
        self.rng = rng if rng is not None else np.random.default_rng(seed)

        self.bus_stops: List[BusStop] = []
        self._stops_by_name: Dict[str, BusStop] = {}
        self._next_bus_uid = 0
        self._next_passenger_uid = 0
        self.total_wait_time = 0
        self.delivered_count = 0

        self.register_handler(BusEventKind.NEW_BUS, self.create_new_buses)
        self.register_handler(BusEventKind.IMPORT_BUS, self.import_buses)
        self.register_handler(BusEventKind.LOAD_PASSENGERS, self.load_passengers)
        self.register_handler(BusEventKind.UNLOAD_PASSENGERS, self.unload_passengers)
        self.register_handler(BusEventKind.MOVE_BUS_TO_STOP, self.advance_bus_to_next_stop)
        self.register_handler(BusEventKind.TERMINAL, self.settle_accounts)

    # Setup

    def create_bus_stops(self, count: int):
        for _ in range(count):
            stop = BusStop(f"Stop {len(self.bus_stops)}")
            self.bus_stops.append(stop)
            self._stops_by_name[stop.name] = stop

    def initialize_bus_stops_with_passengers(self, count: int, arrival_time: int = 0):
        """
        Place ``count`` passengers at random stops, each heading to a different
        random stop.
        """
        if count and len(self.bus_stops) < 2:
            raise ValueError("At least two bus stops are needed to generate passengers")
        for _ in range(count):
            origin, destination = self.rng.choice(len(self.bus_stops), size=2, replace=False)
            passenger = Passenger(
                uid=self._next_passenger_uid,
                origin=self.bus_stops[origin].name,
                destination=self.bus_stops[destination].name,
                arrival_time=arrival_time,
            )
            self._next_passenger_uid += 1
            self.bus_stops[origin].add_passenger(passenger)

    @property
    def stop_names(self) -> List[str]:
        return [stop.name for stop in self.bus_stops]

    @property
    def buses(self) -> List[Bus]:
        return [bus for stop in self.bus_stops for bus in stop.buses_at_stop]

    def get_stop(self, name: str) -> BusStop:
        try:
            return self._stops_by_name[name]
        except KeyError:
            raise EntityNotFoundError(f"No bus stop named {name!r}") from None

    def locate_bus(self, bus_uid: int) -> BusStop:
        for stop in self.bus_stops:
            if stop.has_bus(bus_uid):
                return stop
        raise EntityNotFoundError(f"Bus {bus_uid} is not at any stop")

    def _place_buses(self, scheduler: "Scheduler", buses: List[Bus], timestamp: int):
        if buses and not self.bus_stops:
            raise SimulationStateError("Cannot place buses before any bus stop exists")
        for index, bus in enumerate(buses):
            bus.uid = self._next_bus_uid
            self._next_bus_uid += 1
            if not bus.route:
                bus.route = self.stop_names
            bus.route_position = 0
            for stop_name in bus.route:
                self.get_stop(stop_name)

            self.get_stop(bus.current_stop).add_bus(bus)
            departure = timestamp + index * self.settings.initial_delay
            scheduler.add_event(load_passengers_event(bus.uid, departure, bus.uid))
        logger.debug(f"Placed {len(buses)} buses at t={timestamp}")

    # Handlers

    def create_new_buses(self, scheduler: "Scheduler", stats: Stats, event: Event):
        payload = decode_payload(event, NewBusesPayload)
        try:
            buses = [Bus(payload.capacity, self.stop_names) for _ in range(payload.number_of_buses)]
        except (TypeError, ValueError) as e:
            raise PayloadDecodeError(f"Invalid bus in {event.type_name} payload: {e}") from e
        self._place_buses(scheduler, buses, event.timestamp)

    def import_buses(self, scheduler: "Scheduler", stats: Stats, event: Event):
        try:
            buses = [Bus.from_dna(dna) for dna in decode_bus_list(event)]
        except (KeyError, TypeError, ValueError) as e:
            raise PayloadDecodeError(f"Invalid bus in {event.type_name} payload: {e}") from e
        self._place_buses(scheduler, buses, event.timestamp)

    def load_passengers(self, scheduler: "Scheduler", stats: Stats, event: Event):
        payload = decode_payload(event, BusPayload)
        stop = self.locate_bus(payload.bus_uid)
        bus = stop.get_bus(payload.bus_uid)

        boarded = 0
        still_waiting = []
        for passenger in stop.waiting_passengers:
            if bus.free_seats > 0 and passenger.destination != stop.name and bus.serves(passenger.destination):
                passenger.pickup_time = event.timestamp
                self.total_wait_time += passenger.wait_time(event.timestamp)
                bus.add_passenger(passenger)
                boarded += 1
            else:
                still_waiting.append(passenger)
        stop.waiting_passengers = still_waiting

        if boarded:
            stats.add_statistic(DataPoint(event.timestamp, float(self.total_wait_time), "Time"),
                                WAIT_TIME_LABEL)

        departure = event.timestamp + boarded * self.settings.pickup_delay + self.settings.next_stop_delay
        scheduler.add_event(move_bus_to_stop_event(bus.uid, departure, bus.uid, bus.next_stop()))

    def advance_bus_to_next_stop(self, scheduler: "Scheduler", stats: Stats, event: Event):
        payload = decode_payload(event, BusToStopPayload)
        destination = self.get_stop(payload.stop_name)
        bus = self.locate_bus(payload.bus_uid).drain_bus(payload.bus_uid)
        bus.advance()
        destination.add_bus(bus)

        scheduler.add_event(unload_passengers_event(bus.uid, event.timestamp, bus.uid))

    def unload_passengers(self, scheduler: "Scheduler", stats: Stats, event: Event):
        payload = decode_payload(event, BusPayload)
        stop = self.locate_bus(payload.bus_uid)
        bus = stop.get_bus(payload.bus_uid)

        alighted = bus.unload_passengers_for(stop.name)
        stop.completed_passengers.extend(alighted)
        if alighted:
            self.delivered_count += len(alighted)
            stats.add_statistic(DataPoint(event.timestamp, float(self.delivered_count), "Count"),
                                DELIVERED_LABEL)

        next_load = event.timestamp + len(alighted) * self.settings.drop_off_delay
        scheduler.add_event(load_passengers_event(bus.uid, next_load, bus.uid))

    def settle_accounts(self, scheduler: "Scheduler", stats: Stats, event: Event):
        """Charge passengers still waiting for the time until the end of the run."""
        waiting = [p for stop in self.bus_stops for p in stop.waiting_passengers]
        outstanding = sum(p.wait_time(event.timestamp) for p in waiting)
        final_wait_time = self.total_wait_time + outstanding

        stats.add_statistic(DataPoint(event.timestamp, float(final_wait_time), "Time"), WAIT_TIME_LABEL)
        stats.add_statistic(DataPoint(event.timestamp, float(self.delivered_count), "Count"), DELIVERED_LABEL)
        stats.add_statistic(DataPoint(event.timestamp, float(len(waiting)), "Count"), WAITING_LABEL)
        logger.debug(f"Settled at t={event.timestamp}: wait={final_wait_time}, "
                     f"delivered={self.delivered_count}, waiting={len(waiting)}")

    # Environment contract

    def terminating_event(self, scheduler: "Scheduler") -> Event:
        return terminal_event(0, scheduler.horizon)

    def get_state(self) -> str:
        return json.dumps({
            "stops": [
                {
                    "name": stop.name,
                    "waiting": len(stop.waiting_passengers),
                    "completed": len(stop.completed_passengers),
                    "buses": [bus.uid for bus in stop.buses_at_stop],
                }
                for stop in self.bus_stops
            ],
            "number_of_buses": len(self.buses),
            "passengers_on_buses": sum(len(bus.passengers) for bus in self.buses),
            "riders": {
                str(bus.uid): [passenger.to_dict() for passenger in bus.passengers]
                for bus in self.buses
            },
            "settings": self.settings.to_dict(),
            "total_wait_time": self.total_wait_time,
            "delivered": self.delivered_count,
        })

    def __str__(self) -> str:
        return "\n".join(str(stop) for stop in self.bus_stops)
