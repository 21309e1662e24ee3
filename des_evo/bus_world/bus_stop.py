"""
Bus stop: holds waiting passengers, delivered passengers and parked buses.
"""

from typing import List

from ..exceptions import EntityNotFoundError
from .bus import Bus
from .passenger import Passenger


class BusStop:

    def __init__(self, name: str):
        self.name = name
        self.waiting_passengers: List[Passenger] = []
        self.completed_passengers: List[Passenger] = []
        self.buses_at_stop: List[Bus] = []

    def add_passenger(self, passenger: Passenger):
        self.waiting_passengers.append(passenger)

    def add_bus(self, bus: Bus):
        self.buses_at_stop.append(bus)

    def has_bus(self, bus_uid: int) -> bool:
        return any(bus.uid == bus_uid for bus in self.buses_at_stop)

    def get_bus(self, bus_uid: int) -> Bus:
        for bus in self.buses_at_stop:
            if bus.uid == bus_uid:
                return bus
        raise EntityNotFoundError(f"Bus {bus_uid} is not at stop {self.name}")

    def drain_bus(self, bus_uid: int) -> Bus:
        """
        Remove a bus from this stop and hand it to the caller.

        Raises:
            EntityNotFoundError: if the bus is not parked here
        """
        for index, bus in enumerate(self.buses_at_stop):
            if bus.uid == bus_uid:
                return self.buses_at_stop.pop(index)
        raise EntityNotFoundError(f"Bus {bus_uid} is not at stop {self.name}")

    def __str__(self) -> str:
        display_buses = " ".join(str(bus) for bus in self.buses_at_stop)
        return (f"[{self.name}] ({len(self.waiting_passengers)}|{len(self.completed_passengers)}) "
                f"\t{display_buses}")
