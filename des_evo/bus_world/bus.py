"""
Bus: the evolvable agent of the bus world.

A bus's genes are its capacity and the cyclic route of stops it serves.
Passengers on board are simulation state, not part of the DNA.
"""

from typing import Any, Dict, List, Optional, Sequence

import numpy as np

from ..evolution import Individual
from ..exceptions import BreedingError
from .passenger import Passenger

BUS_SPECIES = "Bus"


class Bus(Individual):

    def __init__(self, capacity: int, route: Optional[Sequence[str]] = None, uid: int = 0):
        if capacity < 1:
            raise ValueError(f"capacity must be >= 1, got {capacity}")
        self.uid = uid
        self.capacity = int(capacity)
        self.route: List[str] = list(route or [])
        self.route_position = 0
        self.passengers: List[Passenger] = []

    @classmethod
    def from_dna(cls, dna: Dict[str, Any], uid: int = 0) -> "Bus":
        return cls(capacity=int(dna["capacity"]), route=[str(stop) for stop in dna["route"]], uid=uid)

    # Dna

    def get_dna(self) -> Dict[str, Any]:
        return {"capacity": self.capacity, "route": list(self.route)}

    @property
    def species(self) -> str:
        return BUS_SPECIES

    # Fitness

    def evaluate_fitness(self) -> float:
        """Capacity weighted by the share of distinct stops on the route."""
        if not self.route:
            return 0.0
        return self.capacity * len(set(self.route)) / len(self.route)

    # Breedable

    def reproduce(self, other: "Bus", rng: np.random.Generator) -> "Bus":
        """
        One-point crossover of the two routes; the child's capacity is the
        rounded mean of its parents'.

        Raises:
            BreedingError: if ``other`` is another species or its route length differs
        """
        if getattr(other, "species", None) != self.species:
            raise BreedingError(
                f"Cannot breed {self.species} with {getattr(other, 'species', type(other).__name__)}"
            )
        if len(self.route) != len(other.route):
            raise BreedingError(
                f"Route lengths differ: {len(self.route)} vs {len(other.route)}"
            )

        cut = int(rng.integers(1, len(self.route))) if len(self.route) > 1 else len(self.route)
        route = self.route[:cut] + other.route[cut:]
        capacity = max(1, round((self.capacity + other.capacity) / 2))
        return Bus(capacity, route)

    def mutate(self, rng: np.random.Generator):
        """Swap two stops of the route, or nudge the capacity by one."""
        if len(self.route) >= 2 and rng.random() < 0.5:
            i, j = rng.choice(len(self.route), size=2, replace=False)
            self.route[i], self.route[j] = self.route[j], self.route[i]
        else:
            step = 1 if rng.random() < 0.5 else -1
            self.capacity = max(1, self.capacity + step)

    # Simulation state

    def add_serviced_stop(self, stop_name: str):
        self.route.append(stop_name)

    def add_passenger(self, passenger: Passenger):
        self.passengers.append(passenger)

    @property
    def free_seats(self) -> int:
        return max(0, self.capacity - len(self.passengers))

    @property
    def current_stop(self) -> str:
        return self.route[self.route_position]

    def next_stop(self) -> str:
        return self.route[(self.route_position + 1) % len(self.route)]

    def advance(self) -> str:
        self.route_position = (self.route_position + 1) % len(self.route)
        return self.current_stop

    def serves(self, stop_name: str) -> bool:
        return stop_name in self.route

    def unload_passengers_for(self, stop_name: str) -> List[Passenger]:
        """Remove and return every passenger whose destination is ``stop_name``."""
        staying, leaving = [], []
        for passenger in self.passengers:
            (leaving if passenger.destination == stop_name else staying).append(passenger)
        self.passengers = staying
        return leaving

    def __str__(self) -> str:
        passenger_display = ", ".join(str(p) for p in self.passengers)
        return f"Bus {self.uid}: Passengers: {passenger_display}"

    def __repr__(self) -> str:
        return f"Bus(uid={self.uid}, capacity={self.capacity}, route={self.route})"
