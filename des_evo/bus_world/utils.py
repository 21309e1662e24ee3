"""
Convenience helpers for building and running bus world experiments.
"""

from typing import Callable, List, Optional, Sequence
import logging

import numpy as np

from ..evolution import Population
from ..simulation import Simulation
from .bus import Bus
from .bus_environment import BusEnvironment, WAIT_TIME_LABEL
from .events import import_bus_event
from .settings import BusEnvironmentSettings

logger = logging.getLogger(__name__)


def create_bus_env(number_of_stops: int, number_of_passengers: int,
                   settings: Optional[BusEnvironmentSettings] = None,
                   rng: Optional[np.random.Generator] = None,
                   seed: Optional[int] = None) -> BusEnvironment:
    """
    Build an environment with ``number_of_stops`` stops and randomly placed passengers.
    """
    env = BusEnvironment(settings, rng=rng, seed=seed)
    env.create_bus_stops(number_of_stops)
    env.initialize_bus_stops_with_passengers(number_of_passengers)
    return env


def add_bus_stops_from_env_to_buses(env: BusEnvironment, buses: Sequence[Bus]):
    """Give every bus without a route the full list of the environment's stops."""
    for bus in buses:
        if bus.route:
            continue
        for stop_name in env.stop_names:
            bus.add_serviced_stop(stop_name)


def create_n_buses_m_capacity(number_of_buses: int, capacity: int,
                              route: Optional[Sequence[str]] = None) -> List[Bus]:
    return [Bus(capacity, route, uid=i) for i in range(number_of_buses)]


def new_sim(buses: Sequence[Bus], horizon: int, env: BusEnvironment) -> Simulation:
    """
    Wrap ``env`` in a simulation whose initial event imports ``buses`` at t=0.

    The buses are sent as DNA, so the simulation works on its own copies and
    the given instances are left untouched.
    """
    return Simulation(horizon, env, import_bus_event(0, 0, buses))


def new_basic_bus_sim_m_stops(horizon: int, buses: Sequence[Bus], number_of_stops: int,
                              number_of_passengers: int = 1000,
                              settings: Optional[BusEnvironmentSettings] = None,
                              seed: Optional[int] = None) -> Simulation:
    """
    Simulation of ``buses`` over a fresh environment of ``number_of_stops`` stops.

    Buses without a route are given every stop of the environment, in order.
    """
    env = create_bus_env(number_of_stops, number_of_passengers, settings, seed=seed)
    add_bus_stops_from_env_to_buses(env, buses)
    return new_sim(buses, horizon, env)


def get_wait_time(sim: Simulation) -> float:
    """
    Total passenger wait time recorded by a finished simulation.

    Returns:
        0.0 if the simulation never recorded any wait time
    """
    series = sim.statistics.get_series_by_name(WAIT_TIME_LABEL)
    if series is None or len(series) == 0:
        return 0.0
    return series.get_last_value()


def display_wait_time(sim: Simulation, label: str = "") -> str:
    prefix = f"{label} " if label else ""
    message = f"{prefix}total passenger wait time: {get_wait_time(sim):.0f}"
    logger.info(message)
    return message


def evolve_buses_n_times(buses: Sequence[Bus], generations: int,
                         rng: Optional[np.random.Generator] = None,
                         seed: Optional[int] = None, **population_kwargs) -> List[Bus]:
    """
    Evolve a fleet for ``generations`` generations and return the new fleet.

    The input buses are copied through their DNA first and are not modified.
    Selection and breeding errors propagate to the caller.
    """
    copies = [Bus.from_dna(bus.get_dna(), uid=i) for i, bus in enumerate(buses)]
    population = Population(copies, rng=rng, seed=seed, **population_kwargs)
    for _ in range(generations):
        population.evolve()
    return [Bus.from_dna(bus.get_dna(), uid=i) for i, bus in enumerate(population)]


def make_wait_time_evaluator(env_factory: Callable[[], BusEnvironment],
                             horizon: int) -> Callable[[Population], float]:
    """
    Build a callback scoring a population of buses by the total passenger
    wait time of a fresh simulation. Lower is better.
    """
    def evaluate(population: Population) -> float:
        sim = new_sim(list(population), horizon, env_factory())
        sim.run()
        return get_wait_time(sim)

    return evaluate
