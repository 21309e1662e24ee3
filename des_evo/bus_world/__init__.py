"""
Bus world

Buses shuttle passengers between stops. Buses are evolvable individuals whose
DNA is their capacity and route.
"""

from .passenger import Passenger
from .settings import BusEnvironmentSettings
from .bus import Bus, BUS_SPECIES
from .bus_stop import BusStop
from .events import (
    BusEventKind, NewBusesPayload, BusPayload, BusToStopPayload,
    new_bus_event, import_bus_event, load_passengers_event,
    unload_passengers_event, move_bus_to_stop_event, terminal_event,
)
from .bus_environment import BusEnvironment, WAIT_TIME_LABEL, DELIVERED_LABEL, WAITING_LABEL
from .utils import (
    create_bus_env, add_bus_stops_from_env_to_buses, create_n_buses_m_capacity,
    new_sim, new_basic_bus_sim_m_stops, get_wait_time, display_wait_time,
    evolve_buses_n_times, make_wait_time_evaluator,
)

__all__ = [
    'Passenger', 'BusEnvironmentSettings', 'Bus', 'BUS_SPECIES', 'BusStop',
    'BusEventKind', 'NewBusesPayload', 'BusPayload', 'BusToStopPayload',
    'new_bus_event', 'import_bus_event', 'load_passengers_event',
    'unload_passengers_event', 'move_bus_to_stop_event', 'terminal_event',
    'BusEnvironment', 'WAIT_TIME_LABEL', 'DELIVERED_LABEL', 'WAITING_LABEL',
    'create_bus_env', 'add_bus_stops_from_env_to_buses', 'create_n_buses_m_capacity',
    'new_sim', 'new_basic_bus_sim_m_stops', 'get_wait_time', 'display_wait_time',
    'evolve_buses_n_times', 'make_wait_time_evaluator',
]
