"""
Simulation driver
"""

from .sim import Simulation, SimulationState, EVENTS_RAN_LABEL

__all__ = ['Simulation', 'SimulationState', 'EVENTS_RAN_LABEL']
