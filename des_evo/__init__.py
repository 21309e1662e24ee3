"""
des_evo: discrete-event simulation with evolutionary optimisation.

Subpackages:
- des, events, environment, simulation: the simulation kernel
- evolution: generic genetic evolution of populations
- statistics: time series recorded during a run
- bus_world: bus routing domain built on both
"""

__version__ = '0.1.0'
