"""
Exception hierarchy

Simulation errors are fatal: they signal a broken invariant (unknown event
type, undecodable payload, missing entity) and are never caught by the
simulation driver. Evolution errors are recoverable and are returned to the
caller of ``Population.evolve``.
"""


class DesEvoError(Exception):
    """Base class for all errors raised by des_evo."""


class SimulationError(DesEvoError):
    """A fatal error raised while dispatching simulation events."""


class UnknownEventTypeError(SimulationError):
    """An environment received an event type it has no handler for."""

    def __init__(self, event_type):
        self.event_type = event_type
        super().__init__(f"Unknown event type: {event_type}")


class PayloadDecodeError(SimulationError):
    """An event payload could not be decoded into its expected structure."""


class EntityNotFoundError(SimulationError):
    """A domain entity that must exist could not be located."""


class SimulationStateError(SimulationError):
    """A simulation was driven outside of its lifecycle."""


class EvolutionError(DesEvoError):
    """A recoverable error raised by an evolution step."""


class SelectionError(EvolutionError, ValueError):
    """Invalid selection request, e.g. a top percentage outside 1..100."""


class BreedingError(EvolutionError):
    """Two parents could not produce a child."""
