"""
Simulation driver

A simulation wraps a scheduler and an environment, applies every scheduled
event to the environment in time order and keeps track of statistics.
"""

from enum import Enum
from typing import Optional, TextIO
import logging
import sys
import time

from ..des import Scheduler
from ..environment import Environment
from ..events import Event
from ..exceptions import SimulationStateError
from ..statistics import DataPoint, Stats

logger = logging.getLogger(__name__)

EVENTS_RAN_LABEL = "Events Ran"
CLEAR_SCREEN = "\x1b[2J\x1b[H"


class SimulationState(Enum):
    PENDING = "pending"
    RUNNING = "running"
    FINALIZING = "finalizing"
    DONE = "done"


class Simulation:
    """
    Owner of one scheduler, one environment and one statistics recorder.

    Events must be self-scheduling: the environment is expected to schedule
    follow-up events, otherwise the simulation stops after the initial one.

    Example:
        >>> env = create_bus_env(3, 20, BusEnvironmentSettings())
        >>> sim = Simulation(100, env, initial_event)
        >>> sim.run()
        >>> print(sim.statistics)
    """

    def __init__(self, horizon: int, environment: Environment, initial_event: Event):
        """
        Args:
            horizon: Inclusive upper bound on simulation time
            environment: Environment the events are applied to, owned by this simulation
            initial_event: Event that kicks off the simulation
        """
        if not isinstance(environment, Environment):
            raise TypeError(f"environment must inherit from Environment: {type(environment)}")

        self.scheduler = Scheduler(horizon)
        self.environment = environment
        self.statistics = Stats()
        self.state = SimulationState.PENDING
        self._event_count = 0

        self.scheduler.add_event(initial_event)

    @property
    def current_time(self) -> int:
        return self.scheduler.current_time

    @property
    def event_count(self) -> int:
        """Number of ordinary events applied, excluding the terminating event."""
        return self._event_count

    def add_arbitrary_event(self, event: Event):
        """Schedule an extra event before the simulation is run."""
        if self.state is not SimulationState.PENDING:
            raise SimulationStateError(f"Cannot add events to a simulation in state {self.state.value}")
        self.scheduler.add_event(event)

    def run(self):
        """Apply events until the scheduler is exhausted, then finalise."""
        self._start()
        logger.info(f"Simulation started (horizon={self.scheduler.horizon})")

        while (event := self.scheduler.next_event()) is not None:
            self.environment.apply_event(self.scheduler, self.statistics, event)
            self._event_count += 1

        self._finish()
        logger.info(f"Simulation finished: {self._event_count} events, t={self.current_time}")

    def play_movie(self, delay_millis: int = 100, stream: Optional[TextIO] = None):
        """
        Run the simulation as a terminal animation.

        Before each event the screen is cleared and the current time, the event
        and the environment are printed. All statistics are printed at the end.

        Args:
            delay_millis: Pause between frames in milliseconds
            stream: Output stream, stdout by default
        """
        out = stream or sys.stdout
        self._start()

        while (event := self.scheduler.next_event()) is not None:
            out.write(CLEAR_SCREEN)
            out.write(f"Current Time: {self.current_time}\n")
            out.write(f"Current Event: {event}\n")
            out.write(f"\r{self.environment}\n")
            out.flush()

            self.environment.apply_event(self.scheduler, self.statistics, event)
            self._event_count += 1

            time.sleep(delay_millis / 1000)

        self._finish()
        out.write(f"{self.statistics}\n")
        out.flush()

    def _start(self):
        if self.state is not SimulationState.PENDING:
            raise SimulationStateError(f"Simulation already run (state={self.state.value})")
        self.state = SimulationState.RUNNING

    def _finish(self):
        self.state = SimulationState.FINALIZING
        self._apply_terminating_event()

        self.statistics.add_statistic(
            DataPoint(self.current_time, float(self._event_count), "Count"),
            EVENTS_RAN_LABEL,
        )
        self.state = SimulationState.DONE

    def _apply_terminating_event(self):
        completion_event = self.environment.terminating_event(self.scheduler)
        self.scheduler.add_event(completion_event)

        last_event = self.scheduler.next_event()
        if last_event is None:
            raise SimulationStateError(
                f"Terminating event at t={completion_event.timestamp} was rejected "
                f"by the scheduler (horizon={self.scheduler.horizon})"
            )
        self.environment.apply_event(self.scheduler, self.statistics, last_event)
