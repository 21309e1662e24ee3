"""
Unit tests for the Simulation driver.
"""

import io
from enum import Enum
from unittest.mock import patch

import pytest

from des_evo.environment import Environment
from des_evo.events import Event
from des_evo.exceptions import PayloadDecodeError, SimulationStateError, UnknownEventTypeError
from des_evo.simulation import EVENTS_RAN_LABEL, Simulation, SimulationState


class Kind(Enum):
    TICK = "Tick"
    DONE = "Done"
    ROGUE = "Rogue"


class TickEnvironment(Environment):
    """Schedules a tick every ``period`` time units and records each one."""

    def __init__(self, period=3):
        super().__init__()
        self.name = "tick_environment"
        self.period = period
        self.ticks = []
        self.terminal_times = []
        self.register_handler(Kind.TICK, self.on_tick)
        self.register_handler(Kind.DONE, self.on_done)

    def on_tick(self, scheduler, stats, event):
        step = event.payload()["step"]
        self.ticks.append(event.timestamp)
        scheduler.add_event(Event.create(Kind.TICK, 0, event.timestamp + self.period, {"step": step + 1}))

    def on_done(self, scheduler, stats, event):
        self.terminal_times.append(event.timestamp)

    def get_state(self):
        return f'{{"ticks": {len(self.ticks)}}}'

    def terminating_event(self, scheduler):
        return Event.create(Kind.DONE, 0, scheduler.horizon)

    def __str__(self):
        return f"ticks={len(self.ticks)}"


def first_tick(timestamp=0):
    return Event.create(Kind.TICK, 0, timestamp, {"step": 0})


class TestSimulation:

    def test_run_dispatches_until_horizon(self):
        env = TickEnvironment(period=3)
        sim = Simulation(10, env, first_tick())

        sim.run()

        assert env.ticks == [0, 3, 6, 9]
        assert sim.event_count == 4
        assert sim.state is SimulationState.DONE

    def test_terminal_event_applied_once_at_horizon(self):
        env = TickEnvironment(period=4)
        sim = Simulation(10, env, first_tick())

        sim.run()

        assert env.terminal_times == [10]
        assert sim.current_time == 10

    def test_events_ran_recorded(self):
        env = TickEnvironment(period=5)
        sim = Simulation(12, env, first_tick())

        sim.run()

        series = sim.statistics.get_series_by_name(EVENTS_RAN_LABEL)
        assert series.unit == "Count"
        assert series.series == {12: 3.0}

    def test_initial_event_beyond_horizon(self):
        env = TickEnvironment()
        sim = Simulation(5, env, first_tick(timestamp=6))

        sim.run()

        assert env.ticks == []
        assert env.terminal_times == [5]
        assert sim.statistics.get_series_by_name(EVENTS_RAN_LABEL).get_last_value() == 0.0

    def test_second_run_rejected(self):
        sim = Simulation(5, TickEnvironment(), first_tick())
        sim.run()

        with pytest.raises(SimulationStateError):
            sim.run()

    def test_add_arbitrary_event_before_run(self):
        env = TickEnvironment(period=100)
        sim = Simulation(20, env, first_tick())
        sim.add_arbitrary_event(Event.create(Kind.TICK, 1, 7, {"step": 0}))

        sim.run()

        assert env.ticks == [0, 7]

    def test_add_arbitrary_event_after_run(self):
        sim = Simulation(5, TickEnvironment(), first_tick())
        sim.run()

        with pytest.raises(SimulationStateError):
            sim.add_arbitrary_event(first_tick())

    def test_unknown_event_type_is_fatal(self):
        sim = Simulation(5, TickEnvironment(), Event.create(Kind.ROGUE, 0, 1))

        with pytest.raises(UnknownEventTypeError):
            sim.run()

    def test_bad_payload_is_fatal(self):
        bad = Event(timestamp=1, event_type=Kind.TICK, uid=0, data="{broken")
        sim = Simulation(5, TickEnvironment(), bad)

        with pytest.raises(PayloadDecodeError):
            sim.run()

    def test_rejected_terminal_event(self):
        env = TickEnvironment()
        env.terminating_event = lambda scheduler: Event.create(Kind.DONE, 0, scheduler.horizon + 1)
        sim = Simulation(5, env, first_tick())

        with pytest.raises(SimulationStateError):
            sim.run()

    def test_environment_type_checked(self):
        with pytest.raises(TypeError):
            Simulation(5, object(), first_tick())

    def test_play_movie(self):
        env = TickEnvironment(period=4)
        sim = Simulation(8, env, first_tick())
        out = io.StringIO()

        with patch("des_evo.simulation.sim.time.sleep") as sleep:
            sim.play_movie(delay_millis=10, stream=out)

        text = out.getvalue()
        assert sleep.call_count == 3
        sleep.assert_called_with(0.01)
        assert "Current Time: 8" in text
        assert "TickEvent" in text
        assert EVENTS_RAN_LABEL in text
        assert env.terminal_times == [8]
