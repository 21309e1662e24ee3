"""
Tests for the bus world environment and its event handlers.
"""

import json

import pytest

from des_evo.bus_world import (
    Bus, BusEnvironment, BusEnvironmentSettings, BusEventKind, Passenger,
    DELIVERED_LABEL, WAIT_TIME_LABEL, WAITING_LABEL,
    import_bus_event, move_bus_to_stop_event, new_bus_event, new_sim,
)
from des_evo.des import Scheduler
from des_evo.events import Event
from des_evo.exceptions import EntityNotFoundError, PayloadDecodeError
from des_evo.statistics import Stats

SETTINGS = BusEnvironmentSettings(pickup_delay=1, drop_off_delay=1, next_stop_delay=5, initial_delay=2)


def three_stop_env():
    env = BusEnvironment(SETTINGS, seed=0)
    env.create_bus_stops(3)
    return env


def pending_events(scheduler):
    events = []
    while not scheduler.is_empty():
        events.append(scheduler.next_event())
    return events


class TestSetup:

    def test_stop_names(self):
        env = three_stop_env()
        assert env.stop_names == ["Stop 0", "Stop 1", "Stop 2"]
        assert env.get_stop("Stop 2").name == "Stop 2"

    def test_unknown_stop(self):
        with pytest.raises(EntityNotFoundError):
            three_stop_env().get_stop("Stop 9")

    def test_passengers_travel_between_distinct_stops(self):
        env = three_stop_env()
        env.initialize_bus_stops_with_passengers(50)

        passengers = [p for stop in env.bus_stops for p in stop.waiting_passengers]
        assert len(passengers) == 50
        assert len({p.uid for p in passengers}) == 50
        for stop in env.bus_stops:
            for passenger in stop.waiting_passengers:
                assert passenger.origin == stop.name
                assert passenger.destination != stop.name
                assert passenger.destination in env.stop_names

    def test_passengers_need_two_stops(self):
        env = BusEnvironment(SETTINGS, seed=0)
        env.create_bus_stops(1)
        with pytest.raises(ValueError):
            env.initialize_bus_stops_with_passengers(1)

    def test_every_event_kind_handled(self):
        assert set(three_stop_env().handled_event_types) == set(BusEventKind)


class TestHandlers:

    def test_new_buses_are_staggered(self):
        env = three_stop_env()
        scheduler = Scheduler(100)

        env.apply_event(scheduler, Stats(), new_bus_event(0, 0, 3, 4))

        stop = env.get_stop("Stop 0")
        assert [bus.uid for bus in stop.buses_at_stop] == [0, 1, 2]
        assert all(bus.route == env.stop_names for bus in stop.buses_at_stop)
        loads = pending_events(scheduler)
        assert [e.event_type for e in loads] == [BusEventKind.LOAD_PASSENGERS] * 3
        assert [e.timestamp for e in loads] == [0, 2, 4]

    def test_import_places_bus_at_first_route_stop(self):
        env = three_stop_env()
        scheduler = Scheduler(100)

        env.apply_event(scheduler, Stats(), import_bus_event(0, 10, [Bus(2, ["Stop 2", "Stop 0"])]))

        assert env.locate_bus(0).name == "Stop 2"
        assert scheduler.peek().timestamp == 10

    def test_import_unknown_stop(self):
        env = three_stop_env()
        with pytest.raises(EntityNotFoundError):
            env.apply_event(Scheduler(10), Stats(), import_bus_event(0, 0, [Bus(2, ["Nowhere"])]))

    def test_import_malformed_payload(self):
        env = three_stop_env()
        bad = Event.create(BusEventKind.IMPORT_BUS, 0, 0, {"capacity": 3})
        with pytest.raises(PayloadDecodeError):
            env.apply_event(Scheduler(10), Stats(), bad)

    def test_load_boards_up_to_capacity(self):
        env = three_stop_env()
        stop = env.get_stop("Stop 0")
        for uid in range(3):
            stop.add_passenger(Passenger(uid, "Stop 0", "Stop 1"))
        scheduler = Scheduler(100)
        env.apply_event(scheduler, Stats(), import_bus_event(0, 4, [Bus(2)]))
        load = scheduler.next_event()

        stats = Stats()
        env.apply_event(scheduler, stats, load)

        bus = stop.get_bus(0)
        assert [p.uid for p in bus.passengers] == [0, 1]
        assert [p.uid for p in stop.waiting_passengers] == [2]
        assert env.total_wait_time == 8
        assert stats.get_series_by_name(WAIT_TIME_LABEL).series == {4: 8.0}
        move = scheduler.next_event()
        assert move.event_type is BusEventKind.MOVE_BUS_TO_STOP
        assert move.timestamp == 4 + 2 * 1 + 5
        assert move.payload() == {"bus_uid": 0, "stop_name": "Stop 1"}

    def test_load_skips_destinations_off_route(self):
        env = three_stop_env()
        stop = env.get_stop("Stop 0")
        stop.add_passenger(Passenger(0, "Stop 0", "Stop 2"))
        scheduler = Scheduler(100)
        env.apply_event(scheduler, Stats(), import_bus_event(0, 0, [Bus(5, ["Stop 0", "Stop 1"])]))

        env.apply_event(scheduler, Stats(), scheduler.next_event())

        assert stop.get_bus(0).passengers == []
        assert len(stop.waiting_passengers) == 1

    def test_move_transfers_bus(self):
        env = three_stop_env()
        scheduler = Scheduler(100)
        env.apply_event(scheduler, Stats(), import_bus_event(0, 0, [Bus(2)]))
        scheduler.next_event()

        env.apply_event(scheduler, Stats(), move_bus_to_stop_event(0, 6, 0, "Stop 1"))

        assert not env.get_stop("Stop 0").has_bus(0)
        assert env.locate_bus(0).name == "Stop 1"
        assert env.get_stop("Stop 1").get_bus(0).current_stop == "Stop 1"
        unload = scheduler.next_event()
        assert unload.event_type is BusEventKind.UNLOAD_PASSENGERS
        assert unload.timestamp == 6

    def test_new_bus_invalid_capacity(self):
        env = three_stop_env()
        with pytest.raises(PayloadDecodeError):
            env.apply_event(Scheduler(10), Stats(), new_bus_event(0, 0, 2, 0))
        assert env.buses == []

    def test_state_lists_riders_and_settings(self):
        env = three_stop_env()
        env.get_stop("Stop 0").add_passenger(Passenger(0, "Stop 0", "Stop 1"))
        scheduler = Scheduler(100)
        env.apply_event(scheduler, Stats(), import_bus_event(0, 4, [Bus(2)]))
        env.apply_event(scheduler, Stats(), scheduler.next_event())

        state = json.loads(env.get_state())

        assert state["riders"] == {"0": [{
            "uid": 0, "origin": "Stop 0", "destination": "Stop 1",
            "arrival_time": 0, "pickup_time": 4,
        }]}
        assert state["settings"] == {
            "pickup_delay": 1, "drop_off_delay": 1, "next_stop_delay": 5, "initial_delay": 2,
        }

    def test_move_unknown_bus(self):
        env = three_stop_env()
        with pytest.raises(EntityNotFoundError):
            env.apply_event(Scheduler(10), Stats(), move_bus_to_stop_event(0, 1, 42, "Stop 1"))


class TestScenario:
    """One bus of capacity 1 on a three stop loop, traced by hand."""

    def build(self, horizon):
        env = three_stop_env()
        stop = env.get_stop("Stop 0")
        stop.add_passenger(Passenger(0, "Stop 0", "Stop 1"))
        stop.add_passenger(Passenger(1, "Stop 0", "Stop 2"))
        return new_sim([Bus(1, env.stop_names)], horizon, env)

    def test_full_round(self):
        sim = self.build(30)
        sim.run()
        env = sim.environment

        # P0 boards at 0 and alights at 6; P1 boards at 17 and alights at 28
        assert sim.statistics.get_series_by_name(WAIT_TIME_LABEL).get_last_value() == 17.0
        assert sim.statistics.get_series_by_name(DELIVERED_LABEL).series == {6: 1.0, 28: 2.0, 30: 2.0}
        assert sim.statistics.get_series_by_name(WAITING_LABEL).get_last_value() == 0.0
        assert [p.uid for p in env.get_stop("Stop 1").completed_passengers] == [0]
        assert [p.uid for p in env.get_stop("Stop 2").completed_passengers] == [1]

    def test_waiting_passengers_charged_to_horizon(self):
        sim = self.build(5)
        sim.run()

        assert sim.statistics.get_series_by_name(WAIT_TIME_LABEL).get_last_value() == 5.0
        assert sim.statistics.get_series_by_name(WAITING_LABEL).get_last_value() == 1.0

    def test_state_snapshot(self):
        sim = self.build(30)
        sim.run()

        before = sim.environment.get_state()
        state = json.loads(before)
        assert sim.environment.get_state() == before
        assert state["delivered"] == 2
        assert state["number_of_buses"] == 1
        assert [stop["name"] for stop in state["stops"]] == ["Stop 0", "Stop 1", "Stop 2"]
