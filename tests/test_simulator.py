import io

import pytest

from dvsim.simulator import (
    ALL_VERIFIED,
    Event,
    EventList,
    EventType,
    Simulator,
    VerificationTracker,
    main,
)
from dvsim.topology import (
    EXPECTED_COSTS,
    DistanceTable,
    RoutingPacket,
    initial_table,
    verify,
)


def _expected_table():
    return DistanceTable([list(row) for row in EXPECTED_COSTS])


def _quiet(**kwargs):
    out = io.StringIO()
    return Simulator(trace=0, out=out, **kwargs), out


def test_event_list_orders_by_time():
    events = EventList()
    for time in (5.0, 1.0, 3.0):
        events.insert(Event(time, EventType.FROM_LAYER2, 0))
    assert [event.time for event in events] == [1.0, 3.0, 5.0]
    assert len(events) == 3
    assert events.pop().time == 1.0
    assert len(events) == 2


def test_event_list_equal_time_goes_first():
    events = EventList()
    first = Event(2.0, EventType.FROM_LAYER2, 0)
    second = Event(2.0, EventType.FROM_LAYER2, 1)
    events.insert(first)
    events.insert(second)
    assert events.pop() is second
    assert events.pop() is first


def test_event_list_pop_empty_raises():
    with pytest.raises(IndexError):
        EventList().pop()


def test_tracker_verifies_and_reports():
    tracker = VerificationTracker()
    assert tracker.check(0, _expected_table()) == ["Node 0 verified"]
    assert tracker.check(0, _expected_table()) == []
    assert tracker.check(0, initial_table(0)) == ["Node 0 unverified"]
    assert tracker.verified[0] is True


def test_tracker_all_verified():
    tracker = VerificationTracker()
    for node in range(3):
        assert ALL_VERIFIED not in tracker.check(node, _expected_table())
    messages = tracker.check(3, _expected_table())
    assert messages == ["Node 3 verified", ALL_VERIFIED]
    assert tracker.all_verified


def test_run_converges_to_expected_costs():
    sim, out = _quiet()
    final = sim.run()
    assert final > 0
    assert len(sim.events) == 0
    for node in sim.nodes:
        assert node.min_costs() == EXPECTED_COSTS[node.node_id]
        assert verify(node.node_id, node.table)
    assert sim.tracker.all_verified
    text = out.getvalue()
    assert ALL_VERIFIED in text
    assert "no packets in medium" in text
    assert "Table for node" not in text


def test_run_is_deterministic_for_a_seed():
    first, out1 = _quiet(seed=42)
    second, out2 = _quiet(seed=42)
    assert first.run() == second.run()
    assert out1.getvalue() == out2.getvalue()


def test_trace_one_prints_tables():
    out = io.StringIO()
    Simulator(trace=1, out=out).run()
    text = out.getvalue()
    for node in range(4):
        assert f"Table for node {node}:" in text
    assert "MAIN: Receive event" not in text


def test_trace_three_prints_medium_activity():
    out = io.StringIO()
    Simulator(trace=3, out=out).run()
    text = out.getvalue()
    assert "TOLAYER2: Scheduling arrival on other side" in text
    assert "MAIN: Receive event" in text


def test_link_changes_run_until_last_change():
    sim, _ = _quiet(link_changes=True)
    assert sim.run() == 20000.0
    assert all(node.min_costs() == EXPECTED_COSTS[node.node_id] for node in sim.nodes)


def test_to_layer2_schedules_in_order():
    sim, _ = _quiet()
    packet = RoutingPacket(0, 1, (0, 1, 3, 7))
    sim.to_layer2(packet)
    sim.to_layer2(packet)
    events = list(sim.events)
    assert len(events) == 2
    assert all(event.entity == 1 and event.packet == packet for event in events)
    assert 0.0 <= events[0].time <= 2.0
    assert events[0].time <= events[1].time <= events[0].time + 2.0


@pytest.mark.parametrize(
    "source, dest",
    [(0, 0), (1, 3), (3, 1), (-1, 0), (0, 4)],
)
def test_to_layer2_rejects_bad_packets(source, dest):
    sim, _ = _quiet()
    with pytest.raises(ValueError):
        sim.to_layer2(RoutingPacket(source, dest, (0, 0, 0, 0)))
    assert len(sim.events) == 0


def test_main_with_trace_argument(capsys):
    assert main(["--trace", "0"]) == 0
    captured = capsys.readouterr().out
    assert "Simulator terminated at t=" in captured
    assert ALL_VERIFIED in captured


def test_main_prompts_for_trace(monkeypatch, capsys):
    monkeypatch.setattr("builtins.input", lambda prompt: "0")
    assert main([]) == 0
    captured = capsys.readouterr().out
    assert "Table for node" not in captured
    assert "no packets in medium" in captured


def test_main_rejects_bad_trace(monkeypatch):
    monkeypatch.setattr("builtins.input", lambda prompt: "abc")
    with pytest.raises(SystemExit):
        main([])