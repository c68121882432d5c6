"""Discrete-event simulator that carries routing packets between four nodes."""

from __future__ import annotations

import argparse
import random
import sys
from bisect import bisect_left
from collections.abc import Iterator
from dataclasses import dataclass
from enum import IntEnum
from operator import attrgetter
from typing import TextIO

from .node import Node
from .topology import (
    BOLD,
    END,
    INF,
    LINK_COSTS,
    NUM_NODES,
    DistanceTable,
    RoutingPacket,
    format_table,
    verify,
)

RED = "\033[31m"
GREEN = "\033[32m"

DEFAULT_SEED = 9999
ALL_VERIFIED = "All nodes verified!"


class EventType(IntEnum):
    """Kinds of event the simulator handles."""

    FROM_LAYER2 = 2
    LINK_CHANGE = 10


@dataclass
class Event:
    """Something that happens at a given time at a given node."""

    time: float
    kind: EventType
    entity: int
    packet: RoutingPacket | None = None


class EventList:
    """Events kept in time order; a new event goes before others of equal time."""

    def __init__(self) -> None:
        self._events: list[Event] = []

    def insert(self, event: Event) -> None:
        """Place an event at its position in time order."""
        index = bisect_left(self._events, event.time, key=attrgetter("time"))
        self._events.insert(index, event)

    def pop(self) -> Event:
        """Remove and return the earliest event; IndexError if there is none."""
        if not self._events:
            raise IndexError("pop from an empty event list")
        return self._events.pop(0)

    def __len__(self) -> int:
        return len(self._events)

    def __iter__(self) -> Iterator[Event]:
        return iter(list(self._events))


class VerificationTracker:
    """Remembers which nodes have reached the converged costs."""

    def __init__(self) -> None:
        self._verified = [False] * NUM_NODES

    @property
    def verified(self) -> tuple[bool, ...]:
        return tuple(self._verified)

    @property
    def all_verified(self) -> bool:
        return all(self._verified)

    def check(self, node: int, table: DistanceTable) -> list[str]:
        """Check a node's table and return the messages this check produces.

        A node once verified stays counted as verified, even if a later
        table no longer matches; that case is only reported.
        """
        messages: list[str] = []
        ok = verify(node, table)
        if not self._verified[node] and ok:
            messages.append(f"Node {node} verified")
            self._verified[node] = True
        elif self._verified[node] and not ok:
            messages.append(f"Node {node} unverified")
        if self.all_verified:
            messages.append(ALL_VERIFIED)
        return messages


class Simulator:
    """Runs the four routing nodes over a medium that delays but never reorders."""

    def __init__(
        self,
        trace: int = 1,
        seed: int | None = DEFAULT_SEED,
        link_changes: bool = False,
        out: TextIO | None = None,
    ) -> None:
        self.trace = trace
        self.link_changes = link_changes
        self.out: TextIO = out if out is not None else sys.stdout
        self.clock = 0.0
        self.events = EventList()
        self.tracker = VerificationTracker()
        self._rng = random.Random(seed)
        self.nodes = [Node(node_id, self.to_layer2) for node_id in range(NUM_NODES)]

    def _write(self, text: str) -> None:
        self.out.write(text)

    def _random(self) -> float:
        return self._rng.random()

    def _schedule(self, event: Event) -> None:
        if self.trace > 3:
            self._write(f"            Insert Event: Time is {self.clock:f}\n")
            self._write(
                f"            Insert Event: Future time will be {event.time:f}\n"
            )
        self.events.insert(event)

    def _report(self, node: Node) -> None:
        if self.trace > 0:
            self._write(format_table(node.table, node.node_id))
        for message in self.tracker.check(node.node_id, node.table):
            colour = RED if message.endswith("unverified") else GREEN
            self._write(f"{colour}{message}\n{END}")

    def to_layer2(self, packet: RoutingPacket) -> None:
        """Put a packet on the medium towards its destination."""
        if not 0 <= packet.source_id < NUM_NODES:
            raise ValueError(f"illegal source id in packet: {packet.source_id}")
        if not 0 <= packet.dest_id < NUM_NODES:
            raise ValueError(f"illegal dest id in packet: {packet.dest_id}")
        if packet.source_id == packet.dest_id:
            raise ValueError("source and destination ids are the same")
        if LINK_COSTS[packet.source_id][packet.dest_id] == INF:
            raise ValueError(
                f"nodes {packet.source_id} and {packet.dest_id} are not connected"
            )

        if self.trace > 2:
            self._write(
                f"    TOLAYER2: source: {packet.source_id}, dest: {packet.dest_id}\n"
                "              costs:"
            )
            self._write("".join(f"{cost}  " for cost in packet.min_costs))
            self._write("\n")

        # The medium never reorders: arrive after the last packet already
        # travelling towards the same destination.
        last_time = self.clock
        for event in self.events:
            if event.kind is EventType.FROM_LAYER2 and event.entity == packet.dest_id:
                last_time = event.time
        arrival = Event(
            time=last_time + 2.0 * self._random(),
            kind=EventType.FROM_LAYER2,
            entity=packet.dest_id,
            packet=packet,
        )
        if self.trace > 2:
            self._write("    TOLAYER2: Scheduling arrival on other side\n")
        self._schedule(arrival)

    def _self_test_random(self) -> None:
        average = sum(self._random() for _ in range(1000)) / 1000.0
        if not 0.25 <= average <= 0.75:
            raise RuntimeError(
                "random number generation is not uniform in [0, 1] as expected"
            )

    def _initialise(self) -> None:
        self._self_test_random()
        self.clock = 0.0
        for node in self.nodes:
            node.start()
            self._report(node)
        if self.link_changes:
            self._schedule(Event(10000.0, EventType.LINK_CHANGE, -1))
            self._schedule(Event(20000.0, EventType.LINK_CHANGE, -1))

    def _trace_event(self, event: Event) -> None:
        self._write(f"MAIN: Receive event, t={event.time:.3f}, at {event.entity}")
        if event.kind is EventType.FROM_LAYER2 and event.packet is not None:
            packet = event.packet
            contents = " ".join(f"{cost:3d}" for cost in packet.min_costs)
            self._write(
                f" Source:{packet.source_id:2d}, Destinaton:{packet.dest_id:2d},"
                f" Contents: {contents}\n"
            )

    def _handle(self, event: Event) -> None:
        if event.kind is EventType.FROM_LAYER2:
            if not 0 <= event.entity < NUM_NODES or event.packet is None:
                raise RuntimeError(f"unknown event entity: {event.entity}")
            node = self.nodes[event.entity]
            node.update(event.packet)
            self._report(node)
        elif event.kind is EventType.LINK_CHANGE:
            new_cost = 20 if self.clock < 10001.0 else 1
            self.nodes[0].link_changed(1, new_cost)
            self.nodes[1].link_changed(0, new_cost)
        else:
            raise RuntimeError(f"unknown event type: {event.kind}")

    def run(self) -> float:
        """Run until no packets remain in the medium; return the final time."""
        self._initialise()
        while self.events:
            event = self.events.pop()
            if self.trace > 1:
                self._trace_event(event)
            self.clock = event.time
            self._handle(event)
        self._write(
            f"\nSimulator terminated at t={self.clock:f}, no packets in medium\n"
        )
        return self.clock


def main(argv: list[str] | None = None) -> int:
    """Command-line entry point."""
    parser = argparse.ArgumentParser(
        prog="dvsim", description="Simulate distance-vector routing."
    )
    parser.add_argument("--trace", type=int, default=None, help="trace level")
    parser.add_argument("--seed", type=int, default=DEFAULT_SEED, help="random seed")
    parser.add_argument(
        "--link-changes", action="store_true", help="schedule link cost changes"
    )
    args = parser.parse_args(argv)

    trace = args.trace
    if trace is None:
        answer = input("Enter TRACE:")
        try:
            trace = int(answer.strip())
        except ValueError:
            parser.error(f"invalid trace level: {answer!r}")

    Simulator(trace=trace, seed=args.seed, link_changes=args.link_changes).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())