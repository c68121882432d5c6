"""A distance-vector routing node."""

from __future__ import annotations

from collections.abc import Callable

from .topology import (
    INF,
    NUM_NODES,
    DistanceTable,
    RoutingPacket,
    initial_table,
    is_neighbor,
)


class Node:
    """One router that keeps a distance table and advertises its least costs."""

    def __init__(self, node_id: int, send: Callable[[RoutingPacket], None]) -> None:
        if not 0 <= node_id < NUM_NODES:
            raise ValueError(f"node id out of range: {node_id}")
        self.node_id = node_id
        self.send = send
        self.table: DistanceTable = initial_table(node_id)

    def start(self) -> list[RoutingPacket]:
        """Advertise the initial costs to every neighbour."""
        return self._advertise()

    def update(self, packet: RoutingPacket) -> bool:
        """Take in a neighbour's distance vector; re-advertise if anything changed."""
        via = packet.source_id
        if not 0 <= via < NUM_NODES:
            raise ValueError(f"packet source id out of range: {via}")
        row = self.table.costs[via]
        changed = False
        for dest, cost in enumerate(packet.min_costs):
            if row[dest] > cost:
                row[dest] = cost
                changed = True
        if changed:
            self._advertise()
        return changed

    def min_costs(self) -> tuple[int, ...]:
        """Least known cost to each destination, never above INF."""
        own = self.table.costs[self.node_id]
        return tuple(
            min(
                INF,
                *(
                    own[dest] if via == self.node_id
                    else own[via] + self.table.costs[via][dest]
                    for via in range(NUM_NODES)
                ),
            )
            for dest in range(NUM_NODES)
        )

    def link_changed(self, link_id: int, new_cost: int) -> None:
        """Link cost changes are not acted upon; the table stays as it is."""
        return None

    def _advertise(self) -> list[RoutingPacket]:
        costs = self.min_costs()
        packets = [
            RoutingPacket(self.node_id, dest, costs)
            for dest in range(NUM_NODES)
            if is_neighbor(self.node_id, dest)
        ]
        for packet in packets:
            self.send(packet)
        return packets