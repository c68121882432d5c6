"""Network topology, routing packets and distance tables for four routers."""

from __future__ import annotations

from dataclasses import dataclass, field

INF = 999
NUM_NODES = 4

BOLD = "\033[1m"
END = "\033[0m"

# Direct link costs between every pair of nodes; INF means no link.
LINK_COSTS: tuple[tuple[int, ...], ...] = (
    (0, 1, 3, 7),
    (1, 0, 1, INF),
    (3, 1, 0, 2),
    (7, INF, 2, 0),
)

_NEIGHBORS: tuple[tuple[int, ...], ...] = (
    (0, 1, 1, 1),
    (1, 0, 1, 0),
    (1, 1, 0, 1),
    (1, 0, 1, 0),
)

# Converged least costs between every pair of nodes.
EXPECTED_COSTS: tuple[tuple[int, ...], ...] = (
    (0, 1, 2, 4),
    (1, 0, 1, 3),
    (2, 1, 0, 2),
    (4, 3, 2, 0),
)


def _check_node(node: int) -> None:
    if not 0 <= node < NUM_NODES:
        raise ValueError(f"node id out of range: {node}")


@dataclass(frozen=True)
class RoutingPacket:
    """A distance vector sent from one router to a neighbouring router."""

    source_id: int
    dest_id: int
    min_costs: tuple[int, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "min_costs", tuple(self.min_costs))
        if len(self.min_costs) != NUM_NODES:
            raise ValueError(
                f"a packet carries {NUM_NODES} costs, got {len(self.min_costs)}"
            )


def _inf_grid() -> list[list[int]]:
    return [[INF] * NUM_NODES for _ in range(NUM_NODES)]


@dataclass
class DistanceTable:
    """Costs indexed by (via, dest): the cost to reach dest through via."""

    costs: list[list[int]] = field(default_factory=_inf_grid)

    def __post_init__(self) -> None:
        self.costs = [list(row) for row in self.costs]
        if len(self.costs) != NUM_NODES or any(
            len(row) != NUM_NODES for row in self.costs
        ):
            raise ValueError(f"a distance table is {NUM_NODES}x{NUM_NODES}")

    @staticmethod
    def _split(key: tuple[int, int]) -> tuple[int, int]:
        via, dest = key
        _check_node(via)
        _check_node(dest)
        return via, dest

    def __getitem__(self, key: tuple[int, int]) -> int:
        via, dest = self._split(key)
        return self.costs[via][dest]

    def __setitem__(self, key: tuple[int, int], value: int) -> None:
        via, dest = self._split(key)
        self.costs[via][dest] = value

    def copy(self) -> DistanceTable:
        """Return an independent copy of the table."""
        return DistanceTable([list(row) for row in self.costs])


def initial_table(node: int) -> DistanceTable:
    """Table for a node before any exchange: only its own direct link costs."""
    _check_node(node)
    table = DistanceTable()
    table.costs[node] = list(LINK_COSTS[node])
    return table


def is_neighbor(node1: int, node2: int) -> bool:
    """Whether two nodes share a direct link."""
    _check_node(node1)
    _check_node(node2)
    return bool(_NEIGHBORS[node1][node2])


def verify(node: int, table: DistanceTable) -> bool:
    """Check that every neighbour's row in the table holds the converged costs."""
    return all(
        table.costs[via] == list(EXPECTED_COSTS[via])
        for via in range(NUM_NODES)
        if is_neighbor(node, via)
    )


def format_table(table: DistanceTable, node: int) -> str:
    """Render a table with destinations as rows and via nodes as columns."""
    lines = [
        f"{BOLD}\nTable for node {node}:\n{END}",
        "  |  0    1    2    3\n---------------------\n",
    ]
    for dest in range(NUM_NODES):
        cells = "".join(
            "  -  " if table.costs[via][dest] == INF else f"{table.costs[via][dest]:3d}  "
            for via in range(NUM_NODES)
        )
        lines.append(f"{dest} |{cells}\n")
    return "".join(lines)