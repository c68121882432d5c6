# dvsim

A small discrete-event simulator for distributed, asynchronous distance-vector
routing. There are four routers, nodes 0 to 3, with these link costs
(– means the two nodes have no link):

|     | 0 | 1 | 2 | 3 |
|-----|---|---|---|---|
| 0   | 0 | 1 | 3 | 7 |
| 1   | 1 | 0 | 1 | – |
| 2   | 3 | 1 | 0 | 2 |
| 3   | 7 | – | 2 | 0 |

Each router keeps a distance table indexed by (via, destination). At start-up
it sends its least costs to its neighbours. A router that gets a packet lowers
any entry in the sender's row that the packet improves. If the table changed,
it sends its new least costs on to its neighbours. The medium delays each
packet by a random time but never reorders packets that go to the same
destination. The run ends when no packets are left in transit.

After every change the simulator checks the node's table. A node counts as
verified once every one of its neighbours' rows holds the converged least
costs. When all four nodes are verified, it prints `All nodes verified!`.

## Installation

```
pip install .
```

## Running the simulator

```
dvsim
```

Options:

- `--trace N`: trace level. If you leave it out, you are asked for it with
  `Enter TRACE:`.
- `--seed N`: seed for the random link delays (default `9999`).
- `--link-changes`: schedule link-change events at t=10000 and t=20000.

Trace levels:

- `0`: verification messages and the final line only
- `1`: also prints a node's distance table after it starts and after every
  packet it receives
- `2`: also prints each event as it is taken from the event list
- `3`: also prints each packet handed to the medium
- `4`: also prints every event-list insertion

At the end the simulator prints the time at which the medium emptied.

## Using it from Python

```python
import io
from dvsim.simulator import Simulator

out = io.StringIO()
sim = Simulator(trace=1, seed=9999, link_changes=False, out=out)
final_time = sim.run()
print(out.getvalue())
```

The parts can also be used on their own:

- `dvsim.topology`:
  - `RoutingPacket` and `DistanceTable` (indexed as `table[via, dest]`, with `copy()`)
  - `initial_table(node)`, `is_neighbor(node1, node2)`, `verify(node, table)`
  - `format_table(table, node)`
  - the constants `INF`, `LINK_COSTS` and `EXPECTED_COSTS`
- `dvsim.node`: `Node(node_id, send)`, a router with `start()`, `update(packet)`,
  `min_costs()` and `link_changed(link_id, new_cost)`.
- `dvsim.simulator`:
  - `Event` and `EventList`, a time-ordered list of events
  - `VerificationTracker`
  - `Simulator`, with `to_layer2(packet)` and `run()`
  - `main(argv)`, the command-line entry point

`Simulator.to_layer2` raises `ValueError` for a packet with an illegal source
or destination id, or for one sent between nodes with no link.

## What it does not do

The network has only the four nodes and the link costs above; neither can be
configured. Nodes ignore link-cost changes. With `--link-changes` the events
are scheduled and delivered, but `Node.link_changed` leaves the table as it
is, so no costs are recomputed.

## Tests

```
pip install .[test]
pytest
```