# puffsearch

`puffsearch` finds every occurrence of a small graph inside a larger one.
Graphs are undirected `networkx` graphs whose nodes carry a `value`
attribute. A match maps each node of the searched-for graph to a node of the
searched-in graph so that values agree and the connections are preserved.

The search works by building a *puff* for each graph: a stack of levels in
which level *k* (counting from 0) holds every connected cluster of *k + 1*
nodes, with each cluster linked to the smaller clusters it was grown from.
Searching compares the top level of the smaller puff against the same level
of the larger one.

## Installation

```
pip install puffsearch
```

The only runtime dependency is `networkx`.

## Graphs

Any `networkx.Graph` works. Node values are read from the `value` node
attribute (a node without one has the value `None`). Node ids must be
mutually comparable, for example all integers, since clusters order nodes by
value and then by id. Self-loops are ignored by the search.

Graphs can also be built from the JSON layout in `puffsearch.graph_json`:
a `nodes` list with `id` and optional `value` per node, and an `edges` list
with `first` and `second` node ids and an optional `value`.

## Searching

```python
from puffsearch.graph_json import graph_from_json
from puffsearch.puff import search

source = graph_from_json({
    "nodes": [
        {"id": 0, "value": 1},
        {"id": 1, "value": 1},
        {"id": 2, "value": 2},
        {"id": 3, "value": 3},
    ],
    "edges": [
        {"first": 0, "second": 2},
        {"first": 1, "second": 2},
        {"first": 2, "second": 3},
        {"first": 0, "second": 3},
    ],
})

triangle = graph_from_json({
    "nodes": [
        {"id": 0, "value": 1},
        {"id": 1, "value": 2},
        {"id": 2, "value": 3},
    ],
    "edges": [
        {"first": 0, "second": 1},
        {"first": 1, "second": 2},
        {"first": 0, "second": 2},
    ],
})

matches = search(source, triangle)
for match in matches:
    for target_node, source_node in match.items():
        print(target_node.id, "->", source_node.id)
```

`search` returns a list of distinct matches. Each match is a dict from
`NodeRef`s of the target graph to `NodeRef`s of the source graph; a
`NodeRef` (from `puffsearch.node_group`) carries the node's `id` and
`value`. An empty list means the source does not contain the target.

### Custom comparison

By default node values are compared with `==`. Pass a two-argument callable
to compare differently, for example to match on topology alone:

```python
matches = search(source, triangle, compare=lambda source_value, target_value: True)
```

The callable receives a value from the source graph first and a value from
the target graph second, so the two graphs may hold values of different
types.

### Graph equality

`graphs_equal(lhs, rhs)` reports whether each graph contains the other.

## Working with puffs

`Puff` (in `puffsearch.puff`) exposes the layered structure directly. It
takes a graph and an optional maximum depth, which must be at least 1:

```python
from puffsearch.puff import Puff

pf = Puff(source)
print(pf.depth(), pf.count_sectors(), pf.count_edges(), pf.size_in_bytes())
print(pf)          # clusters of each level above the first, with their children

small = Puff(triangle)
large = Puff(source, small.depth())
print(large.search(small))
```

`pf[i]` is the list of `Cluster`s on level `i`. Two puffs compare equal when
each one's search finds the other. Limiting the depth of the larger puff to
the depth of the smaller one is what `search` does, and keeps the build
cheap.

The building blocks are available too: `Cluster` (`puffsearch.cluster`),
`NodeGroup` and `node_refs` (`puffsearch.node_group`), and `LevelBuilder`
with its `BuildResult` (`puffsearch.level_builder`), which grows one level of
clusters from the previous one.

## Random graphs

`puffsearch.mutate` grows or shrinks graphs at random, which is useful for
experiments:

- `mutate_nodes(graph, target_size, gen=None)` adds new integer-id nodes,
  with a `value` from `gen` if given, or removes random nodes until the graph
  has `target_size` nodes.
- `mutate_edges(graph, target_ratio, gen=None)` adds or removes random edges
  until the share of possible edges present is `target_ratio` (rounded to a
  whole number of edges). `target_ratio` must lie in `[0, 1]`, otherwise
  `ValueError` is raised. New edges get a `value` from `gen` if given.
- `graph_ratio(graph)` gives the current share of possible edges present.
- `test_gen(rng=None)` returns a value generator yielding integers 0 to 5.
- `select_from(items, rng=None)` picks a random element.

## JSON files

`puffsearch.graph_json` provides `graph_to_json(graph)`,
`graph_from_json(data)` and `load_graph(path)` for the layout shown above.
An edge naming an unknown node raises `KeyError`.

## Reports

`puffsearch.report` collects statistics about puffs built from random
graphs.

- `report(save_path, sizes, depths, ratios, attempts=5)` builds random
  graphs (node values from `test_gen`) for every combination of size,
  maximum depth and edge ratio, averages puff depth, cluster count and edge
  count over the attempts, and writes them as JSON to `save_path`, averaging
  with any data already stored there. Progress is printed, and the data is
  also written to `save_path + ".tmp"` after each attempt; that file is
  removed at the end. It returns the resulting `DataPack`.
- `report2(sizes, max_depths, ratios, attempts, func)` calls `func` on each
  random graph and averages the numbers it returns into a list of entries.
  For puff figures, pass for instance `lambda g: puff_info(Puff(g))`;
  `puff_info(pf)` summarises a puff's depth, clusters, edges and size.
- `merge_entries(entries)` averages each field over a list of dicts.
- `DataUnit` holds the averaged figures for one key (graph size, maximum
  depth, target ratio); `DataPack` keeps units sorted by key, merges units
  with the same key, looks them up with `at(...)` (raising `KeyError` if
  absent) and reads and writes JSON.

## Output helpers

`puffsearch.pretty.pretty(value, width=3)` formats an integer as a
zero-padded hexadecimal tag, keeping only the last `width` digits; a width
of zero or less keeps them all.

## What it does not do

The package is a library only: it has no command-line program, and it has no
readers for graph formats other than its own JSON layout (use `networkx`
for others). Searching runs in a single thread.