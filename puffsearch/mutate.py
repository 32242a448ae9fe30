"""Random growing and shrinking of graphs' nodes and edges."""

from __future__ import annotations

import itertools
import math
import random
from typing import Any, Callable, Iterable, Optional, Sequence

import networkx as nx


def select_from(items: Iterable[Any], rng: Optional[random.Random] = None) -> Any:
    """Return a uniformly chosen element of ``items``."""
    pool = items if isinstance(items, Sequence) else list(items)
    if not pool:
        raise ValueError("select_from: cannot select from an empty collection")
    return (rng or random).choice(pool)


def test_gen(rng: Optional[random.Random] = None) -> Callable[[], int]:
    """Return a generator of random integers in [0, 5]."""
    source = rng or random.Random()
    return lambda: source.randint(0, 5)


test_gen.__test__ = False  # type: ignore[attr-defined]


def _fresh_ids(graph: nx.Graph) -> Iterable[int]:
    start = max(
        (node for node in graph if isinstance(node, int) and not isinstance(node, bool)),
        default=-1,
    ) + 1
    return itertools.count(start)


def mutate_nodes(
    graph: nx.Graph, target_size: int, gen: Optional[Callable[[], Any]] = None
) -> None:
    """Add or remove random nodes until ``graph`` has ``target_size`` nodes.

    New nodes get a ``value`` attribute from ``gen`` when one is given.
    """
    if target_size > len(graph):
        ids = _fresh_ids(graph)
        for _ in range(target_size - len(graph)):
            node_id = next(ids)
            if gen is None:
                graph.add_node(node_id)
            else:
                graph.add_node(node_id, value=gen())
    else:
        for _ in range(len(graph) - target_size):
            graph.remove_node(select_from(list(graph.nodes)))


def _degree(graph: nx.Graph, node: Any) -> int:
    return sum(1 for neighbour in graph.adj[node] if neighbour != node)


def mutate_edges(
    graph: nx.Graph, target_ratio: float, gen: Optional[Callable[[], Any]] = None
) -> None:
    """Add or remove random edges until the edge density is ``target_ratio``.

    New edges get a ``value`` attribute from ``gen`` when one is given.
    """
    if target_ratio > 1 or target_ratio < 0:
        raise ValueError(f"mutate_edges: target_ratio must be in [0, 1], got {target_ratio:f}")

    size = len(graph)
    max_edges = size * (size - 1) // 2
    edges = graph.number_of_edges()
    target_edges = math.floor(target_ratio * max_edges + 0.5)

    if target_edges > edges:
        for _ in range(target_edges - edges):
            nodes = list(graph.nodes)
            first = select_from(nodes)
            while _degree(graph, first) == size - 1:
                first = select_from(nodes)

            second = select_from(nodes)
            while second == first or graph.has_edge(first, second):
                second = select_from(nodes)

            if gen is None:
                graph.add_edge(first, second)
            else:
                graph.add_edge(first, second, value=gen())
    else:
        for _ in range(edges - target_edges):
            graph.remove_edge(*select_from(list(graph.edges)))


def graph_ratio(graph: nx.Graph) -> float:
    """Fraction of all possible edges that are present."""
    return float(nx.density(graph))