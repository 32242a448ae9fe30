"""Puffs: every connected cluster of a graph, layered by size, and searching them."""

from __future__ import annotations

import operator
from typing import Any, Callable, Optional

import networkx as nx

from .cluster import Cluster
from .level_builder import LevelBuilder
from .node_group import NodeRef, node_refs

Compare = Callable[[Any, Any], bool]
Match = dict[NodeRef, NodeRef]


def _match_key(match: Match) -> frozenset:
    return frozenset(match.items())


def _unique(matches: list[Match]) -> list[Match]:
    seen: dict[frozenset, Match] = {}
    for match in matches:
        seen.setdefault(_match_key(match), match)
    return list(seen.values())


def _merge_matches(first: list[Match], second: list[Match]) -> list[Match]:
    """Combine two sets of partial matches; existing entries are never overwritten."""
    if not first:
        return second
    if not second:
        return first

    merged: list[Match] = []
    for base in first:
        combined = dict(base)
        for extra in second:
            for key, value in extra.items():
                combined.setdefault(key, value)
            merged.append(dict(combined))
    return _unique(merged)


class Puff:
    """All connected clusters of a graph, grouped into levels by cluster size.

    Level ``i`` holds the clusters of ``i + 1`` nodes. Each cluster keeps the
    clusters one node smaller that it was built from as its children.
    """

    def __init__(self, graph: Optional[nx.Graph] = None, max_depth: Optional[int] = None) -> None:
        self._levels: list[list[Cluster]] = []
        if graph is None:
            return
        if max_depth is not None and max_depth < 1:
            raise ValueError("max_depth must be at least 1")

        refs = node_refs(graph)
        first = [Cluster.single(ref) for ref in refs.values()]
        self._levels.append(first)

        if max_depth is not None and max_depth <= 1:
            return

        # Every edge yields the same pair cluster twice, once from each end;
        # the two copies are joined so that the pair holds both children.
        upper: list[Cluster] = []
        lower: dict = {}
        for cluster in first:
            only = cluster.nodes[0]
            for neighbour_id in graph.adj[only.id]:
                if neighbour_id == only.id:
                    continue
                adjacent = refs[neighbour_id]
                grown = Cluster.expand(cluster, adjacent)
                if adjacent.id > only.id:
                    upper.append(grown)
                else:
                    lower[grown.nodes] = grown

        if not upper:
            return

        upper.sort()
        for cluster in upper:
            cluster.join_children(lower[cluster.nodes])
        self._levels.append(upper)

        builder = LevelBuilder()
        level = 2
        while max_depth is None or level < max_depth:
            if not builder.build(self._levels[-1]):
                break
            self._levels.append(sorted(builder.result()))
            level += 1

    def depth(self) -> int:
        """Number of levels."""
        return len(self._levels)

    def count_edges(self) -> int:
        """Total number of parent-child links between clusters."""
        return sum(len(cluster.children) for level in self._levels for cluster in level)

    def count_sectors(self) -> int:
        """Total number of clusters over all levels."""
        return sum(len(level) for level in self._levels)

    def size_in_bytes(self) -> int:
        """Approximate memory held by the clusters' references."""
        return sum(cluster.size_in_bytes() for level in self._levels for cluster in level)

    def search(self, other: Puff, compare: Compare = operator.eq) -> list[Match]:
        """Find every way ``other``'s graph occurs in this one.

        Each match maps nodes of ``other`` to nodes of this puff. ``compare``
        receives a value of this graph first and one of ``other`` second.
        """
        if other.depth() > self.depth() or other.depth() == 0:
            return []

        top = other.depth() - 1
        result: list[Match] = []
        for theirs in other._levels[top]:
            found = _unique(
                [match for mine in self._levels[top] if (match := mine.search(theirs, compare))]
            )
            if not found:
                return []
            result = _merge_matches(result, found)
        return result

    def __getitem__(self, index: int) -> list[Cluster]:
        return self._levels[index]

    def __len__(self) -> int:
        return len(self._levels)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Puff):
            return NotImplemented
        return bool(self.search(other)) and bool(other.search(self))

    __hash__ = None  # type: ignore[assignment]

    def __str__(self) -> str:
        lines = ["{"]
        for level in range(self.depth() - 1, 0, -1):
            lines.append(f"    level {level} {{")
            for cluster in self._levels[level]:
                children = "".join(f"{child} " for child in cluster.sorted_children())
                lines.append(f"        {cluster} <= {children}")
            lines.append("    }")
        lines.append("}")
        return "\n".join(lines)


def search(source: nx.Graph, target: nx.Graph, compare: Compare = operator.eq) -> list[Match]:
    """Find every occurrence of ``target`` as a subgraph of ``source``."""
    target_puff = Puff(target)
    source_puff = Puff(source, target_puff.depth())
    return source_puff.search(target_puff, compare)


def graphs_equal(lhs: nx.Graph, rhs: nx.Graph) -> bool:
    """Whether each graph contains the other."""
    return Puff(lhs) == Puff(rhs)