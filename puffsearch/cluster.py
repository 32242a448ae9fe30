"""Clusters: connected node groups together with the clusters they grew from."""

from __future__ import annotations

import operator
import struct
from dataclasses import dataclass, field
from typing import Any, Callable

from .node_group import NodeGroup, NodeRef

_POINTER_SIZE = struct.calcsize("P")

Compare = Callable[[Any, Any], bool]


@dataclass(eq=False)
class Cluster:
    """A group of nodes and the smaller clusters (children) it was built from.

    Children are kept unique by their node groups; the first one added wins.
    """

    nodes: NodeGroup = field(default_factory=NodeGroup)
    children: dict[NodeGroup, Cluster] = field(default_factory=dict)

    @classmethod
    def single(cls, node: NodeRef) -> Cluster:
        """Create a cluster holding one node."""
        return cls(NodeGroup([node]))

    @classmethod
    def expand(cls, cluster: Cluster, node: NodeRef) -> Cluster:
        """Create a cluster by adding one node to ``cluster``, which becomes its child."""
        nodes = cluster.nodes.with_node(node)
        if len(nodes) != len(cluster.nodes) + 1:
            raise ValueError("node is already part of the cluster")
        return cls(nodes, {cluster.nodes: cluster})

    @classmethod
    def merge(cls, child1: Cluster, child2: Cluster) -> Cluster:
        """Create a cluster from two children whose groups differ by exactly one node."""
        if len(child1.nodes) != len(child2.nodes):
            raise ValueError("children must have node groups of one size")
        nodes = child1.nodes.union(child2.nodes)
        if len(nodes) != len(child1.nodes) + 1:
            raise ValueError("children must differ by exactly one node")
        result = cls(nodes)
        result.children.setdefault(child1.nodes, child1)
        result.children.setdefault(child2.nodes, child2)
        return result

    def copy(self) -> Cluster:
        """Return a cluster with the same nodes and its own children mapping."""
        return Cluster(self.nodes, dict(self.children))

    def sorted_children(self) -> list[Cluster]:
        """Children in the lexicographic order of their node groups."""
        return [self.children[key] for key in sorted(self.children)]

    def search(self, other: Cluster, compare: Compare = operator.eq) -> dict[NodeRef, NodeRef]:
        """Match ``other`` against this cluster.

        Returns a mapping from ``other``'s nodes to this cluster's nodes, or an
        empty dict when they do not conform.
        """
        if len(self.nodes) != len(other.nodes):
            raise ValueError("clusters must be of one size")

        if len(self.nodes) == 1:
            mine, theirs = self.nodes[0], other.nodes[0]
            if not compare(mine.value, theirs.value):
                return {}
            return {theirs: mine}

        if not all(compare(mine.value, theirs.value) for mine, theirs in zip(self.nodes, other.nodes)):
            return {}

        result: dict[NodeRef, NodeRef] = {}
        candidates = iter(self.sorted_children())
        for their_child in other.sorted_children():
            for candidate in candidates:
                found = candidate.search(their_child, compare)
                if found:
                    break
            else:
                return {}
            result.update(found)
        return result

    def join_children(self, other: Cluster) -> Cluster:
        """Add the children of ``other``, which must hold the same nodes."""
        if self.nodes != other.nodes:
            raise ValueError("clusters must hold the same nodes to join children")
        for key, child in other.children.items():
            self.children.setdefault(key, child)
        return self

    def size_in_bytes(self) -> int:
        """Approximate memory held by references to nodes and children."""
        return (len(self.nodes) + len(self.children)) * _POINTER_SIZE

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Cluster):
            return NotImplemented
        return self.nodes == other.nodes and set(self.children) == set(other.children)

    __hash__ = None  # type: ignore[assignment]

    def __lt__(self, other: Cluster) -> bool:
        return self.nodes < other.nodes

    def __gt__(self, other: Cluster) -> bool:
        return other.nodes < self.nodes

    def __le__(self, other: Cluster) -> bool:
        return not other.nodes < self.nodes

    def __ge__(self, other: Cluster) -> bool:
        return not self.nodes < other.nodes

    def __str__(self) -> str:
        return "{" + "".join(str(node) for node in self.nodes) + "}"