"""Node references and ordered groups of nodes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Hashable, Iterable

import networkx as nx


@dataclass(frozen=True, eq=False)
class NodeRef:
    """A reference to one node of a graph: its identifier and its value.

    Two references are equal when they refer to the same node id.
    References are ordered by value first and by id second.
    """

    id: Hashable
    value: Any = None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NodeRef):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __lt__(self, other: NodeRef) -> bool:
        if not isinstance(other, NodeRef):
            return NotImplemented
        if self.value == other.value:
            return self.id < other.id
        return self.value < other.value

    def __gt__(self, other: NodeRef) -> bool:
        if not isinstance(other, NodeRef):
            return NotImplemented
        return other < self

    def __str__(self) -> str:
        return f"[{self.id}: {self.value}]"


class NodeGroup(tuple):
    """An immutable, sorted set of distinct node references."""

    __slots__ = ()

    def __new__(cls, nodes: Iterable[NodeRef] = ()) -> NodeGroup:
        return super().__new__(cls, sorted(set(nodes)))

    @classmethod
    def _from_sorted(cls, nodes: Iterable[NodeRef]) -> NodeGroup:
        return tuple.__new__(cls, nodes)

    def with_node(self, node: NodeRef) -> NodeGroup:
        """Return a group holding this group's nodes and ``node``."""
        return NodeGroup((*self, node))

    def union(self, other: Iterable[NodeRef]) -> NodeGroup:
        """Return a group holding the nodes of both groups."""
        return NodeGroup((*self, *other))

    def except_1(self) -> list[NodeGroup]:
        """Return every group that is this one missing exactly one node."""
        return [
            NodeGroup._from_sorted(node for node in self if node is not excluded)
            for excluded in self
        ]

    def __repr__(self) -> str:
        return f"NodeGroup({list(self)!r})"


def node_refs(graph: nx.Graph) -> dict[Hashable, NodeRef]:
    """Map each node id of ``graph`` to a reference carrying its ``value`` attribute."""
    return {
        node_id: NodeRef(node_id, data.get("value"))
        for node_id, data in graph.nodes(data=True)
    }