"""Building the next level of clusters from the previous one."""

from __future__ import annotations

from collections import defaultdict
from typing import Iterable, Iterator

from .cluster import Cluster
from .node_group import NodeGroup


class BuildResult:
    """A set of clusters keyed by their node groups.

    Adding a cluster whose nodes are already present joins its children into
    the stored one instead.
    """

    def __init__(self) -> None:
        self._clusters: dict[NodeGroup, Cluster] = {}

    def add(self, cluster: Cluster) -> None:
        """Insert ``cluster`` or merge its children into the one already stored."""
        existing = self._clusters.get(cluster.nodes)
        if existing is None:
            self._clusters[cluster.nodes] = cluster.copy()
        else:
            existing.join_children(cluster)

    def join(self, other: BuildResult) -> None:
        """Add every cluster of ``other``."""
        for cluster in other:
            self.add(cluster)

    def clear(self) -> None:
        self._clusters.clear()

    def __getitem__(self, nodes: NodeGroup) -> Cluster:
        return self._clusters[nodes]

    def __contains__(self, nodes: object) -> bool:
        return nodes in self._clusters

    def __iter__(self) -> Iterator[Cluster]:
        return iter(self._clusters.values())

    def __len__(self) -> int:
        return len(self._clusters)


class LevelBuilder:
    """Builds clusters one node larger from a level of clusters of one size."""

    def __init__(self) -> None:
        self._results = BuildResult()

    def build(self, last_level: Iterable[Cluster]) -> bool:
        """Build the next level from ``last_level``; return whether anything was built.

        Two clusters that share all but one node are merged into a new cluster
        that holds both as children.
        """
        self._results.clear()
        sources: defaultdict[NodeGroup, list[Cluster]] = defaultdict(list)

        for cluster in last_level:
            if len(cluster.nodes) < 2:
                raise ValueError("clusters must hold at least 2 nodes to build a level")
            for part in cluster.nodes.except_1():
                seen = sources[part]
                for source in seen:
                    self._results.add(Cluster.merge(cluster, source))
                seen.append(cluster)

        return len(self._results) > 0

    def result(self) -> BuildResult:
        """The clusters produced by the last call to :meth:`build`."""
        return self._results