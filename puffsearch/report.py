"""Statistics about puffs built from random graphs."""

from __future__ import annotations

import bisect
import json
import os
from dataclasses import asdict, dataclass
from os import PathLike
from typing import Any, Callable, Iterable, Iterator, Optional, Union

import networkx as nx

from .mutate import graph_ratio, mutate_edges, mutate_nodes, test_gen
from .puff import Puff

Key = tuple[int, Optional[int], float]


@dataclass
class DataUnit:
    """Averaged puff statistics for one graph size, depth limit and target ratio."""

    graph_size: int = 0
    max_puff_depth: Optional[int] = 0
    target_graph_ratio: float = 1.0
    graph_ratio: float = 1.0
    puff_depth: float = 0.0
    puff_edges: float = 0.0
    puff_sectors: float = 0.0
    averaged_over: int = 0

    @classmethod
    def from_graph(
        cls, graph: nx.Graph, max_depth: Optional[int], target_ratio: float = -1
    ) -> DataUnit:
        """Measure the puff of ``graph`` built with ``max_depth`` levels at most."""
        ratio = graph_ratio(graph)
        pf = Puff(graph, max_depth)
        return cls(
            graph_size=len(graph),
            max_puff_depth=max_depth,
            target_graph_ratio=ratio if target_ratio == -1 else target_ratio,
            graph_ratio=ratio,
            puff_depth=float(pf.depth()),
            puff_edges=float(pf.count_edges()),
            puff_sectors=float(pf.count_sectors()),
            averaged_over=1,
        )

    def key(self) -> Key:
        """The fields that identify a unit: size, depth limit and target ratio."""
        return (self.graph_size, self.max_puff_depth, self.target_graph_ratio)

    def merge(self, other: DataUnit) -> None:
        """Fold ``other`` into this unit as a weighted average."""
        if self.key() != other.key():
            raise ValueError(f"cannot merge data units with keys {self.key()} and {other.key()}")
        total = self.averaged_over + other.averaged_over
        mine = self.averaged_over / total
        theirs = other.averaged_over / total
        for name in ("graph_ratio", "puff_depth", "puff_edges", "puff_sectors"):
            setattr(self, name, getattr(self, name) * mine + getattr(other, name) * theirs)
        self.averaged_over = total

    def to_json(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> DataUnit:
        return cls(
            graph_size=data["graph_size"],
            max_puff_depth=data["max_puff_depth"],
            target_graph_ratio=data["target_graph_ratio"],
            graph_ratio=data["graph_ratio"],
            puff_depth=data["puff_depth"],
            puff_edges=data["puff_edges"],
            puff_sectors=data["puff_sectors"],
            averaged_over=data["averaged_over"],
        )


def _sort_key(key: Key) -> tuple:
    size, depth, ratio = key
    return (size, float("inf") if depth is None else depth, ratio)


class DataPack:
    """Data units kept sorted by their keys, one unit per key."""

    def __init__(self, units: Iterable[DataUnit] = ()) -> None:
        self._units: list[DataUnit] = []
        for unit in units:
            self._insert(unit)

    def _position(self, key: Key) -> int:
        keys = [_sort_key(unit.key()) for unit in self._units]
        return bisect.bisect_left(keys, _sort_key(key))

    def _insert(self, unit: DataUnit) -> None:
        pos = self._position(unit.key())
        if pos < len(self._units) and self._units[pos].key() == unit.key():
            self._units[pos].merge(unit)
        else:
            self._units.insert(pos, unit)

    def at(self, graph_size: int, max_puff_depth: Optional[int], graph_ratio: float) -> DataUnit:
        """Return the unit with the given key; raise KeyError if there is none."""
        key = (graph_size, max_puff_depth, graph_ratio)
        pos = self._position(key)
        if pos == len(self._units) or self._units[pos].key() != key:
            raise KeyError(f"data_pack.at: no such element {key}")
        return self._units[pos]

    def append(self, graph: nx.Graph, max_depth: Optional[int], target_ratio: float = -1) -> None:
        """Measure ``graph`` and add it, averaging with a unit of the same key."""
        self._insert(DataUnit.from_graph(graph, max_depth, target_ratio))

    def dump(self) -> str:
        return json.dumps(self.to_json(), indent=4, sort_keys=True)

    def dump_to_file(self, path: Union[str, PathLike]) -> None:
        with open(path, "w", encoding="utf-8") as stream:
            stream.write(self.dump())

    def to_json(self) -> list[dict[str, Any]]:
        return [unit.to_json() for unit in self._units]

    @classmethod
    def from_json(cls, data: Iterable[dict[str, Any]]) -> DataPack:
        return cls(DataUnit.from_json(item) for item in data)

    def __iter__(self) -> Iterator[DataUnit]:
        return iter(self._units)

    def __len__(self) -> int:
        return len(self._units)


def puff_info(pf: Puff) -> dict[str, int]:
    """Summary figures of a puff."""
    return {
        "puff_size": pf.depth(),
        "puff_clusters": pf.count_sectors(),
        "puff_edges": pf.count_edges(),
        "puff_size_in_bytes": pf.size_in_bytes(),
    }


def merge_entries(entries: list[dict[str, Any]]) -> dict[str, float]:
    """Average each numeric field over a list of entries with the same fields."""
    if not entries:
        raise ValueError("merge_entries: no entries to merge")
    fields = list(entries[0])
    for entry in entries:
        if set(entry) != set(fields):
            raise ValueError("merge_entries: entries must have the same fields")
    return {name: sum(float(entry[name]) for entry in entries) / len(entries) for name in fields}


def report(
    save_path: Union[str, PathLike],
    sizes: Iterable[int],
    depths: Iterable[Optional[int]],
    ratios: Iterable[float],
    attempts: int = 5,
) -> DataPack:
    """Measure puffs of random graphs and save the averaged figures to ``save_path``.

    Figures already stored in ``save_path`` are kept and averaged with new ones.
    """
    data = DataPack()
    if os.path.exists(save_path):
        with open(save_path, encoding="utf-8") as stream:
            data = DataPack.from_json(json.load(stream))

    temp_path = f"{os.fspath(save_path)}.tmp"
    sizes, depths = list(sizes), list(depths)
    for ratio in ratios:
        for depth in depths:
            for size in sizes:
                print(f"Computing for target ratio = {ratio}, max depth = {depth}, size = {size}")
                print(f"Average over {attempts}: ", end="")
                for attempt in range(1, attempts + 1):
                    print(attempt, end=" ", flush=True)
                    graph = nx.Graph()
                    mutate_nodes(graph, size, test_gen())
                    mutate_edges(graph, ratio)
                    data.append(graph, depth, ratio)
                    data.dump_to_file(temp_path)
                print()

    data.dump_to_file(save_path)
    if os.path.exists(temp_path):
        os.remove(temp_path)
    return data


def report2(
    sizes: Iterable[int],
    max_depths: Iterable[Optional[int]],
    ratios: Iterable[float],
    attempts: int,
    func: Callable[[nx.Graph], dict[str, Any]],
) -> list[dict[str, Any]]:
    """Apply ``func`` to random graphs of every configuration and average its results."""
    data: list[dict[str, Any]] = []
    max_depths, ratios = list(max_depths), list(ratios)
    for size in sizes:
        for max_depth in max_depths:
            for target_ratio in ratios:
                print(
                    "Computing for:\n"
                    f"    size = {size};\n"
                    f"    max depth = {max_depth};\n"
                    f"    target ratio = {target_ratio};\n"
                    f"    averaged over = {attempts}"
                )
                results = []
                for attempt in range(attempts):
                    print(f"  attempt {attempt + 1}...", end="")
                    graph = nx.Graph()
                    mutate_nodes(graph, size, test_gen())
                    mutate_edges(graph, target_ratio)
                    results.append(func(graph))
                    print(" complete!")

                data.append(
                    {
                        "averaged_over": attempts,
                        "source": {
                            "graph_size": size,
                            "graph_target_ratio": target_ratio,
                            "puff_max_depth": max_depth,
                        },
                        "result": merge_entries(results),
                    }
                )
    return data