"""Reading and writing graphs as JSON documents of nodes and edges."""

from __future__ import annotations

import json
from os import PathLike
from typing import Any, Union

import networkx as nx


def graph_from_json(data: dict[str, Any]) -> nx.Graph:
    """Build a graph from a document with ``nodes`` and ``edges`` lists.

    Each node holds an ``id`` and, optionally, a ``value``. Each edge holds
    ``first`` and ``second`` node ids and, optionally, a ``value``.
    """
    graph = nx.Graph()
    for node in data.get("nodes", []):
        if "value" in node:
            graph.add_node(node["id"], value=node["value"])
        else:
            graph.add_node(node["id"])

    for edge in data.get("edges", []):
        first, second = edge["first"], edge["second"]
        if first not in graph or second not in graph:
            raise KeyError(f"edge refers to an unknown node: {first!r}-{second!r}")
        if "value" in edge:
            graph.add_edge(first, second, value=edge["value"])
        else:
            graph.add_edge(first, second)
    return graph


def graph_to_json(graph: nx.Graph) -> dict[str, Any]:
    """Describe ``graph`` as a document with ``nodes`` and ``edges`` lists."""
    nodes = []
    for node_id, attrs in graph.nodes(data=True):
        entry: dict[str, Any] = {}
        if "value" in attrs:
            entry["value"] = attrs["value"]
        entry["id"] = node_id
        nodes.append(entry)

    edges = []
    for first, second, attrs in graph.edges(data=True):
        entry = {"first": first, "second": second}
        if "value" in attrs:
            entry["value"] = attrs["value"]
        edges.append(entry)

    return {"nodes": nodes, "edges": edges}


def load_graph(path: Union[str, PathLike]) -> nx.Graph:
    """Read a graph from a JSON file."""
    with open(path, encoding="utf-8") as stream:
        return graph_from_json(json.load(stream))