"""Subgraph search for undirected graphs with valued nodes, using layered cluster structures."""

__version__ = "0.1.0"

__all__ = [
    "cluster",
    "graph_json",
    "level_builder",
    "mutate",
    "node_group",
    "pretty",
    "puff",
    "report",
]