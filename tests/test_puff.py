import networkx as nx
import pytest

from puffsearch.puff import Puff, graphs_equal, search


def _graph(values, edges):
    graph = nx.Graph()
    for node_id, value in values.items():
        graph.add_node(node_id, value=value)
    graph.add_edges_from(edges)
    return graph


def _triangle():
    return _graph({1: 1, 2: 2, 3: 3}, [(1, 2), (2, 3), (3, 1)])


def _path():
    return _graph({1: 1, 2: 2, 3: 3}, [(1, 2), (2, 3)])


def _ids(match):
    return {key.id: value.id for key, value in match.items()}


def test_basic_usage():
    g1 = _triangle()
    g2 = g1.copy()
    result = search(g1, g2)
    assert len(result) == 1


def test_custom_compare():
    g1 = _triangle()
    g2 = g1.copy()
    g2.nodes[1]["value"] = 10
    result = search(g1, g2, lambda a, b: True)
    assert len(result) == 1


def test_changed_value_not_found_with_default_compare():
    g1 = _triangle()
    g2 = g1.copy()
    g2.nodes[1]["value"] = 10
    assert search(g1, g2) == []


def test_different_value_types_with_topology_compare():
    g1 = _triangle()
    g2 = _graph({1: "a", 2: "b", 3: "c"}, [(1, 2), (2, 3), (3, 1)])
    assert len(search(g1, g2, lambda a, b: True)) == 1


def test_triangle_in_larger_graph():
    g1 = _graph({1: 1, 2: 1, 3: 2, 4: 3}, [(1, 3), (2, 3), (3, 4), (1, 4)])
    g2 = _triangle()
    result = search(g1, g2)
    assert [_ids(match) for match in result] == [{1: 1, 2: 3, 3: 4}]


def test_triangle_depth_and_counts():
    pf = Puff(_triangle())
    assert pf.depth() == 3
    assert pf.count_sectors() == 7
    assert pf.count_edges() == 9
    assert [len(pf[level]) for level in range(pf.depth())] == [3, 3, 1]


def test_max_depth_limits_levels():
    pf = Puff(_triangle(), 1)
    assert pf.depth() == 1
    assert len(pf[0]) == 3


def test_max_depth_zero_raises():
    with pytest.raises(ValueError):
        Puff(_triangle(), 0)


def test_graph_without_edges_has_one_level():
    graph = _graph({1: 1, 2: 2}, [])
    pf = Puff(graph)
    assert pf.depth() == 1
    assert pf.count_edges() == 0


def test_deeper_target_not_found():
    small = _graph({1: 1, 2: 2}, [(1, 2)])
    assert search(small, _triangle()) == []


def test_graphs_equal():
    assert graphs_equal(_triangle(), _triangle().copy()) is True
    assert graphs_equal(_triangle(), _path()) is False


def test_triangle_contains_path_but_not_reverse():
    path = _path()
    assert len(search(_triangle(), path)) == 1
    assert search(path, _triangle()) == []


def test_puff_equality_operator():
    same = Puff(_triangle()) == Puff(_triangle())
    different = Puff(_triangle()) == Puff(_path())
    assert same is True
    assert different is False


def test_size_in_bytes_grows_with_graph():
    small = Puff(_graph({1: 1, 2: 2}, [(1, 2)]))
    big = Puff(_triangle())
    assert big.size_in_bytes() > small.size_in_bytes() > 0


def test_str_lists_levels():
    text = str(Puff(_triangle()))
    assert text.startswith("{")
    assert text.endswith("}")
    assert "level 2" in text
    assert "level 0" not in text