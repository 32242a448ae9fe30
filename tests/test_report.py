import json

import networkx as nx
import pytest

from puffsearch.puff import Puff
from puffsearch.report import (
    DataPack,
    DataUnit,
    merge_entries,
    puff_info,
    report,
    report2,
)


def _triangle():
    graph = nx.Graph()
    for node, value in enumerate((1, 2, 3)):
        graph.add_node(node, value=value)
    graph.add_edges_from([(0, 1), (1, 2), (2, 0)])
    return graph


def test_data_unit_from_graph_matches_puff():
    graph = _triangle()
    unit = DataUnit.from_graph(graph, 5, 0.5)
    pf = Puff(graph, 5)
    assert unit.graph_size == 3
    assert unit.puff_depth == pf.depth()
    assert unit.puff_edges == pf.count_edges()
    assert unit.puff_sectors == pf.count_sectors()
    assert unit.averaged_over == 1
    assert unit.key() == (3, 5, 0.5)


def test_data_unit_default_target_ratio_is_graph_ratio():
    unit = DataUnit.from_graph(_triangle(), 3)
    assert unit.target_graph_ratio == unit.graph_ratio == 1.0


def test_merge_weighted_average():
    first = DataUnit(graph_size=4, max_puff_depth=2, target_graph_ratio=0.5, puff_depth=2, averaged_over=1)
    second = DataUnit(graph_size=4, max_puff_depth=2, target_graph_ratio=0.5, puff_depth=4, averaged_over=3)
    first.merge(second)
    assert first.puff_depth == pytest.approx(3.5)
    assert first.averaged_over == 4


def test_merge_different_keys_raises():
    with pytest.raises(ValueError):
        DataUnit(graph_size=1).merge(DataUnit(graph_size=2))


def test_data_unit_json_round_trip():
    unit = DataUnit.from_graph(_triangle(), 2, 0.5)
    assert DataUnit.from_json(unit.to_json()) == unit


def test_data_pack_merges_same_key_and_sorts():
    pack = DataPack()
    pack.append(_triangle(), 3, 1.0)
    pack.append(_triangle(), 3, 1.0)
    pack.append(nx.path_graph(2), 1, 1.0)
    assert len(pack) == 2
    assert pack.at(3, 3, 1.0).averaged_over == 2
    keys = [unit.key() for unit in pack]
    assert keys == sorted(keys)


def test_data_pack_at_missing_raises():
    pack = DataPack()
    pack.append(_triangle(), 3, 1.0)
    with pytest.raises(KeyError):
        pack.at(3, 2, 1.0)


def test_data_pack_dump_round_trip(tmp_path):
    pack = DataPack()
    pack.append(_triangle(), 2, 1.0)
    path = tmp_path / "pack.json"
    pack.dump_to_file(path)
    restored = DataPack.from_json(json.loads(path.read_text(encoding="utf-8")))
    assert restored.to_json() == pack.to_json()
    assert json.loads(pack.dump()) == pack.to_json()


def test_puff_info_matches_puff():
    pf = Puff(_triangle())
    info = puff_info(pf)
    assert info["puff_size"] == pf.depth()
    assert info["puff_clusters"] == pf.count_sectors()
    assert info["puff_edges"] == pf.count_edges()
    assert info["puff_size_in_bytes"] == pf.size_in_bytes()


def test_merge_entries_averages():
    assert merge_entries([{"a": 1, "b": 2}, {"a": 3, "b": 4}]) == {"a": 2.0, "b": 3.0}


def test_merge_entries_identical_entries():
    entry = {"x": 5.0, "y": 1.5}
    assert merge_entries([entry, entry, entry]) == entry


def test_merge_entries_mismatched_fields_raises():
    with pytest.raises(ValueError):
        merge_entries([{"a": 1}, {"b": 1}])


def test_report_writes_and_accumulates(tmp_path):
    path = tmp_path / "report.json"
    report(path, [4], [2], [0.5], attempts=2)
    pack = DataPack.from_json(json.loads(path.read_text(encoding="utf-8")))
    assert pack.at(4, 2, 0.5).averaged_over == 2

    report(path, [4], [2], [0.5], attempts=2)
    pack = DataPack.from_json(json.loads(path.read_text(encoding="utf-8")))
    assert pack.at(4, 2, 0.5).averaged_over == 4
    assert not (tmp_path / "report.json.tmp").exists()


def test_report2_entries():
    data = report2([3, 5], [2], [0.0, 1.0], 2, lambda graph: {"n": len(graph), "m": graph.number_of_edges()})
    assert len(data) == 4
    for entry in data:
        size = entry["source"]["graph_size"]
        assert entry["averaged_over"] == 2
        assert entry["result"]["n"] == size
        expected_edges = size * (size - 1) // 2 if entry["source"]["graph_target_ratio"] == 1.0 else 0
        assert entry["result"]["m"] == expected_edges