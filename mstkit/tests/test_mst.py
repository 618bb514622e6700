"""Tests for the Minimum Spanning Tree algorithms."""
import logging
import random
from typing import Dict, List, Tuple

import pytest

from mstkit.errors import DisconnectedGraphError
from mstkit.graph.model import Graph
from mstkit.graph.mst import KruskalMST, MSTResult, PartialTreeMST


def _build_square_graph() -> Graph:
    return Graph.from_edges(
        [("A", "B", 1), ("B", "C", 2), ("C", "D", 3), ("A", "D", 4), ("A", "C", 5)]
    )


def _build_connected_graph() -> Dict[str, List[Tuple[str, float]]]:
    return {
        "A": [("B", 1), ("C", 5)],
        "B": [("A", 1), ("C", 4), ("D", 2)],
        "C": [("A", 5), ("B", 4), ("D", 1)],
        "D": [("B", 2), ("C", 1)],
    }


def _build_negative_graph() -> Dict[str, List[Tuple[str, float]]]:
    return {
        "A": [("B", -1), ("C", 4)],
        "B": [("A", -1), ("C", 2), ("D", 3)],
        "C": [("A", 4), ("B", 2), ("D", -2)],
        "D": [("B", 3), ("C", -2)],
    }


def _build_disconnected_graph() -> Dict[str, List[Tuple[str, float]]]:
    return {
        "A": [("B", 1)],
        "B": [("A", 1)],
        "C": [],
    }


def _build_random_graph(seed: int, size: int, extra: int) -> Graph:
    rng = random.Random(seed)
    names = [f"n{i}" for i in range(size)]
    order = names[:]
    rng.shuffle(order)
    edges = [(u, v, rng.randint(1, 20)) for u, v in zip(order, order[1:])]
    for _ in range(extra):
        u, v = rng.sample(names, 2)
        edges.append((u, v, rng.randint(1, 20)))
    return Graph.from_edges(edges, vertices=names)


def _is_spanning_tree(graph: Graph, result: MSTResult) -> bool:
    parent = list(range(len(graph)))

    def find(x: int) -> int:
        while parent[x] != x:
            x = parent[x]
        return x

    for arc in result:
        rx, ry = find(arc.v1.index), find(arc.v2.index)
        if rx == ry:
            return False
        parent[rx] = ry
    return len(result) == len(graph) - 1 and len({find(i) for i in range(len(graph))}) == 1


@pytest.mark.parametrize("algo", [PartialTreeMST(), KruskalMST()])
def test_mst_square_graph(algo) -> None:
    result = algo.execute(_build_square_graph())

    assert result.edge_set() == {
        frozenset({"A", "B"}),
        frozenset({"B", "C"}),
        frozenset({"C", "D"}),
    }
    assert result.total_weight == 6
    assert len(result) == 3


def test_partial_tree_registry_shrinks_by_one_per_merge() -> None:
    algo = PartialTreeMST()
    registry = algo.initialize(_build_square_graph())
    sizes = [registry.size()]
    arcs = algo.run(registry, on_merge=lambda arc, reg: sizes.append(reg.size()))

    assert sizes == [4, 3, 2, 1]
    assert len(arcs) == 3
    assert registry.size() == 1


def test_initialize_preloads_incident_arcs() -> None:
    graph = _build_square_graph()
    registry = PartialTreeMST.initialize(graph)

    assert [tree.root.name for tree in registry] == ["A", "B", "C", "D"]
    assert [len(tree.arcs) for tree in registry] == [3, 2, 3, 2]
    registry.check_partition(len(graph))


@pytest.mark.parametrize("algo", [PartialTreeMST(), KruskalMST()])
def test_mst_connected_graph(algo) -> None:
    result = algo.execute(_build_connected_graph())
    edges, total = result.edge_set(), result.total_weight

    assert edges == {
        frozenset({"A", "B"}),
        frozenset({"C", "D"}),
        frozenset({"B", "D"}),
    }
    assert total == 4


@pytest.mark.parametrize("algo", [PartialTreeMST(), KruskalMST()])
def test_mst_negative_weights(algo) -> None:
    result = algo.execute(_build_negative_graph())

    assert result.edge_set() == {
        frozenset({"C", "D"}),
        frozenset({"A", "B"}),
        frozenset({"B", "C"}),
    }
    assert result.total_weight == -1


@pytest.mark.parametrize("algo", [PartialTreeMST(), KruskalMST()])
def test_mst_disconnected_graph(algo) -> None:
    with pytest.raises(DisconnectedGraphError):
        algo.execute(_build_disconnected_graph())


def test_disconnected_components_fail_explicitly(caplog) -> None:
    graph = Graph.from_edges([("A", "B", 1), ("C", "D", 2)])
    algo = PartialTreeMST()
    registry = algo.initialize(graph)

    with caplog.at_level(logging.ERROR, logger="mstkit"):
        with pytest.raises(DisconnectedGraphError) as excinfo:
            algo.run(registry)

    assert "no spanning tree exists" in str(excinfo.value)
    assert excinfo.value.root is not None
    assert "exhausted" in caplog.text
    # 失败时剩余的部分树仍然划分全部顶点
    assert registry.size() == 2
    registry.check_partition(len(graph))


def test_single_vertex_and_empty_graph() -> None:
    algo = PartialTreeMST()
    single = Graph.from_edges([], vertices=["solo"])
    assert len(algo.execute(single)) == 0
    assert algo.execute(single).total_weight == 0
    assert len(algo.execute(Graph())) == 0
    assert len(KruskalMST().execute(Graph())) == 0


def test_run_on_single_tree_is_noop() -> None:
    algo = PartialTreeMST()
    registry = algo.initialize(_build_square_graph())
    algo.run(registry)
    assert algo.run(registry) == []
    assert registry.size() == 1


def test_internal_arcs_are_discarded(caplog) -> None:
    # AB 合并后先弹出 B-A，此时两端同属一棵树
    graph = Graph.from_edges([("A", "B", 1), ("C", "D", 1), ("A", "C", 5), ("B", "D", 2)])
    with caplog.at_level(logging.DEBUG, logger="mstkit"):
        result = PartialTreeMST(check_partition=True).execute(graph)

    assert result.edge_set() == {
        frozenset({"A", "B"}),
        frozenset({"C", "D"}),
        frozenset({"B", "D"}),
    }
    assert result.total_weight == 4
    assert "Discarding internal arc {B A 1}" in caplog.text
    assert _is_spanning_tree(graph, result)


def test_parallel_edges_use_the_cheapest() -> None:
    graph = Graph.from_edges([("A", "B", 7), ("A", "B", 2), ("B", "C", 3)])
    result = PartialTreeMST().execute(graph)
    assert sorted(arc.weight for arc in result) == [2, 3]


@pytest.mark.parametrize("seed", range(8))
def test_partial_tree_matches_kruskal_on_random_graphs(seed: int) -> None:
    graph = _build_random_graph(seed, size=12 + seed, extra=30)
    result = PartialTreeMST(check_partition=True).execute(graph)
    reference = KruskalMST().execute(graph)

    assert _is_spanning_tree(graph, result)
    assert result.total_weight == reference.total_weight


def test_kruskal_names_stranded_component() -> None:
    with pytest.raises(DisconnectedGraphError) as excinfo:
        KruskalMST().execute(_build_disconnected_graph())

    assert excinfo.value.root is not None
    assert excinfo.value.root.name == "C"
    assert "component rooted at C" in str(excinfo.value)
