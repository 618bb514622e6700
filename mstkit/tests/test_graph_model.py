"""Tests for the weighted graph model."""
import copy
import pickle

import pytest

from mstkit.graph.model import Arc, Graph, Neighbor, Vertex
from mstkit.graph.mst import PartialTreeMST


def test_vertices_are_indexed_in_insertion_order():
    graph = Graph()
    a = graph.add_vertex("A")
    b = graph.add_vertex("B")
    assert (a.index, b.index) == (0, 1)
    assert graph.vertex("B") is b
    assert len(graph) == 2
    assert "A" in graph and "Z" not in graph
    assert [v.name for v in graph] == ["A", "B"]


def test_add_vertex_rejects_duplicates():
    graph = Graph()
    graph.add_vertex("A")
    with pytest.raises(ValueError):
        graph.add_vertex("A")


def test_add_edge_records_both_directions():
    graph = Graph.from_edges([], vertices=["A", "B"])
    graph.add_edge("A", "B", 3)
    assert graph.vertex("A").neighbors == [Neighbor(1, 3)]
    assert graph.vertex("B").neighbors == [Neighbor(0, 3)]


def test_add_edge_errors():
    graph = Graph.from_edges([], vertices=["A"])
    with pytest.raises(KeyError):
        graph.add_edge("A", "B", 1)
    with pytest.raises(ValueError):
        graph.add_edge("A", "A", 1)


def test_arcs_lists_each_edge_once():
    graph = Graph.from_edges([("A", "B", 1), ("B", "C", 2), ("A", "C", 3)])
    assert sorted(arc.weight for arc in graph.arcs()) == [1, 2, 3]
    assert [str(arc) for arc in graph.incident_arcs(graph.vertex("A"))] == ["{A B 1}", "{A C 3}"]


def test_arc_equality_is_unordered():
    a, b = Vertex(0, "A"), Vertex(1, "B")
    assert Arc(a, b, 2) == Arc(b, a, 2)
    assert hash(Arc(a, b, 2)) == hash(Arc(b, a, 2))
    assert Arc(a, b, 2) != Arc(a, b, 3)
    assert Arc(a, b, 1) < Arc(b, a, 2)
    assert str(Arc(a, b, 2.5)) == "{A B 2.5}"


def test_arc_is_immutable():
    arc = Arc(Vertex(0, "A"), Vertex(1, "B"), 1)
    with pytest.raises(AttributeError):
        arc.weight = 5


def test_arc_can_be_copied_and_pickled():
    graph = Graph.from_edges([("A", "B", 2), ("B", "C", 1)])
    arc = graph.arcs()[0]
    for clone in (copy.copy(arc), copy.deepcopy(arc), pickle.loads(pickle.dumps(arc))):
        assert clone == arc
        assert str(clone) == "{A B 2}"
    result = PartialTreeMST().execute(graph)
    assert copy.deepcopy(result).edge_set() == result.edge_set()
    assert pickle.loads(pickle.dumps(result)).total_weight == 3


def test_from_edges_keeps_isolated_vertices():
    graph = Graph.from_edges([("B", "C", 1)], vertices=["A"])
    assert [v.name for v in graph] == ["A", "B", "C"]
    assert graph.vertex("A").neighbors == []


def test_from_adjacency_merges_symmetric_entries():
    graph = Graph.from_adjacency({
        "A": [("B", 1), ("C", 5)],
        "B": [("A", 1), ("C", 4)],
        "C": [("A", 5), ("B", 4), ("D", 2)],
    })
    assert [v.name for v in graph] == ["A", "B", "C", "D"]
    assert sorted(arc.weight for arc in graph.arcs()) == [1, 2, 4, 5]
    assert graph.vertex("D").neighbors == [Neighbor(2, 2)]
