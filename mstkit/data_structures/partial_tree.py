"""A connected component under construction."""
from __future__ import annotations

from typing import TYPE_CHECKING

from ..graph.model import Arc, Vertex
from .min_heap import MinHeap
from .parent_forest import ParentForest

if TYPE_CHECKING:
    from ..graph.model import Graph


class PartialTree:
    """部分生成树：一个正在构建中的连通分量。

    每棵部分树持有一个根顶点（并查集代表元）和一个候选边最小堆。
    所有部分树共享同一个 :class:`ParentForest`，分量成员关系通过
    父指针链解析到根来判断。

    属性:
        root: 根顶点
        arcs: 候选边最小堆，可能包含已成为内部边的重复边，出堆时再过滤
        forest: 共享的父指针数组
    """

    def __init__(self, root: Vertex, forest: ParentForest) -> None:
        self.root = root
        self.forest = forest
        self.arcs: MinHeap[Arc] = MinHeap()

    @classmethod
    def from_vertex(cls, graph: "Graph", vertex: Vertex, forest: ParentForest) -> "PartialTree":
        """以单个顶点构建部分树，并把其所有关联边逐条放入堆中。"""
        tree = cls(vertex, forest)
        for arc in graph.incident_arcs(vertex):
            tree.arcs.insert(arc)
        return tree

    def merge(self, other: "PartialTree") -> None:
        """把 ``other`` 并入本树。

        ``other`` 的根挂到本树根之下，其候选边全部转入本树的堆。
        合并后 ``other`` 不再代表任何分量，应被丢弃。
        """
        if other is self:
            raise ValueError("cannot merge a partial tree with itself")
        self.forest.link(other.root.index, self.root.index)
        self.arcs.merge(other.arcs)

    def contains_vertex(self, vertex: Vertex) -> bool:
        """判断 ``vertex`` 的父指针链是否终止于本树的根。"""
        return self.forest.find(vertex.index) == self.root.index

    def __contains__(self, vertex: object) -> bool:
        return isinstance(vertex, Vertex) and self.contains_vertex(vertex)

    def __repr__(self) -> str:
        return f"PartialTree(root={self.root.name!r}, arcs={len(self.arcs)})"

    def __str__(self) -> str:
        return f"{self.root}: {' '.join(str(arc) for arc in sorted(self.arcs))}"
