"""Weighted undirected graph consumed by the spanning tree algorithms.

Vertices live in an arena: each one is addressed by a stable integer
``index`` equal to its position in :attr:`Graph.vertices`. Union-find
membership is tracked outside the vertices, see
:class:`mstkit.data_structures.parent_forest.ParentForest`.
"""
from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, Hashable, Iterable, Iterator, List, Mapping, Optional, Sequence, Tuple


@dataclass(frozen=True)
class Neighbor:
    """邻接表中的一项：目标顶点的下标及边权。"""

    index: int
    weight: float


@dataclass(eq=False)
class Vertex:
    """图中的顶点。

    属性:
        index: 顶点在图中的稳定下标
        name: 顶点名称
        neighbors: 邻接表，构图完成后只读
    """

    index: int
    name: Hashable
    neighbors: List[Neighbor] = field(default_factory=list, repr=False)

    def __hash__(self) -> int:
        return hash(self.index)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vertex):
            return NotImplemented
        return self.index == other.index and self.name == other.name

    def __str__(self) -> str:
        return str(self.name)


@dataclass(frozen=True, eq=False)
class Arc:
    """An undirected weighted edge between two vertices.

    Arcs compare equal regardless of endpoint order and are ordered by
    weight alone, so ``sorted`` and heaps pick the cheapest edge first.
    """

    v1: Vertex
    v2: Vertex
    weight: float

    @property
    def endpoints(self) -> Tuple[Vertex, Vertex]:
        return self.v1, self.v2

    def _key(self) -> Tuple[frozenset, float]:
        return frozenset((self.v1.index, self.v2.index)), self.weight

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Arc):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def __lt__(self, other: "Arc") -> bool:
        return self.weight < other.weight

    def __repr__(self) -> str:
        return f"Arc({self.v1.name!r}, {self.v2.name!r}, {self.weight!r})"

    def __str__(self) -> str:
        return f"{{{self.v1} {self.v2} {self.weight}}}"


class Graph:
    """使用邻接表实现的带权无向图。

    顶点按加入顺序编号，编号即其在 ``vertices`` 中的位置。
    每条无向边在两个端点的邻接表中各记录一次。

    属性:
        vertices: 顶点列表
    """

    def __init__(self) -> None:
        self.vertices: List[Vertex] = []
        self._by_name: Dict[Hashable, int] = {}

    def add_vertex(self, name: Hashable) -> Vertex:
        """添加一个新顶点并返回它。

        异常:
            ValueError: 同名顶点已存在
        """
        if name in self._by_name:
            raise ValueError(f"Duplicate vertex {name!r}")
        vertex = Vertex(len(self.vertices), name)
        self.vertices.append(vertex)
        self._by_name[name] = vertex.index
        return vertex

    def vertex(self, name: Hashable) -> Vertex:
        """按名称查找顶点，不存在时抛出 ``KeyError``。"""
        try:
            return self.vertices[self._by_name[name]]
        except KeyError:
            raise KeyError(f"Unknown vertex {name!r}") from None

    def add_edge(self, u: Hashable, v: Hashable, weight: float) -> None:
        """在顶点 u 和 v 之间添加一条带权无向边。

        参数:
            u: 第一个顶点名称
            v: 第二个顶点名称
            weight: 边权

        异常:
            KeyError: 顶点不存在
            ValueError: 自环
        """
        first, second = self.vertex(u), self.vertex(v)
        if first.index == second.index:
            raise ValueError(f"Self loop on vertex {u!r} is not allowed")
        first.neighbors.append(Neighbor(second.index, weight))
        second.neighbors.append(Neighbor(first.index, weight))

    def incident_arcs(self, vertex: Vertex) -> Iterator[Arc]:
        """按邻接表顺序产生与 ``vertex`` 关联的所有边。"""
        for neighbor in vertex.neighbors:
            yield Arc(vertex, self.vertices[neighbor.index], neighbor.weight)

    def arcs(self) -> List[Arc]:
        """返回图中所有边，每条无向边只出现一次。"""
        result: List[Arc] = []
        for vertex in self.vertices:
            for neighbor in vertex.neighbors:
                if vertex.index < neighbor.index:
                    result.append(Arc(vertex, self.vertices[neighbor.index], neighbor.weight))
        return result

    def __len__(self) -> int:
        return len(self.vertices)

    def __iter__(self) -> Iterator[Vertex]:
        return iter(self.vertices)

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    @classmethod
    def from_edges(
        cls,
        edges: Iterable[Tuple[Hashable, Hashable, float]],
        vertices: Optional[Sequence[Hashable]] = None,
    ) -> "Graph":
        """由 ``(u, v, weight)`` 三元组构建图。

        ``vertices`` 可指定顶点顺序并包含孤立顶点；未列出的端点按出现顺序追加。
        """
        graph = cls()
        for name in vertices or ():
            graph.add_vertex(name)
        for u, v, weight in edges:
            for name in (u, v):
                if name not in graph:
                    graph.add_vertex(name)
            graph.add_edge(u, v, weight)
        return graph

    @classmethod
    def from_adjacency(cls, adjacency: Mapping[Hashable, Sequence[Tuple[Hashable, float]]]) -> "Graph":
        """由 ``{node: [(neighbor, weight), ...]}`` 形式的邻接表构建图。

        对称出现的 ``(u, v)`` 与 ``(v, u)`` 只计为一条边。
        """
        graph = cls()
        for name in adjacency:
            graph.add_vertex(name)
        pending: Counter = Counter()
        for u, neighbors in adjacency.items():
            for v, weight in neighbors:
                if v not in graph:
                    graph.add_vertex(v)
                if pending[(v, u, weight)]:
                    pending[(v, u, weight)] -= 1
                    continue
                pending[(u, v, weight)] += 1
                graph.add_edge(u, v, weight)
        return graph
