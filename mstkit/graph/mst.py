"""Minimum spanning tree algorithms.

:class:`PartialTreeMST` grows one partial tree per vertex and repeatedly
merges the tree at the front of a :class:`PartialTreeList` with the
first other tree reachable through its cheapest candidate edge.
:class:`KruskalMST` is the classic sort-then-union algorithm, kept as a
reference implementation.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Hashable, Iterator, List, Mapping, Optional, Sequence, Tuple, Union

from ..base import Algorithm
from ..data_structures.parent_forest import ParentForest
from ..data_structures.partial_tree import PartialTree
from ..data_structures.partial_tree_list import PartialTreeList
from ..errors import DisconnectedGraphError
from .model import Arc, Graph

logger = logging.getLogger(__name__)

GraphLike = Union[Graph, Mapping[Hashable, Sequence[Tuple[Hashable, float]]]]
MergeCallback = Callable[[Arc, PartialTreeList], None]


def as_graph(graph: GraphLike) -> Graph:
    """接受 :class:`Graph` 或邻接表映射，统一返回 :class:`Graph`。"""
    if isinstance(graph, Graph):
        return graph
    if isinstance(graph, Mapping):
        return Graph.from_adjacency(graph)
    raise TypeError(f"expected Graph or adjacency mapping, got {type(graph).__name__}")


@dataclass
class MSTResult:
    """最小生成树的边集合及总权重，边的顺序无意义。"""

    arcs: List[Arc] = field(default_factory=list)
    total_weight: float = 0

    @classmethod
    def from_arcs(cls, arcs: List[Arc]) -> "MSTResult":
        return cls(arcs, sum(arc.weight for arc in arcs))

    def edge_set(self) -> set:
        """以 ``frozenset({u, v})`` 形式返回边集合，便于比较。"""
        return {frozenset((arc.v1.name, arc.v2.name)) for arc in self.arcs}

    def __len__(self) -> int:
        return len(self.arcs)

    def __iter__(self) -> Iterator[Arc]:
        return iter(self.arcs)


class PartialTreeMST(Algorithm):
    """基于部分树合并的最小生成树算法（Borůvka/Kruskal 混合）。

    初始时每个顶点是一棵部分树，堆中预置其全部关联边。算法每轮从
    链表队头取出一棵部分树，不断弹出其最小候选边：若边的某个端点
    属于链表中的另一棵部分树，则合并两棵树、记录该边并把合并后的树
    放回队尾；否则该边为内部边（会形成环），直接丢弃。

    如果某棵部分树的候选边耗尽仍找不到跨分量的边，说明图不连通，
    抛出 :class:`DisconnectedGraphError`。

    参数:
        check_partition: 每次合并后校验部分树是否仍划分全部顶点，用于调试
    """

    def __init__(self, check_partition: bool = False) -> None:
        self.check_partition = check_partition

    @staticmethod
    def initialize(graph: GraphLike) -> PartialTreeList:
        """为图中每个顶点构建单顶点部分树，并按顶点顺序放入链表。"""
        graph = as_graph(graph)
        forest = ParentForest(len(graph))
        registry = PartialTreeList()
        for vertex in graph.vertices:
            registry.append(PartialTree.from_vertex(graph, vertex, forest))
        return registry

    def run(self, registry: PartialTreeList, on_merge: Optional[MergeCallback] = None) -> List[Arc]:
        """在给定的部分树链表上执行合并循环，直到只剩一棵部分树。

        参数:
            registry: 初始部分树链表，会被原地修改
            on_merge: 每次合并后以 ``(arc, registry)`` 调用的回调

        返回:
            List[Arc]: 选中的生成树边，顺序无意义

        异常:
            DisconnectedGraphError: 某棵部分树的候选边耗尽
        """
        front = registry.peek_front()
        vertex_count = len(front.forest) if front is not None else 0
        selected: List[Arc] = []

        while registry.size() > 1:
            tree = registry.remove_front()
            while True:
                arc = tree.arcs.delete_min()
                if arc is None:
                    registry.append(tree)
                    logger.error(
                        "Partial tree rooted at %s exhausted its candidate arcs with %d other tree(s) left",
                        tree.root,
                        registry.size() - 1,
                    )
                    raise DisconnectedGraphError(
                        f"no spanning tree exists for this graph: component rooted at "
                        f"{tree.root} has no arc to the remaining {registry.size() - 1} component(s)",
                        root=tree.root,
                    )

                other = registry.remove_tree_containing(arc.v1)
                if other is None:
                    other = registry.remove_tree_containing(arc.v2)
                if other is None:
                    logger.debug("Discarding internal arc %s", arc)
                    continue

                tree.merge(other)
                selected.append(arc)
                registry.append(tree)
                logger.debug("Selected arc %s, %d partial tree(s) left", arc, registry.size())
                if self.check_partition:
                    registry.check_partition(vertex_count)
                if on_merge is not None:
                    on_merge(arc, registry)
                break

        return selected

    def execute(self, graph: GraphLike) -> MSTResult:
        """计算图的最小生成树。

        参数:
            graph: :class:`Graph` 或邻接表映射

        返回:
            MSTResult: 生成树的边集合及总权重

        异常:
            DisconnectedGraphError: 如果图不是连通的
        """
        graph = as_graph(graph)
        logger.info("Computing partial tree MST for %d vertices", len(graph))
        registry = self.initialize(graph)
        result = MSTResult.from_arcs(self.run(registry))
        logger.info("MST has %d arcs with total weight %s", len(result), result.total_weight)
        return result


class KruskalMST(Algorithm):
    """基于 Kruskal 算法的最小生成树实现。

    该算法把所有边按权重排序后依次尝试合并端点所在集合，
    作为部分树算法的参照实现。如果图不连通，则抛出
    :class:`DisconnectedGraphError`。
    """

    def execute(self, graph: GraphLike) -> MSTResult:
        """计算图的最小生成树。

        参数:
            graph: :class:`Graph` 或邻接表映射

        返回:
            MSTResult: 生成树的边集合及总权重

        异常:
            DisconnectedGraphError: 如果图不是连通的
        """
        graph = as_graph(graph)
        # 按权重排序，权重相同时保持边的出现顺序
        arcs = sorted(graph.arcs(), key=lambda arc: arc.weight)

        parent = list(range(len(graph)))
        rank = [0] * len(graph)

        def find(x: int) -> int:
            while parent[x] != x:
                parent[x] = parent[parent[x]]
                x = parent[x]
            return x

        def union(x: int, y: int) -> bool:
            rx, ry = find(x), find(y)
            if rx == ry:
                return False
            if rank[rx] < rank[ry]:
                parent[rx] = ry
            elif rank[rx] > rank[ry]:
                parent[ry] = rx
            else:
                parent[ry] = rx
                rank[rx] += 1
            return True

        selected = [arc for arc in arcs if union(arc.v1.index, arc.v2.index)]

        if len(graph) and len(selected) != len(graph) - 1:
            anchor = find(0)
            stranded = next(graph.vertices[find(i)] for i in range(len(graph)) if find(i) != anchor)
            raise DisconnectedGraphError(
                f"no spanning tree exists for this graph: component rooted at "
                f"{stranded} is not connected to {graph.vertices[anchor]}",
                root=stranded,
            )

        return MSTResult.from_arcs(selected)
