"""Union-find parent links stored as an index array."""
from __future__ import annotations

from typing import List


class ParentForest:
    """并查集的父指针数组。

    ``parent[i]`` 为顶点 ``i`` 的父顶点下标，根满足 ``parent[i] == i``。
    不做路径压缩，也不按秩合并：查询的代价为链的深度。
    """

    def __init__(self, size: int) -> None:
        self.parent: List[int] = list(range(size))

    def find(self, index: int) -> int:
        """沿父指针走到根并返回根的下标。"""
        parent = self.parent
        while parent[index] != index:
            index = parent[index]
        return index

    def link(self, child_root: int, parent_root: int) -> None:
        """把根 ``child_root`` 挂到根 ``parent_root`` 之下。

        异常:
            ValueError: 任一参数不是根
        """
        if self.parent[child_root] != child_root or self.parent[parent_root] != parent_root:
            raise ValueError(f"link expects two roots, got {child_root} and {parent_root}")
        if child_root != parent_root:
            self.parent[child_root] = parent_root

    def is_root(self, index: int) -> bool:
        return self.parent[index] == index

    def depth(self, index: int) -> int:
        """顶点到其根的链长度。"""
        steps = 0
        parent = self.parent
        while parent[index] != index:
            index = parent[index]
            steps += 1
        return steps

    def __len__(self) -> int:
        return len(self.parent)
