"""Circular registry of the partial trees that have not been merged yet."""
from __future__ import annotations

from typing import Iterator, List, Optional

from ..errors import EmptyCollectionError, InvariantViolationError
from ..graph.model import Vertex
from .partial_tree import PartialTree

NIL = -1


class PartialTreeList:
    """存放部分树的循环双向链表。

    链表节点以槽位下标表示：``_trees[i]`` 为节点 ``i`` 持有的部分树，
    ``_next[i]``/``_prev[i]`` 为相邻节点的下标，``NIL`` 表示空链接。
    ``_rear`` 指向逻辑队尾，``_next[_rear]`` 即队头。被移除节点的槽位
    进入空闲列表供后续 ``append`` 复用。

    主要操作:
        - append: 在队尾追加，O(1)
        - remove_front: 移除队头，O(1)
        - remove_tree_containing: 按顶点查找并摘除，O(n)
        - size: O(1)

    迭代从队头开始、按环序产生当前的部分树，迭代期间修改链表的结果未定义。
    """

    def __init__(self) -> None:
        self._trees: List[Optional[PartialTree]] = []
        self._next: List[int] = []
        self._prev: List[int] = []
        self._free: List[int] = []
        self._rear = NIL
        self._size = 0

    def _allocate(self, tree: PartialTree) -> int:
        if self._free:
            slot = self._free.pop()
            self._trees[slot] = tree
        else:
            slot = len(self._trees)
            self._trees.append(tree)
            self._next.append(NIL)
            self._prev.append(NIL)
        return slot

    def append(self, tree: PartialTree) -> None:
        """把部分树追加到队尾。

        参数:
            tree: 要追加的部分树
        """
        slot = self._allocate(tree)
        if self._rear == NIL:
            self._next[slot] = slot
            self._prev[slot] = slot
        else:
            head = self._next[self._rear]
            self._next[slot] = head
            self._prev[slot] = self._rear
            self._next[self._rear] = slot
            self._prev[head] = slot
        self._rear = slot
        self._size += 1

    def remove_front(self) -> PartialTree:
        """移除并返回队头的部分树。

        异常:
            EmptyCollectionError: 链表为空
        """
        if self._rear == NIL:
            raise EmptyCollectionError("partial tree list is empty")
        return self._unlink(self._next[self._rear])

    def remove_tree_containing(self, vertex: Vertex) -> Optional[PartialTree]:
        """摘除并返回包含 ``vertex`` 的部分树。

        从队头开始最多扫描 ``size`` 个节点。没有匹配时返回 ``None``，
        驱动算法依赖这种廉价的未命中来识别内部边，因此不会抛出异常。
        """
        slot = self._next[self._rear] if self._rear != NIL else NIL
        for _ in range(self._size):
            tree = self._trees[slot]
            if tree is not None and tree.contains_vertex(vertex):
                return self._unlink(slot)
            slot = self._next[slot]
        return None

    def _unlink(self, slot: int) -> PartialTree:
        tree = self._trees[slot]
        assert tree is not None
        following = self._next[slot]
        if following == slot:
            # 唯一的节点
            self._rear = NIL
        else:
            preceding = self._prev[slot]
            # 两个节点时 preceding == following，幸存节点自环
            self._next[preceding] = following
            self._prev[following] = preceding
            if slot == self._rear:
                self._rear = preceding
        self._trees[slot] = None
        self._next[slot] = NIL
        self._prev[slot] = NIL
        self._free.append(slot)
        self._size -= 1
        return tree

    def peek_front(self) -> Optional[PartialTree]:
        """返回队头的部分树但不移除，链表为空时返回 ``None``。"""
        if self._rear == NIL:
            return None
        return self._trees[self._next[self._rear]]

    def peek_rear(self) -> Optional[PartialTree]:
        """返回队尾的部分树但不移除，链表为空时返回 ``None``。"""
        if self._rear == NIL:
            return None
        return self._trees[self._rear]

    def size(self) -> int:
        """部分树的数量。"""
        return self._size

    def __len__(self) -> int:
        return self._size

    def __iter__(self) -> Iterator[PartialTree]:
        remaining = self._size
        slot = self._next[self._rear] if remaining > 0 else NIL
        while remaining > 0:
            tree = self._trees[slot]
            assert tree is not None
            yield tree
            slot = self._next[slot]
            remaining -= 1

    def check_partition(self, vertex_count: int) -> None:
        """校验当前的部分树恰好划分了全部 ``vertex_count`` 个顶点。

        每个顶点沿父指针链解析到的根必须恰好是一棵已登记部分树的根。

        异常:
            InvariantViolationError: 某个顶点不属于任何部分树，
                或两棵部分树共用同一个根
        """
        trees = list(self)
        roots = {}
        for tree in trees:
            if tree.root.index in roots:
                raise InvariantViolationError(
                    f"vertex {tree.root} is the root of more than one partial tree"
                )
            if not tree.forest.is_root(tree.root.index):
                raise InvariantViolationError(f"partial tree root {tree.root} is not a root")
            roots[tree.root.index] = tree
        if vertex_count and not trees:
            raise InvariantViolationError("no partial trees registered")
        forest = trees[0].forest if trees else None
        for index in range(vertex_count):
            if forest is None or forest.find(index) not in roots:
                raise InvariantViolationError(f"vertex #{index} belongs to no partial tree")

    def __repr__(self) -> str:
        return f"PartialTreeList(size={self._size})"
