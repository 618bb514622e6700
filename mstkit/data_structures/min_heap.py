"""Binary min-heap used as the candidate-edge queue of a partial tree."""
from __future__ import annotations

import heapq
from itertools import count
from operator import attrgetter
from typing import Any, Callable, Generic, Iterable, Iterator, List, Optional, Tuple, TypeVar

T = TypeVar("T")

_by_weight = attrgetter("weight")


class MinHeap(Generic[T]):
    """基于 ``heapq`` 的二叉最小堆。

    元素按 ``key`` 排序，默认取元素的 ``weight`` 属性。
    键相同的元素按插入顺序出堆，因此同一个堆实例的出堆顺序是确定的。

    时间复杂度:
        - insert: O(log n)
        - delete_min: O(log n)
        - merge: O(n + m)
    """

    def __init__(self, items: Iterable[T] = (), key: Callable[[T], Any] = _by_weight) -> None:
        self._key = key
        self._counter = count()
        self._entries: List[Tuple[Any, int, T]] = [
            (key(item), next(self._counter), item) for item in items
        ]
        heapq.heapify(self._entries)

    def insert(self, item: T) -> None:
        """插入一个元素。"""
        heapq.heappush(self._entries, (self._key(item), next(self._counter), item))

    def delete_min(self) -> Optional[T]:
        """移除并返回最小元素。

        堆为空时返回 ``None``：这是候选边耗尽的正常信号，而不是错误。
        """
        if not self._entries:
            return None
        return heapq.heappop(self._entries)[2]

    def peek_min(self) -> Optional[T]:
        """返回最小元素但不移除，堆为空时返回 ``None``。"""
        return self._entries[0][2] if self._entries else None

    def merge(self, other: "MinHeap[T]") -> None:
        """将 ``other`` 的全部元素转移到本堆，``other`` 随后为空。"""
        if other is self:
            return
        for _, _, item in sorted(other._entries):
            self._entries.append((self._key(item), next(self._counter), item))
        other._entries.clear()
        heapq.heapify(self._entries)

    def is_empty(self) -> bool:
        return not self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[T]:
        # 按堆数组顺序，不保证有序
        return (item for _, _, item in self._entries)

    def __repr__(self) -> str:
        return f"MinHeap(size={len(self._entries)})"
