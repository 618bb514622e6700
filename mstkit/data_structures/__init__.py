from .min_heap import MinHeap
from .parent_forest import ParentForest
from .partial_tree import PartialTree
from .partial_tree_list import PartialTreeList

__all__ = ["MinHeap", "ParentForest", "PartialTree", "PartialTreeList"]
