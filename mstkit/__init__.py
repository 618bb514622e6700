"""Minimum spanning trees by merging partial trees."""

from .errors import (
    DisconnectedGraphError,
    EmptyCollectionError,
    GraphFormatError,
    InvariantViolationError,
    MSTError,
)
from .graph.loader import load_graph, parse_graph
from .graph.model import Arc, Graph, Vertex
from .graph.mst import KruskalMST, MSTResult, PartialTreeMST

__all__ = [
    "Arc",
    "DisconnectedGraphError",
    "EmptyCollectionError",
    "Graph",
    "GraphFormatError",
    "InvariantViolationError",
    "KruskalMST",
    "MSTError",
    "MSTResult",
    "PartialTreeMST",
    "Vertex",
    "load_graph",
    "parse_graph",
]
