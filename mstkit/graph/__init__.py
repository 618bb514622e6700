from .loader import load_graph, parse_graph
from .model import Arc, Graph, Neighbor, Vertex

__all__ = ["Arc", "Graph", "Neighbor", "Vertex", "load_graph", "parse_graph"]
