"""
graph/
-----
Core data layer.  Public API:

    from graph import Graph, Node, Edge
    from graph import GraphError, MalformedGraphError, UnknownNodeError
"""

from graph.node   import Node
from graph.edge   import Edge
from graph.graph  import Graph
from graph.errors import GraphError, MalformedGraphError, UnknownNodeError

__all__ = [
    "Node",
    "Edge",
    "Graph",
    "GraphError",
    "MalformedGraphError",
    "UnknownNodeError",
]
