"""
errors.py — Graph Errors
========================
Everything the graph layer (and the engine, for bad ids) can raise.

All of them subclass ValueError so a caller that only cares about
"bad input" can catch one thing.
"""


class GraphError(ValueError):
    """Base class for graph-related input errors."""


class MalformedGraphError(GraphError):
    """Raised at construction time when nodes / edges don't add up."""


class UnknownNodeError(GraphError):
    """Raised when a node id is not part of the graph."""

    def __init__(self, node_id: str, role: str = "node"):
        self.node_id = node_id
        self.role    = role
        super().__init__(f"Unknown {role} node: '{node_id}'")
