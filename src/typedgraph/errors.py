"""Error types raised by the graph store.

Typed attribute getters never raise; only structural failures (missing
endpoints, missing targets, failed edge construction) surface here.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from typedgraph.types import TypedID


class GraphError(Exception):
    """Base class for graph store errors."""


class EndpointNotFound(GraphError):
    """An edge references a source or target node that is not registered."""

    def __init__(self, node_id: TypedID, role: str) -> None:
        self.node_id = node_id
        self.role = role
        super().__init__(f"edge {role} {node_id} does not exist")


class NodeNotFound(GraphError):
    """A connection target is not present in the store."""

    def __init__(self, node_id: TypedID) -> None:
        self.node_id = node_id
        super().__init__(f"node {node_id} does not exist")


class EdgeCreationFailure(GraphError):
    """Building or storing an edge failed for a reason other than a missing node."""


class ReentrantWriteError(GraphError, RuntimeError):
    """A thread holding a read lock asked for the write lock.

    Raised instead of deadlocking, e.g. when a traversal visitor tries to
    mutate the store it is walking.
    """
