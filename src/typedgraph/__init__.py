"""In-memory typed property graph.

Public API:
- GraphStore: Node registry + adjacency index behind one reader/writer lock
- connect: Create a (optionally mutual) relationship between two nodes
- get_default_store: Lazily created process-wide store

Types:
- TypedID: (type, id) identity for nodes and edges
- Node, Edge: Entities carrying an AttributeStore
- EdgeStream: Restartable, cancellable adjacency view

Internal:
- NodeRegistry, EdgeIndex: Unlocked building blocks (use GraphStore instead)
"""

from typedgraph.attributes import ID_KEY, TYPE_KEY, AttributeStore
from typedgraph.config import GraphConfig, load_config
from typedgraph.connection import connect
from typedgraph.errors import (
    EdgeCreationFailure,
    EndpointNotFound,
    GraphError,
    NodeNotFound,
    ReentrantWriteError,
)
from typedgraph.index import EdgeStream
from typedgraph.store import GraphStore, get_default_store, reset_default_store
from typedgraph.types import Edge, Node, TypedID

__all__ = [
    "ID_KEY",
    "TYPE_KEY",
    "AttributeStore",
    "Edge",
    "EdgeCreationFailure",
    "EdgeStream",
    "EndpointNotFound",
    "GraphConfig",
    "GraphError",
    "GraphStore",
    "Node",
    "NodeNotFound",
    "ReentrantWriteError",
    "TypedID",
    "connect",
    "get_default_store",
    "load_config",
    "reset_default_store",
]

__version__ = "0.1.0"
