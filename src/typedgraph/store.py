"""Graph store facade.

GraphStore composes the NodeRegistry and EdgeIndex behind one handle and one
reader/writer lock. It is the only supported entry point for mutation and
lookup:
- readers (get_node, has_node, edges_from/edges_to, streams) run concurrently
- writers (add_node, del_node, add_edge, remove_edge) run exclusively

Stores are plain objects passed to whatever needs them. get_default_store()
provides a lazily created process-wide instance for callers that want one.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from functools import lru_cache
from typing import Any

from typedgraph.config import GraphConfig
from typedgraph.index import EdgeIndex, EdgeStream, EdgeVisitor
from typedgraph.locks import ReadWriteLock
from typedgraph.registry import NodeRegistry
from typedgraph.types import Edge, Node, TypedID

logger = logging.getLogger(__name__)


class GraphStore:
    """In-memory typed property graph with referential integrity.

    Every stored edge's endpoints exist: add_edge rejects missing endpoints
    and del_node removes all incident edges in the same critical section.

    Visitors passed to edges_from/edges_to run on the caller's thread with
    the read lock held. Writing to the store from a visitor raises
    ReentrantWriteError.

    Nodes and edges added here have their attributes guarded by the store's
    lock, so an AttributeStore.range visitor may read the graph too.
    """

    def __init__(self, config: GraphConfig | None = None) -> None:
        self.config = config or GraphConfig()
        self._lock = ReadWriteLock()
        self._nodes = NodeRegistry()
        self._edges = EdgeIndex(self._nodes)
        self._nodes.on_remove(self._edges.remove_edges_incident)

    @contextmanager
    def batch(self) -> Iterator[None]:
        """Hold the write lock across several operations.

        Provides isolation, NOT rollback: other threads observe none or all
        of the changes, but a failure mid-batch keeps earlier changes.
        """
        with self._lock.write_locked():
            yield

    # -- Nodes --

    def add_node(self, node: Node) -> Node:
        """Insert node or merge its attributes into the existing node."""
        node.attributes.share_lock(self._lock)
        with self._lock.write_locked():
            return self._nodes.add_node(node)

    def create_node(
        self,
        node_type: str,
        node_id: str | None = None,
        attributes: Mapping[str, Any] | None = None,
    ) -> Node:
        """Build and upsert a node, generating an id when none is given."""
        node = Node.create(
            node_type, node_id, attributes, id_prefix=self.config.node_id_prefix
        )
        return self.add_node(node)

    def get_node(self, node_id: TypedID) -> Node | None:
        with self._lock.read_locked():
            return self._nodes.get_node(node_id)

    def has_node(self, node_id: TypedID) -> bool:
        with self._lock.read_locked():
            return self._nodes.has_node(node_id)

    def ensure_node(self, node_id: TypedID) -> Node:
        """Upsert-on-access: return the node, creating an empty one if absent."""
        with self._lock.read_locked():
            node = self._nodes.get_node(node_id)
        if node is not None:
            return node
        with self._lock.write_locked():
            # Another writer may have created it between the two locks
            node = self._nodes.get_node(node_id)
            if node is None:
                node = Node(node_id)
                node.attributes.share_lock(self._lock)
                node = self._nodes.add_node(node)
                logger.debug("Materialized node %s on access", node_id)
            return node

    def patch_node(self, node_id: TypedID, data: Mapping[str, Any]) -> Node:
        """Merge data into a node's attributes, materializing it if absent."""
        with self._lock.write_locked():
            node = self.ensure_node(node_id)
            node.attributes.set_all(data)
            return node

    def del_node(self, node_id: TypedID) -> bool:
        """Remove a node and every edge incident to it.

        Idempotent: deleting an unknown node returns False.
        """
        with self._lock.write_locked():
            return self._nodes.del_node(node_id)

    def nodes(self, node_type: str | None = None) -> list[Node]:
        with self._lock.read_locked():
            return self._nodes.nodes(node_type)

    def node_count(self) -> int:
        with self._lock.read_locked():
            return len(self._nodes)

    # -- Edges --

    def add_edge(self, edge: Edge) -> Edge:
        """Add a directed edge between two existing nodes.

        Raises:
            EndpointNotFound: If either endpoint is not in the store.
        """
        edge.attributes.share_lock(self._lock)
        with self._lock.write_locked():
            return self._edges.add_edge(edge)

    def get_edge(self, edge_id: TypedID) -> Edge | None:
        with self._lock.read_locked():
            return self._edges.get_edge(edge_id)

    def remove_edge(self, edge_id: TypedID) -> bool:
        with self._lock.write_locked():
            removed = self._edges.remove_edge(edge_id)
        if removed is not None:
            logger.debug("Removed edge %s", edge_id)
        return removed is not None

    def find_edge(
        self, source: TypedID, target: TypedID, edge_type: str
    ) -> Edge | None:
        with self._lock.read_locked():
            return self._edges.find_edge(source, target, edge_type)

    def edges_from(
        self, edge_type: str, source: TypedID, visitor: EdgeVisitor
    ) -> int:
        """Visit edges of edge_type leaving source until visitor returns False.

        Returns:
            Number of edges visited.
        """
        with self._lock.read_locked():
            return self._edges.edges_from(edge_type, source, visitor)

    def edges_to(self, edge_type: str, target: TypedID, visitor: EdgeVisitor) -> int:
        """Visit edges of edge_type arriving at target until visitor returns False."""
        with self._lock.read_locked():
            return self._edges.edges_to(edge_type, target, visitor)

    def outgoing(self, source: TypedID, edge_type: str | None = None) -> list[Edge]:
        """Snapshot of outgoing edges, optionally filtered by type."""
        with self._lock.read_locked():
            return self._edges.outgoing(source, edge_type)

    def incoming(self, target: TypedID, edge_type: str | None = None) -> list[Edge]:
        """Snapshot of incoming edges, optionally filtered by type."""
        with self._lock.read_locked():
            return self._edges.incoming(target, edge_type)

    def stream_from(self, edge_type: str, source: TypedID) -> EdgeStream:
        return EdgeStream(self._edges, self._lock, "outgoing", edge_type, source)

    def stream_to(self, edge_type: str, target: TypedID) -> EdgeStream:
        return EdgeStream(self._edges, self._lock, "incoming", edge_type, target)

    def degree(self, node_id: TypedID) -> int:
        with self._lock.read_locked():
            return self._edges.degree(node_id)

    def edge_count(self) -> int:
        with self._lock.read_locked():
            return len(self._edges)

    def edge_counts(self) -> dict[str, int]:
        with self._lock.read_locked():
            return self._edges.edge_counts()

    def clear(self) -> None:
        """Remove every node and edge."""
        with self._lock.write_locked():
            self._edges.clear()
            self._nodes.clear()


@lru_cache(maxsize=1)
def get_default_store() -> GraphStore:
    """Get the lazily created process-wide store."""
    from typedgraph.config import load_config

    return GraphStore(load_config())


def reset_default_store() -> None:
    """Drop the process-wide store so the next call creates a fresh one."""
    get_default_store.cache_clear()
