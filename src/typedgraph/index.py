"""Adjacency index over typed edges.

Edges are kept in three views:
- the edge registry: edge id -> Edge
- outgoing: source -> edge type -> {edge id: Edge}
- incoming: target -> edge type -> {edge id: Edge}

Buckets are insertion-ordered dicts, so traversal follows insertion order and
removing one edge is O(1). Removing every edge incident to a node touches
only that node's own buckets plus one bucket per neighbor.

Not thread-safe on its own. GraphStore serializes access; use it instead.
"""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Callable, Iterator
from typing import TYPE_CHECKING, Literal

from typedgraph.errors import EndpointNotFound
from typedgraph.types import Edge, TypedID

if TYPE_CHECKING:
    from typedgraph.locks import ReadWriteLock
    from typedgraph.registry import NodeRegistry

logger = logging.getLogger(__name__)

Direction = Literal["outgoing", "incoming"]
EdgeVisitor = Callable[[Edge], bool | None]

# anchor node -> edge type -> edge id -> edge
_AdjacencyView = dict[TypedID, dict[str, dict[TypedID, Edge]]]


def _link(view: _AdjacencyView, anchor: TypedID, edge: Edge) -> None:
    view.setdefault(anchor, {}).setdefault(edge.type, {})[edge.id] = edge


def _unlink(view: _AdjacencyView, anchor: TypedID, edge: Edge) -> None:
    by_type = view.get(anchor)
    if not by_type:
        return
    bucket = by_type.get(edge.type)
    if bucket is None:
        return
    bucket.pop(edge.id, None)
    # Drop empty entries so deleted nodes leave nothing behind
    if not bucket:
        del by_type[edge.type]
    if not by_type:
        del view[anchor]


class EdgeIndex:
    """Forward and reverse adjacency lists keyed by edge type."""

    def __init__(self, nodes: NodeRegistry) -> None:
        self._nodes = nodes
        self._edges: dict[TypedID, Edge] = {}
        self._outgoing: _AdjacencyView = {}
        self._incoming: _AdjacencyView = {}

    # -- Mutation --

    def add_edge(self, edge: Edge) -> Edge:
        """Add edge to both adjacency views.

        If an edge with the same id already exists, its old adjacency entries
        are removed first so the index never holds duplicates.

        Raises:
            EndpointNotFound: If the source or target node is not registered.
        """
        if not self._nodes.has_node(edge.source):
            raise EndpointNotFound(edge.source, "source")
        if not self._nodes.has_node(edge.target):
            raise EndpointNotFound(edge.target, "target")

        old = self._edges.get(edge.id)
        if old is not None:
            self._remove_from_views(old)

        self._edges[edge.id] = edge
        _link(self._outgoing, edge.source, edge)
        _link(self._incoming, edge.target, edge)
        logger.debug("Added edge %s: %s -> %s", edge.id, edge.source, edge.target)
        return edge

    def _remove_from_views(self, edge: Edge) -> None:
        _unlink(self._outgoing, edge.source, edge)
        _unlink(self._incoming, edge.target, edge)

    def remove_edge(self, edge_id: TypedID) -> Edge | None:
        """Remove an edge from every view. Returns the removed edge, if any."""
        edge = self._edges.pop(edge_id, None)
        if edge is None:
            return None
        self._remove_from_views(edge)
        return edge

    def remove_edges_incident(self, node_id: TypedID) -> list[Edge]:
        """Remove every edge where node_id is the source or the target."""
        doomed: dict[TypedID, Edge] = {}
        for view in (self._outgoing, self._incoming):
            for bucket in view.get(node_id, {}).values():
                doomed.update(bucket)

        for edge_id in doomed:
            self.remove_edge(edge_id)

        if doomed:
            logger.debug("Removed %d edges incident to %s", len(doomed), node_id)
        return list(doomed.values())

    def clear(self) -> None:
        self._edges.clear()
        self._outgoing.clear()
        self._incoming.clear()

    # -- Lookup --

    def _view(self, direction: Direction) -> _AdjacencyView:
        return self._outgoing if direction == "outgoing" else self._incoming

    def walk(
        self,
        direction: Direction,
        edge_type: str,
        anchor: TypedID,
        visitor: EdgeVisitor,
    ) -> int:
        """Visit matching edges in insertion order until visitor returns False.

        The visitor must not mutate the index while walking.

        Returns:
            Number of edges visited.
        """
        bucket = self._view(direction).get(anchor, {}).get(edge_type)
        if not bucket:
            return 0
        visited = 0
        for edge in bucket.values():
            visited += 1
            if visitor(edge) is False:
                break
        return visited

    def edges_from(
        self, edge_type: str, source: TypedID, visitor: EdgeVisitor
    ) -> int:
        return self.walk("outgoing", edge_type, source, visitor)

    def edges_to(self, edge_type: str, target: TypedID, visitor: EdgeVisitor) -> int:
        return self.walk("incoming", edge_type, target, visitor)

    def collect(
        self,
        direction: Direction,
        anchor: TypedID,
        edge_type: str | None = None,
    ) -> list[Edge]:
        """Snapshot matching edges; with no edge_type, all types grouped by type."""
        by_type = self._view(direction).get(anchor, {})
        if edge_type is not None:
            return list(by_type.get(edge_type, {}).values())
        return [edge for bucket in by_type.values() for edge in bucket.values()]

    def outgoing(self, source: TypedID, edge_type: str | None = None) -> list[Edge]:
        return self.collect("outgoing", source, edge_type)

    def incoming(self, target: TypedID, edge_type: str | None = None) -> list[Edge]:
        return self.collect("incoming", target, edge_type)

    def get_edge(self, edge_id: TypedID) -> Edge | None:
        return self._edges.get(edge_id)

    def find_edge(
        self, source: TypedID, target: TypedID, edge_type: str
    ) -> Edge | None:
        """Find the first edge of edge_type from source to target."""
        for edge in self._outgoing.get(source, {}).get(edge_type, {}).values():
            if edge.target == target:
                return edge
        return None

    def degree(self, node_id: TypedID) -> int:
        total = 0
        for view in (self._outgoing, self._incoming):
            total += sum(len(bucket) for bucket in view.get(node_id, {}).values())
        return total

    def edge_counts(self) -> dict[str, int]:
        """Return number of edges per edge type."""
        return dict(Counter(edge.type for edge in self._edges.values()))

    def __len__(self) -> int:
        return len(self._edges)

    def __contains__(self, edge_id: object) -> bool:
        return edge_id in self._edges


class EdgeStream:
    """Restartable, cancellable view over the edges of one adjacency lookup.

    Iterating takes a fresh snapshot under the read lock, so callers may
    mutate the store while consuming it. ``visit`` walks the live view with
    the read lock held and stops when the visitor returns False.
    """

    def __init__(
        self,
        index: EdgeIndex,
        lock: ReadWriteLock,
        direction: Direction,
        edge_type: str,
        anchor: TypedID,
    ) -> None:
        self._index = index
        self._lock = lock
        self.direction = direction
        self.edge_type = edge_type
        self.anchor = anchor

    def __iter__(self) -> Iterator[Edge]:
        with self._lock.read_locked():
            snapshot = self._index.collect(self.direction, self.anchor, self.edge_type)
        return iter(snapshot)

    def visit(self, visitor: EdgeVisitor) -> int:
        with self._lock.read_locked():
            return self._index.walk(
                self.direction, self.edge_type, self.anchor, visitor
            )

    def first(self) -> Edge | None:
        found: list[Edge] = []

        def _take(edge: Edge) -> bool:
            found.append(edge)
            return False

        self.visit(_take)
        return found[0] if found else None

    def __repr__(self) -> str:
        return (
            f"EdgeStream({self.direction}, {self.edge_type!r}, {self.anchor})"
        )
