"""Node registry: TypedID -> Node with upsert semantics.

Not thread-safe on its own. GraphStore serializes access; use it instead.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from typedgraph.types import Node, TypedID

logger = logging.getLogger(__name__)

RemovalListener = Callable[[TypedID], object]


class NodeRegistry:
    """Mapping from identity to node, notifying listeners on removal."""

    def __init__(self) -> None:
        self._nodes: dict[TypedID, Node] = {}
        self._removal_listeners: list[RemovalListener] = []

    def on_remove(self, listener: RemovalListener) -> None:
        """Register a callback invoked after a node is deleted."""
        self._removal_listeners.append(listener)

    def add_node(self, node: Node) -> Node:
        """Insert node, or merge its attributes into the existing entry.

        Returns the stored node, which is the existing instance on upsert.
        """
        existing = self._nodes.get(node.id)
        if existing is None:
            self._nodes[node.id] = node
            logger.debug("Added node %s", node.id)
            return node
        if existing is not node:
            existing.attributes.set_all(node.attributes.to_dict())
            logger.debug("Merged attributes into node %s", node.id)
        return existing

    def get_node(self, node_id: TypedID) -> Node | None:
        return self._nodes.get(node_id)

    def has_node(self, node_id: TypedID) -> bool:
        return node_id in self._nodes

    def del_node(self, node_id: TypedID) -> bool:
        """Remove a node and notify removal listeners.

        Deleting an unknown node is a no-op.
        """
        if self._nodes.pop(node_id, None) is None:
            return False
        for listener in self._removal_listeners:
            listener(node_id)
        logger.debug("Deleted node %s", node_id)
        return True

    def nodes(self, node_type: str | None = None) -> list[Node]:
        if node_type is None:
            return list(self._nodes.values())
        return [n for n in self._nodes.values() if n.id.type == node_type]

    def clear(self) -> None:
        for node_id in list(self._nodes):
            self.del_node(node_id)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._nodes

    def __len__(self) -> int:
        return len(self._nodes)
