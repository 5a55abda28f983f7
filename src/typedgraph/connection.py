"""Connection protocol: create one or two edges under a named relationship.

A mutual connection (friendship) is two directed edges, one per direction,
sharing the relationship type with distinct generated ids. A non-mutual one
(following) is a single edge.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from typedgraph.errors import EdgeCreationFailure, GraphError, NodeNotFound
from typedgraph.types import Edge, TypedID

if TYPE_CHECKING:
    from typedgraph.store import GraphStore

logger = logging.getLogger(__name__)


def _build_edge(
    store: GraphStore,
    relationship: str,
    source: TypedID,
    target: TypedID,
    attributes: Mapping[str, Any] | None,
) -> Edge:
    try:
        return Edge.create(
            relationship,
            source,
            target,
            attributes,
            id_prefix=store.config.edge_id_prefix,
        )
    except Exception as e:
        raise EdgeCreationFailure(
            f"failed to build {relationship!r} edge {source} -> {target}"
        ) from e


def _store_edge(store: GraphStore, edge: Edge) -> Edge:
    try:
        return store.add_edge(edge)
    except GraphError:
        raise
    except Exception as e:
        raise EdgeCreationFailure(f"failed to store edge {edge.id}") from e


def connect(
    store: GraphStore,
    source: TypedID,
    target: TypedID,
    relationship: str,
    *,
    mutual: bool = False,
    attributes: Mapping[str, Any] | None = None,
) -> Edge:
    """Connect source to target with a relationship edge.

    The target must already exist. The source is materialized on access if
    absent. The whole protocol runs under the store's write lock.

    With ``store.config.atomic_mutual`` (the default), a failure adding the
    reverse edge of a mutual connection removes the forward edge before the
    error propagates.

    Args:
        store: Store to connect in.
        source: Edge origin.
        target: Edge destination; must exist.
        relationship: Edge type.
        mutual: Also add a target -> source edge.
        attributes: Attributes copied onto every created edge.

    Returns:
        The source -> target edge.

    Raises:
        NodeNotFound: If target is not in the store. Nothing is created.
        EdgeCreationFailure: If an edge could not be built or stored.
    """
    with store.batch():
        if not store.has_node(target):
            raise NodeNotFound(target)

        forward = _build_edge(store, relationship, source, target, attributes)
        reverse = (
            _build_edge(store, relationship, target, source, attributes)
            if mutual
            else None
        )

        store.ensure_node(source)
        _store_edge(store, forward)
        if reverse is None:
            return forward

        try:
            _store_edge(store, reverse)
        except GraphError:
            if store.config.atomic_mutual:
                store.remove_edge(forward.id)
                logger.warning(
                    "Rolled back %s edge %s after reverse edge failed",
                    relationship,
                    forward.id,
                )
            raise

        logger.debug("Connected %s <-%s-> %s", source, relationship, target)
        return forward
