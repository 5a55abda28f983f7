"""Identity and entity types for the typed property graph."""

from __future__ import annotations

import uuid
from collections.abc import Mapping
from dataclasses import InitVar, dataclass, field
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from typedgraph.attributes import ID_KEY, TYPE_KEY, AttributeStore


def make_id(prefix: str = "") -> str:
    return f"{prefix}{uuid.uuid4().hex}"


class TypedID(BaseModel):
    """Immutable (type, id) identity shared by nodes and edges.

    Two entities with equal type and id are the same entity.
    """

    model_config = ConfigDict(frozen=True)

    type: str = Field(min_length=1)
    id: str = Field(min_length=1)

    @classmethod
    def of(cls, type: str, id: str) -> TypedID:
        return cls(type=type, id=id)

    @classmethod
    def new(cls, type: str, *, prefix: str = "") -> TypedID:
        """Create an identity with a freshly generated id."""
        return cls(type=type, id=make_id(prefix))

    def __str__(self) -> str:
        return f"{self.type}:{self.id}"


@dataclass(eq=False)
class Node:
    """A graph vertex: identity plus attributes.

    The attribute store is bound to the identity, so ``_type`` and ``_id``
    always reflect ``id``.
    """

    id: TypedID
    attributes: AttributeStore = field(init=False)
    initial: InitVar[Mapping[str, Any] | None] = None

    def __post_init__(self, initial: Mapping[str, Any] | None) -> None:
        self.attributes = AttributeStore(initial, identity=self.id)

    @classmethod
    def create(
        cls,
        node_type: str,
        node_id: str | None = None,
        attributes: Mapping[str, Any] | None = None,
        *,
        id_prefix: str = "",
    ) -> Node:
        tid = (
            TypedID.of(node_type, node_id)
            if node_id is not None
            else TypedID.new(node_type, prefix=id_prefix)
        )
        return cls(tid, attributes)

    @classmethod
    def from_attributes(cls, data: Mapping[str, Any], *, id_prefix: str = "") -> Node:
        """Build a node whose identity comes from the reserved keys of data.

        ``_type`` is required; a missing ``_id`` gets a generated one.
        """
        node_type = data.get(TYPE_KEY)
        if not isinstance(node_type, str) or not node_type:
            raise ValueError(f"attributes must carry a non-empty {TYPE_KEY!r}")
        node_id = data.get(ID_KEY)
        if node_id is not None and not isinstance(node_id, str):
            node_id = str(node_id)
        return cls.create(node_type, node_id, data, id_prefix=id_prefix)

    @property
    def type(self) -> str:
        return self.id.type


@dataclass(eq=False)
class Edge:
    """A directed, typed edge between two nodes.

    The edge's own identity type is the relationship name.
    """

    id: TypedID
    source: TypedID
    target: TypedID
    attributes: AttributeStore = field(init=False)
    initial: InitVar[Mapping[str, Any] | None] = None

    def __post_init__(self, initial: Mapping[str, Any] | None) -> None:
        self.attributes = AttributeStore(initial, identity=self.id)

    @classmethod
    def create(
        cls,
        edge_type: str,
        source: TypedID,
        target: TypedID,
        attributes: Mapping[str, Any] | None = None,
        *,
        edge_id: str | None = None,
        id_prefix: str = "e-",
    ) -> Edge:
        tid = (
            TypedID.of(edge_type, edge_id)
            if edge_id is not None
            else TypedID.new(edge_type, prefix=id_prefix)
        )
        return cls(tid, source, target, attributes)

    @property
    def type(self) -> str:
        return self.id.type

    def other(self, node_id: TypedID) -> TypedID:
        """Return the endpoint opposite node_id."""
        return self.target if node_id == self.source else self.source

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id.model_dump(),
            "source": self.source.model_dump(),
            "target": self.target.model_dump(),
            "attributes": self.attributes.to_dict(),
        }
