"""Shared test fixtures and factories."""

from collections.abc import Iterator

import pytest

from typedgraph.config import GraphConfig
from typedgraph.store import GraphStore, reset_default_store
from typedgraph.types import Node, TypedID


def _make_user(user_id: str, **attributes) -> Node:
    return Node(TypedID.of("user", user_id), attributes)


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Keep env config and the process-wide store out of every test."""
    monkeypatch.delenv("TYPEDGRAPH_CONFIG", raising=False)
    monkeypatch.delenv("TYPEDGRAPH_LOG_LEVEL", raising=False)
    reset_default_store()
    yield
    reset_default_store()


@pytest.fixture
def store() -> GraphStore:
    return GraphStore(GraphConfig())


@pytest.fixture
def alice(store: GraphStore) -> Node:
    return store.add_node(_make_user("1", name="Alice"))


@pytest.fixture
def bob(store: GraphStore) -> Node:
    return store.add_node(_make_user("2", name="Bob"))
