"""Configuration models using Pydantic."""

from pydantic import BaseModel


class ConfigError(Exception):
    """Configuration error."""

    pass


class GraphConfig(BaseModel):
    """Configuration for a GraphStore.

    atomic_mutual controls mutual connections: when True, a failure adding
    the reverse edge removes the forward edge before the error propagates.
    When False, the forward edge is kept.
    """

    atomic_mutual: bool = True
    # Prefixes for generated ids (edges default to "e-<hex>")
    edge_id_prefix: str = "e-"
    node_id_prefix: str = ""
