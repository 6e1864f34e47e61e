"""
Endpoint registry for storing and matching snapshot elements by identity.
"""

import logging
from typing import Iterator, Optional

from changelog_hub.models.snapshot import Endpoint, SchemaType, Snapshot

logger = logging.getLogger(__name__)


class EndpointRegistry:
    """
    Identity-keyed index of a snapshot's endpoints and schema types.

    Insertion order is preserved. When two elements share an identity the
    first one wins and the later one is dropped.
    """

    def __init__(self) -> None:
        """Initialize an empty registry."""
        self._endpoints: dict[str, Endpoint] = {}
        self._types: dict[str, SchemaType] = {}
        self.duplicates = 0

    @classmethod
    def from_snapshot(cls, snapshot: Optional[Snapshot]) -> "EndpointRegistry":
        """
        Build a registry for a snapshot.

        Args:
            snapshot: The snapshot to index, or None for an empty registry.

        Returns:
            The populated registry.
        """
        registry = cls()
        if snapshot is None:
            return registry
        registry.register_many(snapshot.endpoints)
        for schema_type in snapshot.types:
            registry.register_type(schema_type)
        return registry

    @staticmethod
    def identity_of(endpoint: Endpoint, index: int) -> str:
        """Identity of an endpoint, falling back to its position."""
        return endpoint.identity or f"endpoint[{index}]"

    def register(self, endpoint: Endpoint, index: Optional[int] = None) -> str:
        """
        Register an endpoint in the registry.

        Args:
            endpoint: The endpoint to register.
            index: Position in the snapshot, used for the synthetic identity.

        Returns:
            The identity the endpoint was registered (or dropped) under.
        """
        if index is None:
            index = len(self._endpoints) + self.duplicates
        key = self.identity_of(endpoint, index)

        if key in self._endpoints:
            self.duplicates += 1
            logger.debug("Dropping duplicate endpoint identity %r at index %d", key, index)
            return key

        self._endpoints[key] = endpoint
        return key

    def register_many(self, endpoints: list[Endpoint]) -> None:
        """
        Register multiple endpoints.

        Args:
            endpoints: List of endpoints to register, in snapshot order.
        """
        for index, endpoint in enumerate(endpoints):
            self.register(endpoint, index)

    def register_type(self, schema_type: SchemaType) -> None:
        """Register a schema type by name; first definition wins."""
        if schema_type.name in self._types:
            self.duplicates += 1
            logger.debug("Dropping duplicate schema type %r", schema_type.name)
            return
        self._types[schema_type.name] = schema_type

    def get(self, identity: str) -> Optional[Endpoint]:
        """Get an endpoint by identity."""
        return self._endpoints.get(identity)

    def get_type(self, name: str) -> Optional[SchemaType]:
        """Get a schema type by name."""
        return self._types.get(name)

    def items(self) -> list[tuple[str, Endpoint]]:
        """(identity, endpoint) pairs in registration order."""
        return list(self._endpoints.items())

    def type_items(self) -> list[tuple[str, SchemaType]]:
        """(name, schema type) pairs in registration order."""
        return list(self._types.items())

    def __len__(self) -> int:
        """Return the number of registered endpoints."""
        return len(self._endpoints)

    def __iter__(self) -> Iterator[Endpoint]:
        """Iterate over all endpoints."""
        return iter(self._endpoints.values())

    def __contains__(self, identity: object) -> bool:
        """Check if an identity is registered."""
        return identity in self._endpoints
