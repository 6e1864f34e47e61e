"""
Changelog generation.

Matches endpoints and schema types between two snapshots and turns the
differences into a severity-ordered changelog with a risk assessment.
"""

import logging
from datetime import datetime
from typing import Optional

from changelog_hub.engine import rules
from changelog_hub.engine.endpoint_comparator import EndpointComparator
from changelog_hub.engine.endpoint_registry import EndpointRegistry
from changelog_hub.engine.risk import assess_risk
from changelog_hub.engine.schema_comparator import SchemaComparator
from changelog_hub.models.change import Change, ChangeCategory, ChangeType
from changelog_hub.models.changelog import Changelog
from changelog_hub.models.snapshot import Snapshot

logger = logging.getLogger(__name__)

API_REMOVED = "API_REMOVED"


class ChangelogGenerator:
    """
    Generate changelogs from pairs of snapshots.

    Either snapshot may be None: a missing old snapshot means the API was
    created, a missing new snapshot means it was removed entirely.
    """

    def __init__(self) -> None:
        """Initialize the generator with its comparators."""
        self.endpoint_comparator = EndpointComparator()
        self.schema_comparator = SchemaComparator()

    def generate(
        self,
        old: Optional[Snapshot],
        new: Optional[Snapshot],
        generated_at: Optional[datetime] = None,
    ) -> Changelog:
        """
        Diff two snapshots.

        Args:
            old: The previous snapshot, or None.
            new: The current snapshot, or None.
            generated_at: Timestamp to stamp on the changelog.
                Defaults to now.

        Returns:
            The changelog, changes sorted by severity.
        """
        generated_at = generated_at or datetime.now()

        if old is None and new is None:
            logger.debug("Both snapshots absent, returning empty changelog")
            return Changelog(
                changes=[],
                risk_assessment=assess_risk([]),
                generated_at=generated_at,
            )

        api_name = (new or old).name  # type: ignore[union-attr]
        old_registry = EndpointRegistry.from_snapshot(old)
        new_registry = EndpointRegistry.from_snapshot(new)

        changes = self.compare_endpoints(old_registry, new_registry)
        changes.extend(self.compare_types(old_registry, new_registry))

        if new is None:
            changes.append(rules.make_change(
                ChangeType.REMOVED,
                ChangeCategory.ENDPOINT,
                rules.endpoint_removed(),
                "*",
                f"{API_REMOVED}: API '{api_name}' was removed entirely",
                old_value=old.version if old else None,
            ))

        ordered = rules.sort_by_severity(changes)
        logger.debug(
            "Diffed %s: %d changes (%d duplicate identities dropped)",
            api_name,
            len(ordered),
            old_registry.duplicates + new_registry.duplicates,
        )

        return Changelog(
            api_name=api_name,
            from_version=old.version if old else None,
            to_version=new.version if new else None,
            changes=ordered,
            risk_assessment=assess_risk(ordered),
            generated_at=generated_at,
        )

    def compare_endpoints(
        self,
        old_registry: EndpointRegistry,
        new_registry: EndpointRegistry,
    ) -> list[Change]:
        """Removed (old order), then added (new order), then modified (new order)."""
        changes: list[Change] = []

        for key, endpoint in old_registry.items():
            if key not in new_registry:
                changes.append(rules.make_change(
                    ChangeType.REMOVED,
                    ChangeCategory.ENDPOINT,
                    rules.endpoint_removed(),
                    key,
                    f"Removed endpoint {endpoint.display_name}",
                    old_value=key,
                    subject=endpoint.display_name,
                ))

        for key, endpoint in new_registry.items():
            if key not in old_registry:
                changes.append(rules.make_change(
                    ChangeType.ADDED,
                    ChangeCategory.ENDPOINT,
                    rules.endpoint_added(),
                    key,
                    f"Added endpoint {endpoint.display_name}",
                    new_value=key,
                    subject=endpoint.display_name,
                ))

        for key, new_endpoint in new_registry.items():
            old_endpoint = old_registry.get(key)
            if old_endpoint is not None:
                changes.extend(self.endpoint_comparator.compare(old_endpoint, new_endpoint, key))

        return changes

    def compare_types(
        self,
        old_registry: EndpointRegistry,
        new_registry: EndpointRegistry,
    ) -> list[Change]:
        """Same removed/added/modified order as endpoints."""
        changes: list[Change] = []

        for name, schema_type in old_registry.type_items():
            if new_registry.get_type(name) is None:
                changes.append(self.schema_comparator.type_removed(schema_type))

        for name, schema_type in new_registry.type_items():
            if old_registry.get_type(name) is None:
                changes.append(self.schema_comparator.type_added(schema_type))

        for name, new_type in new_registry.type_items():
            old_type = old_registry.get_type(name)
            if old_type is not None:
                changes.extend(self.schema_comparator.compare(old_type, new_type))

        return changes


def diff_snapshots(
    old: Optional[Snapshot],
    new: Optional[Snapshot],
    generated_at: Optional[datetime] = None,
) -> Changelog:
    """
    Diff two snapshots into a changelog.

    Args:
        old: The previous snapshot, or None if the API is new.
        new: The current snapshot, or None if the API was removed.
        generated_at: Timestamp to stamp on the changelog.

    Returns:
        The changelog with its risk assessment attached.
    """
    return ChangelogGenerator().generate(old, new, generated_at)
