"""
Diff and classification engine for Changelog Hub.

This package contains modules for:
- Severity classification rules and impact scoring
- Identity-keyed snapshot indexing
- Endpoint and schema-type comparison
- Changelog generation and risk assessment
"""

from changelog_hub.engine.differ import ChangelogGenerator, diff_snapshots
from changelog_hub.engine.endpoint_comparator import EndpointComparator
from changelog_hub.engine.endpoint_registry import EndpointRegistry
from changelog_hub.engine.risk import assess_risk
from changelog_hub.engine.schema_comparator import SchemaComparator

__all__ = [
    "ChangelogGenerator",
    "EndpointComparator",
    "EndpointRegistry",
    "SchemaComparator",
    "assess_risk",
    "diff_snapshots",
]
