"""
Change data models.

Models representing individual differences between two snapshots.
"""

import uuid
from datetime import datetime
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator


class ChangeType(str, Enum):
    """What happened to the element."""

    ADDED = "added"
    REMOVED = "removed"
    MODIFIED = "modified"
    DEPRECATED = "deprecated"


class ChangeCategory(str, Enum):
    """
    Which kind of element changed.

    REST-shaped sources use ENDPOINT through RESPONSE; schema-graph sources
    (GraphQL, Protobuf) use TYPE through UNION_MEMBER. Analytics treat all
    categories uniformly.
    """

    ENDPOINT = "endpoint"
    PARAMETER = "parameter"
    REQUEST_BODY = "request_body"
    RESPONSE = "response"
    TYPE = "type"
    FIELD = "field"
    ENUM_VALUE = "enum_value"
    UNION_MEMBER = "union_member"


class Severity(str, Enum):
    """Severity of a change, BREAKING being the most severe."""

    BREAKING = "breaking"
    DANGEROUS = "dangerous"
    WARNING = "warning"
    INFO = "info"

    @property
    def rank(self) -> int:
        """Sort key: lower is more severe."""
        return _SEVERITY_RANK[self]


_SEVERITY_RANK = {
    Severity.BREAKING: 0,
    Severity.DANGEROUS: 1,
    Severity.WARNING: 2,
    Severity.INFO: 3,
}


class Change(BaseModel):
    """A single typed, severity-tagged difference."""

    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    type: ChangeType = Field(description="What happened")
    category: ChangeCategory = Field(description="Which kind of element changed")
    severity: Severity = Field(description="How severe the change is")
    path: str = Field(description="Locator of the element inside the snapshot")
    description: str = Field(default="", description="Human readable description")
    old_value: Optional[Any] = Field(default=None)
    new_value: Optional[Any] = Field(default=None)
    detected_at: datetime = Field(default_factory=datetime.now)

    class Config:
        frozen = True

    @property
    def is_breaking(self) -> bool:
        """Check if this change is breaking."""
        return self.severity == Severity.BREAKING


class BreakingChange(Change):
    """A change that requires consumer code changes."""

    impact_score: int = Field(ge=0, le=100, description="Estimated consumer impact")
    migration_suggestion: Optional[str] = Field(default=None)

    @field_validator("severity")
    @classmethod
    def _must_be_breaking(cls, value: Severity) -> Severity:
        if value != Severity.BREAKING:
            raise ValueError(f"BreakingChange requires BREAKING severity, got {value.value}")
        return value
