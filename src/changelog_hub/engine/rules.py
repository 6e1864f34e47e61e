"""
Classification rules.

Severity, impact and migration policy shared by every comparator, so that
REST-shaped and schema-graph sources are classified consistently.
"""

from typing import Any, Optional

from changelog_hub.models.change import (
    BreakingChange,
    Change,
    ChangeCategory,
    ChangeType,
    Severity,
)
from changelog_hub.models.snapshot import Response


# Base impact by what happened to the element.
_REMOVED_ENDPOINT_IMPACT = 100
_REMOVED_IMPACT = 80
_MODIFIED_IMPACT = 85
_ADDED_IMPACT = 70
_DEFAULT_IMPACT = 50

# Lowest impact impact_score gives a breaking change (50 * 70%).
MIN_BREAKING_IMPACT = 35

# Percentage applied to the base impact per category.
CATEGORY_MULTIPLIERS: dict[ChangeCategory, int] = {
    ChangeCategory.ENDPOINT: 100,
    ChangeCategory.REQUEST_BODY: 90,
    ChangeCategory.TYPE: 85,
    ChangeCategory.PARAMETER: 80,
    ChangeCategory.FIELD: 80,
    ChangeCategory.ENUM_VALUE: 75,
    ChangeCategory.UNION_MEMBER: 75,
    ChangeCategory.RESPONSE: 70,
}


# ---------------------------------------------------------------------------
# Endpoint-level rules
# ---------------------------------------------------------------------------

def endpoint_added() -> Severity:
    return Severity.INFO


def endpoint_removed() -> Severity:
    return Severity.BREAKING


def deprecation_changed(was_deprecated: bool, is_deprecated: bool) -> Severity:
    """Deprecating is a warning; lifting a deprecation is informational."""
    if not was_deprecated and is_deprecated:
        return Severity.WARNING
    return Severity.INFO


def parameter_added(required: bool) -> Severity:
    return Severity.BREAKING if required else Severity.INFO


def parameter_removed(was_required: bool) -> Severity:
    return Severity.BREAKING if was_required else Severity.WARNING


def parameter_type_changed() -> Severity:
    return Severity.BREAKING


def parameter_location_changed() -> Severity:
    return Severity.BREAKING


def required_flag_changed(was_required: bool, is_required: bool) -> Severity:
    """Tightening (optional to required) breaks callers; loosening does not."""
    if not was_required and is_required:
        return Severity.BREAKING
    return Severity.INFO


def request_body_added(required: bool) -> Severity:
    return Severity.BREAKING if required else Severity.INFO


def request_body_removed() -> Severity:
    return Severity.DANGEROUS


def request_body_content_type_changed() -> Severity:
    return Severity.BREAKING


def request_body_schema_changed() -> Severity:
    return Severity.DANGEROUS


def response_added() -> Severity:
    return Severity.INFO


def response_removed(response: Response) -> Severity:
    """Losing a success response is dangerous; losing an error response is a warning."""
    if response.is_success:
        return Severity.DANGEROUS
    return Severity.WARNING


def response_schema_changed() -> Severity:
    return Severity.WARNING


def response_content_type_changed() -> Severity:
    return Severity.WARNING


# ---------------------------------------------------------------------------
# Schema-graph rules (GraphQL / Protobuf)
# ---------------------------------------------------------------------------

def type_added() -> Severity:
    return Severity.INFO


def type_removed() -> Severity:
    return Severity.BREAKING


def type_kind_changed() -> Severity:
    return Severity.BREAKING


def interface_added() -> Severity:
    return Severity.INFO


def interface_removed() -> Severity:
    return Severity.BREAKING


def field_added(input_type: bool, required: bool, has_default: bool) -> Severity:
    """A new field only breaks clients when they must now send it."""
    if input_type and required and not has_default:
        return Severity.BREAKING
    return Severity.INFO


def field_removed() -> Severity:
    return Severity.BREAKING


def field_type_changed() -> Severity:
    return Severity.BREAKING


def field_required_changed(input_type: bool, was_required: bool, is_required: bool) -> Severity:
    """
    Nullability changes break in opposite directions for inputs and outputs.

    Input fields break when they become required; output fields become
    dangerous when a previously guaranteed value may now be absent.
    """
    if input_type:
        return required_flag_changed(was_required, is_required)
    if was_required and not is_required:
        return Severity.DANGEROUS
    return Severity.INFO


def field_default_changed() -> Severity:
    return Severity.DANGEROUS


def enum_value_added() -> Severity:
    return Severity.INFO


def enum_value_removed() -> Severity:
    return Severity.BREAKING


def union_member_added() -> Severity:
    return Severity.INFO


def union_member_removed() -> Severity:
    return Severity.BREAKING


# ---------------------------------------------------------------------------
# Impact and migration
# ---------------------------------------------------------------------------

def impact_score(change: Change) -> int:
    """
    Estimate the consumer impact (0-100) of a change.

    For breaking changes the result always lies in [MIN_BREAKING_IMPACT, 100].
    """
    if change.type == ChangeType.REMOVED:
        base = _REMOVED_ENDPOINT_IMPACT if change.category == ChangeCategory.ENDPOINT else _REMOVED_IMPACT
    elif change.type == ChangeType.MODIFIED:
        base = _MODIFIED_IMPACT
    elif change.type == ChangeType.ADDED:
        base = _ADDED_IMPACT
    else:
        base = _DEFAULT_IMPACT

    multiplier = CATEGORY_MULTIPLIERS.get(change.category, 100)
    return max(0, min(100, base * multiplier // 100))


def migration_suggestion(change: Change, subject: Optional[str] = None) -> str:
    """Suggest what consumers must do to adapt to a breaking change."""
    name = subject or change.path

    if change.type == ChangeType.REMOVED:
        suggestions = {
            ChangeCategory.ENDPOINT: (
                "Update all API consumers to stop using the removed endpoint. "
                "Consider using an alternative endpoint if available."
            ),
            ChangeCategory.PARAMETER: f"Remove the parameter '{name}' from all API calls.",
            ChangeCategory.REQUEST_BODY: "Remove the request body from API calls to this endpoint.",
            ChangeCategory.RESPONSE: "Update response handling code to account for the removed response.",
            ChangeCategory.TYPE: f"Stop referencing type '{name}' in queries and generated clients.",
            ChangeCategory.FIELD: f"Stop selecting or sending the field '{name}'.",
            ChangeCategory.ENUM_VALUE: f"Stop sending or expecting the enum value '{name}'.",
            ChangeCategory.UNION_MEMBER: f"Remove handling of '{name}' from union type checks.",
        }
        return suggestions.get(change.category, "Update client code to handle the removal.")

    if change.type == ChangeType.ADDED:
        if change.category == ChangeCategory.PARAMETER:
            return f"Add the new required parameter '{name}' to all API calls."
        if change.category == ChangeCategory.REQUEST_BODY:
            return "Include the required request body in API calls to this endpoint."
        if change.category == ChangeCategory.FIELD:
            return f"Provide a value for the new required input field '{name}'."
        return "Update client code to provide the new required element."

    if change.type == ChangeType.MODIFIED:
        if change.path.endswith(".type"):
            return (
                f"Update the data type for '{name}' from "
                f"'{change.old_value}' to '{change.new_value}'."
            )
        if change.path.endswith(".required"):
            return f"'{name}' is now required. Ensure all API calls include it."
        if change.path.endswith(".location"):
            return f"Send '{name}' in the {change.new_value} instead of the {change.old_value}."
        if change.path.endswith(".contentType"):
            return f"Send request bodies as '{change.new_value}'."
        if change.category == ChangeCategory.TYPE:
            return f"Regenerate clients for '{name}' and adapt to its new kind."
        return "Review and update client code to match the new API specification."

    return "Review the change and update client code accordingly."


def make_change(
    change_type: ChangeType,
    category: ChangeCategory,
    severity: Severity,
    path: str,
    description: str,
    old_value: Optional[Any] = None,
    new_value: Optional[Any] = None,
    subject: Optional[str] = None,
) -> Change:
    """
    Build a change, promoting it to a BreakingChange when severity is BREAKING.

    Args:
        change_type: What happened to the element.
        category: Which kind of element changed.
        severity: Severity decided by one of the rules above.
        path: Locator of the element inside the snapshot.
        description: Human readable description.
        old_value: Previous value, if any.
        new_value: New value, if any.
        subject: Short element name used in migration suggestions.

    Returns:
        A Change, or a BreakingChange with impact score and migration hint.
    """
    change = Change(
        type=change_type,
        category=category,
        severity=severity,
        path=path,
        description=description,
        old_value=old_value,
        new_value=new_value,
    )
    if severity != Severity.BREAKING:
        return change

    return BreakingChange(
        **change.model_dump(),
        impact_score=impact_score(change),
        migration_suggestion=migration_suggestion(change, subject),
    )


def sort_by_severity(changes: list[Change]) -> list[Change]:
    """Stable sort: BREAKING first, insertion order kept within a severity."""
    return sorted(changes, key=lambda c: c.severity.rank)
