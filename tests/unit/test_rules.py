"""
Unit tests for the classification rules.
"""

import pytest

from changelog_hub.engine import rules
from changelog_hub.models import BreakingChange, Change, ChangeCategory, ChangeType, Response, Severity


def _change(change_type: ChangeType, category: ChangeCategory, path: str = "x") -> Change:
    return Change(type=change_type, category=category, severity=Severity.BREAKING, path=path)


class TestSeverityRules:
    """Tests for the per-situation severity rules."""

    def test_parameter_rules(self) -> None:
        """Test parameter additions, removals and flips."""
        assert rules.parameter_added(required=True) == Severity.BREAKING
        assert rules.parameter_added(required=False) == Severity.INFO
        assert rules.parameter_removed(was_required=True) == Severity.BREAKING
        assert rules.parameter_removed(was_required=False) == Severity.WARNING
        assert rules.parameter_type_changed() == Severity.BREAKING
        assert rules.required_flag_changed(False, True) == Severity.BREAKING
        assert rules.required_flag_changed(True, False) == Severity.INFO

    def test_response_rules(self) -> None:
        """Test that losing a success response is more severe."""
        assert rules.response_removed(Response(status_code="200")) == Severity.DANGEROUS
        assert rules.response_removed(Response(status_code="404")) == Severity.WARNING
        assert rules.response_schema_changed() == Severity.WARNING
        assert rules.response_added() == Severity.INFO

    def test_request_body_rules(self) -> None:
        """Test request body rules."""
        assert rules.request_body_added(required=True) == Severity.BREAKING
        assert rules.request_body_added(required=False) == Severity.INFO
        assert rules.request_body_removed() == Severity.DANGEROUS
        assert rules.request_body_content_type_changed() == Severity.BREAKING

    def test_deprecation_rules(self) -> None:
        """Test that deprecating warns and undeprecating informs."""
        assert rules.deprecation_changed(False, True) == Severity.WARNING
        assert rules.deprecation_changed(True, False) == Severity.INFO

    def test_field_added(self) -> None:
        """Test field additions on input and output types."""
        assert rules.field_added(input_type=False, required=True, has_default=False) == Severity.INFO
        assert rules.field_added(input_type=True, required=True, has_default=False) == Severity.BREAKING
        assert rules.field_added(input_type=True, required=True, has_default=True) == Severity.INFO
        assert rules.field_added(input_type=True, required=False, has_default=False) == Severity.INFO

    def test_field_required_changed(self) -> None:
        """Test nullability changes on input and output fields."""
        assert rules.field_required_changed(True, False, True) == Severity.BREAKING
        assert rules.field_required_changed(True, True, False) == Severity.INFO
        assert rules.field_required_changed(False, True, False) == Severity.DANGEROUS
        assert rules.field_required_changed(False, False, True) == Severity.INFO

    def test_schema_graph_rules(self) -> None:
        """Test enum, union and type rules."""
        assert rules.enum_value_removed() == Severity.BREAKING
        assert rules.enum_value_added() == Severity.INFO
        assert rules.union_member_added() == Severity.INFO
        assert rules.union_member_removed() == Severity.BREAKING
        assert rules.type_kind_changed() == Severity.BREAKING


class TestImpactScore:
    """Tests for impact scoring."""

    @pytest.mark.parametrize(
        "change_type,category,expected",
        [
            (ChangeType.REMOVED, ChangeCategory.ENDPOINT, 100),
            (ChangeType.REMOVED, ChangeCategory.PARAMETER, 64),
            (ChangeType.MODIFIED, ChangeCategory.PARAMETER, 68),
            (ChangeType.ADDED, ChangeCategory.PARAMETER, 56),
            (ChangeType.ADDED, ChangeCategory.REQUEST_BODY, 63),
            (ChangeType.REMOVED, ChangeCategory.ENUM_VALUE, 60),
            (ChangeType.DEPRECATED, ChangeCategory.RESPONSE, 35),
        ],
    )
    def test_impact_values(self, change_type: ChangeType, category: ChangeCategory, expected: int) -> None:
        """Test base times category multiplier."""
        assert rules.impact_score(_change(change_type, category)) == expected

    def test_impact_floor(self) -> None:
        """Test that every combination stays within [35, 100]."""
        for change_type in ChangeType:
            for category in ChangeCategory:
                score = rules.impact_score(_change(change_type, category))
                assert 35 <= score <= 100


class TestMakeChange:
    """Tests for change construction."""

    def test_breaking_severity_builds_breaking_change(self) -> None:
        """Test that BREAKING severity yields a BreakingChange with impact and hint."""
        change = rules.make_change(
            ChangeType.REMOVED,
            ChangeCategory.PARAMETER,
            Severity.BREAKING,
            "GET /users.parameters.q",
            "Removed required parameter 'q'",
            subject="q",
        )
        assert isinstance(change, BreakingChange)
        assert change.impact_score == 64
        assert change.migration_suggestion is not None
        assert "'q'" in change.migration_suggestion

    def test_other_severity_builds_plain_change(self) -> None:
        """Test that non-breaking changes are plain changes."""
        change = rules.make_change(
            ChangeType.ADDED,
            ChangeCategory.ENDPOINT,
            Severity.INFO,
            "GET /users",
            "Added endpoint",
        )
        assert not isinstance(change, BreakingChange)
        assert change.severity == Severity.INFO

    def test_type_change_suggestion_names_values(self) -> None:
        """Test that type-change hints mention old and new types."""
        change = rules.make_change(
            ChangeType.MODIFIED,
            ChangeCategory.PARAMETER,
            Severity.BREAKING,
            "GET /users.parameters.limit.type",
            "Type changed",
            old_value="integer",
            new_value="string",
            subject="limit",
        )
        assert isinstance(change, BreakingChange)
        assert "integer" in change.migration_suggestion
        assert "string" in change.migration_suggestion


class TestSortBySeverity:
    """Tests for severity ordering."""

    def test_stable_within_band(self) -> None:
        """Test that insertion order is kept within a severity."""
        changes = [
            Change(type=ChangeType.ADDED, category=ChangeCategory.ENDPOINT, severity=Severity.INFO, path="i1"),
            Change(type=ChangeType.REMOVED, category=ChangeCategory.RESPONSE, severity=Severity.WARNING, path="w1"),
            Change(type=ChangeType.REMOVED, category=ChangeCategory.ENDPOINT, severity=Severity.BREAKING, path="b1"),
            Change(type=ChangeType.ADDED, category=ChangeCategory.ENDPOINT, severity=Severity.INFO, path="i2"),
            Change(type=ChangeType.REMOVED, category=ChangeCategory.ENDPOINT, severity=Severity.BREAKING, path="b2"),
            Change(type=ChangeType.REMOVED, category=ChangeCategory.RESPONSE, severity=Severity.DANGEROUS, path="d1"),
        ]
        ordered = rules.sort_by_severity(changes)
        assert [c.path for c in ordered] == ["b1", "b2", "d1", "w1", "i1", "i2"]
