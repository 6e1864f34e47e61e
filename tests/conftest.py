"""
Pytest configuration and shared fixtures.
"""

from datetime import datetime, timedelta
from pathlib import Path
from typing import Callable, Optional

import pytest

from changelog_hub.engine.risk import assess_risk
from changelog_hub.engine.rules import make_change
from changelog_hub.models import (
    Change,
    ChangeCategory,
    Changelog,
    ChangeType,
    Endpoint,
    Parameter,
    ParameterLocation,
    Response,
    Severity,
    Snapshot,
)
from changelog_hub.parser.snapshot_loader import SnapshotLoader

BASE_TIME = datetime(2024, 1, 1, 12, 0, 0)

ChangelogFactory = Callable[..., Changelog]


@pytest.fixture
def examples_path() -> Path:
    """Get the path to the examples directory."""
    return Path(__file__).parent.parent / "examples"


@pytest.fixture
def snapshots_path(examples_path: Path) -> Path:
    """Get the path to the sample snapshot documents."""
    return examples_path / "snapshots"


@pytest.fixture
def petstore_v1(snapshots_path: Path) -> Snapshot:
    """Petstore API, first version."""
    return SnapshotLoader.load_snapshot(snapshots_path / "petstore-v1.yaml")


@pytest.fixture
def petstore_v2(snapshots_path: Path) -> Snapshot:
    """Petstore API, second version."""
    return SnapshotLoader.load_snapshot(snapshots_path / "petstore-v2.yaml")


@pytest.fixture
def users_v1() -> Snapshot:
    """Users API with GET /users and GET /users/{id}."""
    return Snapshot(
        name="Users API",
        version="1.0.0",
        endpoints=[
            Endpoint(
                path="/users",
                method="GET",
                description="List users",
                responses=[Response(status_code="200", schema_ref="UserList")],
            ),
            Endpoint(
                path="/users/{id}",
                method="GET",
                description="Get a user",
                parameters=[
                    Parameter(name="id", location=ParameterLocation.PATH, required=True, type="string"),
                ],
                responses=[Response(status_code="200", schema_ref="User")],
            ),
        ],
    )


@pytest.fixture
def users_v2() -> Snapshot:
    """Users API with GET /users/{id} removed and POST /users added."""
    return Snapshot(
        name="Users API",
        version="2.0.0",
        endpoints=[
            Endpoint(
                path="/users",
                method="GET",
                description="List users",
                responses=[Response(status_code="200", schema_ref="UserList")],
            ),
            Endpoint(
                path="/users",
                method="POST",
                description="Create a user",
                responses=[Response(status_code="201", schema_ref="User")],
            ),
        ],
    )


def breaking_change(path: str = "GET /old") -> Change:
    """A removed-endpoint breaking change."""
    return make_change(
        ChangeType.REMOVED,
        ChangeCategory.ENDPOINT,
        Severity.BREAKING,
        path,
        f"Removed endpoint {path}",
    )


def info_change(path: str = "GET /new") -> Change:
    """An added-endpoint informational change."""
    return make_change(
        ChangeType.ADDED,
        ChangeCategory.ENDPOINT,
        Severity.INFO,
        path,
        f"Added endpoint {path}",
    )


@pytest.fixture
def make_changelog() -> ChangelogFactory:
    """
    Factory for hand-built changelogs.

    Arguments: breaking and info change counts, day offset from a fixed
    base time, versions, and whether to include a deprecation notice.
    """
    def factory(
        breaking: int = 0,
        info: int = 0,
        day: float = 0,
        from_version: Optional[str] = None,
        to_version: Optional[str] = None,
        deprecation: bool = False,
        api_name: str = "Test API",
        with_risk: bool = True,
    ) -> Changelog:
        changes: list[Change] = [breaking_change(f"GET /old{i}") for i in range(breaking)]
        changes.extend(info_change(f"GET /new{i}") for i in range(info))
        if deprecation:
            changes.append(make_change(
                ChangeType.DEPRECATED,
                ChangeCategory.ENDPOINT,
                Severity.WARNING,
                "GET /legacy.deprecated",
                "Endpoint GET /legacy is now deprecated",
            ))
        return Changelog(
            api_name=api_name,
            from_version=from_version,
            to_version=to_version,
            changes=changes,
            risk_assessment=assess_risk(changes) if with_risk else None,
            generated_at=BASE_TIME + timedelta(days=day),
        )

    return factory
