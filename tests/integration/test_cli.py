"""
Integration tests for the CLI.
"""

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from changelog_hub.cli import cli


@pytest.fixture
def runner() -> CliRunner:
    """Create a CLI runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run every command from an empty directory so no config file is found."""
    workdir = tmp_path / "work"
    workdir.mkdir()
    monkeypatch.chdir(workdir)
    return workdir


class TestCLIBasics:
    """Basic CLI tests."""

    def test_help(self, runner: CliRunner) -> None:
        """Test that help is displayed."""
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "Changelog Hub" in result.output
        assert "compare" in result.output
        assert "history" in result.output
        assert "complexity" in result.output

    def test_version(self, runner: CliRunner) -> None:
        """Test that version is displayed."""
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "changelog-hub" in result.output

    def test_bad_config(self, runner: CliRunner, tmp_path: Path, snapshots_path: Path) -> None:
        """Test that an invalid config file aborts."""
        config = tmp_path / "bad.yaml"
        config.write_text("unknown_section: true\n")
        result = runner.invoke(
            cli,
            [
                "-c", str(config),
                "complexity", str(snapshots_path / "petstore-v1.yaml"),
            ],
        )
        assert result.exit_code == 1
        assert "Error:" in result.output

    def test_config_from_cwd(self, runner: CliRunner, isolated_cwd: Path, snapshots_path: Path) -> None:
        """Test that a config file in the working directory is picked up."""
        (isolated_cwd / ".changelog-hub.yaml").write_text("output:\n  format: json\n")
        result = runner.invoke(cli, ["complexity", str(snapshots_path / "petstore-v1.yaml")])
        assert result.exit_code == 0
        assert json.loads(result.output)["api_name"] == "Petstore"


class TestCompareCommand:
    """Tests for the compare command."""

    def test_compare_text(self, runner: CliRunner, snapshots_path: Path) -> None:
        """Test the default text output."""
        result = runner.invoke(
            cli,
            ["compare", str(snapshots_path / "petstore-v1.yaml"), str(snapshots_path / "petstore-v2.yaml")],
        )
        assert result.exit_code == 0
        assert "BREAKING" in result.output
        assert "Summary" in result.output

    def test_compare_json(self, runner: CliRunner, snapshots_path: Path) -> None:
        """Test JSON output."""
        result = runner.invoke(
            cli,
            [
                "compare",
                str(snapshots_path / "petstore-v1.yaml"),
                str(snapshots_path / "petstore-v2.yaml"),
                "-f", "json",
            ],
        )
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["from_version"] == "1.0.0"
        assert data["to_version"] == "2.0.0"
        assert len(data["changes"]) == 4
        assert data["risk_assessment"]["overall_score"] == 45

    def test_fail_on_breaking(self, runner: CliRunner, snapshots_path: Path) -> None:
        """Test that breaking changes fail the command when asked."""
        result = runner.invoke(
            cli,
            [
                "compare",
                str(snapshots_path / "petstore-v1.yaml"),
                str(snapshots_path / "petstore-v2.yaml"),
                "-f", "json",
                "--fail-on-breaking",
            ],
        )
        assert result.exit_code == 1
        assert json.loads(result.output)["api_name"] == "Petstore"

    def test_fail_on_breaking_without_breaking(self, runner: CliRunner, snapshots_path: Path) -> None:
        """Test that identical snapshots pass."""
        path = str(snapshots_path / "petstore-v1.yaml")
        result = runner.invoke(cli, ["compare", path, path, "--fail-on-breaking"])
        assert result.exit_code == 0
        assert "No changes detected." in result.output

    def test_output_file(self, runner: CliRunner, tmp_path: Path, snapshots_path: Path) -> None:
        """Test writing results to a file."""
        out = tmp_path / "changelog.yaml"
        result = runner.invoke(
            cli,
            [
                "compare",
                str(snapshots_path / "shop-graphql-v1.yaml"),
                str(snapshots_path / "shop-graphql-v2.yaml"),
                "-f", "yaml",
                "-o", str(out),
            ],
        )
        assert result.exit_code == 0
        assert "Results written to:" in result.output
        assert "api_name: Shop" in out.read_text()

    def test_missing_file(self, runner: CliRunner, tmp_path: Path) -> None:
        """Test that a missing snapshot is a usage error."""
        result = runner.invoke(cli, ["compare", str(tmp_path / "a.yaml"), str(tmp_path / "b.yaml")])
        assert result.exit_code == 2

    def test_invalid_snapshot(self, runner: CliRunner, tmp_path: Path, snapshots_path: Path) -> None:
        """Test that an unreadable snapshot aborts with an error."""
        bad = tmp_path / "bad.yaml"
        bad.write_text("- not\n- a snapshot\n")
        result = runner.invoke(cli, ["compare", str(bad), str(snapshots_path / "petstore-v1.yaml")])
        assert result.exit_code == 1
        assert "Error:" in result.output


class TestHistoryCommand:
    """Tests for the history command."""

    def _write_changelog(self, runner: CliRunner, old: Path, new: Path, out: Path) -> None:
        result = runner.invoke(cli, ["compare", str(old), str(new), "-f", "json", "-o", str(out)])
        assert result.exit_code == 0

    def test_history_from_compare_output(
        self, runner: CliRunner, tmp_path: Path, snapshots_path: Path
    ) -> None:
        """Test that compare output feeds the history command."""
        out = tmp_path / "petstore.json"
        self._write_changelog(
            runner, snapshots_path / "petstore-v1.yaml", snapshots_path / "petstore-v2.yaml", out
        )

        result = runner.invoke(cli, ["history", str(out), "-f", "json"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["api_name"] == "Petstore"
        assert data["periods_analyzed"] == 1
        assert data["cumulative_risk"] == 45
        assert "grade_label" in data["stability"]

    def test_history_with_snapshot(
        self, runner: CliRunner, tmp_path: Path, snapshots_path: Path
    ) -> None:
        """Test that the current snapshot adds documentation and deprecation advice."""
        out = tmp_path / "petstore.json"
        v2 = snapshots_path / "petstore-v2.yaml"
        self._write_changelog(runner, snapshots_path / "petstore-v1.yaml", v2, out)

        result = runner.invoke(cli, ["history", str(out), "--snapshot", str(v2), "-f", "json"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["compliance"]["checks"][-1]["name"] == "Endpoint Documentation"
        assert "deprecation_reminder" in {i["type"] for i in data["insights"]}
        assert "Remove Deprecated Endpoints" in {r["title"] for r in data["recommendations"]}

    def test_history_api_name(self, runner: CliRunner, tmp_path: Path, snapshots_path: Path) -> None:
        """Test overriding the report name."""
        out = tmp_path / "shop.json"
        self._write_changelog(
            runner, snapshots_path / "shop-graphql-v1.yaml", snapshots_path / "shop-graphql-v2.yaml", out
        )
        result = runner.invoke(cli, ["history", str(out), "--api-name", "Storefront"])
        assert result.exit_code == 0
        assert "Storefront" in result.output
        assert "Stability" in result.output

    def test_history_invalid_file(self, runner: CliRunner, tmp_path: Path) -> None:
        """Test that a non-changelog file aborts."""
        bad = tmp_path / "bad.json"
        bad.write_text("[1, 2]")
        result = runner.invoke(cli, ["history", str(bad)])
        assert result.exit_code == 1
        assert "Error:" in result.output

    def test_history_requires_files(self, runner: CliRunner) -> None:
        """Test that at least one file is required."""
        result = runner.invoke(cli, ["history"])
        assert result.exit_code == 2


class TestComplexityCommand:
    """Tests for the complexity command."""

    def test_complexity_text(self, runner: CliRunner, snapshots_path: Path) -> None:
        """Test the default text output."""
        result = runner.invoke(cli, ["complexity", str(snapshots_path / "petstore-v2.yaml")])
        assert result.exit_code == 0
        assert "Complexity" in result.output
        assert "Technical Debt" in result.output

    def test_complexity_json(self, runner: CliRunner, snapshots_path: Path) -> None:
        """Test JSON output."""
        result = runner.invoke(cli, ["complexity", str(snapshots_path / "petstore-v2.yaml"), "-f", "json"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["complexity"]["endpoint_count"] == 3
        assert data["technical_debt"]["deprecated_endpoints_count"] == 1
