"""
Command-line interface for Changelog Hub.

This module provides the CLI using Click framework for argument parsing
and wires loaded documents through the engine, analytics and formatters.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.logging import RichHandler

from changelog_hub import __version__
from changelog_hub.config import Config, find_config_file, load_config

console = Console()
err_console = Console(stderr=True)

FORMAT_CHOICES = ["text", "json", "yaml"]


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def _emit(formatted_output: str, output: Optional[Path]) -> None:
    if output:
        output.write_text(formatted_output, encoding="utf-8")
        console.print(f"[green]Results written to:[/green] {output}")
    else:
        # Print directly to stdout to preserve ANSI codes from formatter
        sys.stdout.write(formatted_output)
        sys.stdout.flush()


def _fail(ctx: click.Context, error: Exception) -> None:
    console.print(f"[red]Error:[/red] {error}")
    if ctx.obj.get("verbose"):
        import traceback
        console.print(traceback.format_exc())
    raise click.Abort()


format_option = click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(FORMAT_CHOICES),
    default=None,
    help="Output format (default: from config, else text).",
)
output_option = click.option(
    "--output",
    "-o",
    type=click.Path(path_type=Path),
    help="Output file path. If not specified, prints to stdout.",
)


@click.group()
@click.version_option(version=__version__, prog_name="changelog-hub")
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, path_type=Path),
    help="Path to configuration file. Defaults to the nearest .changelog-hub.yaml.",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable debug logging.",
)
@click.pass_context
def cli(ctx: click.Context, config: Optional[Path], verbose: bool) -> None:
    """Changelog Hub - Classify API changes and score API evolution."""
    ctx.ensure_object(dict)
    _setup_logging(verbose)
    ctx.obj["verbose"] = verbose

    try:
        config_path = config or find_config_file(Path.cwd())
        ctx.obj["config"] = load_config(config_path) if config_path else Config()
    except (FileNotFoundError, ValueError) as e:
        _fail(ctx, e)


@cli.command()
@click.argument("old", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("new", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@format_option
@output_option
@click.option(
    "--fail-on-breaking",
    is_flag=True,
    help="Exit with status 1 when breaking changes are found.",
)
@click.pass_context
def compare(
    ctx: click.Context,
    old: Path,
    new: Path,
    output_format: Optional[str],
    output: Optional[Path],
    fail_on_breaking: bool,
) -> None:
    """Compare two snapshots and print the changelog."""
    from changelog_hub.engine.differ import diff_snapshots
    from changelog_hub.output.formatters import get_formatter
    from changelog_hub.parser.snapshot_loader import SnapshotLoader

    config: Config = ctx.obj["config"]

    try:
        changelog = diff_snapshots(
            SnapshotLoader.load_snapshot(old),
            SnapshotLoader.load_snapshot(new),
        )
        formatter = get_formatter(output_format or config.output.format, config.output)
        _emit(formatter.format_changelog(changelog), output)
    except Exception as e:
        _fail(ctx, e)

    if fail_on_breaking and changelog.has_breaking_changes:
        ctx.exit(1)


@cli.command()
@click.argument(
    "changelog_files",
    nargs=-1,
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "--api-name",
    type=str,
    default=None,
    help="API name for the report (default: from the latest changelog).",
)
@click.option(
    "--snapshot",
    "snapshot_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Current snapshot of the API, used for insights and compliance checks.",
)
@format_option
@output_option
@click.pass_context
def history(
    ctx: click.Context,
    changelog_files: tuple[Path, ...],
    api_name: Optional[str],
    snapshot_file: Optional[Path],
    output_format: Optional[str],
    output: Optional[Path],
) -> None:
    """Score stability, velocity and risk across saved changelogs, with advice."""
    from changelog_hub.analytics.history import HistoryAnalyzer
    from changelog_hub.output.formatters import get_formatter
    from changelog_hub.parser.snapshot_loader import SnapshotLoader

    config: Config = ctx.obj["config"]

    try:
        changelogs = SnapshotLoader.load_history(list(changelog_files))
        snapshot = SnapshotLoader.load_snapshot(snapshot_file) if snapshot_file else None
        report = HistoryAnalyzer(config).analyze(changelogs, api_name, snapshot)
        formatter = get_formatter(output_format or config.output.format, config.output)
        _emit(formatter.format_history(report), output)
    except Exception as e:
        _fail(ctx, e)


@cli.command()
@click.argument("snapshot", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@format_option
@output_option
@click.pass_context
def complexity(
    ctx: click.Context,
    snapshot: Path,
    output_format: Optional[str],
    output: Optional[Path],
) -> None:
    """Score the complexity and technical debt of a snapshot."""
    from changelog_hub.analytics.history import HistoryAnalyzer
    from changelog_hub.output.formatters import get_formatter
    from changelog_hub.parser.snapshot_loader import SnapshotLoader

    config: Config = ctx.obj["config"]

    try:
        report = HistoryAnalyzer(config).analyze_snapshot(SnapshotLoader.load_snapshot(snapshot))
        formatter = get_formatter(output_format or config.output.format, config.output)
        _emit(formatter.format_snapshot(report), output)
    except Exception as e:
        _fail(ctx, e)


def main() -> None:
    """Main entry point for the CLI."""
    cli(obj={})


if __name__ == "__main__":
    main()
