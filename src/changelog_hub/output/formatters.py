"""
Formatter interface and the name -> formatter registry used by the CLI.
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Callable, Optional

from changelog_hub.config import OutputConfig

if TYPE_CHECKING:
    from changelog_hub.models.changelog import Changelog
    from changelog_hub.models.report import HistoryReport, SnapshotReport


class BaseFormatter(ABC):
    """
    Renders changelogs and analytics reports to a string.

    One method per report kind; all three must be implemented.
    """

    def __init__(self, config: Optional[OutputConfig] = None) -> None:
        """
        Initialize the formatter.

        Args:
            config: Output configuration; defaults are used when None.
        """
        self.config = config or OutputConfig()

    @abstractmethod
    def format_changelog(self, changelog: "Changelog") -> str:
        """Render one changelog."""
        ...

    @abstractmethod
    def format_history(self, report: "HistoryReport") -> str:
        """Render stability, velocity and risk of a history."""
        ...

    @abstractmethod
    def format_snapshot(self, report: "SnapshotReport") -> str:
        """Render complexity and technical debt of a snapshot."""
        ...


_FORMATTERS: dict[str, type[BaseFormatter]] = {}


def register_formatter(name: str) -> Callable[[type[BaseFormatter]], type[BaseFormatter]]:
    """
    Class decorator adding a formatter to the registry under name.
    """
    def decorator(cls: type[BaseFormatter]) -> type[BaseFormatter]:
        _FORMATTERS[name] = cls
        return cls
    return decorator


def get_formatter(name: str, config: Optional[OutputConfig] = None) -> BaseFormatter:
    """
    Instantiate a registered formatter.

    Args:
        name: The formatter name (e.g., "text", "json", "yaml").
        config: Output configuration handed to the formatter.

    Returns:
        The formatter.

    Raises:
        ValueError: If the formatter name is not recognized.
    """
    # Registration happens on import.
    from changelog_hub.output import (  # noqa: F401
        json_output,
        text_output,
        yaml_output,
    )

    if name not in _FORMATTERS:
        available = ", ".join(sorted(_FORMATTERS.keys()))
        raise ValueError(f"Unknown formatter: {name}. Available: {available}")

    return _FORMATTERS[name](config)
