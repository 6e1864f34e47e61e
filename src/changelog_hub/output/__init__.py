"""
Output package for Changelog Hub.

This package contains formatters for displaying changelogs and analysis
reports in various formats (text, JSON, YAML).
"""

from changelog_hub.output.formatters import (
    BaseFormatter,
    get_formatter,
)
from changelog_hub.output.json_output import JsonFormatter
from changelog_hub.output.text_output import TextFormatter
from changelog_hub.output.yaml_output import YamlFormatter

__all__ = [
    "BaseFormatter",
    "JsonFormatter",
    "TextFormatter",
    "YamlFormatter",
    "get_formatter",
]
