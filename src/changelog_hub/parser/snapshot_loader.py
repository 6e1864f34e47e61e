"""
Snapshot and changelog document loader.

Reads canonical snapshots and serialized changelogs from JSON or YAML
files. Both formats are read with PyYAML, JSON being a subset of YAML.
"""

from pathlib import Path
from typing import Any, Union

import yaml
from pydantic import ValidationError

from changelog_hub.models.changelog import Changelog
from changelog_hub.models.snapshot import Snapshot


class SnapshotLoaderError(Exception):
    """Error while loading a snapshot or changelog document."""
    pass


class SnapshotLoader:
    """
    Load canonical documents produced by format parsers or by this tool.

    A changelog file may hold a single changelog or a list of them.
    """

    @staticmethod
    def _read(source: Union[Path, str]) -> Any:
        """
        Read and decode a JSON or YAML document.

        Args:
            source: A path to a file, or the document content itself.

        Returns:
            The decoded document.

        Raises:
            SnapshotLoaderError: If the file is missing or not valid YAML/JSON.
        """
        if isinstance(source, Path):
            if not source.exists():
                raise SnapshotLoaderError(f"File not found: {source}")
            try:
                content = source.read_text(encoding="utf-8")
            except OSError as e:
                raise SnapshotLoaderError(f"Failed to read {source}: {e}") from e
        else:
            content = source

        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise SnapshotLoaderError(f"Invalid document in {source}: {e}") from e

        if data is None:
            raise SnapshotLoaderError(f"Empty document: {source}")
        return data

    @classmethod
    def load_snapshot(cls, source: Union[Path, str]) -> Snapshot:
        """
        Load a canonical snapshot.

        Args:
            source: Path to a snapshot file, or its content.

        Returns:
            The snapshot.

        Raises:
            SnapshotLoaderError: If the document cannot be read or validated.
        """
        data = cls._read(source)
        if not isinstance(data, dict):
            raise SnapshotLoaderError(f"Snapshot must be a mapping: {source}")
        try:
            return Snapshot.model_validate(data)
        except ValidationError as e:
            raise SnapshotLoaderError(f"Invalid snapshot {source}: {e}") from e

    @classmethod
    def load_changelogs(cls, source: Union[Path, str]) -> list[Changelog]:
        """
        Load one or more serialized changelogs.

        Args:
            source: Path to a changelog file, or its content.

        Returns:
            The changelogs in document order.

        Raises:
            SnapshotLoaderError: If the document cannot be read or validated.
        """
        data = cls._read(source)
        entries = data if isinstance(data, list) else [data]
        try:
            return [Changelog.model_validate(entry) for entry in entries]
        except ValidationError as e:
            raise SnapshotLoaderError(f"Invalid changelog {source}: {e}") from e

    @classmethod
    def load_history(cls, paths: list[Path]) -> list[Changelog]:
        """
        Load changelogs from several files into one history.

        Args:
            paths: Changelog files.

        Returns:
            All changelogs, in file then document order.
        """
        history: list[Changelog] = []
        for path in paths:
            history.extend(cls.load_changelogs(path))
        return history
