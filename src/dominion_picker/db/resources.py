"""Sources of textual card records.

A resource adapter declares the schema version of its data and hands out
``;``-delimited card records grouped into named expansion sets. The store
rebuilds itself whenever the declared version changes.

On-disk layout read by FileResources::

    manifest.json          {"db_version": 7,
                            "sets": {"base": "cards/base.txt", ...},
                            "singles": {"prince": "cards/prince.txt"}}
    cards/base.txt         one record per line, "#" lines are comments

Blank lines in a card file are skipped, so a file cannot carry an empty
record. Only MemoryResources can hand the loader one (it loads as a row
of column defaults).
"""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional

from dominion_picker.core.logging import get_logger
from dominion_picker.errors import ResourceError

logger = get_logger(__name__)

MANIFEST_NAME = "manifest.json"
PACKAGED_DATA_DIR = Path(__file__).resolve().parent.parent / "data"


class CardResources(ABC):
    """Abstract source of card records."""

    @abstractmethod
    def version(self) -> int:
        """Schema version of the data this adapter serves."""

    @abstractmethod
    def card_set(self, name: str) -> List[str]:
        """Ordered records of one expansion set."""

    @abstractmethod
    def single_card(self, name: str) -> str:
        """A single record kept outside the expansion sets."""


class MemoryResources(CardResources):
    """Records held in memory.

    Example:
        >>> res = MemoryResources(1, {"base": ["Village;+1 card, +2 actions."]})
        >>> res.card_set("base")
        ['Village;+1 card, +2 actions.']
    """

    def __init__(
        self,
        version: int,
        sets: Optional[Mapping[str, Iterable[str]]] = None,
        singles: Optional[Mapping[str, str]] = None,
    ):
        self._version = int(version)
        self._sets = {name: list(records) for name, records in (sets or {}).items()}
        self._singles = dict(singles or {})

    def version(self) -> int:
        return self._version

    def card_set(self, name: str) -> List[str]:
        # Sets the caller did not provide are empty
        return list(self._sets.get(name, []))

    def single_card(self, name: str) -> str:
        try:
            return self._singles[name]
        except KeyError:
            raise ResourceError(f"Unknown single card: {name}") from None


def _read_records(path: Path) -> List[str]:
    """Read one record per line, skipping blank and comment lines."""
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ResourceError(f"Cannot read card file {path}: {exc}") from exc
    records = []
    for line in text.splitlines():
        if not line.strip() or line.lstrip().startswith("#"):
            continue
        records.append(line)
    return records


class FileResources(CardResources):
    """Records read from a directory holding a manifest and card files."""

    def __init__(self, root: str | Path):
        self.root = Path(root)
        self._manifest: Optional[Dict[str, Any]] = None

    @property
    def manifest(self) -> Dict[str, Any]:
        if self._manifest is None:
            self._manifest = self._load_manifest()
        return self._manifest

    def _load_manifest(self) -> Dict[str, Any]:
        path = self.root / MANIFEST_NAME
        logger.debug("Reading card manifest: {}", path)
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            raise ResourceError(f"Card manifest not found: {path}") from None
        except (OSError, json.JSONDecodeError) as exc:
            raise ResourceError(f"Cannot parse card manifest {path}: {exc}") from exc

        if not isinstance(data, dict):
            raise ResourceError(f"Card manifest must be a JSON object: {path}")
        try:
            int(data["db_version"])
        except (KeyError, TypeError, ValueError):
            raise ResourceError(
                f"Card manifest needs an integer 'db_version': {path}"
            ) from None
        for section in ("sets", "singles"):
            if not isinstance(data.get(section, {}), dict):
                raise ResourceError(f"'{section}' must map names to files: {path}")
        return data

    def version(self) -> int:
        return int(self.manifest["db_version"])

    def _file_for(self, section: str, name: str) -> Path:
        files = self.manifest.get(section, {})
        if name not in files:
            raise ResourceError(f"No entry for '{name}' in manifest '{section}'")
        return self.root / files[name]

    def card_set(self, name: str) -> List[str]:
        return _read_records(self._file_for("sets", name))

    def single_card(self, name: str) -> str:
        records = _read_records(self._file_for("singles", name))
        if len(records) != 1:
            raise ResourceError(
                f"Single card '{name}' must hold exactly one record, found {len(records)}"
            )
        return records[0]


def packaged_resources() -> FileResources:
    """Card data shipped inside the package."""
    return FileResources(PACKAGED_DATA_DIR)


def resources_from_settings(config) -> CardResources:
    """Use the configured resources directory, else the packaged data."""
    if config.resources_dir is not None:
        logger.info("Using card resources from {}", config.resources_dir)
        return FileResources(config.resources_dir)
    return packaged_resources()
