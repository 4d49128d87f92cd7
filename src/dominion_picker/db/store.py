"""
Card store lifecycle: open, version check, destructive rebuild.

The store is a single SQLite file. The metadata table records the schema
version the cards table was built from. Whenever that differs from the
version declared by the card resources, upgrade or downgrade alike, the
cards table is dropped and loaded again. The version is written only after
a successful load. A failed load leaves the cards table empty and no
version recorded, so the next open retries.
"""

from __future__ import annotations

import json
import sqlite3
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

from dominion_picker.constants import TABLE_CARDS
from dominion_picker.core.logging import get_logger, log_operation
from dominion_picker.db.card_types import (
    CREATE_METADATA,
    CREATE_TABLE,
    DROP_TABLE,
    CardColumns,
    MetadataKeys,
)
from dominion_picker.db.loader import check_identities, load_all
from dominion_picker.db.resources import CardResources, resources_from_settings
from dominion_picker.errors import IdentityError, StoreError

logger = get_logger(__name__)


def _table_exists(conn: sqlite3.Connection, name: str) -> bool:
    row = conn.execute(
        "SELECT COUNT(*) FROM sqlite_master WHERE type='table' AND name=?;", (name,)
    ).fetchone()
    return bool(row[0])


def _read_metadata(conn: sqlite3.Connection, key: str) -> Optional[str]:
    if not _table_exists(conn, "metadata"):
        return None
    row = conn.execute("SELECT value FROM metadata WHERE key=?;", (key,)).fetchone()
    return row[0] if row else None


class CardStore:
    """Owns the card store file and its build lifecycle.

    Args:
        path: Location of the SQLite file (parent directories are created)
        resources: Source of card records and of the declared schema version
        check_identities: Fail the build if the fixed card ids are violated
        wal_mode: Use SQLite WAL journaling so readers never block on the file
    """

    def __init__(
        self,
        path: str | Path,
        resources: CardResources,
        *,
        check_identities: bool = True,
        wal_mode: bool = False,
    ):
        self.path = Path(path)
        self.resources = resources
        self.check_identities = check_identities
        self.wal_mode = wal_mode

    @classmethod
    def from_settings(cls, config=None) -> "CardStore":
        """Build a store from CatalogSettings (the global settings by default)."""
        if config is None:
            from dominion_picker.config import settings as settings_module

            config = settings_module.settings
        return cls(
            config.db_path,
            resources_from_settings(config),
            check_identities=config.check_identities,
            wal_mode=config.db_wal_mode,
        )

    def connect(self) -> sqlite3.Connection:
        """Open a connection to the store file without checking its version."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            conn = sqlite3.connect(str(self.path), check_same_thread=False)
        except (OSError, sqlite3.Error) as exc:
            raise StoreError(f"Cannot open card store {self.path}: {exc}") from exc
        conn.row_factory = sqlite3.Row
        if self.wal_mode:
            conn.execute("PRAGMA journal_mode = WAL;")
        return conn

    def open(self) -> sqlite3.Connection:
        """Open the store, rebuilding it when its version is missing or stale.

        The returned connection is ready for queries. Errors propagate and
        leave nothing cached, so the next call retries.
        """
        conn = self.connect()
        try:
            declared = self.resources.version()
            recorded = self.recorded_version(conn)
            if recorded is None:
                logger.info("Creating card store at {} (v{})", self.path, declared)
                self.rebuild(conn, declared)
            elif recorded != declared:
                logger.info(
                    "Card store version changed (v{} -> v{}), rebuilding",
                    recorded,
                    declared,
                )
                self.rebuild(conn, declared)
            else:
                logger.debug("Card store {} is current (v{})", self.path, recorded)
        except BaseException:
            conn.close()
            raise
        return conn

    @staticmethod
    def recorded_version(conn: sqlite3.Connection) -> Optional[int]:
        """Schema version the cards table was built from, None if never built."""
        try:
            value = _read_metadata(conn, MetadataKeys.SCHEMA_VERSION)
        except sqlite3.Error as exc:
            raise StoreError(f"Cannot read store metadata: {exc}") from exc
        if value is None:
            return None
        try:
            return int(value)
        except ValueError:
            logger.warning("Ignoring unreadable schema_version {!r}", value)
            return None

    def _reset(self, conn: sqlite3.Connection) -> None:
        try:
            conn.execute(CREATE_METADATA)
            conn.execute(
                "DELETE FROM metadata WHERE key IN (?, ?);",
                (MetadataKeys.SCHEMA_VERSION, MetadataKeys.BUILD_INFO),
            )
            conn.execute(DROP_TABLE)
            conn.execute(CREATE_TABLE)
            conn.commit()
        except sqlite3.Error as exc:
            conn.rollback()
            raise StoreError(f"Cannot reset card table: {exc}") from exc

    def rebuild(self, conn: sqlite3.Connection, version: Optional[int] = None) -> int:
        """Drop the cards table and load every record again.

        If loading or the identity check fails, the table is dropped and
        created empty again before the error propagates.

        Returns the number of rows loaded.
        """
        if version is None:
            version = self.resources.version()
        with log_operation(
            "Rebuilding card store", path=self.path, version=version
        ) as operation:
            self._reset(conn)
            try:
                rows = load_all(conn, self.resources)
                if self.check_identities:
                    check_identities(conn)
            except Exception:
                if conn.in_transaction:
                    conn.rollback()
                logger.warning("Card load failed, leaving {} empty", TABLE_CARDS)
                self._reset(conn)
                raise
            operation.add_context(rows=rows)

            build_info = {
                "built_at": datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ"),
                "rows": rows,
            }
            conn.executemany(
                "INSERT OR REPLACE INTO metadata(key,value) VALUES(?,?);",
                [
                    (MetadataKeys.SCHEMA_VERSION, str(version)),
                    (MetadataKeys.BUILD_INFO, json.dumps(build_info)),
                ],
            )
            conn.commit()
        return rows

    def info(self) -> Dict[str, Any]:
        """Summarize the store without building it."""
        summary: Dict[str, Any] = {
            "path": str(self.path),
            "exists": self.path.exists(),
            "declared_version": self.resources.version(),
            "recorded_version": None,
            "rows": 0,
            "built_at": None,
            "expansions": {},
        }
        if not summary["exists"]:
            return summary

        conn = self.connect()
        try:
            summary["recorded_version"] = self.recorded_version(conn)
            raw_info = _read_metadata(conn, MetadataKeys.BUILD_INFO)
            if raw_info:
                summary["built_at"] = json.loads(raw_info).get("built_at")
            if _table_exists(conn, TABLE_CARDS):
                summary["rows"] = conn.execute(
                    f"SELECT COUNT(*) FROM {TABLE_CARDS};"
                ).fetchone()[0]
                summary["expansions"] = {
                    row[0]: row[1]
                    for row in conn.execute(
                        f"SELECT {CardColumns.EXPANSION}, COUNT(*) FROM {TABLE_CARDS} "
                        f"GROUP BY {CardColumns.EXPANSION} ORDER BY {CardColumns.EXPANSION};"
                    )
                }
        finally:
            conn.close()
        return summary

    def verify(self) -> List[str]:
        """Return a list of problems, empty when the store is healthy.

        Checks:
        - store file exists
        - recorded schema_version matches the declared version
        - cards table has rows
        - fixed card ids hold the expected cards
        """
        if not self.path.exists():
            return [f"Store not found: {self.path}"]

        problems: List[str] = []
        summary = self.info()
        if summary["recorded_version"] != summary["declared_version"]:
            problems.append(
                f"schema_version {summary['recorded_version']} "
                f"expected={summary['declared_version']}"
            )
        if summary["rows"] <= 0:
            problems.append("cards table is empty")
            return problems

        conn = self.connect()
        try:
            check_identities(conn)
        except IdentityError as exc:
            problems.append(str(exc))
        finally:
            conn.close()
        return problems
