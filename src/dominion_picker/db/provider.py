"""Read-only query surface of the card catalog.

CardCatalog mirrors a content provider: ``query`` returns a forward-only
cursor, ``get_type`` reports the card MIME type, and ``insert``,
``update`` and ``delete`` exist only to refuse. The store is opened (and
built if needed) on the first call, once, under a lock. Queries issued
meanwhile wait for it to finish.
"""

from __future__ import annotations

import sqlite3
import threading
from typing import Any, Iterator, List, Mapping, Optional, Sequence

from dominion_picker.constants import DEFAULT_SORT_ORDER, MIME, TABLE_CARDS
from dominion_picker.core.logging import get_logger
from dominion_picker.db.card_types import COLS
from dominion_picker.db.store import CardStore

logger = get_logger(__name__)


def build_query(
    projection: Optional[Sequence[str]] = None,
    selection: Optional[str] = None,
    sort_order: Optional[str] = None,
) -> str:
    """Build the SELECT statement for a catalog query.

    Projection entries and the sort order are used verbatim, so they may be
    expressions such as ``count(*)``. A missing sort order means
    DEFAULT_SORT_ORDER; an empty one means no ORDER BY at all.
    """
    columns = ", ".join(projection) if projection else ", ".join(COLS)
    sql = f"SELECT {columns} FROM {TABLE_CARDS}"
    if selection:
        sql += f" WHERE {selection}"
    if sort_order is None:
        sort_order = DEFAULT_SORT_ORDER
    if sort_order:
        sql += f" ORDER BY {sort_order}"
    return sql


class CardCursor:
    """Forward-only, read-only cursor over query results.

    Rows are sqlite3.Row objects (index or column-name access). Close the
    cursor, or use it as a context manager, to release the reader early.
    """

    def __init__(self, cursor: sqlite3.Cursor):
        self._cursor = cursor
        self._closed = False

    @property
    def columns(self) -> List[str]:
        return [desc[0] for desc in self._cursor.description or ()]

    @property
    def closed(self) -> bool:
        return self._closed

    def __iter__(self) -> Iterator[sqlite3.Row]:
        return self

    def __next__(self) -> sqlite3.Row:
        row = self._cursor.fetchone()
        if row is None:
            raise StopIteration
        return row

    def fetchone(self) -> Optional[sqlite3.Row]:
        return self._cursor.fetchone()

    def fetchmany(self, size: int = 100) -> List[sqlite3.Row]:
        return self._cursor.fetchmany(size)

    def fetchall(self) -> List[sqlite3.Row]:
        return self._cursor.fetchall()

    def close(self) -> None:
        if not self._closed:
            self._cursor.close()
            self._closed = True

    def __enter__(self) -> "CardCursor":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False


class CardCatalog:
    """Query gateway over a CardStore.

    One instance is meant to be shared by every caller in the process. The
    store connection is created on first use and reused afterwards. If
    opening fails the error reaches the caller and the next call tries again.
    """

    def __init__(self, store: CardStore):
        self.store = store
        self._conn: Optional[sqlite3.Connection] = None
        self._lock = threading.Lock()

    def _connection(self) -> sqlite3.Connection:
        conn = self._conn
        if conn is None:
            with self._lock:
                if self._conn is None:
                    self._conn = self.store.open()
                conn = self._conn
        return conn

    def query(
        self,
        projection: Optional[Sequence[str]] = None,
        selection: Optional[str] = None,
        selection_args: Optional[Sequence[Any]] = None,
        sort_order: Optional[str] = None,
    ) -> CardCursor:
        """Run a read-only query over the cards table.

        Args:
            projection: Columns (or expressions) to return, all columns if None
            selection: WHERE clause with ``?`` placeholders, no filter if None
            selection_args: Values bound to the placeholders in order
            sort_order: ORDER BY clause, "expansion, name" if None

        Returns:
            CardCursor over the matching rows

        Raises:
            sqlite3.Error: Invalid selection, projection or sort order
        """
        sql = build_query(projection, selection, sort_order)
        conn = self._connection()
        logger.debug("Card query: {} args={}", sql, selection_args)
        return CardCursor(conn.execute(sql, tuple(selection_args or ())))

    def get_type(self, address: Optional[str] = None) -> str:
        return MIME

    def insert(self, address: Optional[str], values: Mapping[str, Any]) -> None:
        logger.debug("Refusing insert into read-only catalog: {}", dict(values))
        return None

    def update(
        self,
        address: Optional[str],
        values: Mapping[str, Any],
        selection: Optional[str] = None,
        selection_args: Optional[Sequence[Any]] = None,
    ) -> int:
        logger.debug("Refusing update of read-only catalog")
        return 0

    def delete(
        self,
        address: Optional[str],
        selection: Optional[str] = None,
        selection_args: Optional[Sequence[Any]] = None,
    ) -> int:
        logger.debug("Refusing delete from read-only catalog")
        return 0

    def close(self) -> None:
        with self._lock:
            if self._conn is not None:
                self._conn.close()
                self._conn = None

    def __enter__(self) -> "CardCatalog":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False


# Shared catalog instance
_catalog: Optional[CardCatalog] = None
_catalog_lock = threading.Lock()


def get_catalog(config=None) -> CardCatalog:
    """Return the process-wide catalog, creating it from settings once."""
    global _catalog
    with _catalog_lock:
        if _catalog is None:
            _catalog = CardCatalog(CardStore.from_settings(config))
        return _catalog


def reset_catalog() -> None:
    """Close and forget the shared catalog. Useful for tests."""
    global _catalog
    with _catalog_lock:
        if _catalog is not None:
            _catalog.close()
        _catalog = None
