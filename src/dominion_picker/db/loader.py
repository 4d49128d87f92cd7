"""Parse card records and load them into the cards table.

Each expansion set is inserted as one transaction, so a reader never sees
half a set. Rows that conflict with an existing key are dropped and the
load carries on. Ids are handed out in load order, which is why the order
of LOAD_ORDER and of the records inside each set is fixed.
"""

import sqlite3
from typing import Dict, Iterable

from dominion_picker.constants import (
    IDENTITY_NAMES,
    LOAD_ORDER,
    SINGLE_CARDS,
    TABLE_CARDS,
)
from dominion_picker.core.logging import get_logger, log_operation
from dominion_picker.db.card_types import CardColumns, RECORD_COLS
from dominion_picker.db.resources import CardResources
from dominion_picker.errors import IdentityError, LoadError, RecordError

logger = get_logger(__name__)

FIELD_SEPARATOR = ";"


def parse_record(record: str) -> Dict[str, str]:
    """Map the fields of a record onto card columns.

    Field i goes to RECORD_COLS[i]. Short records fill only the leading
    columns, empty fields stay empty strings, and an empty record gives
    an empty mapping.

    Raises:
        RecordError: If the record has more fields than there are columns
    """
    if record == "":
        return {}
    fields = record.split(FIELD_SEPARATOR)
    if len(fields) > len(RECORD_COLS):
        raise RecordError(record, len(fields), len(RECORD_COLS))
    return dict(zip(RECORD_COLS, fields))


def _insert(cur: sqlite3.Cursor, values: Dict[str, str]) -> int:
    if not values:
        cur.execute(f"INSERT OR IGNORE INTO {TABLE_CARDS} DEFAULT VALUES")
    else:
        columns = ",".join(values)
        placeholders = ",".join("?" for _ in values)
        cur.execute(
            f"INSERT OR IGNORE INTO {TABLE_CARDS} ({columns}) VALUES ({placeholders})",
            tuple(values.values()),
        )
    return cur.rowcount


def add_cards(conn: sqlite3.Connection, records: Iterable[str]) -> int:
    """Insert one batch of records atomically.

    Returns the number of rows inserted. On any failure the whole batch is
    rolled back and a LoadError is raised.
    """
    inserted = 0
    cur = conn.cursor()
    try:
        if not conn.in_transaction:
            cur.execute("BEGIN")
        for record in records:
            inserted += max(_insert(cur, parse_record(record)), 0)
        conn.commit()
    except LoadError:
        conn.rollback()
        raise
    except sqlite3.Error as exc:
        conn.rollback()
        raise LoadError(f"Card batch failed: {exc}") from exc
    finally:
        cur.close()
    return inserted


def load_all(conn: sqlite3.Connection, resources: CardResources) -> int:
    """Load every expansion set, then the single cards, in fixed order.

    Returns the total number of rows inserted.
    """
    total = 0
    with log_operation(
        "Loading card records", version=resources.version()
    ) as operation:
        for set_name in LOAD_ORDER:
            operation.add_context(set=set_name)
            records = resources.card_set(set_name)
            count = add_cards(conn, records)
            logger.debug(
                "Loaded set '{}': {} of {} records inserted",
                set_name,
                count,
                len(records),
            )
            total += count
        for card_name in SINGLE_CARDS:
            operation.add_context(set=card_name)
            total += add_cards(conn, [resources.single_card(card_name)])
        operation.context.pop("set", None)
        operation.add_context(rows=total)
    return total


def check_identities(conn: sqlite3.Connection) -> None:
    """Ensure the fixed card ids hold the cards callers expect.

    Raises:
        IdentityError: On the first id that holds the wrong card (or none)
    """
    for card_id, expected in IDENTITY_NAMES.items():
        row = conn.execute(
            f"SELECT {CardColumns.NAME} FROM {TABLE_CARDS} WHERE {CardColumns.ID}=?",
            (card_id,),
        ).fetchone()
        actual = row[0] if row else None
        if actual != expected:
            raise IdentityError(card_id, expected, actual)
