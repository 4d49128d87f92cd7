"""Database type definitions and column name constants.

Centralizes the cards table layout so the loader, the store and the
query gateway agree on column names and order.
"""

from typing import Optional, TypedDict, Union

from dominion_picker.constants import TABLE_CARDS


class CardColumns:
    """Column names for the cards table.

    Use these constants instead of string literals to prevent typos.
    """

    ID = "_id"  # NOT "id"
    NAME = "name"
    DESCRIPTION = "description"
    COST = "cost"  # text, allows tokens like "*" and "3+"
    POTION = "potion"
    CATEGORY = "category"  # comma-joined, e.g. "action,attack"
    EXPANSION = "expansion"
    BUY = "buy"
    ACTION = "act"  # NOT "action"
    DRAW = "draw"
    GOLD = "gold"
    VICTORY = "victory"
    CURSER = "curser"


# Every column in table order. Record field i is stored in COLS[i + 1].
COLS = (
    CardColumns.ID,
    CardColumns.NAME,
    CardColumns.DESCRIPTION,
    CardColumns.COST,
    CardColumns.POTION,
    CardColumns.CATEGORY,
    CardColumns.EXPANSION,
    CardColumns.BUY,
    CardColumns.ACTION,
    CardColumns.DRAW,
    CardColumns.GOLD,
    CardColumns.VICTORY,
    CardColumns.CURSER,
)

# Columns a record can fill
RECORD_COLS = COLS[1:]

CREATE_TABLE = f"""
CREATE TABLE {TABLE_CARDS} (
  {CardColumns.ID} INTEGER PRIMARY KEY AUTOINCREMENT,
  {CardColumns.NAME} TEXT,
  {CardColumns.DESCRIPTION} TEXT,
  {CardColumns.COST} TEXT,
  {CardColumns.POTION} INTEGER,
  {CardColumns.CATEGORY} TEXT,
  {CardColumns.EXPANSION} TEXT,
  {CardColumns.BUY} TEXT,
  {CardColumns.ACTION} TEXT,
  {CardColumns.DRAW} TEXT,
  {CardColumns.GOLD} TEXT,
  {CardColumns.VICTORY} TEXT,
  {CardColumns.CURSER} TEXT
);
"""

DROP_TABLE = f"DROP TABLE IF EXISTS {TABLE_CARDS};"

CREATE_METADATA = """
CREATE TABLE IF NOT EXISTS metadata (
  key TEXT PRIMARY KEY,
  value TEXT
);
"""


class MetadataKeys:
    SCHEMA_VERSION = "schema_version"
    BUILD_INFO = "build_info"


class CardRow(TypedDict, total=False):
    """A full row of the cards table.

    Every field except the id may be missing or empty when the source
    record was short.
    """

    _id: int
    name: Optional[str]
    description: Optional[str]
    cost: Optional[str]
    potion: Optional[Union[int, str]]
    category: Optional[str]
    expansion: Optional[str]
    buy: Optional[str]
    act: Optional[str]
    draw: Optional[str]
    gold: Optional[str]
    victory: Optional[str]
    curser: Optional[str]

