"""
Dominion card catalog.

Read-only SQLite catalog of Dominion cards, built from packaged text
resources on first use and rebuilt whenever the declared schema version
changes.
"""

from dominion_picker.constants import (
    ID_BLACK_MARKET,
    ID_YOUNG_WITCH,
    MIME,
    TABLE_CARDS,
    URI,
)

__version__ = "2.0.0"

__all__ = [
    "ID_BLACK_MARKET",
    "ID_YOUNG_WITCH",
    "MIME",
    "TABLE_CARDS",
    "URI",
]
