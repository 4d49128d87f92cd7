"""Card store, loader and query gateway."""

from dominion_picker.db.card_types import COLS, CardColumns, CardRow
from dominion_picker.db.provider import (
    CardCatalog,
    CardCursor,
    get_catalog,
    reset_catalog,
)
from dominion_picker.db.resources import (
    CardResources,
    FileResources,
    MemoryResources,
    packaged_resources,
)
from dominion_picker.db.store import CardStore

__all__ = [
    "COLS",
    "CardColumns",
    "CardRow",
    "CardCatalog",
    "CardCursor",
    "get_catalog",
    "reset_catalog",
    "CardResources",
    "FileResources",
    "MemoryResources",
    "packaged_resources",
    "CardStore",
]
