"""Shared constants for the Dominion card catalog."""

# Address callers use to reach the catalog
URI = "content://ca.marklauman.dominionpicker/cards"

# Content type for card rows
MIME = "ca.marklauman.dominionpicker.card"

# Name of the table containing all cards
TABLE_CARDS = "cards"

# Card ids that callers branch on. Both depend on LOAD_ORDER below.
ID_BLACK_MARKET = 1
ID_YOUNG_WITCH = 161

IDENTITY_NAMES = {
    ID_BLACK_MARKET: "Black Market",
    ID_YOUNG_WITCH: "Young Witch",
}

# Expansion sets in the order they are loaded. Changing this shifts card ids.
LOAD_ORDER = (
    "promo",
    "base",
    "alchemy",
    "intrigue",
    "prosperity",
    "seaside",
    "dark_ages",
    "cornucopia",
    "guilds",
    "hinterlands",
)

# Singleton records loaded after every set
SINGLE_CARDS = ("prince",)

# Used when a query gives no sort order
DEFAULT_SORT_ORDER = "expansion, name"

# Default file name for the store
DEFAULT_DB_FILENAME = "cards.db"
