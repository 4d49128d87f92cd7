"""Exception hierarchy for the Dominion card catalog.

Query errors are not wrapped: invalid selections or projections surface
as the sqlite3 exception raised by the store.
"""


class CatalogError(Exception):
    """Base exception for all catalog errors."""

    pass


class ResourceError(CatalogError):
    """Card resources are missing, unknown or malformed."""

    pass


class StoreError(CatalogError):
    """The store file cannot be opened, created or reset."""

    pass


class LoadError(CatalogError):
    """A set of card records failed to load. The batch was rolled back."""

    pass


class RecordError(LoadError):
    """A record has more fields than the cards table has columns."""

    def __init__(self, record: str, field_count: int, max_fields: int):
        self.record = record
        self.field_count = field_count
        self.max_fields = max_fields
        super().__init__(
            f"Record has {field_count} fields, at most {max_fields} allowed: {record!r}"
        )


class IdentityError(LoadError):
    """A fixed card id does not hold the expected card after loading."""

    def __init__(self, card_id: int, expected: str, actual: str | None):
        self.card_id = card_id
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Card id {card_id} should be {expected!r}, found {actual!r}"
        )
