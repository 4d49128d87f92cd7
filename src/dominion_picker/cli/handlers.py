"""CLI command handlers.

Each handler takes plain parameters and returns a Result, so the click
commands in cli.main only parse options and print.
"""

from typing import Optional, Sequence

from dominion_picker.config.settings import CatalogSettings
from dominion_picker.constants import TABLE_CARDS
from dominion_picker.db.provider import CardCatalog
from dominion_picker.db.store import CardStore
from dominion_picker.result import Result, try_operation


def handle_build(config: CatalogSettings, force: bool = False) -> Result:
    """Open the card store, building it if needed.

    Args:
        config: Settings naming the store and resources
        force: Rebuild even when the recorded version is current

    Returns:
        Result containing path, version and row count
    """

    def run_build():
        store = CardStore.from_settings(config)
        if force:
            conn = store.connect()
            try:
                store.rebuild(conn)
            finally:
                conn.close()
        conn = store.open()
        try:
            rows = conn.execute(f"SELECT COUNT(*) FROM {TABLE_CARDS};").fetchone()[0]
            version = store.recorded_version(conn)
        finally:
            conn.close()
        return {"path": str(store.path), "version": version, "rows": rows}

    return try_operation(run_build)


def handle_info(config: CatalogSettings) -> Result:
    """Summarize the card store without building it."""
    return try_operation(lambda: CardStore.from_settings(config).info())


def handle_verify(config: CatalogSettings) -> Result:
    """Check store health.

    Returns:
        Result containing ``healthy`` and the list of ``problems``
    """

    def run_verify():
        problems = CardStore.from_settings(config).verify()
        return {"healthy": not problems, "problems": problems}

    return try_operation(run_verify)


def handle_query(
    config: CatalogSettings,
    columns: Optional[Sequence[str]] = None,
    where: Optional[str] = None,
    args: Optional[Sequence[str]] = None,
    order: Optional[str] = None,
    limit: Optional[int] = None,
) -> Result:
    """Run a catalog query.

    Returns:
        Result containing the result ``columns`` and ``rows`` as dicts
    """

    def run_query():
        with CardCatalog(CardStore.from_settings(config)) as catalog:
            with catalog.query(columns or None, where, args, order) as cursor:
                rows = cursor.fetchmany(limit) if limit else cursor.fetchall()
                names = cursor.columns
        return {"columns": names, "rows": [dict(zip(names, row)) for row in rows]}

    return try_operation(run_query)
