"""Shared fixtures for the card catalog tests."""

import sys
from pathlib import Path

import pytest

# Add src/ to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from dominion_picker.db.provider import CardCatalog, reset_catalog  # noqa: E402
from dominion_picker.db.resources import MemoryResources, packaged_resources  # noqa: E402
from dominion_picker.db.store import CardStore  # noqa: E402


SMALL_SETS = {
    "promo": [
        "Black Market;Buy from the Black Market deck.;3;0;action;Promo;0;0;0;2;0;0",
    ],
    "base": [
        "Village;+1 card, +2 actions.;3;0;action;Base;0;2;1;0;0;0",
        "Smithy;+3 cards.;4;0;action;Base;0;0;3;0;0;0",
        "Witch;+2 cards. Each other player gains a Curse.;5;0;action,attack;Base;0;0;2;0;0;1",
    ],
    "alchemy": [
        "Vineyard;1 VP per 3 Actions.;0;1;victory;Alchemy;0;0;0;0;*;0",
        "Alchemist;+2 cards, +1 action.;3;1;action;Alchemy;0;1;2;0;0;0",
    ],
}
SMALL_SINGLES = {"prince": "Prince;Set aside an Action.;8;0;action;Promo;0;0;0;0;0;0"}


def small_resources(version: int = 1, **overrides) -> MemoryResources:
    sets = dict(SMALL_SETS)
    sets.update(overrides)
    return MemoryResources(version, sets, SMALL_SINGLES)


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path, monkeypatch):
    """Keep settings and the shared catalog away from the real home directory."""
    monkeypatch.setenv("DP_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.setenv("DP_LOGS_DIR", str(tmp_path / "logs"))
    monkeypatch.delenv("DP_RESOURCES_DIR", raising=False)
    reset_catalog()
    yield
    reset_catalog()


@pytest.fixture
def make_resources():
    """Factory for small in-memory resources: make_resources(version, base=[...])."""
    return small_resources


@pytest.fixture
def small_store(tmp_path):
    """Store over a handful of cards, without the fixed id checks."""
    return CardStore(tmp_path / "cards.db", small_resources(), check_identities=False)


@pytest.fixture
def small_catalog(small_store):
    catalog = CardCatalog(small_store)
    yield catalog
    catalog.close()


@pytest.fixture(scope="session")
def packaged_db(tmp_path_factory):
    """Build the packaged card data once and reuse the file."""
    path = tmp_path_factory.mktemp("packaged") / "cards.db"
    conn = CardStore(path, packaged_resources()).open()
    conn.close()
    return path


@pytest.fixture
def packaged_catalog(packaged_db):
    catalog = CardCatalog(CardStore(packaged_db, packaged_resources()))
    yield catalog
    catalog.close()
