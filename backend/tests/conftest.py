"""Shared fixtures: a small hand-built catalog and the shipped one."""

import pytest

from draftboard.models.champion import ChampionRecord, ChampionRole, ChampionTag, Tier
from draftboard.repositories.champion_repository import ChampionCatalog, load_catalog


def make_champion(
    champion_id,
    role="mid",
    win_rate=50.0,
    pick_rate=5.0,
    ban_rate=5.0,
    tags=(),
    counters=(),
    synergies=(),
    tier=None,
):
    return ChampionRecord(
        id=champion_id,
        name=champion_id,
        role=ChampionRole(role),
        win_rate=win_rate,
        pick_rate=pick_rate,
        ban_rate=ban_rate,
        tags=frozenset(ChampionTag(t) for t in tags),
        counters=tuple(counters),
        synergies=tuple(synergies),
        tier=Tier(tier) if tier else None,
    )


@pytest.fixture
def small_catalog():
    """Eight champions with hand-checkable scores."""
    return ChampionCatalog([
        make_champion("Malphite", "top", 50.0, 5.0, tags=["tank", "engage"], tier="B"),
        make_champion("Zed", "mid", 52.0, 10.0, 20.0, tags=["assassin", "burst", "early-game"],
                      counters=["Lux"], tier="S"),
        make_champion("Lux", "mid", 49.0, 6.0, tags=["mage", "poke", "cc"], synergies=["Leona"], tier="B"),
        make_champion("Leona", "support", 51.5, 7.0, tags=["tank", "engage", "cc"],
                      synergies=["Jinx"], tier="A"),
        make_champion("Jinx", "adc", 50.5, 9.0, tags=["marksman", "scaling"], tier="A"),
        make_champion("LeeSin", "jungle", 48.0, 12.0, tags=["fighter", "early-game"],
                      counters=["Jinx"], tier="A"),
        make_champion("Garen", "top", 50.0, 3.0, tags=["fighter", "tank"]),
        make_champion("Ahri", "mid", 50.2, 8.0, tags=["mage", "burst"], tier="A"),
    ])


@pytest.fixture(scope="session")
def shipped_catalog():
    """The champion catalog from the knowledge directory."""
    return load_catalog()


@pytest.fixture
def anyio_backend():
    """The services run on asyncio (asyncio.create_task / wait_for)."""
    return "asyncio"
