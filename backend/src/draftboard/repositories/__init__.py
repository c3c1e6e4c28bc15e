"""Data access for static draft data."""

from draftboard.repositories.champion_repository import (
    CatalogError,
    ChampionCatalog,
    load_catalog,
)

__all__ = ["CatalogError", "ChampionCatalog", "load_catalog"]
