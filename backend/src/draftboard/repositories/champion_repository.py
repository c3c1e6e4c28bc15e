"""Read-only champion catalog loaded from the knowledge directory."""

import json
import logging
from pathlib import Path
from typing import Iterable, Optional

from draftboard.models.champion import TIER_ORDER, ChampionRecord, ChampionRole, ChampionTag, Tier
from draftboard.utils.role_normalizer import normalize_role

logger = logging.getLogger(__name__)

DEFAULT_KNOWLEDGE_DIR = Path(__file__).parents[4] / "knowledge"
DEFAULT_CHAMPIONS_FILE = "champions.json"


class CatalogError(ValueError):
    """Raised when the champion data file is missing or malformed."""


def _parse_rate(raw: dict, key: str) -> float:
    value = raw.get(key)
    if not isinstance(value, (int, float)) or isinstance(value, bool):
        raise CatalogError(f"Champion {raw.get('id')!r}: {key} must be a number")
    if not 0 <= value <= 100:
        raise CatalogError(f"Champion {raw.get('id')!r}: {key} {value} outside [0, 100]")
    return float(value)


def parse_champion(raw: dict) -> ChampionRecord:
    """Build a ChampionRecord from one JSON entry, validating vocabularies."""
    champ_id = raw.get("id")
    if not champ_id or not isinstance(champ_id, str):
        raise CatalogError(f"Champion entry without id: {raw!r}")

    role = normalize_role(raw.get("role"))
    if role is None:
        raise CatalogError(f"Champion {champ_id!r}: unknown role {raw.get('role')!r}")

    try:
        tags = frozenset(ChampionTag(tag) for tag in raw.get("tags", []))
    except ValueError as e:
        raise CatalogError(f"Champion {champ_id!r}: {e}") from e

    tier = raw.get("tier")
    if tier is not None:
        try:
            tier = Tier(tier)
        except ValueError as e:
            raise CatalogError(f"Champion {champ_id!r}: {e}") from e

    return ChampionRecord(
        id=champ_id,
        name=raw.get("name") or champ_id,
        role=ChampionRole(role),
        win_rate=_parse_rate(raw, "win_rate"),
        pick_rate=_parse_rate(raw, "pick_rate"),
        ban_rate=_parse_rate(raw, "ban_rate"),
        tags=tags,
        counters=tuple(raw.get("counters", [])),
        synergies=tuple(raw.get("synergies", [])),
        tier=tier,
    )


class ChampionCatalog:
    """Static lookup of champion records by id.

    Records keep their file order, which is also the tie-break order for
    recommendation sorting. ``counters``/``synergies`` entries are checked
    against the catalog once at construction; dangling ids are logged and
    tolerated (they never match anything).
    """

    def __init__(self, champions: Iterable[ChampionRecord]):
        self._champions: list[ChampionRecord] = []
        self._by_id: dict[str, ChampionRecord] = {}
        for champ in champions:
            if champ.id in self._by_id:
                raise CatalogError(f"Duplicate champion id: {champ.id!r}")
            self._by_id[champ.id] = champ
            self._champions.append(champ)
        self.dangling_references = self._find_dangling_references()
        if self.dangling_references:
            logger.warning(
                f"Champion catalog has {len(self.dangling_references)} dangling "
                f"counter/synergy references (ignored)"
            )

    @classmethod
    def from_file(cls, path: Path) -> "ChampionCatalog":
        """Load the catalog from a ``{"champions": [...]}`` JSON file."""
        if not path.exists():
            raise CatalogError(f"Champion data not found: {path}")
        try:
            with open(path) as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise CatalogError(f"Invalid champion data in {path}: {e}") from e

        entries = data.get("champions") if isinstance(data, dict) else data
        if not isinstance(entries, list):
            raise CatalogError(f"{path}: expected a list of champions")

        catalog = cls(parse_champion(raw) for raw in entries)
        logger.info(f"Loaded {len(catalog)} champions from {path}")
        return catalog

    def _find_dangling_references(self) -> set[tuple[str, str]]:
        dangling = set()
        for champ in self._champions:
            for ref in (*champ.counters, *champ.synergies):
                if ref not in self._by_id:
                    dangling.add((champ.id, ref))
        return dangling

    def __len__(self) -> int:
        return len(self._champions)

    def __contains__(self, champion_id: object) -> bool:
        return champion_id in self._by_id

    def get_by_id(self, champion_id: Optional[str]) -> Optional[ChampionRecord]:
        if champion_id is None:
            return None
        return self._by_id.get(champion_id)

    def all(self) -> list[ChampionRecord]:
        return list(self._champions)

    def by_role(self, role: str) -> list[ChampionRecord]:
        normalized = normalize_role(role)
        return [c for c in self._champions if c.role.value == normalized]

    def resolve(self, champion_ids: Iterable[Optional[str]]) -> list[ChampionRecord]:
        """Map ids to records, silently dropping empty slots and unknown ids."""
        resolved = []
        for champion_id in champion_ids:
            champ = self.get_by_id(champion_id)
            if champ is not None:
                resolved.append(champ)
        return resolved

    def available(self, unavailable: Iterable[str]) -> list[ChampionRecord]:
        """Catalog minus the given ids, in catalog order."""
        excluded = set(unavailable)
        return [c for c in self._champions if c.id not in excluded]

    def browse(
        self,
        unavailable: Iterable[str] = (),
        role: Optional[str] = None,
        search: Optional[str] = None,
        recommended: Iterable[str] = (),
    ) -> list[ChampionRecord]:
        """Champion selector listing.

        Filters out unavailable champions, optionally by role and by a
        case-insensitive name substring, then orders recommended champions
        first, then by tier (absent tier counts as B), then by name.
        """
        recommended_ids = set(recommended)
        normalized_role = normalize_role(role) if role else None
        needle = search.strip().lower() if search else ""

        champions = self.available(unavailable)
        if normalized_role:
            champions = [c for c in champions if c.role.value == normalized_role]
        if needle:
            champions = [c for c in champions if needle in c.name.lower()]

        return sorted(
            champions,
            key=lambda c: (
                0 if c.id in recommended_ids else 1,
                TIER_ORDER[c.sort_tier],
                c.name.lower(),
            ),
        )


def load_catalog(
    knowledge_dir: Optional[Path] = None,
    champions_file: str = DEFAULT_CHAMPIONS_FILE,
) -> ChampionCatalog:
    """Load the catalog from the knowledge directory (repo root by default)."""
    if knowledge_dir is None:
        knowledge_dir = DEFAULT_KNOWLEDGE_DIR
    return ChampionCatalog.from_file(Path(knowledge_dir) / champions_file)
