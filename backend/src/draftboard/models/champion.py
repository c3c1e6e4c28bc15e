"""Champion catalog record and its closed vocabularies."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class ChampionRole(str, Enum):
    """Lane a champion is catalogued under."""

    TOP = "top"
    JUNGLE = "jungle"
    MID = "mid"
    ADC = "adc"
    SUPPORT = "support"


class ChampionTag(str, Enum):
    """Archetype labels used only for composition scoring."""

    TANK = "tank"
    FIGHTER = "fighter"
    ASSASSIN = "assassin"
    MAGE = "mage"
    MARKSMAN = "marksman"
    SUPPORT = "support"
    ENGAGE = "engage"
    POKE = "poke"
    SCALING = "scaling"
    EARLY_GAME = "early-game"
    CC = "cc"
    BURST = "burst"
    SUSTAIN = "sustain"
    SPLIT_PUSH = "split-push"


class Tier(str, Enum):
    """Coarse human-assigned strength rank, S best."""

    S = "S"
    A = "A"
    B = "B"
    C = "C"
    D = "D"


TIER_ORDER = {Tier.S: 0, Tier.A: 1, Tier.B: 2, Tier.C: 3, Tier.D: 4}


@dataclass(frozen=True)
class ChampionRecord:
    """One immutable catalog entry."""

    id: str
    name: str
    role: ChampionRole
    win_rate: float  # 0-100
    pick_rate: float  # 0-100
    ban_rate: float  # 0-100
    tags: frozenset[ChampionTag] = field(default_factory=frozenset)
    counters: tuple[str, ...] = ()  # ids this champion is strong against
    synergies: tuple[str, ...] = ()
    tier: Optional[Tier] = None

    def has_tag(self, tag: ChampionTag) -> bool:
        return tag in self.tags

    def counters_champion(self, other: "ChampionRecord") -> bool:
        """True if this champion declares a counter against ``other``."""
        return other.id in self.counters

    def synergizes_with(self, other: "ChampionRecord") -> bool:
        """Synergy checked in both directions."""
        return other.id in self.synergies or self.id in other.synergies

    @property
    def sort_tier(self) -> Tier:
        """Tier used for ordering; an absent tier sorts as B."""
        return self.tier or Tier.B

    def to_dict(self) -> dict:
        """Serialize to dictionary for JSON response."""
        return {
            "id": self.id,
            "name": self.name,
            "role": self.role.value,
            "win_rate": self.win_rate,
            "pick_rate": self.pick_rate,
            "ban_rate": self.ban_rate,
            "tags": sorted(tag.value for tag in self.tags),
            "counters": list(self.counters),
            "synergies": list(self.synergies),
            "tier": self.tier.value if self.tier else None,
        }
