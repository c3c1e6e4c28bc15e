"""Team composition scorecard from champion tags and win rates."""

from collections import Counter
from dataclasses import dataclass
from typing import Iterable, Literal, Optional

from draftboard.models.analysis import CompositionAnalysis
from draftboard.models.champion import ChampionTag as Tag
from draftboard.repositories.champion_repository import ChampionCatalog
from draftboard.utils import round_half_up

SCORE_CEILING = 100

# Warning thresholds (only evaluated once enough champions are locked in)
LOW_FRONTLINE_THRESHOLD = 40
LIMITED_CC_THRESHOLD = 35
NO_ENGAGE_THRESHOLD = 30
LOW_DAMAGE_THRESHOLD = 50
MIN_PICKS_FOR_WARNINGS = 3
MIN_PICKS_FOR_ENGAGE_WARNING = 4

# Strength thresholds
STRONG_TEAMFIGHT_THRESHOLD = 70
STRONG_EARLY_GAME_THRESHOLD = 70
STRONG_SCALING_THRESHOLD = 75
STRONG_SPLIT_PUSH_THRESHOLD = 60
STRONG_POKE_THRESHOLD = 65


@dataclass(frozen=True)
class CompositionRule:
    """A threshold on one scorecard field that emits a message."""

    metric: str
    threshold: float
    above: bool  # True fires on metric > threshold, False on metric < threshold
    message: str
    min_champions: int = 0

    def fires(self, scores: dict[str, float], champion_count: int) -> bool:
        if champion_count < self.min_champions:
            return False
        value = scores[self.metric]
        return value > self.threshold if self.above else value < self.threshold


WARNING_RULES: tuple[CompositionRule, ...] = (
    CompositionRule("tankiness", LOW_FRONTLINE_THRESHOLD, False, "Low frontline", MIN_PICKS_FOR_WARNINGS),
    CompositionRule("cc", LIMITED_CC_THRESHOLD, False, "Limited CC", MIN_PICKS_FOR_WARNINGS),
    CompositionRule("engage", NO_ENGAGE_THRESHOLD, False, "No reliable engage", MIN_PICKS_FOR_ENGAGE_WARNING),
    CompositionRule("damage", LOW_DAMAGE_THRESHOLD, False, "Low damage output", MIN_PICKS_FOR_WARNINGS),
)

COMPACT_STRENGTH_RULES: tuple[CompositionRule, ...] = (
    CompositionRule("teamfight", STRONG_TEAMFIGHT_THRESHOLD, True, "Strong teamfight"),
    CompositionRule("early_game", STRONG_EARLY_GAME_THRESHOLD, True, "Powerful early game"),
    CompositionRule("late_game", STRONG_SCALING_THRESHOLD, True, "Excellent scaling"),
    CompositionRule("split_push", STRONG_SPLIT_PUSH_THRESHOLD, True, "Good split-push"),
)

FULL_STRENGTH_RULES: tuple[CompositionRule, ...] = COMPACT_STRENGTH_RULES + (
    CompositionRule("poke", STRONG_POKE_THRESHOLD, True, "Strong poke and siege"),
)

STRENGTH_PROFILES = {
    "full": FULL_STRENGTH_RULES,
    "compact": COMPACT_STRENGTH_RULES,
}


class CompositionAnalyzer:
    """Scores a team's picks on ten 0-100 axes.

    Each axis is a fixed linear formula over tag counts; early and late game
    also shift with the team's average win rate. All axes except mid game
    are capped at 100. Mid game is the average of early and late plus 10
    and is deliberately left uncapped.
    """

    def __init__(
        self,
        catalog: ChampionCatalog,
        profile: Literal["full", "compact"] = "full",
        warning_rules: Optional[tuple[CompositionRule, ...]] = None,
        strength_rules: Optional[tuple[CompositionRule, ...]] = None,
    ):
        self.catalog = catalog
        self.warning_rules = warning_rules if warning_rules is not None else WARNING_RULES
        self.strength_rules = (
            strength_rules if strength_rules is not None else STRENGTH_PROFILES[profile]
        )

    def analyze(self, picks: Iterable[Optional[str]]) -> CompositionAnalysis:
        """Build the scorecard for one team's pick slots."""
        champions = self.catalog.resolve(picks)
        if not champions:
            return CompositionAnalysis.neutral()

        tags = Counter(tag for champ in champions for tag in champ.tags)
        avg_win_rate = sum(c.win_rate for c in champions) / len(champions)
        win_rate_adj = (avg_win_rate - 50) * 2

        def capped(value: float) -> float:
            return min(SCORE_CEILING, value)

        early_game = capped(40 + tags[Tag.EARLY_GAME] * 15 + win_rate_adj)
        late_game = capped(40 + tags[Tag.SCALING] * 15 + win_rate_adj)
        scores = {
            "early_game": early_game,
            "mid_game": (early_game + late_game) / 2 + 10,
            "late_game": late_game,
            "teamfight": capped(30 + tags[Tag.ENGAGE] * 15 + tags[Tag.CC] * 10 + tags[Tag.TANK] * 10),
            "split_push": capped(20 + tags[Tag.SPLIT_PUSH] * 25),
            "engage": capped(20 + tags[Tag.ENGAGE] * 20),
            "poke": capped(20 + tags[Tag.POKE] * 20),
            "tankiness": capped(20 + tags[Tag.TANK] * 20 + tags[Tag.FIGHTER] * 8),
            "damage": capped(
                30
                + tags[Tag.ASSASSIN] * 15
                + tags[Tag.MAGE] * 12
                + tags[Tag.MARKSMAN] * 15
                + tags[Tag.BURST] * 10
            ),
            "cc": capped(20 + tags[Tag.CC] * 18 + tags[Tag.ENGAGE] * 10),
        }

        count = len(champions)
        warnings = tuple(r.message for r in self.warning_rules if r.fires(scores, count))
        strengths = tuple(r.message for r in self.strength_rules if r.fires(scores, count))

        return CompositionAnalysis(
            **{metric: round_half_up(value) for metric, value in scores.items()},
            warnings=warnings,
            strengths=strengths,
        )
