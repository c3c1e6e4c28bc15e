"""Heuristic win probability from two team scorecards."""

from typing import Optional, Sequence

from draftboard.models.analysis import CompositionAnalysis, WinFactor, WinProbability
from draftboard.models.champion import ChampionRecord
from draftboard.models.draft import TeamSide
from draftboard.repositories.champion_repository import ChampionCatalog
from draftboard.utils import round_half_up

BASELINE_SCORE = 50.0
MIN_PROBABILITY = 20.0
MAX_PROBABILITY = 80.0

WIN_RATE_WEIGHT = 0.8
WIN_RATE_MIN_DIFF = 0.5
BALANCE_WEIGHT = 0.1
BALANCE_MIN_IMPACT = 1.0
COUNTER_WEIGHT = 2
TEAMFIGHT_GAP = 15
TEAMFIGHT_BONUS = 3.0


def _favored(diff: float) -> TeamSide:
    return TeamSide.BLUE if diff > 0 else TeamSide.RED


def _mean_win_rate(champions: list[ChampionRecord]) -> float:
    if not champions:
        return BASELINE_SCORE
    return sum(c.win_rate for c in champions) / len(champions)


def _balance(analysis: CompositionAnalysis) -> float:
    return (analysis.tankiness + analysis.damage + analysis.cc) / 3


class WinProbabilityEstimator:
    """Starts blue at 50 and applies four factors in a fixed order.

    Factors below their threshold contribute nothing and are not reported.
    The final estimate is clamped to 20-80: a draft alone never decides a
    game more decisively than that.
    """

    def __init__(self, catalog: ChampionCatalog):
        self.catalog = catalog

    def estimate(
        self,
        blue_analysis: CompositionAnalysis,
        red_analysis: CompositionAnalysis,
        blue_picks: Sequence[Optional[str]],
        red_picks: Sequence[Optional[str]],
    ) -> WinProbability:
        blue_champs = self.catalog.resolve(blue_picks)
        red_champs = self.catalog.resolve(red_picks)
        if not blue_champs and not red_champs:
            return WinProbability.even()

        blue_score = BASELINE_SCORE
        factors: list[WinFactor] = []

        # Win rate differential
        win_rate_diff = _mean_win_rate(blue_champs) - _mean_win_rate(red_champs)
        if abs(win_rate_diff) > WIN_RATE_MIN_DIFF:
            impact = win_rate_diff * WIN_RATE_WEIGHT
            blue_score += impact
            factors.append(WinFactor("Champion win rates", abs(impact), _favored(win_rate_diff)))

        # Composition balance
        balance_diff = (_balance(blue_analysis) - _balance(red_analysis)) * BALANCE_WEIGHT
        if abs(balance_diff) > BALANCE_MIN_IMPACT:
            blue_score += balance_diff
            factors.append(WinFactor("Team composition balance", abs(balance_diff), _favored(balance_diff)))

        # Counter matchups over every blue/red pair
        blue_counters = sum(1 for b in blue_champs for r in red_champs if b.counters_champion(r))
        red_counters = sum(1 for b in blue_champs for r in red_champs if r.counters_champion(b))
        counter_diff = (blue_counters - red_counters) * COUNTER_WEIGHT
        if counter_diff != 0:
            blue_score += counter_diff
            factors.append(WinFactor("Counter-pick advantage", abs(counter_diff), _favored(counter_diff)))

        # Teamfight superiority
        if blue_analysis.teamfight > red_analysis.teamfight + TEAMFIGHT_GAP:
            blue_score += TEAMFIGHT_BONUS
            factors.append(WinFactor("Teamfight superiority", TEAMFIGHT_BONUS, TeamSide.BLUE))
        elif red_analysis.teamfight > blue_analysis.teamfight + TEAMFIGHT_GAP:
            blue_score -= TEAMFIGHT_BONUS
            factors.append(WinFactor("Teamfight superiority", TEAMFIGHT_BONUS, TeamSide.RED))

        blue_score = max(MIN_PROBABILITY, min(MAX_PROBABILITY, blue_score))
        blue_probability = round_half_up(blue_score)

        return WinProbability(
            blue_win_probability=blue_probability,
            red_win_probability=100 - blue_probability,
            factors=tuple(factors),
        )
