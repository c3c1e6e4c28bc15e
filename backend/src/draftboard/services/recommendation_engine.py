"""Ranked ban/pick recommendations for the team on the clock."""

from typing import Optional

from draftboard.models.champion import ChampionRecord, ChampionTag, Tier
from draftboard.models.draft import ActionType, DraftState, DraftStep
from draftboard.models.recommendations import Recommendation
from draftboard.repositories.champion_repository import ChampionCatalog

DEFAULT_LIMIT = 5

# Ban weights
BAN_WIN_RATE_WEIGHT = 0.5
BAN_PICK_RATE_WEIGHT = 0.3
BAN_TIER_BONUS = {Tier.S: 15, Tier.A: 8}
BAN_ALLY_THREAT_BONUS = 10
HIGH_WIN_RATE = 51
POPULAR_PICK_RATE = 8

# Pick weights
PICK_WIN_RATE_WEIGHT = 0.4
PICK_TIER_BONUS = {Tier.S: 20, Tier.A: 12}
ROLE_FILL_BONUS = 15
ROLE_DUPLICATE_PENALTY = -10
COUNTER_ENEMY_BONUS = 12
ALLY_SYNERGY_BONUS = 8
TAG_SYNERGY_BONUS = 5


def _names(champions: list[ChampionRecord]) -> str:
    return ", ".join(c.name for c in champions)


class RecommendationEngine:
    """Scores every available champion additively and keeps the top N.

    Reasons mirror the bonuses that fired; they never affect ordering. Ties
    keep catalog order (stable sort).
    """

    def __init__(self, catalog: ChampionCatalog):
        self.catalog = catalog

    def candidate_pool(self, state: DraftState) -> list[ChampionRecord]:
        """Catalog minus every banned or picked champion."""
        return self.catalog.available(state.unavailable_ids())

    def recommend(
        self,
        state: DraftState,
        turn: Optional[DraftStep],
        limit: int = DEFAULT_LIMIT,
    ) -> list[Recommendation]:
        """Top ``limit`` bans or picks for ``turn``; empty once the draft is over."""
        if turn is None:
            return []

        available = self.candidate_pool(state)
        allies = self.catalog.resolve(state.picks_for(turn.team))
        enemies = self.catalog.resolve(state.picks_for(turn.team.opponent))

        if turn.type == ActionType.BAN:
            scored = [self._score_ban(champ, allies) for champ in available]
        else:
            scored = [self._score_pick(champ, allies, enemies) for champ in available]

        scored.sort(key=lambda rec: rec.score, reverse=True)
        return scored[:limit]

    def _score_ban(self, champ: ChampionRecord, allies: list[ChampionRecord]) -> Recommendation:
        score = champ.win_rate * BAN_WIN_RATE_WEIGHT + champ.pick_rate * BAN_PICK_RATE_WEIGHT
        reasons = []
        if champ.win_rate > HIGH_WIN_RATE:
            reasons.append(f"High win rate ({champ.win_rate:.1f}%)")
        if champ.pick_rate > POPULAR_PICK_RATE:
            reasons.append(f"Popular pick ({champ.pick_rate:.1f}% pick rate)")

        if champ.tier in BAN_TIER_BONUS:
            score += BAN_TIER_BONUS[champ.tier]
            reasons.append(f"{champ.tier.value}-tier champion")

        # Threatens our picks in either direction
        threatened = [
            ally for ally in allies
            if champ.counters_champion(ally) or ally.counters_champion(champ)
        ]
        if threatened:
            score += len(threatened) * BAN_ALLY_THREAT_BONUS
            reasons.append(f"Counters your {_names(threatened)}")

        return Recommendation(champion_id=champ.id, score=score, type=ActionType.BAN, reasons=reasons)

    def _score_pick(
        self,
        champ: ChampionRecord,
        allies: list[ChampionRecord],
        enemies: list[ChampionRecord],
    ) -> Recommendation:
        score = champ.win_rate * PICK_WIN_RATE_WEIGHT
        reasons = []
        if champ.win_rate > HIGH_WIN_RATE:
            reasons.append(f"Strong win rate ({champ.win_rate:.1f}%)")

        if champ.tier in PICK_TIER_BONUS:
            score += PICK_TIER_BONUS[champ.tier]
            reasons.append(f"{champ.tier.value}-tier champion")

        if champ.role not in {ally.role for ally in allies}:
            score += ROLE_FILL_BONUS
            reasons.append(f"Fills {champ.role.value} role")
        else:
            score += ROLE_DUPLICATE_PENALTY

        countered = [enemy for enemy in enemies if champ.counters_champion(enemy)]
        if countered:
            score += len(countered) * COUNTER_ENEMY_BONUS
            reasons.append(f"Counters enemy {_names(countered)}")

        partners = [ally for ally in allies if champ.synergizes_with(ally)]
        if partners:
            score += len(partners) * ALLY_SYNERGY_BONUS
            reasons.append(f"Synergizes with {_names(partners)}")

        if champ.has_tag(ChampionTag.CC) and any(a.has_tag(ChampionTag.ENGAGE) for a in allies):
            score += TAG_SYNERGY_BONUS
            reasons.append("Adds follow-up CC")
        if champ.has_tag(ChampionTag.TANK) and any(a.has_tag(ChampionTag.SCALING) for a in allies):
            score += TAG_SYNERGY_BONUS
            reasons.append("Provides frontline for scaling carries")

        return Recommendation(champion_id=champ.id, score=score, type=ActionType.PICK, reasons=reasons)
