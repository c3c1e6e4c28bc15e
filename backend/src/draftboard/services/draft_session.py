"""One draft session: state machine plus its derived views."""

from __future__ import annotations

import asyncio
import logging
import time
import uuid
from typing import Literal, Optional, Protocol

from draftboard.models.analysis import CompositionAnalysis, WinProbability
from draftboard.models.champion import ChampionRecord
from draftboard.models.draft import DraftState, DraftStep, TeamSide
from draftboard.models.recommendations import Recommendation, Recommendations
from draftboard.repositories.champion_repository import ChampionCatalog
from draftboard.services.composition_analyzer import CompositionAnalyzer
from draftboard.services.draft_state_machine import DraftStateMachine
from draftboard.services.recommendation_engine import DEFAULT_LIMIT, RecommendationEngine
from draftboard.services.win_probability_estimator import WinProbabilityEstimator

logger = logging.getLogger(__name__)

DEFAULT_PROVIDER_TIMEOUT = 15.0


class RecommendationProvider(Protocol):
    """An alternative, external source of recommendations."""

    async def recommend(
        self,
        state: DraftState,
        turn: DraftStep,
        candidates: list[ChampionRecord],
        limit: int = DEFAULT_LIMIT,
    ) -> list[Recommendation]:
        ...


class DraftSession:
    """Orchestrates one draft.

    Every mutating command (select, reset, toggle_timer, tick) runs the
    on-change hook ``recompute`` synchronously, so the scorecards, win
    probability and recommendations always describe the current state.
    Recompute is pure: running it twice on the same state gives the same
    views.
    """

    def __init__(
        self,
        catalog: ChampionCatalog,
        session_id: Optional[str] = None,
        profile: Literal["full", "compact"] = "full",
        limit: int = DEFAULT_LIMIT,
    ):
        self.session_id = session_id or f"draft_{uuid.uuid4().hex[:12]}"
        self.catalog = catalog
        self.limit = limit
        self.created_at = time.time()
        self.last_access = self.created_at

        self.machine = DraftStateMachine(catalog)
        self.analyzer = CompositionAnalyzer(catalog, profile=profile)
        self.estimator = WinProbabilityEstimator(catalog)
        self.ranker = RecommendationEngine(catalog)

        self.blue_analysis = CompositionAnalysis.neutral()
        self.red_analysis = CompositionAnalysis.neutral()
        self.win_probability = WinProbability.even()
        self.recommendations = Recommendations(for_team=None, action=None)
        self.recompute()

    @classmethod
    def from_state(
        cls,
        catalog: ChampionCatalog,
        state: DraftState,
        profile: Literal["full", "compact"] = "full",
        limit: int = DEFAULT_LIMIT,
    ) -> "DraftSession":
        """A throwaway session positioned at ``state`` with its views derived."""
        session = cls(catalog, profile=profile, limit=limit)
        session.machine.state = state
        session.recompute()
        return session

    @property
    def state(self) -> DraftState:
        return self.machine.state

    def current_turn_info(self) -> Optional[DraftStep]:
        return self.machine.current_turn_info()

    def unavailable_champion_ids(self) -> set[str]:
        return self.machine.unavailable_champion_ids()

    # Commands

    def select(self, champion_id: str) -> bool:
        """Ban or pick for the team on the clock.

        Returns:
            False (and changes nothing) once the draft is complete.

        Raises:
            DraftActionError: If the champion is unknown or unavailable.
        """
        if self.current_turn_info() is None:
            logger.info(f"Session {self.session_id}: ignoring selection after draft completion")
            return False
        step = self.machine.select(champion_id)
        logger.debug(
            f"Session {self.session_id}: {step.team.value} {step.type.value} "
            f"{step.index + 1} -> {champion_id}"
        )
        self.recompute()
        return True

    def reset(self) -> None:
        self.machine.reset()
        self.blue_analysis = CompositionAnalysis.neutral()
        self.red_analysis = CompositionAnalysis.neutral()
        self.win_probability = WinProbability.even()
        self.recommendations = Recommendations(for_team=None, action=None)
        self.recompute()

    def toggle_timer(self) -> bool:
        running = self.machine.toggle_timer()
        self.recompute()
        return running

    def tick(self) -> bool:
        changed = self.machine.tick()
        self.recompute()
        return changed

    # Derived views

    def recompute(self) -> None:
        """Rebuild every derived view from the current state."""
        state = self.state
        turn = self.current_turn_info()

        self.blue_analysis = self.analyzer.analyze(state.blue_picks)
        self.red_analysis = self.analyzer.analyze(state.red_picks)
        self.win_probability = self.estimator.estimate(
            self.blue_analysis, self.red_analysis, state.blue_picks, state.red_picks
        )
        self.recommendations = Recommendations(
            for_team=turn.team if turn else None,
            action=turn.type if turn else None,
            items=self.ranker.recommend(state, turn, limit=self.limit),
        )

    def candidate_pool(self) -> list[ChampionRecord]:
        return self.ranker.candidate_pool(self.state)

    async def external_recommendations(
        self,
        provider: Optional[RecommendationProvider],
        limit: Optional[int] = None,
        timeout: float = DEFAULT_PROVIDER_TIMEOUT,
        source: str = "llm",
    ) -> Recommendations:
        """Recommendations from ``provider``, falling back to the engine.

        The provider's answer is only trusted after validation against the
        draft as it stands when the answer arrives: entries for champions
        outside the candidate pool or of the wrong action type are dropped,
        and the rest truncated to ``limit``. Any provider failure, timeout or
        an empty validated list yields the engine's list with
        ``source="fallback"`` and the reason in ``status``.
        """
        limit = limit or self.limit
        turn = self.current_turn_info()
        if turn is None:
            return Recommendations(for_team=None, action=None)

        if provider is None:
            return self._fallback("External provider not configured")

        try:
            suggestions = await asyncio.wait_for(
                provider.recommend(self.state, turn, self.candidate_pool(), limit),
                timeout=timeout,
            )
        except asyncio.TimeoutError:
            logger.error(f"Session {self.session_id}: external provider timed out after {timeout}s")
            return self._fallback("External provider timed out")
        except Exception as e:
            logger.error(f"Session {self.session_id}: external provider failed: {e}")
            return self._fallback(f"External provider failed: {str(e)[:100]}")

        if self.current_turn_info() != turn:
            logger.info(f"Session {self.session_id}: discarding stale external recommendations")
            return self._fallback("Draft advanced while waiting for external provider")

        accepted = self.validate_external(suggestions, turn, limit)
        if not accepted:
            return self._fallback("External provider returned no legal recommendations")

        return Recommendations(
            for_team=turn.team,
            action=turn.type,
            items=accepted,
            source=source,
        )

    def validate_external(
        self,
        suggestions: list[Recommendation],
        turn: DraftStep,
        limit: int,
    ) -> list[Recommendation]:
        """Keep legal, de-duplicated suggestions for ``turn``, at most ``limit``."""
        legal_ids = {c.id for c in self.candidate_pool()}
        accepted: list[Recommendation] = []
        seen: set[str] = set()
        for rec in suggestions:
            if rec.type != turn.type or rec.champion_id not in legal_ids or rec.champion_id in seen:
                logger.warning(
                    f"Session {self.session_id}: discarding illegal external "
                    f"{rec.type.value} suggestion '{rec.champion_id}'"
                )
                continue
            seen.add(rec.champion_id)
            accepted.append(rec)
        return accepted[:limit]

    def _fallback(self, status: str) -> Recommendations:
        return Recommendations(
            for_team=self.recommendations.for_team,
            action=self.recommendations.action,
            items=list(self.recommendations.items),
            source="fallback",
            status=status,
        )

    def analysis_for(self, team: TeamSide) -> CompositionAnalysis:
        return self.blue_analysis if team == TeamSide.BLUE else self.red_analysis

    def summary(self) -> dict:
        """Deterministic draft narrative, shaped like the LLM analysis."""
        turn = self.current_turn_info()
        active = turn.team if turn else self.state.active_team
        own = self.analysis_for(active)
        enemy = self.analysis_for(active.opponent)

        advice = []
        if own.strengths:
            advice.append(f"Play to your strengths: {', '.join(own.strengths).lower()}.")
        if own.warnings:
            advice.append(f"Cover your weaknesses: {', '.join(own.warnings).lower()}.")
        if enemy.warnings:
            advice.append(f"Exploit the enemy's {', '.join(enemy.warnings).lower()}.")
        if not advice:
            advice.append("Draft is balanced so far; prioritize strong meta picks.")

        return {
            "top_recommendations": [
                {
                    "champion_id": rec.champion_id,
                    "score": rec.score,
                    "reasoning": "; ".join(rec.reasons),
                }
                for rec in self.recommendations.items[:3]
            ],
            "composition_analysis": {
                "blue_team": self.blue_analysis.to_dict(),
                "red_team": self.red_analysis.to_dict(),
            },
            "win_probability": {
                "blue_win_chance": self.win_probability.blue_win_probability,
                "red_win_chance": self.win_probability.red_win_probability,
                "key_factors": [f.description for f in self.win_probability.factors],
            },
            "draft_weaknesses": {
                "blue_team": list(self.blue_analysis.warnings),
                "red_team": list(self.red_analysis.warnings),
            },
            "strategic_advice": " ".join(advice),
        }

    def snapshot(self) -> dict:
        """JSON-able view of the state and all derived views."""
        turn = self.current_turn_info()
        return {
            "session_id": self.session_id,
            "draft_state": self.state.to_dict(),
            "current_turn_info": turn.to_dict() if turn else None,
            "unavailable": sorted(self.unavailable_champion_ids()),
            "blue_analysis": self.blue_analysis.to_dict(),
            "red_analysis": self.red_analysis.to_dict(),
            "win_probability": self.win_probability.to_dict(),
            "recommendations": self.recommendations.to_dict(),
        }
