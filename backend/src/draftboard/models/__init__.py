"""Data models for the draft simulator."""

from draftboard.models.champion import ChampionRecord, ChampionRole, ChampionTag, Tier
from draftboard.models.draft import (
    DRAFT_ORDER,
    TURN_TIMER_SECONDS,
    ActionType,
    DraftPhase,
    DraftState,
    DraftStep,
    TeamSide,
)
from draftboard.models.analysis import CompositionAnalysis, WinFactor, WinProbability
from draftboard.models.recommendations import Recommendation, Recommendations

__all__ = [
    "ChampionRecord",
    "ChampionRole",
    "ChampionTag",
    "Tier",
    "DRAFT_ORDER",
    "TURN_TIMER_SECONDS",
    "ActionType",
    "DraftPhase",
    "DraftState",
    "DraftStep",
    "TeamSide",
    "CompositionAnalysis",
    "WinFactor",
    "WinProbability",
    "Recommendation",
    "Recommendations",
]
