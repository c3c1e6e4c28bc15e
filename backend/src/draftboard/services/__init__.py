"""Business logic services."""

from draftboard.services.composition_analyzer import CompositionAnalyzer
from draftboard.services.draft_session import DraftSession, RecommendationProvider
from draftboard.services.draft_state_machine import DraftActionError, DraftStateMachine
from draftboard.services.draft_timer import DraftTimer
from draftboard.services.llm_advisor import AdvisorError, LLMAdvisor
from draftboard.services.recommendation_engine import RecommendationEngine
from draftboard.services.session_store import DraftSessionStore, SessionNotFoundError
from draftboard.services.win_probability_estimator import WinProbabilityEstimator

__all__ = [
    "CompositionAnalyzer",
    "DraftSession",
    "RecommendationProvider",
    "DraftActionError",
    "DraftStateMachine",
    "DraftTimer",
    "AdvisorError",
    "LLMAdvisor",
    "RecommendationEngine",
    "DraftSessionStore",
    "SessionNotFoundError",
    "WinProbabilityEstimator",
]
