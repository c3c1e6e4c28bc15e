"""Stateless analysis endpoints.

Clients send the four slot arrays; every view is re-derived server-side
from them, never trusted from the client.
"""

import logging
from typing import Literal, Optional

from fastapi import APIRouter, Request
from pydantic import BaseModel

from draftboard.models.draft import DraftState
from draftboard.services.draft_session import DraftSession
from draftboard.services.llm_advisor import AdvisorError
from draftboard.services.recommendation_engine import DEFAULT_LIMIT

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["analysis"])


class DraftSlotsRequest(BaseModel):
    blue_bans: list[Optional[str]] = []
    red_bans: list[Optional[str]] = []
    blue_picks: list[Optional[str]] = []
    red_picks: list[Optional[str]] = []


class RecommendationsRequest(DraftSlotsRequest):
    source: Literal["engine", "llm"] = "engine"
    limit: int = DEFAULT_LIMIT


def _session_for(request: Request, body: DraftSlotsRequest, limit: int = DEFAULT_LIMIT) -> DraftSession:
    state = DraftState.from_slots(body.blue_bans, body.red_bans, body.blue_picks, body.red_picks)
    settings = request.app.state.settings
    return DraftSession.from_state(
        request.app.state.catalog,
        state,
        profile=settings.composition_profile,
        limit=max(1, min(limit, DEFAULT_LIMIT)),
    )


@router.post("/recommendations")
async def recommend(request: Request, body: RecommendationsRequest):
    """Ban/pick recommendations for the first empty slot of the draft order."""
    session = _session_for(request, body, body.limit)
    if body.source == "llm":
        settings = request.app.state.settings
        result = await session.external_recommendations(
            request.app.state.llm_advisor, timeout=settings.llm_timeout
        )
        return result.to_dict()
    return session.recommendations.to_dict()


@router.post("/analysis")
async def analyze(request: Request, body: DraftSlotsRequest):
    """Composition scorecards for both teams."""
    session = _session_for(request, body)
    return {
        "blue_analysis": session.blue_analysis.to_dict(),
        "red_analysis": session.red_analysis.to_dict(),
    }


@router.post("/win-probability")
async def win_probability(request: Request, body: DraftSlotsRequest):
    session = _session_for(request, body)
    return session.win_probability.to_dict()


@router.post("/draft-analysis")
async def draft_analysis(request: Request, body: DraftSlotsRequest):
    """Narrative draft analysis from the LLM, or a deterministic summary.

    The summary is served whenever the LLM is disabled or fails; ``status``
    carries the reason.
    """
    session = _session_for(request, body)
    advisor = request.app.state.llm_advisor
    if advisor is None:
        return {"source": "engine", "status": "LLM not configured", "analysis": session.summary()}

    try:
        analysis = await advisor.analyze_draft(session.state)
    except AdvisorError as e:
        logger.warning(f"Draft analysis fell back to summary: {e}")
        return {"source": "fallback", "status": str(e)[:100], "analysis": session.summary()}
    return {"source": "llm", "status": None, "analysis": analysis}
