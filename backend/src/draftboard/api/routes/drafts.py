"""REST endpoints for stateful draft sessions."""

from typing import Literal

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel

from draftboard.models.draft import TeamSide
from draftboard.services.draft_state_machine import DraftActionError
from draftboard.services.session_store import DraftSessionStore, SessionNotFoundError, StoredSession

router = APIRouter(prefix="/api/drafts", tags=["drafts"])


class SelectRequest(BaseModel):
    champion_id: str


def _store(request: Request) -> DraftSessionStore:
    return request.app.state.session_store


def _get_session(request: Request, session_id: str) -> StoredSession:
    try:
        return _store(request).get(session_id)
    except SessionNotFoundError:
        raise HTTPException(status_code=404, detail="Session not found")


@router.post("", status_code=201)
async def create_draft(request: Request):
    """Start a new draft session."""
    stored = _store(request).create()
    return stored.session.snapshot()


@router.get("/{session_id}")
async def get_draft(request: Request, session_id: str):
    """Current state plus analyses, win probability and recommendations."""
    stored = _get_session(request, session_id)
    with stored.lock:
        return stored.session.snapshot()


@router.delete("/{session_id}")
async def end_draft(request: Request, session_id: str):
    """End a session early."""
    if not _store(request).delete(session_id):
        raise HTTPException(status_code=404, detail="Session not found")
    return {"status": "ended"}


@router.post("/{session_id}/select")
async def select_champion(request: Request, session_id: str, body: SelectRequest):
    """Ban or pick for the team on the clock.

    Selections after the draft completes are ignored (``applied: false``).
    """
    stored = _get_session(request, session_id)
    with stored.lock:
        try:
            applied = stored.session.select(body.champion_id)
        except DraftActionError as e:
            raise HTTPException(status_code=400, detail=str(e))
        return {"applied": applied, **stored.session.snapshot()}


@router.post("/{session_id}/reset")
async def reset_draft(request: Request, session_id: str):
    stored = _get_session(request, session_id)
    with stored.lock:
        stored.timer.stop()
        stored.session.reset()
        return stored.session.snapshot()


@router.post("/{session_id}/timer/toggle")
async def toggle_timer(request: Request, session_id: str):
    """Start or pause the turn timer."""
    stored = _get_session(request, session_id)
    with stored.lock:
        running = stored.session.toggle_timer()
        if running:
            stored.timer.start()
        else:
            stored.timer.stop()
        return stored.session.snapshot()


@router.post("/{session_id}/timer/tick")
async def tick_timer(request: Request, session_id: str):
    """Advance the timer by one second (clients driving their own clock)."""
    stored = _get_session(request, session_id)
    with stored.lock:
        changed = stored.session.tick()
        return {"changed": changed, **stored.session.snapshot()}


@router.get("/{session_id}/recommendations")
async def get_recommendations(
    request: Request,
    session_id: str,
    source: Literal["engine", "llm"] = "engine",
):
    """Recommendations for the current turn.

    ``source=llm`` asks the LLM advisor; its answer is validated against
    the draft and replaced by the engine list (``source: fallback``) when
    the advisor is disabled, fails, or suggests nothing legal.
    """
    stored = _get_session(request, session_id)
    session = stored.session
    if source == "engine":
        with stored.lock:
            return session.recommendations.to_dict()

    # No lock across the await: the timer task shares it on this loop, and
    # external_recommendations rejects answers for a turn that has passed.
    advisor = request.app.state.llm_advisor
    settings = request.app.state.settings
    result = await session.external_recommendations(advisor, timeout=settings.llm_timeout)
    return result.to_dict()


@router.get("/{session_id}/analysis")
async def get_analysis(request: Request, session_id: str, team: Literal["blue", "red"] | None = None):
    """Composition scorecards and win probability."""
    stored = _get_session(request, session_id)
    session = stored.session
    with stored.lock:
        if team:
            return session.analysis_for(TeamSide(team)).to_dict()
        return {
            "blue_analysis": session.blue_analysis.to_dict(),
            "red_analysis": session.red_analysis.to_dict(),
            "win_probability": session.win_probability.to_dict(),
        }
