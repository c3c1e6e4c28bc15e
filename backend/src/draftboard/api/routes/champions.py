"""Champion catalog endpoints."""

from typing import Optional

from fastapi import APIRouter, HTTPException, Query, Request

from draftboard.repositories.champion_repository import ChampionCatalog

router = APIRouter(prefix="/api/champions", tags=["champions"])


def _catalog(request: Request) -> ChampionCatalog:
    return request.app.state.catalog


@router.get("")
async def list_champions(
    request: Request,
    role: Optional[str] = None,
    search: Optional[str] = None,
    exclude: list[str] = Query(default=[]),
    recommended: list[str] = Query(default=[]),
):
    """Champion selector listing.

    ``exclude`` holds banned/picked ids; ``recommended`` ids sort first.
    """
    champions = _catalog(request).browse(
        unavailable=exclude,
        role=role,
        search=search,
        recommended=recommended,
    )
    return {"champions": [c.to_dict() for c in champions], "count": len(champions)}


@router.get("/{champion_id}")
async def get_champion(request: Request, champion_id: str):
    champion = _catalog(request).get_by_id(champion_id)
    if champion is None:
        raise HTTPException(status_code=404, detail=f"Champion '{champion_id}' not found")
    return champion.to_dict()
