"""Recommendation models for draft suggestions."""

from dataclasses import dataclass, field
from typing import Optional

from draftboard.models.draft import ActionType, TeamSide


@dataclass
class Recommendation:
    """A recommended champion ban or pick."""

    champion_id: str
    score: float
    type: ActionType
    reasons: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "champion_id": self.champion_id,
            "score": self.score,
            "reasons": list(self.reasons),
            "type": self.type.value,
        }


@dataclass
class Recommendations:
    """Ranked recommendations for the team on the clock.

    ``source`` is "engine" for the deterministic ranker, "llm" when an
    external provider's answer was accepted, and "fallback" when the
    provider failed and the engine list was served instead.
    """

    for_team: Optional[TeamSide]
    action: Optional[ActionType]
    items: list[Recommendation] = field(default_factory=list)
    source: str = "engine"
    status: Optional[str] = None  # non-fatal provider error, if any

    @property
    def champion_ids(self) -> list[str]:
        return [rec.champion_id for rec in self.items]

    def to_dict(self) -> dict:
        return {
            "for_team": self.for_team.value if self.for_team else None,
            "action": self.action.value if self.action else None,
            "source": self.source,
            "status": self.status,
            "recommendations": [rec.to_dict() for rec in self.items],
        }
