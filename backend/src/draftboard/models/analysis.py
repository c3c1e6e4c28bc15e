"""Composition scorecard and win probability models."""

from dataclasses import asdict, dataclass, field

from draftboard.models.draft import TeamSide


@dataclass(frozen=True)
class CompositionAnalysis:
    """Ten 0-100 scores plus warnings/strengths for one team."""

    early_game: int = 50
    mid_game: int = 50
    late_game: int = 50
    teamfight: int = 50
    split_push: int = 50
    engage: int = 50
    poke: int = 50
    tankiness: int = 50
    damage: int = 50
    cc: int = 50
    warnings: tuple[str, ...] = ()
    strengths: tuple[str, ...] = ()

    @classmethod
    def neutral(cls) -> "CompositionAnalysis":
        """Baseline scorecard for a team with no resolved picks."""
        return cls()

    def to_dict(self) -> dict:
        data = asdict(self)
        data["warnings"] = list(self.warnings)
        data["strengths"] = list(self.strengths)
        return data


@dataclass(frozen=True)
class WinFactor:
    """One contribution to the win probability estimate."""

    description: str
    impact: float  # absolute magnitude, unrounded
    favored_team: TeamSide

    def to_dict(self) -> dict:
        return {
            "description": self.description,
            "impact": self.impact,
            "favored_team": self.favored_team.value,
        }


@dataclass(frozen=True)
class WinProbability:
    blue_win_probability: int = 50
    red_win_probability: int = 50
    factors: tuple[WinFactor, ...] = field(default_factory=tuple)

    @classmethod
    def even(cls) -> "WinProbability":
        return cls()

    def to_dict(self) -> dict:
        return {
            "blue_win_probability": self.blue_win_probability,
            "red_win_probability": self.red_win_probability,
            "factors": [factor.to_dict() for factor in self.factors],
        }
