"""Draft order, state and step models."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Sequence


class TeamSide(str, Enum):
    BLUE = "blue"
    RED = "red"

    @property
    def opponent(self) -> "TeamSide":
        return TeamSide.RED if self is TeamSide.BLUE else TeamSide.BLUE


class ActionType(str, Enum):
    BAN = "ban"
    PICK = "pick"


class DraftPhase(str, Enum):
    """Label of the current step, not a macro-stage.

    Ban and pick blocks interleave (bans 1-6, picks 1-6, bans 7-10,
    picks 7-10), so the phase flips back and forth during one draft.
    """

    BANNING = "banning"
    PICKING = "picking"
    COMPLETE = "complete"


@dataclass(frozen=True)
class DraftStep:
    """One entry of the draft order."""

    team: TeamSide
    type: ActionType
    index: int  # slot 0-4 within the team's bans or picks

    def to_dict(self) -> dict:
        return {"team": self.team.value, "type": self.type.value, "index": self.index}


def _step(team: str, action: str, index: int) -> DraftStep:
    return DraftStep(TeamSide(team), ActionType(action), index)


# Standard pro draft order
DRAFT_ORDER: tuple[DraftStep, ...] = (
    # Ban phase 1: 6 bans alternating, blue first
    _step("blue", "ban", 0), _step("red", "ban", 0),
    _step("blue", "ban", 1), _step("red", "ban", 1),
    _step("blue", "ban", 2), _step("red", "ban", 2),
    # Pick phase 1: B1, R1-R2, B2-B3, R3
    _step("blue", "pick", 0), _step("red", "pick", 0),
    _step("red", "pick", 1), _step("blue", "pick", 1),
    _step("blue", "pick", 2), _step("red", "pick", 2),
    # Ban phase 2: 4 bans alternating, red first
    _step("red", "ban", 3), _step("blue", "ban", 3),
    _step("red", "ban", 4), _step("blue", "ban", 4),
    # Pick phase 2: R4, B4-B5, R5
    _step("red", "pick", 3), _step("blue", "pick", 3),
    _step("blue", "pick", 4), _step("red", "pick", 4),
)

TURN_TIMER_SECONDS = 30
SLOTS_PER_TEAM = 5


def _empty_slots() -> list[Optional[str]]:
    return [None] * SLOTS_PER_TEAM


@dataclass
class DraftState:
    """Complete state of one draft session.

    ``phase`` and ``active_team`` are derived from ``current_turn`` and
    cannot be set independently.
    """

    current_turn: int = 0
    blue_bans: list[Optional[str]] = field(default_factory=_empty_slots)
    red_bans: list[Optional[str]] = field(default_factory=_empty_slots)
    blue_picks: list[Optional[str]] = field(default_factory=_empty_slots)
    red_picks: list[Optional[str]] = field(default_factory=_empty_slots)
    timer: int = TURN_TIMER_SECONDS
    is_timer_running: bool = False

    @classmethod
    def from_slots(
        cls,
        blue_bans: Sequence[Optional[str]] = (),
        red_bans: Sequence[Optional[str]] = (),
        blue_picks: Sequence[Optional[str]] = (),
        red_picks: Sequence[Optional[str]] = (),
    ) -> "DraftState":
        """Rebuild a state from client-supplied slot arrays.

        Arrays are padded/truncated to five slots. The turn is the first
        step of DRAFT_ORDER whose slot is still empty.
        """

        def fit(slots: Sequence[Optional[str]]) -> list[Optional[str]]:
            fitted = [slot or None for slot in list(slots)[:SLOTS_PER_TEAM]]
            return fitted + [None] * (SLOTS_PER_TEAM - len(fitted))

        state = cls(
            blue_bans=fit(blue_bans),
            red_bans=fit(red_bans),
            blue_picks=fit(blue_picks),
            red_picks=fit(red_picks),
        )
        state.current_turn = next(
            (
                turn for turn, step in enumerate(DRAFT_ORDER)
                if state.slots(step.team, step.type)[step.index] is None
            ),
            len(DRAFT_ORDER),
        )
        return state

    @property
    def is_complete(self) -> bool:
        return self.current_turn >= len(DRAFT_ORDER)

    @property
    def phase(self) -> DraftPhase:
        if self.is_complete:
            return DraftPhase.COMPLETE
        if DRAFT_ORDER[self.current_turn].type == ActionType.BAN:
            return DraftPhase.BANNING
        return DraftPhase.PICKING

    @property
    def active_team(self) -> TeamSide:
        # Once complete, the team of the last step stays active
        return DRAFT_ORDER[min(self.current_turn, len(DRAFT_ORDER) - 1)].team

    def slots(self, team: TeamSide, action: ActionType) -> list[Optional[str]]:
        """The mutable slot list for a team/action pair."""
        if action == ActionType.BAN:
            return self.blue_bans if team == TeamSide.BLUE else self.red_bans
        return self.blue_picks if team == TeamSide.BLUE else self.red_picks

    def picks_for(self, team: TeamSide) -> list[Optional[str]]:
        return self.slots(team, ActionType.PICK)

    def unavailable_ids(self) -> set[str]:
        """Every banned or picked champion id (empty slots excluded)."""
        return {
            champion_id
            for slots in (self.blue_bans, self.red_bans, self.blue_picks, self.red_picks)
            for champion_id in slots
            if champion_id is not None
        }

    def to_dict(self) -> dict:
        """Serialize to dictionary for JSON response."""
        return {
            "phase": self.phase.value,
            "current_turn": self.current_turn,
            "blue_bans": list(self.blue_bans),
            "red_bans": list(self.red_bans),
            "blue_picks": list(self.blue_picks),
            "red_picks": list(self.red_picks),
            "timer": self.timer,
            "active_team": self.active_team.value,
            "is_timer_running": self.is_timer_running,
        }
