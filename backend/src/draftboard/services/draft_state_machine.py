"""Turn-by-turn draft progression over the fixed draft order."""

from typing import Optional

from draftboard.models.draft import DRAFT_ORDER, TURN_TIMER_SECONDS, DraftState, DraftStep
from draftboard.repositories.champion_repository import ChampionCatalog


class DraftActionError(ValueError):
    """Raised for a selection the draft cannot accept."""


class DraftStateMachine:
    """Owns one DraftState and the only legal ways to mutate it.

    Every selection fills exactly the slot named by the current step of
    DRAFT_ORDER and advances the turn by one. Filled slots are never
    cleared except by ``reset``.
    """

    def __init__(self, catalog: Optional[ChampionCatalog] = None):
        """Initialize the state machine.

        Args:
            catalog: Optional catalog used to reject unknown champion ids.
                Without it any id not already unavailable is accepted.
        """
        self.catalog = catalog
        self.state = DraftState()

    def current_turn_info(self) -> Optional[DraftStep]:
        """The step to act on, or None once the draft is complete."""
        if self.state.is_complete:
            return None
        return DRAFT_ORDER[self.state.current_turn]

    def unavailable_champion_ids(self) -> set[str]:
        """All banned or picked champion ids."""
        return self.state.unavailable_ids()

    def select(self, champion_id: str) -> DraftStep:
        """Ban or pick ``champion_id`` for the team on the clock.

        Returns:
            The step that was filled.

        Raises:
            DraftActionError: If the draft is complete, the champion is
                already banned/picked, or it is not in the attached catalog.
        """
        step = self.current_turn_info()
        if step is None:
            raise DraftActionError("Draft is complete; no further selections allowed")
        if champion_id in self.unavailable_champion_ids():
            raise DraftActionError(f"Champion '{champion_id}' is already banned or picked")
        if self.catalog is not None and champion_id not in self.catalog:
            raise DraftActionError(f"Unknown champion '{champion_id}'")

        self.state.slots(step.team, step.type)[step.index] = champion_id
        self.state.current_turn += 1
        self.state.timer = TURN_TIMER_SECONDS
        if self.state.is_complete:
            self.state.is_timer_running = False
        return step

    def reset(self) -> None:
        """Replace the state with a fresh draft."""
        self.state = DraftState()

    def toggle_timer(self) -> bool:
        """Flip the running flag; returns the new value.

        A completed draft keeps its timer stopped.
        """
        if self.state.is_complete:
            self.state.is_timer_running = False
            return False
        self.state.is_timer_running = not self.state.is_timer_running
        return self.state.is_timer_running

    def tick(self) -> bool:
        """Advance the turn timer by one second.

        The timer is a pressure cue only: it wraps back to the full turn
        length instead of reaching zero and never forfeits the turn.

        Returns:
            True if the timer changed.
        """
        state = self.state
        if not state.is_timer_running or state.is_complete:
            return False
        state.timer = TURN_TIMER_SECONDS if state.timer <= 1 else state.timer - 1
        return True
