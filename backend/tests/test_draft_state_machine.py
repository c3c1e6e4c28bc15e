"""Tests for the draft state machine and draft order."""

import pytest

from draftboard.models.draft import (
    DRAFT_ORDER,
    TURN_TIMER_SECONDS,
    ActionType,
    DraftPhase,
    DraftState,
    DraftStep,
    TeamSide,
)
from draftboard.services.draft_state_machine import DraftActionError, DraftStateMachine


def _ids(shipped_catalog, count):
    return [c.id for c in shipped_catalog.all()[:count]]


class TestDraftOrder:
    def test_twenty_steps(self):
        assert len(DRAFT_ORDER) == 20

    def test_each_team_fills_five_bans_and_five_picks(self):
        for team in TeamSide:
            for action in ActionType:
                indexes = [s.index for s in DRAFT_ORDER if s.team == team and s.type == action]
                assert indexes == [0, 1, 2, 3, 4]

    def test_snake_pick_order(self):
        first_picks = [(s.team.value, s.type.value) for s in DRAFT_ORDER[6:12]]
        assert first_picks == [
            ("blue", "pick"), ("red", "pick"), ("red", "pick"),
            ("blue", "pick"), ("blue", "pick"), ("red", "pick"),
        ]
        assert DRAFT_ORDER[12] == DraftStep(TeamSide.RED, ActionType.BAN, 3)


class TestFreshDraft:
    def test_initial_state(self):
        machine = DraftStateMachine()
        state = machine.state
        assert state.current_turn == 0
        assert state.phase == DraftPhase.BANNING
        assert state.active_team == TeamSide.BLUE
        assert state.timer == TURN_TIMER_SECONDS
        assert state.is_timer_running is False
        assert state.blue_bans == [None] * 5
        assert machine.current_turn_info() == DraftStep(TeamSide.BLUE, ActionType.BAN, 0)
        assert machine.unavailable_champion_ids() == set()


class TestSelect:
    def test_full_ban_phase(self, shipped_catalog):
        machine = DraftStateMachine(shipped_catalog)
        banned = _ids(shipped_catalog, 6)
        for champion_id in banned:
            machine.select(champion_id)

        state = machine.state
        assert state.current_turn == 6
        assert state.phase == DraftPhase.PICKING
        assert state.active_team == TeamSide.BLUE
        assert machine.current_turn_info() == DraftStep(TeamSide.BLUE, ActionType.PICK, 0)
        assert state.blue_picks == [None] * 5
        assert state.red_picks == [None] * 5
        assert state.blue_bans[:3] == [banned[0], banned[2], banned[4]]
        assert state.red_bans[:3] == [banned[1], banned[3], banned[5]]
        assert machine.unavailable_champion_ids() == set(banned)

    def test_turn_advances_by_one_and_slots_never_change(self, shipped_catalog):
        machine = DraftStateMachine(shipped_catalog)
        history = []
        for turn, champion_id in enumerate(_ids(shipped_catalog, 20)):
            before = machine.state.current_turn
            step = machine.select(champion_id)
            assert step == DRAFT_ORDER[turn]
            assert machine.state.current_turn == before + 1
            history.append(step)
            for past_turn, past in enumerate(history):
                slots = machine.state.slots(past.team, past.type)
                assert slots[past.index] == shipped_catalog.all()[past_turn].id

        assert machine.state.is_complete
        assert machine.state.phase == DraftPhase.COMPLETE
        assert machine.current_turn_info() is None
        assert len(machine.unavailable_champion_ids()) == 20

    def test_unavailable_set_grows_by_one(self, shipped_catalog):
        machine = DraftStateMachine(shipped_catalog)
        for count, champion_id in enumerate(_ids(shipped_catalog, 8), start=1):
            machine.select(champion_id)
            assert len(machine.unavailable_champion_ids()) == count
            assert champion_id in machine.unavailable_champion_ids()

    def test_rejects_unavailable_champion(self, small_catalog):
        machine = DraftStateMachine(small_catalog)
        machine.select("Zed")
        with pytest.raises(DraftActionError, match="already banned or picked"):
            machine.select("Zed")
        assert machine.state.current_turn == 1

    def test_rejects_unknown_champion_with_catalog(self, small_catalog):
        machine = DraftStateMachine(small_catalog)
        with pytest.raises(DraftActionError, match="Unknown champion"):
            machine.select("Teemo")

    def test_accepts_any_id_without_catalog(self):
        machine = DraftStateMachine()
        machine.select("Teemo")
        assert machine.state.blue_bans[0] == "Teemo"

    def test_rejects_selection_after_completion(self, shipped_catalog):
        machine = DraftStateMachine(shipped_catalog)
        for champion_id in _ids(shipped_catalog, 20):
            machine.select(champion_id)
        with pytest.raises(DraftActionError, match="complete"):
            machine.select(shipped_catalog.all()[25].id)

    def test_select_resets_timer(self, small_catalog):
        machine = DraftStateMachine(small_catalog)
        machine.state.timer = 7
        machine.select("Zed")
        assert machine.state.timer == TURN_TIMER_SECONDS


class TestTimer:
    def test_tick_does_nothing_when_stopped(self):
        machine = DraftStateMachine()
        assert machine.tick() is False
        assert machine.state.timer == TURN_TIMER_SECONDS

    def test_tick_counts_down_and_wraps(self):
        machine = DraftStateMachine()
        assert machine.toggle_timer() is True
        assert machine.tick() is True
        assert machine.state.timer == TURN_TIMER_SECONDS - 1

        machine.state.timer = 1
        machine.tick()
        assert machine.state.timer == TURN_TIMER_SECONDS
        # The turn never forfeits
        assert machine.state.current_turn == 0

    def test_toggle_pauses(self):
        machine = DraftStateMachine()
        machine.toggle_timer()
        assert machine.toggle_timer() is False
        assert machine.state.is_timer_running is False

    def test_timer_stops_when_draft_completes(self, shipped_catalog):
        machine = DraftStateMachine(shipped_catalog)
        machine.toggle_timer()
        for champion_id in _ids(shipped_catalog, 20):
            machine.select(champion_id)
        assert machine.state.is_timer_running is False
        assert machine.toggle_timer() is False
        assert machine.tick() is False


class TestReset:
    def test_reset_returns_fresh_state(self, small_catalog):
        machine = DraftStateMachine(small_catalog)
        machine.select("Zed")
        machine.toggle_timer()
        machine.reset()
        assert machine.state == DraftState()


class TestFromSlots:
    def test_turn_is_first_empty_slot(self):
        state = DraftState.from_slots(
            blue_bans=["A", "B", "C"],
            red_bans=["D", "E", "F"],
            blue_picks=["G"],
        )
        assert state.current_turn == 7
        assert state.active_team == TeamSide.RED
        assert state.phase == DraftPhase.PICKING

    def test_pads_truncates_and_blanks(self):
        state = DraftState.from_slots(blue_bans=["A", "", None, "B", "C", "D", "E"])
        assert state.blue_bans == ["A", None, None, "B", "C"]
        assert state.current_turn == 1

    def test_full_slots_complete(self):
        names = [f"c{i}" for i in range(20)]
        state = DraftState.from_slots(names[0:5], names[5:10], names[10:15], names[15:20])
        assert state.is_complete
        assert state.active_team == TeamSide.RED

    def test_to_dict(self):
        data = DraftState().to_dict()
        assert data["phase"] == "banning"
        assert data["active_team"] == "blue"
        assert data["blue_picks"] == [None] * 5
        assert data["timer"] == 30
