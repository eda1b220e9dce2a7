"""Tests for the round state machine and the buzz arbiter."""

import pytest

from models import GridLayout, PlayerState, ZoneMode
from core.buzz_arbiter import BuzzArbiter
from core.exceptions import InvalidTarget, RoundClosed, UnregisteredBuzzer
from core.round_state import RoundManager
from core.session_registry import SessionRegistry


LAYOUT = GridLayout(rows=5, cols=5)


@pytest.fixture
def rounds():
    return RoundManager(LAYOUT)


@pytest.fixture
def registry():
    return SessionRegistry(LAYOUT)


@pytest.fixture
def arbiter(registry, rounds):
    return BuzzArbiter(registry, rounds)


class TestRoundManager:
    def test_starts_closed(self, rounds):
        assert rounds.buzzes_open is False

    def test_set_mode_opens_and_stores_zones(self, rounds):
        active, locked = rounds.set_mode(ZoneMode.SQUARE, 13)
        assert rounds.buzzes_open is True
        assert rounds.state.mode == ZoneMode.SQUARE
        assert rounds.state.active_zone == active == {7, 8, 9, 12, 13, 14, 17, 18, 19}
        assert rounds.state.locked_zone == locked
        assert active | locked == set(range(1, 26))

    def test_target_out_of_range_rejected(self, rounds):
        rounds.set_mode(ZoneMode.ALL)
        rounds.reset()
        for target in (0, 26, -3):
            with pytest.raises(InvalidTarget):
                rounds.set_mode(ZoneMode.CROSS, target)
        assert rounds.buzzes_open is False
        assert rounds.state.mode == ZoneMode.ALL

    def test_all_mode_skips_target_check(self, rounds):
        active, locked = rounds.set_mode(ZoneMode.ALL, 99)
        assert active == set(range(1, 26))
        assert locked == set()
        assert rounds.buzzes_open is True

    def test_reset_twice_stays_closed(self, rounds):
        rounds.set_mode(ZoneMode.ALL)
        rounds.reset()
        rounds.reset()
        assert rounds.buzzes_open is False

    def test_classify(self, rounds):
        rounds.set_mode(ZoneMode.CROSS, 1)
        assert rounds.classify(5) == PlayerState.ACTIVE
        assert rounds.classify(7) == PlayerState.LOCKED

    def test_create_game_leaves_zones_stale(self, rounds):
        rounds.set_mode(ZoneMode.SQUARE, 1)
        rounds.create_game(GridLayout(rows=2, cols=2))
        assert rounds.layout.total_seats == 4
        assert rounds.state.active_zone == {1, 2, 6, 7}

    def test_snapshot(self, rounds):
        rounds.set_mode(ZoneMode.SQUARE, 1)
        snap = rounds.snapshot()
        assert snap["mode"] == "square"
        assert snap["active"] == [1, 2, 6, 7]
        assert snap["buzzes_open"] is True


class TestBuzzArbiter:
    def test_closed_round_raises(self, arbiter, registry):
        registry.join("c1", 1)
        with pytest.raises(RoundClosed):
            arbiter.arbitrate("c1", 100)

    def test_unregistered_raises(self, arbiter, rounds):
        rounds.set_mode(ZoneMode.ALL)
        with pytest.raises(UnregisteredBuzzer):
            arbiter.arbitrate("ghost", 100)
        assert rounds.buzzes_open is True

    def test_valid_buzz(self, arbiter, registry, rounds):
        registry.join("c1", 13)
        rounds.set_mode(ZoneMode.CROSS, 13)
        event = arbiter.buzz("c1", 100)
        assert event.seat == 13
        assert event.valid is True
        assert event.time == 100
        assert rounds.buzzes_open is False

    def test_invalid_buzz_still_closes_round(self, arbiter, registry, rounds):
        registry.join("locked", 1)
        registry.join("active", 13)
        rounds.set_mode(ZoneMode.SQUARE, 13)

        event = arbiter.buzz("locked", 100)
        assert event.valid is False
        assert rounds.buzzes_open is False
        assert arbiter.buzz("active", 101) is None

    def test_at_most_one_winner(self, arbiter, registry, rounds):
        registry.join("c1", 2)
        registry.join("c2", 3)
        rounds.set_mode(ZoneMode.ALL)

        results = [arbiter.buzz("c1", 1), arbiter.buzz("c2", 2)]
        accepted = [r for r in results if r is not None]
        assert len(accepted) == 1
        assert accepted[0].seat == 2

    def test_reopened_round_accepts_again(self, arbiter, registry, rounds):
        registry.join("c1", 2)
        rounds.set_mode(ZoneMode.ALL)
        arbiter.buzz("c1", 1)
        rounds.set_mode(ZoneMode.ALL)
        assert arbiter.buzz("c1", 2) is not None

    def test_reset_closes_round(self, arbiter, registry, rounds):
        registry.join("c1", 2)
        rounds.set_mode(ZoneMode.ALL)
        rounds.reset()
        assert arbiter.buzz("c1", 1) is None
