import pytest

from holdem.errors import BelowMinimumError, InvalidSizeError
from holdem.game import apply_action
from holdem.models import ActionType, Bet, Call, Check, Fold, Raise, Street

from .helpers import start_hand, with_player


def limp_to_big_blind():
    state = start_hand(3, sb=5, bb=10)
    state = apply_action(state, 0, Call())
    return apply_action(state, 1, Call())


def test_fold_marks_player_and_moves_turn():
    state = start_hand(3)
    after = apply_action(state, 0, Fold())
    assert after.players[0].has_folded
    assert after.to_act_index == 1
    last = after.hand_history[-1]
    assert (last.actor, last.kind, last.size, last.street) == ("P0", ActionType.FOLD, None, Street.PREFLOP)
    assert not state.players[0].has_folded


def test_out_of_turn_and_inactive_seats_are_ignored():
    state = start_hand(3)
    assert apply_action(state, 1, Check()) is state
    assert apply_action(state, 9, Check()) is state
    folded = with_player(state, 0, has_folded=True)
    assert apply_action(folded, 0, Call()) is folded
    all_in = with_player(state, 0, all_in=True)
    assert apply_action(all_in, 0, Call()) is all_in


def test_call_posts_the_difference():
    state = apply_action(start_hand(3, sb=5, bb=10), 0, Call())
    assert state.players[0].committed == 10
    assert state.players[0].stack == 990
    assert state.hand_history[-1].kind == ActionType.CALL
    assert state.hand_history[-1].size == 10
    assert state.to_act_index == 1


def test_call_with_nothing_to_call_is_a_check():
    state = limp_to_big_blind()
    after = apply_action(state, 2, Call())
    assert after.hand_history[-1].kind == ActionType.CHECK
    assert after.players[2].committed == 10
    assert after.players[2].stack == 990


def test_short_call_goes_all_in():
    state = with_player(start_hand(3, sb=5, bb=10), 0, stack=6)
    after = apply_action(state, 0, Call())
    player = after.players[0]
    assert player.committed == 6
    assert player.stack == 0
    assert player.all_in


@pytest.mark.parametrize("action", [Bet(0), Raise(-5)])
def test_non_positive_sizes_are_rejected(action):
    state = limp_to_big_blind()
    with pytest.raises(InvalidSizeError):
        apply_action(state, 2, action)


def test_opening_bet_below_big_blind_is_rejected():
    state = limp_to_big_blind()
    history = state.hand_history
    with pytest.raises(BelowMinimumError):
        apply_action(state, 2, Bet(5))
    assert state.hand_history == history


def test_opening_bet_updates_min_raise_and_aggressor():
    state = apply_action(limp_to_big_blind(), 2, Bet(40))
    assert state.players[2].committed == 50
    assert state.min_raise == 40
    assert state.last_aggressor_index == 2
    assert state.hand_history[-1].kind == ActionType.BET
    assert state.hand_history[-1].size == 40
    assert state.to_act_index == 0


def test_raise_below_minimum_is_rejected():
    state = start_hand(3, sb=5, bb=10)
    with pytest.raises(BelowMinimumError, match="at least 20"):
        apply_action(state, 0, Raise(15))


def test_min_raise_tracks_the_raise_increment():
    state = start_hand(3, sb=5, bb=10)
    state = apply_action(state, 0, Raise(20))
    assert state.players[0].committed == 20
    assert state.min_raise == 10
    state = apply_action(state, 1, Raise(55))
    # SB faced 15, so the increment is 40
    assert state.players[1].committed == 60
    assert state.min_raise == 40
    assert state.last_aggressor_index == 1


def test_oversized_raise_commits_whole_stack():
    state = with_player(start_hand(3, sb=5, bb=10), 0, stack=25)
    after = apply_action(state, 0, Raise(100))
    player = after.players[0]
    assert player.committed == 25
    assert player.stack == 0
    assert player.all_in
    assert after.hand_history[-1].size == 25
    assert after.min_raise == 15
    assert after.to_act_index == 1


def test_turn_skips_folded_and_all_in_seats():
    state = start_hand(4, sb=5, bb=10)
    # button 0: SB 1, BB 2, first actor 3
    state = with_player(state, 0, all_in=True)
    after = apply_action(state, 3, Call())
    assert after.to_act_index == 1


def test_every_action_appends_one_record():
    state = start_hand(3)
    count = len(state.hand_history)
    for seat, action in [(0, Raise(20)), (1, Call()), (2, Fold())]:
        state = apply_action(state, seat, action)
        count += 1
        assert len(state.hand_history) == count
