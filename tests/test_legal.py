from dataclasses import replace

from holdem.game import apply_action
from holdem.legal import legal_actions
from holdem.models import Bet, Call, Check, Fold, Raise, Street

from .helpers import start_hand, with_player


def test_facing_the_big_blind():
    state = start_hand(3, sb=5, bb=10)
    assert legal_actions(state, 0) == [Fold(), Call(10), Raise(20)]


def test_small_blind_completes_for_the_difference():
    state = apply_action(start_hand(3, sb=5, bb=10), 0, Call())
    assert legal_actions(state, 1) == [Fold(), Call(5), Raise(15)]


def test_big_blind_option_offers_check_and_bet():
    state = start_hand(3, sb=5, bb=10)
    state = apply_action(state, 0, Call())
    state = apply_action(state, 1, Call())
    assert legal_actions(state, 2) == [Check(), Bet(10)]


def test_opening_bet_uses_larger_of_big_blind_and_min_raise():
    state = start_hand(3, sb=5, bb=10)
    state = replace(state, street=Street.FLOP, min_raise=40, players=tuple(replace(p, committed=0) for p in state.players))
    state = replace(state, to_act_index=1)
    assert legal_actions(state, 1) == [Check(), Bet(40)]


def test_raise_minimum_tracks_previous_increment():
    state = apply_action(start_hand(3, sb=5, bb=10), 0, Raise(30))
    # call 25 more plus the 20 increment
    assert legal_actions(state, 1) == [Fold(), Call(25), Raise(45)]


def test_call_is_capped_by_stack():
    state = with_player(start_hand(3, sb=5, bb=10), 0, stack=4)
    assert legal_actions(state, 0)[1] == Call(4)


def test_no_actions_out_of_turn_folded_all_in_or_at_showdown():
    state = start_hand(3)
    assert legal_actions(state, 1) == []
    assert legal_actions(state, 7) == []
    assert legal_actions(with_player(state, 0, has_folded=True), 0) == []
    assert legal_actions(with_player(state, 0, all_in=True), 0) == []
    assert legal_actions(replace(state, street=Street.SHOWDOWN), 0) == []
