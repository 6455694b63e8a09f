import dataclasses

import pytest

from holdem.errors import InvalidConfigError
from holdem.game import create_table, deal_hole, post_blinds
from holdem.models import ActionType, Street

from .helpers import make_players, start_hand


def test_create_table_requires_two_players():
    with pytest.raises(InvalidConfigError, match="at least 2"):
        create_table(make_players(1), small_blind=5, big_blind=10)


def test_create_table_rejects_bad_blinds_and_duplicate_ids():
    with pytest.raises(InvalidConfigError):
        create_table(make_players(2), small_blind=0, big_blind=10)
    with pytest.raises(InvalidConfigError):
        create_table(make_players(2), small_blind=20, big_blind=10)
    players = make_players(2)
    with pytest.raises(InvalidConfigError, match="unique"):
        create_table([players[0], players[0]], small_blind=5, big_blind=10)


def test_create_table_initial_state():
    state = create_table(make_players(4), small_blind=5, big_blind=10, button_index=1, seed="abc")
    assert state.hand_id == 1
    assert state.button_index == 1
    assert state.to_act_index == 0  # button + 3, wrapped
    assert state.min_raise == 10
    assert state.pot == 0
    assert state.board == ()
    assert state.hand_history == ()
    assert state.side_pots == ()
    assert state.street == Street.PREFLOP
    assert state.rng_seed == "abc"
    assert len(state.deck) == 52
    assert state.showdown is None


def test_create_table_uses_default_seed():
    first = create_table(make_players(2), small_blind=5, big_blind=10)
    second = create_table(make_players(2), small_blind=5, big_blind=10, seed="12345")
    assert first.rng_seed == "12345"
    assert first.deck == second.deck


def test_deal_hole_is_round_robin_from_top_of_deck():
    state = create_table(make_players(3), small_blind=5, big_blind=10, seed="deal")
    dealt = deal_hole(state)
    deck = state.deck
    assert dealt.players[0].hole == (deck[-1], deck[-4])
    assert dealt.players[1].hole == (deck[-2], deck[-5])
    assert dealt.players[2].hole == (deck[-3], deck[-6])
    assert dealt.deck == deck[:-6]


def test_deal_hole_is_idempotent():
    state = deal_hole(create_table(make_players(3), small_blind=5, big_blind=10))
    again = deal_hole(state)
    assert again.deck == state.deck
    assert [p.hole for p in again.players] == [p.hole for p in state.players]


def test_dealt_cards_and_deck_form_the_full_set():
    state = start_hand(4)
    cards = list(state.deck) + list(state.board)
    for player in state.players:
        cards.extend(player.hole)
    assert len(cards) == 52
    assert len(set(cards)) == 52


def test_post_blinds_heads_up_keeps_chips_committed():
    state = create_table(make_players(2, stack=10_000), small_blind=50, big_blind=100, seed="seed")
    state = post_blinds(state)
    assert state.players[1].committed == 50
    assert state.players[0].committed == 100
    assert state.players[0].committed + state.players[1].committed == 150
    assert state.pot == 0
    assert state.min_raise == 100


def test_post_blinds_records_blind_bets_and_sets_first_actor():
    state = start_hand(3, sb=5, bb=10)
    assert [p.committed for p in state.players] == [0, 5, 10]
    assert [p.stack for p in state.players] == [1000, 995, 990]
    assert state.to_act_index == 0
    records = state.hand_history
    assert [(r.actor, r.kind, r.size, r.blind) for r in records] == [
        ("P1", ActionType.BET, 5, True),
        ("P2", ActionType.BET, 10, True),
    ]
    assert all(r.street == Street.PREFLOP and r.hand_id == 1 for r in records)


def test_short_stack_blind_goes_all_in():
    state = start_hand(3, stacks=[1000, 3, 1000])
    assert state.players[1].committed == 3
    assert state.players[1].all_in
    assert state.hand_history[0].size == 3


def test_states_are_frozen():
    state = start_hand(2)
    with pytest.raises(dataclasses.FrozenInstanceError):
        state.pot = 10  # type: ignore[misc]
    with pytest.raises(dataclasses.FrozenInstanceError):
        state.players[0].stack = 0  # type: ignore[misc]
