"""Plain-dict (JSON-safe) encoding of table snapshots."""

from __future__ import annotations

from typing import Any, Dict, Optional

from .cards import cards_to_labels, parse_cards
from .models import (
    ActionRecord,
    ActionType,
    Player,
    PlayerResult,
    ShowdownSummary,
    SidePot,
    Street,
    TableState,
)


def _player_to_dict(player: Player, show_hole: bool = True) -> Dict[str, Any]:
    hole = None
    if player.hole is not None and show_hole:
        hole = cards_to_labels(player.hole)
    return {
        "id": player.id,
        "name": player.name,
        "seat": player.seat,
        "stack": player.stack,
        "is_human": player.is_human,
        "has_folded": player.has_folded,
        "all_in": player.all_in,
        "committed": player.committed,
        "hole": hole,
    }


def _player_from_dict(data: Dict[str, Any]) -> Player:
    hole = data.get("hole")
    return Player(
        id=data["id"],
        name=data["name"],
        seat=data["seat"],
        stack=data["stack"],
        is_human=data.get("is_human", False),
        has_folded=data.get("has_folded", False),
        all_in=data.get("all_in", False),
        committed=data.get("committed", 0),
        hole=tuple(parse_cards(hole)) if hole else None,  # type: ignore[arg-type]
    )


def _record_to_dict(record: ActionRecord) -> Dict[str, Any]:
    return {
        "hand_id": record.hand_id,
        "actor": record.actor,
        "street": record.street.value,
        "kind": record.kind.value,
        "size": record.size,
        "ts": record.ts,
        "blind": record.blind,
    }


def _record_from_dict(data: Dict[str, Any]) -> ActionRecord:
    return ActionRecord(
        hand_id=data["hand_id"],
        actor=data["actor"],
        street=Street(data["street"]),
        kind=ActionType(data["kind"]),
        size=data.get("size"),
        ts=data["ts"],
        blind=data.get("blind", False),
    )


def _showdown_to_dict(summary: Optional[ShowdownSummary]) -> Optional[Dict[str, Any]]:
    if summary is None:
        return None
    return {
        "results": [
            {
                "player_id": result.player_id,
                "seat": result.seat,
                "score": result.score,
                "label": result.label,
                "payout": result.payout,
            }
            for result in summary.results
        ],
        "winners": list(summary.winners),
        "total_pot": summary.total_pot,
    }


def _showdown_from_dict(data: Optional[Dict[str, Any]]) -> Optional[ShowdownSummary]:
    if data is None:
        return None
    return ShowdownSummary(
        results=tuple(PlayerResult(**result) for result in data["results"]),
        winners=tuple(data["winners"]),
        total_pot=data["total_pot"],
    )


def state_to_dict(state: TableState) -> Dict[str, Any]:
    return {
        "hand_id": state.hand_id,
        "players": [_player_to_dict(player) for player in state.players],
        "button_index": state.button_index,
        "small_blind": state.small_blind,
        "big_blind": state.big_blind,
        "pot": state.pot,
        "side_pots": [
            {"amount": pot.amount, "eligible": sorted(pot.eligible)} for pot in state.side_pots
        ],
        "board": cards_to_labels(state.board),
        "deck": cards_to_labels(state.deck),
        "street": state.street.value,
        "to_act_index": state.to_act_index,
        "min_raise": state.min_raise,
        "last_aggressor_index": state.last_aggressor_index,
        "hand_history": [_record_to_dict(record) for record in state.hand_history],
        "rng_seed": state.rng_seed,
        "showdown": _showdown_to_dict(state.showdown),
    }


def state_from_dict(data: Dict[str, Any]) -> TableState:
    return TableState(
        hand_id=data["hand_id"],
        players=tuple(_player_from_dict(player) for player in data["players"]),
        button_index=data["button_index"],
        small_blind=data["small_blind"],
        big_blind=data["big_blind"],
        pot=data["pot"],
        side_pots=tuple(
            SidePot(amount=pot["amount"], eligible=frozenset(pot["eligible"]))
            for pot in data.get("side_pots", [])
        ),
        board=tuple(parse_cards(data["board"])),
        deck=tuple(parse_cards(data["deck"])),
        street=Street(data["street"]),
        to_act_index=data["to_act_index"],
        min_raise=data["min_raise"],
        last_aggressor_index=data.get("last_aggressor_index"),
        hand_history=tuple(_record_from_dict(record) for record in data.get("hand_history", [])),
        rng_seed=data["rng_seed"],
        showdown=_showdown_from_dict(data.get("showdown")),
    )


def public_view(state: TableState, viewer_seat: Optional[int] = None) -> Dict[str, Any]:
    """What one seat may see: no deck, opponents' hole cards hidden before showdown."""
    payload = state_to_dict(state)
    payload.pop("deck")
    reveal_all = state.street == Street.SHOWDOWN
    payload["players"] = [
        _player_to_dict(player, show_hole=reveal_all or idx == viewer_seat)
        for idx, player in enumerate(state.players)
    ]
    payload["to_call"] = state.to_call(viewer_seat) if viewer_seat is not None else None
    return payload
