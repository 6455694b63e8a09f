from __future__ import annotations

import logging
import random
from typing import Optional

from holdem.game import apply_action, settle_streets
from holdem.legal import legal_actions
from holdem.models import Action, Street, TableState

LOGGER = logging.getLogger("practice_bots")

# Safety net for the bot loop. Normal play never gets close: the loop stops
# as soon as the street changes or a human is to act.
BOT_STEP_LIMIT = 50


def random_policy(state: TableState, seat_idx: int, rng: random.Random) -> Optional[Action]:
    """Uniform pick among the legal actions; minimum sizes for BET/RAISE."""
    legal = legal_actions(state, seat_idx)
    if not legal:
        return None
    return rng.choice(legal)


def bot_step(state: TableState, rng: random.Random, max_steps: int = BOT_STEP_LIMIT) -> TableState:
    """Take bot turns until a human must act, the street changes or showdown."""
    current = state
    for _ in range(max_steps):
        if current.street == Street.SHOWDOWN:
            return current
        seat_idx = current.to_act_index
        actor = current.players[seat_idx]
        if actor.is_human or not actor.can_act:
            return current
        choice = random_policy(current, seat_idx, rng)
        if choice is None:
            return current
        before = current.street
        current = settle_streets(apply_action(current, seat_idx, choice))
        if current.street != before:
            return current
    LOGGER.warning("Bot loop hit %s steps on hand %s; stopping", max_steps, current.hand_id)
    return current
