from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import List, Optional

from holdem.cards import hash_seed
from holdem.game import apply_action, create_table, deal_hole, post_blinds, settle_streets, start_next_hand
from holdem.legal import legal_actions
from holdem.models import DEFAULT_RULES, Action, Player, Street, TableState

from .bots import bot_step

LOGGER = logging.getLogger("practice_session")

HUMAN_SEAT = 0
# Upper bound on bot_step calls between two human decisions.
MAX_BOT_ROUNDS = 20


class PracticeError(Exception):
    def __init__(self, code: str, msg: str) -> None:
        super().__init__(msg)
        self.code = code
        self.msg = msg


@dataclass
class PracticeConfig:
    bots: int = 2
    starting_stack: int = 10_000
    sb: int = DEFAULT_RULES.small_blind
    bb: int = DEFAULT_RULES.big_blind
    seed: str = "demo"


def build_players(config: PracticeConfig) -> List[Player]:
    players = [Player(id="H", name="You", seat=HUMAN_SEAT, stack=config.starting_stack, is_human=True)]
    for idx in range(1, config.bots + 1):
        players.append(Player(id=f"B{idx}", name=f"Bot{idx}", seat=idx, stack=config.starting_stack))
    return players


class PracticeGame:
    """One human at seat 0 against random bots; owns the current TableState.

    All bot decisions come from one RNG seeded from ``config.seed`` so a
    session replays identically given the same human inputs.
    """

    def __init__(self, config: PracticeConfig, rng: Optional[random.Random] = None) -> None:
        max_bots = DEFAULT_RULES.max_players - 1
        if not 1 <= config.bots <= max_bots:
            raise PracticeError("BAD_CONFIG", f"Choose between 1 and {max_bots} bots")
        self.config = config
        self.rng = rng if rng is not None else random.Random(hash_seed(config.seed))
        table = create_table(
            build_players(config),
            small_blind=config.sb,
            big_blind=config.bb,
            seed=config.seed,
        )
        self.state = self._run_bots(settle_streets(post_blinds(deal_hole(table))))
        LOGGER.info("Practice table ready: %s bots, seed %s", config.bots, config.seed)

    # Turn handling ---------------------------------------------------

    def _run_bots(self, state: TableState) -> TableState:
        for _ in range(MAX_BOT_ROUNDS):
            advanced = settle_streets(bot_step(state, self.rng))
            if advanced is state:
                return state
            state = advanced
        LOGGER.warning("Bot rounds exhausted on hand %s", state.hand_id)
        return state

    def legal_for_human(self) -> List[Action]:
        return legal_actions(self.state, HUMAN_SEAT)

    def act(self, action: Action) -> bool:
        """Apply the human's action, then let the bots respond.

        Returns False when the human has nothing to decide (not their turn,
        folded, all-in or hand over). Raises ``ILLEGAL_ACTION`` for an action
        kind the table does not currently offer, such as CHECK facing a bet.
        """
        legal = self.legal_for_human()
        if not legal:
            return False
        offered = [option.kind for option in legal]
        if action.kind not in offered:
            choices = ", ".join(kind.value for kind in offered)
            raise PracticeError("ILLEGAL_ACTION", f"{action.kind.value} is not available; choose {choices}")
        applied = apply_action(self.state, HUMAN_SEAT, action)
        if applied is self.state:
            return False
        self.state = self._run_bots(settle_streets(applied))
        return True

    # Hand lifecycle --------------------------------------------------

    def is_hand_over(self) -> bool:
        return self.state.street == Street.SHOWDOWN

    def is_match_over(self) -> bool:
        funded = [player for player in self.state.players if player.stack > 0]
        return self.is_hand_over() and len(funded) < 2

    def next_hand(self) -> TableState:
        if not self.is_hand_over():
            raise PracticeError("HAND_IN_PROGRESS", "Finish the current hand first")
        if self.is_match_over():
            raise PracticeError("MATCH_OVER", "Not enough players with chips")
        self.state = self._run_bots(settle_streets(start_next_hand(self.state)))
        LOGGER.info("Hand %s started, button at seat %s", self.state.hand_id, self.state.button_index)
        return self.state
