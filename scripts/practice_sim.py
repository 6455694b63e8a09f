#!/usr/bin/env python3
"""Play a run of all-bot hands through the engine and report the outcome.

Every seat uses the random practice policy, so this exercises the betting
rules, street advancement and pot settlement without any UI.

Example:
    python scripts/practice_sim.py --players 6 --hands 500 --seed nightly
"""

from __future__ import annotations

import argparse
import logging
import random
from dataclasses import replace
from typing import Dict

from holdem.cards import hash_seed
from holdem.game import create_table, deal_hole, post_blinds, settle_streets, start_next_hand
from holdem.models import Street, TableState
from practice.bots import bot_step
from practice.session import PracticeConfig, build_players

LOGGER = logging.getLogger("practice_sim")

# bot_step returns at every street change; a hand needs at most a handful.
MAX_ROUNDS_PER_HAND = 50


def play_hand(state: TableState, rng: random.Random) -> TableState:
    for _ in range(MAX_ROUNDS_PER_HAND):
        if state.street == Street.SHOWDOWN:
            break
        state = settle_streets(bot_step(state, rng))
    return state


def run_simulation(args: argparse.Namespace) -> Dict[str, int]:
    config = PracticeConfig(
        bots=args.players - 1,
        starting_stack=args.starting_stack,
        sb=args.sb,
        bb=args.bb,
        seed=args.seed,
    )
    players = [replace(player, is_human=False) for player in build_players(config)]
    rng = random.Random(hash_seed(config.seed))
    state = create_table(players, small_blind=config.sb, big_blind=config.bb, seed=config.seed)
    state = settle_streets(post_blinds(deal_hole(state)))
    total = state.total_chips()

    wins: Dict[str, int] = {player.id: 0 for player in players}
    for hand in range(args.hands):
        state = play_hand(state, rng)
        if state.street != Street.SHOWDOWN or state.showdown is None:
            LOGGER.error("Hand %s did not finish (street %s)", state.hand_id, state.street.value)
            break
        for winner in state.showdown.winners:
            wins[winner] += 1
        LOGGER.debug(
            "Hand %s: pot %s won by %s", state.hand_id, state.showdown.total_pot, ", ".join(state.showdown.winners)
        )
        if state.total_chips() != total:
            raise RuntimeError(f"Chip total drifted on hand {state.hand_id}: {state.total_chips()} != {total}")
        funded = [player for player in state.players if player.stack > 0]
        if len(funded) < 2 or hand == args.hands - 1:
            break
        state = settle_streets(start_next_hand(state))

    LOGGER.info("Simulation complete after %s hands. Summary:", state.hand_id)
    for player in state.players:
        LOGGER.info("  %-6s -> stack %6d, %4d pots won", player.name, player.stack, wins[player.id])
    return wins


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Headless all-bot hands for checking the engine.")
    parser.add_argument("--players", type=int, default=4, help="Seats at the table (2-9).")
    parser.add_argument("--hands", type=int, default=200, help="Maximum number of hands to play.")
    parser.add_argument("--starting-stack", type=int, default=1_000, help="Starting stack per player.")
    parser.add_argument("--sb", type=int, default=10, help="Small blind size.")
    parser.add_argument("--bb", type=int, default=20, help="Big blind size.")
    parser.add_argument("--seed", default="sim", help="Top-level seed for deck and bot decisions.")
    parser.add_argument("--log-level", default="INFO", help="Logging level (DEBUG, INFO, etc.).")
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO), format="%(message)s")
    run_simulation(args)


if __name__ == "__main__":
    main()
