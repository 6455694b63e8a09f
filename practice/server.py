from __future__ import annotations

import argparse
import asyncio
import json
import logging
from dataclasses import replace
from http import HTTPStatus
from typing import Any, Dict, List, Optional

from websockets.asyncio.server import ServerConnection, serve

from holdem.errors import EngineError
from holdem.models import Action, action_from_kind
from holdem.serialization import public_view

from .session import HUMAN_SEAT, PracticeConfig, PracticeError, PracticeGame

LOGGER = logging.getLogger("practice_host")


def _action_payload(action: Action) -> Dict[str, Any]:
    payload: Dict[str, Any] = {"action": action.kind.value}
    size = getattr(action, "size", None)
    if size is not None:
        payload["size"] = size
    return payload


def _config_payload(config: PracticeConfig) -> Dict[str, Any]:
    return {
        "bots": config.bots,
        "starting_stack": config.starting_stack,
        "sb": config.sb,
        "bb": config.bb,
        "seed": config.seed,
    }


class PracticeConnection:
    """One WebSocket client playing one practice table."""

    def __init__(self, websocket: Any, defaults: PracticeConfig) -> None:
        self.websocket = websocket
        self.defaults = defaults
        self.game: Optional[PracticeGame] = None

    async def send_json(self, payload: Dict[str, Any]) -> None:
        await self.websocket.send(json.dumps({"v": 1, **payload}))

    async def send_error(self, code: str, msg: str) -> None:
        await self.send_json({"type": "error", "code": code, "msg": msg})

    async def send_state(self) -> None:
        assert self.game is not None
        legal: List[Dict[str, Any]] = [_action_payload(action) for action in self.game.legal_for_human()]
        await self.send_json(
            {
                "type": "state",
                "state": public_view(self.game.state, HUMAN_SEAT),
                "legal": legal,
                "hand_over": self.game.is_hand_over(),
                "match_over": self.game.is_match_over(),
            }
        )

    async def run(self) -> None:
        async for raw in self.websocket:
            try:
                message = json.loads(raw)
            except json.JSONDecodeError:
                await self.send_error("BAD_JSON", "Messages must be JSON objects")
                continue
            if not isinstance(message, dict):
                await self.send_error("BAD_JSON", "Messages must be JSON objects")
                continue
            await self.handle_message(message)

    async def handle_message(self, message: Dict[str, Any]) -> None:
        msg_type = message.get("type")
        try:
            if msg_type == "hello":
                await self._handle_hello(message)
            elif msg_type == "action":
                await self._handle_action(message)
            elif msg_type == "next_hand":
                await self._handle_next_hand()
            else:
                await self.send_error("UNKNOWN_TYPE", f"Unsupported message type: {msg_type}")
        except PracticeError as exc:
            await self.send_error(exc.code, exc.msg)
        except EngineError as exc:
            await self.send_error(exc.code, exc.msg)

    async def _handle_hello(self, message: Dict[str, Any]) -> None:
        bots = message.get("bots", self.defaults.bots)
        if isinstance(bots, bool) or not isinstance(bots, int):
            raise PracticeError("BAD_CONFIG", "bots must be an integer")
        seed = message.get("seed", self.defaults.seed)
        if not isinstance(seed, str) or not seed.strip():
            raise PracticeError("BAD_CONFIG", "seed must be a non-empty string")

        config = replace(self.defaults, bots=bots, seed=seed.strip())
        self.game = PracticeGame(config)
        await self.send_json({"type": "welcome", "seat": HUMAN_SEAT, "config": _config_payload(config)})
        await self.send_state()

    async def _handle_action(self, message: Dict[str, Any]) -> None:
        if self.game is None:
            raise PracticeError("NO_TABLE", "Send hello first")
        size = message.get("size")
        if size is not None and (isinstance(size, bool) or not isinstance(size, int)):
            raise PracticeError("BAD_ACTION", "size must be an integer")
        try:
            action = action_from_kind(message.get("action", ""), size)
        except ValueError as exc:
            raise PracticeError("BAD_ACTION", str(exc)) from exc

        if not self.game.act(action):
            raise PracticeError("ACTION_IGNORED", "Not your turn to act")
        await self.send_state()

    async def _handle_next_hand(self) -> None:
        if self.game is None:
            raise PracticeError("NO_TABLE", "Send hello first")
        self.game.next_hand()
        await self.send_state()


def _process_request(connection: ServerConnection, request: Any) -> Any:
    """Plain HTTP answers for health checks; WebSocket upgrades pass through."""
    if request.headers.get("Upgrade", "").lower() == "websocket":
        return None
    if request.path in {"/", "/health", "/healthz"}:
        return connection.respond(HTTPStatus.OK, "practice server running\n")
    return connection.respond(HTTPStatus.NOT_FOUND, "not found\n")


async def run_server(host: str, port: int, defaults: PracticeConfig) -> None:
    async def _handler(websocket: ServerConnection) -> None:
        connection = PracticeConnection(websocket, defaults)
        try:
            await connection.run()
        except Exception as exc:  # noqa: BLE001
            LOGGER.exception("Practice session crashed: %s", exc)

    async with serve(_handler, host, port, process_request=_process_request):
        LOGGER.info("Practice server listening on %s:%s", host, port)
        await asyncio.Future()


def main() -> None:
    parser = argparse.ArgumentParser(description="Hold'em practice table against random bots")
    parser.add_argument("--host", default="0.0.0.0")
    parser.add_argument("--port", type=int, default=9876)
    parser.add_argument("--bots", type=int, default=2, help="Default bot count when hello omits it")
    parser.add_argument("--starting-stack", type=int, default=10_000)
    parser.add_argument("--sb", type=int, default=50)
    parser.add_argument("--bb", type=int, default=100)
    parser.add_argument("--seed", default="demo")
    args = parser.parse_args()

    defaults = PracticeConfig(
        bots=args.bots,
        starting_stack=args.starting_stack,
        sb=args.sb,
        bb=args.bb,
        seed=args.seed,
    )
    asyncio.run(run_server(args.host, args.port, defaults))


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    main()
