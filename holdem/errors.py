from __future__ import annotations


class EngineError(ValueError):
    """Hard failure raised by the engine. No new state is produced."""

    code = "ENGINE_ERROR"

    def __init__(self, msg: str) -> None:
        super().__init__(msg)
        self.msg = msg


class InvalidConfigError(EngineError):
    code = "INVALID_CONFIG"


class InvalidSizeError(EngineError):
    code = "INVALID_SIZE"


class BelowMinimumError(EngineError):
    code = "BELOW_MINIMUM"


class DeckExhaustedError(EngineError):
    code = "DECK_EXHAUSTED"
