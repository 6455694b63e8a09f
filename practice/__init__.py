"""Practice table: random bots around the holdem engine, served over WebSockets."""

from .bots import bot_step, random_policy
from .session import PracticeConfig, PracticeError, PracticeGame

__all__ = ["bot_step", "random_policy", "PracticeConfig", "PracticeError", "PracticeGame"]
