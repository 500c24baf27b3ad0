"""
Bots module - AI opponents.

Provides:
- Strategy: per-difficulty scoring and draw rules
- decide: pick a draw or a play for a seat
- UnoBot: an AI seat with its own rng
"""

from .strategy import Strategy, STRATEGIES, get_strategy
from .policy import BotDecision, UnoBot, decide, choose_wild_color

__all__ = [
    "Strategy",
    "STRATEGIES",
    "get_strategy",
    "BotDecision",
    "UnoBot",
    "decide",
    "choose_wild_color",
]
