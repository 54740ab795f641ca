"""Poker Showdown - five-card poker hand ranking.

Parses cards, classifies five-card hands into the nine standard categories
and picks the winning hand(s) of a showdown, ties included.
"""

__version__ = "0.1.0"
__author__ = "Poker Showdown Team"

from poker_showdown.utils.seeding import set_seed
from poker_showdown.rules import (
    Card,
    Hand,
    HandCategory,
    MalformedHandError,
    MalformedHandPolicy,
    ParseError,
    parse_card,
    parse_hand,
    compare_hands,
)
from poker_showdown.engine import Poker, Showdown, ShowdownConfig, best_hand

__all__ = [
    "__version__",
    "set_seed",
    "Card",
    "Hand",
    "HandCategory",
    "MalformedHandError",
    "MalformedHandPolicy",
    "ParseError",
    "parse_card",
    "parse_hand",
    "compare_hands",
    "Poker",
    "Showdown",
    "ShowdownConfig",
    "best_hand",
]
