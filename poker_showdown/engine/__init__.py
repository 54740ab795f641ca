"""Showdown engine.

This module provides:
- Showdown / Poker: Winner selection across any number of hands
- ShowdownConfig: Invalid hand handling options
- best_hand: One-shot winner selection
- score_matrix: Score vectors as a NumPy array
- deal_random_hands / play_random_showdown: Random dealing for smoke runs
"""

from .showdown import (
    MAX_HANDS,
    SCORE_WIDTH,
    Poker,
    RejectedHand,
    Showdown,
    ShowdownConfig,
    best_hand,
    deal_random_hands,
    play_random_showdown,
    score_matrix,
)

__all__ = [
    "MAX_HANDS",
    "SCORE_WIDTH",
    "Poker",
    "RejectedHand",
    "Showdown",
    "ShowdownConfig",
    "best_hand",
    "deal_random_hands",
    "play_random_showdown",
    "score_matrix",
]
