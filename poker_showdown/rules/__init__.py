"""Poker rules implementations.

This module provides:
- Card and rank definitions (ranks.py)
- Hand category detection and comparison (hands.py)
"""

from .ranks import (
    Rank,
    Suit,
    Card,
    ParseError,
    RANK_SYMBOLS,
    SUIT_SYMBOLS,
    parse_card,
    are_consecutive,
    get_rank_counts,
    create_standard_deck,
    sort_cards,
    compare_ranks,
)

from .hands import (
    HAND_SIZE,
    HandCategory,
    Hand,
    MalformedHandError,
    MalformedHandPolicy,
    normalize_low_ace,
    classify,
    parse_hand,
    compare_hands,
    can_beat,
    get_categories,
    describe_categories,
    make_cards_from_string,
)

__all__ = [
    # Ranks
    "Rank",
    "Suit",
    "Card",
    "ParseError",
    "RANK_SYMBOLS",
    "SUIT_SYMBOLS",
    "parse_card",
    "are_consecutive",
    "get_rank_counts",
    "create_standard_deck",
    "sort_cards",
    "compare_ranks",
    # Hands
    "HAND_SIZE",
    "HandCategory",
    "Hand",
    "MalformedHandError",
    "MalformedHandPolicy",
    "normalize_low_ace",
    "classify",
    "parse_hand",
    "compare_hands",
    "can_beat",
    "get_categories",
    "describe_categories",
    "make_cards_from_string",
]
