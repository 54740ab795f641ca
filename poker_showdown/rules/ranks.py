"""Card rank definitions and utilities.

Rank order (high to low): A > K > Q > J > T > 9 > 8 > 7 > 6 > 5 > 4 > 3 > 2

The ace is ranked 14. It only counts as 1 (``Rank.ACE_LOW``) inside the
wheel straight A-2-3-4-5, and that rewrite is done by the hand, never here.

This module provides:
- Rank and suit enums
- Card representation and two-character token parsing
- Comparison and counting utilities
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, List


class Rank(IntEnum):
    """Card ranks ordered by strength (higher value = stronger rank)."""

    ACE_LOW = 1  # Only produced by wheel normalization
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13
    ACE = 14


class Suit(IntEnum):
    """Card suits. Only equality between suits matters for ranking."""

    HEART = 0
    DIAMOND = 1
    CLUB = 2
    SPADE = 3


class ParseError(ValueError):
    """Raised when a card token cannot be parsed."""

    pass


# Rank symbols for display
RANK_SYMBOLS = {
    Rank.ACE_LOW: "A",
    Rank.TWO: "2",
    Rank.THREE: "3",
    Rank.FOUR: "4",
    Rank.FIVE: "5",
    Rank.SIX: "6",
    Rank.SEVEN: "7",
    Rank.EIGHT: "8",
    Rank.NINE: "9",
    Rank.TEN: "T",
    Rank.JACK: "J",
    Rank.QUEEN: "Q",
    Rank.KING: "K",
    Rank.ACE: "A",
}

# Suit symbols for display
SUIT_SYMBOLS = {
    Suit.HEART: "H",
    Suit.DIAMOND: "D",
    Suit.CLUB: "C",
    Suit.SPADE: "S",
}

# Symbol to rank mapping (for parsing). The ace always parses high.
SYMBOL_TO_RANK: Dict[str, Rank] = {
    sym: rank for rank, sym in RANK_SYMBOLS.items() if rank != Rank.ACE_LOW
}
SYMBOL_TO_RANK.update({sym.lower(): rank for sym, rank in list(SYMBOL_TO_RANK.items())})

SYMBOL_TO_SUIT: Dict[str, Suit] = {v: k for k, v in SUIT_SYMBOLS.items()}
SYMBOL_TO_SUIT.update({"h": Suit.HEART, "d": Suit.DIAMOND, "c": Suit.CLUB, "s": Suit.SPADE})
SYMBOL_TO_SUIT.update({"♥": Suit.HEART, "♦": Suit.DIAMOND, "♣": Suit.CLUB, "♠": Suit.SPADE})

# Ranks a freshly parsed card can carry
PARSED_RANKS = tuple(r for r in Rank if r != Rank.ACE_LOW)

TOKEN_LENGTH = 2


@dataclass(frozen=True, order=True)
class Card:
    """A playing card with rank and suit.

    Cards are ordered by rank first (for sorting hands), then by suit.
    Immutable and hashable for use in sets.
    """

    rank: Rank
    suit: Suit

    def __str__(self) -> str:
        return f"{RANK_SYMBOLS[self.rank]}{SUIT_SYMBOLS[self.suit]}"

    def __repr__(self) -> str:
        return f"Card({self})"

    @classmethod
    def from_string(cls, s: str) -> "Card":
        """Parse a card from a two-character token like 'AH' or 'Td'.

        Args:
            s: Card token, rank character followed by suit character

        Returns:
            Card object

        Raises:
            ParseError: If the token has the wrong length or an unknown
                rank or suit character
        """
        if not isinstance(s, str):
            raise ParseError(f"Card token must be a string, got {type(s).__name__}: {s!r}")
        if len(s) != TOKEN_LENGTH:
            raise ParseError(f"Card token must be {TOKEN_LENGTH} characters: {s!r}")

        rank_char, suit_char = s[0], s[1]

        if rank_char not in SYMBOL_TO_RANK:
            raise ParseError(f"Invalid rank character {rank_char!r} in card {s!r}")
        if suit_char not in SYMBOL_TO_SUIT:
            raise ParseError(f"Invalid suit character {suit_char!r} in card {s!r}")

        return cls(rank=SYMBOL_TO_RANK[rank_char], suit=SYMBOL_TO_SUIT[suit_char])


def parse_card(token: str) -> Card:
    """Parse a single card token. See ``Card.from_string``."""
    return Card.from_string(token)


def are_consecutive(ranks: List[int]) -> bool:
    """Check if a list of ranks forms one contiguous run with no repeats.

    Args:
        ranks: List of ranks in any order

    Returns:
        True if the sorted ranks equal range(min, max + 1)
    """
    if len(ranks) < 2:
        return True

    ordered = sorted(int(r) for r in ranks)
    return ordered == list(range(ordered[0], ordered[-1] + 1))


def get_rank_counts(cards: List[Card]) -> dict:
    """Count occurrences of each rank in a list of cards.

    Args:
        cards: List of Card objects

    Returns:
        Dict mapping Rank to count
    """
    counts = {}
    for card in cards:
        counts[card.rank] = counts.get(card.rank, 0) + 1
    return counts


def create_standard_deck() -> List[Card]:
    """Create a standard 52-card deck.

    Returns:
        List of 52 Card objects (13 ranks × 4 suits)
    """
    deck = []
    for rank in PARSED_RANKS:
        for suit in Suit:
            deck.append(Card(rank=rank, suit=suit))
    return deck


def sort_cards(cards: List[Card], reverse: bool = False) -> List[Card]:
    """Sort cards by rank, then by suit."""
    return sorted(cards, reverse=reverse)


def compare_ranks(rank1: Rank, rank2: Rank) -> int:
    """Compare two ranks.

    Returns:
        Positive if rank1 > rank2, negative if rank1 < rank2, zero if equal
    """
    return int(rank1) - int(rank2)
