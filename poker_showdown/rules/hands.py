"""Hand category detection, scoring, and comparison.

Categories (high to low):
- Straight flush: five consecutive ranks, one suit
- Four of a kind: four cards of one rank + kicker
- Full house: three of one rank + two of another
- Flush: one suit, ranks not consecutive
- Straight: five consecutive ranks, mixed suits
- Three of a kind: three of one rank + two unpaired kickers
- Two pair: two ranks twice each + kicker
- One pair: one rank twice + three kickers
- High card: none of the above

Comparison rules:
- Every hand has a score vector ``(category, *tiebreak)``
- Score vectors compare lexicographically, so category decides first and
  the category-specific tiebreak ranks decide ties
- The wheel A-2-3-4-5 plays the ace as 1 and is the lowest straight
- Hands without exactly five cards are UNRANKED and lose to every real hand
"""

import logging
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple, Union

from .ranks import (
    Card,
    Rank,
    Suit,
    RANK_SYMBOLS,
    are_consecutive,
    parse_card,
)

logger = logging.getLogger(__name__)

HAND_SIZE = 5

# Sorted ranks of the wheel before and after the ace is played low
WHEEL_RANKS = (Rank.TWO, Rank.THREE, Rank.FOUR, Rank.FIVE, Rank.ACE)
LOW_WHEEL_RANKS = (Rank.ACE_LOW, Rank.TWO, Rank.THREE, Rank.FOUR, Rank.FIVE)


class HandCategory(IntEnum):
    """Hand categories ordered by strength (higher value = stronger hand)."""

    UNRANKED = 1  # Not exactly five cards
    HIGH_CARD = 2
    ONE_PAIR = 3
    TWO_PAIR = 4
    THREE_OF_A_KIND = 5
    STRAIGHT = 6
    FLUSH = 7
    FULL_HOUSE = 8
    FOUR_OF_A_KIND = 9
    STRAIGHT_FLUSH = 10


class MalformedHandPolicy(Enum):
    """What to do with a hand that does not hold exactly five cards."""

    RANK_LOWEST = "rank_lowest"
    REJECT = "reject"


class MalformedHandError(ValueError):
    """Raised when a hand does not contain exactly five cards."""

    pass


CATEGORY_LABELS = {
    HandCategory.UNRANKED: "unranked",
    HandCategory.HIGH_CARD: "high card",
    HandCategory.ONE_PAIR: "one pair",
    HandCategory.TWO_PAIR: "two pair",
    HandCategory.THREE_OF_A_KIND: "three of a kind",
    HandCategory.STRAIGHT: "straight",
    HandCategory.FLUSH: "flush",
    HandCategory.FULL_HOUSE: "full house",
    HandCategory.FOUR_OF_A_KIND: "four of a kind",
    HandCategory.STRAIGHT_FLUSH: "straight flush",
}


@dataclass(frozen=True, order=True)
class Hand:
    """A scored five-card hand.

    Ordering, equality and hashing use only ``score``, so two hands holding
    the same ranks in different suits or token order compare equal.

    Attributes:
        score: Score vector ``(category, *tiebreak)`` compared lexicographically
        category: The hand category
        tiebreak: Category-specific tiebreak ranks, most significant first
        cards: Parsed cards in input order
        ranks: Card ranks after wheel normalization, descending
        tokens: The original card tokens, kept for output
    """

    score: Tuple[int, ...]
    category: HandCategory = field(compare=False)
    tiebreak: Tuple[Rank, ...] = field(compare=False)
    cards: Tuple[Card, ...] = field(compare=False, repr=False)
    ranks: Tuple[Rank, ...] = field(compare=False, repr=False)
    tokens: Tuple[str, ...] = field(compare=False)

    def __len__(self) -> int:
        return len(self.cards)

    def __str__(self) -> str:
        cards_str = " ".join(str(c) for c in self.cards)
        return f"{self.category.name}({cards_str})"

    @property
    def size(self) -> int:
        """Number of cards in the hand."""
        return len(self.cards)

    @property
    def is_ranked(self) -> bool:
        """Whether the hand holds exactly five cards."""
        return self.category != HandCategory.UNRANKED

    @classmethod
    def from_cards(
        cls,
        cards: Sequence[Card],
        tokens: Optional[Sequence[str]] = None,
        policy: MalformedHandPolicy = MalformedHandPolicy.RANK_LOWEST,
    ) -> "Hand":
        """Score already parsed cards.

        Args:
            cards: Card objects in input order
            tokens: Original tokens; rendered from the cards if omitted
            policy: Handling for hands without exactly five cards

        Returns:
            Scored Hand

        Raises:
            MalformedHandError: If the hand is malformed and policy is REJECT
        """
        cards = tuple(cards)
        if tokens is None:
            tokens = [str(c) for c in cards]

        if len(cards) != HAND_SIZE and policy == MalformedHandPolicy.REJECT:
            raise MalformedHandError(
                f"Hand must contain {HAND_SIZE} cards, got {len(cards)}: {list(tokens)}"
            )

        ranks = normalize_low_ace([c.rank for c in cards])
        category, tiebreak = classify(ranks, [c.suit for c in cards])
        logger.debug("Classified %s as %s %s", list(tokens), category.name, list(tiebreak))

        return cls(
            score=(int(category),) + tuple(int(r) for r in tiebreak),
            category=category,
            tiebreak=tiebreak,
            cards=cards,
            ranks=ranks,
            tokens=tuple(tokens),
        )

    @classmethod
    def from_tokens(
        cls,
        tokens: Union[str, Iterable[str]],
        policy: MalformedHandPolicy = MalformedHandPolicy.RANK_LOWEST,
    ) -> "Hand":
        """Parse and score a hand from card tokens like ['2H', '3D', ...].

        A single string is split on whitespace.

        Raises:
            ParseError: If any token is not a valid card
            MalformedHandError: If the hand is malformed and policy is REJECT
        """
        if isinstance(tokens, str):
            tokens = tokens.split()
        tokens = tuple(tokens)
        cards = [parse_card(t) for t in tokens]
        return cls.from_cards(cards, tokens=tokens, policy=policy)

    def describe(self) -> str:
        """Human-readable category plus tiebreak ranks, e.g. 'straight [5 4 3 2 A]'."""
        label = CATEGORY_LABELS[self.category]
        if not self.tiebreak:
            return label
        ranks_str = " ".join(RANK_SYMBOLS[r] for r in self.tiebreak)
        return f"{label} [{ranks_str}]"


def normalize_low_ace(ranks: Iterable[int]) -> Tuple[Rank, ...]:
    """Sort ranks descending, playing the ace low if they form the wheel.

    Only the exact rank multiset {A, 5, 4, 3, 2} is rewritten; suits play
    no part.

    Args:
        ranks: Card ranks in any order

    Returns:
        Tuple of ranks, descending
    """
    ordered = tuple(sorted(Rank(r) for r in ranks))
    if ordered == WHEEL_RANKS:
        ordered = LOW_WHEEL_RANKS
    return tuple(reversed(ordered))


def _rank_counts(ranks: Sequence[Rank]) -> Dict[Rank, int]:
    counts = {}
    for rank in ranks:
        counts[rank] = counts.get(rank, 0) + 1
    return counts


def _ranks_repeated(counts: Dict[Rank, int], repeats: int) -> Tuple[Rank, ...]:
    """Ranks appearing exactly ``repeats`` times, highest first."""
    return tuple(sorted((r for r, c in counts.items() if c == repeats), reverse=True))


def _is_flush(suits: Sequence[Suit]) -> bool:
    return len(set(suits)) == 1


def _is_straight(ranks: Sequence[Rank]) -> bool:
    return len(ranks) == HAND_SIZE and are_consecutive(list(ranks))


# Each _try_* function receives (ranks descending, suits, rank counts) and
# returns the tiebreak tuple if the hand belongs to its category, else None.

TiebreakFn = Callable[[Tuple[Rank, ...], Sequence[Suit], Dict[Rank, int]], Optional[Tuple[Rank, ...]]]


def _try_straight_flush(ranks, suits, counts) -> Optional[Tuple[Rank, ...]]:
    if _is_flush(suits) and _is_straight(ranks):
        return ranks
    return None


def _try_four_of_a_kind(ranks, suits, counts) -> Optional[Tuple[Rank, ...]]:
    quads = _ranks_repeated(counts, 4)
    if not quads:
        return None
    return quads + _ranks_repeated(counts, 1)


def _try_full_house(ranks, suits, counts) -> Optional[Tuple[Rank, ...]]:
    trips = _ranks_repeated(counts, 3)
    pairs = _ranks_repeated(counts, 2)
    if not (trips and pairs):
        return None
    return trips + pairs


def _try_flush(ranks, suits, counts) -> Optional[Tuple[Rank, ...]]:
    if _is_flush(suits) and not _is_straight(ranks):
        return ranks
    return None


def _try_straight(ranks, suits, counts) -> Optional[Tuple[Rank, ...]]:
    if _is_straight(ranks) and not _is_flush(suits):
        return ranks
    return None


def _try_three_of_a_kind(ranks, suits, counts) -> Optional[Tuple[Rank, ...]]:
    trips = _ranks_repeated(counts, 3)
    if not trips or _ranks_repeated(counts, 2):
        return None
    return trips + _ranks_repeated(counts, 1)


def _try_two_pair(ranks, suits, counts) -> Optional[Tuple[Rank, ...]]:
    pairs = _ranks_repeated(counts, 2)
    if len(pairs) != 2:
        return None
    return pairs + _ranks_repeated(counts, 1)


def _try_one_pair(ranks, suits, counts) -> Optional[Tuple[Rank, ...]]:
    pairs = _ranks_repeated(counts, 2)
    if len(pairs) != 1:
        return None
    return pairs + _ranks_repeated(counts, 1)


# Checked in order, strongest category first
_CLASSIFIERS: Tuple[Tuple[HandCategory, TiebreakFn], ...] = (
    (HandCategory.STRAIGHT_FLUSH, _try_straight_flush),
    (HandCategory.FOUR_OF_A_KIND, _try_four_of_a_kind),
    (HandCategory.FULL_HOUSE, _try_full_house),
    (HandCategory.FLUSH, _try_flush),
    (HandCategory.STRAIGHT, _try_straight),
    (HandCategory.THREE_OF_A_KIND, _try_three_of_a_kind),
    (HandCategory.TWO_PAIR, _try_two_pair),
    (HandCategory.ONE_PAIR, _try_one_pair),
)


def classify(
    ranks: Sequence[Rank], suits: Sequence[Suit]
) -> Tuple[HandCategory, Tuple[Rank, ...]]:
    """Find the category and tiebreak of a hand.

    Args:
        ranks: Normalized ranks (see ``normalize_low_ace``)
        suits: Card suits

    Returns:
        Tuple of (category, tiebreak ranks)
    """
    if len(ranks) != HAND_SIZE:
        return HandCategory.UNRANKED, ()

    ranks = tuple(sorted(ranks, reverse=True))
    counts = _rank_counts(ranks)

    for category, try_match in _CLASSIFIERS:
        tiebreak = try_match(ranks, suits, counts)
        if tiebreak is not None:
            return category, tiebreak

    return HandCategory.HIGH_CARD, ranks


def parse_hand(
    tokens: Union[str, Iterable[str]],
    policy: MalformedHandPolicy = MalformedHandPolicy.RANK_LOWEST,
) -> Hand:
    """Parse and score a hand. See ``Hand.from_tokens``."""
    return Hand.from_tokens(tokens, policy=policy)


def compare_hands(hand1: Hand, hand2: Hand) -> int:
    """Compare two hands.

    Returns:
        Positive if hand1 > hand2
        Negative if hand1 < hand2
        Zero if the score vectors are equal
    """
    return (hand1.score > hand2.score) - (hand1.score < hand2.score)


def can_beat(hand1: Hand, hand2: Hand) -> bool:
    """Check if hand1 strictly beats hand2."""
    return compare_hands(hand1, hand2) > 0


def get_categories() -> List[HandCategory]:
    """Get all real five-card categories, weakest first."""
    return [c for c in HandCategory if c != HandCategory.UNRANKED]


def describe_categories() -> dict:
    """Get a description of requirements for each hand category.

    Returns:
        Dict mapping HandCategory to description string
    """
    return {
        HandCategory.STRAIGHT_FLUSH: "Five consecutive ranks of one suit",
        HandCategory.FOUR_OF_A_KIND: "Four cards of the same rank + kicker",
        HandCategory.FULL_HOUSE: "Three cards of one rank + two of another",
        HandCategory.FLUSH: "Five cards of one suit, not consecutive",
        HandCategory.STRAIGHT: "Five consecutive ranks, mixed suits (A-2-3-4-5 plays the ace low)",
        HandCategory.THREE_OF_A_KIND: "Three cards of the same rank + two unpaired kickers",
        HandCategory.TWO_PAIR: "Two different pairs + kicker",
        HandCategory.ONE_PAIR: "Two cards of the same rank + three kickers",
        HandCategory.HIGH_CARD: "No pair, flush or straight",
        HandCategory.UNRANKED: "Not exactly five cards; loses to every hand",
    }


# Helper functions for creating cards in tests and scripts


def make_cards_from_string(s: str) -> List[Card]:
    """Parse cards from a string like "2H 3D 5S 9C KH".

    Args:
        s: Space-separated card tokens

    Returns:
        List of Card objects
    """
    return [parse_card(cs) for cs in s.split()]
