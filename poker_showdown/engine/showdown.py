"""Showdown: picking the winning hand(s) among any number of hands.

This module provides:
- ShowdownConfig: Malformed/invalid hand handling options
- Showdown (alias Poker): Scores every hand and selects all hands tying
  the best score vector
- best_hand: One-shot winner selection from raw token lists
- score_matrix: Score vectors of many hands as a NumPy array
- deal_random_hands / play_random_showdown: Deal distinct hands from one
  shuffled deck and evaluate them

Showdown flow:
1. Parse each raw hand (list of card tokens) into a scored Hand, keeping
   input order
2. Find the maximum score vector (ties allowed)
3. Return every hand whose score vector equals the maximum, as its
   original tokens, in input order
"""

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple, Union

import numpy as np

from poker_showdown.rules import (
    HAND_SIZE,
    Hand,
    MalformedHandError,
    MalformedHandPolicy,
    ParseError,
    create_standard_deck,
)

logger = logging.getLogger(__name__)

RawHand = Union[str, Sequence[str]]

# Score vector width: category + up to five tiebreak ranks
SCORE_WIDTH = 1 + HAND_SIZE

# Distinct five-card hands that fit in one deck
MAX_HANDS = 52 // HAND_SIZE


@dataclass
class ShowdownConfig:
    """Showdown configuration.

    Attributes:
        malformed_policy: RANK_LOWEST scores hands without five cards as
            UNRANKED; REJECT raises MalformedHandError for them
        skip_invalid: If True, hands raising ParseError or MalformedHandError
            are logged, recorded in Showdown.rejected and left out instead of
            aborting the whole showdown
    """

    malformed_policy: MalformedHandPolicy = MalformedHandPolicy.RANK_LOWEST
    skip_invalid: bool = False


@dataclass(frozen=True)
class RejectedHand:
    """A hand left out of a showdown because it could not be scored."""

    index: int
    tokens: Tuple[str, ...]
    error: ValueError


def _as_tokens(raw_hand: RawHand) -> Tuple[str, ...]:
    if isinstance(raw_hand, str):
        return tuple(raw_hand.split())
    return tuple(raw_hand)


class Showdown:
    """Compares a collection of hands and finds the winner(s).

    Attributes:
        hands: Scored hands in input order
        indices: Input position of each entry in ``hands``
        rejected: Hands skipped under ``skip_invalid``
        config: The ShowdownConfig in use
    """

    def __init__(self, raw_hands: Iterable[RawHand], config: Optional[ShowdownConfig] = None):
        self.config = config if config is not None else ShowdownConfig()
        self.hands: List[Hand] = []
        self.indices: List[int] = []
        self.rejected: List[RejectedHand] = []

        for index, raw_hand in enumerate(raw_hands):
            tokens = _as_tokens(raw_hand)
            try:
                hand = Hand.from_tokens(tokens, policy=self.config.malformed_policy)
            except (ParseError, MalformedHandError) as e:
                if not self.config.skip_invalid:
                    raise
                logger.warning("Skipping hand %d %s: %s", index, list(tokens), e)
                self.rejected.append(RejectedHand(index=index, tokens=tokens, error=e))
                continue
            self.hands.append(hand)
            self.indices.append(index)

    def __len__(self) -> int:
        return len(self.hands)

    def best_score(self) -> Optional[Tuple[int, ...]]:
        """Maximum score vector across all hands, or None if there are none."""
        if not self.hands:
            return None
        return max(hand.score for hand in self.hands)

    def winner_indices(self) -> List[int]:
        """Input positions of every hand tying the best score."""
        best = self.best_score()
        if best is None:
            return []
        return [i for i, hand in zip(self.indices, self.hands) if hand.score == best]

    def best_hands(self) -> List[Hand]:
        """Every hand tying the best score, in input order."""
        best = self.best_score()
        if best is None:
            return []
        winners = [hand for hand in self.hands if hand.score == best]
        logger.debug(
            "Best score %s shared by %d of %d hands", best, len(winners), len(self.hands)
        )
        return winners

    def best_hand(self) -> List[List[str]]:
        """Original card tokens of every winning hand, in input order.

        Returns an empty list when there are no hands.
        """
        return [list(hand.tokens) for hand in self.best_hands()]


# Name kept for callers that think of the whole comparison as "poker"
Poker = Showdown


def best_hand(
    raw_hands: Iterable[RawHand], config: Optional[ShowdownConfig] = None
) -> List[List[str]]:
    """Return the original tokens of the winning hand(s).

    Args:
        raw_hands: Hands as lists of card tokens (or space-separated strings)
        config: Optional ShowdownConfig

    Returns:
        Winning hands' tokens in input order; empty if no hands were given
    """
    return Showdown(raw_hands, config=config).best_hand()


def score_matrix(hands: Sequence[Hand]) -> np.ndarray:
    """Stack score vectors into an int64 array of shape (len(hands), SCORE_WIDTH).

    Shorter vectors (e.g. UNRANKED hands) are padded with zeros, which keeps
    row-wise lexicographic order identical to Hand ordering.
    """
    matrix = np.zeros((len(hands), SCORE_WIDTH), dtype=np.int64)
    for row, hand in enumerate(hands):
        matrix[row, : len(hand.score)] = hand.score
    return matrix


def deal_random_hands(num_hands: int, seed: Optional[int] = None) -> List[List[str]]:
    """Deal distinct five-card hands from one shuffled deck.

    Args:
        num_hands: Number of hands (1 to MAX_HANDS)
        seed: Random seed for reproducibility

    Returns:
        List of hands, each a list of card tokens
    """
    if not 1 <= num_hands <= MAX_HANDS:
        raise ValueError(f"num_hands must be between 1 and {MAX_HANDS}, got {num_hands}")

    rng = np.random.default_rng(seed)
    deck = create_standard_deck()
    order = rng.permutation(len(deck))

    hands = []
    for i in range(num_hands):
        dealt = order[i * HAND_SIZE : (i + 1) * HAND_SIZE]
        hands.append([str(deck[int(idx)]) for idx in dealt])
    return hands


def play_random_showdown(
    num_hands: int, seed: Optional[int] = None, config: Optional[ShowdownConfig] = None
) -> Tuple[Showdown, List[List[str]]]:
    """Deal random hands and evaluate them.

    Args:
        num_hands: Number of hands to deal
        seed: Random seed for reproducibility
        config: Optional ShowdownConfig

    Returns:
        Tuple of (showdown, winning hands' tokens)
    """
    showdown = Showdown(deal_random_hands(num_hands, seed=seed), config=config)
    return showdown, showdown.best_hand()
