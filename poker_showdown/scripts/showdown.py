#!/usr/bin/env python3
"""Command line showdown between five-card poker hands.

Each hand is given as one argument (cards separated by spaces or commas),
or read from stdin one hand per line when no hands are given. Blank lines
and lines starting with '#' are ignored.

Usage:
    python -m poker_showdown.scripts.showdown "2H 3H 4H 5H 6H" "2S 3D 4C 5H 6H"
    echo "KH KS QH QS 2D" | python -m poker_showdown.scripts.showdown
    python -m poker_showdown.scripts.showdown --random 4 --seed 42 --verbose
"""

import argparse
import logging
import sys
from typing import List, Optional, TextIO

from poker_showdown.engine.showdown import (
    MAX_HANDS,
    Showdown,
    ShowdownConfig,
    deal_random_hands,
)
from poker_showdown.rules import MalformedHandError, MalformedHandPolicy, ParseError
from poker_showdown.utils.seeding import set_seed

logger = logging.getLogger(__name__)


def split_hand(text: str) -> List[str]:
    """Split one hand's text into card tokens."""
    return text.replace(",", " ").split()


def read_hands(stream: TextIO) -> List[List[str]]:
    """Read hands from a text stream, one per line."""
    hands = []
    for line in stream:
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        hands.append(split_hand(line))
    return hands


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Find the winning hand(s) of a five-card poker showdown",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m poker_showdown.scripts.showdown "2H 3H 4H 5H 6H" "2S 3D 4C 5H 6H"
  python -m poker_showdown.scripts.showdown --random 6 --seed 7 --verbose
  python -m poker_showdown.scripts.showdown --skip-invalid < hands.txt
        """,
    )
    parser.add_argument(
        "hands",
        nargs="*",
        help="Hands as quoted card lists, e.g. \"KH KS QH QS 2D\" (default: read stdin)",
    )
    parser.add_argument(
        "--random",
        "-r",
        type=int,
        default=None,
        metavar="N",
        help=f"Deal N random hands instead of reading input (1-{MAX_HANDS})",
    )
    parser.add_argument(
        "--seed", "-s", type=int, default=None, help="Random seed for --random"
    )
    parser.add_argument(
        "--reject-malformed",
        action="store_true",
        help="Treat hands without exactly five cards as errors instead of ranking them lowest",
    )
    parser.add_argument(
        "--skip-invalid",
        action="store_true",
        help="Leave out invalid hands instead of stopping with an error",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Print every hand with its category"
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)",
    )
    return parser


def main(argv: Optional[List[str]] = None, stdin: Optional[TextIO] = None) -> int:
    """Main entry point. Returns the process exit status."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    config = ShowdownConfig(
        malformed_policy=(
            MalformedHandPolicy.REJECT if args.reject_malformed else MalformedHandPolicy.RANK_LOWEST
        ),
        skip_invalid=args.skip_invalid,
    )

    if args.random is not None:
        if args.hands:
            parser.error("--random cannot be combined with explicit hands")
        seed = set_seed(args.seed)
        logger.info("Dealing %d hands with seed %d", args.random, seed)
        try:
            raw_hands = deal_random_hands(args.random, seed=seed)
        except ValueError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
    elif args.hands:
        raw_hands = [split_hand(h) for h in args.hands]
    else:
        raw_hands = read_hands(stdin if stdin is not None else sys.stdin)

    try:
        showdown = Showdown(raw_hands, config=config)
    except (ParseError, MalformedHandError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    for rejected in showdown.rejected:
        print(f"Skipped hand {rejected.index + 1}: {rejected.error}", file=sys.stderr)

    if args.verbose:
        for index, hand in zip(showdown.indices, showdown.hands):
            print(f"Hand {index + 1}: {' '.join(hand.tokens)} ({hand.describe()})")

    winners = showdown.winner_indices()
    if not winners:
        print("No hands to compare.")
        return 0

    by_index = dict(zip(showdown.indices, showdown.hands))
    label = "Winner" if len(winners) == 1 else "Tie"
    for index in winners:
        hand = by_index[index]
        print(f"{label}: hand {index + 1}: {' '.join(hand.tokens)} ({hand.describe()})")

    return 0


if __name__ == "__main__":
    sys.exit(main())
