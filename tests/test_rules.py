"""Tests for the rules engine (ranks and hands).

Test coverage:
- Card parsing: rank/suit characters, lowercase, symbols, error cases
- Category detection for all nine categories, one predicate per hand
- Tiebreak vectors per category
- Wheel rule: A-2-3-4-5 plays the ace low
- Score ordering: total order across categories and within a category
- Malformed hands: ranked lowest or rejected
"""

import itertools

import pytest
from poker_showdown.rules import (
    Rank,
    Suit,
    Card,
    ParseError,
    parse_card,
    are_consecutive,
    get_rank_counts,
    create_standard_deck,
    sort_cards,
    compare_ranks,
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


# One representative hand per category, weakest first
CATEGORY_EXAMPLES = [
    (HandCategory.HIGH_CARD, "2H 3D 5S 9C KH"),
    (HandCategory.ONE_PAIR, "4H 4D 9S 7C 2H"),
    (HandCategory.TWO_PAIR, "KH KS QH QS 2D"),
    (HandCategory.THREE_OF_A_KIND, "8H 8D 8S KC 3H"),
    (HandCategory.STRAIGHT, "2S 3D 4C 5H 6H"),
    (HandCategory.FLUSH, "2D 7D 9D JD KD"),
    (HandCategory.FULL_HOUSE, "7H 7D 7S 2C 2D"),
    (HandCategory.FOUR_OF_A_KIND, "9C 9D 9H 9S 2C"),
    (HandCategory.STRAIGHT_FLUSH, "2H 3H 4H 5H 6H"),
]


class TestRankOrdering:
    """Test that rank ordering is correct: A > K > Q > J > T > 9 > ... > 2"""

    def test_ace_is_highest(self):
        assert Rank.ACE > Rank.KING
        assert Rank.ACE > Rank.TWO

    def test_ace_low_is_lowest(self):
        assert Rank.ACE_LOW < Rank.TWO
        assert int(Rank.ACE_LOW) == 1

    def test_face_card_values(self):
        assert int(Rank.TEN) == 10
        assert int(Rank.JACK) == 11
        assert int(Rank.QUEEN) == 12
        assert int(Rank.KING) == 13
        assert int(Rank.ACE) == 14

    def test_compare_ranks_function(self):
        assert compare_ranks(Rank.ACE, Rank.KING) > 0
        assert compare_ranks(Rank.THREE, Rank.FOUR) < 0
        assert compare_ranks(Rank.KING, Rank.KING) == 0

    def test_are_consecutive(self):
        assert are_consecutive([Rank.TWO, Rank.THREE, Rank.FOUR])
        assert are_consecutive([Rank.KING, Rank.TEN, Rank.QUEEN, Rank.JACK])
        assert not are_consecutive([Rank.THREE, Rank.FIVE])
        assert not are_consecutive([Rank.THREE, Rank.THREE, Rank.FOUR])


class TestCardParsing:
    """Test Card creation from two-character tokens."""

    def test_card_creation(self):
        card = Card(rank=Rank.THREE, suit=Suit.HEART)
        assert card.rank == Rank.THREE
        assert card.suit == Suit.HEART

    def test_rank_characters(self):
        expected = {
            "2": 2, "3": 3, "4": 4, "5": 5, "6": 6, "7": 7, "8": 8, "9": 9,
            "T": 10, "J": 11, "Q": 12, "K": 13, "A": 14,
        }
        for char, value in expected.items():
            assert parse_card(f"{char}S").rank == value

    def test_suit_characters(self):
        assert parse_card("AH").suit == Suit.HEART
        assert parse_card("AD").suit == Suit.DIAMOND
        assert parse_card("AC").suit == Suit.CLUB
        assert parse_card("AS").suit == Suit.SPADE

    def test_lowercase_and_symbols(self):
        assert parse_card("th") == Card(rank=Rank.TEN, suit=Suit.HEART)
        assert parse_card("Q♠") == Card(rank=Rank.QUEEN, suit=Suit.SPADE)

    def test_str_is_canonical_token(self):
        assert str(parse_card("td")) == "TD"
        assert str(Card.from_string("AS")) == "AS"

    def test_ace_never_parses_low(self):
        assert parse_card("AH").rank == Rank.ACE

    @pytest.mark.parametrize("token", ["", "A", "10H", "AHS", "1H", "0S", "XH", "AX", "A "])
    def test_invalid_tokens_raise(self, token):
        with pytest.raises(ParseError):
            parse_card(token)

    def test_non_string_raises(self):
        with pytest.raises(ParseError):
            parse_card(None)

    def test_parse_error_is_value_error(self):
        with pytest.raises(ValueError, match="ZH"):
            parse_card("ZH")

    def test_card_equality_and_hashing(self):
        c1 = parse_card("3H")
        c2 = Card(rank=Rank.THREE, suit=Suit.HEART)
        c3 = parse_card("3S")

        assert c1 == c2
        assert c1 != c3
        assert len({c1, c2, c3}) == 2

    def test_standard_deck(self):
        deck = create_standard_deck()
        assert len(deck) == 52
        assert len(set(deck)) == 52

        rank_counts = get_rank_counts(deck)
        assert all(count == 4 for count in rank_counts.values())
        assert Rank.ACE_LOW not in rank_counts

    def test_sort_cards(self):
        cards = make_cards_from_string("KH 2D 9S")
        assert [str(c) for c in sort_cards(cards)] == ["2D", "9S", "KH"]
        assert [str(c) for c in sort_cards(cards, reverse=True)] == ["KH", "9S", "2D"]


class TestCategoryDetection:
    """Each example hand falls in exactly its own category."""

    @pytest.mark.parametrize("category,tokens", CATEGORY_EXAMPLES)
    def test_category(self, category, tokens):
        hand = parse_hand(tokens)
        assert hand.category == category
        assert hand.score[0] == int(category)

    def test_category_values(self):
        assert int(HandCategory.HIGH_CARD) == 2
        assert int(HandCategory.STRAIGHT) == 6
        assert int(HandCategory.STRAIGHT_FLUSH) == 10

    def test_categories_match_rank_shape(self):
        """Every rank multiset, flushed or not, lands in the category its shape implies."""
        by_shape = {
            (4, 1): HandCategory.FOUR_OF_A_KIND,
            (3, 2): HandCategory.FULL_HOUSE,
            (3, 1, 1): HandCategory.THREE_OF_A_KIND,
            (2, 2, 1): HandCategory.TWO_PAIR,
            (2, 1, 1, 1): HandCategory.ONE_PAIR,
        }
        ranks = [r for r in Rank if r != Rank.ACE_LOW]
        mixed = [Suit.HEART, Suit.DIAMOND, Suit.CLUB, Suit.SPADE, Suit.HEART]
        for combo in itertools.combinations_with_replacement(ranks, 5):
            shape = tuple(sorted(get_rank_counts(
                [Card(rank=r, suit=Suit.HEART) for r in combo]
            ).values(), reverse=True))
            if shape == (5,):
                continue
            if shape in by_shape:
                hand = Hand.from_cards([Card(rank=r, suit=s) for r, s in zip(combo, mixed)])
                assert hand.category == by_shape[shape]
                continue

            values = sorted(int(r) for r in combo)
            straight = values[-1] - values[0] == 4 or values == [2, 3, 4, 5, 14]
            unsuited = Hand.from_cards([Card(rank=r, suit=s) for r, s in zip(combo, mixed)])
            suited = Hand.from_cards([Card(rank=r, suit=Suit.SPADE) for r in combo])
            if straight:
                assert unsuited.category == HandCategory.STRAIGHT
                assert suited.category == HandCategory.STRAIGHT_FLUSH
            else:
                assert unsuited.category == HandCategory.HIGH_CARD
                assert suited.category == HandCategory.FLUSH

    def test_get_categories_excludes_unranked(self):
        categories = get_categories()
        assert len(categories) == 9
        assert HandCategory.UNRANKED not in categories
        assert categories == sorted(categories)

    def test_describe_categories_covers_all(self):
        descriptions = describe_categories()
        assert set(descriptions) == set(HandCategory)

    def test_token_order_does_not_matter(self):
        a = parse_hand("KH KS QH QS 2D")
        b = parse_hand("2D QS KS QH KH")
        assert a.category == b.category
        assert a.score == b.score

    def test_idempotent_construction(self):
        a = parse_hand(["7H", "7D", "7S", "2C", "2D"])
        b = parse_hand(["7H", "7D", "7S", "2C", "2D"])
        assert a.category == b.category
        assert a.score == b.score


class TestTiebreaks:
    """Tiebreak vectors follow the category-specific layout."""

    def test_high_card_ranks_descending(self):
        hand = parse_hand("2H 3D 5S 9C KH")
        assert hand.tiebreak == (13, 9, 5, 3, 2)

    def test_one_pair(self):
        hand = parse_hand("4H 4D 9S 7C 2H")
        assert hand.tiebreak == (4, 9, 7, 2)

    def test_two_pair(self):
        hand = parse_hand("2D KH QS KS QH")
        assert hand.tiebreak == (13, 12, 2)

    def test_three_of_a_kind(self):
        hand = parse_hand("3H 8H 8D KC 8S")
        assert hand.tiebreak == (8, 13, 3)

    def test_full_house(self):
        hand = parse_hand("2C 7H 2D 7D 7S")
        assert hand.tiebreak == (7, 2)

    def test_four_of_a_kind(self):
        hand = parse_hand("2C 9C 9D 9H 9S")
        assert hand.tiebreak == (9, 2)

    def test_flush_ranks_descending(self):
        hand = parse_hand("9D 2D KD 7D JD")
        assert hand.tiebreak == (13, 11, 9, 7, 2)

    def test_straight_ranks_descending(self):
        hand = parse_hand("6H 2S 4C 3D 5H")
        assert hand.tiebreak == (6, 5, 4, 3, 2)

    def test_score_vector(self):
        hand = parse_hand("7H 7D 7S 2C 2D")
        assert hand.score == (8, 7, 2)


class TestWheel:
    """A-2-3-4-5 plays the ace as 1."""

    def test_normalize_low_ace(self):
        assert normalize_low_ace([14, 2, 3, 4, 5]) == (5, 4, 3, 2, 1)
        assert normalize_low_ace([Rank.FIVE, Rank.ACE, Rank.FOUR, Rank.THREE, Rank.TWO])[-1] == Rank.ACE_LOW

    def test_normalize_leaves_other_aces_high(self):
        assert normalize_low_ace([14, 13, 12, 11, 10]) == (14, 13, 12, 11, 10)
        assert normalize_low_ace([14, 2, 3, 4, 6]) == (14, 6, 4, 3, 2)
        assert normalize_low_ace([14, 14, 2, 3, 4]) == (14, 14, 4, 3, 2)

    def test_wheel_straight(self):
        hand = parse_hand("AS 2D 3C 4H 5H")
        assert hand.category == HandCategory.STRAIGHT
        assert hand.tiebreak == (5, 4, 3, 2, 1)
        assert hand.ranks == (5, 4, 3, 2, 1)

    def test_wheel_straight_flush(self):
        hand = parse_hand("AH 2H 3H 4H 5H")
        assert hand.category == HandCategory.STRAIGHT_FLUSH
        assert hand.score == (10, 5, 4, 3, 2, 1)

    def test_wheel_loses_to_six_high_straight(self):
        wheel = parse_hand("AS 2D 3C 4H 5H")
        six_high = parse_hand("2S 3D 4C 5H 6H")
        assert can_beat(six_high, wheel)
        assert not can_beat(wheel, six_high)

    def test_ace_high_straight_keeps_ace_high(self):
        broadway = parse_hand("TS JD QC KH AH")
        assert broadway.category == HandCategory.STRAIGHT
        assert broadway.tiebreak[0] == Rank.ACE

    def test_cards_keep_parsed_rank(self):
        hand = parse_hand("AH 2H 3H 4H 5H")
        assert hand.cards[0].rank == Rank.ACE
        assert hand.tokens[0] == "AH"

    def test_describe_wheel(self):
        assert parse_hand("AS 2D 3C 4H 5H").describe() == "straight [5 4 3 2 A]"

    def test_ace_wrap_is_not_straight(self):
        hand = parse_hand("QS KD AC 2H 3H")
        assert hand.category == HandCategory.HIGH_CARD


class TestOrdering:
    """Score vectors give a total order over hands."""

    def test_categories_strictly_increase(self):
        hands = [parse_hand(tokens) for _, tokens in CATEGORY_EXAMPLES]
        for weaker, stronger in zip(hands, hands[1:]):
            assert stronger > weaker
            assert compare_hands(stronger, weaker) > 0
            assert compare_hands(weaker, stronger) < 0

    def test_order_is_total(self):
        hands = [parse_hand(tokens) for _, tokens in CATEGORY_EXAMPLES]
        hands += [parse_hand("3H 3D 9S 7C 2H"), parse_hand("KS KC QD QC 3D")]
        for a, b in itertools.product(hands, repeat=2):
            assert (a < b) + (a == b) + (a > b) == 1
            assert compare_hands(a, b) == -compare_hands(b, a)
        for a, b, c in itertools.product(hands, repeat=3):
            if a <= b and b <= c:
                assert a <= c

    def test_equal_scores_compare_equal(self):
        a = parse_hand("KH KS QH QS 2D")
        b = parse_hand("KD KC QD QC 2S")
        assert a == b
        assert hash(a) == hash(b)
        assert compare_hands(a, b) == 0
        assert not can_beat(a, b)

    def test_kicker_decides(self):
        low = parse_hand("KH KS QH QS 2D")
        high = parse_hand("KD KC QD QC 3S")
        assert can_beat(high, low)

    def test_flush_compares_all_ranks(self):
        low = parse_hand("2D 7D 9D JD KD")
        high = parse_hand("3C 7C 9C JC KC")
        assert can_beat(high, low)

    def test_sorting_hands(self):
        hands = [parse_hand(tokens) for _, tokens in reversed(CATEGORY_EXAMPLES)]
        ordered = sorted(hands)
        assert [h.category for h in ordered] == [c for c, _ in CATEGORY_EXAMPLES]

    def test_max_picks_strongest(self):
        hands = [parse_hand(tokens) for _, tokens in CATEGORY_EXAMPLES]
        assert max(hands).category == HandCategory.STRAIGHT_FLUSH


class TestMalformedHands:
    """Hands without exactly five cards."""

    def test_short_hand_is_unranked(self):
        hand = parse_hand("AH AD AS AC")
        assert hand.category == HandCategory.UNRANKED
        assert hand.score == (1,)
        assert not hand.is_ranked
        assert len(hand) == 4

    def test_long_hand_is_unranked(self):
        hand = parse_hand("2H 3H 4H 5H 6H 7H")
        assert hand.category == HandCategory.UNRANKED

    def test_empty_hand_is_unranked(self):
        assert parse_hand([]).category == HandCategory.UNRANKED

    def test_unranked_loses_to_any_hand(self):
        unranked = parse_hand("AH AD AS AC")
        weakest = parse_hand("2H 3D 4S 5C 7H")
        assert can_beat(weakest, unranked)
        assert unranked < weakest

    def test_reject_policy_raises(self):
        with pytest.raises(MalformedHandError, match="5 cards"):
            parse_hand("AH AD AS AC", policy=MalformedHandPolicy.REJECT)

    def test_reject_policy_accepts_five_cards(self):
        hand = parse_hand("AH AD AS AC KD", policy=MalformedHandPolicy.REJECT)
        assert hand.category == HandCategory.FOUR_OF_A_KIND

    def test_bad_token_raises_parse_error(self):
        with pytest.raises(ParseError):
            parse_hand(["2H", "3H", "4H", "5H", "1H"])

    def test_classify_unranked(self):
        assert classify([Rank.ACE], [Suit.HEART]) == (HandCategory.UNRANKED, ())


class TestHandHelpers:
    def test_from_tokens_keeps_input(self):
        tokens = ["kh", "ks", "QH", "QS", "2D"]
        hand = Hand.from_tokens(tokens)
        assert hand.tokens == tuple(tokens)
        assert [str(c) for c in hand.cards] == ["KH", "KS", "QH", "QS", "2D"]

    def test_from_cards_renders_tokens(self):
        hand = Hand.from_cards(make_cards_from_string("9C 9D 9H 9S 2C"))
        assert hand.tokens == ("9C", "9D", "9H", "9S", "2C")
        assert hand.size == 5

    def test_str(self):
        assert str(parse_hand("2H 3H 4H 5H 6H")) == "STRAIGHT_FLUSH(2H 3H 4H 5H 6H)"

    def test_describe(self):
        assert parse_hand("7H 7D 7S 2C 2D").describe() == "full house [7 2]"
        assert parse_hand("AH").describe() == "unranked"
