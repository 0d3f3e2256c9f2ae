"""Tests for hand classification."""

import pytest

from balatro_ai.engine.deck import parse_card, parse_cards
from balatro_ai.engine.hand_detector import (
    DEFAULT_RULES,
    ContainedHandTypes,
    HandDetector,
    HandDetectorConfig,
    HandType,
    classify_hand,
    contained_hand_types,
    contains_run,
    detect_hand,
    run_ranks,
    rank_frequencies,
    suit_frequencies,
)


def cards(s: str):
    """Shorthand: cards('AS KS QS JS 10S') -> [Card(...), ...]"""
    return parse_cards(s)


def ranks_of(s: str) -> list[int]:
    return rank_frequencies(cards(s))


class TestClassifyHand:
    @pytest.mark.parametrize("hand, expected", [
        ("KH", HandType.HIGH_CARD),
        ("KH 9D 5C", HandType.HIGH_CARD),
        ("KH KD 5C", HandType.PAIR),
        ("KH KD 5C 5S", HandType.TWO_PAIR),
        ("7H 7D 7C", HandType.THREE_OF_A_KIND),
        ("5H 6D 7C 8S 9H", HandType.STRAIGHT),
        ("2H 5H 9H JH KH", HandType.FLUSH),
        ("2C 2D 7S 7H 7D", HandType.FULL_HOUSE),
        ("7H 7D 7C 7S", HandType.FOUR_OF_A_KIND),
        ("5H 6H 7H 8H 9H", HandType.STRAIGHT_FLUSH),
        ("AS KS QS JS 10S", HandType.ROYAL_FLUSH),
        ("7H 7D 7C 7S 7H", HandType.FIVE_OF_A_KIND),
        ("7H 7H 7H 2H 2H", HandType.FLUSH_HOUSE),
        ("7H 7H 7H 7H 7H", HandType.FLUSH_FIVE),
    ])
    def test_categories(self, hand, expected):
        assert classify_hand(cards(hand)) == expected

    def test_empty_hand_is_none(self):
        assert classify_hand([]) == HandType.NONE

    def test_zero_count_is_none(self):
        assert classify_hand(cards("AS AH"), count=0) == HandType.NONE

    def test_count_limits_cards_considered(self):
        hand = cards("AS AH KD")
        assert classify_hand(hand, count=1) == HandType.HIGH_CARD
        assert classify_hand(hand, count=2) == HandType.PAIR

    def test_missing_cards_are_skipped(self):
        assert classify_hand([parse_card("AS"), None, parse_card("AD")]) == HandType.PAIR

    def test_only_missing_cards_is_still_high_card(self):
        assert classify_hand([None, None]) == HandType.HIGH_CARD

    def test_idempotent(self):
        hand = cards("2C 2D 7S 7H 7D")
        assert classify_hand(hand) == classify_hand(hand)

    def test_hand_larger_than_max_is_rejected(self):
        with pytest.raises(ValueError):
            classify_hand(cards("2C 3C 4C 5C 6C 7C 8C 9C 10C"))

    def test_count_out_of_range_is_rejected(self):
        with pytest.raises(ValueError):
            classify_hand(cards("2C 3C"), count=3)
        with pytest.raises(ValueError):
            classify_hand(cards("2C 3C"), count=-1)


class TestStraights:
    def test_wheel(self):
        assert classify_hand(cards("AS 2D 3C 4H 5S")) == HandType.STRAIGHT

    def test_ace_high(self):
        assert classify_hand(cards("10S JD QC KH AS")) == HandType.STRAIGHT

    def test_no_wrap_around(self):
        assert classify_hand(cards("QS KD AC 2H 3S")) == HandType.HIGH_CARD

    def test_four_cards_are_not_a_straight(self):
        assert classify_hand(cards("5H 6D 7C 8S")) == HandType.HIGH_CARD

    def test_straight_inside_larger_hand(self):
        assert classify_hand(cards("2H 9C 3D 4S 5H 6C KD")) == HandType.STRAIGHT

    def test_four_card_rules(self):
        rules = HandDetectorConfig(flush_size=4, straight_size=4)
        assert classify_hand(cards("5H 6D 7C 8S"), config=rules) == HandType.STRAIGHT
        assert classify_hand(cards("2H 5H 9H JH"), config=rules) == HandType.FLUSH

    def test_shortcut_allows_single_gaps(self):
        rules = HandDetectorConfig(shortcut=True)
        hand = cards("2H 4D 6C 8S 10H")
        assert classify_hand(hand) == HandType.HIGH_CARD
        assert classify_hand(hand, config=rules) == HandType.STRAIGHT

    def test_shortcut_rejects_double_gaps(self):
        rules = HandDetectorConfig(shortcut=True)
        assert classify_hand(cards("2H 5D 6C 7S 8H"), config=rules) == HandType.HIGH_CARD

    def test_contains_run_without_ace_low(self):
        table = ranks_of("AS 2D 3C 4H 5S")
        assert contains_run(table, 5)
        assert not contains_run(table, 5, ace_low=False)

    def test_run_ranks_wheel(self):
        assert run_ranks(ranks_of("AS 2D 3C 4H 5S KD"), 5) == [0, 1, 2, 3, 12]
        assert run_ranks(ranks_of("AS 2D 3C 4H 5S"), 5, ace_low=False) == []


class TestFrequencyHelpers:
    def test_tables_sum_to_card_count(self):
        hand = cards("AS AH 7D 7C 2S")
        assert sum(rank_frequencies(hand)) == 5
        assert sum(suit_frequencies(hand)) == 5

    def test_missing_cards_not_counted(self):
        hand = [parse_card("AS"), None]
        assert sum(rank_frequencies(hand)) == 1
        assert sum(suit_frequencies(hand)) == 1


class TestContainedHandTypes:
    def test_full_house_contains_parts(self):
        contained = contained_hand_types(cards("2C 2D 7S 7H 7D"))
        assert contained.hand_types() == [
            HandType.HIGH_CARD,
            HandType.PAIR,
            HandType.TWO_PAIR,
            HandType.THREE_OF_A_KIND,
            HandType.FULL_HOUSE,
        ]

    def test_empty(self):
        contained = contained_hand_types([])
        assert not contained
        assert contained.strongest() == HandType.NONE

    def test_none_is_never_contained(self):
        assert not contained_hand_types(cards("AS")).contains(HandType.NONE)

    def test_straight_and_flush_need_not_share_cards(self):
        contained = contained_hand_types(cards("2H 3H 4H 5H 6D 9H"))
        assert contained.straight and contained.flush
        assert contained.strongest() == HandType.STRAIGHT_FLUSH

    def test_two_trips_make_a_full_house(self):
        assert classify_hand(cards("7H 7D 7C 9S 9H 9D")) == HandType.FULL_HOUSE

    def test_strongest_scans_from_the_top(self):
        contained = ContainedHandTypes(high_card=True, pair=True, flush=True)
        assert contained.strongest() == HandType.FLUSH

    def test_closure_invariants_on_random_hands(self, rng, full_deck):
        for _ in range(500):
            hand = rng.choices(full_deck, k=rng.randint(1, 8))
            ct = contained_hand_types(hand)
            ranks = rank_frequencies(hand)

            assert ct.high_card
            assert ct.strongest() == classify_hand(hand)
            if ct.flush_house:
                assert ct.flush and ct.full_house
            if ct.flush_five:
                assert ct.flush and ct.five_of_a_kind
            if ct.straight_flush:
                assert ct.straight and ct.flush
            if ct.royal_flush:
                assert ct.straight_flush
                assert all(ranks[r] for r in (8, 9, 10, 11, 12))
            if ct.full_house:
                assert ct.three_of_a_kind and ct.pair
            if ct.two_pair:
                assert ct.pair


class TestHandTypeOrdering:
    def test_strength_order(self):
        strengths = [h.strength for h in HandType]
        assert strengths == sorted(strengths)
        assert HandType.NONE.strength == 0
        assert HandType.FLUSH_FIVE.strength == 13

    def test_display_name(self):
        assert HandType.FULL_HOUSE.display_name == "Full House"


class TestDetect:
    def test_pair_scoring_cards(self):
        detected = detect_hand(cards("KH 5C KD"))
        assert detected.hand_type == HandType.PAIR
        assert detected.scoring_cards == cards("KH KD")
        assert detected.all_cards == cards("KH 5C KD")

    def test_two_pair_scoring_cards(self):
        detected = detect_hand(cards("KH 5C KD 5S 9H"))
        assert detected.scoring_cards == cards("KH KD 5C 5S")

    def test_high_card_scores_highest(self):
        detected = detect_hand(cards("3H AD 9C"))
        assert detected.scoring_cards == cards("AD")

    def test_flush_scores_every_card(self):
        hand = cards("2H 5H 9H JH KH")
        assert detect_hand(hand).scoring_cards == hand

    def test_four_card_flush_scores_only_the_suited_cards(self):
        rules = HandDetectorConfig(flush_size=4, straight_size=4)
        detected = detect_hand(cards("2H 5H 9H JH KS"), config=rules)
        assert detected.hand_type == HandType.FLUSH
        assert detected.scoring_cards == cards("2H 5H 9H JH")

    def test_four_card_straight_scores_only_the_run(self):
        rules = HandDetectorConfig(flush_size=4, straight_size=4)
        detected = detect_hand(cards("5H 6D 7C 8S KD"), config=rules)
        assert detected.hand_type == HandType.STRAIGHT
        assert detected.scoring_cards == cards("5H 6D 7C 8S")

    def test_straight_scores_every_card_of_a_five_card_run(self):
        hand = cards("9H 10D JC QS KD")
        assert detect_hand(hand).scoring_cards == hand

    def test_empty(self):
        detected = detect_hand([])
        assert detected.hand_type == HandType.NONE
        assert detected.base_chips == 0
        assert detected.base_mult == 0

    def test_levels_raise_base_values(self):
        detector = HandDetector(hand_levels={"PAIR": 3})
        detected = detector.detect(cards("KH KD"))
        assert detected.level == 3
        assert detected.base_chips == 10 + 15 * 2
        assert detected.base_mult == 2 + 1 * 2

    def test_levels_keyed_by_hand_type(self):
        detector = HandDetector(hand_levels={HandType.FLUSH: 2})
        assert detector.detect(cards("2H 5H 9H JH KH")).level == 2

    def test_detector_uses_default_rules(self):
        assert HandDetector().config == DEFAULT_RULES


class TestConfig:
    def test_defaults(self):
        assert DEFAULT_RULES.flush_size == 5
        assert DEFAULT_RULES.straight_size == 5
        assert not DEFAULT_RULES.shortcut
        assert DEFAULT_RULES.max_hand_size == 8

    def test_invalid_sizes(self):
        with pytest.raises(ValueError):
            HandDetectorConfig(straight_size=0)
