"""
Scoring for the Balatro AI engine.

Two paths read the same base value table:

* score_combo: the AI's heuristic. Level 1 base values, every selected card's
  chips, no jokers or hand levels.
* ScoringEngine: the gameplay path. Level-adjusted base values and the chips
  of the scoring cards only.

Score = (Base Chips + Card Chips) × Base Mult, saturated to 32 bits.
"""

from dataclasses import dataclass, field
from typing import Optional, Sequence

from .deck import Card
from .hand_detector import (
    DEFAULT_RULES,
    HAND_BASE_VALUES,
    DetectedHand,
    HandType,
    classify_hand,
)

U32_MAX = 0xFFFFFFFF


def protected_mult(a: int, b: int, limit: int = U32_MAX) -> int:
    """
    Multiply two unsigned values, saturating at `limit` instead of wrapping.

    A zero operand always gives 0.
    """
    if a == 0 or b == 0:
        return 0
    if a > limit // b:
        return limit
    return a * b


def score_combo(cards: Sequence[Optional[Card]]) -> int:
    """Heuristic score of playing exactly these cards under the default rules."""
    hand_type = classify_hand(cards, config=DEFAULT_RULES)
    if hand_type is HandType.NONE:
        return 0

    chips, mult = HAND_BASE_VALUES[hand_type]
    for card in cards:
        if card is not None:
            chips += card.chip_value

    return protected_mult(chips, mult)


@dataclass
class ScoreBreakdown:
    """Detailed breakdown of how score was calculated."""
    hand_type: HandType
    level: int
    base_chips: int
    base_mult: int
    card_chips: int
    final_chips: int
    final_score: int
    details: list[str] = field(default_factory=list)

    def add_detail(self, msg: str):
        self.details.append(msg)


class ScoringEngine:
    """
    Calculates played-hand scores following the game's base rules.

    Score = (Base Chips + Scoring Card Chips) × Base Mult
    """

    def __init__(self, limit: int = U32_MAX):
        self.limit = limit

    def score_hand(self, hand: DetectedHand) -> ScoreBreakdown:
        """Calculate the score for a played hand."""
        breakdown = ScoreBreakdown(
            hand_type=hand.hand_type,
            level=hand.level,
            base_chips=hand.base_chips,
            base_mult=hand.base_mult,
            card_chips=0,
            final_chips=0,
            final_score=0,
        )
        if hand.hand_type is HandType.NONE:
            return breakdown

        breakdown.add_detail(
            f"{hand.hand_type.name} lvl {hand.level}: "
            f"{hand.base_chips} Chips x {hand.base_mult} Mult")

        for card in hand.scoring_cards:
            breakdown.card_chips += card.chip_value
            breakdown.add_detail(f"+{card.chip_value} Chips ({card})")

        breakdown.final_chips = hand.base_chips + breakdown.card_chips
        breakdown.final_score = protected_mult(breakdown.final_chips, hand.base_mult, self.limit)
        if hand.base_mult and breakdown.final_chips > self.limit // hand.base_mult:
            breakdown.add_detail("Score saturated")
        return breakdown


def calculate_score(hand: DetectedHand) -> int:
    """Convenience function to calculate score."""
    return ScoringEngine().score_hand(hand).final_score


def score_breakdown(hand: DetectedHand) -> ScoreBreakdown:
    """Get detailed score breakdown."""
    return ScoringEngine().score_hand(hand)
