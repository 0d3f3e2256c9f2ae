"""
Hand detection for the Balatro AI engine.
Classifies played cards into the strongest poker hand they form.

Classification works on two frequency tables rebuilt on every call, one slot
per rank and one per suit. Every category the cards satisfy is derived from
those tables into a ContainedHandTypes record, in this order:

    high card -> n-of-a-kind -> pair / two pair -> three of a kind
    -> straight -> flush -> full house -> four of a kind
    -> straight flush -> royal flush -> five of a kind
    -> flush house / flush five

Composite categories are only set when their parts were set in the same
evaluation. The strongest category is then picked by scanning HandType from
strongest to weakest.
"""

from collections import Counter
from dataclasses import dataclass, fields
from enum import Enum, auto
from types import MappingProxyType
from typing import Optional, Sequence

from .deck import Card, NUM_RANKS, NUM_SUITS, RANK_ORDER


class HandType(Enum):
    """Poker hand types, ordered by base strength."""
    NONE = 0
    HIGH_CARD = auto()
    PAIR = auto()
    TWO_PAIR = auto()
    THREE_OF_A_KIND = auto()
    STRAIGHT = auto()
    FLUSH = auto()
    FULL_HOUSE = auto()
    FOUR_OF_A_KIND = auto()
    STRAIGHT_FLUSH = auto()
    ROYAL_FLUSH = auto()
    FIVE_OF_A_KIND = auto()
    FLUSH_HOUSE = auto()
    FLUSH_FIVE = auto()

    @property
    def strength(self) -> int:
        return self.value

    @property
    def display_name(self) -> str:
        return self.name.replace("_", " ").title()


# Base chips and mult for each hand type (level 1).
# Shared by the AI heuristic and the gameplay scoring path.
HAND_BASE_VALUES = MappingProxyType({
    HandType.NONE: (0, 0),
    HandType.HIGH_CARD: (5, 1),
    HandType.PAIR: (10, 2),
    HandType.TWO_PAIR: (20, 2),
    HandType.THREE_OF_A_KIND: (30, 3),
    HandType.STRAIGHT: (30, 4),
    HandType.FLUSH: (35, 4),
    HandType.FULL_HOUSE: (40, 4),
    HandType.FOUR_OF_A_KIND: (60, 7),
    HandType.STRAIGHT_FLUSH: (100, 8),
    HandType.ROYAL_FLUSH: (100, 8),
    HandType.FIVE_OF_A_KIND: (120, 12),
    HandType.FLUSH_HOUSE: (140, 14),
    HandType.FLUSH_FIVE: (160, 16),
})

# Chips and mult added per level up (gameplay path only)
LEVEL_UP_BONUS = MappingProxyType({
    HandType.NONE: (0, 0),
    HandType.HIGH_CARD: (10, 1),
    HandType.PAIR: (15, 1),
    HandType.TWO_PAIR: (20, 1),
    HandType.THREE_OF_A_KIND: (20, 2),
    HandType.STRAIGHT: (30, 3),
    HandType.FLUSH: (15, 2),
    HandType.FULL_HOUSE: (25, 2),
    HandType.FOUR_OF_A_KIND: (30, 3),
    HandType.STRAIGHT_FLUSH: (40, 4),
    HandType.ROYAL_FLUSH: (40, 4),
    HandType.FIVE_OF_A_KIND: (35, 3),
    HandType.FLUSH_HOUSE: (40, 4),
    HandType.FLUSH_FIVE: (50, 3),
})

ACE = RANK_ORDER["A"]
ROYAL_RANKS = tuple(RANK_ORDER[r] for r in ("10", "J", "Q", "K", "A"))

# Cards counted towards the hand for n-of-a-kind families
_KIND_SCORING_COUNT = {
    HandType.PAIR: 2,
    HandType.TWO_PAIR: 4,
    HandType.THREE_OF_A_KIND: 3,
    HandType.FOUR_OF_A_KIND: 4,
}

_RUN_OR_FLUSH = {
    HandType.STRAIGHT,
    HandType.FLUSH,
    HandType.STRAIGHT_FLUSH,
    HandType.ROYAL_FLUSH,
}


@dataclass(frozen=True)
class HandDetectorConfig:
    """Configuration for hand detection rules."""
    flush_size: int = 5
    straight_size: int = 5
    shortcut: bool = False          # Straights can have gaps of 1
    ace_low: bool = True            # A-2-3-4-5 counts as a straight
    max_hand_size: int = 8

    def __post_init__(self):
        if self.flush_size < 1 or self.straight_size < 1:
            raise ValueError("flush_size and straight_size must be at least 1")
        if self.max_hand_size < 1:
            raise ValueError("max_hand_size must be at least 1")


# Unmodified rules. The AI always classifies with these.
DEFAULT_RULES = HandDetectorConfig()


@dataclass(frozen=True)
class ContainedHandTypes:
    """Every hand type a set of cards satisfies at once."""
    high_card: bool = False
    pair: bool = False
    two_pair: bool = False
    three_of_a_kind: bool = False
    straight: bool = False
    flush: bool = False
    full_house: bool = False
    four_of_a_kind: bool = False
    straight_flush: bool = False
    royal_flush: bool = False
    five_of_a_kind: bool = False
    flush_house: bool = False
    flush_five: bool = False

    def contains(self, hand_type: HandType) -> bool:
        if hand_type is HandType.NONE:
            return False
        return getattr(self, hand_type.name.lower())

    def hand_types(self) -> list[HandType]:
        """Set categories, weakest first."""
        return [h for h in HandType if self.contains(h)]

    def strongest(self) -> HandType:
        for hand_type in reversed(list(HandType)):
            if self.contains(hand_type):
                return hand_type
        return HandType.NONE

    def __bool__(self) -> bool:
        return any(getattr(self, f.name) for f in fields(self))


def rank_frequencies(cards: Sequence[Optional[Card]]) -> list[int]:
    """Count cards per rank slot. Missing cards are skipped."""
    ranks = [0] * NUM_RANKS
    for card in cards:
        if card is not None:
            ranks[card.rank_order] += 1
    return ranks


def suit_frequencies(cards: Sequence[Optional[Card]]) -> list[int]:
    """Count cards per suit slot. Missing cards are skipped."""
    suits = [0] * NUM_SUITS
    for card in cards:
        if card is not None:
            suits[card.suit_order] += 1
    return suits


def n_of_a_kind(ranks: Sequence[int]) -> int:
    return max(ranks, default=0)


def contains_two_pair(ranks: Sequence[int]) -> bool:
    return sum(1 for n in ranks if n >= 2) >= 2


def contains_full_house(ranks: Sequence[int]) -> bool:
    for i, n in enumerate(ranks):
        if n >= 3 and any(m >= 2 for j, m in enumerate(ranks) if j != i):
            return True
    return False


def contains_flush(suits: Sequence[int], flush_size: int = 5) -> bool:
    return any(n >= flush_size for n in suits)


def run_ranks(ranks: Sequence[int], run_length: int = 5,
              ace_low: bool = True, shortcut: bool = False) -> list[int]:
    """
    Rank slots belonging to runs of at least `run_length` occupied ranks.

    Args:
        ranks: Rank-frequency table, Two first and Ace last
        run_length: Number of ranks the run must cover
        ace_low: Ace may also sit below Two (the wheel)
        shortcut: A single empty rank may be skipped between run members

    Returns:
        Sorted rank slots of every qualifying run, empty when there is none.
    """
    slots = list(range(len(ranks)))
    if ace_low:
        slots = [ACE] + slots

    runs = []
    members = []
    skipped = False
    for slot in slots:
        if ranks[slot] > 0:
            members.append(slot)
            skipped = False
        elif shortcut and members and not skipped:
            skipped = True
        else:
            runs.append(members)
            members = []
            skipped = False
    runs.append(members)

    return sorted({slot for run in runs if len(run) >= run_length for slot in run})


def contains_run(ranks: Sequence[int], run_length: int = 5,
                 ace_low: bool = True, shortcut: bool = False) -> bool:
    """Check a rank table for `run_length` consecutive occupied ranks."""
    return bool(run_ranks(ranks, run_length, ace_low=ace_low, shortcut=shortcut))


def _bounded(cards: Sequence[Optional[Card]], count: Optional[int],
             config: HandDetectorConfig) -> list[Optional[Card]]:
    if count is None:
        count = len(cards)
    if count < 0 or count > len(cards):
        raise ValueError(f"count must be between 0 and {len(cards)}, got {count}")
    if count > config.max_hand_size:
        raise ValueError(
            f"Cannot classify {count} cards; maximum hand size is {config.max_hand_size}")
    return list(cards[:count])


def contained_hand_types(cards: Sequence[Optional[Card]], count: Optional[int] = None,
                         config: HandDetectorConfig = None) -> ContainedHandTypes:
    """Derive every hand type the first `count` cards satisfy."""
    config = config or DEFAULT_RULES
    cards = _bounded(cards, count, config)
    if not cards:
        return ContainedHandTypes()

    ranks = rank_frequencies(cards)
    suits = suit_frequencies(cards)
    n = n_of_a_kind(ranks)

    pair = n >= 2
    two_pair = pair and contains_two_pair(ranks)
    three_of_a_kind = n >= 3
    straight = contains_run(ranks, config.straight_size,
                            ace_low=config.ace_low, shortcut=config.shortcut)
    flush = contains_flush(suits, config.flush_size)
    full_house = three_of_a_kind and contains_full_house(ranks)
    four_of_a_kind = n >= 4
    straight_flush = straight and flush
    royal_flush = straight_flush and all(ranks[r] for r in ROYAL_RANKS)
    five_of_a_kind = n >= 5

    return ContainedHandTypes(
        high_card=True,
        pair=pair,
        two_pair=two_pair,
        three_of_a_kind=three_of_a_kind,
        straight=straight,
        flush=flush,
        full_house=full_house,
        four_of_a_kind=four_of_a_kind,
        straight_flush=straight_flush,
        royal_flush=royal_flush,
        five_of_a_kind=five_of_a_kind,
        flush_house=flush and full_house,
        flush_five=flush and five_of_a_kind,
    )


def classify_hand(cards: Sequence[Optional[Card]], count: Optional[int] = None,
                  config: HandDetectorConfig = None) -> HandType:
    """Strongest hand type formed by the first `count` cards (NONE if empty)."""
    return contained_hand_types(cards, count, config).strongest()


@dataclass
class DetectedHand:
    """Result of hand detection."""
    hand_type: HandType
    scoring_cards: list[Card]  # Cards that contribute to the hand
    all_cards: list[Card]      # All played cards
    level: int = 1

    @property
    def base_chips(self) -> int:
        base, _ = HAND_BASE_VALUES[self.hand_type]
        bonus, _ = LEVEL_UP_BONUS[self.hand_type]
        return base + bonus * (self.level - 1)

    @property
    def base_mult(self) -> int:
        _, base = HAND_BASE_VALUES[self.hand_type]
        _, bonus = LEVEL_UP_BONUS[self.hand_type]
        return base + bonus * (self.level - 1)


class HandDetector:
    """Detects the best poker hand from played cards."""

    def __init__(self, config: HandDetectorConfig = None, hand_levels: dict = None):
        self.config = config or DEFAULT_RULES
        self.hand_levels = hand_levels or {}  # {HandType or name: level}

    def get_level(self, hand_type: HandType) -> int:
        return self.hand_levels.get(hand_type, self.hand_levels.get(hand_type.name, 1))

    def contained_hand_types(self, cards: Sequence[Optional[Card]],
                             count: Optional[int] = None) -> ContainedHandTypes:
        return contained_hand_types(cards, count, self.config)

    def classify(self, cards: Sequence[Optional[Card]], count: Optional[int] = None) -> HandType:
        return classify_hand(cards, count, self.config)

    def detect(self, cards: Sequence[Optional[Card]]) -> DetectedHand:
        """Detect the best hand from the played cards."""
        hand_type = self.classify(cards)
        played = [c for c in cards if c is not None]
        if hand_type is HandType.NONE:
            return DetectedHand(HandType.NONE, [], played)

        return DetectedHand(hand_type, self._scoring_cards(hand_type, played), played,
                            self.get_level(hand_type))

    def _scoring_cards(self, hand_type: HandType, cards: list[Card]) -> list[Card]:
        """Select the cards that count towards the detected hand."""
        if not cards:
            return []

        if hand_type is HandType.HIGH_CARD:
            return [max(cards, key=lambda c: c.rank_order)]

        if hand_type in _RUN_OR_FLUSH:
            return self._run_and_flush_cards(hand_type, cards)

        scoring_count = _KIND_SCORING_COUNT.get(hand_type)
        if scoring_count is None:
            # Full house, five of a kind, flush house and flush five
            return list(cards)

        # Sort ranks by count (descending), then by rank value (descending)
        rank_counts = Counter(c.rank for c in cards)
        sorted_ranks = sorted(rank_counts.keys(),
                              key=lambda r: (rank_counts[r], RANK_ORDER[r]),
                              reverse=True)

        scoring_cards = []
        for rank in sorted_ranks:
            for card in cards:
                if card.rank == rank and len(scoring_cards) < scoring_count:
                    scoring_cards.append(card)
        return scoring_cards

    def _run_and_flush_cards(self, hand_type: HandType, cards: list[Card]) -> list[Card]:
        """Cards forming the straight, the flush, or both."""
        straight_slots = set()
        flush_slots = set()
        if hand_type is not HandType.FLUSH:
            straight_slots = set(run_ranks(rank_frequencies(cards), self.config.straight_size,
                                           ace_low=self.config.ace_low,
                                           shortcut=self.config.shortcut))
        if hand_type is not HandType.STRAIGHT:
            flush_slots = {i for i, n in enumerate(suit_frequencies(cards))
                           if n >= self.config.flush_size}

        return [c for c in cards
                if c.rank_order in straight_slots or c.suit_order in flush_slots]


def detect_hand(cards: Sequence[Optional[Card]], config: HandDetectorConfig = None,
                hand_levels: dict = None) -> DetectedHand:
    """Convenience function to detect a hand."""
    detector = HandDetector(config, hand_levels)
    return detector.detect(cards)
