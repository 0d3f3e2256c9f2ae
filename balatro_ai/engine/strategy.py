"""
AI card selection for Balatro.

The opponent plays the subset of its hand with the highest base-rules score.
Every non-empty subset of at most MAX_SELECTION_SIZE cards is a candidate;
with an eight card hand that is at most 255 subsets, so they are simply
enumerated as bit-masks over hand positions in ascending order.
"""

import logging
from dataclasses import dataclass
from typing import Iterator, Optional, Sequence, Union

from .deck import Card, Hand
from .hand_detector import HandType, classify_hand
from .scoring import score_combo

logger = logging.getLogger(__name__)

MAX_SELECTION_SIZE = 5
AI_HAND_SIZE = 8


@dataclass
class AIConfig:
    """Limits for the AI's hand search."""
    max_selection_size: int = MAX_SELECTION_SIZE
    max_hand_size: int = AI_HAND_SIZE


@dataclass
class PlayOption:
    """A possible play with its heuristic score."""
    mask: int
    indices: list[int]
    cards: list[Card]
    hand_type: HandType
    score: int


@dataclass
class SelectionResult:
    """Winning subset of a search, as a mask parallel to the hand."""
    selected: list[bool]
    count: int
    mask: int = 0
    score: int = 0
    hand_type: HandType = HandType.NONE

    @property
    def indices(self) -> list[int]:
        return [i for i, chosen in enumerate(self.selected) if chosen]


def mask_indices(mask: int, count: int) -> list[int]:
    """Hand positions selected by a bit-mask (bit i = position i)."""
    return [i for i in range(count) if mask & (1 << i)]


def iter_candidate_masks(count: int, max_selection_size: int) -> Iterator[int]:
    """Masks 1 .. 2**count - 1, ascending, selecting at most the capped number of cards."""
    cap = min(count, max_selection_size)
    for mask in range(1, 1 << max(count, 0)):
        if bin(mask).count("1") <= cap:
            yield mask


class SelectionSearch:
    """
    Best-subset search over one hand.

    run() does the whole search at once. A caller that wants to spread the
    work over several frames can call advance() with a candidate budget
    until it returns True, then read result().

    Ties keep the first mask reached, so among equal scores the subset with
    the lowest mask wins.
    """

    def __init__(self, hand: Sequence[Optional[Card]],
                 max_selection_size: int = MAX_SELECTION_SIZE,
                 config: AIConfig = None):
        config = config or AIConfig()
        if max_selection_size < 1:
            raise ValueError(f"max_selection_size must be positive, got {max_selection_size}")
        if len(hand) > config.max_hand_size:
            raise ValueError(
                f"Hand has {len(hand)} cards; the AI supports at most {config.max_hand_size}")

        self.hand = list(hand)
        self.max_selection_size = max_selection_size
        self._masks = list(iter_candidate_masks(len(self.hand), max_selection_size))
        self._position = 0

        self.best_score = 0
        self.best_mask = 0
        self.best_count = 0

    @property
    def candidates_total(self) -> int:
        return len(self._masks)

    @property
    def candidates_evaluated(self) -> int:
        return self._position

    @property
    def finished(self) -> bool:
        return self._position >= len(self._masks)

    def advance(self, budget: Optional[int] = None) -> bool:
        """
        Evaluate up to `budget` more candidates (all remaining if None).

        Returns:
            True once every candidate has been evaluated.
        """
        end = len(self._masks) if budget is None else min(len(self._masks), self._position + budget)
        while self._position < end:
            self._evaluate(self._masks[self._position])
            self._position += 1
        return self.finished

    def _evaluate(self, mask: int) -> None:
        combo = [self.hand[i] for i in mask_indices(mask, len(self.hand))]
        score = score_combo(combo)

        if score > self.best_score:
            self.best_score = score
            self.best_mask = mask
            self.best_count = len(combo)

    def result(self) -> SelectionResult:
        """Best subset found so far."""
        indices = mask_indices(self.best_mask, len(self.hand))
        hand_type = HandType.NONE
        if indices:
            hand_type = classify_hand([self.hand[i] for i in indices])

        return SelectionResult(
            selected=[i in indices for i in range(len(self.hand))],
            count=self.best_count,
            mask=self.best_mask,
            score=self.best_score,
            hand_type=hand_type,
        )

    def run(self) -> SelectionResult:
        self.advance()
        result = self.result()
        logger.debug("Best of %d candidates: mask=%#x %s score=%d",
                     self.candidates_total, result.mask, result.hand_type.name, result.score)
        return result


def select_best_hand(hand: Sequence[Optional[Card]],
                     max_selection_size: int = MAX_SELECTION_SIZE,
                     out_sel: Optional[list] = None) -> tuple[list[bool], int]:
    """
    Select the best subset of cards (1 to max_selection_size) to play.

    Args:
        hand: The AI's current hand, at most AI_HAND_SIZE cards
        max_selection_size: Largest number of cards that may be played
        out_sel: Optional caller-owned list of at least len(hand) bools. Its
            first len(hand) entries are overwritten with the selection.

    Returns:
        (selection mask parallel to hand, number of cards selected)
    """
    if out_sel is not None and len(out_sel) < len(hand):
        raise ValueError(f"out_sel holds {len(out_sel)} entries, hand has {len(hand)} cards")

    result = SelectionSearch(hand, max_selection_size).run()

    if out_sel is not None:
        for i, chosen in enumerate(result.selected):
            out_sel[i] = chosen

    return result.selected, result.count


class AIStrategy:
    """
    Opponent strategy for the vs-AI mode.

    Scores plays with level 1 base values and unmodified rules only; jokers,
    hand levels and rule modifiers in play are not considered.
    """

    def __init__(self, config: AIConfig = None):
        self.config = config or AIConfig()

    def _cards(self, hand: Union[Hand, Sequence[Card]]) -> list[Card]:
        return list(hand.cards) if isinstance(hand, Hand) else list(hand)

    def evaluate_all_plays(self, hand: Union[Hand, Sequence[Card]]) -> list[PlayOption]:
        """Every candidate play, best first. Equal scores stay in mask order."""
        cards = self._cards(hand)
        if len(cards) > self.config.max_hand_size:
            raise ValueError(
                f"Hand has {len(cards)} cards; the AI supports at most {self.config.max_hand_size}")

        options = []
        for mask in iter_candidate_masks(len(cards), self.config.max_selection_size):
            indices = mask_indices(mask, len(cards))
            selected = [cards[i] for i in indices]
            options.append(PlayOption(
                mask=mask,
                indices=indices,
                cards=selected,
                hand_type=classify_hand(selected),
                score=score_combo(selected),
            ))

        options.sort(key=lambda opt: opt.score, reverse=True)
        return options

    def select(self, hand: Union[Hand, Sequence[Card]]) -> SelectionResult:
        search = SelectionSearch(self._cards(hand), self.config.max_selection_size, self.config)
        return search.run()

    def select_cards_to_play(self, hand: Union[Hand, Sequence[Card]], game=None) -> list[int]:
        """
        Indices of the cards to play (empty for an empty hand).

        `game` is the caller's game state; the AI does not read it.
        """
        return self.select(hand).indices
