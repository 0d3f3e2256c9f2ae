"""
Card model for the Balatro AI engine.
Handles card creation, parsing and dealing.
"""

import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class Suit(Enum):
    HEARTS = "Hearts"
    DIAMONDS = "Diamonds"
    CLUBS = "Clubs"
    SPADES = "Spades"


RANKS = ["2", "3", "4", "5", "6", "7", "8", "9", "10", "J", "Q", "K", "A"]
RANK_VALUES = {
    "2": 2, "3": 3, "4": 4, "5": 5, "6": 6, "7": 7, "8": 8, "9": 9, "10": 10,
    "J": 10, "Q": 10, "K": 10, "A": 11
}
RANK_ORDER = {rank: i for i, rank in enumerate(RANKS)}

NUM_RANKS = len(RANKS)
NUM_SUITS = len(Suit)
SUIT_ORDER = {suit: i for i, suit in enumerate(Suit)}

# Short forms accepted by parse_card
RANK_ALIASES = {"T": "10"}
SUIT_LETTERS = {suit.value[0]: suit for suit in Suit}
SUIT_SYMBOLS = {"♥": Suit.HEARTS, "♦": Suit.DIAMONDS, "♣": Suit.CLUBS, "♠": Suit.SPADES}


@dataclass(frozen=True)
class Card:
    rank: str
    suit: Suit

    @property
    def chip_value(self) -> int:
        """Base chip value of this card."""
        return RANK_VALUES.get(self.rank, 0)

    @property
    def rank_order(self) -> int:
        """Slot of this card's rank in a rank-frequency table (Two=0, Ace=12)."""
        return RANK_ORDER[self.rank]

    @property
    def suit_order(self) -> int:
        return SUIT_ORDER[self.suit]

    @property
    def is_face_card(self) -> bool:
        return self.rank in ["J", "Q", "K"]

    def __str__(self) -> str:
        return f"{self.rank}{self.suit.value[0]}"

    def __repr__(self) -> str:
        return self.__str__()


def parse_card(text: str) -> Card:
    """
    Parse a short card string such as "AS", "10h", "Td" or "7♣".

    Raises:
        ValueError: if the rank or suit is not recognised.
    """
    text = text.strip()
    if len(text) < 2:
        raise ValueError(f"Invalid card: {text!r}")

    rank_text, suit_text = text[:-1].upper(), text[-1]
    rank = RANK_ALIASES.get(rank_text, rank_text)
    if rank not in RANK_ORDER:
        raise ValueError(f"Invalid rank in card {text!r}. Expected one of {RANKS}")

    suit = SUIT_SYMBOLS.get(suit_text) or SUIT_LETTERS.get(suit_text.upper())
    if suit is None:
        raise ValueError(f"Invalid suit in card {text!r}. Expected one of H, D, C, S")

    return Card(rank=rank, suit=suit)


def parse_cards(text: str) -> list[Card]:
    """Parse a whitespace or comma separated list of cards."""
    return [parse_card(token) for token in text.replace(",", " ").split()]


@dataclass
class Deck:
    cards: list[Card] = field(default_factory=list)

    @classmethod
    def standard_52(cls) -> "Deck":
        """Create a standard 52-card deck."""
        cards = []
        for suit in Suit:
            for rank in RANKS:
                cards.append(Card(rank=rank, suit=suit))
        return cls(cards=cards)

    def shuffle(self, rng: Optional[random.Random] = None) -> None:
        """Shuffle the deck."""
        (rng or random).shuffle(self.cards)

    def draw(self, n: int = 1) -> list[Card]:
        """Draw up to n cards from the top of the deck."""
        drawn = self.cards[-n:] if n > 0 else []
        del self.cards[len(self.cards) - len(drawn):]
        return drawn[::-1]


class Hand:
    """Represents cards currently held in hand."""

    def __init__(self, cards: list[Card] = None):
        self.cards: list[Card] = cards or []

    def __str__(self) -> str:
        return ", ".join(str(c) for c in self.cards)

    def __repr__(self) -> str:
        return f"Hand({self.__str__()})"
