"""
Balatro AI opponent: hand classification and best-subset selection.
"""

from .engine.deck import Card, Deck, Hand, Suit, parse_card, parse_cards
from .engine.hand_detector import (
    HandType, ContainedHandTypes, HandDetector, HandDetectorConfig, DEFAULT_RULES,
    classify_hand, contained_hand_types, detect_hand,
)
from .engine.scoring import ScoringEngine, ScoreBreakdown, protected_mult, score_combo
from .engine.strategy import AIStrategy, SelectionSearch, SelectionResult, select_best_hand

__version__ = "0.1.0"
