"""
Balatro AI engine components.
"""

from .deck import Card, Deck, Hand, Suit, RANKS, RANK_VALUES, parse_card, parse_cards
from .hand_detector import (
    HandType, ContainedHandTypes, DetectedHand, HandDetector, HandDetectorConfig,
    DEFAULT_RULES, HAND_BASE_VALUES, LEVEL_UP_BONUS,
    classify_hand, contained_hand_types, contains_run, detect_hand, run_ranks,
)
from .scoring import (
    ScoringEngine, ScoreBreakdown, U32_MAX,
    calculate_score, protected_mult, score_breakdown, score_combo,
)
from .strategy import (
    AIConfig, AIStrategy, PlayOption, SelectionResult, SelectionSearch,
    MAX_SELECTION_SIZE, AI_HAND_SIZE, iter_candidate_masks, select_best_hand,
)
