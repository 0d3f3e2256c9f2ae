#!/usr/bin/env python3
"""
Command-line demo for the Balatro AI.
Classifies a hand and shows which cards the AI opponent would play.

Examples:
    balatro-ai 2C 2D 7S 7H 7D
    balatro-ai --random 8 --seed 42 --all
    balatro-ai AS KS QS JS --rules four_fingers
"""

import argparse
import logging
import random
import sys

from .engine.deck import Deck, parse_cards
from .engine.hand_detector import contained_hand_types
from .engine.scoring import score_breakdown
from .engine.strategy import AI_HAND_SIZE, MAX_SELECTION_SIZE, AIConfig, AIStrategy
from .presets import get_preset, list_presets

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="balatro-ai",
        description="Show the hand the Balatro AI would play")
    parser.add_argument("cards", nargs="*",
                        help="Cards such as AS 10H Td 7c (rank then suit)")
    parser.add_argument("--random", type=int, metavar="N",
                        help="Deal N random cards instead of reading them")
    parser.add_argument("--seed", type=int, help="Seed for --random")
    parser.add_argument("--max-select", type=int, default=MAX_SELECTION_SIZE,
                        help="Most cards the AI may play (default: %(default)s)")
    parser.add_argument("--rules", default="standard",
                        help=f"Preset for the player-side classification ({', '.join(list_presets())})")
    parser.add_argument("--all", action="store_true", help="List every candidate play")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def deal(count: int, seed: int = None) -> list:
    deck = Deck.standard_52()
    deck.shuffle(random.Random(seed))
    return deck.draw(count)


def main(argv: list[str] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    preset = get_preset(args.rules)
    if preset is None:
        parser.error(f"Unknown preset: {args.rules}. Available: {list_presets()}")
    if args.max_select < 1:
        parser.error("--max-select must be at least 1")

    if args.random is not None:
        if not 0 < args.random <= AI_HAND_SIZE:
            parser.error(f"--random must be between 1 and {AI_HAND_SIZE}")
        hand = deal(args.random, args.seed)
    else:
        if not args.cards:
            parser.error("give some cards or use --random N")
        try:
            hand = parse_cards(" ".join(args.cards))
        except ValueError as exc:
            parser.error(str(exc))
        if len(hand) > AI_HAND_SIZE:
            parser.error(f"A hand holds at most {AI_HAND_SIZE} cards, got {len(hand)}")

    logger.debug("Hand: %s", hand)

    contained = contained_hand_types(hand, config=preset.rules)
    detected = preset.detector().detect(hand)
    breakdown = score_breakdown(detected)

    print(f"Hand: {' '.join(str(c) for c in hand)}")
    print(f"  Contains ({preset.name}): "
          f"{', '.join(h.display_name for h in contained.hand_types())}")
    print(f"  Played as a whole: {detected.hand_type.display_name} "
          f"lvl {detected.level}, score {breakdown.final_score:,}")

    strategy = AIStrategy(AIConfig(max_selection_size=args.max_select))
    result = strategy.select(hand)
    played = [hand[i] for i in result.indices]
    print(f"AI plays: {' '.join(str(c) for c in played) or '(nothing)'}")
    print(f"  {result.hand_type.display_name}, {result.count} card(s), "
          f"heuristic score {result.score:,}")
    print(f"  Mask: {''.join('1' if s else '0' for s in result.selected)}")

    if args.all:
        print("\nCandidates:")
        for option in strategy.evaluate_all_plays(hand):
            cards = " ".join(str(c) for c in option.cards)
            print(f"  {option.score:>8,}  {option.hand_type.display_name:<16} {cards}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
