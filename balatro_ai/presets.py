"""
Rule presets for the gameplay scoring path.
The AI opponent ignores these and always plays under the standard rules.
"""

from dataclasses import dataclass, field
from typing import Optional

from .engine.hand_detector import DEFAULT_RULES, HandDetector, HandDetectorConfig


@dataclass
class Preset:
    """Named rule set and hand levels for the player's side of a round."""
    name: str
    description: str
    rules: HandDetectorConfig = DEFAULT_RULES
    hand_levels: dict = field(default_factory=dict)  # HandType name -> level

    def detector(self) -> HandDetector:
        return HandDetector(self.rules, self.hand_levels)


# Built-in presets
PRESETS = {
    "standard": Preset(
        name="Standard",
        description="Default rules with no modifiers",
    ),

    "four_fingers": Preset(
        name="Four Fingers",
        description="Flushes and Straights can be made with 4 cards",
        rules=HandDetectorConfig(flush_size=4, straight_size=4),
    ),

    "shortcut": Preset(
        name="Shortcut",
        description="Straights can be made with gaps of 1 rank",
        rules=HandDetectorConfig(shortcut=True),
    ),

    "four_fingers_shortcut": Preset(
        name="Four Fingers + Shortcut",
        description="4-card Flushes and Straights, Straights may skip ranks",
        rules=HandDetectorConfig(flush_size=4, straight_size=4, shortcut=True),
    ),

    "pair_spam": Preset(
        name="Pair Spam",
        description="Standard rules with levelled pair hands",
        hand_levels={"PAIR": 5, "TWO_PAIR": 3},
    ),

    "flush_build": Preset(
        name="Flush Build",
        description="Four Fingers with levelled flush hands",
        rules=HandDetectorConfig(flush_size=4, straight_size=4),
        hand_levels={"FLUSH": 3, "FLUSH_HOUSE": 2, "FLUSH_FIVE": 2},
    ),
}


def get_preset(name: str) -> Optional[Preset]:
    """Get a preset by name."""
    return PRESETS.get(name.lower().replace(" ", "_"))


def list_presets() -> list[str]:
    """List all available preset names."""
    return list(PRESETS.keys())


def get_preset_info(name: str) -> Optional[dict]:
    """Get info about a preset."""
    preset = get_preset(name)
    if preset:
        return {
            "name": preset.name,
            "description": preset.description,
            "flush_size": preset.rules.flush_size,
            "straight_size": preset.rules.straight_size,
            "shortcut": preset.rules.shortcut,
            "hand_levels": dict(preset.hand_levels),
        }
    return None
