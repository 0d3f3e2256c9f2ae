"""Shared test fixtures for balatro_ai."""

import random

import pytest

from balatro_ai.engine.deck import Deck


@pytest.fixture
def rng():
    """Deterministic random source."""
    return random.Random(1234)


@pytest.fixture
def full_deck():
    return Deck.standard_52().cards
