"""Shared fixtures for the character builder tests."""

import random
import sys
from pathlib import Path

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.character_builder.catalog import Catalog, default_catalog
from src.character_builder.models import (
    AbilityScores,
    AbilityScoreType,
    Alignment,
    Attitude,
    Character,
    Deity,
    Domain,
    Language,
    LanguageType,
    Morality,
    Pantheon,
)
from src.character_builder.sampler import WeightedSampler


@pytest.fixture
def rng():
    """Seeded random source."""
    return random.Random(1234)


@pytest.fixture
def sampler(rng):
    """Sampler drawing from the seeded random source."""
    return WeightedSampler(rng)


@pytest.fixture
def catalog():
    """The standard content tables."""
    return default_catalog()


@pytest.fixture
def character():
    """Level 1 character with every ability score at 10."""
    return Character()


@pytest.fixture
def small_catalog():
    """Tiny synthetic catalog for language and deity tests."""
    sun = Deity("Sol", Alignment(Attitude.LAWFUL, Morality.GOOD), (Domain.LIGHT, Domain.LIFE))
    moon = Deity("Luna", Alignment(Attitude.CHAOTIC, Morality.GOOD), (Domain.TRICKERY,))
    storm = Deity("Thrym", Alignment(Attitude.CHAOTIC, Morality.EVIL), (Domain.TEMPEST,))
    forge = Deity("Anvil", Alignment(Attitude.LAWFUL, Morality.NEUTRAL), (Domain.FORGE,))
    return Catalog(
        languages=(
            Language("Common", LanguageType.STANDARD),
            Language("Dwarvish", LanguageType.STANDARD),
            Language("Elvish", LanguageType.STANDARD),
            Language("Draconic", LanguageType.EXOTIC),
            Language("Sylvan", LanguageType.EXOTIC),
        ),
        pantheons=(
            Pantheon("Sky", (sun, moon, storm)),
            Pantheon("Deep", (forge,)),
        ),
        language_pantheons=(("Dwarvish", ("Deep",)),),
    )


@pytest.fixture
def make_scores():
    """Factory for ability scores with overrides, e.g. ``make_scores(INT=16)``."""

    def _make(**values) -> AbilityScores:
        result = AbilityScores()
        for key, value in values.items():
            result.scores[AbilityScoreType(key)] = value
        return result

    return _make
