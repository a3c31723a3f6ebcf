"""
Weight model: turns ability scores and qualitative tiers into sampling weights.

All weights live on the same exponential scale. Ability modifiers are shifted so the
character's lowest modifier maps to zero, which keeps every weight at or above
``e ** 0 == 1`` while still favouring higher modifiers exponentially.
"""

import math
from typing import Dict, Iterable, Sequence

from .models import (
    AbilityScores,
    AbilityScoreType,
    Alignment,
    Attitude,
    Character,
    LanguageType,
    Morality,
    PantheonWeight,
    Proficiency,
    Skill,
)


def modifier(score: int) -> int:
    """Return the modifier for an ability score."""
    # Lower to the closest even number, reduce by 10, halve
    return (score - score % 2 - 10) // 2


def shift_weight_by(scores: Iterable[int]) -> int:
    """
    Amount to add to every modifier so the lowest one becomes zero.

    Args:
        scores: Raw ability scores (not modifiers)

    Returns:
        Additive shift; ``abs(min)`` for a non-positive minimum, ``-min`` otherwise
    """
    scores = list(scores)
    lowest = modifier(min(scores)) if scores else 0
    if lowest <= 0:
        return abs(lowest)
    return -lowest


def exp_weight(value: float, shift: float = 0) -> float:
    """Exponential weight ``e ** (value + shift)``."""
    return math.exp(value + shift)


def ability_modifier(ability_scores: AbilityScores, ability: AbilityScoreType) -> int:
    return modifier(ability_scores.score(ability))


def ability_shift(ability_scores: AbilityScores) -> int:
    return shift_weight_by(ability_scores.scores.values())


def skill_modifier(skill: Skill, character: Character) -> int:
    """Skill modifier, including the proficiency bonus if the character is proficient."""
    value = ability_modifier(character.ability_scores, skill.ability)
    if Proficiency.skill(skill) in character.proficiencies:
        value += character.proficiency_bonus
    return value


def skill_weight(skill: Skill, character: Character) -> float:
    """Sampling weight of a skill, favouring the character's strongest abilities."""
    return exp_weight(skill_modifier(skill, character), ability_shift(character.ability_scores))


def max_skill_weight(skills: Sequence[Skill], character: Character) -> float:
    """
    Weight of an option granting the given skills.

    The best skill contributes its full exponential weight; the second best only adds
    its shifted modifier as a minor bump.
    """
    ranked = sorted(skills, key=lambda s: skill_weight(s, character), reverse=True)
    if not ranked:
        return 0.0
    main_weight = skill_weight(ranked[0], character)
    secondary = 0.0
    if len(ranked) > 1:
        secondary = float(
            skill_modifier(ranked[1], character) + ability_shift(character.ability_scores)
        )
    return main_weight + secondary


def class_weight(
    primary: Sequence[AbilityScoreType],
    secondary: Sequence[AbilityScoreType],
    ability_scores: AbilityScores,
) -> float:
    """Weight of a class from the two lowest shifted modifiers of its key abilities."""
    shift = ability_shift(ability_scores)
    shifted = sorted(
        ability_modifier(ability_scores, ability) + shift
        for ability in list(primary) + list(secondary)
    )
    return exp_weight(sum(shifted[:2]))


def language_type_weight(
    language_type: LanguageType, standard: float = 2.0, exotic: float = 1.0
) -> float:
    """Categorical weight of a language type."""
    return standard if language_type == LanguageType.STANDARD else exotic


def tier_weight(tier: PantheonWeight) -> float:
    """Point on the exponential scale for a pantheon preference tier."""
    return exp_weight(tier.value)


def influence_weight(value, influences: Sequence) -> float:
    """``e ** n`` where n is how many influences match the value."""
    return exp_weight(sum(1 for influence in influences if influence == value))


def alignment_weight(
    alignment: Alignment,
    attitude_influences: Sequence[Attitude],
    morality_influences: Sequence[Morality],
) -> float:
    """Weight of an alignment (e.g. a deity's) against a character's leanings."""
    return influence_weight(alignment.attitude, attitude_influences) + influence_weight(
        alignment.morality, morality_influences
    )


def merge_tiers(contributions: Iterable[tuple]) -> Dict:
    """
    Merge (key, PantheonWeight) pairs from several sources, keeping the strongest tier.

    Insertion order of first appearance is preserved.
    """
    merged: Dict = {}
    for key, tier in contributions:
        current = merged.get(key)
        if current is None or tier.value > current.value:
            merged[key] = tier
    return merged
