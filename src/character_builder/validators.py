"""Validation utilities for choice specifications and generated characters."""

from typing import List

from config.logging_config import get_logger
from src.core.error_handling import ValidationError

from .choices import (
    SHORTHAND_TYPES,
    ChoiceSpec,
    CompositePick,
    ListPick,
    SkillChoice,
    requested_amount,
)
from .models import Character

logger = get_logger(__name__)


class ChoiceValidator:
    """Checks declarations and characters for problems the engine can't recover from."""

    MIN_SCORE = 1
    MAX_SCORE = 30
    MIN_LEVEL = 1
    MAX_LEVEL = 20

    @classmethod
    def validate_spec(cls, spec: ChoiceSpec) -> List[str]:
        """
        Validate a choice specification tree.

        Zero-count picks are allowed and resolve to nothing.

        Args:
            spec: Specification to check

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []
        if not isinstance(spec, (ListPick, CompositePick) + SHORTHAND_TYPES):
            return [f"Unknown choice specification {spec!r}"]

        amount = requested_amount(spec)
        if not isinstance(amount, int) or amount < 0:
            errors.append(f"{type(spec).__name__} amount must be a non-negative integer, got {amount!r}")

        if isinstance(spec, CompositePick):
            if not spec.options:
                errors.append("CompositePick needs at least one option")
            for option in spec.options:
                errors.extend(cls.validate_spec(option))
        elif isinstance(spec, SkillChoice) and spec.skills is not None and not spec.skills:
            errors.append("SkillChoice allow-list is empty; use None for every skill")
        return errors

    @classmethod
    def validate_character(cls, character: Character) -> List[str]:
        """
        Validate a character's scores and possessions.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []
        for ability, score in character.ability_scores.scores.items():
            if not cls.MIN_SCORE <= score <= cls.MAX_SCORE:
                errors.append(
                    f"{ability.value} must be between {cls.MIN_SCORE} and "
                    f"{cls.MAX_SCORE}, got {score}"
                )

        if not cls.MIN_LEVEL <= character.level <= cls.MAX_LEVEL:
            errors.append(
                f"Level must be between {cls.MIN_LEVEL} and {cls.MAX_LEVEL}, got {character.level}"
            )

        for label, items in (
            ("proficiency", character.proficiencies),
            ("equipment", character.equipment),
            ("language", character.languages),
        ):
            seen = []
            for item in items:
                if item in seen:
                    errors.append(f"Duplicate {label}: {item}")
                else:
                    seen.append(item)

        if character.deity is not None and (
            character.pantheon is None or character.deity not in character.pantheon.deities
        ):
            errors.append(f"Deity {character.deity} is not part of the character's pantheon")
        return errors

    @classmethod
    def ensure_valid_spec(cls, spec: ChoiceSpec) -> None:
        """Raise ``ValidationError`` if the specification has problems."""
        errors = cls.validate_spec(spec)
        if errors:
            logger.warning(f"Invalid choice specification: {errors}")
            raise ValidationError("; ".join(errors), field="spec")

    @classmethod
    def ensure_valid_character(cls, character: Character) -> None:
        """Raise ``ValidationError`` if the character has problems."""
        errors = cls.validate_character(character)
        if errors:
            logger.warning(f"Invalid character: {errors}")
            raise ValidationError("; ".join(errors), field="character")
