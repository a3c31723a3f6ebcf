"""Candidate filtering: what is still eligible to be drawn for a character."""

from typing import Callable, Iterable, List, Optional, Sequence, TypeVar

from config.logging_config import get_logger

from .models import Equipment, Proficiency, Weapon, WeaponCategory, WeaponClassification

logger = get_logger(__name__)

T = TypeVar("T")


def filter_candidates(
    universe: Iterable[T],
    owned: Iterable[T] = (),
    allow: Optional[Iterable[T]] = None,
    predicate: Optional[Callable[[T], bool]] = None,
) -> List[T]:
    """
    Return the members of ``universe`` that are still eligible.

    Order of the universe is preserved and duplicates in it are collapsed, so the
    output of a seeded draw over it is reproducible.

    Args:
        universe: Full enumeration for the category
        owned: Items the character (or the current resolution) already has
        allow: Optional allow-list the result is intersected with
        predicate: Optional structural filter, e.g. "martial weapons only"

    Returns:
        Eligible candidates; empty if nothing is left. Widening is not done here.
    """
    owned = list(owned)
    allowed = list(allow) if allow is not None else None
    candidates: List[T] = []
    for item in universe:
        if item in owned or item in candidates:
            continue
        if allowed is not None and item not in allowed:
            continue
        if predicate is not None and not predicate(item):
            continue
        candidates.append(item)
    return candidates


def weapon_predicate(
    category: Optional[WeaponCategory] = None,
    classification: Optional[WeaponClassification] = None,
) -> Callable[[Weapon], bool]:
    """Structural weapon filter. Both criteria apply when both are given."""

    def matches(weapon: Weapon) -> bool:
        if category is not None and weapon.category != category:
            return False
        if classification is not None and weapon.classification != classification:
            return False
        return True

    return matches


def proficient_subset(
    candidates: Sequence[Equipment], proficiencies: Iterable[Proficiency]
) -> List[Equipment]:
    """Equipment options the character is already trained to use."""
    proficiencies = list(proficiencies)
    subset = [equipment for equipment in candidates if equipment.proficient(proficiencies)]
    logger.debug(f"{len(subset)} of {len(candidates)} equipment options are proficient")
    return subset
