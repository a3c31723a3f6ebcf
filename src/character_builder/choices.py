"""
Choice specifications: declarative descriptions of what a character gets to pick.

Only two variants are ever executed by the resolver, ``ListPick`` and
``CompositePick``. Everything else is a named shorthand that a selection surface
rewrites into those two before resolution, against its own catalog.

Specifications carry no weighting; the surface resolving them supplies it.
"""

from dataclasses import dataclass
from typing import Any, ClassVar, Optional, Tuple, Union

from .models import LanguageType, Skill, WeaponCategory, WeaponClassification


def _as_tuple(value) -> Optional[tuple]:
    return tuple(value) if value is not None else None


@dataclass(frozen=True)
class ListPick:
    """
    Pick ``amount`` distinct items from a fixed candidate list.

    ``widen_to`` is the larger universe used to cover a shortfall on surfaces that
    widen and retry. Without it, a short draw stays short.
    """

    candidates: Tuple[Any, ...]
    amount: int = 1
    widen_to: Optional[Tuple[Any, ...]] = None

    def __post_init__(self):
        object.__setattr__(self, "candidates", tuple(self.candidates))
        object.__setattr__(self, "widen_to", _as_tuple(self.widen_to))


@dataclass(frozen=True)
class CompositePick:
    """Activate ``amount`` distinct sub-specifications and concatenate their results."""

    options: Tuple["ChoiceSpec", ...]
    amount: int = 1

    def __post_init__(self):
        object.__setattr__(self, "options", tuple(self.options))


@dataclass(frozen=True)
class SkillChoice:
    """``amount`` skills from ``skills``, or from every skill when ``skills`` is None."""

    skills: Optional[Tuple[Skill, ...]] = None
    amount: int = 1

    def __post_init__(self):
        object.__setattr__(self, "skills", _as_tuple(self.skills))


@dataclass(frozen=True)
class ToolChoice:
    """Any tool: a tool family is chosen first, so instruments don't swamp the draw."""

    amount: int = 1


@dataclass(frozen=True)
class ArtisansToolsChoice:
    """One set of artisan's tools."""

    amount: ClassVar[int] = 1


@dataclass(frozen=True)
class GamingSetChoice:
    amount: ClassVar[int] = 1


@dataclass(frozen=True)
class MusicalInstrumentChoice:
    amount: int = 1


@dataclass(frozen=True)
class WeaponChoice:
    """Weapons matching a category and/or a classification (both optional)."""

    category: Optional[WeaponCategory] = None
    classification: Optional[WeaponClassification] = None
    amount: int = 1


@dataclass(frozen=True)
class ArmorChoice:
    amount: int = 1


@dataclass(frozen=True)
class VehicleChoice:
    amount: int = 1


@dataclass(frozen=True)
class HolySymbolChoice:
    amount: ClassVar[int] = 1


@dataclass(frozen=True)
class LanguageChoice:
    """Additional languages, optionally of one type only."""

    amount: int = 1
    language_type: Optional[LanguageType] = None


Shorthand = Union[
    SkillChoice,
    ToolChoice,
    ArtisansToolsChoice,
    GamingSetChoice,
    MusicalInstrumentChoice,
    WeaponChoice,
    ArmorChoice,
    VehicleChoice,
    HolySymbolChoice,
    LanguageChoice,
]

ChoiceSpec = Union[ListPick, CompositePick, Shorthand]

SHORTHAND_TYPES = (
    SkillChoice,
    ToolChoice,
    ArtisansToolsChoice,
    GamingSetChoice,
    MusicalInstrumentChoice,
    WeaponChoice,
    ArmorChoice,
    VehicleChoice,
    HolySymbolChoice,
    LanguageChoice,
)


def requested_amount(spec: ChoiceSpec) -> int:
    """How many results a specification asks for (sub-specifications for composites)."""
    return spec.amount
