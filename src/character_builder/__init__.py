"""Weighted, constrained choice resolution for character building."""

from .catalog import Catalog, default_catalog
from .character_generator import CharacterGenerator, Declaration
from .choices import (
    ArmorChoice,
    ArtisansToolsChoice,
    CompositePick,
    GamingSetChoice,
    HolySymbolChoice,
    LanguageChoice,
    ListPick,
    MusicalInstrumentChoice,
    SkillChoice,
    ToolChoice,
    VehicleChoice,
    WeaponChoice,
)
from .deities import DeitySurface, choose_alignment
from .equipment import EquipmentSurface
from .errors import (
    CandidatesExhaustedError,
    ResolutionDepthError,
    SamplingError,
    SelectionError,
)
from .languages import LanguageSurface
from .models import Character
from .proficiencies import ProficiencySurface
from .resolver import ChoiceResolver, CompositeDuplicates, SelectionSurface, ShortfallPolicy
from .sampler import WeightedSampler
from .validators import ChoiceValidator

__all__ = [
    "Catalog",
    "default_catalog",
    "CharacterGenerator",
    "Declaration",
    "Character",
    "ListPick",
    "CompositePick",
    "SkillChoice",
    "ToolChoice",
    "ArtisansToolsChoice",
    "GamingSetChoice",
    "MusicalInstrumentChoice",
    "WeaponChoice",
    "ArmorChoice",
    "VehicleChoice",
    "HolySymbolChoice",
    "LanguageChoice",
    "ChoiceResolver",
    "SelectionSurface",
    "ShortfallPolicy",
    "CompositeDuplicates",
    "WeightedSampler",
    "ProficiencySurface",
    "EquipmentSurface",
    "LanguageSurface",
    "DeitySurface",
    "choose_alignment",
    "ChoiceValidator",
    "SelectionError",
    "SamplingError",
    "CandidatesExhaustedError",
    "ResolutionDepthError",
]
