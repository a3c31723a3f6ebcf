"""Proficiency selection: skills, tools, weapons, armor and vehicles."""

from typing import Iterable, List, Optional

from config.logging_config import get_logger

from .choices import (
    ArmorChoice,
    ArtisansToolsChoice,
    ChoiceSpec,
    CompositePick,
    GamingSetChoice,
    ListPick,
    MusicalInstrumentChoice,
    SkillChoice,
    ToolChoice,
    VehicleChoice,
    WeaponChoice,
)
from .models import (
    ArmorType,
    Character,
    Proficiency,
    ProficiencyKind,
    ToolKind,
    VehicleProficiency,
)
from .resolver import SelectionSurface, ShortfallPolicy, Weighting, universe_size
from .weights import skill_weight

logger = get_logger(__name__)


class ProficiencySurface(SelectionSurface):
    """
    Resolves proficiency choices.

    Skill draws are weighted towards the character's best abilities; everything else
    is uniform. A short draw widens to every proficiency of the same kind.
    """

    name = "proficiencies"
    shortfall_policy = ShortfallPolicy.WIDEN_AND_RETRY

    def _skills(self) -> tuple:
        return tuple(Proficiency.skill(skill) for skill in self.catalog.skills)

    def _tools(self, kind: Optional[ToolKind] = None) -> tuple:
        tools = self.catalog.tools if kind is None else self.catalog.tools_of_kind(kind)
        return tuple(Proficiency.tool(tool) for tool in tools)

    def expand_shorthand(self, spec: ChoiceSpec) -> ChoiceSpec:
        if isinstance(spec, SkillChoice):
            skills = spec.skills if spec.skills is not None else self.catalog.skills
            return ListPick(
                tuple(Proficiency.skill(skill) for skill in skills),
                spec.amount,
                widen_to=self._skills(),
            )
        if isinstance(spec, ToolChoice):
            options = [
                ArtisansToolsChoice(),
                GamingSetChoice(),
                MusicalInstrumentChoice(1),
            ]
            options.extend(
                ListPick((tool,), 1, widen_to=self._tools()) for tool in self._tools(ToolKind.OTHER)
            )
            return CompositePick(tuple(options), spec.amount)
        if isinstance(spec, ArtisansToolsChoice):
            return ListPick(self._tools(ToolKind.ARTISANS_TOOLS), 1, widen_to=self._tools())
        if isinstance(spec, GamingSetChoice):
            return ListPick(self._tools(ToolKind.GAMING_SET), 1, widen_to=self._tools())
        if isinstance(spec, MusicalInstrumentChoice):
            return ListPick(
                self._tools(ToolKind.MUSICAL_INSTRUMENT), spec.amount, widen_to=self._tools()
            )
        if isinstance(spec, WeaponChoice):
            weapons = self.catalog.weapons_matching(spec.category, spec.classification)
            return ListPick(
                tuple(Proficiency.weapon(weapon) for weapon in weapons),
                spec.amount,
                widen_to=tuple(Proficiency.weapon(weapon) for weapon in self.catalog.weapons),
            )
        if isinstance(spec, ArmorChoice):
            return ListPick(
                tuple(Proficiency.armor(armor_type) for armor_type in ArmorType), spec.amount
            )
        if isinstance(spec, VehicleChoice):
            return ListPick(
                tuple(Proficiency.vehicle(vehicle) for vehicle in VehicleProficiency),
                spec.amount,
            )
        return super().expand_shorthand(spec)

    def owned(self, character: Character) -> List[Proficiency]:
        return list(character.proficiencies)

    def weighting(self, character: Character) -> Weighting:
        def for_candidates(candidates):
            if candidates and all(p.kind == ProficiencyKind.SKILL for p in candidates):
                return lambda proficiency: skill_weight(proficiency.value, character)
            return None

        return for_candidates

    def fold(self, character: Character, items: List[Proficiency]) -> List[Proficiency]:
        return character.add_proficiencies(items)

    def order(self, specs: List[ChoiceSpec]) -> List[ChoiceSpec]:
        """Most limited universes first, so broad choices don't eat narrow ones."""
        return sorted(specs, key=lambda spec: universe_size(self.expand(spec)))

    @staticmethod
    def replacement(proficiency: Proficiency) -> Optional[ChoiceSpec]:
        """Choice that stands in for a fixed proficiency the character already has."""
        if proficiency.kind == ProficiencyKind.SKILL:
            return SkillChoice(None, 1)
        if proficiency.kind == ProficiencyKind.TOOL:
            return ToolChoice(1)
        if proficiency.kind in (ProficiencyKind.WEAPON, ProficiencyKind.WEAPON_CATEGORY):
            return WeaponChoice()
        if proficiency.kind == ProficiencyKind.ARMOR:
            return ArmorChoice()
        if proficiency.kind == ProficiencyKind.VEHICLE:
            return VehicleChoice()
        return None

    def add_fixed(
        self, proficiencies: Iterable[Proficiency], character: Character
    ) -> List[ChoiceSpec]:
        """
        Add fixed proficiencies to the character.

        Args:
            proficiencies: Proficiencies granted outright by a declaration
            character: Character to update

        Returns:
            Replacement choices for the ones that were already owned
        """
        replacements: List[ChoiceSpec] = []
        for proficiency in proficiencies:
            if proficiency in character.proficiencies:
                replacement = self.replacement(proficiency)
                if replacement is not None:
                    logger.debug(f"Replacing duplicate proficiency {proficiency}")
                    replacements.append(replacement)
                continue
            character.add_proficiencies([proficiency])
        return replacements
