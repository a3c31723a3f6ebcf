"""Character generation: runs every selection surface in order over one character."""

import random
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from config.logging_config import get_logger
from config.settings import Settings, get_settings
from src.core.error_handling import ValidationError

from .catalog import Catalog, default_catalog
from .choices import ChoiceSpec
from .deities import DeitySurface, choose_alignment
from .equipment import EquipmentSurface
from .languages import LanguageSurface
from .models import (
    AbilityScores,
    AbilityScoreType,
    Attitude,
    Character,
    Domain,
    Equipment,
    Language,
    Morality,
    PantheonWeight,
    Proficiency,
    Skill,
)
from .proficiencies import ProficiencySurface
from .sampler import WeightedSampler
from .validators import ChoiceValidator
from .weights import ability_modifier, class_weight, max_skill_weight

logger = get_logger(__name__)


@dataclass
class Declaration:
    """
    Static grants and choices contributed by one race, background or class.

    Fixed grants are given outright; the ``*_choices`` lists are resolved by the
    matching selection surface.
    """

    name: str
    ability_increases: Dict[AbilityScoreType, int] = field(default_factory=dict)
    skills: List[Skill] = field(default_factory=list)
    proficiencies: List[Proficiency] = field(default_factory=list)
    proficiency_choices: List[ChoiceSpec] = field(default_factory=list)
    equipment: List[Equipment] = field(default_factory=list)
    equipment_choices: List[ChoiceSpec] = field(default_factory=list)
    languages: List[Language] = field(default_factory=list)
    language_choices: List[ChoiceSpec] = field(default_factory=list)
    pantheons: List[Tuple[str, PantheonWeight]] = field(default_factory=list)
    required_domain: Optional[Domain] = None
    attitude_influences: List[Attitude] = field(default_factory=list)
    morality_influences: List[Morality] = field(default_factory=list)
    primary_abilities: List[AbilityScoreType] = field(default_factory=list)
    secondary_abilities: List[AbilityScoreType] = field(default_factory=list)

    def fixed_proficiencies(self) -> List[Proficiency]:
        """Skills and other proficiencies granted outright, each listed once."""
        granted = [Proficiency.skill(skill) for skill in self.skills]
        for proficiency in self.proficiencies:
            if proficiency not in granted:
                granted.append(proficiency)
        return granted

    def choices(self) -> List[ChoiceSpec]:
        return self.proficiency_choices + self.equipment_choices + self.language_choices


class CharacterGenerator:
    """Generate characters from race, background and class declarations."""

    def __init__(
        self,
        catalog: Optional[Catalog] = None,
        settings: Optional[Settings] = None,
        rng: Optional[random.Random] = None,
        none_weight: Optional[PantheonWeight] = PantheonWeight.POSSIBLE,
    ):
        """
        Initialize the generator.

        Args:
            catalog: Content tables; the default catalog when omitted
            settings: Engine settings; the process-wide settings when omitted
            rng: Random source; seeded from ``settings.seed`` when omitted
            none_weight: Tier of worshipping no pantheon at all (None disables it)
        """
        self.settings = settings or get_settings()
        self.catalog = catalog if catalog is not None else default_catalog()
        self.rng = rng if rng is not None else random.Random(self.settings.seed)
        self.sampler = WeightedSampler(self.rng)

        self.languages = LanguageSurface.from_settings(self.settings, self.catalog, self.sampler)
        self.proficiencies = ProficiencySurface.from_settings(
            self.settings, self.catalog, self.sampler
        )
        self.equipment = EquipmentSurface.from_settings(self.settings, self.catalog, self.sampler)
        self.deities = DeitySurface.from_settings(
            self.settings, self.catalog, self.sampler, none_weight=none_weight
        )

    def roll_ability_scores(self) -> AbilityScores:
        """Roll 4d6 and drop the lowest die for each ability."""
        scores = {}
        for ability in AbilityScoreType:
            rolls = sorted(self.rng.randint(1, 6) for _ in range(4))
            scores[ability] = sum(rolls[1:])
        return AbilityScores(scores=scores)

    def choose_background(
        self, backgrounds: Sequence[Declaration], character: Character
    ) -> Declaration:
        """Pick a background, favouring ones whose skills suit the character."""
        if not backgrounds:
            raise ValidationError("No backgrounds to choose from", field="backgrounds")
        return self.sampler.choose(
            list(backgrounds),
            lambda background: max_skill_weight(background.skills, character) or 1.0,
        )

    def choose_class(
        self, classes: Sequence[Declaration], ability_scores: AbilityScores
    ) -> Declaration:
        """
        Pick a class suited to the ability scores.

        Only classes whose best primary ability modifier is the highest on offer are
        considered, then weighted by their key abilities.
        """
        if not classes:
            raise ValidationError("No classes to choose from", field="classes")

        def best_primary(declaration: Declaration) -> int:
            if not declaration.primary_abilities:
                return min(ability_modifier(ability_scores, a) for a in AbilityScoreType)
            return max(ability_modifier(ability_scores, a) for a in declaration.primary_abilities)

        top = max(best_primary(declaration) for declaration in classes)
        narrowed = [declaration for declaration in classes if best_primary(declaration) == top]
        logger.debug(f"{len(narrowed)} of {len(classes)} classes in the top group")
        return self.sampler.choose(
            narrowed,
            lambda declaration: class_weight(
                declaration.primary_abilities, declaration.secondary_abilities, ability_scores
            ),
        )

    def generate(
        self,
        race: Declaration,
        background: Declaration,
        character_class: Optional[Declaration] = None,
        ability_scores: Optional[AbilityScores] = None,
        level: int = 1,
    ) -> Character:
        """
        Generate a character.

        Languages are chosen first, then proficiencies, equipment and finally a deity.
        Each step sees everything the previous steps added.

        Args:
            race: Race declaration
            background: Background declaration
            character_class: Optional class declaration
            ability_scores: Scores before racial increases; rolled when omitted
            level: Character level

        Returns:
            The generated character

        Raises:
            ValidationError: A declared choice is malformed, or the starting scores
                or level are out of range
        """
        declarations = [d for d in (race, background, character_class) if d is not None]
        for declaration in declarations:
            for spec in declaration.choices():
                ChoiceValidator.ensure_valid_spec(spec)
        logger.info(
            f"Generating character: {', '.join(declaration.name for declaration in declarations)}"
        )

        if ability_scores is None:
            ability_scores = self.roll_ability_scores()
        character = Character(
            ability_scores=AbilityScores(scores=dict(ability_scores.scores)), level=level
        )
        character.ability_scores.increase(race.ability_increases)
        ChoiceValidator.ensure_valid_character(character)
        for declaration in declarations:
            character.attitude_influences.extend(declaration.attitude_influences)
            character.morality_influences.extend(declaration.morality_influences)
        character.alignment = choose_alignment(
            self.sampler, character.attitude_influences, character.morality_influences
        )

        self._generate_languages(declarations, character)
        self._generate_proficiencies(declarations, character)
        self._generate_equipment(declarations, character)
        self._generate_deity(declarations, character)

        logger.info(
            f"Generated character with {len(character.proficiencies)} proficiencies, "
            f"{len(character.equipment)} items and {len(character.languages)} languages"
        )
        return character

    def _generate_languages(self, declarations: List[Declaration], character: Character) -> None:
        pending: List[ChoiceSpec] = []
        for declaration in declarations:
            pending.extend(self.languages.add_fixed(declaration.languages, character))
        for declaration in declarations:
            pending.extend(declaration.language_choices)
        self.languages.grant(pending, character)

    def _generate_proficiencies(
        self, declarations: List[Declaration], character: Character
    ) -> None:
        pending: List[ChoiceSpec] = []
        for declaration in declarations:
            pending.extend(
                self.proficiencies.add_fixed(declaration.fixed_proficiencies(), character)
            )
        for declaration in declarations:
            pending.extend(declaration.proficiency_choices)
        self.proficiencies.grant(pending, character)

    def _generate_equipment(self, declarations: List[Declaration], character: Character) -> None:
        for declaration in declarations:
            character.add_equipment(declaration.equipment)
        choices: List[ChoiceSpec] = []
        for declaration in declarations:
            choices.extend(declaration.equipment_choices)
        self.equipment.grant(choices, character)

    def _generate_deity(self, declarations: List[Declaration], character: Character) -> None:
        contributions: List[Tuple[str, PantheonWeight]] = []
        for declaration in declarations:
            contributions.extend(declaration.pantheons)
        for language in character.languages:
            contributions.extend(
                (name, PantheonWeight.POSSIBLE)
                for name in self.catalog.pantheons_for_language(language)
            )
        required_domain = next(
            (d.required_domain for d in declarations if d.required_domain is not None), None
        )
        self.deities.grant_affiliation(contributions, character, required_domain)
