"""Tests for the character generator."""

import random

import pytest

from config.settings import Settings
from src.character_builder.character_generator import CharacterGenerator, Declaration
from src.character_builder.choices import (
    CompositePick,
    HolySymbolChoice,
    LanguageChoice,
    ListPick,
    SkillChoice,
    ToolChoice,
)
from src.character_builder.models import (
    AbilityScores,
    AbilityScoreType,
    Attitude,
    Equipment,
    Language,
    Morality,
    PantheonWeight,
    Proficiency,
    ProficiencyKind,
    Skill,
)
from src.character_builder.validators import ChoiceValidator
from src.core.error_handling import ValidationError


@pytest.fixture
def settings():
    """Default settings, independent of the environment."""
    return Settings(_env_file=None)


@pytest.fixture
def race():
    return Declaration(
        "Mountain Dwarf",
        ability_increases={AbilityScoreType.STRENGTH: 2, AbilityScoreType.CONSTITUTION: 2},
        proficiencies=[Proficiency.skill(Skill.PERCEPTION)],
        proficiency_choices=[ToolChoice(1)],
        languages=[Language("Common"), Language("Dwarvish")],
        pantheons=[("Dwarven", PantheonWeight.LIKELY)],
        attitude_influences=[Attitude.LAWFUL],
        morality_influences=[Morality.GOOD],
    )


@pytest.fixture
def background():
    return Declaration(
        "Acolyte",
        skills=[Skill.PERCEPTION, Skill.RELIGION],
        equipment=[Equipment("Prayer book"), Equipment("Incense", 5)],
        equipment_choices=[HolySymbolChoice()],
        languages=[Language("Common")],
        language_choices=[LanguageChoice(2)],
        attitude_influences=[Attitude.LAWFUL],
    )


class TestCharacterGenerator:
    """Test end-to-end generation."""

    def test_generate(self, race, background, settings):
        """Test a full build over the standard catalog."""
        generator = CharacterGenerator(settings=settings, rng=random.Random(3))
        character = generator.generate(race, background)

        skills = [p for p in character.proficiencies if p.kind == ProficiencyKind.SKILL]
        tools = [p for p in character.proficiencies if p.kind == ProficiencyKind.TOOL]
        # Perception twice: the duplicate is replaced by another skill
        assert len(skills) == 3
        assert len(tools) == 1
        # Common twice: the duplicate is replaced, plus two background choices
        assert len(character.languages) == 5
        assert Equipment("Prayer book") in character.equipment
        assert len(character.equipment) == 3
        assert character.alignment is not None
        assert character.pantheon is not None
        assert ChoiceValidator.validate_character(character) == []

    def test_same_seed_same_character(self, race, background, settings):
        """Test that generation is reproducible."""
        first = CharacterGenerator(settings=settings, rng=random.Random(11)).generate(race, background)
        second = CharacterGenerator(settings=settings, rng=random.Random(11)).generate(race, background)
        assert first.to_dict() == second.to_dict()

    def test_seed_from_settings(self, race, background):
        """Test that the settings seed drives the random source."""
        settings = Settings(_env_file=None, seed=8)
        first = CharacterGenerator(settings=settings).generate(race, background)
        second = CharacterGenerator(settings=settings).generate(race, background)
        assert first.to_dict() == second.to_dict()

    def test_ability_increases_do_not_touch_input(self, race, background, settings):
        """Test racial increases apply to a copy of the given scores."""
        given = AbilityScores()
        character = CharacterGenerator(settings=settings, rng=random.Random(1)).generate(
            race, background, ability_scores=given
        )
        assert character.ability_scores.score(AbilityScoreType.STRENGTH) == 12
        assert given.score(AbilityScoreType.STRENGTH) == 10

    def test_languages_feed_deity_choice(self, small_catalog, settings):
        """Test that languages chosen first shape the pantheon choice."""
        race = Declaration("Dwarf", languages=[Language("Dwarvish")])
        generator = CharacterGenerator(
            catalog=small_catalog, settings=settings, rng=random.Random(2), none_weight=None
        )
        character = generator.generate(race, Declaration("Hermit"))
        assert character.pantheon == small_catalog.pantheon("Deep")
        assert character.deity.name == "Anvil"

    def test_fixed_equipment_choices(self, settings):
        """Test fixed and chosen equipment are both granted."""
        background = Declaration(
            "Sailor",
            equipment=[Equipment("Belaying pin")],
            equipment_choices=[ListPick((Equipment("Silk rope"), Equipment("Lucky charm")), 1)],
        )
        character = CharacterGenerator(settings=settings, rng=random.Random(4)).generate(
            Declaration("Human"), background
        )
        assert character.equipment[0] == Equipment("Belaying pin")
        assert len(character.equipment) == 2


class TestDeclarationChoices:
    """Test weighted choice of backgrounds and classes."""

    def test_roll_ability_scores(self, settings):
        """Test 4d6-drop-lowest stays in range."""
        generator = CharacterGenerator(settings=settings, rng=random.Random(6))
        for _ in range(20):
            rolled = generator.roll_ability_scores()
            assert set(rolled.scores) == set(AbilityScoreType)
            assert all(3 <= score <= 18 for score in rolled.scores.values())

    def test_choose_class_top_group(self, settings, make_scores):
        """Test that only classes with the best primary modifier are considered."""
        wizard = Declaration("Wizard", primary_abilities=[AbilityScoreType.INTELLIGENCE])
        fighter = Declaration(
            "Fighter",
            primary_abilities=[AbilityScoreType.STRENGTH],
            secondary_abilities=[AbilityScoreType.CONSTITUTION],
        )
        generator = CharacterGenerator(settings=settings, rng=random.Random(9))
        for _ in range(20):
            assert generator.choose_class([fighter, wizard], make_scores(INT=16)) is wizard

    def test_choose_background(self, settings, character):
        """Test that a background is picked from the options."""
        sage = Declaration("Sage", skills=[Skill.ARCANA, Skill.HISTORY])
        soldier = Declaration("Soldier", skills=[Skill.ATHLETICS, Skill.INTIMIDATION])
        generator = CharacterGenerator(settings=settings, rng=random.Random(10))
        assert generator.choose_background([sage, soldier], character) in (sage, soldier)

    def test_empty_options_raise(self, settings, character):
        """Test that choosing from nothing is a validation error."""
        generator = CharacterGenerator(settings=settings, rng=random.Random(10))
        with pytest.raises(ValidationError):
            generator.choose_background([], character)
        with pytest.raises(ValidationError):
            generator.choose_class([], character.ability_scores)

    def test_skill_choice_in_declaration(self, settings):
        """Test declaration skill choices resolve against the character."""
        background = Declaration(
            "Sage", proficiency_choices=[SkillChoice((Skill.ARCANA, Skill.HISTORY), 2)]
        )
        character = CharacterGenerator(settings=settings, rng=random.Random(12)).generate(
            Declaration("Human"), background
        )
        assert set(character.proficiencies) == {
            Proficiency.skill(Skill.ARCANA),
            Proficiency.skill(Skill.HISTORY),
        }


class TestFixedGrants:
    """Test proficiencies granted outright by declarations."""

    def test_background_skills_are_granted(self, settings):
        """Test that declared skills become proficiencies."""
        sage = Declaration("Sage", skills=[Skill.ARCANA, Skill.HISTORY])
        character = CharacterGenerator(settings=settings, rng=random.Random(5)).generate(
            Declaration("Human"), sage
        )
        assert character.proficiencies == [
            Proficiency.skill(Skill.ARCANA),
            Proficiency.skill(Skill.HISTORY),
        ]

    def test_skill_listed_twice_is_granted_once(self, settings):
        """Test a skill in both grant lists of one declaration is not replaced."""
        sage = Declaration(
            "Sage", skills=[Skill.ARCANA], proficiencies=[Proficiency.skill(Skill.ARCANA)]
        )
        character = CharacterGenerator(settings=settings, rng=random.Random(5)).generate(
            Declaration("Human"), sage
        )
        assert character.proficiencies == [Proficiency.skill(Skill.ARCANA)]

    def test_known_background_skill_is_replaced(self, settings):
        """Test a skill the race already granted is swapped for another skill."""
        race = Declaration("Elf", proficiencies=[Proficiency.skill(Skill.PERCEPTION)])
        background = Declaration("Outlander", skills=[Skill.PERCEPTION])
        character = CharacterGenerator(settings=settings, rng=random.Random(7)).generate(
            race, background
        )
        skills = [p for p in character.proficiencies if p.kind == ProficiencyKind.SKILL]
        assert len(skills) == 2
        assert skills[0] == Proficiency.skill(Skill.PERCEPTION)


class TestGenerationValidation:
    """Test that bad input is rejected before anything is resolved."""

    def test_empty_composite_choice(self, settings):
        """Test a composite without options is a validation error."""
        background = Declaration("Broken", proficiency_choices=[CompositePick((), 1)])
        generator = CharacterGenerator(settings=settings, rng=random.Random(1))
        with pytest.raises(ValidationError) as exc_info:
            generator.generate(Declaration("Human"), background)
        assert exc_info.value.context["field"] == "spec"

    def test_negative_amount_choice(self, settings):
        """Test negative counts in any choice list are rejected."""
        race = Declaration("Human", language_choices=[LanguageChoice(-1)])
        generator = CharacterGenerator(settings=settings, rng=random.Random(1))
        with pytest.raises(ValidationError):
            generator.generate(race, Declaration("Hermit"))

    def test_scores_out_of_range(self, settings, make_scores):
        """Test starting scores above the limit are rejected."""
        generator = CharacterGenerator(settings=settings, rng=random.Random(1))
        with pytest.raises(ValidationError) as exc_info:
            generator.generate(
                Declaration("Human"), Declaration("Hermit"), ability_scores=make_scores(STR=40)
            )
        assert exc_info.value.context["field"] == "character"

    def test_level_out_of_range(self, settings):
        """Test levels outside 1..20 are rejected."""
        generator = CharacterGenerator(settings=settings, rng=random.Random(1))
        with pytest.raises(ValidationError):
            generator.generate(Declaration("Human"), Declaration("Hermit"), level=0)
