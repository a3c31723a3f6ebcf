"""Tests for the choice resolver and the selection surface machinery."""

import random

import pytest

from src.character_builder.catalog import Catalog
from src.character_builder.choices import (
    CompositePick,
    GamingSetChoice,
    LanguageChoice,
    ListPick,
    MusicalInstrumentChoice,
    SkillChoice,
    ToolChoice,
)
from src.character_builder.errors import CandidatesExhaustedError, ResolutionDepthError
from src.character_builder.models import Character, Proficiency, Skill, ToolKind
from src.character_builder.proficiencies import ProficiencySurface
from src.character_builder.resolver import (
    ChoiceResolver,
    CompositeDuplicates,
    ShortfallPolicy,
    universe_size,
)
from src.character_builder.sampler import WeightedSampler
from src.core.error_handling import ValidationError


def skills(*names):
    return [Proficiency.skill(skill) for skill in names]


class TestListPick:
    """Test explicit list picks."""

    def test_picks_requested_amount(self, sampler):
        """Test a plain draw."""
        resolver = ChoiceResolver(sampler)
        picked = resolver.resolve(ListPick(("a", "b", "c", "d"), 2))
        assert len(picked) == 2
        assert set(picked) <= {"a", "b", "c", "d"}

    def test_owned_items_are_excluded(self, sampler):
        """Test that owned items are never returned."""
        resolver = ChoiceResolver(sampler)
        for _ in range(20):
            assert resolver.resolve(ListPick(("a", "b"), 1), owned=["a"]) == ["b"]

    def test_widening_covers_shortfall(self, sampler):
        """Test that the widened universe fills in what the list couldn't."""
        resolver = ChoiceResolver(sampler, policy=ShortfallPolicy.WIDEN_AND_RETRY)
        picked = resolver.resolve(
            ListPick(("a", "b"), 3, widen_to=("a", "b", "c", "d")), owned=["b"]
        )
        assert len(picked) == 3
        assert len(set(picked)) == 3
        assert picked[0] == "a"
        assert "b" not in picked

    def test_widening_exhausted_raises(self, sampler):
        """Test that a widened universe that is still too small fails loudly."""
        resolver = ChoiceResolver(sampler, policy=ShortfallPolicy.WIDEN_AND_RETRY)
        with pytest.raises(CandidatesExhaustedError) as exc_info:
            resolver.resolve(ListPick(("a",), 3, widen_to=("a", "b")))
        assert exc_info.value.requested == 3
        assert exc_info.value.picked == 2

    def test_allow_partial_never_widens(self, sampler):
        """Test that the partial policy returns a short result."""
        resolver = ChoiceResolver(sampler, policy=ShortfallPolicy.ALLOW_PARTIAL)
        picked = resolver.resolve(ListPick(("a", "b"), 3, widen_to=("a", "b", "c", "d")))
        assert sorted(picked) == ["a", "b"]

    def test_no_wider_universe_returns_partial(self, sampler):
        """Test that a pick without a wider universe stays short even when widening."""
        resolver = ChoiceResolver(sampler, policy=ShortfallPolicy.WIDEN_AND_RETRY)
        assert resolver.resolve(ListPick(("a",), 2)) == ["a"]

    def test_zero_amount(self, sampler):
        """Test that a zero-count pick resolves to nothing."""
        assert ChoiceResolver(sampler).resolve(ListPick(("a", "b"), 0)) == []

    def test_preferred_tier_replaces_candidates(self, sampler):
        """Test that a non-empty preferred tier is drawn from exclusively."""
        resolver = ChoiceResolver(
            sampler, preference=lambda candidates: [c for c in candidates if c.startswith("x")]
        )
        for _ in range(20):
            assert resolver.resolve(ListPick(("a", "xb", "c"), 1)) == ["xb"]

    def test_empty_preferred_tier_falls_back(self, sampler):
        """Test that an empty preferred tier leaves the candidates untouched."""
        resolver = ChoiceResolver(sampler, preference=lambda candidates: [])
        assert len(resolver.resolve(ListPick(("a", "b", "c"), 3))) == 3

    def test_unexpanded_spec_is_rejected(self, sampler):
        """Test that the resolver only executes primitive specifications."""
        with pytest.raises(ValidationError):
            ChoiceResolver(sampler).resolve(SkillChoice(None, 1))


class TestCompositePick:
    """Test composite picks and their duplicate handling."""

    def test_distinct_sub_specifications(self, sampler):
        """Test that activating every option uses each option once."""
        resolver = ChoiceResolver(sampler)
        spec = CompositePick((ListPick(("a",), 1), ListPick(("b",), 1), ListPick(("c",), 1)), 3)
        assert sorted(resolver.resolve(spec)) == ["a", "b", "c"]

    def test_count_is_sub_specifications_not_items(self, sampler):
        """Test that a sub-specification yielding several items can exceed the amount."""
        resolver = ChoiceResolver(sampler)
        spec = CompositePick((ListPick(("a", "b", "c"), 3),), 1)
        assert sorted(resolver.resolve(spec)) == ["a", "b", "c"]

    def test_shortfall_reselects_options(self, sampler):
        """Test that a short composite retries with the same options."""
        resolver = ChoiceResolver(sampler, duplicates=CompositeDuplicates.EXCLUDE)
        spec = CompositePick((ListPick(("x", "y"), 1),), 2)
        assert sorted(resolver.resolve(spec)) == ["x", "y"]

    def test_exclude_keeps_results_distinct(self, sampler):
        """Test that excluded duplicates stop a re-selected option from repeating."""
        resolver = ChoiceResolver(
            sampler,
            policy=ShortfallPolicy.ALLOW_PARTIAL,
            duplicates=CompositeDuplicates.EXCLUDE,
        )
        spec = CompositePick((ListPick(("x",), 1),), 2)
        assert resolver.resolve(spec) == ["x"]

    def test_permit_allows_repeated_items(self, sampler):
        """Test that permitted duplicates let a re-selected option repeat its item."""
        resolver = ChoiceResolver(sampler, duplicates=CompositeDuplicates.PERMIT)
        spec = CompositePick((ListPick(("x",), 1),), 2)
        assert resolver.resolve(spec) == ["x", "x"]

    def test_permit_still_excludes_owned(self, sampler):
        """Test that permitted duplicates never include owned items."""
        resolver = ChoiceResolver(
            sampler,
            policy=ShortfallPolicy.ALLOW_PARTIAL,
            duplicates=CompositeDuplicates.PERMIT,
        )
        spec = CompositePick((ListPick(("x", "y"), 1),), 3)
        assert resolver.resolve(spec, owned=["x"]) == ["y", "y", "y"]

    def test_no_progress_raises_when_widening(self, sampler):
        """Test that a composite that can't make progress fails under widening."""
        resolver = ChoiceResolver(sampler, policy=ShortfallPolicy.WIDEN_AND_RETRY)
        spec = CompositePick((ListPick(("x",), 1),), 1)
        with pytest.raises(CandidatesExhaustedError):
            resolver.resolve(spec, owned=["x"])

    def test_no_progress_is_partial_when_allowed(self, sampler):
        """Test that a composite that can't make progress returns what it has."""
        resolver = ChoiceResolver(sampler, policy=ShortfallPolicy.ALLOW_PARTIAL)
        spec = CompositePick((ListPick(("x",), 1),), 1)
        assert resolver.resolve(spec, owned=["x"]) == []

    def test_depth_guard(self, sampler):
        """Test that nesting beyond the limit fails instead of recursing."""
        resolver = ChoiceResolver(sampler, max_depth=2)
        spec = CompositePick((CompositePick((CompositePick((ListPick(("a",), 1),), 1),), 1),), 1)
        with pytest.raises(ResolutionDepthError) as exc_info:
            resolver.resolve(spec)
        assert exc_info.value.depth == 3

    def test_depth_guard_allows_limit(self, sampler):
        """Test that nesting up to the limit resolves."""
        resolver = ChoiceResolver(sampler, max_depth=3)
        spec = CompositePick((CompositePick((CompositePick((ListPick(("a",), 1),), 1),), 1),), 1)
        assert resolver.resolve(spec) == ["a"]


class TestProficiencyScenarios:
    """End-to-end scenarios through the proficiency surface."""

    @pytest.fixture
    def surface(self, catalog, sampler):
        return ProficiencySurface(catalog=catalog, sampler=sampler)

    def test_one_of_four_skills(self, surface, character):
        """Test one skill from four with equal scores."""
        pool = (Skill.ARCANA, Skill.HISTORY, Skill.NATURE, Skill.RELIGION)
        seen = set()
        for _ in range(200):
            picked = surface.resolve(SkillChoice(pool, 1), character)
            assert len(picked) == 1
            seen.add(picked[0].value)
        assert seen == set(pool)

    def test_known_skill_is_filtered(self, surface, character):
        """Test that the only unknown skill is picked deterministically."""
        character.add_proficiencies(skills(Skill.HISTORY))
        for _ in range(20):
            picked = surface.resolve(SkillChoice((Skill.HISTORY, Skill.ARCANA), 1), character)
            assert picked == skills(Skill.ARCANA)

    def test_gaming_set_and_instrument(self, surface, character):
        """Test a composite of two tool families yields one of each."""
        spec = CompositePick((GamingSetChoice(), MusicalInstrumentChoice()), 2)
        for _ in range(20):
            picked = surface.resolve(spec, character)
            assert len(picked) == 2
            assert {p.value.kind for p in picked} == {
                ToolKind.GAMING_SET,
                ToolKind.MUSICAL_INSTRUMENT,
            }

    def test_skill_shortfall_widens_to_all_skills(self, surface, character):
        """Test that skills widen to every skill when the pool runs dry."""
        character.add_proficiencies(skills(Skill.HISTORY))
        picked = surface.resolve(SkillChoice((Skill.HISTORY, Skill.ARCANA), 2), character)
        assert len(picked) == 2
        assert picked[0] == Proficiency.skill(Skill.ARCANA)
        assert Proficiency.skill(Skill.HISTORY) not in picked

    def test_tiny_universe_is_exhausted(self, sampler, character):
        """Test that asking for more skills than exist fails loudly."""
        surface = ProficiencySurface(
            catalog=Catalog(skills=(Skill.ARCANA, Skill.HISTORY)), sampler=sampler
        )
        with pytest.raises(CandidatesExhaustedError):
            surface.resolve(SkillChoice(None, 3), character)

    def test_no_duplicates_and_nothing_owned(self, catalog, character):
        """Test the no-duplicate guarantee across many seeds."""
        owned = [Proficiency.tool(tool) for tool in catalog.tools[::3]]
        character.add_proficiencies(owned)
        for seed in range(50):
            surface = ProficiencySurface(catalog=catalog, sampler=WeightedSampler(seed=seed))
            picked = surface.resolve(ToolChoice(4), character)
            assert len(picked) == 4
            assert len(set(picked)) == 4
            assert not set(picked) & set(owned)

    def test_same_seed_same_result(self, catalog, character):
        """Test reproducibility of a full resolution."""
        results = []
        for _ in range(2):
            surface = ProficiencySurface(catalog=catalog, sampler=WeightedSampler(random.Random(5)))
            results.append(
                surface.resolve(ToolChoice(3), character)
                + surface.resolve(SkillChoice(None, 4), character)
            )
        assert results[0] == results[1]

    def test_resolve_does_not_mutate_character(self, surface, character):
        """Test that resolving alone leaves the character untouched."""
        surface.resolve(SkillChoice(None, 2), character)
        assert character.proficiencies == []

    def test_unsupported_shorthand(self, surface):
        """Test that a surface rejects shorthands it can't expand."""
        with pytest.raises(ValidationError):
            surface.expand(LanguageChoice(1))

    def test_expand_is_primitive(self, surface):
        """Test that expansion leaves only primitive picks."""
        expanded = surface.expand(ToolChoice(2))

        def walk(spec):
            assert isinstance(spec, (ListPick, CompositePick))
            if isinstance(spec, CompositePick):
                for option in spec.options:
                    walk(option)

        walk(expanded)
        assert universe_size(expanded) == len(surface.catalog.tools)


def test_policies_are_per_surface():
    """Test that each surface declares its shortfall policy."""
    from src.character_builder.deities import DeitySurface
    from src.character_builder.equipment import EquipmentSurface
    from src.character_builder.languages import LanguageSurface

    assert ProficiencySurface.shortfall_policy == ShortfallPolicy.WIDEN_AND_RETRY
    assert LanguageSurface.shortfall_policy == ShortfallPolicy.WIDEN_AND_RETRY
    assert EquipmentSurface.shortfall_policy == ShortfallPolicy.ALLOW_PARTIAL
    assert DeitySurface.shortfall_policy == ShortfallPolicy.ALLOW_PARTIAL


def test_character_default_is_empty():
    """Test the starting character state."""
    assert Character().proficiencies == []
