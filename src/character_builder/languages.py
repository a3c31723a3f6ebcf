"""Additional language selection."""

from typing import Iterable, List

from config.logging_config import get_logger

from .choices import ChoiceSpec, LanguageChoice, ListPick
from .models import Character, Language
from .resolver import SelectionSurface, ShortfallPolicy, Weighting
from .weights import language_type_weight

logger = get_logger(__name__)


class LanguageSurface(SelectionSurface):
    """Resolves language choices, favouring standard languages over exotic ones."""

    name = "languages"
    shortfall_policy = ShortfallPolicy.WIDEN_AND_RETRY

    def __init__(self, *args, standard_weight: float = 2.0, exotic_weight: float = 1.0, **kwargs):
        super().__init__(*args, **kwargs)
        self.standard_weight = standard_weight
        self.exotic_weight = exotic_weight

    @classmethod
    def from_settings(cls, settings, catalog=None, sampler=None, **kwargs):
        kwargs.setdefault("standard_weight", settings.standard_language_weight)
        kwargs.setdefault("exotic_weight", settings.exotic_language_weight)
        return super().from_settings(settings, catalog=catalog, sampler=sampler, **kwargs)

    def expand_shorthand(self, spec: ChoiceSpec) -> ChoiceSpec:
        if isinstance(spec, LanguageChoice):
            everything = self.catalog.languages
            candidates = everything
            if spec.language_type is not None:
                candidates = self.catalog.languages_of_type(spec.language_type)
                if not candidates:
                    logger.debug(f"No {spec.language_type.value} languages, using all")
                    candidates = everything
            return ListPick(candidates, spec.amount, widen_to=everything)
        return super().expand_shorthand(spec)

    def owned(self, character: Character) -> List[Language]:
        return list(character.languages)

    def weighting(self, character: Character) -> Weighting:
        def weight(language: Language) -> float:
            return language_type_weight(
                language.language_type, self.standard_weight, self.exotic_weight
            )

        return lambda candidates: weight

    def fold(self, character: Character, items: List[Language]) -> List[Language]:
        return character.add_languages(items)

    def add_fixed(self, languages: Iterable[Language], character: Character) -> List[ChoiceSpec]:
        """Add fixed languages; known ones are replaced by a choice from every language."""
        replacements: List[ChoiceSpec] = []
        for language in languages:
            if language in character.languages:
                logger.debug(f"Replacing duplicate language {language}")
                replacements.append(LanguageChoice(1, None))
            else:
                character.add_languages([language])
        return replacements
