"""Starting equipment selection."""

from typing import List

from config.logging_config import get_logger

from .choices import (
    ArmorChoice,
    ArtisansToolsChoice,
    ChoiceSpec,
    CompositePick,
    GamingSetChoice,
    HolySymbolChoice,
    ListPick,
    MusicalInstrumentChoice,
    ToolChoice,
    VehicleChoice,
    WeaponChoice,
)
from .filters import proficient_subset
from .models import Character, Equipment, ToolKind
from .resolver import Preference, SelectionSurface, ShortfallPolicy

logger = get_logger(__name__)


class EquipmentSurface(SelectionSurface):
    """
    Resolves equipment options.

    Draws are uniform, but when any option is something the character is already
    proficient with, only those options are drawn from. Shortfalls are not widened:
    running out of options yields fewer items.
    """

    name = "equipment"
    shortfall_policy = ShortfallPolicy.ALLOW_PARTIAL

    def _pick(self, items, amount: int = 1) -> ListPick:
        return ListPick(tuple(Equipment(item) for item in items), amount)

    def expand_shorthand(self, spec: ChoiceSpec) -> ChoiceSpec:
        if isinstance(spec, ArtisansToolsChoice):
            return self._pick(self.catalog.tools_of_kind(ToolKind.ARTISANS_TOOLS))
        if isinstance(spec, GamingSetChoice):
            return self._pick(self.catalog.tools_of_kind(ToolKind.GAMING_SET))
        if isinstance(spec, MusicalInstrumentChoice):
            return self._pick(self.catalog.tools_of_kind(ToolKind.MUSICAL_INSTRUMENT), spec.amount)
        if isinstance(spec, HolySymbolChoice):
            return self._pick(self.catalog.holy_symbols)
        if isinstance(spec, ToolChoice):
            options = [ArtisansToolsChoice(), GamingSetChoice(), MusicalInstrumentChoice(1)]
            options.extend(self._pick([tool]) for tool in self.catalog.tools_of_kind(ToolKind.OTHER))
            return CompositePick(tuple(options), spec.amount)
        if isinstance(spec, WeaponChoice):
            weapons = self.catalog.weapons_matching(spec.category, spec.classification)
            return self._pick(weapons, spec.amount)
        if isinstance(spec, ArmorChoice):
            return self._pick(self.catalog.armor, spec.amount)
        if isinstance(spec, VehicleChoice):
            return self._pick(self.catalog.vehicles, spec.amount)
        return super().expand_shorthand(spec)

    def owned(self, character: Character) -> List[Equipment]:
        return list(character.equipment)

    def preference(self, character: Character) -> Preference:
        return lambda candidates: proficient_subset(candidates, character.proficiencies)

    def fold(self, character: Character, items: List[Equipment]) -> List[Equipment]:
        return character.add_equipment(items)
