"""Data models for character state, possessions and alignment."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union


class AbilityScoreType(Enum):
    """The six ability scores."""

    STRENGTH = "STR"
    DEXTERITY = "DEX"
    CONSTITUTION = "CON"
    INTELLIGENCE = "INT"
    WISDOM = "WIS"
    CHARISMA = "CHA"


class Skill(Enum):
    """All skill types available."""

    ACROBATICS = "Acrobatics"
    ANIMAL_HANDLING = "Animal Handling"
    ARCANA = "Arcana"
    ATHLETICS = "Athletics"
    DECEPTION = "Deception"
    HISTORY = "History"
    INSIGHT = "Insight"
    INTIMIDATION = "Intimidation"
    INVESTIGATION = "Investigation"
    MEDICINE = "Medicine"
    NATURE = "Nature"
    PERCEPTION = "Perception"
    PERFORMANCE = "Performance"
    PERSUASION = "Persuasion"
    RELIGION = "Religion"
    SLEIGHT_OF_HAND = "Sleight of Hand"
    STEALTH = "Stealth"
    SURVIVAL = "Survival"

    @property
    def ability(self) -> AbilityScoreType:
        """Ability score the skill is based on."""
        return SKILL_ABILITIES[self]


SKILL_ABILITIES: Dict[Skill, AbilityScoreType] = {
    Skill.ATHLETICS: AbilityScoreType.STRENGTH,
    Skill.ACROBATICS: AbilityScoreType.DEXTERITY,
    Skill.SLEIGHT_OF_HAND: AbilityScoreType.DEXTERITY,
    Skill.STEALTH: AbilityScoreType.DEXTERITY,
    Skill.ARCANA: AbilityScoreType.INTELLIGENCE,
    Skill.HISTORY: AbilityScoreType.INTELLIGENCE,
    Skill.INVESTIGATION: AbilityScoreType.INTELLIGENCE,
    Skill.NATURE: AbilityScoreType.INTELLIGENCE,
    Skill.RELIGION: AbilityScoreType.INTELLIGENCE,
    Skill.ANIMAL_HANDLING: AbilityScoreType.WISDOM,
    Skill.INSIGHT: AbilityScoreType.WISDOM,
    Skill.MEDICINE: AbilityScoreType.WISDOM,
    Skill.PERCEPTION: AbilityScoreType.WISDOM,
    Skill.SURVIVAL: AbilityScoreType.WISDOM,
    Skill.DECEPTION: AbilityScoreType.CHARISMA,
    Skill.INTIMIDATION: AbilityScoreType.CHARISMA,
    Skill.PERFORMANCE: AbilityScoreType.CHARISMA,
    Skill.PERSUASION: AbilityScoreType.CHARISMA,
}


class ArmorType(Enum):
    """Classes of armor different items fall under."""

    LIGHT = "Light"
    MEDIUM = "Medium"
    HEAVY = "Heavy"
    SHIELD = "Shield"


class WeaponCategory(Enum):
    """Weapon training categories."""

    SIMPLE = "Simple"
    MARTIAL = "Martial"


class WeaponClassification(Enum):
    """Melee or ranged weapons."""

    MELEE = "Melee"
    RANGED = "Ranged"


class ToolKind(Enum):
    """Families of tools, used by the tool shorthands."""

    ARTISANS_TOOLS = "artisans_tools"
    GAMING_SET = "gaming_set"
    MUSICAL_INSTRUMENT = "musical_instrument"
    OTHER = "other"


class VehicleProficiency(Enum):
    """Vehicle handling proficiencies."""

    LAND = "Land"
    WATER = "Water"


class LanguageType(Enum):
    """Standard languages are more common than exotic ones."""

    STANDARD = "Standard"
    EXOTIC = "Exotic"


class Attitude(Enum):
    CHAOTIC = "Chaotic"
    LAWFUL = "Lawful"
    NEUTRAL = "Neutral"


class Morality(Enum):
    EVIL = "Evil"
    GOOD = "Good"
    NEUTRAL = "Neutral"


class Domain(Enum):
    """Divine domains a deity can grant."""

    ARCANA = "Arcana"
    DEATH = "Death"
    FORGE = "Forge"
    GRAVE = "Grave"
    KNOWLEDGE = "Knowledge"
    LIFE = "Life"
    LIGHT = "Light"
    NATURE = "Nature"
    TEMPEST = "Tempest"
    TRICKERY = "Trickery"
    WAR = "War"


@dataclass(frozen=True)
class Armor:
    name: str
    armor_type: ArmorType

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class Weapon:
    name: str
    category: WeaponCategory
    classification: WeaponClassification

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class Tool:
    name: str
    kind: ToolKind = ToolKind.OTHER

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class Vehicle:
    name: str
    proficiency: VehicleProficiency

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class Gear:
    """Adventuring gear, including holy symbols and foci."""

    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class Language:
    name: str
    language_type: LanguageType = LanguageType.STANDARD

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class Alignment:
    """Character alignment, both attitude and morality."""

    attitude: Attitude
    morality: Morality

    def __str__(self) -> str:
        if self.attitude == Attitude.NEUTRAL and self.morality == Morality.NEUTRAL:
            return "Neutral"
        return f"{self.attitude.value} {self.morality.value}"


@dataclass(frozen=True)
class Deity:
    name: str
    alignment: Alignment
    domains: Tuple[Domain, ...] = ()
    symbols: Tuple[str, ...] = ()

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class Pantheon:
    """A named group of deities. The empty pantheon stands for worshipping none."""

    name: str
    deities: Tuple[Deity, ...] = ()

    def domains(self) -> List[Domain]:
        """All domains offered by at least one deity of the pantheon."""
        found: List[Domain] = []
        for deity in self.deities:
            for domain in deity.domains:
                if domain not in found:
                    found.append(domain)
        return found

    def __str__(self) -> str:
        return self.name


NO_PANTHEON = Pantheon("None")


class PantheonWeight(Enum):
    """How likely a pantheon is for a character, as a point on the exponential scale."""

    EXOTIC = 0
    POSSIBLE = 1
    LIKELY = 2


class ProficiencyKind(Enum):
    """Types of proficiencies."""

    ARMOR = "armor"
    SAVING_THROW = "saving_throw"
    SKILL = "skill"
    TOOL = "tool"
    VEHICLE = "vehicle"
    WEAPON = "weapon"
    WEAPON_CATEGORY = "weapon_category"


@dataclass(frozen=True)
class Proficiency:
    """A single proficiency; two proficiencies are the same when kind and value match."""

    kind: ProficiencyKind
    value: Any

    @classmethod
    def armor(cls, armor_type: ArmorType) -> "Proficiency":
        return cls(ProficiencyKind.ARMOR, armor_type)

    @classmethod
    def saving_throw(cls, ability: AbilityScoreType) -> "Proficiency":
        return cls(ProficiencyKind.SAVING_THROW, ability)

    @classmethod
    def skill(cls, skill: Skill) -> "Proficiency":
        return cls(ProficiencyKind.SKILL, skill)

    @classmethod
    def tool(cls, tool: Tool) -> "Proficiency":
        return cls(ProficiencyKind.TOOL, tool)

    @classmethod
    def vehicle(cls, vehicle: VehicleProficiency) -> "Proficiency":
        return cls(ProficiencyKind.VEHICLE, vehicle)

    @classmethod
    def weapon(cls, weapon: Weapon) -> "Proficiency":
        return cls(ProficiencyKind.WEAPON, weapon)

    @classmethod
    def weapon_category(cls, category: WeaponCategory) -> "Proficiency":
        return cls(ProficiencyKind.WEAPON_CATEGORY, category)

    def __str__(self) -> str:
        value = self.value.value if isinstance(self.value, Enum) else str(self.value)
        if self.kind == ProficiencyKind.WEAPON_CATEGORY:
            return f"{value} weapons"
        if self.kind == ProficiencyKind.ARMOR and self.value != ArmorType.SHIELD:
            return f"{value} armor"
        if self.kind == ProficiencyKind.SAVING_THROW:
            return f"{value} saving throws"
        return value


Item = Union[Armor, Gear, Tool, Vehicle, Weapon, str]


@dataclass(frozen=True)
class Equipment:
    """
    A piece of starting equipment. Free-text items are stored as plain strings.

    Equality and hashing use the item only: owning five incense already rules out
    drawing incense again in any quantity.
    """

    item: Item
    quantity: int = field(default=1, compare=False)

    def proficient(self, proficiencies: Iterable[Proficiency]) -> bool:
        """Check whether the character can make proper use of this item."""
        proficiencies = list(proficiencies)
        if isinstance(self.item, Armor):
            return Proficiency.armor(self.item.armor_type) in proficiencies
        if isinstance(self.item, Tool):
            return Proficiency.tool(self.item) in proficiencies
        if isinstance(self.item, Vehicle):
            return Proficiency.vehicle(self.item.proficiency) in proficiencies
        if isinstance(self.item, Weapon):
            return (
                Proficiency.weapon(self.item) in proficiencies
                or Proficiency.weapon_category(self.item.category) in proficiencies
            )
        # Gear and free-text items need no training
        return True

    def __str__(self) -> str:
        if self.quantity > 1:
            return f"{self.item} ({self.quantity})"
        return str(self.item)


@dataclass
class AbilityScores:
    """Full set of ability scores a character could have."""

    scores: Dict[AbilityScoreType, int] = field(
        default_factory=lambda: {ability: 10 for ability in AbilityScoreType}
    )

    @classmethod
    def from_dict(cls, data: Dict[str, int]) -> "AbilityScores":
        """Build from a mapping keyed by ability abbreviation or enum name."""
        scores = {}
        for key, value in data.items():
            if isinstance(key, AbilityScoreType):
                ability = key
            elif key.upper() in AbilityScoreType.__members__:
                ability = AbilityScoreType[key.upper()]
            else:
                ability = AbilityScoreType(key.upper())
            scores[ability] = int(value)
        return cls(scores={ability: scores.get(ability, 10) for ability in AbilityScoreType})

    def to_dict(self) -> Dict[str, int]:
        return {ability.value: score for ability, score in self.scores.items()}

    def increase(self, increases: Dict[AbilityScoreType, int]) -> None:
        """Add a set of ability score increases to the totals."""
        for ability, value in increases.items():
            self.scores[ability] = self.scores.get(ability, 0) + value

    def score(self, ability: AbilityScoreType) -> int:
        return self.scores.get(ability, 0)


@dataclass
class Character:
    """
    Mutable accumulator for one character build.

    Possessions are kept as insertion-ordered lists so that seeded builds are
    reproducible; uniqueness is enforced on insertion.
    """

    ability_scores: AbilityScores = field(default_factory=AbilityScores)
    level: int = 1
    proficiencies: List[Proficiency] = field(default_factory=list)
    equipment: List[Equipment] = field(default_factory=list)
    languages: List[Language] = field(default_factory=list)
    alignment: Optional[Alignment] = None
    pantheon: Optional[Pantheon] = None
    deity: Optional[Deity] = None
    attitude_influences: List[Attitude] = field(default_factory=list)
    morality_influences: List[Morality] = field(default_factory=list)

    @property
    def proficiency_bonus(self) -> int:
        """Proficiency bonus based on character level."""
        if self.level <= 4:
            return 2
        if self.level <= 8:
            return 3
        if self.level <= 12:
            return 4
        if self.level <= 16:
            return 5
        return 6

    def add_proficiencies(self, proficiencies: Iterable[Proficiency]) -> List[Proficiency]:
        """Add proficiencies, skipping ones already held. Returns what was added."""
        return _extend_unique(self.proficiencies, proficiencies)

    def add_equipment(self, equipment: Iterable[Equipment]) -> List[Equipment]:
        """Add equipment, skipping items already owned. Returns what was added."""
        return _extend_unique(self.equipment, equipment)

    def add_languages(self, languages: Iterable[Language]) -> List[Language]:
        """Add languages, skipping known ones. Returns what was added."""
        return _extend_unique(self.languages, languages)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a plain dictionary for display or serialization."""
        return {
            "level": self.level,
            "ability_scores": self.ability_scores.to_dict(),
            "proficiencies": [str(p) for p in self.proficiencies],
            "equipment": [str(e) for e in self.equipment],
            "languages": [str(lang) for lang in self.languages],
            "alignment": str(self.alignment) if self.alignment else None,
            "pantheon": self.pantheon.name if self.pantheon else None,
            "deity": self.deity.name if self.deity else None,
        }


def _extend_unique(target: list, items: Iterable) -> list:
    added = []
    for item in items:
        if item not in target:
            target.append(item)
            added.append(item)
    return added
