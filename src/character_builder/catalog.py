"""
Static content tables the selection engine enumerates.

The engine never reaches for these tables on its own: a ``Catalog`` is handed to each
selection surface at construction time. ``default_catalog()`` builds the standard
tables once per process; tests and callers are free to build smaller ones.
"""

from dataclasses import dataclass
from functools import lru_cache
from typing import Dict, List, Optional, Tuple

from .filters import weapon_predicate
from .models import (
    Alignment,
    Armor,
    ArmorType,
    Attitude,
    Deity,
    Domain,
    Gear,
    Language,
    LanguageType,
    Morality,
    Pantheon,
    Skill,
    Tool,
    ToolKind,
    Vehicle,
    VehicleProficiency,
    Weapon,
    WeaponCategory,
    WeaponClassification,
)


@dataclass(frozen=True)
class Catalog:
    """Immutable, total enumerations for every category the engine draws from."""

    skills: Tuple[Skill, ...] = tuple(Skill)
    armor: Tuple[Armor, ...] = ()
    weapons: Tuple[Weapon, ...] = ()
    tools: Tuple[Tool, ...] = ()
    vehicles: Tuple[Vehicle, ...] = ()
    holy_symbols: Tuple[Gear, ...] = ()
    languages: Tuple[Language, ...] = ()
    pantheons: Tuple[Pantheon, ...] = ()
    # (language name, pantheon names) pairs; speakers may worship these pantheons
    language_pantheons: Tuple[Tuple[str, Tuple[str, ...]], ...] = ()

    def tools_of_kind(self, kind: ToolKind) -> Tuple[Tool, ...]:
        return tuple(tool for tool in self.tools if tool.kind == kind)

    def weapons_matching(
        self,
        category: Optional[WeaponCategory] = None,
        classification: Optional[WeaponClassification] = None,
    ) -> Tuple[Weapon, ...]:
        """Weapons in the given category and/or classification (both optional)."""
        matches = weapon_predicate(category, classification)
        return tuple(weapon for weapon in self.weapons if matches(weapon))

    def languages_of_type(self, language_type: LanguageType) -> Tuple[Language, ...]:
        return tuple(lang for lang in self.languages if lang.language_type == language_type)

    def pantheon(self, name: str) -> Pantheon:
        """Look up a pantheon by name."""
        for pantheon in self.pantheons:
            if pantheon.name == name:
                return pantheon
        raise KeyError(f"Unknown pantheon: {name}")

    def pantheons_for_language(self, language: Language) -> Tuple[str, ...]:
        for name, pantheons in self.language_pantheons:
            if name == language.name:
                return pantheons
        return ()

    def find_language(self, name: str) -> Language:
        for language in self.languages:
            if language.name == name:
                return language
        raise KeyError(f"Unknown language: {name}")


_ARMOR = [
    ("Padded armor", ArmorType.LIGHT),
    ("Leather armor", ArmorType.LIGHT),
    ("Studded leather armor", ArmorType.LIGHT),
    ("Hide armor", ArmorType.MEDIUM),
    ("Chain shirt", ArmorType.MEDIUM),
    ("Scale mail", ArmorType.MEDIUM),
    ("Breastplate", ArmorType.MEDIUM),
    ("Half plate armor", ArmorType.MEDIUM),
    ("Ring mail", ArmorType.HEAVY),
    ("Chain mail", ArmorType.HEAVY),
    ("Splint armor", ArmorType.HEAVY),
    ("Plate armor", ArmorType.HEAVY),
    ("Shield", ArmorType.SHIELD),
]

_SIMPLE_MELEE = [
    "Club", "Dagger", "Greatclub", "Handaxe", "Javelin", "Light hammer", "Mace",
    "Quarterstaff", "Sickle", "Spear",
]
_SIMPLE_RANGED = ["Crossbow, light", "Dart", "Shortbow", "Sling"]
_MARTIAL_MELEE = [
    "Battleaxe", "Flail", "Glaive", "Greataxe", "Greatsword", "Halberd", "Lance",
    "Longsword", "Maul", "Morningstar", "Pike", "Rapier", "Scimitar", "Shortsword",
    "Trident", "War pick", "Warhammer", "Whip",
]
_MARTIAL_RANGED = ["Blowgun", "Crossbow, hand", "Crossbow, heavy", "Longbow", "Net"]

_TOOLS: Dict[ToolKind, List[str]] = {
    ToolKind.ARTISANS_TOOLS: [
        "Alchemist's Supplies", "Brewer's Supplies", "Calligrapher's Supplies",
        "Carpenter's Tools", "Cartographer's Tools", "Cobbler's Tools", "Cook's Utensils",
        "Glassblower's Tools", "Jeweler's Tools", "Leatherworker's Tools", "Mason's Tools",
        "Painter's Supplies", "Potter's Tools", "Smith's Tools", "Tinker's Tools",
        "Weaver's Tools", "Woodcarver's Tools",
    ],
    ToolKind.GAMING_SET: [
        "Dice Set", "Dragonchess Set", "Playing Card Set", "Three-Dragon Ante Set",
    ],
    ToolKind.MUSICAL_INSTRUMENT: [
        "Bagpipes", "Birdpipes", "Drum", "Dulcimer", "Flute", "Glaur", "Hand Drum", "Horn",
        "Longhorn", "Lute", "Lyre", "Pan Flute", "Shawm", "Songhorn", "Tantan", "Thelarr",
        "Tocken", "Viol", "Wargong", "Yarting", "Zulkoon",
    ],
    ToolKind.OTHER: [
        "Disguise Kit", "Forgery Kit", "Herbalism Kit", "Navigator's Tools",
        "Poisoner's Kit", "Thieves' Tools",
    ],
}

_VEHICLES = [
    ("Camel", VehicleProficiency.LAND),
    ("Donkey", VehicleProficiency.LAND),
    ("Draft horse", VehicleProficiency.LAND),
    ("Riding horse", VehicleProficiency.LAND),
    ("Cart", VehicleProficiency.LAND),
    ("Wagon", VehicleProficiency.LAND),
    ("Keelboat", VehicleProficiency.WATER),
    ("Rowboat", VehicleProficiency.WATER),
    ("Sailing ship", VehicleProficiency.WATER),
]

_HOLY_SYMBOLS = ["Amulet", "Emblem", "Reliquary"]

_LANGUAGES = {
    LanguageType.STANDARD: [
        "Common", "Dwarvish", "Elvish", "Giant", "Gnomish", "Goblin", "Halfling", "Orc",
    ],
    LanguageType.EXOTIC: [
        "Abyssal", "Celestial", "Deep Speech", "Draconic", "Gith", "Infernal", "Primordial",
        "Sylvan", "Undercommon",
    ],
}

C, L, N = Attitude.CHAOTIC, Attitude.LAWFUL, Attitude.NEUTRAL
EVIL, GOOD, NEU = Morality.EVIL, Morality.GOOD, Morality.NEUTRAL
D = Domain

# (name, attitude, morality, domains)
_PANTHEONS: Dict[str, list] = {
    "Celtic": [
        ("The Daghdha", C, GOOD, (D.NATURE, D.TRICKERY)),
        ("Arawn", N, EVIL, (D.LIFE, D.DEATH)),
        ("Belenus", N, GOOD, (D.LIGHT,)),
        ("Brigantia", N, GOOD, (D.LIFE,)),
        ("Lugh", C, NEU, (D.KNOWLEDGE, D.LIFE)),
        ("Manannan mac Lir", L, NEU, (D.NATURE, D.TEMPEST)),
        ("Morrigan", C, EVIL, (D.WAR,)),
        ("Oghma", N, GOOD, (D.KNOWLEDGE,)),
        ("Silvanus", N, NEU, (D.NATURE,)),
    ],
    "Duergar": [
        ("Deep Duerra", L, EVIL, (D.ARCANA, D.KNOWLEDGE, D.WAR)),
        ("Laduguer", L, EVIL, (D.ARCANA, D.DEATH, D.FORGE)),
    ],
    "Dwarven": [
        ("Abbathor", N, EVIL, (D.TRICKERY,)),
        ("Berronar Truesilver", L, GOOD, (D.LIFE, D.LIGHT)),
        ("Clangeddin Silverbeard", L, GOOD, (D.WAR,)),
        ("Dugmaren Brightmantle", C, GOOD, (D.KNOWLEDGE,)),
        ("Dumathoin", N, NEU, (D.DEATH, D.GRAVE, D.KNOWLEDGE)),
        ("Gorm Gulthyn", L, GOOD, (D.WAR,)),
        ("Haela Brightaxe", C, GOOD, (D.WAR,)),
        ("Marthammor Duin", N, GOOD, (D.NATURE, D.TRICKERY)),
        ("Moradin", L, GOOD, (D.FORGE, D.KNOWLEDGE)),
        ("Sharindlar", C, GOOD, (D.LIFE,)),
        ("Vergadain", N, NEU, (D.TRICKERY,)),
    ],
    "Elven": [
        ("Aerdrie Faenya", C, GOOD, (D.LIFE, D.TEMPEST, D.TRICKERY)),
        ("Corellon Larethian", C, GOOD, (D.ARCANA, D.LIFE, D.LIGHT, D.WAR)),
        ("Deep Sashelas", C, GOOD, (D.KNOWLEDGE, D.NATURE, D.TEMPEST)),
        ("Erevan Ilesere", C, NEU, (D.TRICKERY,)),
        ("Fenmarel Mestarine", C, NEU, (D.NATURE, D.TRICKERY)),
        ("Hanali Celanil", C, GOOD, (D.LIFE,)),
        ("Labelas Enoreth", C, GOOD, (D.ARCANA, D.KNOWLEDGE, D.LIFE)),
        ("Rillifane Rallathil", C, GOOD, (D.NATURE,)),
        ("Sehanine Moonbow", C, GOOD, (D.GRAVE, D.KNOWLEDGE, D.LIGHT)),
        ("Solonor Thelandira", C, GOOD, (D.NATURE, D.WAR)),
    ],
    "Forgotten Realms": [
        ("Amaunator", L, NEU, (D.LIFE, D.LIGHT)),
        ("Asmodeus", L, EVIL, (D.KNOWLEDGE, D.TRICKERY)),
        ("Auril", N, EVIL, (D.NATURE, D.TEMPEST)),
        ("Azuth", L, NEU, (D.ARCANA, D.KNOWLEDGE)),
        ("Bane", L, EVIL, (D.WAR,)),
        ("Bhaal", N, EVIL, (D.DEATH,)),
        ("Chauntea", N, GOOD, (D.LIFE,)),
        ("Cyric", C, EVIL, (D.TRICKERY,)),
        ("Gond", N, NEU, (D.KNOWLEDGE,)),
        ("Helm", L, NEU, (D.LIFE, D.LIGHT)),
        ("Ilmater", L, GOOD, (D.LIFE,)),
        ("Kelemvor", L, NEU, (D.DEATH,)),
        ("Lathander", N, GOOD, (D.LIFE, D.LIGHT)),
        ("Leira", C, NEU, (D.TRICKERY,)),
        ("Mystra", N, GOOD, (D.ARCANA, D.KNOWLEDGE)),
        ("Oghma", N, NEU, (D.KNOWLEDGE,)),
        ("Selune", C, GOOD, (D.KNOWLEDGE, D.LIFE)),
        ("Shar", N, EVIL, (D.DEATH, D.TRICKERY)),
        ("Talos", C, EVIL, (D.TEMPEST,)),
        ("Tempus", N, NEU, (D.WAR,)),
        ("Tymora", C, GOOD, (D.TRICKERY,)),
        ("Tyr", L, GOOD, (D.WAR,)),
    ],
    "Greek": [
        ("Zeus", N, NEU, (D.TEMPEST,)),
        ("Aphrodite", C, GOOD, (D.LIGHT,)),
        ("Apollo", C, GOOD, (D.KNOWLEDGE, D.LIFE, D.LIGHT)),
        ("Ares", C, EVIL, (D.WAR,)),
        ("Artemis", N, GOOD, (D.LIFE, D.NATURE)),
        ("Athena", L, GOOD, (D.KNOWLEDGE, D.WAR)),
        ("Hades", L, EVIL, (D.DEATH,)),
        ("Hecate", C, EVIL, (D.KNOWLEDGE, D.TRICKERY)),
        ("Hephaestus", N, GOOD, (D.KNOWLEDGE,)),
        ("Hermes", C, GOOD, (D.TRICKERY,)),
        ("Poseidon", C, NEU, (D.TEMPEST,)),
    ],
    "Halfling": [
        ("Arvoreen", L, GOOD, (D.WAR,)),
        ("Brandobaris", N, NEU, (D.TRICKERY,)),
        ("Charmalaine", N, NEU, (D.TRICKERY,)),
        ("Cyrrollalee", L, GOOD, (D.LIFE,)),
        ("Sheela Peryroyl", N, GOOD, (D.NATURE, D.TEMPEST)),
        ("Urogalan", L, NEU, (D.DEATH, D.GRAVE, D.KNOWLEDGE)),
        ("Yondalla", L, GOOD, (D.LIFE,)),
    ],
}


_LANGUAGE_PANTHEONS: Dict[str, Tuple[str, ...]] = {
    "Common": ("Forgotten Realms",),
    "Draconic": ("Dragon", "Kobold", "Lizardfolk"),
    "Dwarvish": ("Dwarven",),
    "Elvish": ("Elven",),
    "Giant": ("Giant",),
    "Gnomish": ("Gnomish",),
    "Goblin": ("Bugbear", "Goblin"),
    "Halfling": ("Halfling",),
    "Orc": ("Orc",),
    "Undercommon": ("Drow", "Duergar"),
}


def _weapons() -> List[Weapon]:
    groups = [
        (_SIMPLE_MELEE, WeaponCategory.SIMPLE, WeaponClassification.MELEE),
        (_SIMPLE_RANGED, WeaponCategory.SIMPLE, WeaponClassification.RANGED),
        (_MARTIAL_MELEE, WeaponCategory.MARTIAL, WeaponClassification.MELEE),
        (_MARTIAL_RANGED, WeaponCategory.MARTIAL, WeaponClassification.RANGED),
    ]
    return [
        Weapon(name, category, classification)
        for names, category, classification in groups
        for name in names
    ]


def _pantheons() -> List[Pantheon]:
    return [
        Pantheon(
            name,
            tuple(
                Deity(deity, Alignment(attitude, morality), domains)
                for deity, attitude, morality, domains in deities
            ),
        )
        for name, deities in _PANTHEONS.items()
    ]


@lru_cache(maxsize=1)
def default_catalog() -> Catalog:
    """Build the standard content tables (once per process)."""
    return Catalog(
        skills=tuple(Skill),
        armor=tuple(Armor(name, armor_type) for name, armor_type in _ARMOR),
        weapons=tuple(_weapons()),
        tools=tuple(Tool(name, kind) for kind, names in _TOOLS.items() for name in names),
        vehicles=tuple(Vehicle(name, proficiency) for name, proficiency in _VEHICLES),
        holy_symbols=tuple(Gear(name) for name in _HOLY_SYMBOLS),
        languages=tuple(
            Language(name, language_type)
            for language_type, names in _LANGUAGES.items()
            for name in names
        ),
        pantheons=tuple(_pantheons()),
        language_pantheons=tuple(_LANGUAGE_PANTHEONS.items()),
    )
