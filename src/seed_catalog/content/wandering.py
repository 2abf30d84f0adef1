"""Wandering-only creatures and the per-biome encounter tables that spawn them.

Modeled on wilderness wandering-monster tables: common beasts and brigands
carry the weight, rare dangerous entries (trolls, winter wolves) are gated
behind higher challenge ratings.
"""

from __future__ import annotations

from ..core.encounters import EncounterSelector
from ..core.module import ContentModule
from ..core.normalize import GENERIC, INDOOR, content_id
from ..core.types import ContentKind, EncounterEntry

MODULE_ID = "wandering"

# suffix, name, description, hp, damage, dice, cr, xp, aggressive, gold
_CREATURES = (
    ("wolf", "Wolf", "A lean gray wolf with hungry yellow eyes.", 11, 5, "2d4", 2, 25, True, (0, 0)),
    ("bandit", "Bandit", "A rough-looking brigand with a notched sword.", 16, 6, "1d8+2", 3, 35, True, (2, 15)),
    ("wild-boar", "Wild Boar", "A massive tusked boar, snorting aggressively.", 14, 6, "2d6", 2, 30, True, (0, 0)),
    (
        "giant-spider",
        "Giant Spider",
        "A dog-sized spider drops from the canopy, venom dripping from its fangs.",
        18, 7, "1d8+3", 3, 40, True, (0, 0),
    ),
    ("bear", "Bear", "A massive brown bear rears up on its hind legs.", 30, 8, "2d6+2", 4, 60, True, (0, 0)),
    ("hawk", "Hawk", "A fierce hunting hawk dives at you with razor talons.", 6, 3, "1d4+1", 1, 10, True, (0, 0)),
    (
        "mountain-goat",
        "Mountain Goat",
        "A territorial mountain goat lowers its curved horns.",
        12, 4, "1d6+1", 1, 15, False, (0, 0),
    ),
    (
        "troll",
        "Troll",
        "A gangly green-skinned troll lumbers toward you, regenerating wounds as it moves.",
        45, 10, "2d8+2", 6, 100, True, (5, 30),
    ),
    ("giant-lizard", "Giant Lizard", "A huge sun-basking lizard hisses and charges.", 20, 7, "1d10+2", 3, 40, True, (0, 0)),
    (
        "scorpion",
        "Giant Scorpion",
        "A man-sized scorpion skitters across the sand, pincers clicking.",
        24, 8, "2d6+1", 4, 50, True, (0, 0),
    ),
    (
        "winter-wolf",
        "Winter Wolf",
        "A white-furred wolf exhales a plume of frost. Its eyes gleam with unnatural intelligence.",
        28, 9, "2d6+3", 5, 75, True, (0, 0),
    ),
    (
        "lizardman",
        "Lizardman",
        "A scaled humanoid wielding a crude spear rises from the murky water.",
        22, 7, "1d8+3", 3, 40, True, (1, 8),
    ),
    (
        "giant-insect",
        "Giant Dragonfly",
        "A dragonfly the size of a dog buzzes menacingly, compound eyes tracking your movement.",
        10, 4, "1d6", 2, 20, True, (0, 0),
    ),
    ("nomad", "Desert Nomad", "A sun-weathered warrior in flowing robes, scimitar drawn.", 20, 7, "1d8+3", 3, 35, False, (3, 20)),
    (
        "eagle",
        "Giant Eagle",
        "A massive eagle with a wingspan wider than a man is tall swoops down from the peaks.",
        16, 6, "1d8+2", 3, 35, False, (0, 0),
    ),
)


def wandering_module() -> ContentModule:
    module = ContentModule(
        MODULE_ID,
        "Wandering Monsters",
        description="Creatures that roam the wilderness between adventure sites.",
        attribution="OD&D Vol III wilderness encounters",
        level_min=1,
        level_max=10,
    )
    for suffix, name, description, hp, damage, dice, cr, xp, aggressive, gold in _CREATURES:
        module.creature(
            suffix,
            name=name,
            description=description,
            max_hp=hp,
            base_damage=damage,
            damage_dice=dice,
            level=cr,
            challenge_rating=cr,
            experience_value=xp,
            is_aggressive=aggressive,
            gold=gold,
        )
    return module


def _entry(suffix: str, weight: int, min_cr: int, max_cr: int, count: tuple[int, int] = (1, 1)) -> EncounterEntry:
    return EncounterEntry(
        creature_id=content_id(ContentKind.CREATURE, MODULE_ID, suffix),
        weight=weight,
        min_count=count[0],
        max_count=count[1],
        min_challenge_rating=min_cr,
        max_challenge_rating=max_cr,
    )


def encounter_tables() -> dict[str, list[EncounterEntry]]:
    forest = [
        _entry("wolf", 3, 1, 5, (1, 3)),
        _entry("giant-spider", 3, 2, 6),
        _entry("bear", 2, 3, 8),
        _entry("bandit", 2, 1, 5, (1, 3)),
        _entry("wild-boar", 2, 1, 4),
    ]
    desert = [
        _entry("scorpion", 3, 2, 7),
        _entry("nomad", 2, 1, 5, (1, 3)),
        _entry("giant-lizard", 3, 2, 6),
        _entry("hawk", 2, 1, 3),
    ]
    cold = [
        _entry("winter-wolf", 3, 3, 10),
        _entry("wolf", 3, 1, 5, (1, 3)),
        _entry("bear", 2, 3, 8),
    ]
    return {
        "GRASSLAND": [
            _entry("bandit", 3, 1, 5),
            _entry("wild-boar", 3, 1, 4),
            _entry("wolf", 2, 1, 4, (1, 3)),
            _entry("hawk", 2, 1, 2),
            _entry("bandit", 1, 3, 8, (2, 4)),
        ],
        "HILLS": [
            _entry("bandit", 2, 1, 5),
            _entry("wild-boar", 2, 1, 4),
            _entry("wolf", 3, 1, 4, (1, 2)),
            _entry("mountain-goat", 2, 1, 3),
            _entry("troll", 1, 4, 10),
        ],
        "SHRUBLAND": [
            _entry("bandit", 2, 1, 5),
            _entry("wild-boar", 3, 1, 4),
            _entry("wolf", 2, 1, 4, (1, 2)),
            _entry("giant-lizard", 2, 2, 5),
        ],
        "TEMPERATE_DECIDUOUS_FOREST": forest,
        "TEMPERATE_RAIN_FOREST": forest,
        "TROPICAL_SEASONAL_FOREST": forest + [_entry("giant-insect", 2, 1, 4)],
        "TROPICAL_RAIN_FOREST": forest
        + [
            _entry("giant-spider", 2, 2, 6, (1, 2)),
            _entry("giant-insect", 2, 1, 4),
        ],
        "TAIGA": [
            _entry("wolf", 3, 1, 5, (1, 3)),
            _entry("bear", 3, 3, 8),
            _entry("winter-wolf", 1, 4, 10),
        ],
        "MOUNTAIN": [
            _entry("mountain-goat", 3, 1, 3),
            _entry("eagle", 2, 1, 5),
            _entry("troll", 2, 4, 10),
            _entry("wolf", 2, 1, 5, (1, 2)),
            _entry("bear", 1, 3, 8),
        ],
        "BARE": [
            _entry("mountain-goat", 3, 1, 3),
            _entry("eagle", 2, 1, 5),
            _entry("troll", 1, 4, 10),
        ],
        "MARSH": [
            _entry("lizardman", 3, 2, 6, (1, 2)),
            _entry("giant-insect", 3, 1, 4, (1, 3)),
            _entry("giant-spider", 2, 2, 6),
            _entry("wolf", 1, 1, 4),
        ],
        "TEMPERATE_DESERT": desert,
        "SUBTROPICAL_DESERT": desert,
        "SCORCHED": desert + [_entry("scorpion", 2, 3, 8, (1, 2))],
        "TUNDRA": cold,
        "SNOW": cold,
        INDOOR: [
            _entry("giant-spider", 2, 2, 6),
            _entry("giant-insect", 2, 1, 4),
        ],
        GENERIC: [
            _entry("wolf", 3, 1, 4, (1, 2)),
            _entry("bandit", 2, 1, 5),
            _entry("hawk", 2, 1, 2),
        ],
    }


def register_wandering_encounters(selector: EncounterSelector) -> int:
    tables = encounter_tables()
    for key, entries in tables.items():
        selector.register(key, entries)
    return len(tables)
