from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, Iterator, NamedTuple, Optional, Protocol, Sequence


class ContentKind(str, Enum):
    ABILITY = "ability"
    ITEM = "item"
    LOOT_TABLE = "loot"
    CREATURE = "creature"
    LOCATION = "location"
    CHEST = "chest"
    POOL = "pool"
    TRAP = "trap"
    FACTION = "faction"
    FACTION_RELATION = "faction_relation"


PROVISION_ORDER: tuple[ContentKind, ...] = (
    ContentKind.ABILITY,
    ContentKind.ITEM,
    ContentKind.LOOT_TABLE,
    ContentKind.CREATURE,
    ContentKind.LOCATION,
    ContentKind.CHEST,
    ContentKind.POOL,
    ContentKind.TRAP,
    ContentKind.FACTION,
    ContentKind.FACTION_RELATION,
)

Reference = tuple[ContentKind, str]


class RandomSource(Protocol):
    def random(self) -> float:
        ...

    def randint(self, a: int, b: int) -> int:
        ...


class Drop(NamedTuple):
    item_id: str
    quantity: int


class Spawn(NamedTuple):
    creature_id: str
    count: int


@dataclass(frozen=True)
class LootEntry:
    item_id: str
    chance: float = 1.0
    min_qty: int = 1
    max_qty: int = 1


@dataclass(frozen=True)
class LootTable:
    id: str
    name: str
    entries: tuple[LootEntry, ...] = ()
    description: str = ""

    kind: ClassVar[ContentKind] = ContentKind.LOOT_TABLE

    def __post_init__(self) -> None:
        object.__setattr__(self, "entries", tuple(self.entries))

    def references(self) -> Iterator[Reference]:
        for entry in self.entries:
            yield ContentKind.ITEM, entry.item_id


@dataclass(frozen=True)
class EncounterEntry:
    creature_id: str
    weight: int = 1
    min_count: int = 1
    max_count: int = 1
    min_challenge_rating: int = 1
    max_challenge_rating: int = 20

    def allows(self, challenge_rating: int) -> bool:
        return self.min_challenge_rating <= challenge_rating <= self.max_challenge_rating


@dataclass
class Ability:
    id: str
    name: str = ""
    description: str = ""
    class_id: Optional[str] = None
    ability_type: str = "combat"
    target_type: str = "single_enemy"
    range: int = 5
    cooldown_type: str = "none"
    cooldown_rounds: int = 0
    base_damage: int = 0
    duration_rounds: int = 0
    effects: list[dict[str, Any]] = field(default_factory=list)
    mana_cost: int = 0
    stamina_cost: int = 0

    kind: ClassVar[ContentKind] = ContentKind.ABILITY

    def references(self) -> Iterator[Reference]:
        return iter(())


@dataclass
class Item:
    id: str
    name: str = ""
    description: str = ""
    value: int = 0
    weight: int = 1
    equipment_type: Optional[str] = None
    equipment_slot: Optional[str] = None
    stat_bonuses: dict[str, int] = field(default_factory=dict)
    feature_ids: list[str] = field(default_factory=list)
    ability_ids: list[str] = field(default_factory=list)

    kind: ClassVar[ContentKind] = ContentKind.ITEM

    def references(self) -> Iterator[Reference]:
        for ability_id in self.ability_ids:
            yield ContentKind.ABILITY, ability_id


@dataclass
class Creature:
    id: str
    name: str = ""
    description: str = ""
    max_hp: int = 10
    base_damage: int = 5
    damage_dice: Optional[str] = None
    level: int = 1
    experience_value: int = 10
    challenge_rating: int = 1
    is_aggressive: bool = False
    min_gold_drop: int = 0
    max_gold_drop: int = 0
    loot_table_id: Optional[str] = None
    ability_ids: list[str] = field(default_factory=list)
    item_ids: list[str] = field(default_factory=list)
    feature_ids: list[str] = field(default_factory=list)
    attribution: str = ""

    kind: ClassVar[ContentKind] = ContentKind.CREATURE

    def references(self) -> Iterator[Reference]:
        for ability_id in self.ability_ids:
            yield ContentKind.ABILITY, ability_id
        for item_id in self.item_ids:
            yield ContentKind.ITEM, item_id
        if self.loot_table_id:
            yield ContentKind.LOOT_TABLE, self.loot_table_id


@dataclass(frozen=True)
class Exit:
    location_id: str
    direction: str


@dataclass
class Location:
    id: str
    name: str = ""
    description: str = ""
    area_id: Optional[str] = None
    grid_x: Optional[int] = None
    grid_y: Optional[int] = None
    grid_z: int = 0
    location_type: str = "indoor"
    biome: Optional[str] = None
    lock_level: Optional[int] = None
    locked_by: Optional[str] = None
    creature_ids: list[str] = field(default_factory=list)
    item_ids: list[str] = field(default_factory=list)
    feature_ids: list[str] = field(default_factory=list)
    exits: list[Exit] = field(default_factory=list)

    kind: ClassVar[ContentKind] = ContentKind.LOCATION

    def references(self) -> Iterator[Reference]:
        for creature_id in self.creature_ids:
            yield ContentKind.CREATURE, creature_id
        for item_id in self.item_ids:
            yield ContentKind.ITEM, item_id
        for exit_ in self.exits:
            yield ContentKind.LOCATION, exit_.location_id


@dataclass
class Chest:
    id: str
    location_id: str
    name: str = ""
    description: str = ""
    guardian_creature_id: Optional[str] = None
    is_locked: bool = False
    lock_difficulty: int = 1
    bash_difficulty: int = 2
    loot_table_id: Optional[str] = None
    gold_amount: int = 0

    kind: ClassVar[ContentKind] = ContentKind.CHEST

    def references(self) -> Iterator[Reference]:
        yield ContentKind.LOCATION, self.location_id
        if self.guardian_creature_id:
            yield ContentKind.CREATURE, self.guardian_creature_id
        if self.loot_table_id:
            yield ContentKind.LOOT_TABLE, self.loot_table_id


@dataclass
class Pool:
    id: str
    location_id: str
    name: str = ""
    description: str = ""
    liquid_color: str = "clear"
    liquid_appearance: str = "still"
    effect_type: str = "empty"
    effect_data: dict[str, Any] = field(default_factory=dict)
    uses_per_day: int = 0
    is_one_time_use: bool = False
    is_hidden: bool = False
    identify_difficulty: int = 0

    kind: ClassVar[ContentKind] = ContentKind.POOL

    def references(self) -> Iterator[Reference]:
        yield ContentKind.LOCATION, self.location_id
        if self.effect_data.get("teleport_location_id"):
            yield ContentKind.LOCATION, self.effect_data["teleport_location_id"]
        if self.effect_data.get("contains_item_id"):
            yield ContentKind.ITEM, self.effect_data["contains_item_id"]


@dataclass
class Trap:
    id: str
    location_id: str
    name: str = ""
    description: str = ""
    trap_type: str = "pit"
    trigger_type: str = "movement"
    detect_difficulty: int = 2
    disarm_difficulty: int = 2
    effect_data: dict[str, Any] = field(default_factory=dict)
    is_hidden: bool = True
    is_armed: bool = True
    resets_after_rounds: int = 0

    kind: ClassVar[ContentKind] = ContentKind.TRAP

    def references(self) -> Iterator[Reference]:
        yield ContentKind.LOCATION, self.location_id
        if self.effect_data.get("teleport_location_id"):
            yield ContentKind.LOCATION, self.effect_data["teleport_location_id"]
        for creature_id in self.effect_data.get("alerts_creature_ids") or ():
            yield ContentKind.CREATURE, creature_id


@dataclass
class Faction:
    id: str
    name: str = ""
    description: str = ""
    home_location_id: Optional[str] = None
    hostility_level: int = 50
    can_negotiate: bool = True
    leader_creature_id: Optional[str] = None
    territory_location_ids: list[str] = field(default_factory=list)
    enemy_faction_ids: list[str] = field(default_factory=list)
    ally_faction_ids: list[str] = field(default_factory=list)
    goals: list[str] = field(default_factory=list)
    trade_good_ids: list[str] = field(default_factory=list)
    tribute_item_ids: list[str] = field(default_factory=list)

    kind: ClassVar[ContentKind] = ContentKind.FACTION

    def references(self) -> Iterator[Reference]:
        if self.home_location_id:
            yield ContentKind.LOCATION, self.home_location_id
        if self.leader_creature_id:
            yield ContentKind.CREATURE, self.leader_creature_id
        for location_id in self.territory_location_ids:
            yield ContentKind.LOCATION, location_id
        for faction_id in (*self.enemy_faction_ids, *self.ally_faction_ids):
            yield ContentKind.FACTION, faction_id
        for item_id in (*self.trade_good_ids, *self.tribute_item_ids):
            yield ContentKind.ITEM, item_id


@dataclass
class FactionRelation:
    faction_id: str
    target_faction_id: str
    relationship_level: int = 0

    kind: ClassVar[ContentKind] = ContentKind.FACTION_RELATION

    @property
    def id(self) -> str:
        return f"{self.faction_id}:{self.target_faction_id}"

    def references(self) -> Iterator[Reference]:
        yield ContentKind.FACTION, self.faction_id
        yield ContentKind.FACTION, self.target_faction_id


@dataclass(frozen=True)
class ContentBatch:
    kind: ContentKind
    entities: tuple[Any, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "kind", ContentKind(self.kind))
        object.__setattr__(self, "entities", tuple(self.entities))

    @property
    def name(self) -> str:
        return self.kind.value

    def __len__(self) -> int:
        return len(self.entities)


@dataclass
class BatchCount:
    inserted: int = 0
    existing: int = 0


@dataclass
class ProvisionReport:
    module_id: str
    status: str
    counts: dict[ContentKind, BatchCount] = field(default_factory=dict)

    @property
    def skipped(self) -> bool:
        return self.status == "skipped"

    @property
    def inserted_total(self) -> int:
        return sum(c.inserted for c in self.counts.values())

    @property
    def existing_total(self) -> int:
        return sum(c.existing for c in self.counts.values())

    def summary(self) -> str:
        parts = [
            f"{kind.value}={count.inserted}/{count.inserted + count.existing}"
            for kind, count in self.counts.items()
        ]
        return ", ".join(parts) or "no content"


@dataclass(frozen=True)
class EncounterRoll:
    requested_key: str
    table_key: str
    used_fallback: bool
    off_budget: bool
    entry: Optional[EncounterEntry]
    spawns: Sequence[Spawn] = ()


@dataclass(frozen=True)
class LootResult:
    """Gold and item drops from one kill or one opened chest."""

    source_id: str
    gold: int = 0
    drops: tuple[Drop, ...] = ()

    @property
    def empty(self) -> bool:
        return self.gold <= 0 and not self.drops
