from __future__ import annotations

from typing import Any, Iterable, Mapping, Optional

from .errors import DuplicateContentError, InvalidContentError
from .normalize import content_id
from .types import (
    PROVISION_ORDER,
    Ability,
    Chest,
    ContentBatch,
    ContentKind,
    Creature,
    Exit,
    Faction,
    FactionRelation,
    Item,
    Location,
    LootEntry,
    LootTable,
    Pool,
    ProvisionReport,
    Trap,
)

EXIT_DIRECTIONS = frozenset(
    {
        "north",
        "south",
        "east",
        "west",
        "northeast",
        "northwest",
        "southeast",
        "southwest",
        "up",
        "down",
        "enter",
    }
)

HOSTILITY_LEVELS = {"peaceful": 20, "neutral": 50, "hostile": 80}


class ContentModule:
    """Accumulates the content of one adventure module.

    Each builder method takes a module-relative suffix plus keyword fields and
    returns the finished entity, with its id composed as
    ``<kind>-<module_id>-<suffix>``. References to other content of the same
    module are given by suffix (``abilities=["bite"]``); references into other
    modules use the ``*_ids`` keywords with full ids.

    Usage::

        module = ContentModule("b1", "In Search of the Unknown", level_min=1, level_max=3)
        module.item("rat-tail", name="Rat Tail", value=1)
        module.loot_table("giant-rat", name="Giant Rat", entries=[module.loot_entry("rat-tail", chance=0.5)])
        module.creature("giant-rat", name="Giant Rat", loot_table="giant-rat")
        module.location("cellar", name="Cellar", creatures=["giant-rat"], exits={"up": "kitchen"})
        module.seed(provisioner)
    """

    def __init__(
        self,
        module_id: str,
        name: str,
        *,
        description: str = "",
        attribution: str = "",
        level_min: int = 1,
        level_max: int = 1,
    ):
        module_id = (module_id or "").strip()
        if not module_id:
            raise InvalidContentError("module id must not be empty")
        if level_max < level_min:
            raise InvalidContentError(f"{module_id}: level range {level_min}..{level_max} is empty")
        self.module_id = module_id
        self.name = name
        self.description = description
        self.attribution = attribution
        self.level_min = level_min
        self.level_max = level_max
        self._content: dict[ContentKind, dict[str, Any]] = {kind: {} for kind in PROVISION_ORDER}

    @property
    def area_id(self) -> str:
        return self.module_id

    # ------------------------------------------------------------------
    # Ids
    # ------------------------------------------------------------------

    def ability_id(self, suffix: str) -> str:
        return content_id(ContentKind.ABILITY, self.module_id, suffix)

    def item_id(self, suffix: str) -> str:
        return content_id(ContentKind.ITEM, self.module_id, suffix)

    def loot_id(self, suffix: str) -> str:
        return content_id(ContentKind.LOOT_TABLE, self.module_id, suffix)

    def creature_id(self, suffix: str) -> str:
        return content_id(ContentKind.CREATURE, self.module_id, suffix)

    def location_id(self, suffix: str) -> str:
        return content_id(ContentKind.LOCATION, self.module_id, suffix)

    def chest_id(self, suffix: str) -> str:
        return content_id(ContentKind.CHEST, self.module_id, suffix)

    def pool_id(self, suffix: str) -> str:
        return content_id(ContentKind.POOL, self.module_id, suffix)

    def trap_id(self, suffix: str) -> str:
        return content_id(ContentKind.TRAP, self.module_id, suffix)

    def faction_id(self, suffix: str) -> str:
        return content_id(ContentKind.FACTION, self.module_id, suffix)

    # ------------------------------------------------------------------
    # Builders
    # ------------------------------------------------------------------

    def ability(self, suffix: str, **fields: Any) -> Ability:
        return self._add(Ability(id=self.ability_id(suffix), **fields))

    def item(
        self,
        suffix: str,
        *,
        abilities: Iterable[str] = (),
        ability_ids: Iterable[str] = (),
        **fields: Any,
    ) -> Item:
        refs = [self.ability_id(s) for s in abilities] + list(ability_ids)
        return self._add(Item(id=self.item_id(suffix), ability_ids=refs, **fields))

    def loot_entry(self, item_suffix: str, chance: float = 1.0, min_qty: int = 1, max_qty: int | None = None) -> LootEntry:
        return LootEntry(
            item_id=self.item_id(item_suffix),
            chance=chance,
            min_qty=min_qty,
            max_qty=min_qty if max_qty is None else max_qty,
        )

    def loot_table(
        self,
        suffix: str,
        *,
        name: str = "",
        entries: Iterable[LootEntry] = (),
        description: str = "",
    ) -> LootTable:
        table = LootTable(id=self.loot_id(suffix), name=name, entries=tuple(entries), description=description)
        return self._add(table)

    def creature(
        self,
        suffix: str,
        *,
        abilities: Iterable[str] = (),
        ability_ids: Iterable[str] = (),
        items: Iterable[str] = (),
        item_ids: Iterable[str] = (),
        loot_table: Optional[str] = None,
        loot_table_id: Optional[str] = None,
        gold: tuple[int, int] | None = None,
        **fields: Any,
    ) -> Creature:
        if loot_table is not None and loot_table_id is not None:
            raise InvalidContentError(f"creature {suffix}: give loot_table or loot_table_id, not both")
        if gold is not None:
            fields["min_gold_drop"], fields["max_gold_drop"] = gold
        fields.setdefault("attribution", self.attribution)
        creature = Creature(
            id=self.creature_id(suffix),
            ability_ids=[self.ability_id(s) for s in abilities] + list(ability_ids),
            item_ids=[self.item_id(s) for s in items] + list(item_ids),
            loot_table_id=self.loot_id(loot_table) if loot_table is not None else loot_table_id,
            **fields,
        )
        if creature.max_gold_drop < creature.min_gold_drop:
            raise InvalidContentError(f"{creature.id}: gold range {creature.min_gold_drop}..{creature.max_gold_drop} is empty")
        return self._add(creature)

    def location(
        self,
        suffix: str,
        *,
        creatures: Iterable[str] = (),
        creature_ids: Iterable[str] = (),
        items: Iterable[str] = (),
        item_ids: Iterable[str] = (),
        exits: Mapping[str, str] | None = None,
        exit_ids: Mapping[str, str] | None = None,
        position: tuple[int, ...] | None = None,
        **fields: Any,
    ) -> Location:
        exit_list = [Exit(self.location_id(target), direction) for direction, target in (exits or {}).items()]
        exit_list += [Exit(target, direction) for direction, target in (exit_ids or {}).items()]
        for exit_ in exit_list:
            if exit_.direction not in EXIT_DIRECTIONS:
                raise InvalidContentError(f"location {suffix}: unknown exit direction {exit_.direction!r}")
        if position is not None:
            if not 2 <= len(position) <= 3:
                raise InvalidContentError(f"location {suffix}: position must be (x, y) or (x, y, z), got {position!r}")
            fields["grid_x"], fields["grid_y"] = position[0], position[1]
            fields["grid_z"] = position[2] if len(position) > 2 else 0
        fields.setdefault("area_id", self.area_id)
        location = Location(
            id=self.location_id(suffix),
            creature_ids=[self.creature_id(s) for s in creatures] + list(creature_ids),
            item_ids=[self.item_id(s) for s in items] + list(item_ids),
            exits=exit_list,
            **fields,
        )
        return self._add(location)

    def chest(
        self,
        suffix: str,
        *,
        location: str,
        guardian: Optional[str] = None,
        loot_table: Optional[str] = None,
        **fields: Any,
    ) -> Chest:
        chest = Chest(
            id=self.chest_id(suffix),
            location_id=self.location_id(location),
            guardian_creature_id=self.creature_id(guardian) if guardian else None,
            loot_table_id=self.loot_id(loot_table) if loot_table else None,
            **fields,
        )
        return self._add(chest)

    def pool(
        self,
        suffix: str,
        *,
        location: str,
        effect_type: str = "empty",
        effect: Mapping[str, Any] | None = None,
        teleport_to: Optional[str] = None,
        contains_item: Optional[str] = None,
        **fields: Any,
    ) -> Pool:
        effect_data = dict(effect or {})
        if teleport_to:
            effect_type = "teleport"
            effect_data["teleport_location_id"] = self.location_id(teleport_to)
        if contains_item:
            effect_data["contains_item_id"] = self.item_id(contains_item)
        pool = Pool(
            id=self.pool_id(suffix),
            location_id=self.location_id(location),
            effect_type=effect_type,
            effect_data=effect_data,
            **fields,
        )
        return self._add(pool)

    def trap(
        self,
        suffix: str,
        *,
        location: str,
        effect: Mapping[str, Any] | None = None,
        teleport_to: Optional[str] = None,
        alerts: Iterable[str] = (),
        **fields: Any,
    ) -> Trap:
        effect_data = dict(effect or {})
        if teleport_to:
            fields.setdefault("trap_type", "teleport")
            effect_data["teleport_location_id"] = self.location_id(teleport_to)
        alert_ids = [self.creature_id(s) for s in alerts]
        if alert_ids:
            fields.setdefault("trap_type", "alarm")
            effect_data["alerts_creature_ids"] = alert_ids
        trap = Trap(
            id=self.trap_id(suffix),
            location_id=self.location_id(location),
            effect_data=effect_data,
            **fields,
        )
        return self._add(trap)

    def faction(
        self,
        suffix: str,
        *,
        home: Optional[str] = None,
        leader: Optional[str] = None,
        territory: Iterable[str] = (),
        enemies: Iterable[str] = (),
        allies: Iterable[str] = (),
        trade_goods: Iterable[str] = (),
        tribute_items: Iterable[str] = (),
        disposition: Optional[str] = None,
        **fields: Any,
    ) -> Faction:
        if disposition is not None:
            if disposition not in HOSTILITY_LEVELS:
                raise InvalidContentError(f"faction {suffix}: unknown disposition {disposition!r}")
            fields["hostility_level"] = HOSTILITY_LEVELS[disposition]
        faction = Faction(
            id=self.faction_id(suffix),
            home_location_id=self.location_id(home) if home else None,
            leader_creature_id=self.creature_id(leader) if leader else None,
            territory_location_ids=[self.location_id(s) for s in territory],
            enemy_faction_ids=[self.faction_id(s) for s in enemies],
            ally_faction_ids=[self.faction_id(s) for s in allies],
            trade_good_ids=[self.item_id(s) for s in trade_goods],
            tribute_item_ids=[self.item_id(s) for s in tribute_items],
            **fields,
        )
        if not 0 <= faction.hostility_level <= 100:
            raise InvalidContentError(f"{faction.id}: hostility {faction.hostility_level} outside 0..100")
        return self._add(faction)

    def faction_relation(self, faction: str, target: str, level: int) -> FactionRelation:
        relation = FactionRelation(
            faction_id=self.faction_id(faction),
            target_faction_id=self.faction_id(target),
            relationship_level=level,
        )
        return self._add(relation)

    # ------------------------------------------------------------------
    # Seeding
    # ------------------------------------------------------------------

    def batches(self) -> list[ContentBatch]:
        return [
            ContentBatch(kind, tuple(self._content[kind].values()))
            for kind in PROVISION_ORDER
            if self._content[kind]
        ]

    def entities(self, kind: ContentKind) -> list[Any]:
        return list(self._content[ContentKind(kind)].values())

    def seed(self, provisioner: Any) -> ProvisionReport:
        return provisioner.provision(self.module_id, self.batches())

    def _add(self, entity: Any) -> Any:
        bucket = self._content[entity.kind]
        if entity.id in bucket:
            raise DuplicateContentError(entity.id)
        bucket[entity.id] = entity
        return entity

    def __repr__(self) -> str:
        counts = ", ".join(f"{kind.value}={len(v)}" for kind, v in self._content.items() if v)
        return f"ContentModule({self.module_id!r}, {counts or 'empty'})"
