from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable, Iterable

from .errors import InvalidTableError, UnknownLootTableError
from .types import Chest, Creature, Drop, LootResult, LootTable, RandomSource

if TYPE_CHECKING:
    from ..persistence.interfaces import UnitOfWork

logger = logging.getLogger(__name__)


def validate_loot_table(table: LootTable) -> None:
    """Raise ``InvalidTableError`` for entries that can never resolve sanely.

    Zero-chance entries and empty tables are legal but dead, so they only
    produce a warning.
    """
    if not table.entries:
        logger.warning("Loot table %s has no entries and will never drop anything", table.id)
    for index, entry in enumerate(table.entries):
        where = f"{table.id}[{index}] ({entry.item_id})"
        if not entry.item_id:
            raise InvalidTableError(table.id, f"entry {index} has no item id")
        if not 0.0 <= entry.chance <= 1.0:
            raise InvalidTableError(table.id, f"{where} chance {entry.chance} outside 0..1")
        if entry.min_qty < 0:
            raise InvalidTableError(table.id, f"{where} min_qty {entry.min_qty} is negative")
        if entry.max_qty < entry.min_qty:
            raise InvalidTableError(table.id, f"{where} max_qty {entry.max_qty} < min_qty {entry.min_qty}")
        if entry.chance == 0.0:
            logger.warning("Loot entry %s has zero chance and will never drop", where)


def roll_loot(table: LootTable, rng: RandomSource) -> list[Drop]:
    """Evaluate every entry independently: one chance draw each, then a quantity draw per hit."""
    drops: list[Drop] = []
    for entry in table.entries:
        if rng.random() >= entry.chance:
            continue
        if entry.max_qty > entry.min_qty:
            quantity = rng.randint(entry.min_qty, entry.max_qty)
        else:
            quantity = entry.min_qty
        if quantity > 0:
            drops.append(Drop(entry.item_id, quantity))
    return drops


def roll_gold(min_gold: int, max_gold: int, rng: RandomSource) -> int:
    if max_gold > min_gold:
        return rng.randint(min_gold, max_gold)
    return min_gold


class LootResolver:
    def __init__(self, tables: Iterable[LootTable] = ()):
        self._tables: dict[str, LootTable] = {}
        self.register_all(tables)

    def register(self, table: LootTable) -> None:
        validate_loot_table(table)
        # Swap in a new mapping so concurrent readers never see a half-built one.
        tables = dict(self._tables)
        replaced = table.id in tables
        tables[table.id] = table
        self._tables = tables
        logger.debug(
            "%s loot table %s (%d entries)",
            "Replaced" if replaced else "Registered",
            table.id,
            len(table.entries),
        )

    def register_all(self, tables: Iterable[LootTable]) -> int:
        count = 0
        for table in tables:
            self.register(table)
            count += 1
        return count

    def load_from_store(self, uow_factory: Callable[[], "UnitOfWork"]) -> int:
        with uow_factory() as uow:
            tables = uow.loot_tables.list_all()
        count = self.register_all(tables)
        logger.info("Loaded %d loot tables from store", count)
        return count

    def get(self, table_id: str) -> LootTable:
        table = self._tables.get(table_id)
        if table is None:
            raise UnknownLootTableError(table_id)
        return table

    def table_ids(self) -> list[str]:
        return sorted(self._tables)

    def __contains__(self, table_id: object) -> bool:
        return table_id in self._tables

    def __len__(self) -> int:
        return len(self._tables)

    def resolve(self, table: LootTable | str, rng: RandomSource) -> list[Drop]:
        if isinstance(table, str):
            table = self.get(table)
        return roll_loot(table, rng)

    def resolve_kill(self, creature: Creature, rng: RandomSource) -> LootResult:
        """Gold first, then the creature's loot table, as a kill awards them."""
        gold = roll_gold(creature.min_gold_drop, creature.max_gold_drop, rng)
        drops = self.resolve(creature.loot_table_id, rng) if creature.loot_table_id else []
        return LootResult(source_id=creature.id, gold=max(gold, 0), drops=tuple(drops))

    def resolve_chest(self, chest: Chest, rng: RandomSource) -> LootResult:
        drops = self.resolve(chest.loot_table_id, rng) if chest.loot_table_id else []
        return LootResult(source_id=chest.id, gold=max(chest.gold_amount, 0), drops=tuple(drops))
