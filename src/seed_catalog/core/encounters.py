from __future__ import annotations

import logging
from typing import Iterable, Sequence

from .errors import InvalidTableError, NoEncounterTableError
from .normalize import GENERIC, INDOOR, normalize_context_key
from .types import EncounterEntry, EncounterRoll, RandomSource, Spawn

logger = logging.getLogger(__name__)


def validate_encounter_entries(context_key: str, entries: Sequence[EncounterEntry]) -> None:
    if not entries:
        raise InvalidTableError(context_key, "encounter table has no entries")
    for index, entry in enumerate(entries):
        where = f"{context_key}[{index}] ({entry.creature_id})"
        if not entry.creature_id:
            raise InvalidTableError(context_key, f"entry {index} has no creature id")
        if entry.weight < 1:
            raise InvalidTableError(context_key, f"{where} weight {entry.weight} < 1")
        if entry.min_count < 1:
            raise InvalidTableError(context_key, f"{where} min_count {entry.min_count} < 1")
        if entry.max_count < entry.min_count:
            raise InvalidTableError(context_key, f"{where} max_count {entry.max_count} < min_count {entry.min_count}")
        if entry.max_challenge_rating < entry.min_challenge_rating:
            raise InvalidTableError(
                context_key,
                f"{where} challenge range {entry.min_challenge_rating}..{entry.max_challenge_rating} is empty",
            )


def weighted_choice(entries: Sequence[EncounterEntry], rng: RandomSource) -> EncounterEntry | None:
    if not entries:
        return None
    total = sum(entry.weight for entry in entries)
    if total <= 0:
        return None
    roll = rng.random() * total
    for entry in entries:
        roll -= entry.weight
        if roll < 0:
            return entry
    return entries[-1]


def location_challenge(challenge_ratings: Iterable[int | None]) -> int:
    """Budget for a location: its toughest resident's challenge rating, 1 when empty."""
    ratings = [cr for cr in challenge_ratings if cr is not None]
    return max(ratings) if ratings else 1


class EncounterSelector:
    def __init__(self) -> None:
        self._tables: dict[str, tuple[EncounterEntry, ...]] = {}

    def register(self, context_key: str, entries: Iterable[EncounterEntry]) -> None:
        key = normalize_context_key(context_key)
        if not key:
            raise InvalidTableError(repr(context_key), "empty encounter context key")
        frozen = tuple(entries)
        validate_encounter_entries(key, frozen)
        tables = dict(self._tables)
        tables[key] = frozen
        self._tables = tables
        logger.info("Registered %d wandering encounter entries for %s", len(frozen), key)

    def register_indoor(self, entries: Iterable[EncounterEntry]) -> None:
        self.register(INDOOR, entries)

    def context_keys(self) -> list[str]:
        return sorted(self._tables)

    def entries_for(self, context_key: str) -> tuple[EncounterEntry, ...]:
        return self._tables.get(normalize_context_key(context_key), ())

    def __contains__(self, context_key: object) -> bool:
        return isinstance(context_key, str) and normalize_context_key(context_key) in self._tables

    def resolve_table(self, context_key: str | None, *, indoor: bool = False) -> tuple[str, tuple[EncounterEntry, ...]]:
        tables = self._tables
        key = normalize_context_key(context_key)
        if key in tables:
            return key, tables[key]
        if indoor and INDOOR in tables:
            return INDOOR, tables[INDOOR]
        if GENERIC in tables:
            return GENERIC, tables[GENERIC]
        raise NoEncounterTableError(key or "<none>")

    def roll(
        self,
        context_key: str | None,
        challenge_budget: int,
        rng: RandomSource,
        *,
        indoor: bool = False,
    ) -> EncounterRoll:
        requested = normalize_context_key(context_key)
        table_key, entries = self.resolve_table(context_key, indoor=indoor)

        eligible = [entry for entry in entries if entry.allows(challenge_budget)]
        off_budget = not eligible
        if off_budget:
            logger.warning(
                "No %s encounter entries cover challenge rating %s; using the unfiltered table",
                table_key,
                challenge_budget,
            )
            eligible = list(entries)

        entry = weighted_choice(eligible, rng)
        if entry is None:
            return EncounterRoll(requested, table_key, table_key != requested, off_budget, None, ())

        if entry.max_count > entry.min_count:
            count = rng.randint(entry.min_count, entry.max_count)
        else:
            count = entry.min_count
        return EncounterRoll(
            requested_key=requested,
            table_key=table_key,
            used_fallback=table_key != requested,
            off_budget=off_budget,
            entry=entry,
            spawns=(Spawn(entry.creature_id, count),),
        )

    def select(
        self,
        context_key: str | None,
        challenge_budget: int,
        rng: RandomSource,
        *,
        indoor: bool = False,
    ) -> list[Spawn]:
        return list(self.roll(context_key, challenge_budget, rng, indoor=indoor).spawns)
