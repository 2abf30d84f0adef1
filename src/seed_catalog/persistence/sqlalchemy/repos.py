from __future__ import annotations

from dataclasses import asdict, fields
from datetime import datetime
from typing import Any, ClassVar

from sqlalchemy import delete, select, update
from sqlalchemy.orm import Session

from ...core.normalize import dump_json, parse_json_dict, parse_json_list
from ...core.types import (
    Ability,
    Chest,
    Creature,
    Exit,
    Faction,
    FactionRelation,
    Item,
    Location,
    LootEntry,
    LootTable,
    Pool,
    Trap,
)
from .base import Base
from .models import (
    AbilityRow,
    ChestRow,
    CreatureRow,
    FactionRelationRow,
    FactionRow,
    ItemRow,
    LocationRow,
    LootTableRow,
    PoolRow,
    TrapRow,
)


class ContentRepo:
    """Row mapping shared by every content kind.

    Scalar dataclass fields map to same-named columns; fields listed in
    ``json_fields`` are stored as JSON text in ``<field>_json``.
    """

    model: ClassVar[type[Base]]
    entity: ClassVar[type]
    json_fields: ClassVar[tuple[str, ...]] = ()

    def __init__(self, session: Session):
        self.session = session

    def find_by_id(self, entity_id: str) -> Any | None:
        row = self.session.get(self.model, entity_id)
        return None if row is None else self._to_entity(row)

    def exists(self, entity_id: str) -> bool:
        stmt = select(self.model.id).where(self.model.id == entity_id).limit(1)
        return self.session.execute(stmt).first() is not None

    def create(self, entity: Any) -> Any:
        row = self.model(**self._values(entity))
        self.session.add(row)
        self.session.flush()
        return entity

    def update(self, entity: Any) -> bool:
        values = self._values(entity)
        values.pop("id", None)
        values["updated_at"] = datetime.utcnow()
        stmt = update(self.model).where(self.model.id == entity.id).values(**values)
        return (self.session.execute(stmt).rowcount or 0) == 1

    def delete(self, entity_id: str) -> bool:
        stmt = delete(self.model).where(self.model.id == entity_id)
        return (self.session.execute(stmt).rowcount or 0) == 1

    def list_all(self) -> list[Any]:
        stmt = select(self.model).order_by(self.model.id.asc())
        return [self._to_entity(row) for row in self.session.execute(stmt).scalars().all()]

    def _encode(self, name: str, value: Any) -> Any:
        return value

    def _decode(self, name: str, raw: str | None, default: Any) -> Any:
        if isinstance(default, dict):
            return parse_json_dict(raw)
        return parse_json_list(raw)

    def _values(self, entity: Any) -> dict[str, Any]:
        values: dict[str, Any] = {}
        for f in fields(entity):
            value = getattr(entity, f.name)
            if f.name in self.json_fields:
                values[f"{f.name}_json"] = dump_json(self._encode(f.name, value))
            else:
                values[f.name] = value
        return values

    def _to_entity(self, row: Any) -> Any:
        kwargs: dict[str, Any] = {}
        for f in fields(self.entity):
            if f.name in self.json_fields:
                default = f.default_factory() if callable(f.default_factory) else f.default
                kwargs[f.name] = self._decode(f.name, getattr(row, f"{f.name}_json"), default)
            else:
                kwargs[f.name] = getattr(row, f.name)
        return self.entity(**kwargs)


class AbilityRepo(ContentRepo):
    model = AbilityRow
    entity = Ability
    json_fields = ("effects",)


class ItemRepo(ContentRepo):
    model = ItemRow
    entity = Item
    json_fields = ("stat_bonuses", "feature_ids", "ability_ids")


class LootTableRepo(ContentRepo):
    model = LootTableRow
    entity = LootTable
    json_fields = ("entries",)

    def _encode(self, name: str, value: Any) -> Any:
        return [asdict(entry) for entry in value]

    def _decode(self, name: str, raw: str | None, default: Any) -> Any:
        entries = []
        for data in parse_json_list(raw):
            if not isinstance(data, dict) or not data.get("item_id"):
                continue
            entries.append(
                LootEntry(
                    item_id=str(data["item_id"]),
                    chance=float(data.get("chance", 1.0)),
                    min_qty=int(data.get("min_qty", 1)),
                    max_qty=int(data.get("max_qty", 1)),
                )
            )
        return tuple(entries)


class CreatureRepo(ContentRepo):
    model = CreatureRow
    entity = Creature
    json_fields = ("ability_ids", "item_ids", "feature_ids")

    def list_by_challenge_rating(self, min_rating: int, max_rating: int) -> list[Creature]:
        stmt = (
            select(CreatureRow)
            .where(CreatureRow.challenge_rating >= min_rating)
            .where(CreatureRow.challenge_rating <= max_rating)
            .order_by(CreatureRow.challenge_rating.asc(), CreatureRow.id.asc())
        )
        return [self._to_entity(row) for row in self.session.execute(stmt).scalars().all()]


class LocationRepo(ContentRepo):
    model = LocationRow
    entity = Location
    json_fields = ("creature_ids", "item_ids", "feature_ids", "exits")

    def _encode(self, name: str, value: Any) -> Any:
        if name == "exits":
            return [asdict(exit_) for exit_ in value]
        return value

    def _decode(self, name: str, raw: str | None, default: Any) -> Any:
        data = parse_json_list(raw)
        if name == "exits":
            return [
                Exit(location_id=str(e["location_id"]), direction=str(e["direction"]))
                for e in data
                if isinstance(e, dict) and e.get("location_id") and e.get("direction")
            ]
        return data

    def list_by_area(self, area_id: str) -> list[Location]:
        stmt = select(LocationRow).where(LocationRow.area_id == area_id).order_by(LocationRow.id.asc())
        return [self._to_entity(row) for row in self.session.execute(stmt).scalars().all()]


class ChestRepo(ContentRepo):
    model = ChestRow
    entity = Chest


class PoolRepo(ContentRepo):
    model = PoolRow
    entity = Pool
    json_fields = ("effect_data",)


class TrapRepo(ContentRepo):
    model = TrapRow
    entity = Trap
    json_fields = ("effect_data",)


class FactionRepo(ContentRepo):
    model = FactionRow
    entity = Faction
    json_fields = (
        "territory_location_ids",
        "enemy_faction_ids",
        "ally_faction_ids",
        "goals",
        "trade_good_ids",
        "tribute_item_ids",
    )


class FactionRelationRepo(ContentRepo):
    """Relations are keyed by the ``"<faction>:<target>"`` pair, not a stored id."""

    model = FactionRelationRow
    entity = FactionRelation

    def find_relation(self, faction_id: str, target_faction_id: str) -> FactionRelation | None:
        stmt = (
            select(FactionRelationRow)
            .where(FactionRelationRow.faction_id == faction_id)
            .where(FactionRelationRow.target_faction_id == target_faction_id)
            .limit(1)
        )
        row = self.session.execute(stmt).scalar_one_or_none()
        return None if row is None else self._to_entity(row)

    def find_by_id(self, entity_id: str) -> FactionRelation | None:
        faction_id, sep, target_faction_id = entity_id.partition(":")
        if not sep:
            return None
        return self.find_relation(faction_id, target_faction_id)

    def exists(self, entity_id: str) -> bool:
        return self.find_by_id(entity_id) is not None

    def update(self, entity: FactionRelation) -> bool:
        stmt = (
            update(FactionRelationRow)
            .where(FactionRelationRow.faction_id == entity.faction_id)
            .where(FactionRelationRow.target_faction_id == entity.target_faction_id)
            .values(relationship_level=entity.relationship_level, updated_at=datetime.utcnow())
        )
        return (self.session.execute(stmt).rowcount or 0) == 1

    def delete(self, entity_id: str) -> bool:
        faction_id, _, target_faction_id = entity_id.partition(":")
        stmt = (
            delete(FactionRelationRow)
            .where(FactionRelationRow.faction_id == faction_id)
            .where(FactionRelationRow.target_faction_id == target_faction_id)
        )
        return (self.session.execute(stmt).rowcount or 0) == 1

    def list_all(self) -> list[FactionRelation]:
        stmt = select(FactionRelationRow).order_by(FactionRelationRow.id.asc())
        return [self._to_entity(row) for row in self.session.execute(stmt).scalars().all()]

    def list_for_faction(self, faction_id: str) -> list[FactionRelation]:
        stmt = select(FactionRelationRow).where(FactionRelationRow.faction_id == faction_id)
        return [self._to_entity(row) for row in self.session.execute(stmt).scalars().all()]
