from __future__ import annotations

from sqlalchemy import Boolean, CheckConstraint, ForeignKey, Index, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, TimestampMixin


class AbilityRow(TimestampMixin, Base):
    __tablename__ = "sc_abilities"

    id: Mapped[str] = mapped_column(String(128), primary_key=True)
    name: Mapped[str] = mapped_column(String(128), nullable=False, default="")
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    class_id: Mapped[str | None] = mapped_column(String(128), nullable=True)
    ability_type: Mapped[str] = mapped_column(String(32), nullable=False, default="combat")
    target_type: Mapped[str] = mapped_column(String(32), nullable=False, default="single_enemy")
    range: Mapped[int] = mapped_column(Integer, nullable=False, default=5)
    cooldown_type: Mapped[str] = mapped_column(String(32), nullable=False, default="none")
    cooldown_rounds: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    base_damage: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    duration_rounds: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    effects_json: Mapped[str] = mapped_column(Text, nullable=False, default="[]")
    mana_cost: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    stamina_cost: Mapped[int] = mapped_column(Integer, nullable=False, default=0)


class ItemRow(TimestampMixin, Base):
    __tablename__ = "sc_items"

    id: Mapped[str] = mapped_column(String(128), primary_key=True)
    name: Mapped[str] = mapped_column(String(128), nullable=False, default="")
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    value: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    weight: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    equipment_type: Mapped[str | None] = mapped_column(String(32), nullable=True)
    equipment_slot: Mapped[str | None] = mapped_column(String(32), nullable=True)
    stat_bonuses_json: Mapped[str] = mapped_column(Text, nullable=False, default="{}")
    feature_ids_json: Mapped[str] = mapped_column(Text, nullable=False, default="[]")
    ability_ids_json: Mapped[str] = mapped_column(Text, nullable=False, default="[]")


class LootTableRow(TimestampMixin, Base):
    __tablename__ = "sc_loot_tables"

    id: Mapped[str] = mapped_column(String(128), primary_key=True)
    name: Mapped[str] = mapped_column(String(128), nullable=False, default="")
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    entries_json: Mapped[str] = mapped_column(Text, nullable=False, default="[]")


class CreatureRow(TimestampMixin, Base):
    __tablename__ = "sc_creatures"

    id: Mapped[str] = mapped_column(String(128), primary_key=True)
    name: Mapped[str] = mapped_column(String(128), nullable=False, default="")
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    max_hp: Mapped[int] = mapped_column(Integer, nullable=False, default=10)
    base_damage: Mapped[int] = mapped_column(Integer, nullable=False, default=5)
    damage_dice: Mapped[str | None] = mapped_column(String(32), nullable=True)
    level: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    experience_value: Mapped[int] = mapped_column(Integer, nullable=False, default=10)
    challenge_rating: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    is_aggressive: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    min_gold_drop: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    max_gold_drop: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    loot_table_id: Mapped[str | None] = mapped_column(String(128), ForeignKey("sc_loot_tables.id"), nullable=True)
    ability_ids_json: Mapped[str] = mapped_column(Text, nullable=False, default="[]")
    item_ids_json: Mapped[str] = mapped_column(Text, nullable=False, default="[]")
    feature_ids_json: Mapped[str] = mapped_column(Text, nullable=False, default="[]")
    attribution: Mapped[str] = mapped_column(String(256), nullable=False, default="")


Index("ix_sc_creature_challenge_rating", CreatureRow.challenge_rating)


class LocationRow(TimestampMixin, Base):
    __tablename__ = "sc_locations"

    id: Mapped[str] = mapped_column(String(128), primary_key=True)
    name: Mapped[str] = mapped_column(String(128), nullable=False, default="")
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    area_id: Mapped[str | None] = mapped_column(String(64), nullable=True)
    grid_x: Mapped[int | None] = mapped_column(Integer, nullable=True)
    grid_y: Mapped[int | None] = mapped_column(Integer, nullable=True)
    grid_z: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    location_type: Mapped[str] = mapped_column(String(24), nullable=False, default="indoor")
    biome: Mapped[str | None] = mapped_column(String(64), nullable=True)
    lock_level: Mapped[int | None] = mapped_column(Integer, nullable=True)
    locked_by: Mapped[str | None] = mapped_column(String(128), nullable=True)
    creature_ids_json: Mapped[str] = mapped_column(Text, nullable=False, default="[]")
    item_ids_json: Mapped[str] = mapped_column(Text, nullable=False, default="[]")
    feature_ids_json: Mapped[str] = mapped_column(Text, nullable=False, default="[]")
    exits_json: Mapped[str] = mapped_column(Text, nullable=False, default="[]")


Index("ix_sc_location_area", LocationRow.area_id)


class ChestRow(TimestampMixin, Base):
    __tablename__ = "sc_chests"

    id: Mapped[str] = mapped_column(String(128), primary_key=True)
    location_id: Mapped[str] = mapped_column(String(128), ForeignKey("sc_locations.id"), nullable=False)
    name: Mapped[str] = mapped_column(String(128), nullable=False, default="")
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    guardian_creature_id: Mapped[str | None] = mapped_column(String(128), ForeignKey("sc_creatures.id"), nullable=True)
    is_locked: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    lock_difficulty: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    bash_difficulty: Mapped[int] = mapped_column(Integer, nullable=False, default=2)
    loot_table_id: Mapped[str | None] = mapped_column(String(128), ForeignKey("sc_loot_tables.id"), nullable=True)
    gold_amount: Mapped[int] = mapped_column(Integer, nullable=False, default=0)


class PoolRow(TimestampMixin, Base):
    __tablename__ = "sc_pools"

    id: Mapped[str] = mapped_column(String(128), primary_key=True)
    location_id: Mapped[str] = mapped_column(String(128), ForeignKey("sc_locations.id"), nullable=False)
    name: Mapped[str] = mapped_column(String(128), nullable=False, default="")
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    liquid_color: Mapped[str] = mapped_column(String(32), nullable=False, default="clear")
    liquid_appearance: Mapped[str] = mapped_column(String(32), nullable=False, default="still")
    effect_type: Mapped[str] = mapped_column(String(24), nullable=False, default="empty")
    effect_data_json: Mapped[str] = mapped_column(Text, nullable=False, default="{}")
    uses_per_day: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    is_one_time_use: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_hidden: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    identify_difficulty: Mapped[int] = mapped_column(Integer, nullable=False, default=0)


class TrapRow(TimestampMixin, Base):
    __tablename__ = "sc_traps"

    id: Mapped[str] = mapped_column(String(128), primary_key=True)
    location_id: Mapped[str] = mapped_column(String(128), ForeignKey("sc_locations.id"), nullable=False)
    name: Mapped[str] = mapped_column(String(128), nullable=False, default="")
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    trap_type: Mapped[str] = mapped_column(String(24), nullable=False, default="pit")
    trigger_type: Mapped[str] = mapped_column(String(24), nullable=False, default="movement")
    detect_difficulty: Mapped[int] = mapped_column(Integer, nullable=False, default=2)
    disarm_difficulty: Mapped[int] = mapped_column(Integer, nullable=False, default=2)
    effect_data_json: Mapped[str] = mapped_column(Text, nullable=False, default="{}")
    is_hidden: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    is_armed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    resets_after_rounds: Mapped[int] = mapped_column(Integer, nullable=False, default=0)


class FactionRow(TimestampMixin, Base):
    __tablename__ = "sc_factions"

    id: Mapped[str] = mapped_column(String(128), primary_key=True)
    name: Mapped[str] = mapped_column(String(128), nullable=False, default="")
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    home_location_id: Mapped[str | None] = mapped_column(String(128), ForeignKey("sc_locations.id"), nullable=True)
    hostility_level: Mapped[int] = mapped_column(Integer, nullable=False, default=50)
    can_negotiate: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    leader_creature_id: Mapped[str | None] = mapped_column(String(128), ForeignKey("sc_creatures.id"), nullable=True)
    territory_location_ids_json: Mapped[str] = mapped_column(Text, nullable=False, default="[]")
    enemy_faction_ids_json: Mapped[str] = mapped_column(Text, nullable=False, default="[]")
    ally_faction_ids_json: Mapped[str] = mapped_column(Text, nullable=False, default="[]")
    goals_json: Mapped[str] = mapped_column(Text, nullable=False, default="[]")
    trade_good_ids_json: Mapped[str] = mapped_column(Text, nullable=False, default="[]")
    tribute_item_ids_json: Mapped[str] = mapped_column(Text, nullable=False, default="[]")

    __table_args__ = (
        CheckConstraint("hostility_level BETWEEN 0 AND 100", name="faction_hostility_range"),
    )


class FactionRelationRow(TimestampMixin, Base):
    __tablename__ = "sc_faction_relations"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    faction_id: Mapped[str] = mapped_column(String(128), ForeignKey("sc_factions.id"), nullable=False)
    target_faction_id: Mapped[str] = mapped_column(String(128), ForeignKey("sc_factions.id"), nullable=False)
    relationship_level: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    __table_args__ = (
        UniqueConstraint("faction_id", "target_faction_id", name="uq_sc_faction_relation_pair"),
    )
