from __future__ import annotations

from typing import Any

from sqlalchemy.orm import Session, sessionmaker

from ...core.types import ContentKind
from .repos import (
    AbilityRepo,
    ChestRepo,
    ContentRepo,
    CreatureRepo,
    FactionRelationRepo,
    FactionRepo,
    ItemRepo,
    LocationRepo,
    LootTableRepo,
    PoolRepo,
    TrapRepo,
)


class SQLAlchemyUnitOfWork:
    def __init__(self, session_factory: sessionmaker[Session]):
        self._session_factory = session_factory
        self.session: Session | None = None
        self._repos: dict[ContentKind, ContentRepo] = {}

    def __enter__(self) -> "SQLAlchemyUnitOfWork":
        self.session = self._session_factory()
        self.abilities = AbilityRepo(self.session)
        self.items = ItemRepo(self.session)
        self.loot_tables = LootTableRepo(self.session)
        self.creatures = CreatureRepo(self.session)
        self.locations = LocationRepo(self.session)
        self.chests = ChestRepo(self.session)
        self.pools = PoolRepo(self.session)
        self.traps = TrapRepo(self.session)
        self.factions = FactionRepo(self.session)
        self.faction_relations = FactionRelationRepo(self.session)
        self._repos = {
            ContentKind.ABILITY: self.abilities,
            ContentKind.ITEM: self.items,
            ContentKind.LOOT_TABLE: self.loot_tables,
            ContentKind.CREATURE: self.creatures,
            ContentKind.LOCATION: self.locations,
            ContentKind.CHEST: self.chests,
            ContentKind.POOL: self.pools,
            ContentKind.TRAP: self.traps,
            ContentKind.FACTION: self.factions,
            ContentKind.FACTION_RELATION: self.faction_relations,
        }
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if self.session is None:
            return
        if exc_type is not None:
            self.rollback()
        self.session.close()

    def repo_for(self, kind: ContentKind) -> ContentRepo:
        assert self.session is not None
        return self._repos[ContentKind(kind)]

    def find_by_id(self, kind: ContentKind, entity_id: str) -> Any | None:
        return self.repo_for(kind).find_by_id(entity_id)

    def exists(self, kind: ContentKind, entity_id: str) -> bool:
        return self.repo_for(kind).exists(entity_id)

    def create(self, entity: Any) -> Any:
        return self.repo_for(entity.kind).create(entity)

    def update(self, entity: Any) -> bool:
        return self.repo_for(entity.kind).update(entity)

    def commit(self) -> None:
        assert self.session is not None
        self.session.commit()

    def rollback(self) -> None:
        assert self.session is not None
        self.session.rollback()
