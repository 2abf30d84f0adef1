from __future__ import annotations

from typing import Any, Protocol

from ..core.types import ContentKind


class ContentRepo(Protocol):
    def find_by_id(self, entity_id: str) -> Any | None: ...
    def exists(self, entity_id: str) -> bool: ...
    def create(self, entity: Any) -> Any: ...
    def update(self, entity: Any) -> bool: ...
    def delete(self, entity_id: str) -> bool: ...
    def list_all(self) -> list[Any]: ...


class FactionRelationRepo(ContentRepo, Protocol):
    def find_relation(self, faction_id: str, target_faction_id: str) -> Any | None: ...


class CatalogStore(Protocol):
    def find_by_id(self, kind: ContentKind, entity_id: str) -> Any | None: ...
    def exists(self, kind: ContentKind, entity_id: str) -> bool: ...
    def create(self, entity: Any) -> Any: ...
    def update(self, entity: Any) -> bool: ...


class UnitOfWork(CatalogStore, Protocol):
    abilities: ContentRepo
    items: ContentRepo
    loot_tables: ContentRepo
    creatures: ContentRepo
    locations: ContentRepo
    chests: ContentRepo
    pools: ContentRepo
    traps: ContentRepo
    factions: ContentRepo
    faction_relations: FactionRelationRepo

    def repo_for(self, kind: ContentKind) -> ContentRepo: ...
    def commit(self) -> None: ...
    def rollback(self) -> None: ...

    def __enter__(self) -> "UnitOfWork": ...
    def __exit__(self, exc_type, exc, tb) -> None: ...
