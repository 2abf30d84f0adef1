from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Iterable, Sequence

from .errors import BatchOrderError, DanglingReferenceError, DuplicateContentError, InvalidContentError
from .types import PROVISION_ORDER, BatchCount, ContentBatch, ContentKind, ProvisionReport

if TYPE_CHECKING:
    from ..persistence.interfaces import CatalogStore, UnitOfWork

logger = logging.getLogger(__name__)

SEEDED = "seeded"
SKIPPED = "skipped"


@dataclass(frozen=True)
class ProvisionConfig:
    check_sentinel: bool = True
    validate_references: bool = True


class CatalogProvisioner:
    """Writes content batches to the store once, in dependency order.

    A module is skipped when its sentinel entity already exists. Otherwise
    each entity is inserted only if its id is absent; existing rows are never
    overwritten. The module is written in a single unit of work, so a failure
    rolls the whole module back.
    """

    def __init__(
        self,
        uow_factory: Callable[[], "UnitOfWork"],
        config: ProvisionConfig | None = None,
    ):
        self._uow_factory = uow_factory
        self._config = config or ProvisionConfig()

    def provision(self, module_id: str, batches: Sequence[ContentBatch]) -> ProvisionReport:
        ordered = self._check_batches(batches)
        if not ordered:
            logger.debug("Content module %s defines no content, skipping", module_id)
            return ProvisionReport(module_id=module_id, status=SKIPPED)

        with self._uow_factory() as uow:
            sentinel_kind, sentinel_id = self._sentinel(ordered)
            if self._config.check_sentinel and uow.exists(sentinel_kind, sentinel_id):
                logger.info("Content module %s already seeded, skipping", module_id)
                logger.debug("Sentinel %s %s present", sentinel_kind.value, sentinel_id)
                return ProvisionReport(module_id=module_id, status=SKIPPED)

            if self._config.validate_references:
                self._check_references(uow, ordered)

            report = ProvisionReport(module_id=module_id, status=SEEDED)
            for batch in ordered:
                count = BatchCount()
                for entity in batch.entities:
                    if uow.exists(batch.kind, entity.id):
                        count.existing += 1
                        continue
                    uow.create(entity)
                    count.inserted += 1
                report.counts[batch.kind] = count
            uow.commit()

        logger.info("Seeded content module %s (%s)", module_id, report.summary())
        return report

    def provision_module(self, module: Any) -> ProvisionReport:
        return self.provision(module.module_id, module.batches())

    def provision_all(self, modules: Iterable[Any]) -> list[ProvisionReport]:
        reports = [self.provision_module(module) for module in modules]
        totals: dict[ContentKind, BatchCount] = {}
        for report in reports:
            for kind, count in report.counts.items():
                total = totals.setdefault(kind, BatchCount())
                total.inserted += count.inserted
                total.existing += count.existing
        skipped = sum(1 for report in reports if report.skipped)
        summary = ProvisionReport(module_id="*", status=SEEDED, counts=totals).summary()
        logger.info(
            "Content provisioning finished: %d modules, %d skipped (%s)",
            len(reports),
            skipped,
            summary,
        )
        return reports

    def _check_batches(self, batches: Sequence[ContentBatch]) -> list[ContentBatch]:
        rank = {kind: index for index, kind in enumerate(PROVISION_ORDER)}
        ordered: list[ContentBatch] = []
        seen_ids: set[tuple[ContentKind, str]] = set()
        last_rank = -1
        for batch in batches:
            kind = ContentKind(batch.kind)
            if rank[kind] <= last_rank:
                raise BatchOrderError(f"{kind.value} batch is out of dependency order")
            last_rank = rank[kind]
            for entity in batch.entities:
                if entity.kind != kind:
                    raise InvalidContentError(f"{entity.id} is a {entity.kind.value}, found in {kind.value} batch")
                key = (kind, entity.id)
                if key in seen_ids:
                    raise DuplicateContentError(entity.id)
                seen_ids.add(key)
            if batch.entities:
                ordered.append(batch)
        return ordered

    @staticmethod
    def _sentinel(batches: Sequence[ContentBatch]) -> tuple[ContentKind, str]:
        by_kind = {batch.kind: batch for batch in batches}
        for kind in (ContentKind.CREATURE, ContentKind.LOCATION):
            if kind in by_kind:
                return kind, by_kind[kind].entities[0].id
        first = batches[0]
        return first.kind, first.entities[0].id

    @staticmethod
    def _check_references(uow: "CatalogStore", batches: Sequence[ContentBatch]) -> None:
        defined: set[tuple[ContentKind, str]] = set()
        in_store: dict[tuple[ContentKind, str], bool] = {}
        for batch in batches:
            current = {entity.id for entity in batch.entities}
            for entity in batch.entities:
                for kind, ref_id in entity.references():
                    key = (kind, ref_id)
                    if key in defined or (kind == batch.kind and ref_id in current):
                        continue
                    if key not in in_store:
                        in_store[key] = uow.exists(kind, ref_id)
                    if not in_store[key]:
                        raise DanglingReferenceError(entity.id, kind.value, ref_id)
            defined.update((batch.kind, entity_id) for entity_id in current)
