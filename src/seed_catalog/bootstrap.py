from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Callable, Iterable

from sqlalchemy import Engine
from sqlalchemy.orm import Session, sessionmaker

from .content.wandering import register_wandering_encounters, wandering_module
from .core.encounters import EncounterSelector
from .core.loot import LootResolver
from .core.module import ContentModule
from .core.provisioner import CatalogProvisioner, ProvisionConfig
from .core.registry import ModuleRegistry
from .core.rng import SynchronizedRandom
from .core.types import ProvisionReport
from .persistence.sqlalchemy import SQLAlchemyUnitOfWork, build_engine, build_session_factory, create_schema

logger = logging.getLogger(__name__)

DEFAULT_DATABASE_URL = "sqlite+pysqlite:///:memory:"


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class CatalogConfig:
    database_url: str = DEFAULT_DATABASE_URL
    log_level: str = "INFO"
    check_sentinel: bool = True
    validate_references: bool = True
    rng_seed: int | None = None
    include_wandering: bool = True
    sql_echo: bool = False

    @classmethod
    def from_env(cls) -> "CatalogConfig":
        seed = os.getenv("SEED_CATALOG_RNG_SEED", "").strip()
        return cls(
            database_url=os.getenv("SEED_CATALOG_DATABASE_URL", DEFAULT_DATABASE_URL),
            log_level=os.getenv("SEED_CATALOG_LOG_LEVEL", "INFO").strip().upper() or "INFO",
            check_sentinel=_env_flag("SEED_CATALOG_CHECK_SENTINEL", True),
            validate_references=_env_flag("SEED_CATALOG_VALIDATE_REFERENCES", True),
            rng_seed=int(seed) if seed else None,
            include_wandering=_env_flag("SEED_CATALOG_INCLUDE_WANDERING", True),
            sql_echo=_env_flag("SEED_CATALOG_SQL_ECHO", False),
        )

    def provision_config(self) -> ProvisionConfig:
        return ProvisionConfig(
            check_sentinel=self.check_sentinel,
            validate_references=self.validate_references,
        )


def configure_logging(config: CatalogConfig) -> None:
    logging.basicConfig(
        level=getattr(logging, config.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@dataclass
class Catalog:
    engine: Engine
    session_factory: sessionmaker[Session]
    uow_factory: Callable[[], SQLAlchemyUnitOfWork]
    provisioner: CatalogProvisioner
    loot: LootResolver
    encounters: EncounterSelector
    modules: ModuleRegistry
    rng: SynchronizedRandom
    reports: list[ProvisionReport]


def build_catalog(
    config: CatalogConfig | None = None,
    modules: Iterable[ContentModule] = (),
) -> Catalog:
    """Create the store, seed every module once and register the runtime tables.

    ``modules`` may be a ``ModuleRegistry`` or any iterable of modules; they
    are seeded after the bundled wandering module. Configuration errors raised
    here are fatal: the service must not start with incomplete content.
    """
    cfg = config or CatalogConfig.from_env()
    engine = build_engine(cfg.database_url, echo=cfg.sql_echo)
    create_schema(engine)
    session_factory = build_session_factory(engine)

    def uow_factory() -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(session_factory)

    provisioner = CatalogProvisioner(uow_factory, cfg.provision_config())
    registry = ModuleRegistry([wandering_module()] if cfg.include_wandering else ())
    registry.register_all(modules)
    reports = registry.seed_all(provisioner)

    encounters = EncounterSelector()
    if cfg.include_wandering:
        register_wandering_encounters(encounters)

    loot = LootResolver()
    loot.load_from_store(uow_factory)

    logger.info(
        "Content catalog ready: %d loot tables, %d encounter contexts",
        len(loot),
        len(encounters.context_keys()),
    )
    return Catalog(
        engine=engine,
        session_factory=session_factory,
        uow_factory=uow_factory,
        provisioner=provisioner,
        loot=loot,
        encounters=encounters,
        modules=registry,
        rng=SynchronizedRandom(cfg.rng_seed),
        reports=reports,
    )
