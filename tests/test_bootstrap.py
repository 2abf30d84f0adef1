from __future__ import annotations

import pytest

from seed_catalog import CatalogConfig, ContentModule, ModuleRegistry, build_catalog
from seed_catalog.core.errors import DuplicateModuleError
from seed_catalog.core.types import ContentKind


def test_config_reads_environment(monkeypatch):
    monkeypatch.setenv("SEED_CATALOG_DATABASE_URL", "sqlite+pysqlite:///:memory:")
    monkeypatch.setenv("SEED_CATALOG_LOG_LEVEL", "debug")
    monkeypatch.setenv("SEED_CATALOG_CHECK_SENTINEL", "false")
    monkeypatch.setenv("SEED_CATALOG_RNG_SEED", "42")

    config = CatalogConfig.from_env()

    assert config.log_level == "DEBUG"
    assert config.check_sentinel is False
    assert config.rng_seed == 42
    assert config.provision_config().check_sentinel is False


def test_config_defaults(monkeypatch):
    for name in (
        "SEED_CATALOG_DATABASE_URL",
        "SEED_CATALOG_LOG_LEVEL",
        "SEED_CATALOG_CHECK_SENTINEL",
        "SEED_CATALOG_RNG_SEED",
    ):
        monkeypatch.delenv(name, raising=False)

    config = CatalogConfig.from_env()

    assert config.database_url == "sqlite+pysqlite:///:memory:"
    assert config.log_level == "INFO"
    assert config.check_sentinel is True
    assert config.rng_seed is None


def test_build_catalog_seeds_and_registers_everything():
    module = ContentModule("camp", "Bandit Camp")
    module.item("coin-purse", name="Coin Purse", value=10)
    module.loot_table("bandit", name="Bandit", entries=[module.loot_entry("coin-purse", chance=1.0, min_qty=1, max_qty=2)])
    module.creature("chief", name="Bandit Chief", challenge_rating=4, loot_table="bandit")
    module.location("tent", name="Tent", creatures=["chief"], location_type="outdoor", biome="GRASSLAND")

    catalog = build_catalog(CatalogConfig(rng_seed=1), modules=[module])

    assert [r.module_id for r in catalog.reports] == ["wandering", "camp"]
    assert catalog.loot.table_ids() == ["loot-camp-bandit"]
    drops = catalog.loot.resolve("loot-camp-bandit", catalog.rng)
    assert drops[0].item_id == "item-camp-coin-purse"
    assert 1 <= drops[0].quantity <= 2

    (spawn,) = catalog.encounters.select("GRASSLAND", 4, catalog.rng)
    assert spawn.creature_id.startswith("creature-wandering-")
    with catalog.uow_factory() as uow:
        assert uow.exists(ContentKind.LOCATION, "location-camp-tent")


def test_same_seed_gives_same_rolls():
    first = build_catalog(CatalogConfig(rng_seed=9))
    second = build_catalog(CatalogConfig(rng_seed=9))

    rolls_a = [first.encounters.select("MARSH", 3, first.rng) for _ in range(20)]
    rolls_b = [second.encounters.select("MARSH", 3, second.rng) for _ in range(20)]

    assert rolls_a == rolls_b


def test_build_catalog_accepts_a_module_registry():
    registry = ModuleRegistry([ContentModule("inn", "Roadside Inn")])
    registry.find_by_id("inn").creature("innkeeper", name="Innkeeper")

    catalog = build_catalog(CatalogConfig(), modules=registry)

    assert [m.module_id for m in catalog.modules] == ["wandering", "inn"]
    assert [r.status for r in catalog.reports] == ["seeded", "seeded"]


def test_build_catalog_rejects_a_second_wandering_module():
    with pytest.raises(DuplicateModuleError):
        build_catalog(CatalogConfig(), modules=[ContentModule("wandering", "Copy")])


def test_wandering_module_can_be_left_out():
    catalog = build_catalog(CatalogConfig(include_wandering=False))

    assert len(catalog.modules) == 0
    assert catalog.encounters.context_keys() == []
