from __future__ import annotations

import pytest

from seed_catalog.core.module import ContentModule
from seed_catalog.core.provisioner import CatalogProvisioner
from seed_catalog.persistence.sqlalchemy.db import build_engine, build_session_factory, create_schema
from seed_catalog.persistence.sqlalchemy.uow import SQLAlchemyUnitOfWork


class StubRandom:
    """Replays fixed values: ``random()`` cycles through ``floats``, ``randint`` through ``ints``."""

    def __init__(self, floats=(0.0,), ints=None):
        self.floats = list(floats)
        self.ints = list(ints) if ints is not None else None
        self.random_calls = 0
        self.randint_calls = []

    def random(self):
        value = self.floats[self.random_calls % len(self.floats)]
        self.random_calls += 1
        return value

    def randint(self, a, b):
        self.randint_calls.append((a, b))
        if self.ints is None:
            return a
        return self.ints[(len(self.randint_calls) - 1) % len(self.ints)]


@pytest.fixture()
def session_factory():
    engine = build_engine("sqlite+pysqlite:///:memory:")
    create_schema(engine)
    return build_session_factory(engine)


@pytest.fixture()
def uow_factory(session_factory):
    def _factory():
        return SQLAlchemyUnitOfWork(session_factory)

    return _factory


@pytest.fixture()
def provisioner(uow_factory):
    return CatalogProvisioner(uow_factory)


@pytest.fixture()
def b1_module():
    module = ContentModule(
        "b1",
        "In Search of the Unknown",
        attribution="B1",
        level_min=1,
        level_max=3,
    )
    module.ability("bite", name="Bite", base_damage=2)
    module.item("rat-tail", name="Rat Tail", value=1)
    module.item("short-sword", name="Short Sword", value=10, equipment_type="weapon", equipment_slot="main_hand")
    module.loot_table(
        "giant-rat",
        name="Giant Rat",
        entries=[module.loot_entry("rat-tail", chance=0.5)],
    )
    module.creature(
        "giant-rat",
        name="Giant Rat",
        challenge_rating=1,
        abilities=["bite"],
        loot_table="giant-rat",
    )
    module.creature("gnoll", name="Gnoll", challenge_rating=2, items=["short-sword"], gold=(1, 6))
    module.location("entry", name="Entry", exits={"north": "hall"}, position=(0, 0))
    module.location("hall", name="Hall", creatures=["giant-rat", "gnoll"], exits={"south": "entry"}, position=(0, 1))
    module.chest("coffer", location="hall", guardian="gnoll", loot_table="giant-rat", gold_amount=12)
    module.pool("green-pool", location="hall", teleport_to="entry", liquid_color="green")
    module.trap("pit", location="entry", alerts=["gnoll"])
    module.faction("gnolls", home="hall", leader="gnoll", territory=["hall"], disposition="hostile")
    module.faction("rats", home="entry", enemies=["gnolls"], disposition="neutral")
    module.faction_relation("gnolls", "rats", -40)
    return module
