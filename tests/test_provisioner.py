from __future__ import annotations

import logging

import pytest
from sqlalchemy import func, select

from seed_catalog.core.errors import BatchOrderError, DanglingReferenceError, DuplicateContentError
from seed_catalog.core.module import ContentModule
from seed_catalog.core.provisioner import CatalogProvisioner, ProvisionConfig
from seed_catalog.core.types import ContentBatch, ContentKind, Creature, Item, LootEntry, LootTable
from seed_catalog.persistence.sqlalchemy.models import (
    ChestRow,
    CreatureRow,
    FactionRelationRow,
    ItemRow,
    LocationRow,
    LootTableRow,
)


def _count(session_factory, model):
    with session_factory() as session:
        return session.execute(select(func.count()).select_from(model)).scalar_one()


def test_provision_inserts_every_batch_in_order(session_factory, provisioner, b1_module):
    report = provisioner.provision_module(b1_module)

    assert report.status == "seeded"
    assert not report.skipped
    assert report.counts[ContentKind.CREATURE].inserted == 2
    assert report.counts[ContentKind.LOCATION].inserted == 2
    assert report.existing_total == 0
    assert report.inserted_total == sum(len(batch) for batch in b1_module.batches())
    assert _count(session_factory, CreatureRow) == 2
    assert _count(session_factory, ChestRow) == 1
    assert _count(session_factory, FactionRelationRow) == 1


def test_second_provision_is_skipped_and_state_is_unchanged(session_factory, uow_factory, provisioner, b1_module):
    provisioner.provision_module(b1_module)
    with uow_factory() as uow:
        before = {
            "creatures": uow.creatures.list_all(),
            "locations": uow.locations.list_all(),
            "relations": uow.faction_relations.list_all(),
        }

    report = provisioner.provision_module(b1_module)

    assert report.skipped
    assert report.counts == {}
    with uow_factory() as uow:
        after = {
            "creatures": uow.creatures.list_all(),
            "locations": uow.locations.list_all(),
            "relations": uow.faction_relations.list_all(),
        }
    assert after == before


def test_skip_is_logged_at_info(provisioner, b1_module, caplog):
    provisioner.provision_module(b1_module)
    with caplog.at_level(logging.INFO, logger="seed_catalog.core.provisioner"):
        provisioner.provision_module(b1_module)
    assert "already seeded" in caplog.text


def test_existing_rows_are_never_overwritten(uow_factory, b1_module):
    provisioner = CatalogProvisioner(uow_factory, ProvisionConfig(check_sentinel=False))
    provisioner.provision_module(b1_module)

    with uow_factory() as uow:
        rat = uow.find_by_id(ContentKind.CREATURE, "creature-b1-giant-rat")
        rat.max_hp = 99
        rat.name = "Dire Rat"
        assert uow.update(rat) is True
        uow.commit()

    report = provisioner.provision_module(b1_module)

    assert report.status == "seeded"
    assert report.inserted_total == 0
    assert report.counts[ContentKind.CREATURE].existing == 2
    with uow_factory() as uow:
        rat = uow.find_by_id(ContentKind.CREATURE, "creature-b1-giant-rat")
    assert rat.max_hp == 99
    assert rat.name == "Dire Rat"


def test_resume_inserts_only_missing_entities(session_factory, uow_factory, b1_module):
    with uow_factory() as uow:
        uow.create(Item(id="item-b1-rat-tail", name="Pre-existing Tail", value=7))
        uow.commit()

    provisioner = CatalogProvisioner(uow_factory, ProvisionConfig(check_sentinel=False))
    report = provisioner.provision_module(b1_module)

    assert report.counts[ContentKind.ITEM].inserted == 1
    assert report.counts[ContentKind.ITEM].existing == 1
    assert _count(session_factory, ItemRow) == 2
    with uow_factory() as uow:
        assert uow.items.find_by_id("item-b1-rat-tail").name == "Pre-existing Tail"


def test_dangling_reference_fails_before_any_write(session_factory, provisioner):
    module = ContentModule("bad", "Broken")
    module.creature("orc", name="Orc", loot_table_id="loot-nowhere-orc")
    module.location("camp", name="Camp", creatures=["orc"])

    with pytest.raises(DanglingReferenceError) as excinfo:
        provisioner.provision_module(module)

    assert excinfo.value.entity_id == "creature-bad-orc"
    assert excinfo.value.missing_id == "loot-nowhere-orc"
    assert _count(session_factory, CreatureRow) == 0
    assert _count(session_factory, LocationRow) == 0


def test_missing_location_for_chest_is_rejected(session_factory, provisioner):
    module = ContentModule("bad", "Broken")
    module.chest("box", location="vault")

    with pytest.raises(DanglingReferenceError, match="location-bad-vault"):
        provisioner.provision_module(module)
    assert _count(session_factory, ChestRow) == 0


def test_references_into_previously_seeded_modules_resolve(uow_factory, provisioner, b1_module):
    provisioner.provision_module(b1_module)

    sequel = ContentModule("b2", "Keep on the Borderlands")
    sequel.creature("kobold", name="Kobold", loot_table_id=b1_module.loot_id("giant-rat"))
    sequel.location("gate", name="Gate", creatures=["kobold"], exit_ids={"south": b1_module.location_id("entry")})
    report = provisioner.provision_module(sequel)

    assert report.counts[ContentKind.CREATURE].inserted == 1
    with uow_factory() as uow:
        gate = uow.locations.find_by_id("location-b2-gate")
    assert gate.exits[0].location_id == "location-b1-entry"


def test_out_of_order_batches_are_rejected(provisioner):
    creature = Creature(id="creature-x-rat")
    item = Item(id="item-x-tail")
    batches = [ContentBatch(ContentKind.CREATURE, (creature,)), ContentBatch(ContentKind.ITEM, (item,))]

    with pytest.raises(BatchOrderError):
        provisioner.provision("x", batches)


def test_duplicate_ids_across_batches_of_one_call_are_rejected(provisioner):
    item = Item(id="item-x-tail")
    batches = [ContentBatch(ContentKind.ITEM, (item, Item(id="item-x-tail", name="again")))]

    with pytest.raises(DuplicateContentError):
        provisioner.provision("x", batches)


def test_empty_module_is_reported_skipped(session_factory, provisioner):
    report = provisioner.provision("empty", [ContentBatch(ContentKind.ITEM, ())])

    assert report.skipped
    assert report.summary() == "no content"


def test_sentinel_falls_back_to_first_batch_without_creatures_or_locations(session_factory, provisioner):
    table = LootTable(id="loot-x-junk", name="Junk", entries=(LootEntry("item-x-bolt"),))
    batches = [
        ContentBatch(ContentKind.ITEM, (Item(id="item-x-bolt", name="Bolt"),)),
        ContentBatch(ContentKind.LOOT_TABLE, (table,)),
    ]

    assert provisioner.provision("x", batches).status == "seeded"
    assert provisioner.provision("x", batches).skipped
    assert _count(session_factory, LootTableRow) == 1


def test_provision_all_seeds_each_module_once(session_factory, provisioner, b1_module, caplog):
    other = ContentModule("b2", "Keep on the Borderlands")
    other.creature("kobold", name="Kobold")

    with caplog.at_level(logging.INFO, logger="seed_catalog.core.provisioner"):
        reports = provisioner.provision_all([b1_module, other, b1_module])

    assert [r.status for r in reports] == ["seeded", "seeded", "skipped"]
    assert _count(session_factory, CreatureRow) == 3
    assert "3 modules, 1 skipped" in caplog.text


def test_reference_check_can_be_disabled_for_trusted_batches(uow_factory, session_factory):
    provisioner = CatalogProvisioner(uow_factory, ProvisionConfig(validate_references=False))
    module = ContentModule("loose", "Loose")
    module.location("room", name="Room", exit_ids={"north": "location-elsewhere-hall"})

    report = provisioner.provision_module(module)

    assert report.inserted_total == 1
    assert _count(session_factory, LocationRow) == 1


def test_batch_kind_given_as_plain_string_is_reported(session_factory, provisioner):
    batch = ContentBatch("item", (Item(id="item-x-bolt", name="Bolt"),))

    report = provisioner.provision("x", [batch])

    assert batch.kind is ContentKind.ITEM
    assert report.counts[ContentKind.ITEM].inserted == 1
    assert report.summary() == "item=1/1"
    assert _count(session_factory, ItemRow) == 1
