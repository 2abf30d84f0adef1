from __future__ import annotations

import pytest

from seed_catalog.core.errors import DuplicateContentError, InvalidContentError
from seed_catalog.core.module import ContentModule
from seed_catalog.core.normalize import content_id, normalize_context_key
from seed_catalog.core.types import PROVISION_ORDER, ContentKind, Exit


def test_content_ids_compose_kind_module_and_suffix():
    assert content_id(ContentKind.CREATURE, "b1", "giant-rat") == "creature-b1-giant-rat"
    assert content_id(ContentKind.LOOT_TABLE, " b1 ", " giant-rat ") == "loot-b1-giant-rat"
    with pytest.raises(InvalidContentError):
        content_id(ContentKind.ITEM, "b1", "  ")


def test_context_key_normalisation():
    assert normalize_context_key(" temperate rain-forest ") == "TEMPERATE_RAIN_FOREST"
    assert normalize_context_key(None) == ""


def test_builder_resolves_module_relative_references(b1_module):
    rat = b1_module.entities(ContentKind.CREATURE)[0]
    assert rat.id == "creature-b1-giant-rat"
    assert rat.ability_ids == ["ability-b1-bite"]
    assert rat.loot_table_id == "loot-b1-giant-rat"
    assert rat.attribution == "B1"

    hall = b1_module.entities(ContentKind.LOCATION)[1]
    assert hall.creature_ids == ["creature-b1-giant-rat", "creature-b1-gnoll"]
    assert hall.exits == [Exit("location-b1-entry", "south")]
    assert hall.area_id == "b1"
    assert (hall.grid_x, hall.grid_y, hall.grid_z) == (0, 1, 0)


def test_batches_follow_dependency_order(b1_module):
    kinds = [batch.kind for batch in b1_module.batches()]

    assert kinds == list(PROVISION_ORDER)
    assert [batch.name for batch in b1_module.batches()][:3] == ["ability", "item", "loot"]


def test_empty_kinds_are_left_out_of_batches():
    module = ContentModule("tiny", "Tiny")
    module.item("pebble", name="Pebble")

    assert [batch.kind for batch in module.batches()] == [ContentKind.ITEM]


def test_pool_trap_and_faction_helpers(b1_module):
    (pool,) = b1_module.entities(ContentKind.POOL)
    assert pool.effect_type == "teleport"
    assert pool.effect_data == {"teleport_location_id": "location-b1-entry"}

    (trap,) = b1_module.entities(ContentKind.TRAP)
    assert trap.trap_type == "alarm"
    assert trap.effect_data["alerts_creature_ids"] == ["creature-b1-gnoll"]
    assert (ContentKind.CREATURE, "creature-b1-gnoll") in set(trap.references())

    gnolls, rats = b1_module.entities(ContentKind.FACTION)
    assert gnolls.hostility_level == 80
    assert gnolls.leader_creature_id == "creature-b1-gnoll"
    assert rats.enemy_faction_ids == ["faction-b1-gnolls"]

    (relation,) = b1_module.entities(ContentKind.FACTION_RELATION)
    assert relation.id == "faction-b1-gnolls:faction-b1-rats"
    assert relation.relationship_level == -40


def test_redefining_a_suffix_raises():
    module = ContentModule("dup", "Dup")
    module.item("key", name="Key")

    with pytest.raises(DuplicateContentError, match="item-dup-key"):
        module.item("key", name="Other Key")


def test_same_suffix_for_different_kinds_is_fine():
    module = ContentModule("m", "M")
    module.item("rat", name="Rat Tail")
    module.creature("rat", name="Rat")

    assert module.item_id("rat") != module.creature_id("rat")


@pytest.mark.parametrize(
    "build",
    [
        lambda m: m.location("room", exits={"sideways": "hall"}),
        lambda m: m.creature("orc", gold=(5, 1)),
        lambda m: m.creature("orc", loot_table="a", loot_table_id="loot-x-b"),
        lambda m: m.faction("f", disposition="furious"),
        lambda m: m.faction("f", hostility_level=150),
    ],
)
def test_invalid_definitions_are_rejected(build):
    with pytest.raises(InvalidContentError):
        build(ContentModule("m", "M"))


def test_module_requires_id_and_sane_level_range():
    with pytest.raises(InvalidContentError):
        ContentModule("", "Nameless")
    with pytest.raises(InvalidContentError):
        ContentModule("m", "M", level_min=5, level_max=2)


def test_seed_hands_batches_to_provisioner(provisioner, uow_factory, b1_module):
    report = b1_module.seed(provisioner)

    assert report.module_id == "b1"
    with uow_factory() as uow:
        assert uow.exists(ContentKind.TRAP, "trap-b1-pit")


@pytest.mark.parametrize("position", [(3,), (), (1, 2, 3, 4)])
def test_location_position_needs_two_or_three_coordinates(position):
    module = ContentModule("m", "M")

    with pytest.raises(InvalidContentError, match="position"):
        module.location("room", position=position)
