from __future__ import annotations

import json

from seed_catalog import CatalogConfig, ContentModule, ModuleRegistry, build_catalog
from seed_catalog.bootstrap import configure_logging
from seed_catalog.core import location_challenge


def make_cellar_module() -> ContentModule:
    module = ContentModule(
        "cellar",
        "The Flooded Cellar",
        description="A short starter dungeon under a ruined inn.",
        attribution="house module",
        level_min=1,
        level_max=2,
    )
    module.ability("bite", name="Bite", base_damage=2)
    module.item("rat-tail", name="Rat Tail", value=1)
    module.item("copper-key", name="Copper Key", value=5)
    module.loot_table(
        "giant-rat",
        name="Giant Rat",
        entries=[
            module.loot_entry("rat-tail", chance=0.5),
            module.loot_entry("copper-key", chance=0.1),
        ],
    )
    module.creature(
        "giant-rat",
        name="Giant Rat",
        max_hp=4,
        base_damage=2,
        challenge_rating=1,
        abilities=["bite"],
        loot_table="giant-rat",
        gold=(0, 3),
    )
    module.location("stairs", name="Cellar Stairs", exits={"down": "cellar"}, position=(0, 0, 0))
    module.location(
        "cellar",
        name="Flooded Cellar",
        creatures=["giant-rat"],
        exits={"up": "stairs"},
        position=(0, 0, -1),
    )
    module.chest("crate", location="cellar", name="Rotting Crate", loot_table="giant-rat", gold_amount=4)
    return module


def main() -> None:
    config = CatalogConfig(log_level="INFO", rng_seed=7)
    configure_logging(config)
    catalog = build_catalog(config, modules=ModuleRegistry([make_cellar_module()]))

    with catalog.uow_factory() as uow:
        cellar = uow.locations.find_by_id("location-cellar-cellar")
        residents = [uow.creatures.find_by_id(cid) for cid in cellar.creature_ids]
        crate = uow.chests.find_by_id("chest-cellar-crate")
    budget = location_challenge(c.challenge_rating for c in residents if c is not None)

    kills = [catalog.loot.resolve_kill(c, catalog.rng) for c in residents if c is not None]
    opened = catalog.loot.resolve_chest(crate, catalog.rng)
    forest = catalog.encounters.roll("temperate deciduous forest", budget, catalog.rng)
    cellar_roll = catalog.encounters.roll(None, budget, catalog.rng, indoor=True)

    print(
        json.dumps(
            {
                "reports": [r.summary() for r in catalog.reports],
                "budget": budget,
                "kills": [
                    {"creature": k.source_id, "gold": k.gold, "drops": [d._asdict() for d in k.drops]}
                    for k in kills
                ],
                "crate": {"gold": opened.gold, "drops": [d._asdict() for d in opened.drops]},
                "forest": [s._asdict() for s in forest.spawns],
                "cellar": {
                    "table": cellar_roll.table_key,
                    "spawns": [s._asdict() for s in cellar_roll.spawns],
                },
            },
            indent=2,
        )
    )


if __name__ == "__main__":
    main()
