from .bootstrap import Catalog, CatalogConfig, build_catalog
from .core.encounters import EncounterSelector
from .core.loot import LootResolver
from .core.module import ContentModule
from .core.provisioner import CatalogProvisioner, ProvisionConfig
from .core.registry import ModuleRegistry
from .core.rng import SynchronizedRandom

__all__ = [
    "Catalog",
    "CatalogConfig",
    "build_catalog",
    "CatalogProvisioner",
    "ProvisionConfig",
    "ContentModule",
    "ModuleRegistry",
    "LootResolver",
    "EncounterSelector",
    "SynchronizedRandom",
]
