from .encounters import EncounterSelector, location_challenge, weighted_choice
from .errors import (
    BatchOrderError,
    ContentConfigError,
    ContentError,
    DanglingReferenceError,
    DuplicateContentError,
    DuplicateModuleError,
    InvalidContentError,
    InvalidTableError,
    NoEncounterTableError,
    UnknownLootTableError,
)
from .loot import LootResolver, roll_gold, roll_loot
from .module import ContentModule
from .normalize import GENERIC, INDOOR, content_id
from .provisioner import CatalogProvisioner, ProvisionConfig
from .registry import ModuleRegistry
from .rng import SynchronizedRandom
from .types import (
    PROVISION_ORDER,
    ContentBatch,
    ContentKind,
    Drop,
    EncounterEntry,
    EncounterRoll,
    LootEntry,
    LootResult,
    LootTable,
    ProvisionReport,
    RandomSource,
    Spawn,
)

__all__ = [
    "CatalogProvisioner",
    "ProvisionConfig",
    "ProvisionReport",
    "ContentModule",
    "ModuleRegistry",
    "ContentBatch",
    "ContentKind",
    "PROVISION_ORDER",
    "content_id",
    "LootResolver",
    "LootEntry",
    "LootTable",
    "Drop",
    "roll_loot",
    "roll_gold",
    "LootResult",
    "EncounterSelector",
    "EncounterEntry",
    "EncounterRoll",
    "Spawn",
    "weighted_choice",
    "location_challenge",
    "GENERIC",
    "INDOOR",
    "RandomSource",
    "SynchronizedRandom",
    "ContentError",
    "ContentConfigError",
    "BatchOrderError",
    "DanglingReferenceError",
    "DuplicateContentError",
    "DuplicateModuleError",
    "InvalidContentError",
    "InvalidTableError",
    "NoEncounterTableError",
    "UnknownLootTableError",
]
