from __future__ import annotations

import logging
from typing import Iterable, Iterator

from .errors import DuplicateModuleError
from .module import ContentModule
from .provisioner import CatalogProvisioner
from .types import ProvisionReport

logger = logging.getLogger(__name__)


class ModuleRegistry:
    """Content modules known to one catalog, seeded in registration order.

    Build one at startup and pass it to ``build_catalog``; modules that
    reference another module's content must be registered after it.
    """

    def __init__(self, modules: Iterable[ContentModule] = ()):
        self._modules: dict[str, ContentModule] = {}
        self.register_all(modules)

    def register(self, module: ContentModule) -> None:
        if module.module_id in self._modules:
            raise DuplicateModuleError(module.module_id)
        self._modules[module.module_id] = module
        logger.debug("Registered content module %s (%s)", module.module_id, module.name)

    def register_all(self, modules: Iterable[ContentModule]) -> int:
        count = 0
        for module in modules:
            self.register(module)
            count += 1
        return count

    def get_all(self) -> list[ContentModule]:
        return list(self._modules.values())

    def find_by_id(self, module_id: str) -> ContentModule | None:
        return self._modules.get(module_id)

    def __contains__(self, module_id: object) -> bool:
        return module_id in self._modules

    def __iter__(self) -> Iterator[ContentModule]:
        return iter(list(self._modules.values()))

    def __len__(self) -> int:
        return len(self._modules)

    def seed_all(self, provisioner: CatalogProvisioner) -> list[ProvisionReport]:
        logger.info("Seeding %d content modules", len(self._modules))
        return provisioner.provision_all(self.get_all())
