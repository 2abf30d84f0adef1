from __future__ import annotations


class ContentError(Exception):
    pass


class ContentConfigError(ContentError):
    """Authoring mistake in module or table data; aborts startup."""


class InvalidContentError(ContentConfigError):
    pass


class InvalidTableError(ContentConfigError):
    def __init__(self, table_key: str, reason: str):
        super().__init__(f"{table_key}: {reason}")
        self.table_key = table_key
        self.reason = reason


class DuplicateContentError(ContentConfigError):
    def __init__(self, entity_id: str):
        super().__init__(f"duplicate content id {entity_id!r}")
        self.entity_id = entity_id


class BatchOrderError(ContentConfigError):
    pass


class DanglingReferenceError(ContentConfigError):
    def __init__(self, entity_id: str, kind: str, missing_id: str):
        super().__init__(f"{entity_id} references missing {kind} {missing_id!r}")
        self.entity_id = entity_id
        self.kind = kind
        self.missing_id = missing_id


class NoEncounterTableError(ContentConfigError):
    def __init__(self, context_key: str):
        super().__init__(f"no encounter table for {context_key!r} and no GENERIC fallback")
        self.context_key = context_key


class UnknownLootTableError(ContentConfigError, KeyError):
    def __init__(self, table_id: str):
        super().__init__(f"loot table {table_id!r} is not registered")
        self.table_id = table_id

    def __str__(self) -> str:
        return self.args[0]


class DuplicateModuleError(ContentConfigError):
    def __init__(self, module_id: str):
        super().__init__(f"content module {module_id!r} is already registered")
        self.module_id = module_id
