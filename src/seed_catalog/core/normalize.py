from __future__ import annotations

import json
import re
from typing import Any

from .errors import InvalidContentError
from .types import ContentKind

INDOOR = "INDOOR"
GENERIC = "GENERIC"


def content_id(kind: ContentKind | str, module_id: str, suffix: str) -> str:
    prefix = kind.value if isinstance(kind, ContentKind) else str(kind)
    module_id = (module_id or "").strip()
    suffix = (suffix or "").strip()
    if not module_id or not suffix:
        raise InvalidContentError(f"cannot build {prefix} id from module={module_id!r} suffix={suffix!r}")
    return f"{prefix}-{module_id}-{suffix}"


def normalize_context_key(value: str | None) -> str:
    value = (value or "").strip().upper()
    return re.sub(r"[\s-]+", "_", value)


def dump_json(data: Any) -> str:
    return json.dumps(data, ensure_ascii=True, separators=(",", ":"))


def parse_json_dict(text: str | None) -> dict[str, Any]:
    if not text:
        return {}
    try:
        data = json.loads(text)
    except Exception:
        return {}
    return data if isinstance(data, dict) else {}


def parse_json_list(text: str | None) -> list[Any]:
    if not text:
        return []
    try:
        data = json.loads(text)
    except Exception:
        return []
    return data if isinstance(data, list) else []
