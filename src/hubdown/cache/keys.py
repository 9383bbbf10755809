"""Cache key generation — content-addressed over document and options."""

from __future__ import annotations

import hashlib
import json
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel

# Option holding the store handle; never hashed
_STORE_OPTION = "cache"


def make_cache_key(markdown: str, options: Mapping[str, Any] | None = None) -> str:
    """SHA256 of the document followed by the canonical options JSON.

    The store handle is dropped first. An empty remainder adds nothing,
    so ``{}`` and ``None`` hash like the bare document.
    """
    hashable = dict(options or {})
    hashable.pop(_STORE_OPTION, None)
    options_str = canonical_json(hashable) if hashable else ""
    return hash_text(markdown + options_str)


def canonical_json(value: Any) -> str:
    """Deterministic JSON: keys sorted at every level, fixed separators.

    Mapping keys are turned into strings first, as JSON would, so mixed
    key types still sort.
    """
    return json.dumps(
        _string_keys(value),
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
        default=_json_default,
    )


def hash_text(text: str) -> str:
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


def _string_keys(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {_json_key(k): _string_keys(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_string_keys(v) for v in value]
    return value


def _json_key(key: Any) -> str:
    if isinstance(key, str):
        return key
    if key is None or isinstance(key, (bool, int, float)):
        return json.dumps(key)
    return str(key)


def _json_default(obj: Any) -> Any:
    if isinstance(obj, BaseModel):
        return _string_keys(obj.model_dump(by_alias=True))
    if isinstance(obj, (set, frozenset)):
        return sorted(obj, key=canonical_json)
    if callable(obj):
        module = getattr(obj, "__module__", None) or type(obj).__module__
        name = getattr(obj, "__qualname__", None) or type(obj).__qualname__
        return f"{module}.{name}"
    cls = type(obj)
    if cls.__str__ is object.__str__ and cls.__repr__ is object.__repr__:
        # The default repr embeds a memory address
        raise TypeError(f"{cls.__qualname__} option value has no stable cache key")
    return str(obj)
