"""Store contract used by the converter."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from hubdown.cache.results import Lookup


@runtime_checkable
class Store(Protocol):
    """Async key/value store for conversion results.

    ``get`` reports a miss as ``NotFound`` and failures as ``StoreError``
    rather than raising. ``put`` raises on failure.
    """

    async def get(self, key: str) -> Lookup: ...

    async def put(self, key: str, value: dict[str, Any]) -> None: ...
