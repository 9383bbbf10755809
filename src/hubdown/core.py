"""Top-level entry points: convert(), convert_sync(), convert_batch()."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping, Sequence
from typing import Any

from hubdown.cache.base import Store
from hubdown.cache.keys import make_cache_key
from hubdown.cache.results import Found, StoreError
from hubdown.errors.exceptions import KeyNotFoundError
from hubdown.frontmatter import split_frontmatter
from hubdown.pipeline.builder import get_pipeline
from hubdown.types import ConvertOptions

logger = logging.getLogger(__name__)


async def convert(
    markdown: str,
    options: ConvertOptions | Mapping[str, Any] | None = None,
    **kwargs: Any,
) -> dict[str, Any]:
    """Render markdown to HTML, memoized through ``options["cache"]`` if given.

    Returns a dict with ``content`` (the HTML). With ``frontmatter`` enabled
    the metadata fields are included too; a metadata field named
    ``content`` is overwritten by the rendered body.

    With a store, option values must have a stable text form (JSON types,
    callables, objects with their own ``__str__``/``__repr__``); others
    raise ``TypeError`` while deriving the key.
    """
    opts = ConvertOptions.from_input(options, **kwargs)
    store: Store | None = opts.cache

    if store is not None:
        key = make_cache_key(markdown, opts.hashable())
        cached = await _lookup(store, key)
        if cached is not None:
            logger.debug("Cache hit for %s", key[:12])
            return cached.value

    result: dict[str, Any] = {}
    body = markdown
    if opts.frontmatter:
        metadata, body = split_frontmatter(markdown)
        result.update(metadata)

    pipeline = get_pipeline(opts.run_before, opts.ignore)
    result["content"] = await pipeline.process(body)

    if store is not None:
        await store.put(key, result)

    return result


async def _lookup(store: Store, key: str) -> Found | None:
    """Cache read that never fails the conversion."""
    try:
        outcome = await store.get(key)
    except KeyNotFoundError:
        return None
    except Exception as e:
        logger.warning("Cache lookup failed for %s, converting anyway: %s", key[:12], e)
        return None

    if isinstance(outcome, Found):
        return outcome
    if isinstance(outcome, StoreError):
        logger.warning(
            "Cache lookup failed for %s, converting anyway: %s", key[:12], outcome.cause
        )
    return None


# ── Convenience wrappers ──


def convert_sync(
    markdown: str,
    options: ConvertOptions | Mapping[str, Any] | None = None,
    **kwargs: Any,
) -> dict[str, Any]:
    """Convert markdown (sync wrapper)."""
    return asyncio.run(convert(markdown, options, **kwargs))


async def convert_batch(
    documents: Sequence[str],
    options: ConvertOptions | Mapping[str, Any] | None = None,
    max_workers: int = 5,
    return_exceptions: bool = False,
    **kwargs: Any,
) -> list[Any]:
    """Convert many documents concurrently; results keep input order.

    With ``return_exceptions`` a failed document yields its exception in
    place of a result instead of failing the batch.
    """
    opts = ConvertOptions.from_input(options, **kwargs)
    semaphore = asyncio.Semaphore(max_workers)

    async def worker(markdown: str) -> dict[str, Any]:
        async with semaphore:
            return await convert(markdown, opts)

    results = await asyncio.gather(
        *[worker(doc) for doc in documents], return_exceptions=return_exceptions
    )
    for i, result in enumerate(results):
        if isinstance(result, Exception):
            logger.error("Document %d failed: %s", i, result)
    return list(results)
