"""Cache subsystem — content-addressed keys and pluggable result stores."""

from hubdown.cache.base import Store
from hubdown.cache.disk import DiskStore
from hubdown.cache.keys import canonical_json, hash_text, make_cache_key
from hubdown.cache.memory import MemoryStore
from hubdown.cache.results import Found, Lookup, NotFound, StoreError
from hubdown.cache.stats import CacheStats

__all__ = [
    "Store",
    "MemoryStore",
    "DiskStore",
    "Found",
    "NotFound",
    "StoreError",
    "Lookup",
    "CacheStats",
    "canonical_json",
    "hash_text",
    "make_cache_key",
]
