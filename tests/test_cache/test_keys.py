"""Tests for cache key generation."""

import pytest

from hubdown.cache.keys import canonical_json, hash_text, make_cache_key


def sample_stage():
    return lambda document: document


class TestHashText:
    def test_deterministic(self):
        assert hash_text("abc") == hash_text("abc")

    def test_returns_hex_string(self):
        h = hash_text("test")
        assert len(h) == 64  # SHA256 hex digest
        assert all(c in "0123456789abcdef" for c in h)


class TestCanonicalJson:
    def test_sorted_at_every_level(self):
        a = {"b": {"y": 1, "x": 2}, "a": [1, {"d": 1, "c": 2}]}
        b = {"a": [1, {"c": 2, "d": 1}], "b": {"x": 2, "y": 1}}
        assert canonical_json(a) == canonical_json(b)
        assert canonical_json(a) == '{"a":[1,{"c":2,"d":1}],"b":{"x":2,"y":1}}'

    def test_callables_by_qualified_name(self):
        expected = f'{{"f":"{sample_stage.__module__}.sample_stage"}}'
        assert canonical_json({"f": sample_stage}) == expected

    def test_mixed_key_types(self):
        assert canonical_json({"x": {1: "a", "b": 2, None: 3}}) == '{"x":{"1":"a","b":2,"null":3}}'

    def test_tuples_as_lists(self):
        assert canonical_json({"t": (1, {2: "x"})}) == '{"t":[1,{"2":"x"}]}'

    def test_default_repr_rejected(self):
        with pytest.raises(TypeError, match="Opaque"):
            canonical_json({"o": Opaque()})

    def test_own_str_used(self):
        assert canonical_json({"o": Labelled()}) == '{"o":"labelled"}'

    def test_sets_sorted(self):
        assert canonical_json({"s": {"b", "a"}}) == '{"s":["a","b"]}'


class Opaque:
    pass


class Labelled:
    def __str__(self):
        return "labelled"


class TestMakeCacheKey:
    def test_deterministic(self):
        assert make_cache_key("# Hi", {"a": 1}) == make_cache_key("# Hi", {"a": 1})

    def test_order_independent(self):
        k1 = make_cache_key("doc", {"frontmatter": True, "ignore": ["slug"], "x": {"a": 1, "b": 2}})
        k2 = make_cache_key("doc", {"x": {"b": 2, "a": 1}, "ignore": ["slug"], "frontmatter": True})
        assert k1 == k2

    def test_store_handle_excluded(self):
        assert make_cache_key("doc", {"a": 1, "cache": object()}) == make_cache_key(
            "doc", {"a": 1, "cache": object()}
        )
        assert make_cache_key("doc", {"a": 1, "cache": object()}) == make_cache_key(
            "doc", {"a": 1}
        )

    def test_empty_options_hash_document_alone(self):
        assert make_cache_key("doc", {}) == hash_text("doc")
        assert make_cache_key("doc", None) == hash_text("doc")
        assert make_cache_key("doc", {"cache": object()}) == hash_text("doc")

    def test_options_appended_after_document(self):
        assert make_cache_key("doc", {"a": 1}) == hash_text('doc{"a":1}')

    def test_different_inputs_different_keys(self):
        assert make_cache_key("doc", {"a": 1}) != make_cache_key("doc", {"a": 2})
        assert make_cache_key("doc1", {}) != make_cache_key("doc2", {})

    def test_does_not_mutate_options(self):
        store = object()
        options = {"cache": store, "a": 1}
        make_cache_key("doc", options)
        assert options == {"cache": store, "a": 1}
