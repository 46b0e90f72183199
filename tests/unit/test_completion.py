"""Unit tests for the slug completion handler."""

from __future__ import annotations

from cspquery.handlers.complete import handle

INDEX = {
    "policy-csp-foo": "https://example.com/policy-csp-foo",
    "policy-csp-bar": "https://example.com/policy-csp-bar",
    "policy-csp-FooBar": "https://example.com/policy-csp-FooBar",
}


class TestCompletion:
    def test_substring_filter(self, memory_store) -> None:
        memory_store.save({k: v for k, v in INDEX.items() if k != "policy-csp-FooBar"})
        assert [item.value for item in handle("foo", memory_store)] == ["policy-csp-foo"]

    def test_case_insensitive(self, memory_store) -> None:
        memory_store.save(INDEX)
        assert [item.value for item in handle("FOO", memory_store)] == [
            "policy-csp-foo",
            "policy-csp-FooBar",
        ]

    def test_item_fields(self, memory_store) -> None:
        memory_store.save(INDEX)
        item = handle("bar", memory_store)[0]
        assert item.label == "policy-csp-bar"
        assert item.value == "policy-csp-bar"
        assert item.hint == "https://example.com/policy-csp-bar"

    def test_empty_partial_returns_all_in_order(self, memory_store) -> None:
        memory_store.save(INDEX)
        assert [item.value for item in handle("", memory_store)] == list(INDEX)

    def test_missing_cache_returns_nothing(self, memory_store) -> None:
        assert handle("foo", memory_store) == []
