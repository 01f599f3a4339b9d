"""Tests for the frontmatter merge primitives."""

import logging

import pytest

from langchain_templatekit.errors import MalformedDeleteListError
from langchain_templatekit.merger import (
    DELETE_KEY,
    ValueKind,
    apply_delete_list,
    delete_list_problem,
    extract_delete_list,
    merge_frontmatter,
    merge_into_existing,
    parse,
    strip_reserved_keys,
    value_kind,
)


class TestParse:
    def test_parses_block(self):
        assert parse("delete: [a]\nx: 1") == {"delete": ["a"], "x": 1}

    def test_non_mapping_is_empty(self):
        assert parse("42") == {}


class TestValueKind:
    def test_lists_and_tuples_are_sequences(self):
        assert value_kind(["a"]) is ValueKind.SEQUENCE
        assert value_kind(("a",)) is ValueKind.SEQUENCE

    def test_everything_else_is_scalar(self):
        for value in ("a", 1, 1.5, True, None, {"nested": 1}):
            assert value_kind(value) is ValueKind.SCALAR


class TestExtractDeleteList:
    def test_returns_listed_keys(self):
        assert extract_delete_list({"delete": ["author", "tags"]}) == {"author", "tags"}

    def test_absent_is_empty(self):
        assert extract_delete_list({"x": 1}) == frozenset()

    def test_null_is_empty(self):
        assert extract_delete_list({"delete": None}) == frozenset()

    def test_scalar_is_empty_with_warning(self, caplog):
        with caplog.at_level(logging.WARNING, logger="langchain_templatekit.merger"):
            result = extract_delete_list({"delete": "not-an-array"}, source="a")

        assert result == frozenset()
        assert "not-an-array" in caplog.text
        assert "a:" in caplog.text

    def test_non_string_items_are_malformed(self):
        assert extract_delete_list({"delete": ["ok", 3]}) == frozenset()

    def test_strict_raises(self):
        with pytest.raises(MalformedDeleteListError, match="delete"):
            extract_delete_list({"delete": "author"}, strict=True)

    def test_strict_accepts_valid_list(self):
        assert extract_delete_list({"delete": ["a"]}, strict=True) == {"a"}

    def test_problem_is_none_when_valid(self):
        assert delete_list_problem({"delete": []}) is None
        assert delete_list_problem({}) is None

    def test_problem_describes_malformed_value(self):
        problem = delete_list_problem({"delete": {"a": 1}})

        assert problem is not None
        assert "dict" in problem


class TestMergeFrontmatter:
    def test_incoming_overrides_scalars(self):
        assert merge_frontmatter({"a": 1, "b": 2}, {"b": 3}) == {"a": 1, "b": 3}

    def test_concatenates_sequences_base_first(self):
        merged = merge_frontmatter({"tags": ["a", "b"]}, {"tags": ["c"]})

        assert merged == {"tags": ["a", "b", "c"]}

    def test_keeps_duplicates(self):
        merged = merge_frontmatter({"tags": ["a"]}, {"tags": ["a"]})

        assert merged["tags"] == ["a", "a"]

    def test_mixed_kinds_take_incoming(self):
        assert merge_frontmatter({"x": ["a"]}, {"x": "b"}) == {"x": "b"}
        assert merge_frontmatter({"x": "a"}, {"x": ["b"]}) == {"x": ["b"]}

    def test_key_order(self):
        merged = merge_frontmatter({"a": 1, "b": 2}, {"c": 3, "a": 4})

        assert list(merged) == ["a", "b", "c"]

    def test_does_not_mutate_inputs(self):
        base = {"tags": ["a"]}
        incoming = {"tags": ["b"], "new": 1}

        merged = merge_frontmatter(base, incoming)
        merged["tags"].append("z")

        assert base == {"tags": ["a"]}
        assert incoming == {"tags": ["b"], "new": 1}

    def test_null_overrides(self):
        assert merge_frontmatter({"a": 1}, {"a": None}) == {"a": None}


class TestApplyDeleteList:
    def test_removes_excluded_keys(self):
        result = apply_delete_list({"a": 1, "b": 2}, {"a"}, set())

        assert result == {"b": 2}

    def test_explicit_keys_survive(self):
        result = apply_delete_list({"a": 1, "b": 2}, {"a", "b"}, {"a"})

        assert result == {"a": 1}

    def test_unknown_exclusion_is_noop(self):
        assert apply_delete_list({"a": 1}, {"missing"}, set()) == {"a": 1}


class TestStripReservedKeys:
    def test_removes_delete(self):
        assert strip_reserved_keys({DELETE_KEY: ["a"], "x": 1}) == {"x": 1}

    def test_idempotent(self):
        metadata = {DELETE_KEY: "x", "a": [1], "b": None}

        once = strip_reserved_keys(metadata)

        assert strip_reserved_keys(once) == once


class TestMergeIntoExisting:
    def test_existing_values_win(self):
        merged, conflicts, added = merge_into_existing(
            {"author": "Ann", "tags": ["mine"]},
            {"author": "John", "tags": ["base"], "category": "blog"},
        )

        assert merged == {"author": "Ann", "tags": ["mine"], "category": "blog"}
        assert conflicts == ["author", "tags"]
        assert added == ["category"]

    def test_added_keys_follow_existing_keys(self):
        merged, _, _ = merge_into_existing({"b": 1}, {"a": 2, "c": 3})

        assert list(merged) == ["b", "a", "c"]

    def test_empty_existing_takes_template(self):
        merged, conflicts, added = merge_into_existing({}, {"a": 1, "b": [1]})

        assert merged == {"a": 1, "b": [1]}
        assert conflicts == []
        assert added == ["a", "b"]

    def test_does_not_mutate_inputs(self):
        existing = {"a": 1}
        template = {"tags": ["x"]}

        merged, _, _ = merge_into_existing(existing, template)
        merged["tags"].append("y")

        assert existing == {"a": 1}
        assert template == {"tags": ["x"]}
