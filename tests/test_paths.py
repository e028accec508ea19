"""Tests for dotcookie.paths — dotted name splitting and nested access."""

import pytest

from dotcookie.paths import CookiePath, get_at, has_at, insert_at, remove_at, split


class TestSplit:
    def test_single_segment(self) -> None:
        path = split("prefs")
        assert path.root == "prefs"
        assert path.parts == ("prefs",)
        assert path.subpath == ()
        assert path.is_nested is False

    def test_dotted(self) -> None:
        path = split("prefs.theme")
        assert path.root == "prefs"
        assert path.parts == ("prefs", "theme")
        assert path.subpath == ("theme",)
        assert path.is_nested is True

    def test_empty_name(self) -> None:
        path = split("")
        assert path.root == ""
        assert path.parts == ("",)

    def test_empty_segments_preserved(self) -> None:
        assert split(".a..b.").parts == ("", "a", "", "b", "")

    def test_frozen(self) -> None:
        path = split("a.b")
        with pytest.raises(AttributeError):
            path.name = "c"  # type: ignore[misc]

    def test_keeps_original_name(self) -> None:
        assert split("a.b.c") == CookiePath(name="a.b.c", parts=("a", "b", "c"))


class TestGetAt:
    def test_nested_mapping(self) -> None:
        assert get_at({"b": {"c": 5}}, ["b", "c"]) == 5

    def test_missing_returns_default(self) -> None:
        assert get_at({"b": {}}, ["b", "c"]) is None
        assert get_at({"b": {}}, ["b", "c"], "fallback") == "fallback"

    def test_empty_path_returns_structure(self) -> None:
        structure = {"a": 1}
        assert get_at(structure, []) is structure

    def test_list_index(self) -> None:
        assert get_at({"items": ["x", "y"]}, ["items", "1"]) == "y"

    def test_list_bad_index(self) -> None:
        assert get_at({"items": ["x"]}, ["items", "first"]) is None
        assert get_at({"items": ["x"]}, ["items", "3"]) is None

    def test_through_scalar(self) -> None:
        assert get_at({"a": "text"}, ["a", "b"]) is None


class TestHasAt:
    def test_present_none_counts(self) -> None:
        assert has_at({"a": None}, ["a"]) is True

    def test_absent(self) -> None:
        assert has_at({"a": 1}, ["b"]) is False

    def test_literal_dotted_key(self) -> None:
        assert has_at({"a.b": 1}, ["a.b"]) is True


class TestInsertAt:
    def test_creates_intermediates(self) -> None:
        assert insert_at({}, ["b", "c"], 5) == {"b": {"c": 5}}

    def test_merges_with_siblings(self) -> None:
        assert insert_at({"b": 1}, ["c"], 2) == {"b": 1, "c": 2}

    def test_does_not_mutate_input(self) -> None:
        original = {"b": {"c": 1}}
        insert_at(original, ["b", "d"], 2)
        assert original == {"b": {"c": 1}}

    def test_replaces_scalar_intermediate(self) -> None:
        assert insert_at({"b": "flat"}, ["b", "c"], 1) == {"b": {"c": 1}}

    def test_non_mapping_root_replaced(self) -> None:
        assert insert_at(["x"], ["a"], 1) == {"a": 1}

    def test_assigns_list_index(self) -> None:
        assert insert_at({"items": ["a", "b"]}, ["items", "1"], "c") == {"items": ["a", "c"]}

    def test_descends_through_list(self) -> None:
        structure = {"items": [{"sku": "A1", "qty": 1}]}
        result = insert_at(structure, ["items", "0", "qty"], 3)
        assert result == {"items": [{"sku": "A1", "qty": 3}]}

    def test_list_root(self) -> None:
        assert insert_at(["x", "y"], ["0"], "z") == ["z", "y"]

    def test_index_equal_to_length_appends(self) -> None:
        assert insert_at({"items": ["a"]}, ["items", "1"], "b") == {"items": ["a", "b"]}

    def test_out_of_range_index_replaces_list(self) -> None:
        assert insert_at({"items": ["a"]}, ["items", "5"], "b") == {"items": {"5": "b"}}

    def test_list_input_not_mutated(self) -> None:
        original = {"items": ["a", "b"]}
        insert_at(original, ["items", "0"], "z")
        assert original == {"items": ["a", "b"]}

    def test_overwrites_leaf(self) -> None:
        assert insert_at({"a": {"b": 1}}, ["a"], "x") == {"a": "x"}


class TestRemoveAt:
    def test_removes_leaf(self) -> None:
        assert remove_at({"b": 1, "c": 2}, ["b"]) == {"c": 2}

    def test_empty_parent_kept(self) -> None:
        assert remove_at({"a": {"b": 1}}, ["a", "b"]) == {"a": {}}

    def test_missing_path_unchanged(self) -> None:
        assert remove_at({"a": 1}, ["x", "y"]) == {"a": 1}

    def test_does_not_mutate_input(self) -> None:
        original = {"a": {"b": 1}}
        remove_at(original, ["a", "b"])
        assert original == {"a": {"b": 1}}

    def test_list_element_shifts_later_siblings(self) -> None:
        assert remove_at({"items": ["x", "y", "z"]}, ["items", "0"]) == {"items": ["y", "z"]}
