"""Tests for path resolution and immutable updates."""

import pytest

from json_data_checker.accessors import (
    MISSING,
    delete_value_by_path,
    get_value_by_path,
    has_path,
    resolve_path,
    set_value_by_path,
)
from json_data_checker.errors import StalePathReference


class TestResolve:
    def test_nested(self, nested_record):
        assert get_value_by_path(nested_record, ("meta", "owner", "id")) == 7
        assert get_value_by_path(nested_record, ("meta", "tags", 1)) == "b"

    def test_root(self, nested_record):
        assert get_value_by_path(nested_record, ()) is nested_record

    def test_missing_key(self, nested_record):
        assert get_value_by_path(nested_record, ("meta", "nope")) is MISSING
        assert not has_path(nested_record, ("meta", "nope"))

    def test_none_value_is_present(self, nested_record):
        assert get_value_by_path(nested_record, ("notes",)) is None
        assert has_path(nested_record, ("notes",))

    def test_index_out_of_range(self, nested_record):
        assert get_value_by_path(nested_record, ("meta", "tags", 2)) is MISSING
        assert get_value_by_path(nested_record, ("meta", "tags", -1)) is MISSING

    def test_key_on_array_and_index_on_object(self, nested_record):
        assert get_value_by_path(nested_record, ("meta", "tags", "0")) is MISSING
        assert get_value_by_path({"0": 1}, (0,)) is MISSING

    def test_resolve_raises_stale(self):
        with pytest.raises(StalePathReference) as info:
            resolve_path({"a": {"b": 1}}, ("a", "c", "d"))
        assert info.value.depth == 1


class TestSetValue:
    def test_does_not_mutate_input(self, nested_record):
        new = set_value_by_path(nested_record, ("meta", "owner", "id"), 8)
        assert nested_record["meta"]["owner"]["id"] == 7
        assert new["meta"]["owner"]["id"] == 8

    def test_siblings_are_shared(self, nested_record):
        new = set_value_by_path(nested_record, ("meta", "owner", "id"), 8)
        assert new is not nested_record
        assert new["meta"] is not nested_record["meta"]
        assert new["meta"]["tags"] is nested_record["meta"]["tags"]

    def test_key_order_preserved(self):
        data = {"z": 1, "a": 2, "m": 3}
        new = set_value_by_path(data, ("a",), 9)
        assert list(new) == ["z", "a", "m"]

    def test_array_element(self):
        data = {"xs": [{"v": 1}, {"v": 2}, {"v": 3}]}
        new = set_value_by_path(data, ("xs", 1, "v"), 20)
        assert new["xs"] == [{"v": 1}, {"v": 20}, {"v": 3}]
        assert new["xs"][0] is data["xs"][0]
        assert new["xs"][2] is data["xs"][2]

    def test_root_path_returns_value(self):
        assert set_value_by_path({"a": 1}, (), 5) == 5

    def test_stale_path_raises(self):
        with pytest.raises(StalePathReference):
            set_value_by_path({"a": 1}, ("b",), 2)


class TestDeleteValue:
    def test_delete_key(self):
        data = {"a": 1, "b": {"c": 2}, "d": 3}
        new = delete_value_by_path(data, ("b",))
        assert new == {"a": 1, "d": 3}
        assert list(new) == ["a", "d"]
        assert data == {"a": 1, "b": {"c": 2}, "d": 3}

    def test_delete_index(self):
        data = {"xs": [1, 2, 3]}
        new = delete_value_by_path(data, ("xs", 0))
        assert new == {"xs": [2, 3]}
        assert data["xs"] == [1, 2, 3]

    def test_delete_missing_raises(self):
        with pytest.raises(StalePathReference):
            delete_value_by_path({"xs": [1]}, ("xs", 3))

    def test_delete_root_raises(self):
        with pytest.raises(StalePathReference):
            delete_value_by_path({"a": 1}, ())
