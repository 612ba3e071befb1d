"""Tests for JSON export and the load/export round trip."""

import json
import os

import pytest

from json_data_checker.exporter import export_json, export_payload, write_export_file
from json_data_checker.records import DocumentShape, build_records
from json_data_checker.store import CollectionStore


class TestExportPayload:
    def test_array_shape(self):
        records = build_records([{"a": 1}, {"b": 2}])
        assert export_payload(records, DocumentShape.ARRAY) == [{"a": 1}, {"b": 2}]

    def test_single_document_exported_directly(self, chat_document):
        records = build_records([chat_document])
        assert export_payload(records, DocumentShape.CONTAINER) == chat_document

    def test_single_document_that_lost_its_shape_is_wrapped(self):
        records = build_records([{"messages": []}])
        records[0].edited = {"title": "x"}
        assert export_payload(records, DocumentShape.CONTAINER) == [{"title": "x"}]

    def test_single_document_after_record_delete(self):
        assert export_payload([], DocumentShape.CONTAINER) == []


class TestExportJson:
    def test_key_order_not_sorted(self):
        records = build_records([{"z": 1, "a": 2}])
        text = export_json(records)
        assert text.index('"z"') < text.index('"a"')

    def test_pretty_printed(self):
        text = export_json(build_records([{"a": 1}]))
        assert text == '[\n  {\n    "a": 1\n  }\n]'

    @pytest.mark.parametrize("number", [float("nan"), float("inf"), float("-inf")])
    def test_non_finite_numbers_refused(self, number):
        records = build_records([{"score": 1}])
        records[0].edited = {"score": number}
        with pytest.raises(ValueError):
            export_json(records)

    def test_unicode_kept(self):
        text = export_json(build_records([{"name": "한글"}]))
        assert "한글" in text


class TestRoundTrip:
    @pytest.mark.parametrize(
        "payload",
        [
            [{"b": 1, "a": {"y": [1, 2, {"z": None}], "x": True}}, {"c": "s"}],
            {"messages": [{"role": "user", "content": "hi"}, {"role": "assistant", "content": "yo"}]},
            {"config": {"depth": {"deeper": 1.5}}},
            [],
        ],
    )
    def test_load_export_load(self, payload):
        first = CollectionStore()
        first.load(payload)
        second = CollectionStore()
        second.load_text(first.export_json())
        assert [r.edited for r in second.records] == [r.edited for r in first.records]
        for a, b in zip(first.records, second.records):
            assert json.dumps(a.edited) == json.dumps(b.edited)

    def test_after_edits(self, nested_record):
        store = CollectionStore()
        store.load([nested_record, {"other": 1}])
        store.set_leaf("item-0", ("meta", "score"), 10)
        store.delete_node("item-0", ("notes",))
        store.reorder(1, 0)
        reloaded = CollectionStore()
        reloaded.load_text(store.export_json())
        assert [r.edited for r in reloaded.records] == [r.edited for r in store.records]


class TestWriteExportFile:
    def test_default_name(self):
        path = write_export_file("[]")
        assert os.path.basename(path) == "edited_data.json"
        with open(path, encoding="utf-8") as f:
            assert f.read() == "[]"

    def test_extension_added(self):
        path = write_export_file("{}", "my_export")
        assert path.endswith("my_export.json")
