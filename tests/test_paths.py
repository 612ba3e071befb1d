"""Tests for structural paths and their display form."""

import pytest

from json_data_checker.paths import (
    ROOT_LABEL,
    escape_path_segment,
    format_path,
    is_index,
    parse_path,
    path_label,
    split_path,
)


class TestFormatPath:
    def test_root(self):
        assert format_path(()) == ROOT_LABEL

    def test_keys_and_indices(self):
        assert format_path(("messages", 0, "content")) == "messages.0.content"

    def test_dotted_key_is_escaped(self):
        assert format_path(("responses", "gpt-3.5-turbo")) == "responses.gpt-3\\.5-turbo"

    def test_digit_key_is_escaped(self):
        """A string key "0" must not display like index 0."""
        assert escape_path_segment("0") == "\\0"
        assert escape_path_segment(0) == "0"

    def test_empty_key_has_display_form(self):
        assert format_path(("a", "")) == "a.''"
        assert escape_path_segment("''") == "\\''"


class TestParsePath:
    def test_root_forms(self):
        assert parse_path("(root)") == ()
        assert parse_path("") == ()

    def test_indices_become_ints(self):
        assert parse_path("messages.0.content") == ("messages", 0, "content")

    @pytest.mark.parametrize(
        "path",
        [
            ("messages", 0, "content"),
            ("a.b", "c"),
            ("0", 0),
            ("back\\slash", 12, "x"),
            ("(root)",),
            ("ключ", "名前"),
            ("a", ""),
            ("", 0, ""),
            ("''", "x"),
        ],
    )
    def test_round_trip(self, path):
        assert parse_path(format_path(path)) == path

    def test_split_matches_parse(self):
        assert split_path("a\\.b.c") == ("a.b", "c")


class TestHelpers:
    def test_bool_is_not_index(self):
        assert is_index(3)
        assert not is_index(True)
        assert not is_index("3")

    def test_path_label(self):
        assert path_label(()) == "Root"
        assert path_label(("messages", 0)) == "0"
        assert path_label(("messages",)) == "messages"
