"""Tests for custom header normalization."""

from a2a_relay.a2a.headers import normalize_headers
from a2a_relay.types import HeaderRow


class TestNormalizeHeaders:
    """Tests for normalize_headers."""

    def test_none_and_empty_give_empty_mapping(self):
        assert normalize_headers(None) == {}
        assert normalize_headers([]) == {}

    def test_key_value_rows(self):
        rows = [
            {"key": "Authorization", "value": "Bearer abc"},
            {"key": "X-Trace", "value": "t-1"},
        ]
        assert normalize_headers(rows) == {
            "Authorization": "Bearer abc",
            "X-Trace": "t-1",
        }

    def test_rows_with_empty_key_or_value_are_dropped(self):
        rows = [
            {"key": "", "value": "orphan"},
            {"key": "X-Empty", "value": ""},
            {"key": "X-Missing"},
            {"value": "no-key"},
            {"key": "X-Keep", "value": "yes"},
        ]
        assert normalize_headers(rows) == {"X-Keep": "yes"}

    def test_non_string_values_are_dropped(self):
        rows = [{"key": "X-Num", "value": 5}, {"key": None, "value": "v"}]
        assert normalize_headers(rows) == {}

    def test_last_duplicate_wins(self):
        rows = [
            {"key": "X-Env", "value": "staging"},
            {"key": "X-Env", "value": "prod"},
        ]
        assert normalize_headers(rows) == {"X-Env": "prod"}

    def test_table_rows_are_flattened(self):
        rows = [
            {"id": "row-1", "cells": {"Key": "X-Team", "Value": "search"}},
            {"id": "row-2", "cells": {"Key": "", "Value": "dropped"}},
        ]
        assert normalize_headers(rows) == {"X-Team": "search"}

    def test_mixed_row_types(self):
        rows = [
            HeaderRow(key="A", value="1"),
            ("B", "2"),
            {"key": "C", "value": "3"},
            "garbage",
        ]
        assert normalize_headers(rows) == {"A": "1", "B": "2", "C": "3"}

    def test_mapping_input(self):
        assert normalize_headers({"X-A": "1", "X-B": ""}) == {"X-A": "1"}

    def test_surviving_entries_do_not_depend_on_order(self):
        rows = [
            {"key": "A", "value": "1"},
            {"key": "", "value": "x"},
            {"key": "B", "value": "2"},
        ]
        assert normalize_headers(rows) == normalize_headers(list(reversed(rows)))
