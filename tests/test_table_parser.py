"""Tests for envelope unwrapping and table flattening."""

import json

import pytest

from adpulse.connectors.sheets.table_parser import (
    parse_cell,
    parse_response,
    parse_table,
    unwrap_envelope,
)
from adpulse.core.errors import FormatError, UpstreamError
from tests.sheet_fixtures import gviz_payload, wrap


class TestParseCell:
    def test_null_cell_is_empty_string(self):
        assert parse_cell(None) == ""

    def test_null_value_is_empty_string(self):
        assert parse_cell({"v": None, "f": "ignored"}) == ""

    def test_date_cell_is_iso_with_one_based_month(self):
        assert parse_cell({"v": "Date(2024,0,15)"}) == "2024-01-15"

    def test_date_cell_pads_month_and_day(self):
        assert parse_cell({"v": "Date(2023,8,3)"}) == "2023-09-03"

    def test_december_rolls_to_twelve(self):
        assert parse_cell({"v": "Date(2024,11,31)"}) == "2024-12-31"

    def test_unmatched_date_falls_back_to_formatted(self):
        cell = {"v": "Date(2024,0,15,10,30,0)", "f": "15/01/2024 10:30:00"}
        assert parse_cell(cell) == "15/01/2024 10:30:00"

    def test_unmatched_date_without_formatted_keeps_raw(self):
        assert parse_cell({"v": "Date(garbage)"}) == "Date(garbage)"

    @pytest.mark.parametrize("value", [42, 3.5, "Search Brand", True, False])
    def test_scalars_pass_through(self, value):
        assert parse_cell({"v": value}) == value


class TestUnwrapEnvelope:
    def test_returns_decoded_payload(self):
        payload = gviz_payload(["a"], [[1]])
        assert unwrap_envelope(wrap(payload)) == payload

    def test_tolerates_missing_semicolon_and_trailing_whitespace(self):
        text = "google.visualization.Query.setResponse(" + json.dumps({"table": {}}) + ")\n  "
        assert unwrap_envelope(text) == {"table": {}}

    def test_missing_envelope_is_format_error(self):
        with pytest.raises(FormatError) as exc:
            unwrap_envelope("<html>Sign in</html>", sheet="Accounts")
        assert exc.value.sheet == "Accounts"
        assert "Accounts" in str(exc.value)

    def test_broken_json_is_format_error(self):
        with pytest.raises(FormatError):
            unwrap_envelope("google.visualization.Query.setResponse({not json});")

    def test_error_status_is_upstream_error_with_detail(self):
        payload = {
            "status": "error",
            "errors": [{"reason": "invalid_query", "detailed_message": "Sheet not found"}],
        }
        with pytest.raises(UpstreamError) as exc:
            unwrap_envelope(wrap(payload), sheet="Last Run")
        assert exc.value.detail == "Sheet not found"
        assert "Sheet not found" in str(exc.value)

    def test_error_status_without_detail_is_unknown(self):
        with pytest.raises(UpstreamError) as exc:
            unwrap_envelope(wrap({"status": "error"}))
        assert exc.value.detail == "Unknown"


class TestParseTable:
    def test_one_record_per_row_in_order(self):
        payload = gviz_payload(["name", "spend"], [["b", 2], ["a", 1], ["c", 3]])
        rows = parse_table(payload)
        assert [r["name"] for r in rows] == ["b", "a", "c"]

    def test_label_falls_back_to_id_and_blank_columns_dropped(self):
        payload = {
            "table": {
                "cols": [
                    {"id": "A", "label": "", "type": "string"},
                    {"id": "", "label": "", "type": "string"},
                    {"id": "C", "label": "spend", "type": "number"},
                ],
                "rows": [{"c": [{"v": "x"}, {"v": "dropped"}, {"v": 5}]}],
            }
        }
        assert parse_table(payload) == [{"A": "x", "spend": 5}]

    def test_short_rows_fill_with_empty_strings(self):
        payload = gviz_payload(["a", "b"], [[1]])
        assert parse_table(payload) == [{"a": 1, "b": ""}]

    def test_mixed_cells_normalized(self):
        payload = gviz_payload(
            ["date_collected", "campaign_name", "spend"],
            [[{"v": "Date(2024,0,15)", "f": "15/1/2024"}, None, 12.5]],
        )
        assert parse_table(payload) == [
            {"date_collected": "2024-01-15", "campaign_name": "", "spend": 12.5}
        ]

    def test_missing_table_is_format_error(self):
        with pytest.raises(FormatError):
            parse_table({"status": "ok"})

    def test_missing_rows_is_format_error(self):
        with pytest.raises(FormatError):
            parse_table({"table": {"cols": []}})

    @pytest.mark.parametrize(
        "table",
        [
            {"cols": ["spend"], "rows": []},
            {"cols": [{"id": "A", "label": "spend"}], "rows": [[1]]},
            {"cols": [{"id": "A", "label": "spend"}], "rows": [{"c": {"v": 1}}]},
            {"cols": [{"id": "A", "label": "spend"}], "rows": ["row"]},
        ],
        ids=["string-column", "list-row", "dict-cells", "string-row"],
    )
    def test_malformed_columns_or_rows_are_format_errors(self, table):
        with pytest.raises(FormatError) as exc:
            parse_table({"table": table}, sheet="Account Metrics")
        assert exc.value.sheet == "Account Metrics"
        assert "malformed table" in str(exc.value)

    def test_null_columns_rows_and_cells_are_tolerated(self):
        payload = {
            "table": {
                "cols": [None, {"id": "B", "label": "spend"}],
                "rows": [None, {"c": None}, {"c": [None, {"v": 4}]}],
            }
        }
        assert parse_table(payload) == [{"spend": ""}, {"spend": ""}, {"spend": 4}]

    def test_parse_response_combines_both_steps(self):
        text = wrap(gviz_payload(["active"], [["TRUE"]]))
        assert parse_response(text, "Accounts") == [{"active": "TRUE"}]
