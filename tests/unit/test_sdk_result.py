"""
Unit tests for SDK results, settings, body decoding and table rendering.
"""

import io

import pytest
from pydantic import ValidationError

from sdk.rowgate_sdk.client import DEFAULT_TIMEOUT_SECONDS, decode_records
from sdk.rowgate_sdk.config import ClientSettings
from sdk.rowgate_sdk.errors import RowgateError, TransportError
from sdk.rowgate_sdk.render import EMPTY_TEXT, columns_of, format_table, render_table
from sdk.rowgate_sdk.result import Failure, Success


class TestResults:
    """Tests for Success and Failure."""

    def test_success(self):
        result = Success([{"id": 1}])

        assert result.ok is True
        assert result.unwrap() == [{"id": 1}]

    def test_failure(self):
        error = TransportError("boom", url="http://x/data", status=500)
        result = Failure(error)

        assert result.ok is False
        with pytest.raises(TransportError) as exc_info:
            result.unwrap()
        assert exc_info.value is error

    def test_transport_error_context(self):
        error = TransportError("boom", url="http://x/data", status=502)

        assert isinstance(error, RowgateError)
        assert error.code == "TRANSPORT_ERROR"
        assert error.details == {"url": "http://x/data", "status": 502}


class TestDecodeRecords:
    """Tests for decode_records."""

    def test_array_of_objects(self):
        assert decode_records('[{"b": 1, "a": null}]') == [{"b": 1, "a": None}]

    def test_empty_array(self):
        assert decode_records("[]") == []

    def test_order_kept(self):
        records = decode_records('[{"id": 3}, {"id": 1}, {"id": 2}]')

        assert [r["id"] for r in records] == [3, 1, 2]

    @pytest.mark.parametrize(
        "body",
        [
            "",
            "not json",
            "{\"id\": 1}",
            "null",
            "[1, 2]",
            "[{\"id\": 1}, \"x\"]",
            "[" * 200000 + "]" * 200000,
        ],
        ids=["empty", "not-json", "object", "null", "scalars", "mixed", "deeply-nested"],
    )
    def test_malformed(self, body):
        with pytest.raises(TransportError):
            decode_records(body, url="http://x/data")

    def test_numbers_are_not_coerced(self):
        (record,) = decode_records('[{"i": 1, "f": 1.0, "s": "1"}]')

        assert type(record["i"]) is int
        assert type(record["f"]) is float
        assert type(record["s"]) is str


class TestRender:
    """Tests for table rendering."""

    def test_empty(self):
        assert format_table([]) == EMPTY_TEXT

    def test_columns_first_seen_order(self):
        assert columns_of([{"b": 1}, {"a": 2, "b": 3}, {"c": 4}]) == ["b", "a", "c"]

    def test_table(self):
        text = format_table([{"id": 1, "name": "Alpha"}, {"id": 22, "name": None}])

        assert text.splitlines() == [
            "id | name",
            "---+------",
            "1  | Alpha",
            "22 | NULL",
        ]

    def test_missing_key_renders_null(self):
        lines = format_table([{"a": 1}, {"b": 2}]).splitlines()

        assert lines[2] == "1    | NULL"
        assert lines[3] == "NULL | 2"

    def test_render_table_writes_stream(self):
        out = io.StringIO()

        render_table([{"id": 1}], stream=out)

        assert out.getvalue() == "id\n--\n1\n"


class TestClientSettings:
    """Tests for ClientSettings."""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("ROWGATE_GATEWAY_URL", raising=False)
        monkeypatch.delenv("ROWGATE_TIMEOUT_SECONDS", raising=False)

        settings = ClientSettings()

        assert settings.gateway_url == "http://localhost:8081/data"
        assert settings.timeout_seconds == DEFAULT_TIMEOUT_SECONDS

    def test_env_prefix(self, monkeypatch):
        monkeypatch.setenv("ROWGATE_GATEWAY_URL", "http://gw.test:9000/data")
        monkeypatch.setenv("ROWGATE_TIMEOUT_SECONDS", "2.5")

        settings = ClientSettings()

        assert settings.gateway_url == "http://gw.test:9000/data"
        assert settings.timeout_seconds == 2.5

    def test_timeout_must_be_positive(self, monkeypatch):
        monkeypatch.setenv("ROWGATE_TIMEOUT_SECONDS", "0")

        with pytest.raises(ValidationError):
            ClientSettings()
