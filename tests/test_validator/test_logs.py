"""Tests for the LogSource parser."""

from __future__ import annotations

from workbench.validator.logs import is_parseable_timestamp, parse_log_output
from workbench.validator.models import ValidationSeverity


class TestJsonLogs:
    def test_array_of_objects(self) -> None:
        result = parse_log_output('[{"timestamp": "2024-05-01T10:00:00Z", "message": "started"}]')
        assert result.type == "log"
        entry = result.entries[0]
        assert entry.timestamp == "2024-05-01T10:00:00Z"
        assert entry.message == "started"
        assert entry.issues == []
        assert entry.line_number == 1

    def test_logs_and_entries_keys(self) -> None:
        assert parse_log_output('{"logs": ["a", "b"]}').entries[1].message == "b"
        assert parse_log_output('{"entries": [{"msg": "m"}]}').entries[0].message == "m"

    def test_string_entries(self) -> None:
        entry = parse_log_output('["plain line"]').entries[0]
        assert entry.message == "plain line"
        assert entry.raw_line == "plain line"
        assert entry.timestamp is None

    def test_message_falls_back_to_json(self) -> None:
        entry = parse_log_output('[{"level": "info"}]').entries[0]
        assert entry.message == '{"level":"info"}'

    def test_time_key_and_bad_timestamp(self) -> None:
        entry = parse_log_output('[{"time": "yesterday-ish", "message": "x"}]').entries[0]
        assert entry.timestamp == "yesterday-ish"
        assert [i.severity for i in entry.issues] == [ValidationSeverity.warning]
        assert entry.issues[0].message == 'Timestamp "yesterday-ish" may not be in a standard format'

    def test_summary_counts_warnings(self, recount) -> None:
        result = parse_log_output('[{"time": "??", "message": "a"}, {"message": "b"}]')
        errors, warnings = recount(result.entries)
        assert (result.summary.errors, result.summary.warnings) == (errors, warnings) == (0, 1)
        assert result.summary.valid == 2


class TestPlainTextLogs:
    def test_fallback_on_invalid_json(self) -> None:
        output = "2024-05-01T10:00:00.123Z service started\n\nno timestamp here"
        result = parse_log_output(output)
        assert len(result.entries) == 2
        first, second = result.entries
        assert first.timestamp == "2024-05-01T10:00:00.123Z"
        assert first.message == "service started"
        assert first.line_number == 1
        assert second.timestamp is None
        assert second.message == "no timestamp here"
        assert second.line_number == 3

    def test_space_separated_timestamp(self) -> None:
        entry = parse_log_output("2024-05-01 10:00:00 hello").entries[0]
        assert entry.timestamp == "2024-05-01 10:00:00"
        assert entry.message == "hello"

    def test_scalar_json_is_plain_text(self) -> None:
        result = parse_log_output("2024")
        assert [e.message for e in result.entries] == ["2024"]

    def test_unparsed_lines_always_empty(self) -> None:
        assert parse_log_output("anything\nat all").unparsed_lines == []


class TestTimestampCheck:
    def test_accepted_formats(self) -> None:
        assert is_parseable_timestamp("2024-05-01T10:00:00Z")
        assert is_parseable_timestamp("2024-05-01")
        assert is_parseable_timestamp("Wed, 01 May 2024 10:00:00 +0000")
        assert is_parseable_timestamp("2024/05/01 10:00:00")
        assert is_parseable_timestamp(1714557600000)

    def test_rejected(self) -> None:
        assert not is_parseable_timestamp("not a date")
        assert not is_parseable_timestamp("")


class TestJsonEdgeDocuments:
    def test_empty_object_for_logs_reads_as_text(self) -> None:
        result = parse_log_output('{"logs": {}}')
        assert [e.message for e in result.entries] == ['{"logs": {}}']
        assert result.entries[0].timestamp is None

    def test_empty_logs_array_wins_over_entries(self) -> None:
        result = parse_log_output('{"logs": [], "entries": ["a"]}')
        assert result.entries == []

    def test_null_logs_falls_through_to_entries(self) -> None:
        result = parse_log_output('{"logs": null, "entries": ["a"]}')
        assert [e.message for e in result.entries] == ["a"]

    def test_deep_nesting_reads_as_text(self) -> None:
        output = "[" * 100000 + "]" * 100000
        result = parse_log_output(output)
        assert len(result.entries) == 1
        assert result.entries[0].message == output

    def test_integer_past_conversion_limit_reads_as_text(self) -> None:
        output = '[{"message":"m","n":' + "1" * 5000 + "}]"
        result = parse_log_output(output)
        assert [e.raw_line for e in result.entries] == [output]

    def test_overflowing_rfc_date_is_warning(self) -> None:
        stamp = "Mon, 20 Nov 99999999999999999999 10:00:00 +0000"
        assert not is_parseable_timestamp(stamp)
        result = parse_log_output('[{"message":"m","timestamp":"' + stamp + '"}]')
        issues = result.entries[0].issues
        assert [i.severity for i in issues] == [ValidationSeverity.warning]
        assert result.summary.warnings == 1
