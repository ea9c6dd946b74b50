"""Tests for reporting helpers."""

from __future__ import annotations

import json

import pandas as pd
import pytest

from cowrie_insight.honeypot.log_parser import parse_log
from cowrie_insight.honeypot.sessions import SessionSummary, all_sessions
from cowrie_insight.honeypot.stats import aggregate
from cowrie_insight.reporting.report import (
    SESSION_COLUMNS,
    format_duration,
    log_info,
    session_narrative,
    session_payload,
    sessions_frame,
    stats_payload,
)


@pytest.mark.parametrize(
    "seconds, expected",
    [
        (None, "Unknown"),
        (0, "Unknown"),
        (float("nan"), "Unknown"),
        (42.4, "42s"),
        (59.6, "1m 0s"),
        (90, "1m 30s"),
        (3599, "59m 59s"),
        (7800, "2h 10m"),
    ],
)
def test_format_duration(seconds, expected) -> None:
    assert format_duration(seconds) == expected


class TestLogInfo:
    def test_date_range(self, sample_records) -> None:
        info = log_info(sample_records, all_sessions(sample_records))

        assert info.total_entries == 12
        assert info.total_sessions == 3
        assert info.first_timestamp == "2025-05-21T10:00:00.000000Z"
        assert info.last_timestamp == "2025-05-21T12:01:00.000000Z"

    def test_single_record_has_no_end(self, sample_records) -> None:
        info = log_info(sample_records[:1], [])
        assert info.last_timestamp is None

    def test_range_skips_undated_records(self, make_line) -> None:
        records = parse_log(
            "\n".join(
                [
                    make_line("cowrie.session.connect", "2025-01-01T00:00:00Z", session="s1"),
                    make_line("cowrie.session.connect", "2025-01-02T00:00:00Z", session="s2"),
                    make_line("cowrie.session.connect", "whenever", session="s3"),
                ]
            )
        )

        info = log_info(records, all_sessions(records))

        assert info.total_entries == 3
        assert info.first_timestamp == "2025-01-01T00:00:00Z"
        assert info.last_timestamp == "2025-01-02T00:00:00Z"

    def test_only_undated_records(self, make_line) -> None:
        records = parse_log(make_line("cowrie.session.connect", "whenever", session="s1"))

        info = log_info(records, [])

        assert info.first_timestamp is None
        assert info.last_timestamp is None

    def test_empty(self) -> None:
        info = log_info([], [])
        assert info.total_entries == 0
        assert info.first_timestamp is None


class TestSessionViews:
    def test_narrative_for_closed_session(self, sample_records) -> None:
        summary = next(s for s in all_sessions(sample_records) if s.session_id == "a1")

        assert session_narrative(summary) == [
            "Connected from 203.0.113.5",
            "Used 2 credential(s) to login",
            "Executed 2 command(s)",
            "Session lasted 30s",
            "Disconnected at 2025-05-21T10:00:30.000000Z",
        ]

    def test_narrative_for_active_session(self) -> None:
        summary = SessionSummary(session_id="s1", src_ip="1.2.3.4", start_time="2025-01-01T00:00:00Z")

        lines = session_narrative(summary)

        assert lines[-1] == "Session lasted Unknown"
        assert len(lines) == 4

    def test_session_payload_is_json_ready(self, sample_records) -> None:
        payload = session_payload(all_sessions(sample_records)[-1])

        assert payload["session_id"] == "a1"
        assert payload["command_count"] == 2
        assert payload["successful_logins"] == 1
        assert payload["active"] is False
        assert payload["credentials"][0] == {"username": "root", "password": "123456", "success": True}
        json.dumps(payload)

    def test_stats_payload(self, sample_records) -> None:
        payload = stats_payload(aggregate(sample_records))

        assert payload["top_credentials"][0] == {"username": "root", "password": "123456", "count": 2}
        assert payload["top_ips"][0] == {"ip": "203.0.113.5", "count": 9}
        json.dumps(payload)


class TestSessionsFrame:
    def test_rows_follow_summary_order(self, sample_records) -> None:
        frame = sessions_frame(all_sessions(sample_records))

        assert list(frame.columns) == SESSION_COLUMNS
        assert list(frame["session_id"]) == ["c3", "b2", "a1"]
        assert list(frame["active"]) == [False, True, False]
        assert pd.isna(frame.loc[1, "end_time"])
        assert frame.loc[2, "duration"] == pytest.approx(30.0)
        assert frame.loc[0, "start_time"] == pd.Timestamp("2025-05-21T12:00:00Z")

    def test_empty(self) -> None:
        frame = sessions_frame([])
        assert frame.empty
        assert list(frame.columns) == SESSION_COLUMNS
