"""Presentation-neutral views over session summaries and dashboard statistics."""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Optional, Sequence

import pandas as pd

from cowrie_insight.honeypot.events import EventRecord
from cowrie_insight.honeypot.log_parser import parse_timestamp
from cowrie_insight.honeypot.sessions import SessionSummary
from cowrie_insight.honeypot.stats import DashboardStats

SESSION_COLUMNS = [
    "session_id",
    "src_ip",
    "start_time",
    "end_time",
    "duration",
    "command_count",
    "login_attempts",
    "successful_logins",
    "active",
]


@dataclass
class LogInfo:
    total_entries: int
    total_sessions: int
    first_timestamp: Optional[str]
    last_timestamp: Optional[str]


def format_duration(seconds: Optional[float]) -> str:
    """Render a duration as ``42s``, ``3m 5s`` or ``2h 10m``."""

    if seconds is None or math.isnan(seconds) or seconds <= 0:
        return "Unknown"

    total = int(round(seconds))
    if total < 60:
        return f"{total}s"
    if total < 3600:
        return f"{total // 60}m {total % 60}s"
    return f"{total // 3600}h {(total % 3600) // 60}m"


def log_info(records: Sequence[EventRecord], sessions: Sequence[SessionSummary]) -> LogInfo:
    """Describe a loaded log. ``records`` must already be time-ordered.

    The date range only considers records with a parsable timestamp.
    """

    dated = [record.timestamp for record in records if parse_timestamp(record.timestamp)]
    first = dated[0] if dated else None
    last = dated[-1] if len(dated) > 1 else None
    return LogInfo(
        total_entries=len(records),
        total_sessions=len(sessions),
        first_timestamp=first,
        last_timestamp=last,
    )


def session_narrative(summary: SessionSummary) -> List[str]:
    lines = [
        f"Connected from {summary.src_ip}",
        f"Used {summary.login_attempts} credential(s) to login",
        f"Executed {summary.command_count} command(s)",
        f"Session lasted {format_duration(summary.duration)}",
    ]
    if summary.end_time:
        lines.append(f"Disconnected at {summary.end_time}")
    return lines


def session_payload(summary: SessionSummary) -> Dict[str, Any]:
    payload = asdict(summary)
    payload.update(
        command_count=summary.command_count,
        login_attempts=summary.login_attempts,
        successful_logins=summary.successful_logins,
        active=summary.is_active,
    )
    return payload


def stats_payload(stats: DashboardStats) -> Dict[str, Any]:
    return asdict(stats)


def sessions_frame(summaries: Sequence[SessionSummary]) -> pd.DataFrame:
    """Tabulate summaries, one row per session, in the given order."""

    rows = [
        {
            "session_id": summary.session_id,
            "src_ip": summary.src_ip,
            "start_time": summary.start_time,
            "end_time": summary.end_time,
            "duration": summary.duration,
            "command_count": summary.command_count,
            "login_attempts": summary.login_attempts,
            "successful_logins": summary.successful_logins,
            "active": summary.is_active,
        }
        for summary in summaries
    ]
    frame = pd.DataFrame(rows, columns=SESSION_COLUMNS)
    frame["start_time"] = pd.to_datetime(frame["start_time"], utc=True, errors="coerce", format="ISO8601")
    frame["end_time"] = pd.to_datetime(frame["end_time"], utc=True, errors="coerce", format="ISO8601")
    frame["duration"] = pd.to_numeric(frame["duration"], errors="coerce")
    return frame
