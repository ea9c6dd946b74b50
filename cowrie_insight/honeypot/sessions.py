"""Reconstruct per-session activity from a time-ordered event list."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from cowrie_insight.honeypot.events import (
    COMMAND_INPUT,
    LOGIN_FAILED,
    LOGIN_SUCCESS,
    SESSION_CLOSED,
    EventRecord,
)
from cowrie_insight.honeypot.log_parser import timestamp_key
from cowrie_insight.utils.logger import configure_logger

UNKNOWN = "unknown"

_logger = configure_logger(__name__)


@dataclass(frozen=True)
class CredentialAttempt:
    username: str
    password: str
    success: bool


@dataclass
class SessionSummary:
    session_id: str
    src_ip: str
    start_time: str
    end_time: Optional[str] = None
    duration: Optional[float] = None
    commands: List[str] = field(default_factory=list)
    credentials: List[CredentialAttempt] = field(default_factory=list)

    @property
    def command_count(self) -> int:
        return len(self.commands)

    @property
    def login_attempts(self) -> int:
        return len(self.credentials)

    @property
    def successful_logins(self) -> int:
        return sum(1 for credential in self.credentials if credential.success)

    @property
    def is_active(self) -> bool:
        return self.end_time is None


def group_by_session(records: Sequence[EventRecord]) -> Dict[str, List[EventRecord]]:
    """Group records by session id, keeping first-seen session order.

    Records without a session id are left out. Each group keeps the order the
    records have in ``records``.
    """

    groups: Dict[str, List[EventRecord]] = {}
    for record in records:
        if not record.session:
            continue
        groups.setdefault(record.session, []).append(record)
    return groups


def summarize(session_records: Sequence[EventRecord]) -> SessionSummary:
    """Derive a :class:`SessionSummary` from one session's records.

    Credentials list every successful login first and every failed login
    after, each part in event order. This is not a merged timeline.
    """

    if not session_records:
        raise ValueError("Cannot summarize a session without records")

    first = session_records[0]
    close_event = next(
        (record for record in session_records if record.eventid == SESSION_CLOSED), None
    )

    end_time: Optional[str] = None
    duration: Optional[float] = None
    if close_event is not None:
        end_time = close_event.timestamp
        duration = _parse_duration(close_event)

    commands = [
        record.input
        for record in session_records
        if record.eventid == COMMAND_INPUT and record.input
    ]

    successes = [
        CredentialAttempt(record.username or "", record.password or "", True)
        for record in session_records
        if record.eventid == LOGIN_SUCCESS
    ]
    failures = [
        CredentialAttempt(record.username or "", record.password or "", False)
        for record in session_records
        if record.eventid == LOGIN_FAILED
    ]

    return SessionSummary(
        session_id=first.session or UNKNOWN,
        src_ip=first.src_ip or UNKNOWN,
        start_time=first.timestamp,
        end_time=end_time,
        duration=duration,
        commands=commands,
        credentials=successes + failures,
    )


def all_sessions(records: Sequence[EventRecord]) -> List[SessionSummary]:
    """Summaries for every session, most recent start time first."""

    summaries = [summarize(group) for group in group_by_session(records).values()]

    def _newest_first(summary: SessionSummary) -> Tuple[int, float]:
        undated, epoch = timestamp_key(summary.start_time)
        return (-undated, epoch)

    # reverse=True keeps equal keys in first-seen order; undated sessions go last.
    return sorted(summaries, key=_newest_first, reverse=True)


def _parse_duration(record: EventRecord) -> Optional[float]:
    if not record.duration:
        return None
    try:
        value = float(record.duration)
    except ValueError:
        value = None
    if value is None or not math.isfinite(value):
        _logger.warning(
            "Ignoring unparsable duration %r for session %s", record.duration, record.session
        )
        return None
    return value
