"""Pytest fixtures for the Cowrie session insight tests."""

from __future__ import annotations

import json
import logging
from typing import Any, Callable, List

import pytest

from cowrie_insight.honeypot.events import EventRecord
from cowrie_insight.honeypot.log_parser import parse_log


def event_line(eventid: str, timestamp: str, **fields: Any) -> str:
    """Serialize one Cowrie event as a JSON log line."""
    payload = {"eventid": eventid, "timestamp": timestamp, "message": fields.pop("message", eventid)}
    payload.update(fields)
    return json.dumps(payload)


@pytest.fixture
def make_line() -> Callable[..., str]:
    return event_line


@pytest.fixture
def sample_log() -> str:
    """Two closed sessions from one attacker, one active session from another."""
    lines = [
        event_line("cowrie.session.connect", "2025-05-21T10:00:00.000000Z", session="a1", src_ip="203.0.113.5"),
        event_line("cowrie.login.failed", "2025-05-21T10:00:02.000000Z", session="a1", src_ip="203.0.113.5",
                   username="root", password="toor"),
        event_line("cowrie.login.success", "2025-05-21T10:00:04.000000Z", session="a1", src_ip="203.0.113.5",
                   username="root", password="123456"),
        event_line("cowrie.command.input", "2025-05-21T10:00:06.000000Z", session="a1", src_ip="203.0.113.5",
                   input="uname -a"),
        event_line("cowrie.command.input", "2025-05-21T10:00:08.000000Z", session="a1", src_ip="203.0.113.5",
                   input="cat /etc/passwd"),
        event_line("cowrie.session.closed", "2025-05-21T10:00:30.000000Z", session="a1", src_ip="203.0.113.5",
                   duration="30.0"),
        event_line("cowrie.session.connect", "2025-05-21T11:00:00.000000Z", session="b2", src_ip="198.51.100.7"),
        event_line("cowrie.login.success", "2025-05-21T11:00:01.000000Z", session="b2", src_ip="198.51.100.7",
                   username="root", password="123456"),
        event_line("cowrie.command.input", "2025-05-21T11:00:03.000000Z", session="b2", src_ip="198.51.100.7",
                   input="uname -r"),
        event_line("cowrie.session.connect", "2025-05-21T12:00:00.000000Z", session="c3", src_ip="203.0.113.5"),
        event_line("cowrie.login.success", "2025-05-21T12:00:01.000000Z", session="c3", src_ip="203.0.113.5",
                   username="admin", password="admin"),
        event_line("cowrie.session.closed", "2025-05-21T12:01:00.000000Z", session="c3", src_ip="203.0.113.5",
                   duration="60.2"),
    ]
    return "\n".join(lines) + "\n"


@pytest.fixture
def sample_records(sample_log: str) -> List[EventRecord]:
    return parse_log(sample_log)


@pytest.fixture
def capture_module_logs(monkeypatch: pytest.MonkeyPatch) -> Callable[[str], None]:
    """Let caplog see records from a project logger, which does not propagate."""

    def _enable(name: str) -> None:
        monkeypatch.setattr(logging.getLogger(name), "propagate", True)

    return _enable
