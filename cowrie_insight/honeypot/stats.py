"""Global dashboard statistics over a full Cowrie event set."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from cowrie_insight.honeypot.events import COMMAND_INPUT, LOGIN_SUCCESS, EventRecord
from cowrie_insight.honeypot.sessions import group_by_session, summarize

TOP_N = 10


@dataclass(frozen=True)
class CommandCount:
    command: str
    count: int


@dataclass(frozen=True)
class CredentialCount:
    username: str
    password: str
    count: int


@dataclass(frozen=True)
class IpCount:
    ip: str
    count: int


@dataclass
class DashboardStats:
    total_sessions: int
    active_sessions: int
    total_commands: int
    unique_ips: int
    top_commands: List[CommandCount]
    top_credentials: List[CredentialCount]
    top_ips: List[IpCount]


def aggregate(records: Sequence[EventRecord], top_n: int = TOP_N) -> DashboardStats:
    """Compute session counts, unique sources and top-N tables.

    Counter.most_common orders equal counts by first insertion, which gives the
    first-seen tie-break for every table.
    """

    sessions = [summarize(group) for group in group_by_session(records).values()]
    active_sessions = sum(1 for session in sessions if session.is_active)

    commands: Counter[str] = Counter()
    credentials: Counter[Tuple[str, str]] = Counter()
    ips: Counter[str] = Counter()
    total_commands = 0

    for record in records:
        if record.src_ip:
            ips[record.src_ip] += 1

        if record.eventid == COMMAND_INPUT:
            total_commands += 1
            base_command = _base_command(record.input)
            if base_command:
                commands[base_command] += 1
        elif record.eventid == LOGIN_SUCCESS:
            if record.username and record.password:
                credentials[(record.username, record.password)] += 1

    return DashboardStats(
        total_sessions=len(sessions),
        active_sessions=active_sessions,
        total_commands=total_commands,
        unique_ips=len(ips),
        top_commands=[CommandCount(command, count) for command, count in commands.most_common(top_n)],
        top_credentials=[
            CredentialCount(username, password, count)
            for (username, password), count in credentials.most_common(top_n)
        ],
        top_ips=[IpCount(ip, count) for ip, count in ips.most_common(top_n)],
    )


def _base_command(command_input: Optional[str]) -> Optional[str]:
    if not command_input:
        return None
    tokens = command_input.split()
    return tokens[0] if tokens else None
