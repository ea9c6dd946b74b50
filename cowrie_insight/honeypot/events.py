"""Typed representation of a single Cowrie JSON log event."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

SESSION_CONNECT = "cowrie.session.connect"
SESSION_CLOSED = "cowrie.session.closed"
LOGIN_SUCCESS = "cowrie.login.success"
LOGIN_FAILED = "cowrie.login.failed"
COMMAND_INPUT = "cowrie.command.input"


@dataclass(frozen=True)
class EventRecord:
    """One observed sensor action.

    ``eventid``, ``timestamp`` and ``message`` fall back to an empty string when
    the source object omits them; every other field is ``None`` when absent.
    """

    eventid: str
    timestamp: str
    message: str
    src_ip: Optional[str] = None
    src_port: Optional[int] = None
    dst_ip: Optional[str] = None
    dst_port: Optional[int] = None
    session: Optional[str] = None
    protocol: Optional[str] = None
    sensor: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None
    input: Optional[str] = None
    duration: Optional[str] = None
    # Protocol and client metadata, carried but not aggregated.
    version: Optional[str] = None
    hassh: Optional[str] = None
    hassh_algorithms: Optional[str] = None
    arch: Optional[str] = None
    ttylog: Optional[str] = None
    size: Optional[int] = None
    shasum: Optional[str] = None
    duplicate: Optional[bool] = None
    width: Optional[int] = None
    height: Optional[int] = None
    kex_algs: Optional[Tuple[str, ...]] = None
    key_algs: Optional[Tuple[str, ...]] = None
    enc_cs: Optional[Tuple[str, ...]] = None
    mac_cs: Optional[Tuple[str, ...]] = None
    comp_cs: Optional[Tuple[str, ...]] = None
    lang_cs: Optional[Tuple[str, ...]] = None

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "EventRecord":
        return cls(
            eventid=_text(payload.get("eventid")) or "",
            timestamp=_text(payload.get("timestamp")) or "",
            message=_text(payload.get("message")) or "",
            src_ip=_text(payload.get("src_ip")),
            src_port=_integer(payload.get("src_port")),
            dst_ip=_text(payload.get("dst_ip")),
            dst_port=_integer(payload.get("dst_port")),
            session=_text(payload.get("session")),
            protocol=_text(payload.get("protocol")),
            sensor=_text(payload.get("sensor")),
            username=_text(payload.get("username")),
            password=_text(payload.get("password")),
            input=_text(payload.get("input")),
            duration=_text(payload.get("duration")),
            version=_text(payload.get("version")),
            hassh=_text(payload.get("hassh")),
            hassh_algorithms=_text(payload.get("hasshAlgorithms")),
            arch=_text(payload.get("arch")),
            ttylog=_text(payload.get("ttylog")),
            size=_integer(payload.get("size")),
            shasum=_text(payload.get("shasum")),
            duplicate=payload.get("duplicate") if isinstance(payload.get("duplicate"), bool) else None,
            width=_integer(payload.get("width")),
            height=_integer(payload.get("height")),
            kex_algs=_strings(payload.get("kexAlgs")),
            key_algs=_strings(payload.get("keyAlgs")),
            enc_cs=_strings(payload.get("encCS")),
            mac_cs=_strings(payload.get("macCS")),
            comp_cs=_strings(payload.get("compCS")),
            lang_cs=_strings(payload.get("langCS")),
        )


def _text(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, (int, float)):
        return str(value)
    return None


def _integer(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def _strings(value: Any) -> Optional[Tuple[str, ...]]:
    if not isinstance(value, list):
        return None
    return tuple(str(item) for item in value)
