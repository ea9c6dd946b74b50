"""Utilities for parsing Cowrie JSON logs into time-ordered event records."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional, Tuple

from cowrie_insight.honeypot.events import EventRecord
from cowrie_insight.utils.io import read_text
from cowrie_insight.utils.logger import configure_logger

_logger = configure_logger(__name__)


def parse_line(line: str) -> Optional[EventRecord]:
    """Decode one log line; blank or malformed lines yield ``None``."""

    line = line.strip()
    if not line:
        return None

    try:
        payload = json.loads(line)
    except json.JSONDecodeError as exc:
        _logger.warning("Skipping invalid log line: %s", exc)
        return None

    if not isinstance(payload, dict):
        _logger.warning("Skipping log line that is not a JSON object: %.80s", line)
        return None

    return EventRecord.from_dict(payload)


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp. Naive values are assumed to be UTC."""

    if not value:
        return None

    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def timestamp_key(value: Optional[str]) -> Tuple[int, float]:
    """Ascending sort key: valid timestamps first, unparsable ones after them."""

    parsed = parse_timestamp(value)
    if parsed is None:
        return (1, 0.0)
    return (0, parsed.timestamp())


def parse_log(content: str) -> List[EventRecord]:
    records: List[EventRecord] = []
    for line in content.split("\n"):
        record = parse_line(line)
        if record is not None:
            records.append(record)

    keyed = [(timestamp_key(record.timestamp), record) for record in records]
    undated = sum(1 for key, _ in keyed if key[0])
    if undated:
        _logger.debug("%s records without a usable timestamp ordered last", undated)

    # sorted() is stable, so equal timestamps keep their input order.
    keyed.sort(key=lambda item: item[0])
    return [record for _, record in keyed]


def load_events(log_path: Path) -> List[EventRecord]:
    records = parse_log(read_text(Path(log_path)))
    _logger.info("Loaded %s events from %s", len(records), log_path)
    return records
