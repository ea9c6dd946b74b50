"""High-level orchestration for a batch analysis run over one Cowrie log."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional

from cowrie_insight.honeypot.events import EventRecord
from cowrie_insight.honeypot.log_parser import load_events
from cowrie_insight.honeypot.sessions import SessionSummary, all_sessions
from cowrie_insight.honeypot.stats import DashboardStats, aggregate
from cowrie_insight.reporting.report import (
    LogInfo,
    log_info,
    session_payload,
    sessions_frame,
    stats_payload,
)
from cowrie_insight.utils.config import load_config
from cowrie_insight.utils.io import write_csv, write_json
from cowrie_insight.utils.logger import configure_logger

LOGGED_MODULES = (
    "cowrie_insight.honeypot.log_parser",
    "cowrie_insight.honeypot.sessions",
)


@dataclass
class PipelineResult:
    log_path: Path
    records: List[EventRecord]
    sessions: List[SessionSummary]
    stats: DashboardStats
    info: LogInfo


class InsightPipeline:
    def __init__(self, config_path: Path) -> None:
        self.config = load_config(Path(config_path))
        log_file: Optional[Path] = self.config["paths"].get("pipeline_log")
        level = self.config["logging"]["level"]
        for name in LOGGED_MODULES:
            configure_logger(name, log_file=log_file, level=level)
        self._logger = configure_logger(__name__, log_file=log_file, level=level)

    # ------------------------------------------------------------------
    def run(self, log_path: Optional[Path] = None) -> PipelineResult:
        source = self._resolve_log(log_path)
        self._logger.info("Analysing Cowrie log %s", source)

        records = load_events(source)
        sessions = all_sessions(records)
        stats = aggregate(records, top_n=self.config["analysis"]["top_n"])
        info = log_info(records, sessions)

        self._write_reports(sessions, stats, info)

        self._logger.info(
            "Analysis finished | events=%s | sessions=%s | active=%s | unique_ips=%s",
            info.total_entries,
            stats.total_sessions,
            stats.active_sessions,
            stats.unique_ips,
        )
        return PipelineResult(
            log_path=source,
            records=records,
            sessions=sessions,
            stats=stats,
            info=info,
        )

    # ------------------------------------------------------------------
    def _resolve_log(self, log_path: Optional[Path]) -> Path:
        source = Path(log_path) if log_path else self.config["paths"].get("cowrie_log")
        if not source:
            raise ValueError("No Cowrie log configured. Set paths.cowrie_log or pass a log path.")
        if not Path(source).exists():
            raise FileNotFoundError(f"Cowrie log file not found at {source}")
        return Path(source)

    def _write_reports(
        self, sessions: List[SessionSummary], stats: DashboardStats, info: LogInfo
    ) -> None:
        paths: Dict[str, Path] = self.config["paths"]

        summary_path = paths.get("summary_output")
        if summary_path:
            write_json(summary_path, {"log": vars(info), "stats": stats_payload(stats)})
            self._logger.info("Wrote dashboard summary to %s", summary_path)

        sessions_path = paths.get("sessions_output")
        if sessions_path:
            write_json(sessions_path, [session_payload(session) for session in sessions])
            self._logger.info("Wrote %s session summaries to %s", len(sessions), sessions_path)

        table_path = paths.get("sessions_table")
        if table_path:
            write_csv(table_path, sessions_frame(sessions))
            self._logger.info("Wrote session table to %s", table_path)
