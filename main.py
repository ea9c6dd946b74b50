"""Entry point for running a Cowrie session insight analysis."""

from __future__ import annotations

import argparse
from pathlib import Path

from cowrie_insight.pipeline.orchestrator import InsightPipeline


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Cowrie Session Insight")
    parser.add_argument(
        "--config",
        type=Path,
        default=Path("config/defaults.yaml"),
        help="Path to the pipeline configuration file",
    )
    parser.add_argument(
        "--log",
        type=Path,
        default=None,
        help="Cowrie JSON log to analyse; overrides paths.cowrie_log",
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    pipeline = InsightPipeline(args.config)
    pipeline.run(args.log)


if __name__ == "__main__":
    main()
