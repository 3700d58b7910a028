from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Optional

from agents.llm_client import LLMClient
from agents.strategy_agent import StrategyAgent
from app_logging.run_logger import RunLogger, new_run_id
from lib.env import load_env
from lib.settings_loader import load_strategy_settings
from lib.strategy_export import csv_filename, strategy_to_csv
from lib.strategy_view import (
    SORT_KEYS,
    SortConfig,
    render_hierarchy,
    render_pillar_summary,
    render_sources,
    render_table,
    sort_sub_pillars,
)
from pipeline.strategy_session import SessionStatus, StrategySession


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Build a pillar / sub-pillar SEO content strategy for a topic")
    ap.add_argument("--topic", required=True, help='Core topic, e.g. "Sustainable Coffee Farming"')
    ap.add_argument("--config", default=None, help="Path to a strategy YAML config (default: config/strategy.yaml)")
    ap.add_argument("--output-dir", default=None, help="Override the export directory")
    ap.add_argument("--sort", choices=SORT_KEYS, default=None, help="Sort the strategy table by this column")
    ap.add_argument("--desc", action="store_true", help="Sort descending (with --sort)")
    ap.add_argument("--json", action="store_true", help="Also write the strategy as JSON")
    ap.add_argument("--no-csv", action="store_true", help="Skip the CSV export")
    return ap


def main(argv: list[str] | None = None, *, agent: Optional[StrategyAgent] = None) -> int:
    args = build_parser().parse_args(argv)

    load_env()
    settings = load_strategy_settings(Path(args.config) if args.config else None)
    output_dir = Path(args.output_dir) if args.output_dir else settings.output_dir

    topic = args.topic
    if not topic.strip():
        print("❌ Topic must not be empty.")
        return 1

    if agent is None:
        agent = StrategyAgent(LLMClient(settings.model, web_search_tool=settings.web_search_tool))

    logger = RunLogger(run_id=new_run_id(), topic=topic.strip(), log_path=settings.run_log_path)
    session = StrategySession()

    print(f">>> Researching {topic.strip()!r}...")
    status = session.submit(topic, agent.run, logger=logger, agent_name=agent.name)
    if status is not SessionStatus.success or session.result is None:
        print("❌ Strategy generation failed:", session.error)
        return 1

    strategy = session.result
    print(f"✅ Strategy generated: {len(strategy.sub_pillars)} sub-pillars, {len(strategy.sources)} sources")
    print()
    print(render_pillar_summary(strategy))
    print()
    print(render_hierarchy(strategy))
    print()

    sort = SortConfig(key=args.sort, direction="desc" if args.desc else "asc") if args.sort else None
    print(render_table(sort_sub_pillars(strategy.sub_pillars, sort)))

    if strategy.sources:
        print()
        print("Research sources:")
        print(render_sources(strategy.sources))

    if not args.no_csv:
        output_dir.mkdir(parents=True, exist_ok=True)
        csv_path = output_dir / csv_filename(topic)
        csv_path.write_text(strategy_to_csv(strategy), encoding="utf-8")
        print(f"✅ CSV saved to {csv_path}")

    if args.json:
        output_dir.mkdir(parents=True, exist_ok=True)
        json_path = (output_dir / csv_filename(topic)).with_suffix(".json")
        json_path.write_text(json.dumps(strategy.to_dict(), indent=2, ensure_ascii=False), encoding="utf-8")
        print(f"✅ JSON saved to {json_path}")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
