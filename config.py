from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


DEFAULT_CONFIG_PATH = Path("config/strategy.yaml")


class StrategySettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    model: str = Field("gpt-5.2", description="OpenAI model used for grounded generation")
    web_search_tool: str = Field("web_search", description="Responses API tool type enabling web search")
    output_dir: Path = Field(Path("output/strategies"), description="Where CSV/JSON exports are written")
    run_log_path: Path = Field(Path("output/logs/strategy_runs.jsonl"), description="JSONL run log")


ENV_OVERRIDES = {
    "OPENAI_MODEL": "model",
    "OPENAI_WEB_SEARCH_TOOL": "web_search_tool",
    "STRATEGY_OUTPUT_DIR": "output_dir",
    "STRATEGY_RUN_LOG": "run_log_path",
}


def apply_env_overrides(raw: dict, environ: Optional[dict] = None) -> dict:
    env = os.environ if environ is None else environ
    merged = dict(raw)
    for var, key in ENV_OVERRIDES.items():
        value = (env.get(var) or "").strip()
        if value:
            merged[key] = value
    return merged
