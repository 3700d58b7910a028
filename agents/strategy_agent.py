from __future__ import annotations

from pathlib import Path
from typing import Optional

from agents.base import BaseAgent
from agents.llm_client import LLMClient
from lib.strategy_normalizer import normalize_response
from schemas.common import KeywordDifficulty, SearchIntent
from schemas.strategy import Strategy


PROMPT_PATH = Path(__file__).resolve().parent / "prompts" / "strategy_prompt.txt"
SUB_PILLAR_COUNT = 10


def _enum_choices(enum_cls) -> str:
    return ", ".join(e.value for e in enum_cls)


def build_strategy_prompt(topic: str, *, template: Optional[str] = None) -> str:
    """Fill the strategy prompt template for one topic."""
    text = template if template is not None else PROMPT_PATH.read_text(encoding="utf-8")
    return (
        text
        .replace("{{topic}}", topic)
        .replace("{{difficulties}}", _enum_choices(KeywordDifficulty))
        .replace("{{intents}}", _enum_choices(SearchIntent))
        .replace("{{sub_pillar_count}}", str(SUB_PILLAR_COUNT))
    )


class StrategyAgent(BaseAgent):
    """
    Ask the grounded backend for a pillar strategy and normalize the answer.

    The caller is responsible for rejecting blank topics. Exactly one backend
    call is made per run; backend errors are not caught here.
    """

    name = "seo-strategy"

    def __init__(self, llm: Optional[LLMClient] = None) -> None:
        self.llm = llm or LLMClient()
        self.prompt_template = PROMPT_PATH.read_text(encoding="utf-8")

    def run(self, input: str) -> Strategy:
        prompt = build_strategy_prompt(input, template=self.prompt_template)
        response = self.llm.generate_grounded(prompt=prompt)
        return normalize_response(response.text, response.grounding_chunks)


def generate_strategy(topic: str, *, agent: Optional[StrategyAgent] = None) -> Strategy:
    return (agent or StrategyAgent()).run(topic)
