from __future__ import annotations

import re
from typing import Iterable

from schemas.strategy import Strategy, SubPillar


CSV_HEADERS = [
    "Type",
    "Topic/Keyword",
    "Intent",
    "Difficulty",
    "Semantic Keywords",
    "Cluster Keywords",
    "Content Angle",
    "Internal Linking Strategy",
]

KEYWORD_SEPARATOR = "; "
NOT_APPLICABLE = "N/A"


def _quoted(value: str) -> str:
    """Always-quoted CSV cell with embedded quotes doubled."""
    return '"' + (value or "").replace('"', '""') + '"'


def _cell(value: str) -> str:
    """Quote only when the value would otherwise break the row."""
    s = value or ""
    if any(ch in s for ch in (",", '"', "\n", "\r")):
        return _quoted(s)
    return s


def _join_keywords(keywords: Iterable[str]) -> str:
    return KEYWORD_SEPARATOR.join(keywords or [])


def pillar_row(strategy: Strategy) -> list[str]:
    return [
        "Core Pillar",
        _cell(strategy.pillar.page_title),
        _cell(strategy.pillar.search_intent),
        NOT_APPLICABLE,
        NOT_APPLICABLE,
        NOT_APPLICABLE,
        NOT_APPLICABLE,
        NOT_APPLICABLE,
    ]


def sub_pillar_row(sub: SubPillar) -> list[str]:
    return [
        "Sub-Pillar",
        _quoted(sub.primary_keyword),
        sub.search_intent.value,
        sub.keyword_difficulty.value,
        _quoted(_join_keywords(sub.semantic_keywords)),
        _quoted(_join_keywords(sub.cluster_keywords)),
        _quoted(sub.content_angle),
        _quoted(sub.internal_linking),
    ]


def strategy_to_csv(strategy: Strategy) -> str:
    rows = [CSV_HEADERS, pillar_row(strategy)]
    rows.extend(sub_pillar_row(sub) for sub in strategy.sub_pillars)
    return "\n".join(",".join(row) for row in rows)


def csv_filename(topic: str) -> str:
    """seo-strategy-<topic>.csv with whitespace runs turned into hyphens."""
    slug = re.sub(r"\s+", "-", topic or "").lower()
    return f"seo-strategy-{slug}.csv"
