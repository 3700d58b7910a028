"""Plain-text views over a finished Strategy.

The views are read-only: nothing here changes the strategy. Sorting returns a
new list and leaves the received order on the strategy untouched.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional, Sequence

from schemas.common import DIFFICULTY_WEIGHT
from schemas.strategy import Source, Strategy, SubPillar


SortKey = Literal["primaryKeyword", "searchIntent", "keywordDifficulty"]
SortDirection = Literal["asc", "desc"]

SORT_KEYS: tuple[str, ...] = ("primaryKeyword", "searchIntent", "keywordDifficulty")


@dataclass(frozen=True)
class SortConfig:
    key: SortKey
    direction: SortDirection = "asc"


def next_sort(current: Optional[SortConfig], key: SortKey) -> SortConfig:
    """Clicking the active ascending column flips it; anything else sorts ascending."""
    if current is not None and current.key == key and current.direction == "asc":
        return SortConfig(key=key, direction="desc")
    return SortConfig(key=key, direction="asc")


def _sort_value(sub: SubPillar, key: str):
    if key == "keywordDifficulty":
        return DIFFICULTY_WEIGHT.get(sub.keyword_difficulty, 0)
    if key == "searchIntent":
        return sub.search_intent.value
    if key == "primaryKeyword":
        return sub.primary_keyword
    raise ValueError(f"Unknown sort key: {key!r}. Known keys: {list(SORT_KEYS)}")


def sort_sub_pillars(sub_pillars: Sequence[SubPillar], config: Optional[SortConfig]) -> list[SubPillar]:
    if config is None:
        return list(sub_pillars)
    return sorted(
        sub_pillars,
        key=lambda s: _sort_value(s, config.key),
        reverse=config.direction == "desc",
    )


def render_pillar_summary(strategy: Strategy) -> str:
    p = strategy.pillar
    return "\n".join([
        "CORE AUTHORITY PAGE",
        p.page_title,
        p.topic,
        f"Target audience: {p.target_audience}",
        f"Primary intent: {p.search_intent}",
    ])


def render_hierarchy(strategy: Strategy) -> str:
    """Tree with the pillar title at the root and one branch per sub-pillar.

    Each branch carries [intent initial/difficulty initial].
    """
    lines = [f"Core Pillar: {strategy.pillar.page_title}"]
    subs = strategy.sub_pillars
    for i, sub in enumerate(subs):
        branch = "└──" if i == len(subs) - 1 else "├──"
        tag = f"[{sub.search_intent.value[:1]}/{sub.keyword_difficulty.value[:1]}]"
        lines.append(f"{branch} {sub.primary_keyword} {tag}")
    return "\n".join(lines)


def render_table(sub_pillars: Sequence[SubPillar]) -> str:
    if not sub_pillars:
        return "(no sub-pillars)"

    blocks: list[str] = []
    for i, sub in enumerate(sub_pillars, start=1):
        clusters = ", ".join(sub.cluster_keywords) if sub.cluster_keywords else "No clusters"
        blocks.append("\n".join([
            f"{i}. {sub.primary_keyword}  ({sub.keyword_difficulty.value}, {sub.search_intent.value})",
            f"   Entities: {', '.join(sub.semantic_keywords)}",
            f"   Topic clusters: {clusters}",
            f"   SGE content angle: {sub.content_angle}",
            f"   Internal linking: {sub.internal_linking}",
        ]))
    return "\n\n".join(blocks)


def render_sources(sources: Sequence[Source]) -> str:
    return "\n".join(f"- {s.title}: {s.uri}" for s in sources)
