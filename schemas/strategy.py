from __future__ import annotations

from pydantic import Field, field_validator

from schemas.base import SchemaBase
from schemas.common import KeywordDifficulty, SearchIntent


SOURCE_TITLE_PLACEHOLDER = "Source"


def _require_text(value: str) -> str:
    if not value.strip():
        raise ValueError("must be a non-empty string")
    return value


class Pillar(SchemaBase):
    """The single core topic anchoring the strategy."""

    topic: str = Field(..., description="Canonical subject")
    page_title: str = Field(..., alias="pageTitle", description="Optimized H1 title")
    search_intent: str = Field(..., alias="searchIntent", description="Dominant intent (free text)")
    target_audience: str = Field(..., alias="targetAudience", description="Who the pillar page is for")

    @field_validator("topic", "page_title", "search_intent", "target_audience")
    @classmethod
    def _non_empty(cls, v: str) -> str:
        return _require_text(v)


class SubPillar(SchemaBase):
    """
    A related topic supporting the pillar.

    Notes:
    - semantic_keywords is expected to hold 3-5 entries; not enforced.
    - keyword_difficulty and search_intent must be exact enum values.
    """

    primary_keyword: str = Field(..., alias="primaryKeyword")
    semantic_keywords: tuple[str, ...] = Field(..., alias="semanticKeywords")
    cluster_keywords: tuple[str, ...] = Field((), alias="clusterKeywords")
    keyword_difficulty: KeywordDifficulty = Field(..., alias="keywordDifficulty")
    search_intent: SearchIntent = Field(..., alias="searchIntent")
    content_angle: str = Field(..., alias="contentAngle", description="Angle aimed at AI answer surfaces (SGE)")
    internal_linking: str = Field(..., alias="internalLinking", description="How to link back to the pillar")

    @field_validator("primary_keyword")
    @classmethod
    def _non_empty(cls, v: str) -> str:
        return _require_text(v)


class Source(SchemaBase):
    title: str = Field(SOURCE_TITLE_PLACEHOLDER, description="Citation title")
    uri: str = Field(..., description="Citation URI")


class StrategyPayload(SchemaBase):
    """Shape the model is instructed to return inside its JSON block."""

    pillar: Pillar
    sub_pillars: tuple[SubPillar, ...] = Field(..., alias="subPillars")


class Strategy(SchemaBase):
    pillar: Pillar
    sub_pillars: tuple[SubPillar, ...] = Field((), alias="subPillars")
    sources: tuple[Source, ...] = ()
