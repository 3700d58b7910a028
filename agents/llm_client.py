from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from openai import OpenAI

from lib.errors import BackendFailure


DEFAULT_MODEL = os.getenv("OPENAI_MODEL", "gpt-5.2")
DEFAULT_WEB_SEARCH_TOOL = os.getenv("OPENAI_WEB_SEARCH_TOOL", "web_search")


@dataclass(frozen=True)
class GroundedResponse:
    """Raw backend answer: free-form text plus the citations behind it."""
    text: str
    grounding_chunks: List[Dict[str, Any]] = field(default_factory=list)


def _annotation_to_chunk(annotation: Any) -> Dict[str, Any]:
    ann_type = getattr(annotation, "type", None) or "unknown"
    if ann_type != "url_citation":
        return {ann_type: {}}
    return {
        "web": {
            "title": getattr(annotation, "title", None) or "",
            "uri": getattr(annotation, "url", None) or "",
        }
    }


def grounding_chunks_from_response(resp: Any) -> List[Dict[str, Any]]:
    """
    Flatten citation annotations on the response's output messages into
    grounding chunks, in the order they appear.
    """
    chunks: List[Dict[str, Any]] = []
    for item in getattr(resp, "output", None) or []:
        if getattr(item, "type", None) != "message":
            continue
        for part in getattr(item, "content", None) or []:
            for annotation in getattr(part, "annotations", None) or []:
                chunks.append(_annotation_to_chunk(annotation))
    return chunks


class LLMClient:
    """
    Thin wrapper around OpenAI text generation (Responses API) with web search
    grounding.

    No structured-output schema is requested: search grounding and strict
    schema enforcement don't mix, so the JSON contract lives in the prompt.
    One call per request; errors raised by the SDK propagate unchanged.
    """

    def __init__(
        self,
        model: str = DEFAULT_MODEL,
        *,
        web_search_tool: str = DEFAULT_WEB_SEARCH_TOOL,
        client: Optional[Any] = None,
    ) -> None:
        self.client = client if client is not None else OpenAI()
        self.model = model
        self.web_search_tool = web_search_tool

    def generate_grounded(self, *, prompt: str) -> GroundedResponse:
        resp = self.client.responses.create(
            model=self.model,
            input=[{"role": "user", "content": prompt}],
            tools=[{"type": self.web_search_tool}],
        )

        err = getattr(resp, "error", None)
        if err:
            message = getattr(err, "message", None) or str(err)
            raise BackendFailure(f"Generative backend returned an error: {message}")

        return GroundedResponse(
            text=(getattr(resp, "output_text", None) or "").strip(),
            grounding_chunks=grounding_chunks_from_response(resp),
        )
