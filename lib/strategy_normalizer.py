"""Turn a raw grounded model response into a validated Strategy.

The model is asked to answer with a single ```json block, but search-grounded
answers cannot be schema-enforced by the backend, so extraction is layered:

  1. a fenced block tagged ``json``
  2. any fenced block
  3. the slice from the first ``{`` to the last ``}``

The first layer that finds something wins. If its content does not parse, the
response is rejected; later layers are not tried.

Everything here is pure: same (text, chunks) in, equal Strategy out.
"""

from __future__ import annotations

import json
import re
from typing import Any, Iterable, Mapping, Optional

from pydantic import ValidationError

from lib.errors import ParseFailure, ValidationFailure
from schemas.strategy import SOURCE_TITLE_PLACEHOLDER, Source, Strategy, StrategyPayload


_JSON_BLOCK_RE = re.compile(r"```[ \t]*json\b[ \t]*\r?\n?(.*?)```", re.DOTALL | re.IGNORECASE)
# Optional info-string line (e.g. "javascript\n") is not part of the content.
_ANY_BLOCK_RE = re.compile(r"```(?:[A-Za-z0-9_+.-]*[ \t]*\r?\n)?(.*?)```", re.DOTALL)


def _get(obj: Any, key: str) -> Any:
    """Read a key from a mapping or an attribute from an SDK object."""
    if obj is None:
        return None
    if isinstance(obj, Mapping):
        return obj.get(key)
    return getattr(obj, key, None)


def extract_sources(grounding_chunks: Optional[Iterable[Any]]) -> list[Source]:
    """Collect citations from grounding chunks.

    Chunks without a ``web`` reference, or whose reference has no usable uri,
    are skipped. Order is preserved and duplicates are kept.
    """
    sources: list[Source] = []
    for chunk in grounding_chunks or []:
        web = _get(chunk, "web")
        if not web:
            continue

        uri = _get(web, "uri")
        if not isinstance(uri, str) or not uri.strip():
            continue

        title = _get(web, "title")
        if not isinstance(title, str) or not title.strip():
            title = SOURCE_TITLE_PLACEHOLDER

        sources.append(Source(title=title, uri=uri))
    return sources


def extract_payload(raw_text: str) -> str:
    """Locate the candidate JSON payload inside free-form model text."""
    text = raw_text or ""

    m = _JSON_BLOCK_RE.search(text) or _ANY_BLOCK_RE.search(text)
    if m:
        return m.group(1).strip()

    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end == -1 or end < start:
        raise ParseFailure("Could not parse structured data from the AI response: no structured payload located")
    return text[start : end + 1]


def parse_payload(payload: str) -> Any:
    try:
        return json.loads(payload)
    except json.JSONDecodeError as e:
        raise ParseFailure(f"Could not parse structured data from the AI response: malformed payload ({e})") from e


def _field_path(loc: Iterable[Any]) -> str:
    return ".".join(str(part) for part in loc) or "<root>"


def validate_payload(data: Any) -> StrategyPayload:
    """Check the parsed object against the pillar/sub-pillar shape."""
    if not isinstance(data, dict):
        raise ValidationFailure(
            f"Invalid strategy payload: expected a JSON object, got {type(data).__name__}",
            field="<root>",
        )

    try:
        return StrategyPayload.model_validate(data)
    except ValidationError as e:
        first = e.errors()[0]
        field = _field_path(first.get("loc", ()))
        raise ValidationFailure(
            f"Invalid strategy payload: {field}: {first.get('msg', 'invalid value')}",
            field=field,
        ) from e


def normalize_response(raw_text: str, grounding_chunks: Optional[Iterable[Any]] = None) -> Strategy:
    sources = extract_sources(grounding_chunks)
    payload = validate_payload(parse_payload(extract_payload(raw_text)))

    return Strategy(
        pillar=payload.pillar,
        subPillars=tuple(payload.sub_pillars),
        sources=tuple(sources),
    )
