from __future__ import annotations

from typing import Optional


class StrategyError(ValueError):
    """Base class for failures while producing a strategy."""


class BackendFailure(StrategyError):
    """The generative backend answered, but flagged the response as failed."""


class ParseFailure(StrategyError):
    """No structured payload could be located, or it is not valid JSON."""


class ValidationFailure(StrategyError):
    """The payload parsed but does not match the pillar/sub-pillar shape."""

    def __init__(self, message: str, *, field: Optional[str] = None) -> None:
        super().__init__(message)
        self.field = field
