from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from app_logging.run_logger import RunLogger
from schemas.strategy import Strategy


GENERIC_ERROR_MESSAGE = "An unexpected error occurred while generating the strategy."


class SessionStatus(str, Enum):
    idle = "idle"
    loading = "loading"
    success = "success"
    error = "error"


def failure_message(err: Exception) -> str:
    return str(err).strip() or GENERIC_ERROR_MESSAGE


@dataclass
class StrategySession:
    """
    Explicit state for one generation surface.

    idle -> loading on submit; loading -> success (holds result) or error
    (holds message). Submitting again from either terminal state goes back to
    loading and clears the previous result and error.
    """
    topic: str = ""
    loading: bool = False
    result: Optional[Strategy] = None
    error: Optional[str] = None

    @property
    def status(self) -> SessionStatus:
        if self.loading:
            return SessionStatus.loading
        if self.error is not None:
            return SessionStatus.error
        if self.result is not None:
            return SessionStatus.success
        return SessionStatus.idle

    def begin(self, topic: str) -> bool:
        """Enter loading. Blank topics are ignored and return False."""
        if self.loading:
            raise RuntimeError("A strategy generation is already in flight")
        if not (topic or "").strip():
            return False

        self.topic = topic
        self.loading = True
        self.result = None
        self.error = None
        return True

    def succeed(self, strategy: Strategy) -> None:
        if not self.loading:
            raise RuntimeError(f"Cannot record a result from state {self.status.value!r}")
        self.result = strategy
        self.loading = False

    def fail(self, err: Exception) -> None:
        if not self.loading:
            raise RuntimeError(f"Cannot record a failure from state {self.status.value!r}")
        self.error = failure_message(err)
        self.loading = False

    def submit(
        self,
        topic: str,
        generate: Callable[[str], Strategy],
        *,
        logger: Optional[RunLogger] = None,
        agent_name: str = "seo-strategy",
    ) -> SessionStatus:
        """Run one generation and land in success or error.

        The session always leaves loading, even when writing the run log
        fails; a log write error is re-raised after the state is recorded.
        """
        if not self.begin(topic):
            return self.status

        try:
            if logger:
                logger.start(agent_name, {"topic": topic})
            strategy = generate(topic.strip())
        except Exception as e:
            self.fail(e)
            if logger:
                logger.error(agent_name, {"topic": topic}, e)
            return self.status

        self.succeed(strategy)
        if logger:
            logger.end(
                agent_name,
                strategy.to_dict(),
                metrics={
                    "sub_pillar_count": len(strategy.sub_pillars),
                    "source_count": len(strategy.sources),
                },
            )
        return self.status
