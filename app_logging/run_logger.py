import json
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional


def utc_iso() -> str:
    return datetime.now(timezone.utc).replace(microsecond=0).isoformat().replace("+00:00", "Z")


def new_run_id() -> str:
    return datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%SZ") + "-" + uuid.uuid4().hex[:8]


@dataclass
class RunLogger:
    """
    Append-only JSONL run logger.

    Each call writes one JSON object per line to log_path, tagged with the
    run id and the topic being generated.
    """
    run_id: str
    topic: str
    log_path: Path

    def _write(self, payload: dict[str, Any]) -> None:
        self.log_path.parent.mkdir(parents=True, exist_ok=True)
        with self.log_path.open("a", encoding="utf-8") as f:
            f.write(json.dumps(payload, ensure_ascii=False) + "\n")

    def _base(self, agent: str, event: str, status: str) -> dict[str, Any]:
        return {
            "ts": utc_iso(),
            "run_id": self.run_id,
            "topic": self.topic,
            "agent": agent,
            "event": event,
            "status": status,
        }

    def start(self, agent: str, input: Any) -> None:
        self._write({**self._base(agent, "start", "ok"), "input": input})

    def end(self, agent: str, output: Any, metrics: Optional[dict[str, Any]] = None) -> None:
        self._write({
            **self._base(agent, "end", "ok"),
            "output": output,
            "metrics": metrics or {},
        })

    def error(self, agent: str, input: Any, err: Exception) -> None:
        self._write({
            **self._base(agent, "error", "error"),
            "input": input,
            "error": {
                "type": err.__class__.__name__,
                "message": str(err),
            },
        })
