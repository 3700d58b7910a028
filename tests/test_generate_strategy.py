from __future__ import annotations

import contextlib
import io
import json
import unittest
from pathlib import Path
from tempfile import TemporaryDirectory

import generate_strategy
from agents.llm_client import GroundedResponse
from agents.strategy_agent import StrategyAgent
from strategy_samples import fenced, payload


class _FakeLLM:
    def __init__(self, text: str) -> None:
        self.text = text

    def generate_grounded(self, *, prompt: str) -> GroundedResponse:
        return GroundedResponse(text=self.text, grounding_chunks=[{"web": {"title": "A", "uri": "https://a.example"}}])


def _run(argv: list[str], text: str) -> tuple[int, str]:
    buf = io.StringIO()
    with contextlib.redirect_stdout(buf):
        code = generate_strategy.main(argv, agent=StrategyAgent(llm=_FakeLLM(text)))
    return code, buf.getvalue()


class TestGenerateStrategyCli(unittest.TestCase):
    def _config(self, td: str) -> Path:
        cfg = Path(td) / "strategy.yaml"
        cfg.write_text(
            f"output_dir: {Path(td) / 'out'}\nrun_log_path: {Path(td) / 'runs.jsonl'}\n",
            encoding="utf-8",
        )
        return cfg

    def test_writes_csv_and_json(self) -> None:
        with TemporaryDirectory() as td:
            cfg = self._config(td)
            code, out = _run(
                ["--topic", "Sustainable Coffee", "--config", str(cfg), "--json", "--sort", "keywordDifficulty"],
                fenced(payload()),
            )
            self.assertEqual(code, 0)
            self.assertIn("Core Pillar: The Complete Guide to Sustainable Coffee Farming", out)
            self.assertIn("- A: https://a.example", out)

            csv_path = Path(td) / "out" / "seo-strategy-sustainable-coffee.csv"
            lines = csv_path.read_text(encoding="utf-8").split("\n")
            self.assertEqual(len(lines), 12)

            data = json.loads(csv_path.with_suffix(".json").read_text(encoding="utf-8"))
            self.assertEqual(len(data["subPillars"]), 10)

            events = (Path(td) / "runs.jsonl").read_text(encoding="utf-8").splitlines()
            self.assertEqual([json.loads(e)["event"] for e in events], ["start", "end"])

    def test_failure_returns_non_zero(self) -> None:
        with TemporaryDirectory() as td:
            cfg = self._config(td)
            code, out = _run(["--topic", "Coffee", "--config", str(cfg)], "no payload here")
            self.assertEqual(code, 1)
            self.assertIn("no structured payload located", out)
            self.assertFalse((Path(td) / "out").exists())

    def test_blank_topic(self) -> None:
        with TemporaryDirectory() as td:
            code, _ = _run(["--topic", "  ", "--config", str(self._config(td))], fenced(payload()))
            self.assertEqual(code, 1)


if __name__ == "__main__":
    unittest.main()
