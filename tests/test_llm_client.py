from __future__ import annotations

import unittest
from types import SimpleNamespace

from agents.llm_client import LLMClient, grounding_chunks_from_response
from lib.errors import BackendFailure


def _citation(url: str, title: str | None) -> SimpleNamespace:
    return SimpleNamespace(type="url_citation", url=url, title=title, start_index=0, end_index=1)


def _response(text: str, annotations: list, error=None) -> SimpleNamespace:
    return SimpleNamespace(
        output_text=text,
        error=error,
        output=[
            SimpleNamespace(type="web_search_call", id="ws_1", status="completed"),
            SimpleNamespace(
                type="message",
                content=[SimpleNamespace(type="output_text", text=text, annotations=annotations)],
            ),
        ],
    )


class _FakeResponses:
    def __init__(self, resp) -> None:
        self.resp = resp
        self.calls: list[dict] = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        return self.resp


class _FakeOpenAI:
    def __init__(self, resp) -> None:
        self.responses = _FakeResponses(resp)


class TestGroundingChunks(unittest.TestCase):
    def test_url_citations_become_web_chunks_in_order(self) -> None:
        resp = _response("x", [
            _citation("https://a.example", "A"),
            SimpleNamespace(type="file_citation", file_id="f1"),
            _citation("https://b.example", None),
        ])
        self.assertEqual(grounding_chunks_from_response(resp), [
            {"web": {"title": "A", "uri": "https://a.example"}},
            {"file_citation": {}},
            {"web": {"title": "", "uri": "https://b.example"}},
        ])

    def test_no_output(self) -> None:
        self.assertEqual(grounding_chunks_from_response(SimpleNamespace(output=None)), [])


class TestLLMClient(unittest.TestCase):
    def test_requests_web_search_without_schema(self) -> None:
        fake = _FakeOpenAI(_response("  answer  ", [_citation("https://a.example", "A")]))
        out = LLMClient("test-model", client=fake).generate_grounded(prompt="hello")

        self.assertEqual(out.text, "answer")
        self.assertEqual(out.grounding_chunks, [{"web": {"title": "A", "uri": "https://a.example"}}])

        self.assertEqual(len(fake.responses.calls), 1)
        call = fake.responses.calls[0]
        self.assertEqual(call["model"], "test-model")
        self.assertEqual(call["tools"], [{"type": "web_search"}])
        self.assertEqual(call["input"], [{"role": "user", "content": "hello"}])
        self.assertNotIn("text", call)
        self.assertNotIn("response_format", call)

    def test_response_error_raises_backend_failure(self) -> None:
        fake = _FakeOpenAI(_response("", [], error=SimpleNamespace(code="server_error", message="overloaded")))
        with self.assertRaises(BackendFailure) as ctx:
            LLMClient("m", client=fake).generate_grounded(prompt="p")
        self.assertIn("overloaded", str(ctx.exception))

    def test_sdk_errors_propagate(self) -> None:
        class _Boom:
            def create(self, **kwargs):
                raise TimeoutError("slow")

        fake = SimpleNamespace(responses=_Boom())
        with self.assertRaises(TimeoutError):
            LLMClient("m", client=fake).generate_grounded(prompt="p")


if __name__ == "__main__":
    unittest.main()
