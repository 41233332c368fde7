import json
import unittest
from unittest import mock
from urllib import error

from eduai_api.domain.ai import ConfigurationError, ProviderCallFailed
from eduai_api.domain.ai.providers import ChatCompletionsProvider, GeminiProvider


class _FakeResponse:
    def __init__(self, body, status: int = 200):
        self.status = status
        self._body = body if isinstance(body, str) else json.dumps(body)

    def read(self) -> bytes:
        return self._body.encode("utf-8")

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        return False


URLOPEN = "eduai_api.domain.ai.providers.common.request.urlopen"


class GeminiProviderTests(unittest.TestCase):
    def _provider(self, api_key: str = "g-key") -> GeminiProvider:
        return GeminiProvider(api_key=api_key, model="gemini-2.5-flash", timeout_sec=60)

    def test_missing_key_fails_before_network(self) -> None:
        with mock.patch(URLOPEN) as urlopen:
            with self.assertRaises(ConfigurationError):
                self._provider(api_key="").complete(prompt="hi")
        urlopen.assert_not_called()

    def test_extracts_first_candidate_text_and_builds_payload(self) -> None:
        body = {"candidates": [{"content": {"parts": [{"text": "Bonjour"}]}}]}
        with mock.patch(URLOPEN, return_value=_FakeResponse(body)) as urlopen:
            text = self._provider().complete(
                prompt="hi",
                system_prompt="be brief",
                json_mode=True,
                use_search=True,
            )

        self.assertEqual(text, "Bonjour")
        req = urlopen.call_args.args[0]
        self.assertIn("gemini-2.5-flash:generateContent?key=g-key", req.full_url)
        self.assertEqual(urlopen.call_args.kwargs["timeout"], 60)
        sent = json.loads(req.data.decode("utf-8"))
        self.assertEqual(sent["contents"][0]["parts"][0]["text"], "hi")
        self.assertEqual(sent["systemInstruction"]["parts"][0]["text"], "be brief")
        self.assertEqual(sent["generationConfig"]["responseMimeType"], "application/json")
        self.assertEqual(sent["tools"], [{"google_search": {}}])

    def test_plain_mode_has_no_tools_or_system_instruction(self) -> None:
        payload = GeminiProvider.build_payload(prompt="hi", system_prompt="", json_mode=False, use_search=False)

        self.assertEqual(payload["generationConfig"]["responseMimeType"], "text/plain")
        self.assertNotIn("tools", payload)
        self.assertNotIn("systemInstruction", payload)

    def test_missing_text_path_returns_empty_string(self) -> None:
        with mock.patch(URLOPEN, return_value=_FakeResponse({"candidates": []})):
            self.assertEqual(self._provider().complete(prompt="hi"), "")

    def test_http_error_maps_to_provider_call_failed(self) -> None:
        http_error = error.HTTPError("https://example.test", 429, "Too Many Requests", {}, None)
        with mock.patch(URLOPEN, side_effect=http_error):
            with self.assertRaises(ProviderCallFailed) as ctx:
                self._provider().complete(prompt="hi")

        self.assertEqual(ctx.exception.kind, "http_status")
        self.assertEqual(ctx.exception.status_code, 429)

    def test_transport_error_maps_to_provider_call_failed(self) -> None:
        with mock.patch(URLOPEN, side_effect=error.URLError("timed out")):
            with self.assertRaises(ProviderCallFailed) as ctx:
                self._provider().complete(prompt="hi")

        self.assertEqual(ctx.exception.kind, "transport")
        self.assertIn("timed out", str(ctx.exception))

    def test_unparsable_body_is_malformed_response(self) -> None:
        with mock.patch(URLOPEN, return_value=_FakeResponse("<html>oops</html>")):
            with self.assertRaises(ProviderCallFailed) as ctx:
                self._provider().complete(prompt="hi")

        self.assertEqual(ctx.exception.kind, "malformed_response")


class ChatCompletionsProviderTests(unittest.TestCase):
    def _provider(self, api_key: str = "k-123") -> ChatCompletionsProvider:
        return ChatCompletionsProvider(
            name="groq_llama_70b",
            api_key=api_key,
            model="llama-3.3-70b-versatile",
            base_url="https://api.groq.com/openai/v1/",
        )

    def test_missing_key_fails_before_network(self) -> None:
        with mock.patch(URLOPEN) as urlopen:
            with self.assertRaises(ConfigurationError) as ctx:
                self._provider(api_key="").complete(prompt="hi")
        urlopen.assert_not_called()
        self.assertIn("groq_llama_70b_api_key_missing", str(ctx.exception))

    def test_json_mode_requests_json_object(self) -> None:
        body = {"choices": [{"message": {"content": '{"ok": true}'}}]}
        with mock.patch(URLOPEN, return_value=_FakeResponse(body)) as urlopen:
            text = self._provider().complete(prompt="hi", system_prompt="sys", json_mode=True)

        self.assertEqual(text, '{"ok": true}')
        req = urlopen.call_args.args[0]
        self.assertEqual(req.full_url, "https://api.groq.com/openai/v1/chat/completions")
        self.assertEqual(req.get_header("Authorization"), "Bearer k-123")
        sent = json.loads(req.data.decode("utf-8"))
        self.assertEqual(sent["model"], "llama-3.3-70b-versatile")
        self.assertEqual(sent["messages"][0], {"role": "system", "content": "sys"})
        self.assertEqual(sent["response_format"], {"type": "json_object"})
        self.assertEqual(sent["max_tokens"], 4000)

    def test_text_mode_has_no_response_format(self) -> None:
        payload = self._provider().build_payload(prompt="hi", system_prompt="", json_mode=False)

        self.assertNotIn("response_format", payload)
        self.assertEqual(payload["max_tokens"], 2000)

    def test_content_parts_are_joined(self) -> None:
        body = {"choices": [{"message": {"content": [{"text": "a"}, {"text": "b"}]}}]}
        with mock.patch(URLOPEN, return_value=_FakeResponse(body)):
            self.assertEqual(self._provider().complete(prompt="hi"), "a\nb")

    def test_missing_choices_returns_empty_string(self) -> None:
        with mock.patch(URLOPEN, return_value=_FakeResponse({"error": "nope"})):
            self.assertEqual(self._provider().complete(prompt="hi"), "")


if __name__ == "__main__":
    unittest.main()
