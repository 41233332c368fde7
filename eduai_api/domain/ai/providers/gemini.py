from typing import Any
from urllib import parse

from eduai_api.domain.ai.errors import ConfigurationError
from eduai_api.domain.ai.providers.common import post_json


class GeminiProvider:
    def __init__(
        self,
        *,
        api_key: str,
        model: str,
        timeout_sec: int = 60,
    ) -> None:
        self.api_key = api_key
        self.model = model
        self.timeout_sec = timeout_sec

    def complete(
        self,
        *,
        prompt: str,
        system_prompt: str = "",
        json_mode: bool = False,
        use_search: bool = False,
    ) -> str:
        if not self.api_key:
            raise ConfigurationError("gemini_api_key_missing")

        endpoint = (
            "https://generativelanguage.googleapis.com/v1beta/models/"
            f"{parse.quote(self.model)}:generateContent?key={parse.quote(self.api_key)}"
        )
        decoded = post_json(
            endpoint,
            self.build_payload(
                prompt=prompt,
                system_prompt=system_prompt,
                json_mode=json_mode,
                use_search=use_search,
            ),
            headers={},
            timeout_sec=self.timeout_sec,
            provider="gemini",
        )
        return self._extract_text(decoded)

    @staticmethod
    def build_payload(
        *,
        prompt: str,
        system_prompt: str,
        json_mode: bool,
        use_search: bool,
    ) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "contents": [
                {
                    "role": "user",
                    "parts": [{"text": prompt}],
                }
            ],
            "generationConfig": {
                "responseMimeType": "application/json" if json_mode else "text/plain",
                "temperature": 0.7,
            },
        }
        if system_prompt:
            payload["systemInstruction"] = {"parts": [{"text": system_prompt}]}
        if use_search:
            payload["tools"] = [{"google_search": {}}]
        return payload

    @staticmethod
    def _extract_text(response_json: dict[str, Any]) -> str:
        candidates = response_json.get("candidates")
        if not isinstance(candidates, list) or not candidates:
            return ""

        first = candidates[0]
        if not isinstance(first, dict):
            return ""
        content = first.get("content") or {}
        parts = content.get("parts") if isinstance(content, dict) else None
        if not isinstance(parts, list) or not parts:
            return ""

        text = parts[0].get("text") if isinstance(parts[0], dict) else None
        return text if isinstance(text, str) else ""
