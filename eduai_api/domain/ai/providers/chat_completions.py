from typing import Any

from eduai_api.domain.ai.errors import ConfigurationError
from eduai_api.domain.ai.providers.common import post_json


class ChatCompletionsProvider:
    """OpenAI-compatible `/chat/completions` endpoint (Groq, Mistral)."""

    def __init__(
        self,
        *,
        name: str,
        api_key: str,
        model: str,
        base_url: str,
        timeout_sec: int = 60,
    ) -> None:
        self.name = name
        self.api_key = api_key
        self.model = model
        self.base_url = (base_url or "").rstrip("/")
        self.timeout_sec = timeout_sec

    def complete(
        self,
        *,
        prompt: str,
        system_prompt: str = "",
        json_mode: bool = False,
        use_search: bool = False,
    ) -> str:
        # use_search는 gemini 전용 옵션이라 여기서는 무시한다.
        if not self.api_key:
            raise ConfigurationError(f"{self.name}_api_key_missing")
        if not self.base_url:
            raise ConfigurationError(f"{self.name}_base_url_missing")

        decoded = post_json(
            f"{self.base_url}/chat/completions",
            self.build_payload(prompt=prompt, system_prompt=system_prompt, json_mode=json_mode),
            headers={"Authorization": f"Bearer {self.api_key}"},
            timeout_sec=self.timeout_sec,
            provider=self.name,
        )
        return self._extract_text(decoded)

    def build_payload(self, *, prompt: str, system_prompt: str, json_mode: bool) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": prompt},
            ],
            "temperature": 0.7,
            "max_tokens": 4000 if json_mode else 2000,
        }
        if json_mode:
            payload["response_format"] = {"type": "json_object"}
        return payload

    @staticmethod
    def _extract_text(response_json: dict[str, Any]) -> str:
        choices = response_json.get("choices")
        if not isinstance(choices, list) or not choices:
            return ""

        first = choices[0]
        message = first.get("message", {}) if isinstance(first, dict) else {}
        content = message.get("content") if isinstance(message, dict) else None

        if isinstance(content, str):
            return content

        if isinstance(content, list):
            texts: list[str] = []
            for part in content:
                if isinstance(part, dict):
                    text = part.get("text")
                    if isinstance(text, str) and text.strip():
                        texts.append(text)
            return "\n".join(texts)

        return ""
