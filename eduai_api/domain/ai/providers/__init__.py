"""AI providers."""

from eduai_api.domain.ai.providers.base import CallOutcome, ProviderConfig, ProviderKind, TextProvider
from eduai_api.domain.ai.providers.chat_completions import ChatCompletionsProvider
from eduai_api.domain.ai.providers.gemini import GeminiProvider

__all__ = [
    "CallOutcome",
    "ChatCompletionsProvider",
    "GeminiProvider",
    "ProviderConfig",
    "ProviderKind",
    "TextProvider",
]
