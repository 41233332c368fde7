from eduai_api.core.config import Settings
from eduai_api.domain.ai.providers.base import ProviderConfig, ProviderKind
from eduai_api.domain.ai.providers.chat_completions import ChatCompletionsProvider
from eduai_api.domain.ai.providers.gemini import GeminiProvider
from eduai_api.domain.ai.service import AIService


def build_ai_service(settings: Settings) -> AIService:
    return AIService(
        providers=build_provider_sequence(settings),
        retry_delays_ms=settings.ai_retry_delays_ms,
        max_concurrency=settings.ai_max_concurrency,
        acquire_timeout_ms=settings.ai_backpressure_acquire_timeout_ms,
    )


def build_provider_sequence(settings: Settings) -> list[ProviderConfig]:
    retries = max(1, int(settings.ai_max_retries_per_provider))
    timeout = settings.ai_request_timeout_sec

    def groq(name: str, model: str) -> ChatCompletionsProvider:
        return ChatCompletionsProvider(
            name=name,
            api_key=settings.groq_api_key,
            model=model,
            base_url=settings.groq_base_url,
            timeout_sec=timeout,
        )

    return [
        ProviderConfig(
            kind=ProviderKind.PRIMARY,
            name="gemini",
            provider=GeminiProvider(
                api_key=settings.gemini_api_key,
                model=settings.gemini_model,
                timeout_sec=timeout,
            ),
            max_retries=retries,
        ),
        ProviderConfig(
            kind=ProviderKind.FAST_A,
            name="groq_llama_70b",
            provider=groq("groq_llama_70b", settings.groq_model_large),
            max_retries=retries,
        ),
        ProviderConfig(
            kind=ProviderKind.FAST_B,
            name="groq_llama_8b",
            provider=groq("groq_llama_8b", settings.groq_model_small),
            max_retries=retries,
        ),
        ProviderConfig(
            kind=ProviderKind.FAST_C,
            name="groq_mixtral",
            provider=groq("groq_mixtral", settings.groq_model_mixtral),
            max_retries=retries,
        ),
        ProviderConfig(
            kind=ProviderKind.SECONDARY,
            name="mistral",
            provider=ChatCompletionsProvider(
                name="mistral",
                api_key=settings.mistral_api_key,
                model=settings.mistral_model,
                base_url=settings.mistral_base_url,
                timeout_sec=timeout,
            ),
            max_retries=retries,
        ),
    ]
