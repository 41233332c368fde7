from functools import lru_cache

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    env: str = "development"
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    cors_origins: list[str] = ["http://localhost:5173", "http://localhost:3000"]
    log_level: str = "INFO"

    # 공급자 순서는 고정: gemini -> groq(70b, 8b, mixtral) -> mistral
    ai_request_timeout_sec: int = 60
    ai_max_retries_per_provider: int = 3
    ai_retry_delays_ms: list[int] = [1000, 2000, 4000]
    ai_max_concurrency: int = 4
    ai_backpressure_acquire_timeout_ms: int = 200

    gemini_api_key: str = Field(
        default="",
        validation_alias=AliasChoices("GEMINI_API_KEY", "GOOGLE_GENERATIVE_AI_API_KEY"),
    )
    gemini_model: str = "gemini-2.5-flash"

    groq_api_key: str = ""
    groq_base_url: str = "https://api.groq.com/openai/v1"
    groq_model_large: str = "llama-3.3-70b-versatile"
    groq_model_small: str = "llama-3.1-8b-instant"
    groq_model_mixtral: str = "mixtral-8x7b-32768"

    mistral_api_key: str = ""
    mistral_base_url: str = "https://api.mistral.ai/v1"
    mistral_model: str = "mistral-large-latest"

    rate_limit_window_ms: int = 5000
    template_fallback_enabled: bool = False

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
