"""AI domain services and provider abstractions."""

from eduai_api.domain.ai.errors import (
    AIError,
    AllProvidersExhausted,
    ConfigurationError,
    EmptyResponse,
    ProviderCallFailed,
)
from eduai_api.domain.ai.factory import build_ai_service
from eduai_api.domain.ai.service import AIService

__all__ = [
    "AIError",
    "AIService",
    "AllProvidersExhausted",
    "ConfigurationError",
    "EmptyResponse",
    "ProviderCallFailed",
    "build_ai_service",
]
