"""Resource link validation and curated fallbacks."""

from eduai_api.domain.resources.fallback import (
    FallbackResource,
    classify_topic,
    get_fallback_resource,
    validate_and_enhance_resources,
)
from eduai_api.domain.resources.validator import ValidatedResource, validate_url

__all__ = [
    "FallbackResource",
    "ValidatedResource",
    "classify_topic",
    "get_fallback_resource",
    "validate_and_enhance_resources",
    "validate_url",
]
