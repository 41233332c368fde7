import logging
from dataclasses import dataclass
from typing import Any, Literal
from urllib.parse import quote_plus

from eduai_api.domain.resources.catalog import (
    DATA_SCIENCE_KEYWORDS,
    DIRECT_VIDEO_MARKERS,
    LANGUAGE_HINTS,
    LANGUAGE_SEARCH_QUERIES,
    PROGRAMMING_KEYWORDS,
    VERIFIED_EDUCATIONAL_PLATFORMS,
    YOUTUBE_SEARCH_URL,
)
from eduai_api.domain.resources.validator import validate_url


logger = logging.getLogger(__name__)

ResourceKind = Literal["article", "video"]


@dataclass(frozen=True)
class FallbackResource:
    title: str
    url: str
    type: Literal["search", "verified"]
    confidence: Literal["high", "medium", "low"] = "high"
    platform: str = ""
    status: str = "valid"

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "url": self.url,
            "type": self.type,
            "status": self.status,
            "platform": self.platform,
            "confidence": self.confidence,
        }


def classify_topic(topic: str) -> str:
    lowered = str(topic or "").lower()
    if any(keyword in lowered for keyword in PROGRAMMING_KEYWORDS):
        return "programming"
    if any(keyword in lowered for keyword in DATA_SCIENCE_KEYWORDS):
        return "data-science"
    return "general"


def detect_language_hint(*texts: str | None) -> str:
    lowered = " ".join(str(text or "").lower() for text in texts)
    for code, markers in LANGUAGE_HINTS:
        if any(marker in lowered for marker in markers):
            return code
    return "en"


def get_fallback_resource(topic: str, kind: ResourceKind = "article", language: str | None = None) -> FallbackResource:
    label = str(topic or "").strip() or "learning"

    if kind == "video":
        code = detect_language_hint(label, language)
        phrase = LANGUAGE_SEARCH_QUERIES.get(code, LANGUAGE_SEARCH_QUERIES["en"])
        return FallbackResource(
            title=f"{label} - Video Tutorial Search",
            url=YOUTUBE_SEARCH_URL + quote_plus(f"{label.lower()} {phrase}"),
            type="search",
            platform="YouTube",
        )

    platforms = VERIFIED_EDUCATIONAL_PLATFORMS[classify_topic(label)]
    return FallbackResource(
        title=f"{label} - Comprehensive Guide",
        url=platforms[0],
        type="verified",
        platform="Verified Educational Platform",
    )


def is_direct_video_link(url: str) -> bool:
    return any(marker in url for marker in DIRECT_VIDEO_MARKERS)


def _resolve_slot(
    resource: Any,
    *,
    kind: ResourceKind,
    topic: str,
    language: str | None,
    allow_direct_video: bool,
) -> dict[str, Any]:
    fallback = get_fallback_resource(topic, kind, language)
    if not isinstance(resource, dict):
        return fallback.to_dict()

    url = resource.get("url")
    if not isinstance(url, str) or not url.strip():
        return fallback.to_dict()

    try:
        validated = validate_url(url)
    except Exception:
        logger.warning("Resource validation crashed for %s url=%r", kind, url, exc_info=True)
        return fallback.to_dict()

    if not validated.trusted:
        logger.info("Replacing %s resource %r: %s", kind, url, ", ".join(validated.issues) or "untrusted")
        return fallback.to_dict()

    if kind == "video" and not allow_direct_video and is_direct_video_link(url):
        return fallback.to_dict()

    return {**resource, **validated.to_dict(), "status": "valid"}


def validate_and_enhance_resources(
    resources: Any,
    topic: str,
    language: str | None = None,
    is_first_article: bool = False,
) -> dict[str, dict[str, Any]]:
    """Return an ``article`` and a ``video`` resource that are safe to show.

    Untrusted, missing or malformed entries are replaced with a catalogue
    fallback. Direct video links survive only for the first article.
    """
    source = resources if isinstance(resources, dict) else {}
    return {
        "article": _resolve_slot(
            source.get("article"),
            kind="article",
            topic=topic,
            language=language,
            allow_direct_video=is_first_article,
        ),
        "video": _resolve_slot(
            source.get("video"),
            kind="video",
            topic=topic,
            language=language,
            allow_direct_video=is_first_article,
        ),
    }
