from dataclasses import dataclass
from typing import Any
from urllib.parse import urlsplit

from eduai_api.domain.resources.catalog import (
    EDUCATIONAL_KEYWORDS,
    KNOWN_GOOD_DOMAINS,
    KNOWN_PLATFORMS,
)


MIN_TRUSTED_CONFIDENCE = 50


@dataclass(frozen=True)
class ValidatedResource:
    url: str
    valid: bool = False
    confidence: int = 0
    issues: tuple[str, ...] = ()
    is_secure: bool = False
    is_educational: bool = False

    @property
    def trusted(self) -> bool:
        return self.valid and self.confidence >= MIN_TRUSTED_CONFIDENCE

    def to_dict(self) -> dict[str, Any]:
        return {
            "url": self.url,
            "valid": self.valid,
            "confidence": self.confidence,
            "issues": list(self.issues),
            "isSecure": self.is_secure,
            "isEducational": self.is_educational,
        }


def normalize_host(host: str) -> str:
    host = host.strip().lower()
    if host.startswith("www."):
        host = host[4:]
    return host


def validate_url(url: str | None) -> ValidatedResource:
    """Score how trustworthy a resource link looks from its domain alone.

    The result only depends on the URL string and the static catalogue, no
    request is made. Only known-good domains are marked ``valid``; keyword
    and platform matches raise the confidence without validating the link.
    """
    raw = url if isinstance(url, str) else ""
    if not raw.strip():
        return ValidatedResource(url=raw, issues=("Empty URL",))

    issues: list[str] = []
    is_secure = raw.startswith("https://")
    if not is_secure:
        issues.append("Not using HTTPS")

    try:
        host = urlsplit(raw).hostname
    except ValueError:
        host = None
    if not host:
        issues.append("Invalid URL format")
        return ValidatedResource(url=raw, issues=tuple(issues), is_secure=is_secure)

    domain = normalize_host(host)
    if domain in KNOWN_GOOD_DOMAINS:
        return ValidatedResource(
            url=raw,
            valid=True,
            confidence=90,
            issues=tuple(issues),
            is_secure=is_secure,
            is_educational=True,
        )

    confidence = 0
    is_educational = False
    if any(keyword in domain for keyword in EDUCATIONAL_KEYWORDS):
        confidence = 70
        is_educational = True
    elif domain in KNOWN_PLATFORMS:
        confidence = 60

    if confidence < MIN_TRUSTED_CONFIDENCE:
        issues.append("Unknown or low-quality domain")

    return ValidatedResource(
        url=raw,
        confidence=confidence,
        issues=tuple(issues),
        is_secure=is_secure,
        is_educational=is_educational,
    )
