import json
from typing import Any
from urllib import error, request

from eduai_api.domain.ai.errors import ProviderCallFailed


def strip_code_fence(text: str) -> str:
    raw = text.strip()
    if raw.startswith("```"):
        lines = raw.splitlines()
        if len(lines) >= 2 and lines[-1].strip().startswith("```"):
            return "\n".join(lines[1:-1]).strip()
    return raw


def parse_json_text(text: str) -> dict:
    cleaned = strip_code_fence(text)
    parsed = json.loads(cleaned)
    if not isinstance(parsed, dict):
        raise ValueError("ai_response_not_object")
    return parsed


def post_json(
    endpoint: str,
    payload: dict[str, Any],
    *,
    headers: dict[str, str],
    timeout_sec: int,
    provider: str,
) -> dict[str, Any]:
    req = request.Request(
        endpoint,
        data=json.dumps(payload).encode("utf-8"),
        headers={"Content-Type": "application/json", **headers},
        method="POST",
    )

    try:
        with request.urlopen(req, timeout=timeout_sec) as response:
            status = getattr(response, "status", 200)
            body = response.read().decode("utf-8")
    except error.HTTPError as exc:
        raise ProviderCallFailed(
            f"{provider}_http_error:{exc.code}",
            kind="http_status",
            status_code=exc.code,
        ) from exc
    except Exception as exc:
        raise ProviderCallFailed(f"{provider}_request_failed:{exc}", kind="transport") from exc

    if status != 200:
        raise ProviderCallFailed(f"{provider}_http_error:{status}", kind="http_status", status_code=status)

    try:
        decoded = json.loads(body)
    except ValueError as exc:
        raise ProviderCallFailed(f"{provider}_malformed_body:pos={getattr(exc, 'pos', -1)}", kind="malformed_response") from exc

    if not isinstance(decoded, dict):
        raise ProviderCallFailed(f"{provider}_malformed_body:not_an_object", kind="malformed_response")
    return decoded
