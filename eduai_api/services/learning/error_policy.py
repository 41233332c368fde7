from typing import Any

from fastapi import HTTPException
from starlette.exceptions import HTTPException as StarletteHTTPException


KNOWN_ERROR_CODES = {
    "bad_request",
    "schema_mismatch",
    "rate_limited",
    "timeout",
    "config_error",
    "empty_output",
    "provider_error",
    "unknown",
}

RETRYABLE_ERROR_CODES = {
    "schema_mismatch",
    "rate_limited",
    "timeout",
}


def normalize_error_code(value: Any) -> str:
    raw = str(value or "").strip().lower()
    if raw in KNOWN_ERROR_CODES:
        return raw
    return "unknown"


def build_structured_error_detail(
    *,
    error_code: str,
    message: str | None = None,
    retryable: bool | None = None,
    detail: Any = None,
) -> dict[str, Any]:
    code = normalize_error_code(error_code)
    message_text = " ".join(str(message or "").split()).strip()
    if not message_text:
        message_text = _build_message(code, str(detail or ""))
    if retryable is None:
        retryable = code in RETRYABLE_ERROR_CODES

    legacy_detail = " ".join(str(detail or "").split()).strip()
    if not legacy_detail:
        legacy_detail = message_text

    return {
        "error_code": code,
        "message": message_text[:260],
        "retryable": bool(retryable),
        "detail": legacy_detail,
    }


def bad_request(message: str) -> HTTPException:
    return HTTPException(
        status_code=400,
        detail=build_structured_error_detail(error_code="bad_request", message=message, retryable=False),
    )


def invalid_fields_message(errors: list[dict[str, Any]]) -> str:
    fields: list[str] = []
    for err in errors:
        # FastAPI는 본문 오류 위치 앞에 "body"를 붙인다.
        loc = [str(part) for part in err.get("loc", ()) if part != "body"]
        field = ".".join(loc) or "body"
        if field not in fields:
            fields.append(field)
    return f"Missing or invalid fields: {', '.join(fields)}"


def _build_message(code: str, reason: str) -> str:
    message = " ".join(str(reason or "").split()).strip()
    if message:
        return message[:260]
    defaults = {
        "bad_request": "Invalid request",
        "schema_mismatch": "AI response schema mismatch",
        "rate_limited": "Too many requests",
        "timeout": "AI request timed out",
        "config_error": "AI service configuration error",
        "empty_output": "AI returned empty content",
        "provider_error": "All AI models failed to respond. Please check your API keys and try again.",
        "unknown": "Request failed",
    }
    return defaults.get(code, "Request failed")


def _payload_from_detail_dict(detail: dict[str, Any]) -> tuple[str, str, bool, str]:
    code = normalize_error_code(detail.get("error_code"))
    message = " ".join(str(detail.get("message") or "").split()).strip()
    if not message:
        message = _build_message(code, detail.get("detail") or "")
    retryable = bool(detail.get("retryable")) if "retryable" in detail else code in RETRYABLE_ERROR_CODES
    legacy_detail = str(detail.get("detail") or "").strip() or message
    return code, message[:260], retryable, legacy_detail


def build_http_error_payload(exc: StarletteHTTPException, trace_id: str) -> dict[str, Any]:
    detail = exc.detail

    if isinstance(detail, dict):
        code, message, retryable, legacy_detail = _payload_from_detail_dict(detail)
    else:
        # 라우팅 오류(예: "Not Found", "Method Not Allowed")는 문자열 detail을 그대로 메시지로 쓴다.
        code = "unknown"
        message = _build_message(code, str(detail or ""))
        retryable = False
        legacy_detail = message

    return {
        "success": False,
        # 프론트엔드는 `error` 필드만 읽는다.
        "error": message,
        "error_code": code,
        "message": message,
        "retryable": retryable,
        "trace_id": trace_id,
        "detail": legacy_detail,
    }


def build_unexpected_error_payload(trace_id: str) -> dict[str, Any]:
    return {
        "success": False,
        "error": "Internal server error",
        "error_code": "unknown",
        "message": "Unexpected server error",
        "retryable": False,
        "trace_id": trace_id,
        "detail": "unexpected_server_error",
    }
