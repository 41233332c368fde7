from typing import Any

from fastapi import HTTPException
from pydantic import BaseModel, Field

from eduai_api.services.learning import generation_service
from eduai_api.services.learning.error_policy import bad_request, build_structured_error_detail
from eduai_api.services.learning.pipeline_runtime import (
    ai_error_detail,
    classify_exception,
    format_pipeline_error_detail,
)


DEFAULT_CHAT_SYSTEM_PROMPT = (
    "You are EduAI, a friendly learning assistant. "
    "Answer the learner's latest message clearly and concisely, "
    "and suggest a concrete next step when it helps."
)


class ChatRequest(BaseModel):
    messages: list[dict[str, Any]] = Field(default_factory=list)


def _message_text(msg: dict[str, Any]) -> str:
    parts = msg.get("parts")
    if isinstance(parts, list):
        for part in parts:
            if isinstance(part, dict) and part.get("type") == "text":
                text = part.get("text")
                if isinstance(text, str) and text.strip():
                    return text.strip()

    content = msg.get("content")
    if isinstance(content, str):
        return content.strip()
    return ""


def _compact_text(value: Any, max_chars: int) -> str:
    text = " ".join(str(value or "").split())
    if len(text) <= max_chars:
        return text
    return text[: max_chars - 3].rstrip() + "..."


def _extract_last_user_text(messages: list[dict[str, Any]]) -> str:
    for msg in reversed(messages):
        if isinstance(msg, dict) and msg.get("role") == "user":
            text = _message_text(msg)
            if text:
                return text
    return ""


def _serialize_recent_messages(messages: list[dict[str, Any]], limit: int = 8) -> str:
    rows: list[str] = []
    for msg in messages[-limit:]:
        if not isinstance(msg, dict) or msg.get("role") not in {"user", "assistant"}:
            continue
        text = _message_text(msg)
        if text:
            rows.append(f"{msg['role']}: {_compact_text(text, 600)}")
    return "\n".join(rows)


def build_chat_prompts(messages: list[dict[str, Any]]) -> tuple[str, str]:
    system_parts = [
        _message_text(msg)
        for msg in messages
        if isinstance(msg, dict) and msg.get("role") == "system" and _message_text(msg)
    ]
    system_prompt = "\n".join(system_parts) or DEFAULT_CHAT_SYSTEM_PROMPT
    return system_prompt, _serialize_recent_messages(messages)


def chat(payload: ChatRequest) -> dict[str, Any]:
    if not _extract_last_user_text(payload.messages):
        raise bad_request("chat_user_message_missing")

    system_prompt, user_prompt = build_chat_prompts(payload.messages)
    ai_service = generation_service._require_ai_service()

    try:
        answer = ai_service.call_ai_model(user_prompt, system_prompt)
    except Exception as exc:
        reason = ai_error_detail(exc)
        code, status_code, retryable = classify_exception(exc)
        raise HTTPException(
            status_code=status_code,
            detail=build_structured_error_detail(
                error_code=code,
                message=reason,
                retryable=retryable,
                detail=format_pipeline_error_detail("chat_generate", code, reason),
            ),
        ) from exc

    content = str(answer or "").strip()
    if not content:
        raise HTTPException(
            status_code=502,
            detail=build_structured_error_detail(
                error_code="empty_output",
                message="AI returned empty content",
                retryable=False,
                detail="chat_empty_assistant",
            ),
        )
    return {"content": content}
