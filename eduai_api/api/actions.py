from functools import lru_cache
from typing import Any, Callable

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from eduai_api.core.config import get_settings
from eduai_api.services.learning.chat_service import ChatRequest, chat
from eduai_api.services.learning.error_policy import (
    bad_request,
    build_structured_error_detail,
    invalid_fields_message,
)
from eduai_api.services.learning.generation_service import (
    ArticleRequest,
    RoadmapRequest,
    UrlValidationRequest,
    generate_article,
    generate_roadmap,
    validate_resource_url,
)
from eduai_api.services.rate_limit import InMemoryRateLimitStore, RateLimiter


router = APIRouter(prefix="/api", tags=["public"])
settings = get_settings()


class ActionRequest(BaseModel):
    """`{action, data, userId}`; the legacy client sends the fields next to `action`."""

    model_config = ConfigDict(extra="allow")

    action: str = ""
    data: dict[str, Any] = Field(default_factory=dict)
    userId: str | int | None = None

    def action_data(self) -> dict[str, Any]:
        if self.data:
            return self.data
        return dict(self.model_extra or {})


def _run(model: type[BaseModel], handler: Callable[[Any], dict[str, Any]]) -> Callable[[dict[str, Any]], dict[str, Any]]:
    def run(data: dict[str, Any]) -> dict[str, Any]:
        try:
            payload = model.model_validate(data)
        except ValidationError as exc:
            raise bad_request(invalid_fields_message(exc.errors())) from exc
        return handler(payload)

    return run


ACTION_HANDLERS: dict[str, Callable[[dict[str, Any]], dict[str, Any]]] = {
    "generate_roadmap": _run(RoadmapRequest, generate_roadmap),
    "fetch_article": _run(ArticleRequest, generate_article),
    "chat": _run(ChatRequest, chat),
    "validate_url": _run(UrlValidationRequest, validate_resource_url),
}

ACTION_ALIASES = {
    "generateRoadmap": "generate_roadmap",
    "generateArticle": "fetch_article",
    "generate_article": "fetch_article",
    "fetchArticle": "fetch_article",
    "validateUrl": "validate_url",
}


def dispatch_action(action: str, data: dict[str, Any]) -> dict[str, Any]:
    name = ACTION_ALIASES.get(action, action)
    handler = ACTION_HANDLERS.get(name)
    if handler is None:
        raise bad_request(f"Invalid action: {action}" if action else "Missing required field: action")
    return handler(data)


@lru_cache(maxsize=1)
def _get_rate_limiter() -> RateLimiter:
    return RateLimiter(InMemoryRateLimitStore(), window_ms=settings.rate_limit_window_ms)


@router.post("")
def run_action(payload: ActionRequest) -> dict[str, Any]:
    return {"success": True, "data": dispatch_action(payload.action, payload.action_data())}


@router.post("/ai")
def run_user_action(payload: ActionRequest) -> dict[str, Any]:
    if not payload.userId:
        raise bad_request("User ID required")

    if _get_rate_limiter().is_limited(str(payload.userId)):
        raise HTTPException(
            status_code=429,
            detail=build_structured_error_detail(
                error_code="rate_limited",
                message="Too many requests",
                retryable=True,
            ),
        )

    return {"result": dispatch_action(payload.action, payload.action_data())}
