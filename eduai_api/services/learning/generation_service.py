from datetime import datetime, timezone
from functools import lru_cache
import logging
from typing import Any
from uuid import uuid4

from fastapi import HTTPException
from pydantic import AliasChoices, BaseModel, Field

from eduai_api.core.config import get_settings
from eduai_api.domain.ai import build_ai_service
from eduai_api.domain.resources import validate_and_enhance_resources, validate_url
from eduai_api.services.learning.error_policy import build_structured_error_detail
from eduai_api.services.learning.normalizer import (
    as_text,
    count_days,
    normalize_concepts,
    normalize_months,
    normalize_sections,
    normalize_steps,
    slugify,
)
from eduai_api.services.learning.pipeline_runtime import (
    PipelineFailure,
    ai_error_detail,
    run_ai_with_retry,
)
from eduai_api.services.learning.prompts import (
    ARTICLE_SYSTEM_PROMPT,
    build_article_prompt,
    build_roadmap_prompts,
    enhance_resource_prompt,
)
from eduai_api.services.learning.templates import template_article, template_months


logger = logging.getLogger(__name__)
settings = get_settings()


@lru_cache(maxsize=1)
def _get_ai_service():
    return build_ai_service(settings)


def _require_ai_service():
    try:
        return _get_ai_service()
    except Exception as exc:
        reason = ai_error_detail(exc)
        raise HTTPException(
            status_code=503,
            detail=build_structured_error_detail(
                error_code="config_error",
                message=reason,
                retryable=False,
                detail=f"ai_service_init_failed:config_error:{reason}",
            ),
        ) from exc


def _raise_pipeline_http_exception(failure: PipelineFailure) -> None:
    raise HTTPException(
        status_code=failure.status_code,
        detail=build_structured_error_detail(
            error_code=failure.kind,
            message=failure.reason,
            retryable=failure.retryable,
            detail=f"{failure.pipeline}_failed:{failure.kind}:{failure.reason}",
        ),
    ) from failure


class RoadmapRequest(BaseModel):
    goal: str = Field(min_length=1)
    duration: str | int = "1 Month"
    level: str = Field(default="Beginner", validation_alias=AliasChoices("level", "intensity"))
    language: str = "English"
    studyTime: float | str | None = None


class ArticleRequest(BaseModel):
    topic: str = Field(min_length=1)
    task: str = ""
    language: str = "English"
    roadmapId: str | None = None
    isFirstArticle: bool = False


class UrlValidationRequest(BaseModel):
    url: str = ""


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _duration_label(value: str | int) -> str:
    if isinstance(value, int):
        return f"{value} Month" if value == 1 else f"{value} Months"
    return as_text(value, "1 Month")


def _request_roadmap(ai_service, payload: RoadmapRequest, duration: str) -> tuple[str, list[dict[str, Any]]]:
    system_prompt, user_prompt = build_roadmap_prompts(
        goal=payload.goal,
        level=payload.level,
        duration=duration,
        language=payload.language,
        study_time=as_text(payload.studyTime) or None,
    )
    raw = ai_service.generate_json(system_prompt=system_prompt, user_prompt=user_prompt)

    title = as_text(raw.get("title"))
    if not title:
        raise ValueError("ai_response_schema:roadmap_title_missing")
    months = normalize_months(raw.get("months"))
    if not months:
        raise ValueError("ai_response_schema:roadmap_months_missing")
    return title, months


def generate_roadmap(payload: RoadmapRequest) -> dict[str, Any]:
    duration = _duration_label(payload.duration)
    ai_service = _require_ai_service()
    source = "ai"
    try:
        (title, months), attempts = run_ai_with_retry(
            lambda _attempt: _request_roadmap(ai_service, payload, duration),
            pipeline="roadmap_generate",
        )
    except PipelineFailure as failure:
        if not settings.template_fallback_enabled:
            _raise_pipeline_http_exception(failure)
        logger.warning("Roadmap generation failed (%s), serving template: %s", failure.kind, failure.reason)
        title = f"{payload.goal} Learning Roadmap"
        months = template_months(payload.goal, payload.level, duration)
        source = "template"
    else:
        logger.info("Roadmap generated in %d attempt(s) with %d days", attempts, count_days(months))

    return {
        "id": uuid4().hex,
        "title": title,
        "goal": payload.goal,
        "duration": duration,
        "level": payload.level,
        "language": payload.language,
        "studyTime": payload.studyTime,
        "progress": 0,
        "months": months,
        "source": source,
        "createdAt": _utc_now_iso(),
    }


def _request_article(ai_service, payload: ArticleRequest) -> dict[str, Any]:
    prompt = enhance_resource_prompt(
        build_article_prompt(
            topic=payload.topic,
            task=payload.task,
            language=payload.language,
            is_first_article=payload.isFirstArticle,
        ),
        payload.topic,
        payload.language,
        payload.isFirstArticle,
    )
    return ai_service.generate_json(
        system_prompt=ARTICLE_SYSTEM_PROMPT,
        user_prompt=prompt,
        use_search=True,
    )


def generate_article(payload: ArticleRequest) -> dict[str, Any]:
    ai_service = _require_ai_service()
    source = "ai"
    try:
        raw, _ = run_ai_with_retry(lambda _attempt: _request_article(ai_service, payload), pipeline="article_generate")
    except PipelineFailure as failure:
        if not settings.template_fallback_enabled:
            _raise_pipeline_http_exception(failure)
        logger.warning("Article generation failed (%s), serving template: %s", failure.kind, failure.reason)
        raw = template_article(payload.topic, payload.language)
        source = "template"

    resources = validate_and_enhance_resources(
        raw.get("resources"),
        payload.topic,
        payload.language,
        payload.isFirstArticle,
    )
    day_prefix = payload.roadmapId or "article"

    return {
        "id": uuid4().hex,
        "title": as_text(raw.get("title"), payload.topic),
        "subtitle": as_text(raw.get("subtitle")),
        "summary": as_text(raw.get("summary")),
        "deepDive": as_text(raw.get("deepDive")),
        "technicalConcepts": normalize_concepts(raw.get("technicalConcepts")),
        "steps": normalize_steps(raw.get("steps")),
        "sections": normalize_sections(raw.get("sections")),
        "practiceLab": as_text(raw.get("practiceLab")),
        "resources": resources,
        "resourceValidation": {
            "articleStatus": resources["article"].get("status", "valid"),
            "videoStatus": resources["video"].get("status", "valid"),
            "validatedAt": _utc_now_iso(),
            "isFirstArticle": payload.isFirstArticle,
        },
        "dayId": f"{day_prefix}-{slugify(payload.topic)}",
        "topic": payload.topic,
        "task": payload.task,
        "source": source,
    }


def validate_resource_url(payload: UrlValidationRequest) -> dict[str, Any]:
    return validate_url(payload.url).to_dict()
