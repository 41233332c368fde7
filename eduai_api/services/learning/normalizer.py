import re
from typing import Any


def as_text(value: Any, fallback: str = "") -> str:
    if isinstance(value, str):
        stripped = value.strip()
        if stripped:
            return stripped
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return fallback


def slugify(value: str) -> str:
    return re.sub(r"[^a-zA-Z0-9]+", "-", str(value or "")).strip("-").lower()


def _safe_int(value: Any, default: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def normalize_day(raw: Any, index: int) -> dict[str, Any] | None:
    if not isinstance(raw, dict):
        return None
    topic = as_text(raw.get("topic"))
    if not topic:
        return None
    day = _safe_int(raw.get("day"), index + 1)
    return {
        "day": day if day > 0 else index + 1,
        "topic": topic,
        "task": as_text(raw.get("task")),
        "completed": False,
        "articleId": None,
    }


def normalize_week(raw: Any, index: int) -> dict[str, Any] | None:
    if not isinstance(raw, dict):
        return None
    days_raw = raw.get("days") if isinstance(raw.get("days"), list) else []
    days: list[dict[str, Any]] = []
    for day_index, item in enumerate(days_raw):
        day = normalize_day(item, day_index)
        if day is not None:
            days.append(day)
    if not days:
        return None
    return {
        "name": as_text(raw.get("name"), f"Week {index + 1}"),
        # 구버전 프롬프트는 weeklyGoal 대신 goal을 돌려준다.
        "weeklyGoal": as_text(raw.get("weeklyGoal")) or as_text(raw.get("goal")),
        "days": days,
    }


def normalize_month(raw: Any, index: int) -> dict[str, Any] | None:
    if not isinstance(raw, dict):
        return None
    weeks_raw = raw.get("weeks") if isinstance(raw.get("weeks"), list) else []
    weeks: list[dict[str, Any]] = []
    for week_index, item in enumerate(weeks_raw):
        week = normalize_week(item, week_index)
        if week is not None:
            weeks.append(week)
    if not weeks:
        return None
    return {
        "name": as_text(raw.get("name"), f"Month {index + 1}"),
        "overview": as_text(raw.get("overview")),
        "weeks": weeks,
    }


def normalize_months(raw: Any) -> list[dict[str, Any]]:
    months: list[dict[str, Any]] = []
    for index, item in enumerate(raw if isinstance(raw, list) else []):
        month = normalize_month(item, index)
        if month is not None:
            months.append(month)
    return months


def normalize_concepts(raw: Any) -> list[dict[str, str]]:
    concepts: list[dict[str, str]] = []
    for item in raw if isinstance(raw, list) else []:
        if not isinstance(item, dict):
            continue
        term = as_text(item.get("term"))
        if term:
            concepts.append({"term": term, "explanation": as_text(item.get("explanation"))})
    return concepts


def normalize_sections(raw: Any) -> list[dict[str, str]]:
    sections: list[dict[str, str]] = []
    for item in raw if isinstance(raw, list) else []:
        if not isinstance(item, dict):
            continue
        heading = as_text(item.get("heading"))
        content = as_text(item.get("content"))
        if heading or content:
            sections.append({"heading": heading, "content": content})
    return sections


def normalize_steps(raw: Any) -> list[str]:
    return [as_text(item) for item in (raw if isinstance(raw, list) else []) if as_text(item)]


def count_days(months: list[dict[str, Any]]) -> int:
    return sum(len(week["days"]) for month in months for week in month["weeks"])
