import re
from typing import Any

from eduai_api.domain.resources import get_fallback_resource


STAGE_NAMES = ("Foundation", "Intermediate", "Advanced", "Mastery", "Specialization", "Expert")


def month_count(duration: str) -> int:
    match = re.match(r"\s*(\d+)", str(duration or ""))
    if not match:
        return 1
    return max(1, min(int(match.group(1)), len(STAGE_NAMES)))


def template_months(goal: str, level: str, duration: str) -> list[dict[str, Any]]:
    level_text = str(level or "beginner").lower()
    months: list[dict[str, Any]] = []
    for m in range(month_count(duration)):
        weeks = []
        for w in range(4):
            weeks.append(
                {
                    "name": f"Week {w + 1}",
                    "weeklyGoal": f"Build upon previous knowledge and develop {level_text} skills",
                    "days": [
                        {
                            "day": d + 1,
                            "topic": f"{goal} - Day {d + 1}",
                            "task": f"Complete hands-on practice and exercises for {goal} concepts",
                            "completed": False,
                            "articleId": None,
                        }
                        for d in range(7)
                    ],
                }
            )
        months.append(
            {
                "name": f"Month {m + 1}: {STAGE_NAMES[m] if m < len(STAGE_NAMES) else 'Learning'}",
                "overview": f"Develop {level_text} understanding of {goal}",
                "weeks": weeks,
            }
        )
    return months


def template_article(topic: str, language: str) -> dict[str, Any]:
    return {
        "title": f"{topic} - Comprehensive Guide",
        "subtitle": "",
        "summary": f"A detailed guide covering {topic} with practical examples and best practices for {language} learners.",
        "deepDive": "",
        "technicalConcepts": [],
        "steps": [],
        "practiceLab": "",
        "sections": [
            {
                "heading": f"Introduction to {topic}",
                "content": (
                    f"Welcome to this guide on {topic}. It gives you a solid foundation, "
                    "the key concepts and the practical insights you need to get started."
                ),
            },
            {
                "heading": "Core Concepts and Fundamentals",
                "content": (
                    f"Understanding the core concepts of {topic} is essential. Complex ideas are broken "
                    "down into digestible parts with clear explanations and examples."
                ),
            },
            {
                "heading": "Practical Applications and Examples",
                "content": f"Real-world applications of {topic} with concrete examples and case studies.",
            },
            {
                "heading": "Advanced Techniques and Best Practices",
                "content": f"Best practices, common pitfalls and expert tips that help you excel in {topic}.",
            },
        ],
        "resources": {
            "article": get_fallback_resource(topic, "article", language).to_dict(),
            "video": get_fallback_resource(topic, "video", language).to_dict(),
        },
    }
