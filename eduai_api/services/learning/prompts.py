import json


ROADMAP_SYSTEM_PROMPT = (
    "You are a Pedagogical Architect and an academic researcher. "
    "Create concise, hierarchical learning paths including every month, every week, and 7 days per week. "
    "Write in {language}. OUTPUT JSON ONLY."
)

ROADMAP_SCHEMA = {
    "title": "string",
    "months": [
        {
            "name": "string",
            "overview": "string",
            "weeks": [
                {
                    "name": "string",
                    "weeklyGoal": "string",
                    "days": [{"day": "number", "topic": "string", "task": "string"}],
                }
            ],
        }
    ],
}

ARTICLE_SYSTEM_PROMPT = """You are an Expert Knowledge Miner. Your goal is to provide the most high-value direct resources available.

YOUTUBE LOGIC:
1. Search for high-value, specific video tutorials (channels like freeCodeCamp, MIT, Fireship, or industry leaders).
2. If you find a direct, high-quality video URL, use it in the JSON.
3. If NO high-value direct video is available, provide a pre-formatted search query URL.

MANDATORY JSON FORMAT: {
  "title": "string",
  "subtitle": "string",
  "summary": "string",
  "deepDive": "3 paragraph explanation",
  "technicalConcepts": [{"term": "name", "explanation": "desc"}],
  "steps": ["step 1", "step 2"],
  "practiceLab": "code or task",
  "resources": {
    "article": {"title": "Full Guide", "url": "string"},
    "video": {"title": "Tutorial/Search", "url": "string"}
  }
}"""

PLATFORM_HINTS = (
    (
        ("javascript", "react", "html", "css"),
        "RECOMMENDED PLATFORMS FOR WEB DEVELOPMENT:\n"
        "- Primary: developer.mozilla.org, javascript.info, web.dev\n"
        "- Secondary: freecodecamp.org, css-tricks.com, codecademy.com\n",
    ),
    (
        ("python", "pandas", "data"),
        "RECOMMENDED PLATFORMS FOR DATA SCIENCE:\n"
        "- Primary: pandas.pydata.org, numpy.org, python.org\n"
        "- Secondary: kaggle.com/learn, datacamp.com, coursera.org\n",
    ),
    (
        ("php",),
        "RECOMMENDED PLATFORMS FOR PHP:\n"
        "- Primary: php.net, laravel.com\n"
        "- Secondary: freecodecamp.org, w3schools.com\n",
    ),
)


def build_roadmap_prompts(*, goal: str, level: str, duration: str, language: str, study_time: str | None) -> tuple[str, str]:
    system_prompt = ROADMAP_SYSTEM_PROMPT.format(language=language)
    study = f" Study: {study_time} h/day." if study_time else ""
    user_prompt = (
        f'Generate a learning path for: "{goal}". Level: {level}. Duration: {duration}.{study} '
        f"Language: {language}. Use 4 weeks per month and 7 days per week.\n"
        f"JSON Schema: {json.dumps(ROADMAP_SCHEMA)}"
    )
    return system_prompt, user_prompt


def build_article_prompt(*, topic: str, task: str, language: str, is_first_article: bool) -> str:
    video_rule = (
        "- Find a direct, high-value YouTube video URL."
        if is_first_article
        else f"- Set resources.video.url to: https://www.youtube.com/results?search_query=[topic_in_{language}]"
    )
    return (
        f'Research and explain: "{topic}". Context: {task or "none"}. Language: {language}.\n'
        "RESOURCES TASK:\n"
        f"{video_rule}\n"
        "- Find a high-value article/doc URL. If not found, use a search link."
    )


def enhance_resource_prompt(prompt: str, topic: str, language: str, is_first_article: bool = False) -> str:
    lines = [
        f"Generate educational resources for: {prompt}",
        "",
        "IMPORTANT REQUIREMENTS:",
        "1. ONLY use HTTPS URLs (http:// links are NOT allowed)",
        "2. Prioritize official documentation and well-known educational platforms",
        "3. For articles: the resource should be a direct link to the article",
        (
            "4. For videos: a direct link to a renowned channel's video is allowed"
            if is_first_article
            else "4. For videos: use a YouTube search URL, not a direct video link"
        ),
        f"5. Write titles in {language} and ensure all URLs are working and accessible",
        "",
    ]

    lowered = str(topic or "").lower()
    for keywords, hint in PLATFORM_HINTS:
        if any(keyword in lowered for keyword in keywords):
            lines.append(hint)
            break

    lines.append("RESPONSE FORMAT:")
    lines.append("Return the resources object inside the JSON with title and url fields.")
    return "\n".join(lines)
