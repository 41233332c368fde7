KNOWN_GOOD_DOMAINS = frozenset(
    {
        "developer.mozilla.org",
        "freecodecamp.org",
        "w3schools.com",
        "javascript.info",
        "css-tricks.com",
        "web.dev",
        "tutorialspoint.com",
        "codecademy.com",
        "kaggle.com",
        "pandas.pydata.org",
        "numpy.org",
        "scikit-learn.org",
        "coursera.org",
        "edx.org",
        "khanacademy.org",
        "udemy.com",
        "youtube.com",
        "youtu.be",
    }
)

EDUCATIONAL_KEYWORDS = ("edu", "learn", "tutorial", "docs", "guide", "academy")

KNOWN_PLATFORMS = frozenset({"github.com", "stackoverflow.com", "youtube.com"})

PROGRAMMING_KEYWORDS = (
    "javascript",
    "python",
    "php",
    "html",
    "css",
    "react",
    "vue",
    "angular",
    "node.js",
    "express",
    "laravel",
)

DATA_SCIENCE_KEYWORDS = (
    "pandas",
    "numpy",
    "matplotlib",
    "scikit",
    "machine learning",
    "data analysis",
    "statistics",
)

VERIFIED_EDUCATIONAL_PLATFORMS = {
    "programming": (
        "https://developer.mozilla.org",
        "https://www.freecodecamp.org",
        "https://javascript.info",
        "https://web.dev",
        "https://css-tricks.com",
        "https://www.w3schools.com",
        "https://www.codecademy.com",
        "https://www.smashingmagazine.com",
        "https://www.tutorialspoint.com",
        "https://scrimba.com",
        "https://frontendmasters.com",
        "https://www.theodinproject.com",
    ),
    "data-science": (
        "https://www.kaggle.com/learn",
        "https://pandas.pydata.org/docs/",
        "https://numpy.org/doc/",
        "https://scikit-learn.org/stable/",
        "https://www.dataquest.io",
        "https://www.coursera.org/browse/data-science",
        "https://www.edx.org/learn/data-science",
        "https://www.datacamp.com",
        "https://towardsdatascience.com",
        "https://jovian.ai",
        "https://colab.research.google.com",
    ),
    "general": (
        "https://www.coursera.org",
        "https://www.edx.org",
        "https://www.khanacademy.org",
        "https://www.udemy.com",
        "https://www.youtube.com/c/freecodecamp",
        "https://www.youtube.com/c/ProgrammingwithMosh",
        "https://www.youtube.com/user/thenewboston",
        "https://www.brilliant.org",
        "https://www.skillshare.com",
        "https://www.linkedin.com/learning",
    ),
}

LANGUAGE_SEARCH_QUERIES = {
    "en": "tutorial guide",
    "es": "tutorial guía",
    "fr": "tutoriel guide",
    "de": "tutorial anleitung",
    "hi": "ट्यूटोरियल गाइड",
    "ur": "ٹیوٹوریل گائیڈ",
    "bn": "টিউটোরিয়াল গাইড",
    "ja": "チュートリアル ガイド",
    "ar": "تعليمي دليل",
}

# 주제/언어 문자열에 포함되면 해당 언어 검색어를 쓴다.
LANGUAGE_HINTS = (
    ("hi", ("hindi", "हिंदी")),
    ("ur", ("urdu", "اردو")),
)

YOUTUBE_SEARCH_URL = "https://www.youtube.com/results?search_query="

DIRECT_VIDEO_MARKERS = ("watch?v=", "youtu.be")
