from urllib.parse import urlparse

DEFAULT_TOPIC = "world"

TOPIC_FEEDS = {
    "politics": [
        "https://rss.nytimes.com/services/xml/rss/nyt/Politics.xml",
        "https://feeds.bbci.co.uk/news/politics/rss.xml",
    ],
    "technology": [
        "https://feeds.arstechnica.com/arstechnica/technology-lab",
        "https://www.theverge.com/rss/index.xml",
        "https://techcrunch.com/feed/",
    ],
    "sports": [
        "https://rss.nytimes.com/services/xml/rss/nyt/Sports.xml",
        "https://feeds.bbci.co.uk/sport/rss.xml",
    ],
    "business": [
        "https://feeds.bbci.co.uk/news/business/rss.xml",
        "https://rss.nytimes.com/services/xml/rss/nyt/Business.xml",
    ],
    "entertainment": [
        "https://feeds.bbci.co.uk/news/entertainment_and_arts/rss.xml",
        "https://rss.nytimes.com/services/xml/rss/nyt/Arts.xml",
    ],
    "health": [
        "https://rss.nytimes.com/services/xml/rss/nyt/Health.xml",
        "https://feeds.bbci.co.uk/news/health/rss.xml",
    ],
    "science": [
        "https://rss.nytimes.com/services/xml/rss/nyt/Science.xml",
        "https://feeds.bbci.co.uk/news/science_and_environment/rss.xml",
    ],
    "world": [
        "https://rss.nytimes.com/services/xml/rss/nyt/World.xml",
        "https://feeds.bbci.co.uk/news/world/rss.xml",
    ],
}

# Always appended when the regional focus flag is set
REGIONAL_FEEDS = [
    "https://timesofindia.indiatimes.com/rssfeedstopstories.cms",
    "https://feeds.feedburner.com/ndtvnews-top-stories",
    "https://www.thehindu.com/news/national/feeder/default.rss",
    "https://www.hindustantimes.com/feeds/rss/india-news/rssfeed.xml",
]

TOPIC_ALIASES = {
    "tech": "technology",
    "international": "world",
    "india": "world",
    "national": "politics",
    "sport": "sports",
    "finance": "business",
    "economy": "business",
    "arts": "entertainment",
}

# Matched against the feed hostname, first match wins
SOURCE_NAMES = [
    ("nytimes.com", "NYTimes"),
    ("bbci.co.uk", "BBC"),
    ("bbc.co.uk", "BBC"),
    ("theverge.com", "The Verge"),
    ("techcrunch.com", "TechCrunch"),
    ("arstechnica.com", "Ars Technica"),
    ("indiatimes.com", "Times of India"),
    ("ndtvnews", "NDTV"),
    ("ndtv.com", "NDTV"),
    ("thehindu.com", "The Hindu"),
    ("hindustantimes.com", "Hindustan Times"),
]


def resolve_topic(topic: str | None) -> str:
    """Map a category name to a known topic key."""
    key = (topic or "").strip().lower()
    key = TOPIC_ALIASES.get(key, key)
    return key if key in TOPIC_FEEDS else DEFAULT_TOPIC


def feeds_for_topic(topic: str | None, focus_regional: bool) -> list[str]:
    feeds = list(TOPIC_FEEDS[resolve_topic(topic)])
    if focus_regional:
        feeds.extend(url for url in REGIONAL_FEEDS if url not in feeds)
    return feeds


def source_name_for(feed_url: str) -> str:
    parsed = urlparse(feed_url)
    haystack = f"{parsed.hostname or ''}{parsed.path}"
    for needle, name in SOURCE_NAMES:
        if needle in haystack:
            return name
    return "News"


def is_preferred_feed(feed_url: str) -> bool:
    return feed_url in REGIONAL_FEEDS
