"""
Query parsing, paywall filtering and article reshaping for the news feed
"""
import re
from typing import Iterable, List, Optional

VALID_TYPES = ('headlines', 'topic', 'search', 'geo')
VALID_TOPICS = ('WORLD', 'BUSINESS', 'TECHNOLOGY', 'SCIENCE', 'ENTERTAINMENT', 'SPORTS', 'HEALTH')

DEFAULT_COUNT = 20
MAX_COUNT = 50
TITLE_SEPARATOR = ' - '

_LEADING_INT = re.compile(r'^\s*([+-]?\d+)')


def parse_count(raw: Optional[str]) -> int:
    """
    Parse the "n" query parameter

    Leading digits are used ("15abc" is 15). Anything unparseable, or zero,
    falls back to the default of 20. The result is kept within 1..50.
    """
    match = _LEADING_INT.match(raw or '')
    count = int(match.group(1)) if match else 0
    if not count:
        count = DEFAULT_COUNT
    return max(1, min(count, MAX_COUNT))


def normalize_topic(topic: str) -> Optional[str]:
    """Return the canonical topic name, or None if it is not one of the valid topics"""
    upper_topic = topic.upper()
    return upper_topic if upper_topic in VALID_TOPICS else None


def is_premium(link: str, premium_domains: Iterable[str]) -> bool:
    return any(domain in link for domain in premium_domains)


def filter_premium(articles: Iterable[dict], premium_domains: Iterable[str]) -> List[dict]:
    """Drop articles whose link contains any premium domain string"""
    premium_domains = tuple(premium_domains)
    return [
        article for article in articles
        if not is_premium(article.get('link') or '', premium_domains)
    ]


def parse_article(article: dict) -> dict:
    """
    Normalize a raw feed article

    Google News titles look like "Headline - Publisher". The last segment
    becomes the source; titles without the separator get source "Unknown".
    The image is only ever copied from the raw article.
    """
    raw_title = article.get('title') or ''
    title_parts = raw_title.split(TITLE_SEPARATOR) if raw_title else []
    source = title_parts.pop() if len(title_parts) > 1 else 'Unknown'
    title = TITLE_SEPARATOR.join(title_parts)

    return {
        "title": title or article.get('title'),
        "link": article.get('link'),
        "pubDate": article.get('pubDate'),
        "description": article.get('description'),
        "source": source,
        "image": article.get('image') or article.get('thumbnail') or None,
    }
