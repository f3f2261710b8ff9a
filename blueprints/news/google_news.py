"""
Google News RSS source

Each fetch mode maps onto one Google News RSS feed:
- headlines: https://news.google.com/rss
- topic:     https://news.google.com/rss/headlines/section/topic/{TOPIC}
- search:    https://news.google.com/rss/search?q={query}
- geo:       https://news.google.com/rss/headlines/section/geo/{location}
"""
import logging
from abc import ABC, abstractmethod
from typing import List, Optional
from urllib.parse import quote

import feedparser
import requests

from shared.errors import UpstreamError

GOOGLE_NEWS_RSS_URL = "https://news.google.com/rss"


class NewsSource(ABC):
    """Fetch modes used by the news endpoint; options is {country, language, n}"""

    @abstractmethod
    def headlines(self, options: dict) -> List[dict]:
        ...

    @abstractmethod
    def topic(self, topic: str, options: dict) -> List[dict]:
        ...

    @abstractmethod
    def search(self, query: str, options: dict) -> List[dict]:
        ...

    @abstractmethod
    def geo(self, location: str, options: dict) -> List[dict]:
        ...


def locale_params(options: dict) -> dict:
    country = str(options.get('country') or 'us').upper()
    language = str(options.get('language') or 'en')
    return {
        "hl": f"{language}-{country}",
        "gl": country,
        "ceid": f"{country}:{language}",
    }


def _first_media_url(entry, key: str) -> Optional[str]:
    media = entry.get(key) or []
    for item in media:
        url = item.get('url')
        if url:
            return url
    return None


def entry_to_article(entry) -> dict:
    """
    Convert a feedparser entry into the raw article shape the news endpoint expects
    """
    article = {
        "title": entry.get('title', ''),
        "link": entry.get('link', ''),
        "pubDate": entry.get('published'),
        "description": entry.get('description') or entry.get('summary'),
    }

    image = _first_media_url(entry, 'media_content')
    if image:
        article["image"] = image

    thumbnail = _first_media_url(entry, 'media_thumbnail')
    if thumbnail:
        article["thumbnail"] = thumbnail

    return article


class GoogleNewsSource(NewsSource):

    def __init__(self, timeout: float = 30, session: Optional[requests.Session] = None):
        self.timeout = timeout
        self.session = session or requests.Session()

    def headlines(self, options: dict) -> List[dict]:
        return self._fetch(GOOGLE_NEWS_RSS_URL, options)

    def topic(self, topic: str, options: dict) -> List[dict]:
        url = f"{GOOGLE_NEWS_RSS_URL}/headlines/section/topic/{quote(topic.upper())}"
        return self._fetch(url, options)

    def search(self, query: str, options: dict) -> List[dict]:
        return self._fetch(f"{GOOGLE_NEWS_RSS_URL}/search", options, {"q": query})

    def geo(self, location: str, options: dict) -> List[dict]:
        url = f"{GOOGLE_NEWS_RSS_URL}/headlines/section/geo/{quote(location)}"
        return self._fetch(url, options)

    def _fetch(self, url: str, options: dict, extra_params: Optional[dict] = None) -> List[dict]:
        params = dict(extra_params or {})
        params.update(locale_params(options))

        logging.info(f"Fetching Google News RSS from: {url}")

        response = self.session.get(url, params=params, timeout=self.timeout)
        response.raise_for_status()

        feed = feedparser.parse(response.content)
        if feed.bozo and not feed.entries:
            raise UpstreamError(f"Invalid news feed from {url}: {feed.get('bozo_exception')}")
        if feed.bozo:
            logging.warning(f"RSS feed parsing warning: {feed.bozo_exception}")

        limit = options.get('n')
        entries = feed.entries[:limit] if limit else feed.entries
        articles = [entry_to_article(entry) for entry in entries]

        logging.info(f"Fetched {len(articles)} articles from Google News")
        return articles
