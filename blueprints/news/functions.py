"""
News Blueprint - Main functions for the news feed endpoint

GET /api/news?type={headlines|topic|search|geo}&topic=&query=&location=&n=&country=&language=

Callers must send the shared secret in the x-api-key header.
"""
import asyncio
import azure.functions as func
import logging
from typing import Optional

from shared.auth import gate_response
from shared.config import Settings
from shared.errors import ApiError, ValidationError
from shared.http import error_response, json_response
from .articles import (
    VALID_TOPICS,
    VALID_TYPES,
    filter_premium,
    normalize_topic,
    parse_article,
    parse_count,
)
from .google_news import GoogleNewsSource, NewsSource

# Create the news blueprint
news_bp = func.Blueprint()


@news_bp.route(route="news", methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
               auth_level=func.AuthLevel.ANONYMOUS)
async def news(req: func.HttpRequest) -> func.HttpResponse:
    settings = Settings.from_env()
    return await handle_news_request(req, settings, GoogleNewsSource(timeout=settings.fetch_timeout))


async def handle_news_request(req: func.HttpRequest, settings: Settings,
                              source: NewsSource) -> func.HttpResponse:
    """
    Gate, validate and serve a news request

    Expected query parameters:
        type: headlines (default), topic, search or geo
        topic: required for type=topic, one of WORLD, BUSINESS, TECHNOLOGY,
            SCIENCE, ENTERTAINMENT, SPORTS, HEALTH (any case)
        query: required for type=search
        location: required for type=geo
        n: number of articles, default 20, at most 50
        country / language: feed locale, default us / en

    Returns:
    {
        "success": true,
        "count": 12,
        "type": "headlines",
        "articles": [{"title", "link", "pubDate", "description", "source", "image"}]
    }
    """
    denied = gate_response(req, "GET", settings)
    if denied is not None:
        return denied

    news_type = req.params.get('type', 'headlines')
    logging.info(f'News request received, type: {news_type}')

    try:
        # Source fetches block on network I/O, keep them off the event loop
        articles = await asyncio.to_thread(fetch_articles, req, news_type, source)

        # Filter out premium/paywalled sources
        filtered_articles = filter_premium(articles, settings.premium_domains)
        parsed_articles = [parse_article(article) for article in filtered_articles]

        logging.info(f"Returning {len(parsed_articles)} of {len(articles)} articles for type: {news_type}")

        return json_response({
            "success": True,
            "count": len(parsed_articles),
            "type": news_type,
            "articles": parsed_articles
        })

    except ValidationError as e:
        logging.info(f"Rejected news request: {e.message}")
        return error_response(e)

    except Exception as e:
        logging.exception(f"News API Error: {str(e)}")
        return json_response({
            "success": False,
            "error": "Failed to fetch news",
            "message": _error_message(e)
        }, status_code=500)


def fetch_articles(req: func.HttpRequest, news_type: str, source: NewsSource) -> list:
    """
    Validate the parameters for the requested mode and call the matching source fetch
    """
    options = {
        "country": req.params.get('country', 'us'),
        "language": req.params.get('language', 'en'),
        "n": parse_count(req.params.get('n')),
    }

    if news_type == 'headlines':
        return source.headlines(options)

    if news_type == 'topic':
        topic = req.params.get('topic')
        if not topic:
            raise ValidationError("topic parameter required for type=topic")
        upper_topic = normalize_topic(topic)
        if upper_topic is None:
            raise ValidationError(f"Invalid topic. Valid topics: {', '.join(VALID_TOPICS)}")
        return source.topic(upper_topic, options)

    if news_type == 'search':
        query = req.params.get('query')
        if not query:
            raise ValidationError("query parameter required for type=search")
        return source.search(query, options)

    if news_type == 'geo':
        location = req.params.get('location')
        if not location:
            raise ValidationError("location parameter required for type=geo")
        return source.geo(location, options)

    raise ValidationError(f"Invalid type. Valid types: {', '.join(VALID_TYPES)}")


def _error_message(error: Exception) -> Optional[str]:
    if isinstance(error, ApiError):
        return error.message
    return str(error) or 'Unknown error'
