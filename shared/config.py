"""
Runtime configuration read from the Function App settings

Required Environment Variables:
- API_SECRET_KEY: Shared secret callers send in the x-api-key header
- OPENROUTER_API_KEY: OpenRouter API key used by the chat endpoint

Optional Environment Variables:
- OPENROUTER_MODEL: Chat model identifier (default: nvidia/nemotron-3-nano-30b-a3b:free)
- PREMIUM_DOMAINS: Comma-separated list replacing the built-in paywall list
- NEWS_FETCH_TIMEOUT: Timeout in seconds for news feed downloads (default: 30)

Example local.settings.json configuration:
{
  "Values": {
    "API_SECRET_KEY": "your-shared-secret",
    "OPENROUTER_API_KEY": "sk-or-..."
  }
}
"""
import os
import logging
from dataclasses import dataclass
from typing import Optional, Tuple

DEFAULT_PREMIUM_DOMAINS: Tuple[str, ...] = (
    'wsj.com', 'bloomberg.com', 'ft.com', 'nytimes.com',
    'washingtonpost.com', 'economist.com', 'hbr.org',
    'newyorker.com', 'thetimes.co.uk', 'telegraph.co.uk',
    'businessinsider.com', 'marketwatch.com', 'barrons.com',
)

DEFAULT_CHAT_MODEL = "nvidia/nemotron-3-nano-30b-a3b:free"
DEFAULT_FETCH_TIMEOUT = 30.0


def _split_csv(value: Optional[str]) -> Tuple[str, ...]:
    if not value:
        return ()
    return tuple(item.strip() for item in value.split(",") if item.strip())


def _parse_timeout(value: Optional[str]) -> float:
    if not value:
        return DEFAULT_FETCH_TIMEOUT
    try:
        return float(value)
    except ValueError:
        logging.warning(f"Ignoring invalid NEWS_FETCH_TIMEOUT value: {value}")
        return DEFAULT_FETCH_TIMEOUT


@dataclass(frozen=True)
class Settings:
    api_secret_key: Optional[str] = None
    openrouter_api_key: Optional[str] = None
    chat_model: str = DEFAULT_CHAT_MODEL
    premium_domains: Tuple[str, ...] = DEFAULT_PREMIUM_DOMAINS
    fetch_timeout: float = DEFAULT_FETCH_TIMEOUT

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            api_secret_key=os.getenv("API_SECRET_KEY") or None,
            openrouter_api_key=os.getenv("OPENROUTER_API_KEY") or None,
            chat_model=os.getenv("OPENROUTER_MODEL") or DEFAULT_CHAT_MODEL,
            premium_domains=_split_csv(os.getenv("PREMIUM_DOMAINS")) or DEFAULT_PREMIUM_DOMAINS,
            fetch_timeout=_parse_timeout(os.getenv("NEWS_FETCH_TIMEOUT")),
        )
