"""
Chat completion clients

OpenRouter exposes an OpenAI-compatible API, so the default client is the
openai SDK pointed at the OpenRouter base URL.
"""
import logging
from abc import ABC, abstractmethod
from typing import Optional

from openai import APIStatusError, OpenAI

from shared.errors import UpstreamStatusError

OPENROUTER_BASE_URL = "https://openrouter.ai/api/v1"

# Identification headers OpenRouter uses for app attribution
OPENROUTER_HEADERS = {
    "HTTP-Referer": "https://ista-community.vercel.app",
    "X-Title": "ISTA Community Mindful Chat",
}

MAX_TOKENS = 500
TEMPERATURE = 0.7


class CompletionClient(ABC):

    @abstractmethod
    def complete(self, messages: list) -> Optional[str]:
        """
        Send a conversation to the model

        Returns:
            str: The first choice's message content, or None if the response has none

        Raises:
            UpstreamStatusError: The provider answered with a non-success status
        """


class OpenRouterClient(CompletionClient):

    def __init__(self, api_key: str, model: str, client: Optional[OpenAI] = None):
        self.model = model
        self.client = client or OpenAI(
            api_key=api_key,
            base_url=OPENROUTER_BASE_URL,
            default_headers=OPENROUTER_HEADERS,
            max_retries=0
        )

    def complete(self, messages: list) -> Optional[str]:
        logging.info(f"Requesting chat completion from {self.model} with {len(messages)} messages")

        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=messages,
                max_tokens=MAX_TOKENS,
                temperature=TEMPERATURE
            )
        except APIStatusError as e:
            logging.error(f"OpenRouter API Error: {e.status_code} {e.message}")
            raise UpstreamStatusError(e.status_code, e.message) from e

        choices = response.choices or []
        if not choices or choices[0].message is None:
            return None
        return choices[0].message.content
