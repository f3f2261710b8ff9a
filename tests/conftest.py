import json

import azure.functions as func
import pytest

from blueprints.news.google_news import NewsSource
from blueprints.chat.completion import CompletionClient
from shared.config import Settings

SECRET = "test-secret"


@pytest.fixture
def settings():
    return Settings(api_secret_key=SECRET, openrouter_api_key="sk-or-test")


@pytest.fixture
def make_request():
    def _make(method="GET", url="/api/news", params=None, headers=None, body=None, api_key=SECRET):
        all_headers = dict(headers or {})
        if api_key is not None:
            all_headers["x-api-key"] = api_key
        if isinstance(body, (dict, list)):
            body = json.dumps(body).encode("utf-8")
        return func.HttpRequest(
            method=method,
            url=url,
            headers=all_headers,
            params=params or {},
            body=body or b"",
        )
    return _make


class FakeNewsSource(NewsSource):
    def __init__(self, articles=None, error=None):
        self.articles = articles or []
        self.error = error
        self.calls = []

    def _result(self, mode, arg, options):
        self.calls.append((mode, arg, options))
        if self.error:
            raise self.error
        return list(self.articles)

    def headlines(self, options):
        return self._result("headlines", None, options)

    def topic(self, topic, options):
        return self._result("topic", topic, options)

    def search(self, query, options):
        return self._result("search", query, options)

    def geo(self, location, options):
        return self._result("geo", location, options)


class FakeCompletionClient(CompletionClient):
    def __init__(self, reply="I'm here for you.", error=None):
        self.reply = reply
        self.error = error
        self.calls = []

    def complete(self, messages):
        self.calls.append(messages)
        if self.error:
            raise self.error
        return self.reply


@pytest.fixture
def news_source():
    return FakeNewsSource()


@pytest.fixture
def completion_client():
    return FakeCompletionClient()


def body_of(response):
    return json.loads(response.get_body())
