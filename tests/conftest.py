"""Shared pytest fixtures: test config, fake Elasticsearch client, Flask app."""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional

import pytest

from ep_autosuggest import create_app
from ep_autosuggest.config import Config
from ep_autosuggest.services.index_service import IndexResolver
from ep_autosuggest.services.option_store import OptionStore
from ep_autosuggest.services.search_service import SearchQueryExecutor


RAW_RESPONSE = {
    "took": 2,
    "timed_out": False,
    "hits": {
        "total": 3,
        "max_score": 1.0,
        "hits": [
            {"_id": "1", "_score": 1.0, "_source": {"post_title": "Red shoe"}},
            {"_id": "2", "_score": 0.8, "_source": {"post_title": "Blue shoe"}},
            {"_id": "3", "_score": 0.5, "_source": {"post_title": "Shoe rack"}},
        ],
    },
}


class FakeElasticsearch:
    def __init__(self, response: Any = None, error: Optional[BaseException] = None, ping_ok: bool = True):
        self.response = response
        self.error = error
        self.ping_ok = ping_ok
        self.calls: List[Dict[str, Any]] = []
        self.on_search: Optional[Callable[[], None]] = None

    def search(self, index: str, body: Dict[str, Any]):
        self.calls.append({"index": index, "body": body})
        if self.on_search is not None:
            self.on_search()
        if self.error is not None:
            raise self.error
        return self.response

    def ping(self) -> bool:
        return self.ping_ok


@pytest.fixture
def cfg(tmp_path):
    class TestConfig(Config):
        DATA_DIR = str(tmp_path)
        OPTIONS_PATH = str(tmp_path / "options.json")
        INDEX_PREFIX = "test-"
        SITE_URL = "https://shop.example.com"
        REST_NAMESPACE = "bigwing/elasticpress"
        LOG_LEVEL = "DEBUG"
        PUBLIC_URL = ""

    return TestConfig


@pytest.fixture
def fake_es():
    return FakeElasticsearch(response=RAW_RESPONSE)


@pytest.fixture
def executor(fake_es, cfg):
    return SearchQueryExecutor(fake_es, cfg)


@pytest.fixture
def index_resolver(cfg):
    return IndexResolver(cfg, OptionStore(cfg=cfg))


@pytest.fixture
def app(cfg, executor, index_resolver):
    app = create_app(cfg, executor=executor, index_resolver=index_resolver)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()
