"""Tests for the HTTP surface: autosuggest, options, health and docs."""

from __future__ import annotations

from elasticsearch import ConnectionError as ESConnectionError

from ep_autosuggest import create_app
from ep_autosuggest.services.search_service import SearchQueryExecutor, raw_response

from conftest import RAW_RESPONSE, FakeElasticsearch

URL = "/bigwing/elasticpress/v1/autosuggest"


def test_autosuggest_returns_raw_response(client, fake_es):
    resp = client.post(URL, json={"query": {"match_all": {}}}, headers={"EP-Search-Term": "shoe"})
    assert resp.status_code == 200
    assert resp.get_json() == RAW_RESPONSE
    assert fake_es.calls[0]["body"] == {"query": {"match_all": {}}}


def test_autosuggest_keeps_engine_key_order(client):
    resp = client.post(URL, json={}, headers={"EP-Search-Term": "shoe"})
    assert resp.is_json
    text = resp.get_data(as_text=True)
    assert text.index('"took"') < text.index('"timed_out"') < text.index('"hits"')


def test_autosuggest_underscore_header_spelling(cfg, index_resolver, client):
    resp = client.post(URL, json={"query": {"match_all": {}}}, headers={"ep_search_term": "shoe"})
    assert resp.status_code == 200
    assert resp.get_json() == RAW_RESPONSE

    executor = SearchQueryExecutor(FakeElasticsearch(response=False), cfg)
    app = create_app(cfg, executor=executor, index_resolver=index_resolver)
    resp = app.test_client().post(URL, json={"query": {"match_all": {}}}, headers={"ep_search_term": "shoe"})
    assert resp.status_code == 418
    assert resp.get_json()["code"] == "es_query_error"
    assert resp.get_json()["data"] == "shoe"


def test_autosuggest_accepts_trailing_slash(client):
    resp = client.post(URL + "/", json={}, headers={"EP-Search-Term": "shoe"})
    assert resp.status_code == 200


def test_autosuggest_backend_failure(cfg, index_resolver):
    executor = SearchQueryExecutor(FakeElasticsearch(response=False), cfg)
    app = create_app(cfg, executor=executor, index_resolver=index_resolver)
    resp = app.test_client().post(URL, json={"query": {"match_all": {}}}, headers={"EP-Search-Term": "shoe"})
    assert resp.status_code == 418
    body = resp.get_json()
    assert body["code"] == "es_query_error"
    assert body["data"] == "shoe"
    assert isinstance(body["message"], str) and body["message"]


def test_autosuggest_connection_error(cfg, index_resolver):
    executor = SearchQueryExecutor(FakeElasticsearch(error=ESConnectionError("refused")), cfg)
    app = create_app(cfg, executor=executor, index_resolver=index_resolver)
    resp = app.test_client().post(URL, json={}, headers={"EP-Search-Term": "shoe"})
    assert resp.status_code == 418
    assert resp.get_json()["code"] == "es_query_error"


def test_autosuggest_without_header_or_json(cfg, index_resolver):
    executor = SearchQueryExecutor(FakeElasticsearch(response=False), cfg)
    app = create_app(cfg, executor=executor, index_resolver=index_resolver)
    resp = app.test_client().post(URL, data="not json", content_type="text/plain")
    assert resp.status_code == 418
    assert resp.get_json()["data"] == ""
    assert executor.client.calls[0]["body"] == {}


def test_interceptor_scoped_to_request(client, executor, fake_es):
    seen = []
    fake_es.on_search = lambda: seen.append(executor.active_result_interceptor())
    client.post(URL, json={}, headers={"EP-Search-Term": "shoe"})
    assert seen == [raw_response]
    assert executor.active_result_interceptor() is None


def test_autosuggest_rejects_get(client):
    assert client.get(URL).status_code == 405


def test_autosuggest_options(client):
    resp = client.get(URL + "/options")
    assert resp.status_code == 200
    assert resp.get_json() == {
        "endpointUrl": "http://localhost" + URL + "/",
        "addSearchTermHeader": True,
    }


def test_autosuggest_options_use_public_url(cfg, executor, index_resolver):
    class Proxied(cfg):
        PUBLIC_URL = "https://search.example.com/"

    app = create_app(Proxied, executor=executor, index_resolver=index_resolver)
    resp = app.test_client().get(URL + "/options")
    assert resp.get_json()["endpointUrl"] == "https://search.example.com" + URL + "/"


def test_cors_allows_search_term_header(client):
    resp = client.options(
        URL,
        headers={
            "Origin": "https://shop.example.com",
            "Access-Control-Request-Method": "POST",
            "Access-Control-Request-Headers": "EP-Search-Term",
        },
    )
    assert resp.headers.get("Access-Control-Allow-Origin") == "*"
    assert "ep-search-term" in resp.headers.get("Access-Control-Allow-Headers", "").lower()


def test_custom_namespace(cfg, executor, index_resolver):
    class Acme(cfg):
        REST_NAMESPACE = "acme/search"

    app = create_app(Acme, executor=executor, index_resolver=index_resolver)
    resp = app.test_client().post("/acme/search/v1/autosuggest", json={})
    assert resp.status_code == 200
    spec = app.test_client().get("/openapi.yaml").get_data(as_text=True)
    assert "/acme/search/v1/autosuggest" in spec


def test_health(client, cfg, index_resolver):
    assert client.get("/health").get_json() == {"status": "ok", "elasticsearch": True}

    down = SearchQueryExecutor(FakeElasticsearch(ping_ok=False), cfg)
    app = create_app(cfg, executor=down, index_resolver=index_resolver)
    assert app.test_client().get("/health").get_json() == {"status": "ok", "elasticsearch": False}


def test_docs(client):
    resp = client.get("/openapi.yaml")
    assert resp.status_code == 200
    assert "/bigwing/elasticpress/v1/autosuggest" in resp.get_data(as_text=True)
    ui = client.get("/docs")
    assert ui.status_code == 200
    assert "/openapi.yaml" in ui.get_data(as_text=True)
