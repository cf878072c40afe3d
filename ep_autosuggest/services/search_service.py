"""SearchQueryExecutor: runs query specs against Elasticsearch.

Posts a query spec to ``{index}/_search`` through the official client and
shapes the response before handing it back. By default the response is
reduced to the ``found_documents``/``documents`` form regular site search
consumes; callers that need the untouched Elasticsearch body either pass a
``result_filter`` or install an interceptor for the current scope with
``intercept_results``.
"""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from typing import Any, Callable, Dict, Iterator, Mapping, Optional

from elasticsearch import ApiError, Elasticsearch, TransportError

from ep_autosuggest.config import Config
from ep_autosuggest.errors import SearchQueryError


logger = logging.getLogger(__name__)

# (formatted results, raw response, query args) -> results returned to the caller
ResultFilter = Callable[[Dict[str, Any], Dict[str, Any], Mapping[str, Any]], Any]


def build_client(cfg: Config = Config) -> Elasticsearch:
    """Create the Elasticsearch client from config (host, ES_SHIELD auth, timeout)."""
    kwargs: Dict[str, Any] = {
        "hosts": [cfg.ES_HOST],
        "request_timeout": cfg.ES_REQUEST_TIMEOUT,
    }
    if cfg.ES_HOST.startswith("https://"):
        kwargs["verify_certs"] = cfg.ES_VERIFY_CERTS
    if cfg.ES_USERNAME:
        kwargs["basic_auth"] = (cfg.ES_USERNAME, cfg.ES_PASSWORD or "")
    return Elasticsearch(**kwargs)


def _total_hits(hits: Mapping[str, Any]) -> int:
    total = hits.get("total", 0)
    # ES 7+ reports {"value": n, "relation": "eq"}
    if isinstance(total, Mapping):
        total = total.get("value", 0)
    try:
        return int(total)
    except (TypeError, ValueError):
        return 0


def format_results(raw: Mapping[str, Any]) -> Dict[str, Any]:
    """Reduce a raw search response to the documents regular search consumes."""
    hits = raw.get("hits") or {}
    documents = []
    for hit in hits.get("hits") or []:
        doc = dict(hit.get("_source") or {})
        doc["_id"] = hit.get("_id")
        doc["_score"] = hit.get("_score")
        if hit.get("highlight"):
            doc["highlight"] = hit["highlight"]
        documents.append(doc)
    return {
        "found_documents": _total_hits(hits),
        "documents": documents,
        "aggregations": raw.get("aggregations") or {},
        "suggest": raw.get("suggest") or {},
    }


def formatted_results(formatted: Dict[str, Any], raw: Dict[str, Any], query_args: Mapping[str, Any]) -> Dict[str, Any]:
    return formatted


def raw_response(formatted: Dict[str, Any], raw: Dict[str, Any], query_args: Mapping[str, Any]) -> Dict[str, Any]:
    """Result filter returning the full Elasticsearch response instead of the formatted documents."""
    return raw


class SearchQueryExecutor:
    def __init__(self, client: Any, cfg: Config = Config):
        self.client = client
        self.cfg = cfg
        self._scope = threading.local()

    # Scoped result interceptor

    def set_result_interceptor(self, fn: ResultFilter) -> None:
        self._scope.interceptor = fn

    def clear_result_interceptor(self) -> None:
        self._scope.interceptor = None

    def active_result_interceptor(self) -> Optional[ResultFilter]:
        return getattr(self._scope, "interceptor", None)

    @contextmanager
    def intercept_results(self, fn: ResultFilter) -> Iterator["SearchQueryExecutor"]:
        """Install ``fn`` as the result filter until the block exits, however it exits."""
        previous = self.active_result_interceptor()
        self.set_result_interceptor(fn)
        try:
            yield self
        finally:
            if previous is None:
                self.clear_result_interceptor()
            else:
                self.set_result_interceptor(previous)

    # Queries

    def query(
        self,
        index_name: str,
        document_type: str,
        query_spec: Optional[Mapping[str, Any]],
        query_args: Optional[Mapping[str, Any]] = None,
        result_filter: Optional[ResultFilter] = None,
    ) -> Any:
        """Run ``query_spec`` against ``index_name`` and return the shaped results.

        Raises ``SearchQueryError`` when the request fails or the body is not a
        JSON object.
        """
        query_args = dict(query_args or {})
        body = dict(query_spec or {})
        logger.debug(f"Querying {index_name} ({document_type}) with args {query_args}")

        try:
            resp = self.client.search(index=index_name, body=body)
        except (ApiError, TransportError) as e:
            logger.warning(f"Elasticsearch query against {index_name} failed: {e}")
            raise SearchQueryError(f"query against {index_name} failed", index_name=index_name, cause=e) from e

        raw = getattr(resp, "body", resp)
        if not isinstance(raw, dict):
            logger.warning(f"Elasticsearch returned a non-object body for {index_name}: {type(raw).__name__}")
            raise SearchQueryError(f"unexpected response from {index_name}", index_name=index_name)

        shaper = result_filter or self.active_result_interceptor() or formatted_results
        if shaper is raw_response:
            return raw
        try:
            formatted = format_results(raw)
        except (AttributeError, TypeError, ValueError) as e:
            logger.warning(f"Could not format the response from {index_name}: {e}")
            raise SearchQueryError(f"unexpected response from {index_name}", index_name=index_name, cause=e) from e
        return shaper(formatted, raw, query_args)

    def ping(self) -> bool:
        try:
            return bool(self.client.ping())
        except (ApiError, TransportError) as e:
            logger.warning(f"Elasticsearch ping failed: {e}")
            return False
