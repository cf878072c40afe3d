"""AutosuggestService: answers autosuggest requests with raw Elasticsearch results.

The autosuggest script expects the full Elasticsearch response rather than the
formatted documents regular search works with, so the query runs with the
``raw_response`` interceptor installed for exactly that one call. Backend
failures come back as an ``es_query_error`` payload with status 418 so the
script never sees a server error or a malformed body.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional, Tuple

from ep_autosuggest.errors import (
    ES_QUERY_ERROR,
    ES_QUERY_ERROR_MESSAGE,
    ES_QUERY_ERROR_STATUS,
    SearchQueryError,
    error_payload,
)
from ep_autosuggest.services.index_service import IndexResolver
from ep_autosuggest.services.search_service import SearchQueryExecutor, raw_response
from ep_autosuggest.utils.text import sanitize_text_field


logger = logging.getLogger(__name__)

DOCUMENT_TYPE = "post"


class AutosuggestService:
    def __init__(self, index_resolver: IndexResolver, executor: SearchQueryExecutor):
        self.index_resolver = index_resolver
        self.executor = executor

    def handle(self, body: Optional[Mapping[str, Any]], search_term: Optional[str]) -> Tuple[Dict[str, Any], int]:
        """Run one autosuggest query and return ``(payload, status)``."""
        raw_term = search_term or ""
        response: Any = None

        with self.executor.intercept_results(raw_response):
            index_name = self.index_resolver.get_index_name(DOCUMENT_TYPE)
            # Flags this as a search by passing the search string along
            query_args = {"s": sanitize_text_field(raw_term)}
            try:
                response = self.executor.query(index_name, DOCUMENT_TYPE, body or {}, query_args)
            except SearchQueryError as e:
                logger.error(f"Autosuggest query failed for index {e.index_name or index_name}")
                response = None

        if not response or not isinstance(response, dict):
            logger.debug(f"Returning {ES_QUERY_ERROR} for search term {raw_term!r}")
            return error_payload(ES_QUERY_ERROR, ES_QUERY_ERROR_MESSAGE, raw_term), ES_QUERY_ERROR_STATUS

        return response, 200
