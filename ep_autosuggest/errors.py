"""Error types and the JSON error payload returned to the autosuggest script."""

from __future__ import annotations

from typing import Any, Dict, Optional


ES_QUERY_ERROR = "es_query_error"
# Not 200 and not 5xx: the autosuggest script's generic error paths stay untouched
ES_QUERY_ERROR_STATUS = 418
ES_QUERY_ERROR_MESSAGE = "Elasticsearch query failed; no autosuggest results available."


class SearchQueryError(Exception):
    """Raised when Elasticsearch cannot answer a query with a JSON object."""

    def __init__(self, message: str, index_name: Optional[str] = None, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.index_name = index_name
        self.cause = cause


def error_payload(code: str, message: str, data: Any = None) -> Dict[str, Any]:
    return {"code": code, "message": message, "data": data}
