"""Autosuggest routes: POST /<namespace>/v1/autosuggest, GET .../autosuggest/options

The POST endpoint takes an Elasticsearch query spec as its JSON body and the
search term in the ``EP-Search-Term`` header, and returns the raw
Elasticsearch response (200) or an ``es_query_error`` payload (418). Querying
through the server avoids CORS issues and keeps the ES_SHIELD credentials out
of the browser.
"""

from __future__ import annotations

import json
from typing import Any, Dict

from flask import Blueprint, Response, current_app, jsonify, request, url_for


SEARCH_TERM_HEADER = "EP-Search-Term"

autosuggest_bp = Blueprint("autosuggest", __name__)


@autosuggest_bp.route("/autosuggest/", methods=["POST"], strict_slashes=False)
def autosuggest():
    payload = request.get_json(silent=True)
    body: Dict[str, Any] = payload if isinstance(payload, dict) else {}
    search_term = request.headers.get(SEARCH_TERM_HEADER)

    svc = current_app.extensions["autosuggest"]
    out, status = svc.handle(body, search_term)
    # Raw body passes through in the engine's key order
    return Response(json.dumps(out, ensure_ascii=False), status=status, mimetype="application/json")


@autosuggest_bp.get("/autosuggest/options")
def autosuggest_options():
    # Settings the autosuggest script needs to talk to this endpoint
    public_url = current_app.config.get("PUBLIC_URL")
    if public_url:
        endpoint_url = public_url.rstrip("/") + url_for("autosuggest.autosuggest")
    else:
        endpoint_url = url_for("autosuggest.autosuggest", _external=True)
    return jsonify(
        {
            "endpointUrl": endpoint_url,
            "addSearchTermHeader": True,
        }
    )
