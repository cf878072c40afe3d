"""Flask app factory and blueprint registration.

Defines `create_app()` to initialize the Flask app, load configuration,
configure logging, enable CORS, wire the Elasticsearch collaborators and
register route blueprints.
"""

from __future__ import annotations

import logging
from typing import Optional

from flask import Flask, current_app
from flask_cors import CORS

from ep_autosuggest.config import Config, ensure_data_dirs, rest_prefix
from ep_autosuggest.logging_setup import configure_logging
from ep_autosuggest.routes.autosuggest import SEARCH_TERM_HEADER, autosuggest_bp
from ep_autosuggest.routes.docs import docs_bp
from ep_autosuggest.services.autosuggest_service import AutosuggestService
from ep_autosuggest.services.index_service import IndexResolver
from ep_autosuggest.services.option_store import OptionStore
from ep_autosuggest.services.search_service import SearchQueryExecutor, build_client


logger = logging.getLogger(__name__)


def create_app(
    cfg: Config = Config,
    executor: Optional[SearchQueryExecutor] = None,
    index_resolver: Optional[IndexResolver] = None,
) -> Flask:
    configure_logging(cfg.LOG_LEVEL)

    app = Flask(__name__)
    # Basic config
    app.config.from_object(cfg)
    ensure_data_dirs(cfg)
    # The autosuggest script runs on the site's pages, possibly on another origin
    CORS(
        app,
        resources={r"/*": {"origins": cfg.CORS_ORIGINS}},
        supports_credentials=False,
        allow_headers=["Content-Type", "Authorization", SEARCH_TERM_HEADER],
        methods=["GET", "POST", "OPTIONS"],
    )

    # Collaborators
    if executor is None:
        executor = SearchQueryExecutor(build_client(cfg), cfg)
    if index_resolver is None:
        index_resolver = IndexResolver(cfg, OptionStore(cfg=cfg))
    app.extensions["search_executor"] = executor
    app.extensions["autosuggest"] = AutosuggestService(index_resolver, executor)

    # Blueprints
    app.register_blueprint(autosuggest_bp, url_prefix=rest_prefix(cfg))
    app.register_blueprint(docs_bp)

    @app.get("/health")
    def health():
        return {"status": "ok", "elasticsearch": current_app.extensions["search_executor"].ping()}

    logger.info(f"Autosuggest endpoint mounted at {rest_prefix(cfg)}/autosuggest ({cfg.ES_HOST})")
    return app
