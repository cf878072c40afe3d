"""Docs routes: GET /docs (Swagger UI) and /openapi.yaml (spec)

Serves the OpenAPI YAML shipped with the package and a minimal Swagger UI
page that renders it. The REST namespace in the spec is rewritten to the
configured one.
"""

from __future__ import annotations

import os
from flask import Blueprint, Response, current_app, url_for


docs_bp = Blueprint("docs", __name__)

DEFAULT_NAMESPACE = "bigwing/elasticpress"


def _spec_path() -> str:
    # ep_autosuggest/routes/docs.py → ep_autosuggest/docs/openapi.yaml
    return os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "docs", "openapi.yaml"))


@docs_bp.get("/openapi.yaml")
def openapi_yaml() -> Response:
    path = _spec_path()
    if not os.path.exists(path):
        return Response("openapi.yaml not found", status=404)
    with open(path, "r", encoding="utf-8") as f:
        data = f.read()
    namespace = current_app.config.get("REST_NAMESPACE", DEFAULT_NAMESPACE)
    data = data.replace(f"/{DEFAULT_NAMESPACE}/", f"/{namespace}/")
    return Response(data, mimetype="text/yaml")


@docs_bp.get("/docs")
def swagger_ui() -> Response:
    # Minimal Swagger UI using CDN assets; loads spec from /openapi.yaml
    html = """
<!doctype html>
<html lang="en">
  <head>
    <meta charset="utf-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1" />
    <title>Autosuggest API | Swagger UI</title>
    <link rel="stylesheet" href="https://unpkg.com/swagger-ui-dist@5/swagger-ui.css" />
    <style>
      body { margin: 0; padding: 0; }
      #swagger-ui { width: 100%; height: 100vh; }
    </style>
  </head>
  <body>
    <div id="swagger-ui"></div>
    <script src="https://unpkg.com/swagger-ui-dist@5/swagger-ui-bundle.js"></script>
    <script>
      window.onload = () => {
        window.ui = SwaggerUIBundle({
          url: '__SPEC_URL__',
          dom_id: '#swagger-ui',
          presets: [SwaggerUIBundle.presets.apis, SwaggerUIBundle.SwaggerUIStandalonePreset],
          layout: 'BaseLayout',
          deepLinking: true,
          docExpansion: 'list',
        });
      };
    </script>
  </body>
  </html>
    """.strip()
    html = html.replace("__SPEC_URL__", url_for("docs.openapi_yaml"))
    return Response(html, mimetype="text/html")
