"""Docs blueprint: /openapi.json, /docs and /api-docs (Swagger UI), /redoc."""
from __future__ import annotations

from flask import Blueprint, Response, jsonify, url_for

from .openapi import build_openapi

bp = Blueprint("docs", __name__)

SWAGGER_UI_HTML = """<!doctype html>
<html>
<head>
  <meta charset="utf-8"/>
  <title>User API</title>
  <link rel="stylesheet" href="https://unpkg.com/swagger-ui-dist@5/swagger-ui.css" />
  <style>body{{margin:0;}} #swagger-ui{{height:100vh;}}</style>
</head>
<body>
  <div id="swagger-ui"></div>
  <script src="https://unpkg.com/swagger-ui-dist@5/swagger-ui-bundle.js"></script>
  <script>window.ui = SwaggerUIBundle({{ url: '{spec_url}', dom_id: '#swagger-ui' }});</script>
</body>
</html>
"""

REDOC_HTML = """<!doctype html>
<html>
<head>
  <meta charset="utf-8"/>
  <title>User API - ReDoc</title>
  <style>body{{margin:0;}}</style>
  <script src="https://cdn.jsdelivr.net/npm/redoc@2/bundles/redoc.standalone.js"></script>
</head>
<body>
  <redoc spec-url="{spec_url}"></redoc>
</body>
</html>
"""


@bp.get("/openapi.json")
def openapi_json() -> Response:
    return jsonify(build_openapi())


@bp.get("/docs")
@bp.get("/api-docs")
def swagger_ui() -> Response:
    html = SWAGGER_UI_HTML.format(spec_url=url_for("docs.openapi_json"))
    return Response(html, mimetype="text/html")


@bp.get("/redoc")
def redoc() -> Response:
    html = REDOC_HTML.format(spec_url=url_for("docs.openapi_json"))
    return Response(html, mimetype="text/html")
