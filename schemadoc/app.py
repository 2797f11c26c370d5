# schemadoc/app.py: Flask app serving a generated /openapi.json

import hashlib
import logging
from datetime import datetime, timezone
from typing import Optional, Tuple

from flask import Flask, Response, jsonify, request
from flask_cors import CORS

from .build import build_spec, to_json
from .definitions import ApiDefinitions
from .errors import SchemaDocError
from .log import setup_logging

logger = logging.getLogger(__name__)


def create_app(definitions: ApiDefinitions, log_level: Optional[str] = None) -> Flask:
    setup_logging(level=log_level)
    app = Flask(__name__)
    CORS(app)

    # -------- OpenAPI (dynamic) --------

    def _spec_response() -> Response:
        metadata = dict(definitions.metadata)
        if "servers" not in metadata:
            metadata["servers"] = [{"url": request.url_root.rstrip("/")}]
        try:
            spec = build_spec(definitions.schemas, definitions.routes, metadata)
        except SchemaDocError as e:
            logger.error("document generation failed: %s", e)
            return jsonify(e.to_dict()), 500

        payload = to_json(spec)
        etag = hashlib.sha256(payload.encode("utf-8")).hexdigest()

        inm = request.headers.get("If-None-Match")
        if inm and inm.strip('"') == etag:
            resp = Response(status=304)
        else:
            resp = Response(payload, status=200, mimetype="application/json")

        resp.headers["ETag"] = etag
        resp.headers["Cache-Control"] = "no-store, max-age=0, must-revalidate"
        resp.headers["Last-Modified"] = datetime.now(timezone.utc).strftime("%a, %d %b %Y %H:%M:%S GMT")
        return resp

    @app.route("/openapi.json", methods=["GET", "HEAD"])
    def openapi_spec():
        return _spec_response()

    # -------- Health --------
    @app.get("/_healthz")
    def healthz() -> Tuple[Response, int]:
        return jsonify({"ok": True}), 200

    return app

