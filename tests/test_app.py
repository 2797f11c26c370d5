import logging

import pytest
from rich.logging import RichHandler

from schemadoc import ApiDefinitions, obj, ref, string
from schemadoc.app import create_app
from schemadoc.log import setup_logging


@pytest.fixture
def definitions():
    defs = ApiDefinitions(metadata={"info": {"title": "Served"}})
    user = defs.schema(obj(name=string()).openapi(ref_id="User"))
    defs.route("get", "/user", responses={200: ("OK", user)})
    return defs


@pytest.fixture
def client(definitions):
    return create_app(definitions).test_client()


def test_openapi_json(client):
    r = client.get("/openapi.json")
    assert r.status_code == 200
    j = r.get_json()
    assert j["info"]["title"] == "Served"
    assert "User" in j["components"]["schemas"]
    assert j["servers"] == [{"url": "http://localhost"}]
    assert r.headers["Cache-Control"].startswith("no-store")


def test_etag_round_trip(client):
    first = client.get("/openapi.json")
    etag = first.headers["ETag"]
    second = client.get("/openapi.json", headers={"If-None-Match": f'"{etag}"'})
    assert second.status_code == 304
    assert second.headers["ETag"] == etag


def test_cors_header(client):
    r = client.get("/openapi.json", headers={"Origin": "https://docs.example"})
    assert r.headers.get("Access-Control-Allow-Origin") == "*"


def test_generation_error_is_reported(definitions):
    definitions.schema(obj(parent=ref("Nowhere")).openapi(ref_id="Orphan"))
    r = create_app(definitions).test_client().get("/openapi.json")
    assert r.status_code == 500
    j = r.get_json()
    assert j["code"] == "UNRESOLVABLE_REFERENCE"
    assert j["ref_id"] == "Nowhere"


def test_healthz(client):
    r = client.get("/_healthz")
    assert r.status_code == 200
    assert r.get_json() == {"ok": True}


def test_setup_logging_installs_rich_handler():
    logger = setup_logging(level="DEBUG")
    assert logger.name == "schemadoc"
    assert logger.level == logging.DEBUG
    assert any(isinstance(h, RichHandler) for h in logger.handlers)
