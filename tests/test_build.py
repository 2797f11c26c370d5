import json

import pytest

from schemadoc import (
    ApiDefinitions,
    InvalidComposition,
    ResponseDefinition,
    RouteDefinition,
    UnresolvableReference,
    array,
    boolean,
    build_spec,
    integer,
    number,
    obj,
    ref,
    string,
    to_json,
)
from schemadoc import config

PET_REF = {"$ref": "#/components/schemas/Pet"}


def _pets():
    defs = ApiDefinitions(metadata={"info": {"title": "Pets"}})
    pet = defs.schema(obj(id=integer(), name=string()).openapi(ref_id="Pet"))
    defs.route(
        "GET",
        "/pets/{id}",
        params=obj(id=integer().openapi(description="Pet id")),
        query=obj(verbose=boolean().optional()),
        responses={200: ("The pet", pet), 404: "Not found"},
        operation_id="getPet",
        summary="Fetch one pet",
        tags=["pets"],
    )
    defs.route(
        "post",
        "/pets",
        body=pet,
        responses={201: ResponseDefinition("Created", array(pet))},
    )
    return defs


def test_document_skeleton():
    doc = _pets().build()
    assert doc["openapi"] == config.OPENAPI_VERSION
    assert doc["info"]["title"] == "Pets"
    assert doc["info"]["version"] == config.API_VERSION
    assert list(doc["components"]["schemas"]) == ["Pet"]


def test_route_operation():
    op = _pets().build()["paths"]["/pets/{id}"]["get"]
    assert op["operationId"] == "getPet"
    assert op["summary"] == "Fetch one pet"
    assert op["tags"] == ["pets"]
    assert op["parameters"] == [
        {"in": "path", "name": "id", "required": True, "schema": {"type": "integer", "description": "Pet id"},
         "description": "Pet id"},
        {"in": "query", "name": "verbose", "required": False, "schema": {"type": "boolean"}},
    ]
    assert op["responses"] == {
        "200": {"description": "The pet", "content": {"application/json": {"schema": PET_REF}}},
        "404": {"description": "Not found"},
    }


def test_request_body_and_inline_response():
    op = _pets().build()["paths"]["/pets"]["post"]
    assert op["requestBody"] == {
        "required": True,
        "content": {"application/json": {"schema": PET_REF}},
    }
    assert op["responses"]["201"]["content"]["application/json"]["schema"] == {
        "type": "array",
        "items": PET_REF,
    }


def test_route_with_unregistered_schema_fails():
    stray = obj(id=string()).openapi(ref_id="Stray")
    route = RouteDefinition("get", "/stray", responses={200: ResponseDefinition("OK", stray)})
    with pytest.raises(UnresolvableReference) as exc:
        build_spec([], [route])
    assert exc.value.ref_id == "Stray"
    assert exc.value.code == "UNRESOLVABLE_REFERENCE"


def test_route_nested_unregistered_schema_fails():
    stray = obj(id=string()).openapi(ref_id="Stray")
    route = RouteDefinition("post", "/stray", body=obj(item=stray))
    with pytest.raises(UnresolvableReference):
        build_spec([], [route])


def test_route_schema_registered_as_dependency_is_accepted():
    base = obj(id=string()).openapi(ref_id="Base")
    extended = base.extend(bonus=number()).openapi(ref_id="Extended")
    route = RouteDefinition("get", "/base", responses={200: ResponseDefinition("OK", base)})
    doc = build_spec([extended], [route])
    schema = doc["paths"]["/base"]["get"]["responses"]["200"]["content"]["application/json"]["schema"]
    assert schema == {"$ref": "#/components/schemas/Base"}


def test_dangling_reference_fails():
    node = obj(parent=ref("Missing")).openapi(ref_id="Child")
    with pytest.raises(UnresolvableReference) as exc:
        build_spec([node])
    assert exc.value.ref_id == "Missing"
    assert exc.value.path == ("Child", "properties", "parent")


def test_duplicate_route_is_rejected():
    routes = [
        RouteDefinition("get", "/a", responses={200: ResponseDefinition("OK")}),
        RouteDefinition("GET", "/a", responses={200: ResponseDefinition("OK")}),
    ]
    with pytest.raises(InvalidComposition):
        build_spec([], routes)


def test_unknown_method_is_rejected():
    with pytest.raises(InvalidComposition):
        build_spec([], [RouteDefinition("fetch", "/a")])


def test_paths_keep_declaration_order_unless_sorted():
    routes = [RouteDefinition("get", p, responses={200: ResponseDefinition("OK")}) for p in ("/b", "/a")]
    assert list(build_spec([], routes)["paths"]) == ["/b", "/a"]
    assert list(build_spec([], routes, sort_paths=True)["paths"]) == ["/a", "/b"]


def test_metadata_cannot_replace_generated_sections():
    doc = build_spec(
        [string().openapi(ref_id="Name")],
        metadata={"components": {}, "paths": {"/x": {}}, "servers": [{"url": "https://api.example"}]},
    )
    assert doc["servers"] == [{"url": "https://api.example"}]
    assert doc["paths"] == {}
    assert list(doc["components"]["schemas"]) == ["Name"]


def test_generation_calls_are_independent():
    build_spec([obj(a=string()).openapi(ref_id="X")])
    doc = build_spec([obj(b=string()).openapi(ref_id="X")])
    assert doc["components"]["schemas"]["X"]["required"] == ["b"]


def test_output_is_deterministic():
    defs = _pets()
    first = to_json(defs.build())
    second = to_json(defs.build())
    assert first == second
    assert json.loads(first)["components"]["schemas"]["Pet"]["required"] == ["id", "name"]
