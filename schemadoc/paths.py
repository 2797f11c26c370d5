# ==================================================
# schemadoc/paths.py: route definitions → path items
# ==================================================
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence

from .errors import InvalidComposition, UnsupportedNodeShape
from .nodes import ObjectShape, SchemaNode, Wrapper, is_optional

METHODS = ("get", "put", "post", "delete", "options", "head", "patch", "trace")


@dataclass(frozen=True)
class ResponseDefinition:
    description: str
    schema: Optional[SchemaNode] = None
    media_type: str = "application/json"


@dataclass(frozen=True)
class RouteDefinition:
    method: str
    path: str
    responses: Mapping[Any, ResponseDefinition] = field(default_factory=dict)
    body: Optional[SchemaNode] = None
    params: Optional[ObjectShape] = None
    query: Optional[ObjectShape] = None
    summary: Optional[str] = None
    description: Optional[str] = None
    operation_id: Optional[str] = None
    tags: Sequence[str] = ()
    media_type: str = "application/json"


def _unwrap_object(node: SchemaNode, where: str, path) -> ObjectShape:
    while isinstance(node, Wrapper):
        node = node.inner
    if not isinstance(node, ObjectShape):
        raise UnsupportedNodeShape(f"{where} parameters must be an object shape", path=path)
    return node


def _parameters(route: RouteDefinition, render) -> List[Dict[str, Any]]:
    out: List[Dict[str, Any]] = []
    for location, shape in (("path", route.params), ("query", route.query)):
        if shape is None:
            continue
        base_path = (route.method, route.path, "parameters", location)
        obj = _unwrap_object(shape, location, base_path)
        for name, node in obj.fields.items():
            param: Dict[str, Any] = {
                "in": location,
                "name": name,
                "required": location == "path" or not is_optional(node),
                "schema": render(node, base_path + (name,)),
            }
            if node.meta.description:
                param["description"] = node.meta.description
            out.append(param)
    return out


def operation(route: RouteDefinition, render) -> Dict[str, Any]:
    """
    Build one OpenAPI operation object.

    ``render(node, path)`` turns a node into a schema object; the assembler
    passes a reference-only renderer so nothing new is registered here.
    """
    op: Dict[str, Any] = {}
    if route.operation_id:
        op["operationId"] = route.operation_id
    if route.summary:
        op["summary"] = route.summary
    if route.description:
        op["description"] = route.description
    if route.tags:
        op["tags"] = list(route.tags)

    params = _parameters(route, render)
    if params:
        op["parameters"] = params

    if route.body is not None:
        op["requestBody"] = {
            "required": not is_optional(route.body),
            "content": {
                route.media_type: {
                    "schema": render(route.body, (route.method, route.path, "requestBody"))
                }
            },
        }

    responses: Dict[str, Any] = {}
    for status, resp in route.responses.items():
        item: Dict[str, Any] = {"description": resp.description}
        if resp.schema is not None:
            schema = render(resp.schema, (route.method, route.path, "responses", str(status)))
            item["content"] = {resp.media_type: {"schema": schema}}
        responses[str(status)] = item
    op["responses"] = responses
    return op


def build_paths(routes: Sequence[RouteDefinition], render) -> Dict[str, Dict[str, Any]]:
    paths: Dict[str, Dict[str, Any]] = {}
    for route in routes:
        method = route.method.lower()
        if method not in METHODS:
            raise InvalidComposition(f"unsupported HTTP method {route.method!r} for {route.path}")
        item = paths.setdefault(route.path, {})
        if method in item:
            raise InvalidComposition(f"route {method.upper()} {route.path} is defined twice")
        item[method] = operation(route, render)
    return paths
