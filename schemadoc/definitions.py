# schemadoc/definitions.py: collect schemas and routes for a document
from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional

from .build import build_spec
from .nodes import SchemaNode
from .paths import ResponseDefinition, RouteDefinition


class ApiDefinitions:
    """
    Ordered collection of top-level schemas and routes.

    Collecting is cheap and side-effect free; nothing is resolved until
    ``build()``, which runs a fresh generation each time.
    """

    def __init__(self, metadata: Optional[Mapping[str, Any]] = None) -> None:
        self.schemas: List[SchemaNode] = []
        self.routes: List[RouteDefinition] = []
        self.metadata: Dict[str, Any] = dict(metadata or {})

    def schema(self, node: SchemaNode) -> SchemaNode:
        self.schemas.append(node)
        return node

    def route(self, method: str, path: str, responses=None, **kwargs) -> RouteDefinition:
        """Add a route. ``responses`` maps status → ResponseDefinition, or
        status → (description, node) / description for the common cases."""
        normalized = {}
        for status, resp in (responses or {}).items():
            if isinstance(resp, str):
                resp = ResponseDefinition(resp)
            elif isinstance(resp, tuple):
                resp = ResponseDefinition(*resp)
            normalized[status] = resp
        route = RouteDefinition(method=method, path=path, responses=normalized, **kwargs)
        self.routes.append(route)
        return route

    def build(self, sort_paths: bool = False) -> Dict[str, Any]:
        return build_spec(self.schemas, self.routes, self.metadata, sort_paths=sort_paths)
