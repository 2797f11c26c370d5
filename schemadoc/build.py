# ==================================================
# schemadoc/build.py: resolve schemas, assemble the document
# ==================================================
from __future__ import annotations

import json
import logging
from collections import OrderedDict
from typing import Any, Dict, Iterable, Mapping, Optional, Sequence

from .base import deep_base
from .errors import UnresolvableReference
from .nodes import SchemaNode
from .paths import RouteDefinition, build_paths
from .registry import MetadataRegistry
from .walker import SchemaWalker

logger = logging.getLogger(__name__)


def _sorted_map(d: dict) -> dict:
    return OrderedDict(sorted(d.items(), key=lambda kv: kv[0]))


class DocumentAssembler:
    def __init__(self, registry: MetadataRegistry, walker: SchemaWalker) -> None:
        self.registry = registry
        self.walker = walker

    def _render_route_node(self, node: SchemaNode, path) -> Dict[str, Any]:
        # route nodes are looked up, never registered
        self.walker.reference_only = True
        try:
            return self.walker.child(node, path)
        finally:
            self.walker.reference_only = False

    def assemble(
        self,
        routes: Sequence[RouteDefinition] = (),
        metadata: Optional[Mapping[str, Any]] = None,
        sort_paths: bool = False,
    ) -> Dict[str, Any]:
        doc = deep_base(metadata)
        paths = build_paths(routes, self._render_route_node)

        dangling = self.registry.dangling()
        if dangling:
            ref_id, path = dangling[0]
            raise UnresolvableReference(
                f"reference to unregistered schema {ref_id!r}",
                ref_id=ref_id,
                path=path,
                hint="Include the referenced schema in the resolved schema set.",
            )

        doc["paths"] = _sorted_map(paths) if sort_paths else paths
        doc["components"] = {
            "schemas": {ref_id: entry.schema for ref_id, entry in self.registry},
        }
        logger.info(
            "assembled document: %d schemas, %d paths", len(self.registry), len(paths)
        )
        return doc


def build_spec(
    schemas: Iterable[SchemaNode],
    routes: Sequence[RouteDefinition] = (),
    metadata: Optional[Mapping[str, Any]] = None,
    sort_paths: bool = False,
) -> Dict[str, Any]:
    """Generate one document. Every call uses its own registry."""
    registry = MetadataRegistry()
    walker = SchemaWalker(registry)
    for index, node in enumerate(schemas):
        walker.resolve(node, (node.meta.ref_id or index,))
    return DocumentAssembler(registry, walker).assemble(routes, metadata, sort_paths)


def to_json(document: Mapping[str, Any], indent: Optional[int] = None) -> str:
    if indent is None:
        return json.dumps(document, ensure_ascii=False, separators=(",", ":"))
    return json.dumps(document, ensure_ascii=False, indent=indent)
