# ==================================================
# schemadoc/walker.py: node → inline schema or $ref
# ==================================================
"""
The walker turns schema nodes into OpenAPI schema objects.

Anonymous nodes are always inlined. A node carrying a refId is rendered once,
stored in the registry, and every use of it (including the first) becomes a
``$ref`` pointer. Objects created by ``extend`` are handed to the
composition resolver.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from .composition import CompositionResolver
from .errors import UnresolvableReference, UnsupportedNodeShape
from .nodes import (
    PRIMITIVE_KINDS,
    ArrayShape,
    Default,
    EnumShape,
    IntersectionShape,
    NullableKind,
    ObjectShape,
    OptionalKind,
    Primitive,
    RecordShape,
    Reference,
    SchemaNode,
    UNSET,
    UnionShape,
    Wrapper,
    is_optional,
)
from .registry import MetadataRegistry

logger = logging.getLogger(__name__)

REF_PREFIX = "#/components/schemas/"

Path = Tuple[Any, ...]


def ref_schema(ref_id: str) -> Dict[str, Any]:
    return {"$ref": REF_PREFIX + ref_id}


@dataclass(frozen=True)
class Inline:
    schema: Dict[str, Any]

    def to_schema(self) -> Dict[str, Any]:
        return self.schema


@dataclass(frozen=True)
class Ref:
    ref_id: str

    def to_schema(self) -> Dict[str, Any]:
        return ref_schema(self.ref_id)


def annotate(schema: Dict[str, Any], extras: Dict[str, Any]) -> Dict[str, Any]:
    """Add keywords to ``schema``; a bare ``$ref`` is wrapped in ``allOf`` first."""
    if not extras:
        return schema
    if "$ref" in schema:
        return {"allOf": [schema], **extras}
    schema.update(extras)
    return schema


def _enum_type(values) -> Optional[str]:
    kinds = set()
    for v in values:
        if isinstance(v, bool):
            kinds.add("boolean")
        elif isinstance(v, int):
            kinds.add("integer")
        elif isinstance(v, float):
            kinds.add("number")
        elif isinstance(v, str):
            kinds.add("string")
        else:
            kinds.add(None)
    if kinds == {"integer", "number"}:
        return "number"
    if len(kinds) == 1:
        return kinds.pop()
    return None


class SchemaWalker:
    def __init__(self, registry: MetadataRegistry) -> None:
        self.registry = registry
        self.composer = CompositionResolver(self)
        # reference-only: named nodes must already be registered
        self.reference_only = False

    # ----- public -----

    def resolve(self, node: SchemaNode, path: Path = ()):
        ref_id = node.meta.ref_id
        if ref_id is None:
            return Inline(self.schema_of(node, path))

        if self.registry.has_seen(node) == ref_id:
            logger.debug("reusing %s", ref_id)
            return Ref(ref_id)

        if self.reference_only:
            raise UnresolvableReference(
                f"schema {ref_id!r} was not part of the resolved schema set",
                ref_id=ref_id,
                path=path,
                hint="Register the schema before referencing it from a route.",
            )

        self.registry.check_available(ref_id, node)
        with self.registry.transaction():
            schema = self.schema_of(node, (ref_id,))
            self.registry.register(ref_id, node, schema)
        return Ref(ref_id)

    def child(self, node: SchemaNode, path: Path, nullable: bool = False) -> Dict[str, Any]:
        """Schema for a node used inside another schema."""
        if node.meta.ref_id is None:
            return self.schema_of(node, path, nullable)
        schema = self.resolve(node, path).to_schema()
        return annotate(schema, {"nullable": True} if nullable else {})

    def object_schema(self, fields, path: Path, nullable: bool = False) -> Dict[str, Any]:
        properties: Dict[str, Any] = {}
        required = []
        for name, field_node in fields.items():
            properties[name] = self.child(field_node, path + ("properties", name))
            if not is_optional(field_node):
                required.append(name)
        schema: Dict[str, Any] = {"type": "object", "properties": properties}
        if required:
            schema["required"] = required
        if nullable:
            schema["nullable"] = True
        return schema

    # ----- rendering -----

    def schema_of(self, node: SchemaNode, path: Path, nullable: bool = False) -> Dict[str, Any]:
        """Literal schema body of ``node``, ignoring its own refId."""
        if isinstance(node, Wrapper):
            schema = self._wrapper(node, path, nullable)
        elif isinstance(node, Reference):
            self.registry.note_reference(node.target_id, path)
            schema = annotate(ref_schema(node.target_id), {"nullable": True} if nullable else {})
        elif isinstance(node, ObjectShape) and node.derivation is not None:
            schema = self.composer.compose_extension(node, node.derivation, path, nullable)
        else:
            schema = annotate(self._plain(node, path), {"nullable": True} if nullable else {})
        return annotate(schema, self._meta_extras(node))

    def _wrapper(self, node: Wrapper, path: Path, nullable: bool) -> Dict[str, Any]:
        kind = node.kind
        if isinstance(kind, OptionalKind):
            return self.child(node.inner, path, nullable)
        if isinstance(kind, NullableKind):
            return self.child(node.inner, path, True)
        if isinstance(kind, Default):
            return annotate(self.child(node.inner, path, nullable), {"default": kind.value})
        raise UnsupportedNodeShape(f"unknown wrapper kind {kind!r}", path=path)

    def _plain(self, node: SchemaNode, path: Path) -> Dict[str, Any]:
        if isinstance(node, Primitive):
            return self._primitive(node, path)
        if isinstance(node, ObjectShape):
            return self.object_schema(node.fields, path)
        if isinstance(node, ArrayShape):
            schema = {"type": "array", "items": self.child(node.element, path + ("items",))}
            if node.min_items is not None:
                schema["minItems"] = node.min_items
            if node.max_items is not None:
                schema["maxItems"] = node.max_items
            return schema
        if isinstance(node, RecordShape):
            return {
                "type": "object",
                "additionalProperties": self.child(node.value, path + ("additionalProperties",)),
            }
        if isinstance(node, UnionShape):
            return self._combinator(
                "oneOf" if node.exclusive else "anyOf", node.variants, path, "union"
            )
        if isinstance(node, IntersectionShape):
            return self._combinator("allOf", node.members, path, "intersection")
        if isinstance(node, EnumShape):
            if not node.values:
                raise UnsupportedNodeShape("enum without values", path=path)
            schema: Dict[str, Any] = {}
            enum_type = _enum_type(node.values)
            if enum_type:
                schema["type"] = enum_type
            schema["enum"] = list(node.values)
            return schema
        raise UnsupportedNodeShape(
            f"cannot render node of type {type(node).__name__}",
            path=path,
            hint="Build schemas from schemadoc.nodes variants only.",
        )

    def _primitive(self, node: Primitive, path: Path) -> Dict[str, Any]:
        if node.kind not in PRIMITIVE_KINDS:
            raise UnsupportedNodeShape(f"unknown primitive kind {node.kind!r}", path=path)
        schema: Dict[str, Any] = {} if node.kind == "any" else {"type": node.kind}
        if node.format:
            schema["format"] = node.format
        if node.constraints is not None:
            schema.update(node.constraints.to_schema())
        return schema

    def _combinator(self, keyword: str, members, path: Path, label: str) -> Dict[str, Any]:
        if not members:
            raise UnsupportedNodeShape(f"{label} without members", path=path)
        if len(members) == 1:
            return dict(self.child(members[0], path + (keyword, 0)))
        return {keyword: [self.child(m, path + (keyword, i)) for i, m in enumerate(members)]}

    @staticmethod
    def _meta_extras(node: SchemaNode) -> Dict[str, Any]:
        meta = node.meta
        extras: Dict[str, Any] = {}
        if meta.description is not None:
            extras["description"] = meta.description
        if meta.example is not UNSET:
            extras["example"] = meta.example
        if meta.discriminator is not None:
            extras["discriminator"] = {"propertyName": meta.discriminator.property_name}
        return extras

