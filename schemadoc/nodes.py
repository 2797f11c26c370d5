# ==============================================
# schemadoc/nodes.py: immutable schema node model
# ==============================================
"""
Schema nodes are frozen values. Every modifier (``optional``, ``nullable``,
``openapi``, ``extend``, ...) returns a new node and never touches the one it
was called on, so a node's identity is stable for the whole generation run.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple

PRIMITIVE_KINDS = ("string", "number", "integer", "boolean", "any")


class _Unset:
    def __repr__(self) -> str:
        return "UNSET"


UNSET: Any = _Unset()


@dataclass(frozen=True)
class Discriminator:
    property_name: str


@dataclass(frozen=True)
class Metadata:
    ref_id: Optional[str] = None
    description: Optional[str] = None
    example: Any = UNSET
    discriminator: Optional[Discriminator] = None

    def merge(self, **changes) -> "Metadata":
        """Return a copy with every non-UNSET change applied."""
        return replace(self, **{k: v for k, v in changes.items() if v is not UNSET})


EMPTY_META = Metadata()


@dataclass(frozen=True)
class Constraints:
    minimum: Optional[float] = None
    maximum: Optional[float] = None
    exclusive_minimum: Optional[float] = None
    exclusive_maximum: Optional[float] = None
    multiple_of: Optional[float] = None
    min_length: Optional[int] = None
    max_length: Optional[int] = None
    pattern: Optional[str] = None
    enum: Optional[Tuple[Any, ...]] = None

    def to_schema(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {}
        for name, key in _CONSTRAINT_KEYS:
            value = getattr(self, name)
            if value is not None:
                out[key] = list(value) if name == "enum" else value
        return out


_CONSTRAINT_KEYS = (
    ("minimum", "minimum"),
    ("maximum", "maximum"),
    ("exclusive_minimum", "exclusiveMinimum"),
    ("exclusive_maximum", "exclusiveMaximum"),
    ("multiple_of", "multipleOf"),
    ("min_length", "minLength"),
    ("max_length", "maxLength"),
    ("pattern", "pattern"),
    ("enum", "enum"),
)


class SchemaNode:
    """Mixin with the fluent, non-mutating modifiers shared by every node."""

    meta: Metadata

    def openapi(self, ref_id=UNSET, description=UNSET, example=UNSET, discriminator=UNSET):
        if isinstance(discriminator, str):
            discriminator = Discriminator(discriminator)
        meta = self.meta.merge(
            ref_id=ref_id, description=description, example=example, discriminator=discriminator
        )
        return replace(self, meta=meta)

    def optional(self) -> "Wrapper":
        return Wrapper(self, OPTIONAL)

    def nullable(self) -> "Wrapper":
        return Wrapper(self, NULLABLE)

    def default(self, value: Any) -> "Wrapper":
        return Wrapper(self, Default(value))

    @property
    def ref_id(self) -> Optional[str]:
        return self.meta.ref_id


# ----- wrapper kinds -----

@dataclass(frozen=True)
class OptionalKind:
    pass


@dataclass(frozen=True)
class NullableKind:
    pass


@dataclass(frozen=True)
class Default:
    value: Any


OPTIONAL = OptionalKind()
NULLABLE = NullableKind()


# ----- node variants -----

@dataclass(frozen=True)
class Primitive(SchemaNode):
    kind: str
    format: Optional[str] = None
    constraints: Optional[Constraints] = None
    meta: Metadata = EMPTY_META


@dataclass(frozen=True)
class Extension:
    """Records that an ObjectShape was produced by ``base.extend(added)``."""
    base: "ObjectShape"
    added: Mapping[str, SchemaNode]


@dataclass(frozen=True)
class ObjectShape(SchemaNode):
    fields: Mapping[str, SchemaNode] = field(default_factory=dict)
    derivation: Optional[Extension] = None
    meta: Metadata = EMPTY_META

    def extend(self, added: Optional[Mapping[str, SchemaNode]] = None, **kwargs) -> "ObjectShape":
        added = dict(added or {}, **kwargs)
        merged = dict(self.fields)
        merged.update(added)
        return ObjectShape(fields=merged, derivation=Extension(self, added))

    def pick(self, *keys: str) -> "ObjectShape":
        wanted = set(keys)
        return ObjectShape(fields={k: v for k, v in self.fields.items() if k in wanted})

    def omit(self, *keys: str) -> "ObjectShape":
        dropped = set(keys)
        return ObjectShape(fields={k: v for k, v in self.fields.items() if k not in dropped})


@dataclass(frozen=True)
class ArrayShape(SchemaNode):
    element: SchemaNode
    min_items: Optional[int] = None
    max_items: Optional[int] = None
    meta: Metadata = EMPTY_META


@dataclass(frozen=True)
class RecordShape(SchemaNode):
    value: SchemaNode
    meta: Metadata = EMPTY_META


@dataclass(frozen=True)
class UnionShape(SchemaNode):
    variants: Tuple[SchemaNode, ...]
    exclusive: bool = True
    meta: Metadata = EMPTY_META


@dataclass(frozen=True)
class IntersectionShape(SchemaNode):
    members: Tuple[SchemaNode, ...]
    meta: Metadata = EMPTY_META


@dataclass(frozen=True)
class EnumShape(SchemaNode):
    values: Tuple[Any, ...]
    meta: Metadata = EMPTY_META


@dataclass(frozen=True)
class Wrapper(SchemaNode):
    inner: SchemaNode
    kind: Any
    meta: Metadata = EMPTY_META


@dataclass(frozen=True)
class Reference(SchemaNode):
    target_id: str
    meta: Metadata = EMPTY_META


def is_optional(node: SchemaNode) -> bool:
    """True when the wrapper chain of ``node`` contains ``Optional``."""
    while isinstance(node, Wrapper):
        if isinstance(node.kind, OptionalKind):
            return True
        node = node.inner
    return False


# ----- builders -----

def _primitive(kind: str, format: Optional[str], constraints: Dict[str, Any]) -> Primitive:
    if constraints.get("enum") is not None:
        constraints["enum"] = tuple(constraints["enum"])
    return Primitive(kind, format=format, constraints=Constraints(**constraints) if constraints else None)


def string(format: Optional[str] = None, **constraints) -> Primitive:
    return _primitive("string", format, constraints)


def number(format: Optional[str] = None, **constraints) -> Primitive:
    return _primitive("number", format, constraints)


def integer(format: Optional[str] = None, **constraints) -> Primitive:
    return _primitive("integer", format, constraints)


def boolean() -> Primitive:
    return Primitive("boolean")


def any_() -> Primitive:
    return Primitive("any")


def obj(fields: Optional[Mapping[str, SchemaNode]] = None, **kwargs) -> ObjectShape:
    return ObjectShape(fields=dict(fields or {}, **kwargs))


def array(element: SchemaNode, min_items: Optional[int] = None, max_items: Optional[int] = None) -> ArrayShape:
    return ArrayShape(element, min_items=min_items, max_items=max_items)


def record(value: SchemaNode) -> RecordShape:
    return RecordShape(value)


def union(*variants: SchemaNode, exclusive: bool = True) -> UnionShape:
    return UnionShape(tuple(variants), exclusive=exclusive)


def intersection(*members: SchemaNode) -> IntersectionShape:
    return IntersectionShape(tuple(members))


def enum(values: Sequence[Any]) -> EnumShape:
    return EnumShape(tuple(values))


def literal(value: Any) -> EnumShape:
    return EnumShape((value,))


def ref(target_id: str) -> Reference:
    return Reference(target_id)
