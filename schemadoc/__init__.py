# schemadoc/__init__.py
"""
Generate OpenAPI documents from composable schema nodes.
"""

from .build import DocumentAssembler, build_spec, to_json
from .definitions import ApiDefinitions
from .errors import (
    DuplicateRefId,
    InvalidComposition,
    SchemaDocError,
    UnresolvableReference,
    UnsupportedNodeShape,
)
from .nodes import (
    any_,
    array,
    boolean,
    enum,
    integer,
    intersection,
    literal,
    number,
    obj,
    record,
    ref,
    string,
    union,
)
from .paths import ResponseDefinition, RouteDefinition
from .registry import MetadataRegistry
from .walker import Inline, Ref, SchemaWalker

__all__ = [
    "ApiDefinitions",
    "DocumentAssembler",
    "MetadataRegistry",
    "SchemaWalker",
    "Inline",
    "Ref",
    "RouteDefinition",
    "ResponseDefinition",
    "build_spec",
    "to_json",
    "SchemaDocError",
    "DuplicateRefId",
    "UnresolvableReference",
    "InvalidComposition",
    "UnsupportedNodeShape",
    "any_",
    "array",
    "boolean",
    "enum",
    "integer",
    "intersection",
    "literal",
    "number",
    "obj",
    "record",
    "ref",
    "string",
    "union",
]
