# ==================================================
# schemadoc/composition.py: schemas produced by extend()
# ==================================================
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Dict, Tuple

from .errors import InvalidComposition
from .nodes import Extension, ObjectShape

if TYPE_CHECKING:  # pragma: no cover
    from .walker import SchemaWalker

logger = logging.getLogger(__name__)


class CompositionResolver:
    """
    Decides how an extend-derived object is rendered.

    - Named base: ``allOf: [$ref base, delta]`` where the delta holds only the
      added or overridden fields, and ``required`` is computed over the delta.
    - Anonymous base: one flat object with the merged fields.

    ``nullable`` always lands on the schema introduced here (the delta or the
    flat object), never on the referenced base.
    """

    def __init__(self, walker: "SchemaWalker") -> None:
        self.walker = walker

    def compose_extension(
        self,
        node: ObjectShape,
        relation: Extension,
        path: Tuple[Any, ...],
        nullable: bool = False,
    ) -> Dict[str, Any]:
        self._check(node, relation, path)
        base = relation.base

        if base.meta.ref_id is None:
            logger.debug("anonymous base at %s; merging %d fields", _fmt(path), len(node.fields))
            return self.walker.object_schema(node.fields, path, nullable)

        base_ref = self.walker.child(base, path + ("allOf", 0))
        delta = self.walker.object_schema(relation.added, path + ("allOf", 1), nullable)
        schema: Dict[str, Any] = {"allOf": [base_ref, delta]}
        if base.meta.discriminator is not None:
            schema["discriminator"] = {"propertyName": base.meta.discriminator.property_name}
        logger.debug(
            "composed %s from %s + %s", _fmt(path), base.meta.ref_id, list(relation.added)
        )
        return schema

    @staticmethod
    def _check(node: ObjectShape, relation: Extension, path) -> None:
        ref_id = node.meta.ref_id or (path[0] if path else None)
        if not isinstance(relation.base, ObjectShape):
            raise InvalidComposition(
                f"extend() base must be an object shape, got {type(relation.base).__name__}",
                ref_id=ref_id,
                path=path,
            )
        for name, added in relation.added.items():
            if node.fields.get(name) is not added:
                raise InvalidComposition(
                    f"extension field {name!r} does not match the derived object's fields",
                    ref_id=ref_id,
                    path=path,
                    hint="Build derived objects with ObjectShape.extend().",
                )
        expected = set(relation.base.fields) | set(relation.added)
        if set(node.fields) != expected:
            raise InvalidComposition(
                "derived object fields differ from base fields plus extension",
                ref_id=ref_id,
                path=path,
            )


def _fmt(path) -> str:
    return "/".join(str(p) for p in path) or "<root>"
