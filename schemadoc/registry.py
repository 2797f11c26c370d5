# ==================================================
# schemadoc/registry.py: per-run refId → schema map
# ==================================================
from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Optional, Tuple

from .errors import DuplicateRefId
from .nodes import SchemaNode

logger = logging.getLogger(__name__)


@dataclass
class RegistryEntry:
    schema: Dict[str, Any]
    node: SchemaNode


def _same_node(a: SchemaNode, b: SchemaNode) -> bool:
    return a is b or a == b


class MetadataRegistry:
    """
    Holds one resolved schema per refId for a single generation run.

    Entries keep first-registration order; that order is the order of
    ``components.schemas`` in the assembled document. Create a new instance
    per run, never share one between documents.
    """

    def __init__(self) -> None:
        self._entries: Dict[str, RegistryEntry] = {}
        self._seen: Dict[int, str] = {}
        self._referenced: Dict[str, Tuple[Any, ...]] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, ref_id: str) -> bool:
        return ref_id in self._entries

    def __iter__(self) -> Iterator[Tuple[str, RegistryEntry]]:
        return iter(list(self._entries.items()))

    def register(self, ref_id: str, node: SchemaNode, schema: Dict[str, Any]) -> RegistryEntry:
        existing = self._entries.get(ref_id)
        if existing is not None:
            if not _same_node(existing.node, node):
                raise DuplicateRefId(
                    f"refId {ref_id!r} is already used by a different schema",
                    ref_id=ref_id,
                    hint="Give each distinct schema its own refId.",
                )
            self._seen[id(node)] = ref_id
            logger.debug("refId %s re-registered by the same node; keeping first entry", ref_id)
            return existing

        entry = RegistryEntry(schema=schema, node=node)
        self._entries[ref_id] = entry
        self._seen[id(node)] = ref_id
        logger.debug("registered %s (%d total)", ref_id, len(self._entries))
        return entry

    def lookup(self, ref_id: str) -> Optional[Dict[str, Any]]:
        entry = self._entries.get(ref_id)
        return entry.schema if entry else None

    def has_seen(self, node: SchemaNode) -> Optional[str]:
        ref_id = self._seen.get(id(node))
        if ref_id is not None and self._entries[ref_id].node is node:
            return ref_id
        ref_id = node.meta.ref_id
        if ref_id and ref_id in self._entries and _same_node(self._entries[ref_id].node, node):
            return ref_id
        return None

    def check_available(self, ref_id: str, node: SchemaNode) -> None:
        """Fail early when ``ref_id`` is bound to another node."""
        existing = self._entries.get(ref_id)
        if existing is not None and not _same_node(existing.node, node):
            raise DuplicateRefId(
                f"refId {ref_id!r} is already used by a different schema",
                ref_id=ref_id,
                hint="Give each distinct schema its own refId.",
            )

    def note_reference(self, ref_id: str, path: Tuple[Any, ...] = ()) -> None:
        self._referenced.setdefault(ref_id, tuple(path))

    def dangling(self) -> List[Tuple[str, Tuple[Any, ...]]]:
        """Cross-references whose target was never registered."""
        return [(r, p) for r, p in self._referenced.items() if r not in self._entries]

    @contextmanager
    def transaction(self):
        """Roll back every entry registered inside the block if it raises."""
        entries_before = list(self._entries)
        seen_before = dict(self._seen)
        referenced_before = dict(self._referenced)
        try:
            yield self
        except Exception:
            for ref_id in list(self._entries):
                if ref_id not in entries_before:
                    del self._entries[ref_id]
            self._seen = seen_before
            self._referenced = referenced_before
            raise
