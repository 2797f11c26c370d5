# ==============================================
# schemadoc/base.py: document skeleton
# ==============================================
from __future__ import annotations

from copy import deepcopy
from typing import Any, Dict, Mapping, Optional

from . import config

RESERVED_KEYS = ("components", "paths")


def base(
    title: Optional[str] = None,
    version: Optional[str] = None,
    description: Optional[str] = None,
    server_url: Optional[str] = None,
) -> Dict[str, Any]:
    info: Dict[str, Any] = {
        "title": title or config.API_TITLE,
        "version": version or config.API_VERSION,
    }
    description = description or config.API_DESCRIPTION
    if description:
        info["description"] = description

    doc: Dict[str, Any] = {"openapi": config.OPENAPI_VERSION, "info": info}
    server_url = server_url or config.SERVER_URL
    if server_url:
        doc["servers"] = [{"url": server_url}]
    return doc


def deep_base(metadata: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
    """Fresh skeleton with caller metadata merged over the configured defaults.

    ``info`` is merged key by key; any other key replaces the default.
    ``components`` and ``paths`` are owned by the assembler and ignored here.
    """
    doc = base()
    for key, value in (metadata or {}).items():
        if key in RESERVED_KEYS:
            continue
        if key == "info" and isinstance(value, Mapping):
            doc["info"].update(deepcopy(dict(value)))
        else:
            doc[key] = deepcopy(value)
    return doc
