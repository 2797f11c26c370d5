# schemadoc/config.py: environment-driven defaults

import os

# --- Document defaults ---
# Overridable per build via the ``metadata`` argument.
OPENAPI_VERSION = os.getenv("SCHEMADOC_OPENAPI_VERSION", "3.0.0")
API_TITLE = os.getenv("SCHEMADOC_TITLE", "API")
API_VERSION = os.getenv("SCHEMADOC_API_VERSION", "1.0.0")
API_DESCRIPTION = os.getenv("SCHEMADOC_DESCRIPTION")
SERVER_URL = os.getenv("SCHEMADOC_SERVER_URL")

# --- Runtime ---
LOG_LEVEL = os.getenv("SCHEMADOC_LOG_LEVEL", "INFO").upper()
DEBUG = os.getenv("SCHEMADOC_DEBUG", "false").lower() == "true"
