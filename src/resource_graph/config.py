"""Runtime defaults, overridable through the environment."""

import os

DEFAULT_TIMEOUT = float(os.getenv("RESOURCE_GRAPH_TIMEOUT", "30"))

DEFAULT_DOCUMENT_SUFFIXES = tuple(
    s.strip()
    for s in os.getenv(
        "RESOURCE_GRAPH_DOCUMENT_SUFFIXES",
        "swagger.json,swagger.yaml,swagger.yml,api-docs",
    ).split(",")
    if s.strip()
)
