"""Public API surface for the HTTP server and the CLI."""

from __future__ import annotations

from .registry import REGISTRY, ApiFunction, call_api, get_api_functions, register_api
from .state import api_state

# Import endpoints so decorators run at module import time.
from . import endpoints, meta  # noqa: F401

__all__ = ["REGISTRY", "ApiFunction", "api_state", "call_api", "get_api_functions", "register_api"]
