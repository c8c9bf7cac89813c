# -*- coding: utf-8 -*-
"""Runtime settings read from the environment.

Only the service shell and logging read these; the analytics transforms take
everything they need as arguments.
"""
import os


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


LOG_LEVEL = os.getenv("ANALYTICS_LOG_LEVEL", "INFO")
LOG_JSON = _env_flag("ANALYTICS_LOG_JSON")

# Service bind address - configurable via environment variable
SERVICE_HOST = os.getenv("ANALYTICS_SERVICE_HOST", "0.0.0.0")
SERVICE_PORT = int(os.getenv("ANALYTICS_SERVICE_PORT", "8004"))
