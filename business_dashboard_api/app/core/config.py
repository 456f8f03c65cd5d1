"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
service starts without any configuration, in which case records are
kept in an in‑process store (see ``core.record_store``).
"""

import os
from dataclasses import dataclass


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Business Dashboard API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    debug: bool = os.getenv("DEBUG", "false").lower() in {"1", "true", "yes"}
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: str = os.getenv("LOG_FILE", "")

    # Base URL of the hosted record store.  When empty, the in‑memory
    # record store is used instead, which is only suitable for local
    # development and tests.
    record_store_url: str = os.getenv("RECORD_STORE_URL", "")

    # Credentials identifying this application to the record store.
    # They are sent as headers on every request.
    record_store_project_id: str = os.getenv("RECORD_STORE_PROJECT_ID", "")
    record_store_public_key: str = os.getenv("RECORD_STORE_PUBLIC_KEY", "")

    # Per‑request timeout in seconds.  There are no retries; a request
    # that times out fails the calling operation.
    record_store_timeout: float = float(os.getenv("RECORD_STORE_TIMEOUT", "15"))


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables
# should be set before importing this module.
settings = Settings()
