from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional


@dataclass
class Settings:
    """Centralized application settings.

    This keeps environment-variable handling in one place so other modules can
    depend on strongly-typed attributes instead of calling os.getenv
    directly.
    """

    # Locale tag written to every resource's ``language`` and to the
    # lang/xml:lang attributes of generated narratives.
    document_language: str = os.getenv("DOCUMENT_LANGUAGE", "en-IN")

    # IANA zone name used for document timestamps (e.g. "Asia/Kolkata").
    # When unset, the host's local zone is used.
    document_timezone: Optional[str] = os.getenv("DOCUMENT_TIMEZONE") or None

    # Optional JSON file holding the practitioner roster (a list of objects
    # with id, name, qualification, phone, email, registration). When unset,
    # the built-in roster is used.
    practitioner_roster_path: Optional[Path] = (
        Path(os.getenv("PRACTITIONER_ROSTER_PATH")) if os.getenv("PRACTITIONER_ROSTER_PATH") else None
    )

    # Request size limit for attached documents (in bytes).
    max_upload_bytes: int = int(os.getenv("MAX_UPLOAD_BYTES", str(10 * 1024 * 1024)))

    # Basic API authentication configuration.
    # When ENABLE_API_AUTH=true, protected endpoints require a valid API key.
    enable_api_auth: bool = os.getenv("ENABLE_API_AUTH", "false").lower() == "true"
    # Comma-separated list of allowed API keys when auth is enabled.
    api_keys: Optional[str] = os.getenv("API_KEYS")

    # CORS configuration: comma-separated origins (e.g. "https://app.example.com,https://admin.example.com").
    # Default is "*" (allow all) which is acceptable for local development but
    # should be tightened in production.
    cors_allow_origins: str = os.getenv("CORS_ALLOW_ORIGINS", "*")


settings = Settings()
