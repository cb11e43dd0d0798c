"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
service starts locally against a SQLite file without any setup.  On a
hosting platform set ``MONGO_URI`` (or ``DATABASE_URL``) and ``PORT``.
"""

import os
from dataclasses import dataclass, field
from typing import List

DEFAULT_CORS_ORIGINS = (
    "https://glamora-store.netlify.app,"
    "http://127.0.0.1:5500,"
    "http://localhost:5500"
)


def _split_origins(raw: str) -> List[str]:
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Glamora API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: str = os.getenv("LOG_FILE", "")

    # Connection string for the document store.  A ``mongodb://`` or
    # ``mongodb+srv://`` URL selects MongoDB; anything else is treated as
    # a SQLite file path, resolved relative to the project root when
    # not absolute.
    database_url: str = os.getenv("MONGO_URI") or os.getenv("DATABASE_URL", "glamora.db")

    # Database used when the Mongo URL does not name one.
    database_name: str = os.getenv("DATABASE_NAME", "glamora")

    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "10000"))

    # Exact origins allowed to call the API from a browser.  A single
    # ``*`` opens the API to every origin.
    cors_origins: List[str] = field(
        default_factory=lambda: _split_origins(os.getenv("CORS_ORIGINS", DEFAULT_CORS_ORIGINS))
    )

    # bcrypt cost factor.  Each increment doubles the hashing time.
    bcrypt_rounds: int = int(os.getenv("BCRYPT_ROUNDS", "10"))


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables
# should be set before importing this module.
settings = Settings()
