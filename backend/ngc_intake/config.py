"""Centralized runtime configuration.

Loads environment variables (from ``.env`` when present) at import time.
Every other module reads settings from here instead of calling ``os.getenv``.
"""

from __future__ import annotations

import os

from dotenv import load_dotenv

load_dotenv()

DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./ngc_intake.db")

# Comma-separated list of allowed origins for the marketing site front end
CORS_ORIGINS: list[str] = [
    origin.strip()
    for origin in os.getenv(
        "CORS_ORIGINS",
        "http://localhost:3000,http://127.0.0.1:3000,http://localhost:3001",
    ).split(",")
    if origin.strip()
]

DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

DEFAULT_LOCALE: str = os.getenv("DEFAULT_LOCALE", "en")

WIZARD_SESSION_TTL_MINUTES: int = int(os.getenv("WIZARD_SESSION_TTL_MINUTES", "30"))

# Used by HttpConsultationCreator when the wizard runs outside this process
INTAKE_API_URL: str = os.getenv("INTAKE_API_URL", "http://127.0.0.1:8000")
INTAKE_HTTP_TIMEOUT: float = float(os.getenv("INTAKE_HTTP_TIMEOUT", "10.0"))

HOST: str = os.getenv("HOST", "127.0.0.1")
PORT: int = int(os.getenv("PORT", "8000"))
