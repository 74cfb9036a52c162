# Role: Central configuration module. Loads .env into environment variables, computes runtime flags (DEBUG),
# configures logging, and resolves the Gemini credential. Importers read savage_dev.config.DEBUG.

from __future__ import annotations

import logging
import os
from typing import Optional

from dotenv import load_dotenv

DEBUG: bool = False

# Primary credential variable, then the documented fallback name.
API_KEY_ENV_VARS = ("GEMINI_API_KEY", "API_KEY")

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


class MissingApiKeyError(RuntimeError):
    """Raised when no Gemini API key is configured."""


def load_env() -> None:
    """
    Load .env into os.environ, then recompute DEBUG and the log level.
    This makes DEBUG correct even if load_env() is called after import.
    """
    global DEBUG
    load_dotenv()
    # Key line: accept common truthy values.
    DEBUG = os.getenv("DEBUG", "0").lower() in {"1", "true", "yes"}
    logging.basicConfig(level=logging.DEBUG if DEBUG else logging.INFO, format=LOG_FORMAT)
    logging.getLogger("savage_dev").setLevel(logging.DEBUG if DEBUG else logging.INFO)


def get_api_key() -> Optional[str]:
    for name in API_KEY_ENV_VARS:
        value = (os.getenv(name) or "").strip()
        if value:
            return value
    return None


def require_api_key() -> str:
    api_key = get_api_key()
    if not api_key:
        raise MissingApiKeyError(
            f"Missing Gemini API key: set {' or '.join(API_KEY_ENV_VARS)} in environment or .env"
        )
    return api_key
