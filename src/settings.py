"""Static configuration for exportdiff.

All user-editable settings (storage, sync, logging) live in a single JSON
file for quick edits without touching Python.
"""

import json
import os

from dotenv import load_dotenv

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))

# A local .env may point EXPORTDIFF_CONFIG at another config file.
load_dotenv()
CONFIG_PATH = os.getenv("EXPORTDIFF_CONFIG") or os.path.join(PROJECT_ROOT, "config.json")


def _load_json_config() -> dict:
    """Load config.json with a flat, user-friendly schema."""

    if not os.path.exists(CONFIG_PATH):
        raise FileNotFoundError(f"Config file not found: {CONFIG_PATH}")

    with open(CONFIG_PATH, "r", encoding="utf-8") as handle:
        return json.load(handle)


def _resolve_path(path: str) -> str:
    if os.path.isabs(path):
        return path
    return os.path.join(PROJECT_ROOT, path)


_CONFIG = _load_json_config()

# Expose the raw config for modules that need structured access.
CONFIG = _CONFIG

# Where to store the SQLite key-value database holding groups and checkpoints.
_storage = _CONFIG.get("storage", {})
DB_PATH = _resolve_path(_storage.get("db_path", "exportdiff.db"))

# Length of the last-synced message preview stored on a group.
_sync = _CONFIG.get("sync", {})
PREVIEW_CHARS = int(_sync.get("preview_chars", 80))

# Logging configuration (optional).
LOGGING = _CONFIG.get("logging", {})
