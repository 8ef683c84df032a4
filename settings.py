# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-12
# Updated: 2026-10-18
# Description: settings.py
# -----------------------------------------------------------------------------
import os


def _env(name: str, default: str = "") -> str:
    """Read env var safely and strip whitespace."""
    return (os.getenv(name) or default).strip()


def _env_int(name: str, default: int) -> int:
    v = _env(name, "")
    if v == "":
        return default
    try:
        return int(v)
    except ValueError as e:
        raise RuntimeError(f"Env var {name} must be an int, got {v!r}") from e


def _env_float(name: str, default: float) -> float:
    v = _env(name, "")
    if v == "":
        return default
    try:
        return float(v)
    except ValueError as e:
        raise RuntimeError(f"Env var {name} must be a float, got {v!r}") from e


def _env_bool(name: str, default: bool) -> bool:
    v = _env(name, "")
    if v == "":
        return default
    v = v.lower()
    if v in ("1", "true", "t", "yes", "y", "on"):
        return True
    if v in ("0", "false", "f", "no", "n", "off"):
        return False
    raise RuntimeError(f"Env var {name} must be a boolean, got {v!r}")


# -----------------------------------------------------------------------------
# Tenant
# -----------------------------------------------------------------------------
DEFAULT_ACCOUNT_ID = _env("RETAIL_ACCOUNT_ID", "main-retail-index")


# -----------------------------------------------------------------------------
# Search index
# -----------------------------------------------------------------------------
EMBEDDING_DIMENSIONS = _env_int("RETAIL_EMBEDDING_DIMENSIONS", 1536)

# Hybrid search (keyword + embedding)
VECTOR_SIMILARITY = _env_float("RETAIL_VECTOR_SIMILARITY", 0.8)
VECTOR_SEARCH_LIMIT = _env_int("RETAIL_VECTOR_SEARCH_LIMIT", 10)

# Scan caps: hits pulled from the index before in-memory filtering/aggregation.
# Aggregations only see this many documents.
PRODUCT_SEARCH_LIMIT = _env_int("RETAIL_PRODUCT_SEARCH_LIMIT", 500)
TOP_SELLING_SCAN_LIMIT = _env_int("RETAIL_TOP_SELLING_SCAN_LIMIT", 200)
STATISTICS_SCAN_LIMIT = _env_int("RETAIL_STATISTICS_SCAN_LIMIT", 10_000)


# -----------------------------------------------------------------------------
# Chat
# -----------------------------------------------------------------------------
CHAT_TEMPERATURE = _env_float("RETAIL_CHAT_TEMPERATURE", 0.0)
CHAT_MAX_TOKENS = _env_int("RETAIL_CHAT_MAX_TOKENS", 1024)


# -----------------------------------------------------------------------------
# Seeding
# -----------------------------------------------------------------------------
SEED_ROW_LIMIT = _env_int("RETAIL_SEED_ROW_LIMIT", 200)
SEED_EMBED_BATCH_SIZE = _env_int("RETAIL_SEED_EMBED_BATCH_SIZE", 64)


# -----------------------------------------------------------------------------
# Logging
# -----------------------------------------------------------------------------
LOG_NAMESPACE = _env("RETAIL_LOG_NAMESPACE", "retail_chat")
LOG_LEVEL = _env("RETAIL_LOG_LEVEL", "INFO").upper()

# Rotating file, tailed by the UI logs tab
LOG_TO_FILE = _env_bool("RETAIL_LOG_TO_FILE", True)
LOG_FILE = _env("RETAIL_LOG_FILE", "./logs/retail_chat.log")
LOG_MAX_BYTES = _env_int("RETAIL_LOG_MAX_BYTES", 5 * 1024 * 1024)
LOG_BACKUP_COUNT = _env_int("RETAIL_LOG_BACKUP_COUNT", 5)


# -----------------------------------------------------------------------------
# UI
# -----------------------------------------------------------------------------
MOUNT_UI = _env_bool("RETAIL_MOUNT_UI", True)
API_BASE_URL = _env("RETAIL_API_BASE_URL", "http://127.0.0.1:8000")
UI_LOG_TAIL_LINES = _env_int("RETAIL_UI_LOG_TAIL_LINES", 400)
UI_TIMEOUT_SECONDS = _env_int("RETAIL_UI_TIMEOUT_SECONDS", 60)


# -----------------------------------------------------------------------------
# Sanity checks
# -----------------------------------------------------------------------------
if not LOG_NAMESPACE:
    raise RuntimeError("LOG_NAMESPACE resolved to empty value")

if not DEFAULT_ACCOUNT_ID:
    raise RuntimeError("DEFAULT_ACCOUNT_ID resolved to empty value")

if EMBEDDING_DIMENSIONS <= 0:
    raise RuntimeError("EMBEDDING_DIMENSIONS must be positive")

if not 0.0 <= VECTOR_SIMILARITY <= 1.0:
    raise RuntimeError("VECTOR_SIMILARITY must be between 0 and 1")
