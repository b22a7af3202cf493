"""
boards-client shared configuration and constants.
Standalone module: no imports from other project files.
"""

import os

# ---------------------------------------------------------------------------
# .env path and helpers
# ---------------------------------------------------------------------------

_PACKAGE_DIR = os.path.dirname(os.path.abspath(__file__))
_PROJECT_ROOT = os.path.dirname(_PACKAGE_DIR)

ENV_PATH = os.path.join(_PROJECT_ROOT, ".env")

_ENV_KEYS = (
    "BOARDS_URL",
    "BOARDS_TOKEN",
    "BOARDS_HTTP_TIMEOUT_SECONDS",
    "BOARDS_HTTP_MAX_RESPONSE_BYTES",
    "BOARDS_HTTP_LOG",
    "BOARDS_HTTP_LOG_SAMPLE_RATE",
    "BOARDS_MCP_RESPONSE_MODE",
)


def load_env():
    """Read KEY=value pairs from .env, falling back to os.environ for known keys."""
    env = {}
    if os.path.exists(ENV_PATH):
        with open(ENV_PATH) as f:
            for line in f:
                line = line.strip()
                if line and not line.startswith("#") and "=" in line:
                    key, val = line.split("=", 1)
                    env[key.strip()] = val.strip()
    for key in _ENV_KEYS:
        if key not in env and os.environ.get(key):
            env[key] = os.environ[key]
    return env


def _env_bool(key, default=False):
    """Parse common boolean env formats."""
    raw = env.get(key)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(key, default):
    """Parse integer env values with fallback."""
    raw = env.get(key)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(key, default):
    """Parse float env values with fallback."""
    raw = env.get(key)
    if raw is None or raw == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

VERSION = "0.1.0"

API_URL_SUFFIX = "/api/v2"
DEFAULT_HEADERS = {"X-Requested-With": "XMLHttpRequest"}
USER_AGENT = f"boards-client/{VERSION}"

CONTRACT_SCHEMA_VERSION = "1.0"
VALID_MCP_RESPONSE_MODES = {"legacy", "envelope"}

# ---------------------------------------------------------------------------
# Module-level state (loaded from .env)
# ---------------------------------------------------------------------------

env = load_env()

BOARDS_URL = env.get("BOARDS_URL", "")
BOARDS_TOKEN = env.get("BOARDS_TOKEN", "")
HTTP_TIMEOUT_SECONDS = _env_int("BOARDS_HTTP_TIMEOUT_SECONDS", 30)
HTTP_MAX_RESPONSE_BYTES = _env_int("BOARDS_HTTP_MAX_RESPONSE_BYTES", 5_000_000)
HTTP_LOG_ENABLED = _env_bool("BOARDS_HTTP_LOG", False)
HTTP_LOG_SAMPLE_RATE = min(1.0, max(0.0, _env_float("BOARDS_HTTP_LOG_SAMPLE_RATE", 1.0)))

MCP_RESPONSE_MODE = env.get("BOARDS_MCP_RESPONSE_MODE", "legacy").strip().lower()
if MCP_RESPONSE_MODE not in VALID_MCP_RESPONSE_MODES:
    MCP_RESPONSE_MODE = "legacy"
