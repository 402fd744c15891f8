"""Application settings loaded from environment variables via pydantic-settings.

# ─── HOW SETTINGS WORK ────────────────────────────────────────────────
#
# Values come from two sources, in priority order:
#
#   1. **Environment variables** - e.g. DATASET_PATH=/data/bands.json
#   2. **.env file** - key=value lines in the project root .env file
#
# Field ``dataset_path`` maps to env var ``DATASET_PATH`` (pydantic-settings
# uppercases and matches).  Defaults below apply when neither is set.
# ──────────────────────────────────────────────────────────────────────
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """bandje application settings.

    Environment variables override defaults. Loaded from .env file when present.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # === Dataset ===
    dataset_path: str = "bands.json"

    # === Sampling ===
    # Closed range for /api/random-bands?count=...; the default count is 1.
    sample_min_count: int = 1
    sample_max_count: int = 5

    # === HTTP ===
    cors_allowed_origins: list[str] = ["*"]

    # === App Config ===
    app_host: str = "0.0.0.0"
    app_port: int = 3000
    app_env: str = "development"
    log_level: str = "INFO"
