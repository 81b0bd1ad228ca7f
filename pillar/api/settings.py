"""Service configuration loaded from PILLAR_* environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class PillarSettings(BaseSettings):
    """Pillar server settings.

    All fields are read from environment variables with the ``PILLAR_`` prefix.
    For example, ``PILLAR_CLOUD_URL=http://provisioner:8075`` maps to ``cloud_url``.
    """

    model_config = SettingsConfigDict(
        env_prefix="PILLAR_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # -- Logging ---------------------------------------------------------------
    log_level: str = "INFO"

    # -- Provisioner -----------------------------------------------------------
    cloud_url: str | None = None
    """Endpoint of the cloud provisioning server (scheme and port included)."""

    cloud_timeout: float = 60.0
    """Seconds before any single provisioning server call is abandoned."""

    # -- Server ----------------------------------------------------------------
    host: str = "0.0.0.0"  # noqa: S104
    port: int = 8078
    dev: bool = False
    graceful_shutdown_timeout: int = 15

    # -- Helpers ---------------------------------------------------------------

    def effective_log_level(self) -> str:
        """Dev mode always logs at DEBUG."""
        return "DEBUG" if self.dev else self.log_level


def get_settings() -> PillarSettings:
    """Return a cached settings instance.

    Reads from environment variables and ``.env`` on first call, then returns
    the same object.  Call ``_get_settings_cached.cache_clear()`` in tests to force a
    re-read after overriding env vars.
    """
    return _get_settings_cached()


def _get_settings_cached() -> PillarSettings:
    """Inner function wrapped by lru_cache (allows type-safe cache_clear)."""
    return PillarSettings()


# Apply lru_cache at runtime so the function is only called once.
from functools import lru_cache  # noqa: E402

_get_settings_cached = lru_cache(maxsize=1)(_get_settings_cached)
