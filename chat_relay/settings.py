"""Runtime configuration, read from the environment."""
from __future__ import annotations

import os
from typing import List, Mapping, Optional

from .constants import DEFAULT_HOST, DEFAULT_PORT, DEFAULT_STATIC_DIR, DEV_CORS_ORIGINS


class Settings:
    """Server settings with development-friendly defaults."""

    def __init__(
        self,
        host: str = DEFAULT_HOST,
        port: int = DEFAULT_PORT,
        environment: str = "development",
        cors_origins: Optional[List[str]] = None,
        static_dir: Optional[str] = DEFAULT_STATIC_DIR,
        log_level: str = "INFO",
    ):
        self.host = host
        self.port = port
        self.environment = environment
        # Production serves the client from the same origin, so no CORS by default.
        if cors_origins is None:
            cors_origins = [] if self.is_production else list(DEV_CORS_ORIGINS)
        self.cors_origins = cors_origins
        self.static_dir = static_dir or None
        self.log_level = log_level.upper()

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] = os.environ) -> "Settings":
        """Build settings from ``CHAT_RELAY_*`` variables (and ``PORT``)."""
        raw_port = environ.get("PORT", str(DEFAULT_PORT))
        try:
            port = int(raw_port)
        except ValueError:
            raise ValueError(f"PORT must be an integer, got {raw_port!r}") from None
        if not 0 < port < 65536:
            raise ValueError(f"PORT out of range: {port}")

        origins: Optional[List[str]] = None
        raw_origins = environ.get("CHAT_RELAY_CORS_ORIGINS")
        if raw_origins is not None:
            origins = [o.strip() for o in raw_origins.split(",") if o.strip()]

        return cls(
            host=environ.get("CHAT_RELAY_HOST", DEFAULT_HOST),
            port=port,
            environment=environ.get("CHAT_RELAY_ENV", "development").lower(),
            cors_origins=origins,
            static_dir=environ.get("CHAT_RELAY_STATIC_DIR", DEFAULT_STATIC_DIR),
            log_level=environ.get("CHAT_RELAY_LOG_LEVEL", "INFO"),
        )


__all__ = ["Settings"]
