import logging
import os
from dataclasses import dataclass, field
from functools import lru_cache
from urllib.parse import urlsplit

import redis.asyncio as redis
from dotenv import load_dotenv

load_dotenv()

DEFAULT_ALLOWED_PATHS = ("/assets/", "/banner", "/fec-event", "/logo", "/organizations/")
DEFAULT_ALLOWED_PARAMS = ("w", "h", "q", "f")
DEFAULT_IMAGE_CONTENT_TYPES = (
    "image/jpeg",
    "image/png",
    "image/gif",
    "image/bmp",
    "image/webp",
    "image/avif",
    "image/tiff",
    "image/svg+xml",
)


def _env_list(name: str, default: tuple[str, ...]) -> tuple[str, ...]:
    raw = os.getenv(name)
    if raw is None:
        return default
    return tuple(item.strip() for item in raw.split(",") if item.strip())


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment variables."""

    # Upstream
    upstream_url: str = os.getenv("UPSTREAM_URL", "")
    upstream_timeout: float = float(os.getenv("UPSTREAM_TIMEOUT", "30.0"))

    # Redis
    redis_url: str = os.getenv("REDIS_URL", "redis://localhost:6379")
    redis_password: str | None = os.getenv("REDIS_PASSWORD")

    # Cache
    cache_prefix: str = os.getenv("CACHE_PREFIX", "cache/")
    allowed_paths: tuple[str, ...] = field(
        default_factory=lambda: _env_list("ALLOWED_PATHS", DEFAULT_ALLOWED_PATHS)
    )
    allowed_params: tuple[str, ...] = field(
        default_factory=lambda: _env_list("ALLOWED_PARAMS", DEFAULT_ALLOWED_PARAMS)
    )
    image_content_types: tuple[str, ...] = field(
        default_factory=lambda: _env_list("IMAGE_CONTENT_TYPES", DEFAULT_IMAGE_CONTENT_TYPES)
    )

    # API
    api_host: str = os.getenv("API_HOST", "0.0.0.0")
    api_port: int = int(os.getenv("API_PORT", "8000"))
    api_reload: bool = os.getenv("API_RELOAD", "false").lower() == "true"

    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    @property
    def upstream_host(self) -> str:
        """Host of the upstream origin as written in a URL, without scheme or port.

        IPv6 literals keep their brackets.
        """
        host = urlsplit(self.upstream_url).hostname or ""
        return f"[{host}]" if ":" in host else host

    def __post_init__(self) -> None:
        """Validate settings after initialization."""
        if self.upstream_url and not self.upstream_url.startswith(("http://", "https://")):
            raise ValueError(f"UPSTREAM_URL must be an http(s) URL, got {self.upstream_url!r}")

        if not self.allowed_paths:
            raise ValueError("ALLOWED_PATHS must contain at least one path prefix")

        if not self.image_content_types:
            raise ValueError("IMAGE_CONTENT_TYPES must contain at least one MIME type")

        if self.upstream_timeout <= 0:
            raise ValueError("UPSTREAM_TIMEOUT must be positive")

    def require_upstream(self) -> None:
        """Raise if no upstream origin is configured."""
        if not self.upstream_host:
            raise ValueError("UPSTREAM_URL must be set to the origin base URL")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def configure_logging(settings: Settings) -> None:
    """Configure root logging once for the process."""
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def get_redis_client(settings: Settings) -> redis.Redis:
    """Create an asyncio Redis client instance."""
    return redis.from_url(
        settings.redis_url,
        password=settings.redis_password,
        decode_responses=False,
    )
