from pathlib import Path
import logging

from croniter import croniter
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


logger = logging.getLogger(__name__)


class CustomSettings(BaseSettings):
    """Application settings loaded from environment variables.

    Validates configuration at startup to catch misconfiguration early.
    """

    iptv_source_url: str = "https://iptv-org.github.io/iptv/countries/cn.m3u"
    cache_dir: str = "./data/cache"
    cache_time_sec: int = 3600
    simplify: bool = False

    http_timeout_sec: float = 30.0
    http_user_agent: str = "iptv-catalog/0.1.0"

    refresh_enabled: bool = True
    refresh_cron: str = "0 */6 * * *"  # Every 6 hours
    refresh_misfire_grace_sec: int = 600

    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("iptv_source_url")
    @classmethod
    def validate_source_url(cls, value: str) -> str:
        """Validate the IPTV source URL is HTTP/HTTPS."""
        value = value.strip()
        if not value.lower().startswith(("http://", "https://")):
            raise ValueError(f"IPTV source URL must be HTTP/HTTPS: {value}")
        return value

    @field_validator("cache_dir")
    @classmethod
    def validate_cache_dir(cls, value: str) -> str:
        """Validate cache directory is accessible."""
        path = Path(value)
        try:
            path.mkdir(parents=True, exist_ok=True)
            return value
        except (OSError, PermissionError) as exc:
            raise ValueError(f"Cannot access cache directory '{value}': {exc}") from exc

    @field_validator("cache_time_sec", "refresh_misfire_grace_sec")
    @classmethod
    def validate_non_negative(cls, value: int, info) -> int:
        """Ensure durations are non-negative."""
        if value < 0:
            raise ValueError(f"{info.field_name} must be >= 0")
        return value

    @field_validator("http_timeout_sec")
    @classmethod
    def validate_timeout(cls, value: float) -> float:
        """Validate HTTP timeout (seconds)."""
        if value <= 0:
            raise ValueError("http_timeout_sec must be > 0")
        return value

    @field_validator("refresh_cron")
    @classmethod
    def validate_cron_expression(cls, value: str) -> str:
        """Validate cron expression is valid."""
        try:
            croniter(value)
            return value
        except (ValueError, KeyError) as exc:
            raise ValueError(f"Invalid cron expression '{value}': {exc}") from exc

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Validate logging level name."""
        normalized = value.upper()
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if normalized not in allowed:
            raise ValueError(f"log_level must be one of {sorted(allowed)}")
        return normalized

    def __init__(self, **data):
        """Initialize settings and log configuration."""
        super().__init__(**data)

        logger.info("Configuration loaded:")
        logger.info("  IPTV Source: %s", self.iptv_source_url)
        logger.info("  Cache Directory: %s", self.cache_dir)
        logger.info("  Cache Time: %ss", self.cache_time_sec)
        logger.info("  Simplify: %s", self.simplify)
        logger.info("  HTTP Timeout: %ss", self.http_timeout_sec)
        logger.info(
            "  Refresh Schedule: %s",
            self.refresh_cron if self.refresh_enabled else "disabled",
        )
        logger.info("  Refresh Misfire Grace: %ss", self.refresh_misfire_grace_sec)


settings = CustomSettings()


def setup_logging() -> None:
    """Configure application logging."""
    logging.basicConfig(
        level=getattr(logging, settings.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
