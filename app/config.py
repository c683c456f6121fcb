from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Public site
    SITE_URL: str = "https://example.com"

    # Composition
    BANNER_INTERVAL: int = 2
    TEMPLATE_PATH: Optional[str] = None  # falls back to the bundled landing template
    DEFAULT_RELATED_IMAGE: str = "/img/about-01.jpg"

    # Pexels image search
    PEXELS_API_KEY: Optional[str] = None
    PEXELS_TIMEOUT: float = 10.0

    # API
    LOG_LEVEL: str = "INFO"
    ASSEMBLE_RATE_LIMIT: str = "10/minute"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


settings = Settings()


def logging_config(level: str) -> dict:
    """Return the ``dictConfig`` mapping: JSON lines on stderr at *level*.

    httpx logs every Pexels request at INFO; it is kept at WARNING.
    """
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "json": {
                "format": '{"time": "%(asctime)s", "level": "%(levelname)s", "logger": "%(name)s", "message": "%(message)s"}',
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "json",
            },
        },
        "loggers": {
            "httpx": {"level": "WARNING"},
        },
        "root": {"level": level.upper(), "handlers": ["console"]},
    }
