# src/breakeven_report/config.py
from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


def _env_list(name: str, default: str) -> tuple[str, ...]:
    raw = os.getenv(name, default)
    return tuple(p.strip() for p in raw.split(",") if p.strip())


@dataclass(frozen=True)
class Settings:
    # HTTP server
    HOST: str = os.getenv("REPORT_HOST", "127.0.0.1")
    PORT: int = int(os.getenv("REPORT_PORT", "3000"))
    LOG_LEVEL: str = os.getenv("REPORT_LOG_LEVEL", "INFO")
    CORS_ALLOW_ORIGINS: tuple[str, ...] = _env_list("CORS_ALLOW_ORIGINS", "*")

    # Chrome / Selenium
    HEADLESS: bool = _env_bool("CHROME_HEADLESS", "1")
    CHROME_DRIVER_PATH: str | None = os.getenv("CHROME_DRIVER_PATH") or None
    CHROME_BINARY: str | None = os.getenv("CHROME_BINARY") or None
    BROWSER_POOL_SIZE: int = int(os.getenv("BROWSER_POOL_SIZE", "2"))
    BROWSER_PREWARM: bool = _env_bool("BROWSER_PREWARM", "1")
    RENDER_TIMEOUT: float = float(os.getenv("RENDER_TIMEOUT", "5"))

    # Report content
    REPORT_TITLE: str = os.getenv("REPORT_TITLE", "Demo Company - Breakeven")


settings = Settings()


def configure_logging(level: str | int | None = None) -> None:
    if level is None:
        level = settings.LOG_LEVEL
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    logging.basicConfig(level=level, format="%(asctime)s [%(levelname)s] %(message)s")
