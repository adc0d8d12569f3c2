# src/breakeven_report/browser.py
"""
Long-lived headless Chrome for page rendering.

- One ``BrowserPool`` per process, created and closed by the owner (API lifespan, CLI)
- Selenium drivers are not thread-safe: each render borrows a driver exclusively
- At most ``BROWSER_POOL_SIZE`` drivers exist; idle ones are reused across requests
- A driver whose session died is discarded and relaunched on next use
"""
from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from typing import Callable, Iterator, List

from selenium import webdriver
from selenium.common.exceptions import WebDriverException
from selenium.webdriver.chrome.options import Options
from selenium.webdriver.chrome.service import Service
from webdriver_manager.chrome import ChromeDriverManager

from .config import Settings, settings as default_settings
from .errors import BrowserUnavailableError

LOGGER = logging.getLogger(__name__)

DriverFactory = Callable[[], webdriver.Chrome]

_SESSION_LOST_MARKERS = ("invalid session id", "disconnected", "chrome not reachable", "no such window")


# -------------------- driver construction --------------------
def chrome_options(cfg: Settings) -> Options:
    opts = Options()
    if cfg.HEADLESS:
        opts.add_argument("--headless=new")
    opts.add_argument("--no-sandbox")
    opts.add_argument("--disable-setuid-sandbox")
    opts.add_argument("--disable-dev-shm-usage")
    opts.add_argument("--disable-gpu")
    opts.add_argument("--window-size=1280,2000")
    opts.add_experimental_option("excludeSwitches", ["enable-automation"])
    if cfg.CHROME_BINARY:
        opts.binary_location = cfg.CHROME_BINARY
    # page console output, forwarded to our log after each render
    opts.set_capability("goog:loggingPrefs", {"browser": "ALL"})
    return opts


def new_driver(driver_path: str, cfg: Settings) -> webdriver.Chrome:
    return webdriver.Chrome(service=Service(driver_path), options=chrome_options(cfg))


def session_lost(exc: BaseException) -> bool:
    msg = str(exc).lower()
    return any(marker in msg for marker in _SESSION_LOST_MARKERS)


def is_alive(driver) -> bool:
    if getattr(driver, "session_id", None) is None:
        return False
    try:
        driver.current_url
    except WebDriverException:
        return False
    return True


def _quit(driver) -> None:
    try:
        driver.quit()
    except WebDriverException as exc:
        LOGGER.debug("Ignoring error while quitting Chrome: %s", exc)


# -------------------- pool --------------------
class BrowserPool:
    """Bounded set of reusable Chrome drivers.

    Use ``with pool.driver() as drv:`` to borrow one. ``close()`` quits every
    driver; drivers still borrowed at that point are quit when returned.
    """

    def __init__(self, cfg: Settings | None = None, driver_factory: DriverFactory | None = None):
        self.settings = cfg or default_settings
        self.size = max(1, int(self.settings.BROWSER_POOL_SIZE))
        self._factory = driver_factory
        self._driver_path: str | None = None
        self._idle: List = []
        self._live = 0
        self._closed = False
        self._lock = threading.Lock()
        self._install_lock = threading.Lock()
        self._slots = threading.BoundedSemaphore(self.size)

    # ---- status ----
    @property
    def closed(self) -> bool:
        return self._closed

    def status(self) -> dict:
        with self._lock:
            return {"closed": self._closed, "size": self.size, "live": self._live, "idle": len(self._idle)}

    # ---- internals ----
    def _launch(self):
        if self._factory is not None:
            return self._factory()
        with self._install_lock:
            if self._driver_path is None:
                self._driver_path = self.settings.CHROME_DRIVER_PATH or ChromeDriverManager().install()
        LOGGER.info("Launching new headless Chrome instance (driver=%s)", self._driver_path)
        return new_driver(self._driver_path, self.settings)

    def _checkout(self):
        with self._lock:
            if self._closed:
                raise BrowserUnavailableError("browser pool is closed")
            driver = self._idle.pop() if self._idle else None

        if driver is not None and not is_alive(driver):
            LOGGER.warning("Discarding disconnected Chrome session")
            self._discard(driver)
            driver = None

        if driver is None:
            try:
                driver = self._launch()
            except (WebDriverException, OSError, ValueError) as exc:
                raise BrowserUnavailableError(f"could not launch Chrome: {exc}") from exc
            with self._lock:
                self._live += 1
        return driver

    def _checkin(self, driver) -> None:
        with self._lock:
            if not self._closed:
                self._idle.append(driver)
                return
        self._discard(driver)

    def _discard(self, driver) -> None:
        _quit(driver)
        with self._lock:
            self._live = max(0, self._live - 1)

    # ---- public API ----
    @contextmanager
    def driver(self) -> Iterator[webdriver.Chrome]:
        self._slots.acquire()
        try:
            drv = self._checkout()
            try:
                yield drv
            except WebDriverException as exc:
                if session_lost(exc):
                    LOGGER.warning("Chrome session lost during render, dropping driver: %s", exc)
                    self._discard(drv)
                    drv = None
                raise
            finally:
                if drv is not None:
                    self._checkin(drv)
        finally:
            self._slots.release()

    def warm(self) -> None:
        """Launch one driver up front so the first request does not pay for it."""
        with self.driver():
            pass

    def close(self) -> None:
        with self._lock:
            if self._closed:
                return
            self._closed = True
            idle, self._idle = self._idle, []
        for drv in idle:
            self._discard(drv)
        LOGGER.info("Chrome pool closed.")

    def __enter__(self) -> "BrowserPool":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
