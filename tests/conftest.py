# tests/conftest.py
# -----------------------------------------------------------------------
# Shared fixtures. No real Chrome is started: the pool is fed FakeDriver
# instances that answer the handful of WebDriver calls the renderer makes.
# -----------------------------------------------------------------------

import base64
import io
from dataclasses import replace

import pytest
from pypdf import PdfWriter
from selenium.common.exceptions import NoSuchElementException, WebDriverException

from breakeven_report.browser import BrowserPool
from breakeven_report.config import Settings


def make_pdf(*sizes):
    """Blank PDF with one page per (width, height) pair."""
    writer = PdfWriter()
    for width, height in sizes or ((595, 842),):
        writer.add_blank_page(width=width, height=height)
    buf = io.BytesIO()
    writer.write(buf)
    return buf.getvalue()


class FakeDriver:
    def __init__(self, pdf=None, selector_present=True, console=None):
        self.session_id = "fake-session"
        self.pdf = pdf if pdf is not None else make_pdf()
        self.selector_present = selector_present
        self.console = console or []
        self.alive = True
        self.visited = []
        self.print_options = []
        self.quit_calls = 0

    @property
    def current_url(self):
        if not self.alive:
            raise WebDriverException("invalid session id")
        return self.visited[-1] if self.visited else "about:blank"

    def get(self, url):
        if not self.alive:
            raise WebDriverException("invalid session id")
        self.visited.append(url)

    def find_element(self, by, value):
        if not self.selector_present:
            raise NoSuchElementException(value)
        return object()

    def print_page(self, options):
        self.print_options.append(options)
        return base64.b64encode(self.pdf).decode("ascii")

    def get_log(self, kind):
        return list(self.console)

    def quit(self):
        self.quit_calls += 1
        self.alive = False


class DriverFactory:
    """Callable handing out FakeDrivers; keeps every driver it created."""

    def __init__(self, **driver_kwargs):
        self.driver_kwargs = driver_kwargs
        self.created = []

    def __call__(self):
        drv = FakeDriver(**self.driver_kwargs)
        self.created.append(drv)
        return drv


@pytest.fixture
def test_settings():
    return replace(Settings(), BROWSER_POOL_SIZE=2, BROWSER_PREWARM=False, RENDER_TIMEOUT=0.2)


@pytest.fixture
def driver_factory():
    return DriverFactory()


@pytest.fixture
def pool(test_settings, driver_factory):
    p = BrowserPool(test_settings, driver_factory=driver_factory)
    yield p
    p.close()
