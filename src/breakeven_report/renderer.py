# src/breakeven_report/renderer.py
from __future__ import annotations

import base64
import logging

from selenium.common.exceptions import TimeoutException, WebDriverException
from selenium.webdriver.common.by import By
from selenium.webdriver.common.print_page_options import PrintOptions
from selenium.webdriver.support import expected_conditions as EC
from selenium.webdriver.support.ui import WebDriverWait

from .browser import BrowserPool, session_lost
from .errors import BrowserUnavailableError, RenderTimeoutError, ReportError

LOGGER = logging.getLogger(__name__)

# A4 in centimetres
A4_WIDTH_CM = 21.0
A4_HEIGHT_CM = 29.7
CSS_PX_PER_CM = 96 / 2.54


def px_to_cm(px: float) -> float:
    return px / CSS_PX_PER_CM


def a4_print_options(margin_top_px: float = 0, margin_bottom_px: float = 0) -> PrintOptions:
    opts = PrintOptions()
    opts.page_width = A4_WIDTH_CM
    opts.page_height = A4_HEIGHT_CM
    opts.margin_top = px_to_cm(margin_top_px)
    opts.margin_bottom = px_to_cm(margin_bottom_px)
    opts.margin_left = 0
    opts.margin_right = 0
    # chart colours are backgrounds/fills; without this they print blank
    opts.background = True
    return opts


def html_data_url(html: str) -> str:
    encoded = base64.b64encode(html.encode("utf-8")).decode("ascii")
    return f"data:text/html;charset=utf-8;base64,{encoded}"


def _forward_console(driver, report: str) -> None:
    try:
        entries = driver.get_log("browser")
    except WebDriverException as exc:
        LOGGER.debug("[%s] browser console unavailable: %s", report, exc)
        return
    for entry in entries or []:
        LOGGER.debug("[%s Log]: %s %s", report, entry.get("level", ""), entry.get("message", ""))


def render_pdf_page(
    pool: BrowserPool,
    html: str,
    *,
    report: str,
    ready_selector: str,
    timeout: float | None = None,
    margin_top_px: float = 0,
    margin_bottom_px: float = 0,
) -> bytes:
    """Load ``html`` in a pooled Chrome, wait for ``ready_selector`` and print one A4 PDF.

    Raises ``RenderTimeoutError`` when the selector does not show up in time,
    ``BrowserUnavailableError`` when Chrome dies mid-render and ``ReportError``
    for any other WebDriver failure.
    A driver whose session died is dropped; otherwise it goes back to the pool.
    """
    wait_for = pool.settings.RENDER_TIMEOUT if timeout is None else timeout

    try:
        with pool.driver() as driver:
            driver.get(html_data_url(html))
            try:
                WebDriverWait(driver, wait_for).until(
                    EC.presence_of_element_located((By.CSS_SELECTOR, ready_selector))
                )
            except TimeoutException as exc:
                LOGGER.error("Timeout: %s chart never appeared (%s)", report, ready_selector)
                raise RenderTimeoutError(report, ready_selector, wait_for) from exc
            finally:
                _forward_console(driver, report)

            encoded = driver.print_page(a4_print_options(margin_top_px, margin_bottom_px))
    except WebDriverException as exc:
        LOGGER.error("[%s] Chrome failed during render: %s", report, exc)
        if session_lost(exc):
            raise BrowserUnavailableError(f"{report}: Chrome session lost: {exc.msg}") from exc
        raise ReportError(f"{report}: rendering failed: {exc.msg}") from exc

    pdf = base64.b64decode(encoded)
    LOGGER.info("[%s] rendered %d bytes", report, len(pdf))
    return pdf
