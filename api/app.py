# api/app.py
import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any, Dict, List

from fastapi import Depends, FastAPI, HTTPException, Query, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response
from pydantic import BaseModel

from breakeven_report.browser import BrowserPool
from breakeven_report.config import configure_logging, settings
from breakeven_report.demo import DEMO_FINANCIALS
from breakeven_report.errors import (
    BrowserUnavailableError,
    DocumentAssemblyError,
    RenderTimeoutError,
    ReportError,
)
from breakeven_report.finance import FinancialInput, build_series, derive_metrics
from breakeven_report.geometry import compute_geometry, geometry_summary
from breakeven_report.services import generate_combined_report

LOGGER = logging.getLogger(__name__)

PDF_MEDIA_TYPE = "application/pdf"


# ── Lifespan: the browser pool lives exactly as long as the app ──
@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    pool = BrowserPool(settings)
    app.state.browser_pool = pool
    if settings.BROWSER_PREWARM:
        # pre-warm so the first request is fast
        try:
            await run_in_threadpool(pool.warm)
        except BrowserUnavailableError as exc:
            LOGGER.warning("Browser pre-warm skipped: %s", exc)
    LOGGER.info("Server running at http://%s:%s", settings.HOST, settings.PORT)
    try:
        yield
    finally:
        LOGGER.info("Shutting down...")
        await run_in_threadpool(pool.close)
        app.state.browser_pool = None


app = FastAPI(title="Breakeven Report API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=list(settings.CORS_ALLOW_ORIGINS),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ── Pydantic models ────────────────────────────────────────────
class SeriesItem(BaseModel):
    name: str
    value: float


class BreakevenMetricsResponse(BaseModel):
    metrics: Dict[str, float]
    series: List[SeriesItem]
    geometry: Dict[str, Any]
    meta: Dict[str, Any]


# ── Helpers ────────────────────────────────────────────────────
def get_browser_pool(request: Request) -> BrowserPool:
    pool = getattr(request.app.state, "browser_pool", None)
    if pool is None or pool.closed:
        raise HTTPException(status_code=503, detail="browser is not running")
    return pool


def _now() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


async def _pdf_response(pool: BrowserPool, data: FinancialInput, filename: str) -> Response:
    try:
        pdf = await run_in_threadpool(generate_combined_report, pool, data)
    except BrowserUnavailableError as exc:
        raise HTTPException(status_code=503, detail=str(exc))
    except RenderTimeoutError as exc:
        raise HTTPException(status_code=504, detail=str(exc))
    except DocumentAssemblyError as exc:
        raise HTTPException(status_code=500, detail=f"could not assemble report: {exc}")
    except ReportError as exc:
        raise HTTPException(status_code=500, detail=f"report generation failed: {exc}")
    return Response(
        content=pdf,
        media_type=PDF_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


# ── Endpoints ─────────────────────────────────────────────────
@app.get("/download-report")
async def download_report(pool: BrowserPool = Depends(get_browser_pool)):
    return await _pdf_response(pool, FinancialInput.from_mapping(DEMO_FINANCIALS), "report.pdf")


@app.post("/reports/breakeven")
async def breakeven_report(payload: FinancialInput, pool: BrowserPool = Depends(get_browser_pool)):
    return await _pdf_response(pool, payload, "breakeven-report.pdf")


@app.get("/breakeven/metrics", response_model=BreakevenMetricsResponse)
def breakeven_metrics(
    revenue: float | None = Query(None),
    fixed_costs: float | None = Query(None),
    expenses: float | None = Query(None),
    gross_profit: float | None = Query(None),
):
    data = FinancialInput.from_mapping(DEMO_FINANCIALS)
    overrides = {
        k: v
        for k, v in {
            "revenue": revenue,
            "fixed_costs": fixed_costs,
            "expenses": expenses,
            "gross_profit": gross_profit,
        }.items()
        if v is not None
    }
    if overrides:
        data = data.model_copy(update=overrides)

    metrics = derive_metrics(data)
    series = build_series(metrics)
    geometry = compute_geometry(series, metrics)
    return BreakevenMetricsResponse(
        metrics=metrics.as_dict(),
        series=[SeriesItem(name=p.name, value=p.value) for p in series],
        geometry=geometry_summary(geometry),
        meta={"generated_at": _now(), "overrides": sorted(overrides)},
    )


@app.get("/health")
def health(request: Request):
    pool = getattr(request.app.state, "browser_pool", None)
    return {
        "ok": True,
        "browser": pool.status() if pool is not None else None,
        "ts": _now(),
    }
