# src/breakeven_report/cli.py
import argparse
import json
import logging
import sys
from pathlib import Path

from .browser import BrowserPool
from .config import configure_logging, settings
from .demo import DEMO_FINANCIALS
from .errors import ReportError
from .finance import FinancialInput, build_series, derive_metrics
from .geometry import compute_geometry
from .services import generate_combined_report

LOGGER = logging.getLogger("breakeven_report")


def _load_input(path: str | None) -> FinancialInput:
    if not path:
        return FinancialInput.from_mapping(DEMO_FINANCIALS)
    with open(path, "r", encoding="utf-8-sig") as f:
        return FinancialInput.from_mapping(json.load(f))


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="breakeven-report",
        description="Render the sales + breakeven report to a PDF (demo figures unless --input is given)",
    )
    parser.add_argument("--input", help="JSON file with revenue / fixedcosts / expenses / gross_profit")
    parser.add_argument("--output", default="report.pdf", help="PDF path to write (default: report.pdf)")
    parser.add_argument("--title", default=None, help="Breakeven page heading")
    parser.add_argument("--metrics-only", action="store_true", help="Print derived metrics as JSON, skip rendering")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose logging")
    args = parser.parse_args(argv)

    configure_logging(logging.DEBUG if args.verbose else None)
    data = _load_input(args.input)

    if args.metrics_only:
        metrics = derive_metrics(data)
        geometry = compute_geometry(build_series(metrics), metrics)
        out = dict(metrics.as_dict(), zoom=geometry.zoom, fill=geometry.area.fill)
        print(json.dumps(out, indent=2))
        return 0

    try:
        with BrowserPool(settings) as pool:
            pdf = generate_combined_report(pool, data, title=args.title)
    except ReportError as exc:
        LOGGER.error("Report generation failed: %s", exc)
        return 1

    out_path = Path(args.output)
    out_path.write_bytes(pdf)
    print(f"Wrote {len(pdf)} bytes to {out_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
