from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Sequence

from pydantic import ValidationError

from . import INPUT_DIR
from .config import DEFAULT_CSV_NAME, DEFAULT_EXCEL_NAME, MAX_DISTANCE_KM, ParseErrorPolicy, PipelineConfig
from .errors import DegenerateDataError, InputError
from .logging_config import configure
from .pipeline import run_pipeline
from .report import render_report

log = logging.getLogger("flarematch.cli")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="flarematch",
        description="Join flare-survey sites to flare-volume estimates and fit a normalised regression",
    )
    parser.add_argument("--csv", help=f"Flare survey CSV (default: input/{DEFAULT_CSV_NAME})")
    parser.add_argument("--excel", help=f"Flare volume workbook (default: input/{DEFAULT_EXCEL_NAME})")
    parser.add_argument("--country", default="Algeria", help="Country to keep in both tables")
    parser.add_argument("--max-distance-km", type=float, default=MAX_DISTANCE_KM,
                        help="Join radius in km (exclusive)")
    parser.add_argument("--on-parse-error", choices=[p.value for p in ParseErrorPolicy],
                        default=ParseErrorPolicy.ZERO.value,
                        help="Treatment of non-numeric cells")
    parser.add_argument("--jobs", type=int, default=1, help="Worker processes for the spatial join")
    parser.add_argument("--log-level", default="INFO", help="DEBUG, INFO, WARNING, …")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    configure(args.log_level)

    csv_path = Path(args.csv) if args.csv else INPUT_DIR / DEFAULT_CSV_NAME
    excel_path = Path(args.excel) if args.excel else INPUT_DIR / DEFAULT_EXCEL_NAME

    try:
        config = PipelineConfig(
            country=args.country,
            max_distance_km=args.max_distance_km,
            on_parse_error=args.on_parse_error,
            n_jobs=args.jobs,
        )
    except ValidationError as err:
        parser.error(str(err))

    log.info("CSV → %s", csv_path)
    log.info("Excel → %s", excel_path)

    try:
        report = run_pipeline(csv_path, excel_path, config)
    except InputError as exc:
        log.error("%s", exc)
        return 1
    except DegenerateDataError as exc:
        log.error("Regression failed: %s", exc)
        return 2

    print(render_report(report))
    return 0
