"""
pipeline.py – one batch run: survey list ⨝ volume workbook → regression

    1 ▸ load the CSV and the first workbook sheet
    2 ▸ keep one country's rows in both
    3 ▸ nearest-neighbour join (survey rows are the left side)
    4 ▸ extract (target, predictors) from the joined rows
    5 ▸ fit target ~ normalised first predictor

Nothing is printed here; the caller renders the returned PipelineReport.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List

from .config import PipelineConfig
from .matcher import JoinResult, match_nearest
from .regression import RegressionResult, extract_samples, fit_regression
from .table_io import filter_country, load_csv, load_excel

logger = logging.getLogger("flarematch.pipeline")


@dataclass(frozen=True)
class PipelineReport:
    config: PipelineConfig
    csv_header: List[str]
    excel_header: List[str]
    excel_sheet: str
    csv_count: int
    excel_count: int
    join: JoinResult
    regression: RegressionResult


def run_pipeline(
    csv_path: Path | str,
    excel_path: Path | str,
    config: PipelineConfig | None = None,
) -> PipelineReport:
    config = config or PipelineConfig()
    logger.info("==> %s – starting run", config.country)

    # 1 ▸ load -----------------------------------------------------------
    survey = load_csv(csv_path)
    volumes = load_excel(excel_path)

    # 2 ▸ country filter -------------------------------------------------
    survey_c = filter_country(survey, config.csv.country_col, config.country)
    volumes_c = filter_country(volumes.rows, config.excel.country_col, config.country)

    # 3 ▸ spatial join ---------------------------------------------------
    join = match_nearest(
        survey_c,
        volumes_c,
        config.csv.lat_col,
        config.csv.lon_col,
        config.excel.lat_col,
        config.excel.lon_col,
        config.max_distance_km,
        on_parse_error=config.on_parse_error,
        n_jobs=config.n_jobs,
    )

    # 4 ▸ regression -----------------------------------------------------
    samples = extract_samples(
        join.matched,
        config.regression.target_col,
        config.regression.predictor_cols,
        config.on_parse_error,
    )
    result = fit_regression(samples, config.preview_limit)

    logger.info(
        "%s ✓ %d joined | R² %.4f",
        config.country, len(join.matched), result.r_squared,
    )
    return PipelineReport(
        config=config,
        csv_header=survey[0],
        excel_header=volumes.rows[0],
        excel_sheet=volumes.sheet,
        csv_count=len(survey_c) - 1,
        excel_count=len(volumes_c) - 1,
        join=join,
        regression=result,
    )
