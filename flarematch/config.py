"""Run configuration: column layout of both tables, threshold and parse policy."""
from __future__ import annotations

from enum import Enum
from typing import List

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Default file names of the survey list and the volume workbook
DEFAULT_CSV_NAME = "eog_global_flare_survey_2015_flare_list.csv"
DEFAULT_EXCEL_NAME = "2012-2023-individual-flare-volume-estimates.xlsx"

# A survey site and a volume estimate closer than this are the same flare
MAX_DISTANCE_KM = 3.0
PREVIEW_LIMIT = 10


class ParseErrorPolicy(str, Enum):
    """What to do with a numeric cell that does not parse."""

    ZERO = "zero"
    SKIP_ROW = "skip_row"
    FAIL = "fail"


class TableSchema(BaseModel):
    """0-based positions of the columns the pipeline reads from one table."""

    model_config = ConfigDict(frozen=True)

    country_col: int = Field(..., ge=0)
    lat_col: int = Field(..., ge=0)
    lon_col: int = Field(..., ge=0)


class RegressionSchema(BaseModel):
    """
    Column positions inside a *joined* row (survey cells first, then the
    workbook cells).  Only the first predictor enters the fit; the others are
    extracted so they travel with the sample.
    """

    model_config = ConfigDict(frozen=True)

    target_col: int = Field(..., ge=0)
    predictor_cols: List[int] = Field(..., min_length=1)

    @field_validator("predictor_cols")
    @classmethod
    def _non_negative(cls, v: List[int]) -> List[int]:
        if any(c < 0 for c in v):
            raise ValueError("predictor columns must be >= 0")
        return v


class PipelineConfig(BaseModel):
    """
    Everything one run needs besides the two file paths.

    The defaults describe the 2015 EOG survey list (country, lat, lon at
    0/4/5) and the 2012-2023 volume workbook (country, lat, lon at 0/1/2);
    the target "Flaring Vol (million m3)" sits at joined position 10 and the
    predictors flr_volume / avg_temp / dtc_freq at 6/7/8.
    """

    model_config = ConfigDict(frozen=True)

    country: str = "Algeria"
    max_distance_km: float = Field(MAX_DISTANCE_KM, gt=0)
    on_parse_error: ParseErrorPolicy = ParseErrorPolicy.ZERO

    csv: TableSchema = TableSchema(country_col=0, lat_col=4, lon_col=5)
    excel: TableSchema = TableSchema(country_col=0, lat_col=1, lon_col=2)
    regression: RegressionSchema = RegressionSchema(target_col=10, predictor_cols=[6, 7, 8])

    n_jobs: int = Field(1, ge=1)
    preview_limit: int = Field(PREVIEW_LIMIT, ge=0)

    @field_validator("country", mode="before")
    @classmethod
    def _strip_country(cls, v):
        return v.strip() if isinstance(v, str) else v
