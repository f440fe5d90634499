import pandas as pd
import pytest

from flarematch.config import PipelineConfig, RegressionSchema

SURVEY_HEADER = ["country", "id", "catalog_id", "year", "latitude", "longitude",
                 "flr_volume", "avg_temp", "dtc_freq"]
VOLUME_HEADER = ["Country", "Latitude", "Longitude", "Year", "Flaring Vol (million m3)"]

# joined row = 9 survey cells + 5 workbook cells → volume sits at 9 + 4
TARGET_COL = len(SURVEY_HEADER) + 4


def _write_inputs(tmp_path, survey_rows, volume_rows):
    csv_path = tmp_path / "survey.csv"
    pd.DataFrame(survey_rows, columns=SURVEY_HEADER).to_csv(csv_path, index=False)

    xlsx_path = tmp_path / "volumes.xlsx"
    pd.DataFrame(volume_rows, columns=VOLUME_HEADER).to_excel(
        xlsx_path, sheet_name="2012-2023", index=False
    )
    return csv_path, xlsx_path


@pytest.fixture
def flare_files(tmp_path):
    """
    Five Algerian sites present in both files (≈110 m apart), one Algerian
    survey site with no workbook counterpart, and foreign rows on both sides.
    Volume = 2 + 3 · normalised(flr_volume), so the fit is exact.
    """
    survey, volumes = [], []
    for i in range(5):
        lat = 30.0 + 0.5 * i
        survey.append(["Algeria", i, f"DZ{i}", 2015, lat + 0.001, 5.0, 10.0 * i, 1500 + i, 0.5])
        volumes.append(["Algeria", lat, 5.0, 2019, 2 + 3 * (i / 4)])
    survey.append(["Algeria", 9, "DZ9", 2015, 20.0, 0.0, 7.0, 1600, 0.1])
    survey.append(["Libya", 10, "LY0", 2015, 30.0, 5.0, 1.0, 1400, 0.2])
    volumes.append(["Nigeria", 4.8, 6.9, 2019, 99.0])
    return _write_inputs(tmp_path, survey, volumes)


@pytest.fixture
def flare_config():
    return PipelineConfig(regression=RegressionSchema(target_col=TARGET_COL, predictor_cols=[6, 7, 8]))
