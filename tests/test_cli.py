from unittest import mock

import pytest

import flarematch.cli as cli
from flarematch.config import ParseErrorPolicy, PipelineConfig
from flarematch.errors import DegenerateDataError, InputError


@pytest.fixture(autouse=True)
def quiet_logging(monkeypatch):
    monkeypatch.setattr(cli, "configure", mock.MagicMock())


def test_main_prints_report(flare_files, monkeypatch, capsys):
    csv_path, xlsx_path = flare_files
    fake_run = mock.MagicMock(return_value="REPORT")
    monkeypatch.setattr(cli, "run_pipeline", fake_run)
    monkeypatch.setattr(cli, "render_report", lambda r: f"rendered {r}")

    status = cli.main(["--csv", str(csv_path), "--excel", str(xlsx_path),
                       "--country", " Libya ", "--on-parse-error", "skip_row", "--jobs", "2"])

    assert status == 0
    assert capsys.readouterr().out.strip() == "rendered REPORT"
    args, _ = fake_run.call_args
    assert args[0] == csv_path and args[1] == xlsx_path
    cfg = args[2]
    assert cfg.country == "Libya"
    assert cfg.on_parse_error is ParseErrorPolicy.SKIP_ROW
    assert cfg.n_jobs == 2


def test_main_defaults_to_input_dir(monkeypatch):
    fake_run = mock.MagicMock(side_effect=InputError("File not found"))
    monkeypatch.setattr(cli, "run_pipeline", fake_run)

    assert cli.main([]) == 1
    args, _ = fake_run.call_args
    assert args[0] == cli.INPUT_DIR / cli.DEFAULT_CSV_NAME
    assert args[1] == cli.INPUT_DIR / cli.DEFAULT_EXCEL_NAME


def test_main_degenerate_regression_exit_code(monkeypatch, capsys):
    monkeypatch.setattr(cli, "run_pipeline", mock.MagicMock(side_effect=DegenerateDataError("flat")))
    assert cli.main(["--csv", "a.csv", "--excel", "b.xlsx"]) == 2
    assert capsys.readouterr().out == ""


def test_main_rejects_invalid_radius():
    with pytest.raises(SystemExit) as info:
        cli.main(["--max-distance-km", "-1"])
    assert info.value.code == 2


def test_main_runs_real_files(flare_files, flare_config, monkeypatch, capsys):
    csv_path, xlsx_path = flare_files
    monkeypatch.setattr(cli, "PipelineConfig", lambda **kw: PipelineConfig(regression=flare_config.regression, **kw))
    status = cli.main(["--csv", str(csv_path), "--excel", str(xlsx_path)])
    assert status == 0
    out = capsys.readouterr().out
    assert "Joined Records (within 3km): 5" in out
    assert "R-squared (Normalized): 1.0000" in out
