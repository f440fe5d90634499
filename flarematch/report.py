"""
report.py – plain-text summary of a pipeline run.
"""
from __future__ import annotations

from .pipeline import PipelineReport


def render_report(report: PipelineReport) -> str:
    cfg = report.config
    reg = report.regression
    lines = [
        f"CSV Headers: {report.csv_header}",
        f"Excel Headers: {report.excel_header}",
        f"Using Sheet: {report.excel_sheet}",
        f"Filtered {cfg.country} Records in CSV: {report.csv_count}",
        f"Filtered {cfg.country} Records in Excel: {report.excel_count}",
        f"Joined Records (within {cfg.max_distance_km:g}km): {len(report.join.matched)}",
        f"Dangling Records: {len(report.join.dangling)}",
        "",
        f"Sample Normalized Data (First {len(reg.preview)} values):",
    ]
    for i, (y, x) in enumerate(reg.preview):
        lines.append(f"y[{i}] (Target): {y:.4f}, x[{i}] (Normalized Predictor): {x:.4f}")
    lines += [
        "",
        f"Regression Model (Normalized): target = {reg.alpha:.4f} + {reg.beta:.4f} * predictor_normalized",
        f"R-squared (Normalized): {reg.r_squared:.4f}",
    ]
    return "\n".join(lines)
