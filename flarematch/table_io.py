"""
table_io.py – read the survey CSV / volume workbook into string tables,
and keep only one country's rows.

A *table* is ``list[list[str]]`` with the header in row 0.  Every cell is kept
as text; numbers are parsed later, under the run's parse-error policy.
"""

from __future__ import annotations

import logging
import zipfile
from pathlib import Path
from typing import List, NamedTuple

import pandas as pd

from .errors import InputError

logger = logging.getLogger("flarematch.io")

Table = List[List[str]]


class ExcelTable(NamedTuple):
    rows: Table
    sheet: str
    sheets: List[str]


# ---------------------------------------------------------------------------
def _frame_to_rows(df: pd.DataFrame) -> Table:
    """DataFrame of objects → list of string rows (NaN → "")."""
    return [["" if pd.isna(v) else str(v) for v in rec] for rec in df.itertuples(index=False, name=None)]


def _trim_ragged(rows: Table) -> Table:
    """
    Spreadsheet rows end at their last non-empty cell, and trailing blank
    rows are dropped – the sheet is read as ragged, not padded.
    """
    out: Table = []
    for row in rows:
        end = len(row)
        while end and row[end - 1] == "":
            end -= 1
        out.append(row[:end])
    while out and not out[-1]:
        out.pop()
    return out


def _require_file(path: Path | str) -> Path:
    path = Path(path)
    if not path.is_file():
        raise InputError(f"File not found: {path}")
    return path


# ────────────────────────────────────────────────────────────────────────────
def load_csv(csv_path: Path | str) -> Table:
    """
    Read a CSV file into a table of strings.

    Raises InputError if the file is missing, cannot be parsed, or holds no
    rows at all.
    """
    csv_path = _require_file(csv_path)
    read = dict(header=None, dtype=str, keep_default_na=False)
    try:
        try:
            df = pd.read_csv(csv_path, encoding="utf-8", **read)
        except UnicodeDecodeError:
            logger.warning("UTF-8 decoding failed for %s, trying latin-1", csv_path.name)
            df = pd.read_csv(csv_path, encoding="latin-1", **read)
    except pd.errors.EmptyDataError as exc:
        raise InputError(f"CSV file is empty: {csv_path}") from exc
    except pd.errors.ParserError as exc:
        raise InputError(f"Error reading CSV file {csv_path}: {exc}") from exc
    except OSError as exc:
        raise InputError(f"Error opening CSV file {csv_path}: {exc}") from exc

    rows = _frame_to_rows(df)
    if not rows:
        raise InputError(f"CSV file has no rows: {csv_path}")

    logger.info("Loaded %s: %d rows × %d columns", csv_path.name, len(rows), df.shape[1])
    return rows


def load_excel(xlsx_path: Path | str) -> ExcelTable:
    """
    Read the *first* sheet of a workbook into a table of strings.

    Raises InputError if the file is missing or unreadable, has no sheets,
    or the first sheet holds no rows.
    """
    xlsx_path = _require_file(xlsx_path)
    try:
        with pd.ExcelFile(xlsx_path) as book:
            sheets = [str(s) for s in book.sheet_names]
            logger.info("Available sheets in %s: %s", xlsx_path.name, sheets)
            if not sheets:
                raise InputError(f"No sheets found in the Excel file {xlsx_path}")
            sheet = sheets[0]
            logger.info("Using sheet: %s", sheet)
            df = book.parse(sheet, header=None)
    except InputError:
        raise
    except (OSError, ValueError, zipfile.BadZipFile) as exc:
        # openpyxl reports corrupt / non-xlsx payloads as ValueError subclasses
        raise InputError(f"Error opening Excel file {xlsx_path}: {exc}") from exc

    rows = _trim_ragged(_frame_to_rows(df))
    if not rows:
        raise InputError(f"Sheet {sheet!r} in {xlsx_path} has no rows")

    logger.info("Loaded %s[%s]: %d rows", xlsx_path.name, sheet, len(rows))
    return ExcelTable(rows, sheet, sheets)


# ────────────────────────────────────────────────────────────────────────────
def filter_country(table: Table, country_col: int, country: str) -> Table:
    """
    Header + every data row whose *country_col* cell equals *country*,
    ignoring case and surrounding whitespace.  Rows too short to have the
    column are dropped.
    """
    if not table:
        return []
    wanted = country.strip().casefold()
    kept = [
        row for row in table[1:]
        if len(row) > country_col and row[country_col].strip().casefold() == wanted
    ]
    logger.info("Filter %r on column %d: %d of %d rows", country, country_col, len(kept), len(table) - 1)
    return [table[0]] + kept
