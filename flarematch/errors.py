"""
errors.py – exceptions the pipeline and the CLI expect

FlareMatchError        – common base
InputError             – a source file cannot be used at all (fatal)
CellParseError         – malformed numeric cell under the ``fail`` policy
DegenerateDataError    – regression inputs that admit no answer
"""
from __future__ import annotations


class FlareMatchError(Exception):
    """Base class for every error raised by flarematch."""


class InputError(FlareMatchError):
    """Raised when a source table is missing, unreadable or empty."""


class CellParseError(InputError):
    """Raised for a non-numeric cell when the parse policy is ``fail``."""

    def __init__(self, value: str, *, row: int | None = None, col: int | None = None):
        self.value = value
        self.row = row
        self.col = col
        where = ""
        if row is not None:
            where += f" row {row}"
        if col is not None:
            where += f" column {col}"
        super().__init__(f"Cannot parse {value!r} as a number{where}")


class DegenerateDataError(FlareMatchError, ValueError):
    """Raised when the regression cannot be computed (as opposed to fitting badly)."""
