"""Lantern Calendar: month grids with lunisolar labels, solar terms, holidays and reminders."""

from __future__ import annotations

from .core import (
    build_month_grid,
    classify_reminders,
    expand_recurrence,
    holidays,
    lunisolar_label,
    solar_term,
)

__all__ = [
    "build_month_grid",
    "classify_reminders",
    "expand_recurrence",
    "holidays",
    "lunisolar_label",
    "main",
    "solar_term",
]


def main() -> None:
    from .cli import main as cli_main

    cli_main()
