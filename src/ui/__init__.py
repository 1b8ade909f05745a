"""Terminal reporting for the DSC engine."""

from .report import (
    build_positions_table,
    build_report,
    format_health_factor,
    format_usd,
    print_report,
)

__all__ = [
    "build_positions_table",
    "build_report",
    "format_health_factor",
    "format_usd",
    "print_report",
]
