"""Visitor Averages - moving averages of daily visitor counts.

This package reads a Date/Visitors time series from Google Sheets, computes a
trailing moving average over it, and writes the result back into a
"Moving Average" column of the same sheet.
"""

__version__ = "0.1.0"

from .averages.calculator import MovingAverageCalculator
from .averages.models import RunOptions
from .sheets.client import GoogleSheetsClient


__all__ = [
    "GoogleSheetsClient",
    "MovingAverageCalculator",
    "RunOptions",
]
