"""Shared fixtures: an in-memory spreadsheet standing in for Google Sheets."""

from __future__ import annotations

import logging
import re
from datetime import datetime
from typing import Any

import pytest

_A1 = re.compile(r"^([A-Z]+)?(\d+)?(?::([A-Z]+)?(\d+)?)?$")


def _column_index(letters: str) -> int:
    index = 0
    for letter in letters:
        index = index * 26 + ord(letter) - 64
    return index - 1


class InMemorySheetsClient:
    """Grid-backed client implementing list/read/clear/write over A1 ranges."""

    def __init__(self, sheets: dict[str, list[list[Any]]]) -> None:
        self.sheets = {name: [list(row) for row in rows] for name, rows in sheets.items()}
        self.calls: list[tuple[str, str, str]] = []

    def list_sheet_names(self) -> set[str]:
        self.calls.append(("list", "", ""))
        return set(self.sheets)

    def _bounds(self, grid: list[list[Any]], range_spec: str) -> tuple[int, int, int, int]:
        match = _A1.match(range_spec)
        assert match, f"bad range {range_spec}"
        start_col, start_row, end_col, end_row = match.groups()
        width = max((len(row) for row in grid), default=0)
        c0 = _column_index(start_col) if start_col else 0
        r0 = int(start_row) - 1 if start_row else 0
        if ":" in range_spec:
            c1 = _column_index(end_col) if end_col else max(width - 1, 0)
            r1 = int(end_row) - 1 if end_row else len(grid) - 1
        else:
            c1, r1 = c0, r0
        return r0, r1, c0, c1

    def read_range(self, sheet_name: str, range_spec: str) -> list[list[Any]]:
        self.calls.append(("read", sheet_name, range_spec))
        grid = self.sheets[sheet_name]
        r0, r1, c0, c1 = self._bounds(grid, range_spec)
        rows = []
        for row in grid[r0 : r1 + 1]:
            cells = row[c0 : c1 + 1]
            while cells and cells[-1] in (None, ""):
                cells.pop()
            rows.append(cells)
        while rows and not rows[-1]:
            rows.pop()
        return rows

    def _set(self, grid: list[list[Any]], row: int, col: int, value: Any) -> None:
        while len(grid) <= row:
            grid.append([])
        while len(grid[row]) <= col:
            grid[row].append(None)
        grid[row][col] = value

    def clear_range(self, sheet_name: str, range_spec: str) -> None:
        self.calls.append(("clear", sheet_name, range_spec))
        grid = self.sheets[sheet_name]
        r0, r1, c0, c1 = self._bounds(grid, range_spec)
        for r in range(r0, min(r1, len(grid) - 1) + 1):
            for c in range(c0, min(c1, len(grid[r]) - 1) + 1):
                grid[r][c] = None

    def write_range(self, sheet_name: str, range_spec: str, values: list[list[Any]]) -> None:
        self.calls.append(("write", sheet_name, range_spec))
        grid = self.sheets[sheet_name]
        r0, _, c0, _ = self._bounds(grid, range_spec)
        for r, row in enumerate(values):
            for c, value in enumerate(row):
                self._set(grid, r0 + r, c0 + c, value)

    def column(self, sheet_name: str, index: int) -> list[Any]:
        return [row[index] if len(row) > index else None for row in self.sheets[sheet_name]]


VISITORS = [5000, 2000, 1500, 1003, 1345, 8905, 1200, 1325]
EXPECTED_WINDOW_4 = [2125, 2375.75, 1462, 3188.25, 3113.25, 3193.75]


@pytest.fixture
def root_logger():
    root = logging.getLogger()
    original_handlers = list(root.handlers)
    original_level = root.level
    yield root
    for handler in root.handlers:
        if handler not in original_handlers:
            handler.close()
    root.handlers = original_handlers
    root.setLevel(original_level)


@pytest.fixture
def now() -> datetime:
    return datetime(2023, 9, 1, 12, 0)


@pytest.fixture
def visitor_rows() -> list[list[Any]]:
    return [["Date", "Visitors"]] + [
        [f"2023-08-{day:02d}", count] for day, count in enumerate(VISITORS, start=1)
    ]


@pytest.fixture
def sheets_client(visitor_rows) -> InMemorySheetsClient:
    return InMemorySheetsClient({"Sheet1": visitor_rows, "Archive": [["Date", "Visitors"]]})
