from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from .errors import InvalidWindowError

DEFAULT_SHEET_NAME = "Sheet1"


class RunState(Enum):
    """Steps a moving average run passes through"""

    IDLE = "IDLE"
    FETCHING = "FETCHING"
    VALIDATING = "VALIDATING"
    COMPUTING = "COMPUTING"
    WRITING_BACK = "WRITING_BACK"
    DONE = "DONE"
    ERROR = "ERROR"


@dataclass
class RunOptions:
    """Options for a single run.

    Attributes:
        sheet_name: Sheet holding the Date and Visitors columns.
        window_size: Trailing window length. ``None`` uses every data row.

    """

    sheet_name: str = DEFAULT_SHEET_NAME
    window_size: Optional[int] = None

    def resolve_window_size(self, data_row_count: int) -> int:
        if self.window_size is None:
            return data_row_count
        return self.window_size


def parse_window_size(value: Optional[str]) -> Optional[int]:
    """Turn the --window-size text into an int, keeping None for the default"""
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        raise InvalidWindowError(value)


@dataclass(frozen=True)
class WriteBackPlan:
    """Ranges and payload needed to write the Moving Average column"""

    column: str
    header_range: Optional[str]
    clear_range: str
    update_range: str
    values: List[List[float]]


@dataclass
class RunResult:
    """Outcome of a run as reported to the caller"""

    ok: bool
    message: str
    state: RunState
    averages: List[List[float]] = field(default_factory=list)
