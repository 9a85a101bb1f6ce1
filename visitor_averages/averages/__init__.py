from .calculator import MovingAverageCalculator
from .engine import compute_moving_averages
from .errors import InvalidDataError, InvalidWindowError, MovingAverageError, SheetNotFoundError
from .models import RunOptions, RunResult, RunState, WriteBackPlan
from .planner import column_letter, execute_write_back, plan_write_back
from .validator import is_valid, validate_rows


__all__ = [
    "InvalidDataError",
    "InvalidWindowError",
    "MovingAverageCalculator",
    "MovingAverageError",
    "RunOptions",
    "RunResult",
    "RunState",
    "SheetNotFoundError",
    "WriteBackPlan",
    "column_letter",
    "compute_moving_averages",
    "execute_write_back",
    "is_valid",
    "plan_write_back",
    "validate_rows",
]
