import logging
from datetime import datetime
from typing import Any, List, Optional

from ..sheets.client import SheetError, SpreadsheetClient
from .engine import compute_moving_averages
from .errors import InvalidDataError, MovingAverageError, SheetNotFoundError
from .models import RunOptions, RunResult, RunState
from .planner import execute_write_back, plan_write_back
from .validator import validate_rows

logger = logging.getLogger(__name__)

DATA_RANGE = "A:B"
HEADER_RANGE = "1:1"
SUCCESS_MESSAGE = "Moving averages calculated and updated successfully."


class MovingAverageCalculator:
    """Computes the visitor moving average of one sheet and writes it back"""

    def __init__(
        self,
        client: SpreadsheetClient,
        options: Optional[RunOptions] = None,
        now: Optional[datetime] = None,
    ):
        self.client = client
        self.options = options or RunOptions()
        self.now = now
        self.state = RunState.IDLE

    def _transition(self, state: RunState) -> None:
        logger.info(f"{self.options.sheet_name}: {self.state.value} -> {state.value}")
        self.state = state

    def fetch_rows(self) -> List[List[Any]]:
        """Read the Date and Visitors columns of the configured sheet"""
        sheet_name = self.options.sheet_name
        if sheet_name not in self.client.list_sheet_names():
            raise SheetNotFoundError(sheet_name)
        return self.client.read_range(sheet_name, DATA_RANGE)

    def fetch_header(self) -> List[Any]:
        """Read the full header row, which may already name the average column"""
        header_rows = self.client.read_range(self.options.sheet_name, HEADER_RANGE)
        return header_rows[0] if header_rows else []

    def calculate(self) -> List[List[float]]:
        """Run the whole pipeline, raising on the first failure"""
        try:
            self._transition(RunState.FETCHING)
            rows = self.fetch_rows()
            header = self.fetch_header()

            self._transition(RunState.VALIDATING)
            validate_rows(rows, now=self.now)

            self._transition(RunState.COMPUTING)
            data_row_count = len(rows) - 1
            window_size = self.options.resolve_window_size(data_row_count)
            moving_averages = compute_moving_averages(rows, window_size)

            self._transition(RunState.WRITING_BACK)
            plan = plan_write_back(header, window_size, data_row_count, moving_averages)
            execute_write_back(self.client, self.options.sheet_name, plan)
        except Exception:
            self._transition(RunState.ERROR)
            raise

        self._transition(RunState.DONE)
        return moving_averages

    def run(self) -> RunResult:
        """Run the pipeline, reporting any failure instead of raising it"""
        try:
            moving_averages = self.calculate()
        except InvalidDataError as e:
            logger.error(f"Rejected rows of {self.options.sheet_name}: {e.reason}")
            return RunResult(ok=False, message=str(e), state=self.state)
        except MovingAverageError as e:
            logger.error(f"Moving average run failed: {e}")
            return RunResult(ok=False, message=str(e), state=self.state)
        except SheetError as e:
            logger.exception("Spreadsheet request failed")
            return RunResult(ok=False, message=str(e), state=self.state)
        except Exception as e:
            logger.exception("Unexpected error while calculating moving averages")
            return RunResult(ok=False, message=str(e), state=RunState.ERROR)

        return RunResult(
            ok=True,
            message=SUCCESS_MESSAGE,
            state=self.state,
            averages=moving_averages,
        )
