import logging
from typing import Any, List, Sequence

from ..sheets.client import SpreadsheetClient
from .models import WriteBackPlan

logger = logging.getLogger(__name__)

MOVING_AVERAGE_HEADER = "Moving Average"
DEFAULT_COLUMN_INDEX = 2  # column C, after Date and Visitors


def column_letter(index: int) -> str:
    """Convert a 0-based column index to its A1 letters"""
    if index < 0:
        raise ValueError(f"Column index cannot be negative: {index}")
    letters = ""
    index += 1
    while index:
        index, remainder = divmod(index - 1, 26)
        letters = chr(65 + remainder) + letters
    return letters


def plan_write_back(
    header: Sequence[Any],
    window_size: int,
    data_row_count: int,
    averages: List[List[float]],
) -> WriteBackPlan:
    """Work out where the moving averages go.

    The column is reused when the header already names it, otherwise column C
    gets a header cell. Data rows start on sheet row 2, so the last one is on
    row ``data_row_count + 1`` and the first average on row ``window_size + 1``.
    The whole data range is cleared so a shorter series leaves nothing stale.
    """
    if MOVING_AVERAGE_HEADER in header:
        column = column_letter(list(header).index(MOVING_AVERAGE_HEADER))
        header_range = None
    else:
        column = column_letter(DEFAULT_COLUMN_INDEX)
        header_range = f"{column}1"

    last_row = data_row_count + 1
    return WriteBackPlan(
        column=column,
        header_range=header_range,
        clear_range=f"{column}2:{column}{last_row}",
        update_range=f"{column}{window_size + 1}:{column}{last_row}",
        values=averages,
    )


def execute_write_back(
    client: SpreadsheetClient, sheet_name: str, plan: WriteBackPlan
) -> None:
    """Create the header if needed, clear the column, then write the averages"""
    if plan.header_range is not None:
        logger.info(f"Adding {MOVING_AVERAGE_HEADER!r} header at {plan.header_range}")
        client.write_range(sheet_name, plan.header_range, [[MOVING_AVERAGE_HEADER]])

    client.clear_range(sheet_name, plan.clear_range)
    client.write_range(sheet_name, plan.update_range, plan.values)
    logger.info(f"Wrote {len(plan.values)} moving averages to {sheet_name}!{plan.update_range}")
