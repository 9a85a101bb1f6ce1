import logging
import math
from datetime import date, datetime, timedelta
from typing import Any, List, Optional, Sequence, Union

from .errors import InvalidDataError

logger = logging.getLogger(__name__)

DATE_HEADER = "Date"
VISITORS_HEADER = "Visitors"

DATE_FORMATS = (
    "%Y-%m-%d",
    "%Y/%m/%d",
    "%m/%d/%Y",
    "%d %B %Y",
    "%B %d, %Y",
    "%A, %B %d, %Y",
)

ONE_DAY = timedelta(days=1)


def parse_sheet_date(value: Any) -> Optional[date]:
    """Parse a Date cell, returning None when it is not a calendar date"""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None

    text = value.strip()
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        return None


def parse_visitors(value: Any) -> Optional[Union[int, float]]:
    """Parse a Visitors cell, returning None when it is not a finite number"""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = value
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None

    if not math.isfinite(number):
        return None
    if isinstance(number, float) and number.is_integer():
        return int(number)
    return number


def column_index(header: Sequence[Any], label: str) -> int:
    """Find the position of a label that must appear exactly once in the header"""
    matches = [i for i, cell in enumerate(header) if cell == label]
    if len(matches) != 1:
        raise InvalidDataError(f"header must contain {label!r} exactly once")
    return matches[0]


def validate_rows(rows: List[List[Any]], now: Optional[datetime] = None) -> None:
    """Check that rows form a gap-free daily series of visitor counts.

    The first row is the header; the remaining rows are data rows which must
    hold a date and a non-negative visitor count, one row per consecutive
    calendar day, none of them in the future.

    Args:
        rows: Header followed by data rows, as read from the sheet.
        now: Evaluation time. Defaults to the current time.

    Raises:
        InvalidDataError: At the first violated condition.

    """
    if not rows:
        raise InvalidDataError("no rows")

    today = (now or datetime.now()).date()
    header = rows[0]
    date_index = column_index(header, DATE_HEADER)
    visitors_index = column_index(header, VISITORS_HEADER)

    previous: Optional[date] = None
    for row_number, row in enumerate(rows[1:], start=2):
        if len(row) != 2:
            raise InvalidDataError(f"row {row_number} has {len(row)} cells, expected 2")

        visitors = parse_visitors(row[visitors_index])
        if visitors is None or visitors < 0:
            raise InvalidDataError(
                f"row {row_number} has an invalid visitor count: {row[visitors_index]!r}"
            )

        current = parse_sheet_date(row[date_index])
        if current is None:
            raise InvalidDataError(f"row {row_number} has an invalid date: {row[date_index]!r}")
        if current > today:
            raise InvalidDataError(f"row {row_number} is dated in the future: {current}")

        if previous is not None:
            if current <= previous:
                raise InvalidDataError(f"row {row_number} does not follow {previous}")
            if current - previous != ONE_DAY:
                raise InvalidDataError(f"row {row_number} leaves a gap after {previous}")
        previous = current


def is_valid(rows: List[List[Any]], now: Optional[datetime] = None) -> bool:
    """Return whether rows pass validate_rows"""
    try:
        validate_rows(rows, now=now)
    except InvalidDataError as e:
        logger.debug(f"Rows rejected: {e.reason}")
        return False
    return True
