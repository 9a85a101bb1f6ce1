from typing import Any, List

from .errors import InvalidWindowError
from .validator import VISITORS_HEADER, column_index, parse_visitors


def compute_moving_averages(rows: List[List[Any]], window_size: int) -> List[List[float]]:
    """Compute the trailing mean of the Visitors column.

    ``rows`` must already be validated; the header is ``rows[0]``. Each output
    row holds a single value and lines up with the last data row of its
    window, so the first ``window_size - 1`` data rows get no average.
    """
    data_rows = rows[1:]
    if window_size <= 0 or window_size > len(data_rows):
        raise InvalidWindowError(window_size, len(data_rows))

    visitors_index = column_index(rows[0], VISITORS_HEADER)
    visitors = [parse_visitors(row[visitors_index]) for row in data_rows]

    moving_averages = []
    for end in range(window_size - 1, len(visitors)):
        window = visitors[end - window_size + 1 : end + 1]
        moving_averages.append([sum(window) / window_size])
    return moving_averages
