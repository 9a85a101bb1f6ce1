from typing import Any, Optional


class MovingAverageError(Exception):
    """Base class for errors raised while computing moving averages"""

    pass


class SheetNotFoundError(MovingAverageError):
    """The requested sheet is not part of the spreadsheet"""

    def __init__(self, sheet_name: str):
        self.sheet_name = sheet_name
        super().__init__(f'Sheet with name "{sheet_name}" does not exist.')


class InvalidDataError(MovingAverageError):
    """The fetched rows are not a well-formed daily visitor series"""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__("Invalid Data.")


class InvalidWindowError(MovingAverageError):
    """The window size is not positive or exceeds the number of data rows"""

    def __init__(self, window_size: Any, data_row_count: Optional[int] = None):
        self.window_size = window_size
        self.data_row_count = data_row_count
        super().__init__("Invalid data or window size.")
