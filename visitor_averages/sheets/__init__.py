from .client import GoogleSheetsClient, SheetError, SpreadsheetClient, a1_range


__all__ = [
    "GoogleSheetsClient",
    "SheetError",
    "SpreadsheetClient",
    "a1_range",
]
