import logging
import os
from typing import Optional, TypedDict

import typer
from dotenv import load_dotenv

from visitor_averages.averages.calculator import MovingAverageCalculator
from visitor_averages.averages.errors import MovingAverageError
from visitor_averages.averages.models import DEFAULT_SHEET_NAME, RunOptions, parse_window_size
from visitor_averages.logging_config import setup_logging
from visitor_averages.sheets.client import GoogleSheetsClient

app = typer.Typer(
    help='Calculate moving averages and update the "Moving Average" column in Google Sheets.',
    add_completion=False,
)
logger = logging.getLogger(__name__)


class AppConfig(TypedDict):
    """Configuration for the application"""

    SPREADSHEET_ID: str
    GOOGLE_CREDENTIALS: str


def load_config() -> AppConfig:
    """Load configuration from environment variables"""
    load_dotenv()

    required_vars = {
        "SPREADSHEET_ID": os.getenv("SPREADSHEET_ID"),
        "GOOGLE_CREDENTIALS": os.getenv("GOOGLE_CREDENTIALS"),
    }

    missing = [k for k, v in required_vars.items() if not v]
    if missing:
        raise OSError(f"Missing required environment variables: {', '.join(missing)}")

    return required_vars


@app.command()
def calculate(
    sheet_name: str = typer.Option(
        DEFAULT_SHEET_NAME, "--sheet-name", help="Name of the sheet holding Date and Visitors."
    ),
    window_size: Optional[str] = typer.Option(
        None, "--window-size", help="Trailing window size. Defaults to the number of data rows."
    ),
) -> None:
    """Calculate moving averages and write them to the "Moving Average" column.

    Failures are printed as an "Error:" line; the exit status is always 0 so a
    scheduler simply retries on its next run.
    """
    typer.echo("Starting to calculate moving averages...")

    try:
        setup_logging()
        options = RunOptions(sheet_name=sheet_name, window_size=parse_window_size(window_size))
        config = load_config()
        sheets_client = GoogleSheetsClient(
            spreadsheet_id=config["SPREADSHEET_ID"],
            credentials_path=config["GOOGLE_CREDENTIALS"],
        )
    except MovingAverageError as e:
        logger.error(f"Rejected options: {e}")
        typer.echo(f"Error: {e}")
        return
    except Exception as e:
        logger.exception("Could not set up the moving average run")
        typer.echo(f"Error: {e}")
        return

    result = MovingAverageCalculator(sheets_client, options).run()

    if result.ok:
        typer.echo(result.message)
    else:
        typer.echo(f"Error: {result.message}")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
