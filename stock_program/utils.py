import logging
from datetime import datetime
from pathlib import Path

logger = logging.getLogger(__name__)


def get_date_suffix_for_filename() -> str:
    """Returns the current date as a YYYY-MM-DD string for filenames."""
    return datetime.now().strftime("%Y-%m-%d")


def format_quantity(value: float, precision: int) -> str:
    """Fixed-point rendering of a measured value, e.g. (5100000, 2) -> '5100000.00'."""
    if precision < 0:
        raise ValueError("precision must be zero or positive")
    return f"{value:.{precision}f}"


def read_lines(file_path: Path) -> list[str]:
    """
    Reads a stock file into a list of lines with an encoding fallback:
    1. UTF-8 with BOM support ('utf-8-sig').
    2. Latin-1, which can decode any byte sequence.
    A missing file raises FileNotFoundError for the caller to handle.
    """
    file_path = Path(file_path)
    try:
        text = file_path.read_text(encoding="utf-8-sig")
    except UnicodeDecodeError:
        logger.info(
            f"UTF-8 decoding failed for {file_path.name}. Retrying with 'latin-1'."
        )
        text = file_path.read_text(encoding="latin-1")
    return text.splitlines()
