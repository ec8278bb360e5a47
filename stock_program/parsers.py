import logging
import re
from pathlib import Path
from typing import Iterable

from pydantic import BaseModel, ConfigDict

from .exceptions import FormatError, StockError, UnknownTypeError
from .inventory import Inventory
from .schemas import (
    Capacitor,
    Diode,
    IntegratedCircuit,
    RecordIssue,
    Resistor,
    StockItem,
    Transistor,
)
from .utils import read_lines

logger = logging.getLogger(__name__)

# --- Record Registry ---
# Type tag (as written in the stock file) -> model and the field that receives
# the fifth column. Tags are case-sensitive.
RECORD_REGISTRY = {
    "resistor": {"model": Resistor, "extra_field": "resistance"},
    "capacitor": {"model": Capacitor, "extra_field": "capacitance"},
    "transistor": {"model": Transistor, "extra_field": "device_type"},
    "diode": {"model": Diode, "extra_field": None},
    "IC": {"model": IntegratedCircuit, "extra_field": "description"},
}

_INTEGER = re.compile(r"[+-]?[0-9]+")


class ParseResult(BaseModel):
    """The inventory built from a stock file plus every line that was skipped."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    inventory: Inventory
    issues: list[RecordIssue] = []


def _parse_int(value: str, field_name: str) -> int:
    if not _INTEGER.fullmatch(value):
        raise FormatError(f"{field_name} '{value}' is not a whole number.")
    try:
        return int(value)
    except ValueError:
        # Longer than the interpreter's int-conversion digit limit.
        raise FormatError(f"{field_name} has too many digits.") from None


def parse_record(line: str) -> StockItem:
    """
    Builds one stock item from a line such as 'resistor, R1, 5, 4, 5M1'.

    The line is split on the first four commas only, so an IC description
    may itself contain commas. Raises UnknownTypeError for an unknown tag,
    FormatError for a wrong field count or a malformed number/code, and
    ValidationError when a value breaks a stock invariant.
    """
    fields = [field.strip() for field in line.split(",", 4)]
    type_tag = fields[0]

    config = RECORD_REGISTRY.get(type_tag)
    if config is None:
        raise UnknownTypeError(f"Unknown component type '{type_tag}'.")

    extra_field = config["extra_field"]
    expected_fields = 4 if extra_field is None else 5
    if len(fields) != expected_fields:
        raise FormatError(
            f"A {type_tag} record needs {expected_fields} fields, got {len(fields)}."
        )

    data = {
        "stock_code": fields[1],
        "stock_amount": _parse_int(fields[2], "Stock amount"),
        "unit_price": _parse_int(fields[3], "Unit price"),
    }
    if extra_field is not None:
        data[extra_field] = fields[4]

    return config["model"](**data)


def parse_lines(lines: Iterable[str]) -> ParseResult:
    """
    Parses every non-blank line into a new Inventory.
    A line that fails is logged, recorded as an issue and skipped; it never
    aborts the rest of the load.
    """
    inventory = Inventory()
    issues = []

    for line_number, raw_line in enumerate(lines, start=1):
        line = raw_line.strip()
        if not line:
            continue

        try:
            item = parse_record(line)
        except StockError as e:
            logger.warning(
                f"⚠️ Skipping line {line_number} ({type(e).__name__}): {e}"
            )
            issues.append(
                RecordIssue(
                    line_number=line_number,
                    line=line,
                    error_type=type(e).__name__,
                    message=str(e),
                )
            )
            continue

        inventory.add(item)

    logger.info(
        f"✅ Loaded {inventory.get_size()} stock items ({len(issues)} skipped)."
    )
    return ParseResult(inventory=inventory, issues=issues)


def load_inventory(file_path: Path) -> ParseResult:
    """Reads a stock file from disk and parses it."""
    logger.info(f"Reading stock file: {file_path}")
    return parse_lines(read_lines(file_path))
