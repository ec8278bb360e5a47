import math
import re
from decimal import Decimal
from enum import Enum
from typing import Annotated, Any, ClassVar, Literal, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PrivateAttr,
    TypeAdapter,
    field_validator,
)
from pydantic import ValidationError as PydanticValidationError

from .exceptions import FormatError, UnknownTypeError, ValidationError
from .utils import format_quantity

# Letter -> multiplier. The letter's position in a resistor code is the decimal point.
RESISTOR_MULTIPLIERS = {"R": 1, "K": 1_000, "M": 1_000_000}

# Capacitor unit suffix -> multiplier to picofarads.
CAPACITOR_MULTIPLIERS = {
    "m": 1_000_000_000,
    "u": 1_000_000,
    "n": 1_000,
    "p": 1,
}

_RESISTOR_NUMERAL = re.compile(r"[0-9]*\.[0-9]*")


def _translate_error(exc: PydanticValidationError) -> Exception:
    """
    Maps a pydantic validation failure onto our own error taxonomy.
    A FormatError raised by one of the code converters is surfaced as-is,
    an unknown discriminator becomes UnknownTypeError, anything else is a
    ValidationError.
    """
    errors = exc.errors()
    for error in errors:
        cause = (error.get("ctx") or {}).get("error")
        if isinstance(cause, FormatError):
            return cause
        if error["type"] == "union_tag_invalid":
            return UnknownTypeError(error["msg"])

    details = "; ".join(
        f"{'.'.join(str(part) for part in error['loc']) or 'item'}: {error['msg']}"
        for error in errors
    )
    return ValidationError(details)


def _scale(numeral: str, multiplier: int, label: str) -> float:
    """Exact numeral x multiplier as a float; values a float cannot hold are a FormatError."""
    try:
        value = float(Decimal(numeral) * multiplier)
    except ArithmeticError:
        raise FormatError(f"{label} is out of range.") from None
    if math.isinf(value):
        raise FormatError(f"{label} is out of range.")
    return value

class DeviceType(str, Enum):
    NPN = "NPN"
    PNP = "PNP"
    FET = "FET"


class StockItem(BaseModel):
    """
    Common contract for one inventory record. Concrete variants fix
    `component_type` and add their own field; construction and assignment
    are both validated, so an item can never hold a negative stock amount
    or a non-positive price.
    """

    model_config = ConfigDict(validate_assignment=True)

    # Used as the default when render() is called without an explicit precision.
    RENDER_PRECISION: ClassVar[int] = 0

    component_type: str
    stock_code: str = Field(..., min_length=1)
    stock_amount: int = Field(..., ge=0)
    unit_price: int = Field(..., gt=0)  # pence

    # Weak reference to the Inventory that currently owns this item.
    _owner: Any = PrivateAttr(default=None)

    def __init__(self, **data: Any) -> None:
        if type(self) is StockItem:
            raise TypeError("StockItem is abstract; build one of its component variants.")
        try:
            super().__init__(**data)
        except PydanticValidationError as e:
            raise _translate_error(e) from e

    def __setattr__(self, name: str, value: Any) -> None:
        try:
            super().__setattr__(name, value)
        except PydanticValidationError as e:
            raise _translate_error(e) from e

    # Copies start out unowned; model_copy goes through these too.
    def __copy__(self):
        duplicate = super().__copy__()
        duplicate._owner = None
        return duplicate

    def __deepcopy__(self, memo: Optional[dict] = None):
        duplicate = super().__deepcopy__(memo)
        duplicate._owner = None
        return duplicate

    def set_stock_amount(self, amount: int) -> None:
        self.stock_amount = amount

    def set_unit_price(self, price: int) -> None:
        self.unit_price = price

    def render_detail(self, precision: int) -> Optional[str]:
        """The variant-specific line of the report block, if the variant has one."""
        return None

    def render(self, precision: Optional[int] = None) -> str:
        if precision is None:
            precision = self.RENDER_PRECISION

        lines = [
            f"Component Type: {self.component_type}",
            f"Stock Code: {self.stock_code}",
            f"Stock Amount: {self.stock_amount}",
            f"Unit Price: {self.unit_price}p",
        ]
        detail = self.render_detail(precision)
        if detail is not None:
            lines.append(detail)
        return "\n".join(lines) + "\n"

    def __str__(self) -> str:
        return self.render()


class Resistor(StockItem):
    RENDER_PRECISION: ClassVar[int] = 2

    component_type: Literal["Resistor"] = "Resistor"
    resistance: float = Field(..., ge=0, allow_inf_nan=False)  # ohms

    @field_validator("resistance", mode="before")
    @classmethod
    def _resistance_from_code(cls, value: Any) -> Any:
        if isinstance(value, str):
            return cls.calculate_resistance(value)
        return value

    @staticmethod
    def calculate_resistance(code: str) -> float:
        """
        Converts a resistor code such as '4R7', '10K' or '5M1' into ohms.

        Exactly one of R, K or M must appear; it stands in for the decimal
        point and selects the multiplier (x1, x1000, x1000000).
        """
        markers = [(i, char) for i, char in enumerate(code) if char in RESISTOR_MULTIPLIERS]
        if len(markers) != 1:
            raise FormatError(
                f"Resistor code '{code}' must contain exactly one of "
                f"{', '.join(RESISTOR_MULTIPLIERS)}."
            )

        position, letter = markers[0]
        numeral = code[:position] + "." + code[position + 1 :]
        if numeral == "." or not _RESISTOR_NUMERAL.fullmatch(numeral):
            raise FormatError(f"Resistor code '{code}' has no valid numeric value.")

        return _scale(numeral, RESISTOR_MULTIPLIERS[letter], f"Resistor code '{code}'")

    def set_resistance(self, code: str) -> None:
        self.resistance = code

    def render_detail(self, precision: int) -> Optional[str]:
        return f"Total Resistance: {format_quantity(self.resistance, precision)}ohms"


class Capacitor(StockItem):
    RENDER_PRECISION: ClassVar[int] = 0

    component_type: Literal["Capacitor"] = "Capacitor"
    capacitance: float = Field(..., ge=0, allow_inf_nan=False)  # picofarads

    @field_validator("capacitance", mode="before")
    @classmethod
    def _capacitance_from_code(cls, value: Any) -> Any:
        if isinstance(value, str):
            return cls.convert_to_pico_farads(value)
        return value

    @staticmethod
    def convert_to_pico_farads(code: str) -> float:
        """
        Converts a capacitance such as '2400', '100n' or '10uf' into picofarads.
        Bare digits are already picofarads.
        """
        digits = ""
        for position, char in enumerate(code):
            if char.isascii() and char.isdigit():
                digits += char
                continue

            if not digits:
                raise FormatError(f"Capacitance '{code}' has no numeric value.")

            multiplier = CAPACITOR_MULTIPLIERS.get(char)
            if multiplier is None:
                raise FormatError(f"Capacitance '{code}' has an unrecognised unit '{char}'.")

            # Only a farad marker may follow the unit, e.g. '100nf'.
            if code[position + 1 :] not in ("", "f", "F"):
                raise FormatError(f"Capacitance '{code}' has trailing characters.")

            return _scale(digits, multiplier, f"Capacitance '{code}'")

        if not digits:
            raise FormatError("Capacitance is empty.")
        return _scale(digits, 1, f"Capacitance '{code}'")

    def set_capacitance(self, code: str) -> None:
        self.capacitance = code

    def render_detail(self, precision: int) -> Optional[str]:
        return f"Total Capacitance: {format_quantity(self.capacitance, precision)}pf"


class Diode(StockItem):
    component_type: Literal["Diode"] = "Diode"


class Transistor(StockItem):
    component_type: Literal["Transistor"] = "Transistor"
    device_type: DeviceType

    def set_device_type(self, device_type: Union[str, DeviceType]) -> None:
        self.device_type = device_type

    def render_detail(self, precision: int) -> Optional[str]:
        return f"Device Type: {self.device_type.value}"


class IntegratedCircuit(StockItem):
    component_type: Literal["Integrated Circuit"] = "Integrated Circuit"
    description: str = ""

    def set_description(self, description: str) -> None:
        self.description = description

    def render_detail(self, precision: int) -> Optional[str]:
        return f"Description: {self.description}"


AnyStockItem = Annotated[
    Union[Resistor, Capacitor, Diode, Transistor, IntegratedCircuit],
    Field(discriminator="component_type"),
]

_STOCK_ITEM_ADAPTER = TypeAdapter(AnyStockItem)


def parse_stock_item(data: dict[str, Any]) -> StockItem:
    """Validates a plain mapping (e.g. a dumped JSON record) into the matching variant."""
    try:
        return _STOCK_ITEM_ADAPTER.validate_python(data)
    except PydanticValidationError as e:
        raise _translate_error(e) from e


class RecordIssue(BaseModel):
    """One input line that could not be turned into a stock item."""

    line_number: int = Field(..., ge=1)
    line: str
    error_type: str
    message: str


class StockSummary(BaseModel):
    """Answers to the fixed inventory queries for one run."""

    total_items: int = 0
    skipped_records: int = 0
    max_stock_code: Optional[str] = None
    max_stock_amount: Optional[int] = None
    npn_transistors: int = 0
    npn_transistor_stock: int = 0
    total_resistance: float = 0.0
    price_threshold: int
    items_above_threshold: int = 0
