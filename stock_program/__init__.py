from .exceptions import FormatError, StockError, UnknownTypeError, ValidationError
from .inventory import Inventory
from .parsers import load_inventory, parse_lines, parse_record
from .schemas import (
    Capacitor,
    DeviceType,
    Diode,
    IntegratedCircuit,
    Resistor,
    StockItem,
    Transistor,
    parse_stock_item,
)

__all__ = [
    "Capacitor",
    "DeviceType",
    "Diode",
    "FormatError",
    "IntegratedCircuit",
    "Inventory",
    "Resistor",
    "StockError",
    "StockItem",
    "Transistor",
    "UnknownTypeError",
    "ValidationError",
    "load_inventory",
    "parse_lines",
    "parse_record",
    "parse_stock_item",
]
