import logging
import os
from pathlib import Path
from dotenv import load_dotenv

# --- Base Directory ---
BASE_DIR = Path(__file__).resolve().parent.parent

# --- Load Environment Variables ---
load_dotenv(BASE_DIR / ".env")


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


# --- Path Configuration ---
# Use Path objects for robust, OS-agnostic path handling.
INPUT_DIR = BASE_DIR / os.getenv("INPUT_DIR", "input")
OUTPUT_DIR = BASE_DIR / os.getenv("OUTPUT_DIR", "output")
LOG_DIR = BASE_DIR / os.getenv("LOG_DIR", "logs")

# --- Filename Configuration ---
INPUT_FILENAME = os.getenv("INPUT_FILENAME", "inventory.txt")
REPORT_FILENAME_BASE = os.getenv("REPORT_FILENAME", "stock_report")

# --- Output Toggles ---
SAVE_CSV_OUTPUT = _env_flag("SAVE_CSV_OUTPUT", "true")
SAVE_JSON_OUTPUT = _env_flag("SAVE_JSON_OUTPUT", "false")

# --- Logging ---
LOG_LEVEL = logging.getLevelName(os.getenv("LOG_LEVEL", "INFO").upper())

# --- Shared Business Logic ---
# Items priced above this many pence are counted by the price-threshold query.
PRICE_THRESHOLD = int(os.getenv("PRICE_THRESHOLD", "10"))

# Friendly column headers for the CSV report.
REPORT_COLUMNS = {
    "component_type": "Component Type",
    "stock_code": "Stock Code",
    "stock_amount": "Stock Amount",
    "unit_price": "Unit Price (p)",
    "resistance": "Resistance (ohms)",
    "capacitance": "Capacitance (pf)",
    "device_type": "Device Type",
    "description": "Description",
}
