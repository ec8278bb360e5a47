import json
import logging
from pathlib import Path

from . import settings
from . import utils
from .inventory import Inventory
from .schemas import StockSummary

logger = logging.getLogger(__name__)


def format_summary(summary: StockSummary) -> str:
    """Plain-text answers to the fixed queries, one per line."""
    if summary.max_stock_code is None:
        max_stock = "n/a (inventory is empty)"
    else:
        max_stock = f"{summary.max_stock_code} ({summary.max_stock_amount} in stock)"

    return "\n".join(
        [
            f"Stock items loaded: {summary.total_items} ({summary.skipped_records} skipped)",
            f"Item with the largest stock: {max_stock}",
            f"NPN transistors: {summary.npn_transistors} "
            f"({summary.npn_transistor_stock} units in stock)",
            f"Total resistance of all resistors: "
            f"{utils.format_quantity(summary.total_resistance, 2)} ohms",
            f"Items priced above {summary.price_threshold}p: "
            f"{summary.items_above_threshold}",
        ]
    )


def save_outputs(inventory: Inventory, summary: StockSummary) -> list[Path]:
    """Saves the inventory to CSV and conditionally to JSON, with dated filenames."""
    settings.OUTPUT_DIR.mkdir(parents=True, exist_ok=True)
    date_suffix = utils.get_date_suffix_for_filename()
    written = []

    csv_path = settings.OUTPUT_DIR / f"{settings.REPORT_FILENAME_BASE}_{date_suffix}.csv"
    json_path = settings.OUTPUT_DIR / f"{settings.REPORT_FILENAME_BASE}_{date_suffix}.json"

    if settings.SAVE_CSV_OUTPUT:
        df_for_csv = inventory.to_dataframe().rename(columns=settings.REPORT_COLUMNS)
        df_for_csv.to_csv(csv_path, index=False)
        logger.info(f"✅ Stock report saved to: {csv_path}")
        written.append(csv_path)
    else:
        logger.info("Skipping CSV file save as per configuration.")

    if settings.SAVE_JSON_OUTPUT:
        with open(json_path, "w", encoding="utf-8") as f:
            json_data = {
                "items": [item.model_dump(mode="json") for item in inventory],
                "summary": summary.model_dump(mode="json"),
            }
            json.dump(json_data, f, indent=2)
        logger.info(f"✅ JSON output saved to: {json_path}")
        written.append(json_path)
    else:
        logger.info("Skipping JSON file save as per configuration.")

    return written
