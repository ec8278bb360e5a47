import logging
from pathlib import Path
from typing import Optional

from stock_program import data_handler, parsers, settings, utils
from stock_program.inventory import Inventory
from stock_program.parsers import ParseResult
from stock_program.pipeline import DataPipeline
from stock_program.schemas import DeviceType, StockSummary

logger = logging.getLogger(__name__)


def build_summary(
    inventory: Inventory, price_threshold: int, skipped_records: int = 0
) -> StockSummary:
    """Answers the fixed stock queries for one inventory."""
    max_item = inventory.max_stock_item()
    return StockSummary(
        total_items=inventory.get_size(),
        skipped_records=skipped_records,
        max_stock_code=max_item.stock_code if max_item else None,
        max_stock_amount=max_item.stock_amount if max_item else None,
        npn_transistors=inventory.count_device_type(DeviceType.NPN),
        npn_transistor_stock=inventory.count_device_stock(DeviceType.NPN),
        total_resistance=inventory.total_resistance(),
        price_threshold=price_threshold,
        items_above_threshold=inventory.count_above_price(price_threshold),
    )


class StockPipeline(DataPipeline):
    def __init__(
        self,
        input_path: Optional[Path] = None,
        price_threshold: Optional[int] = None,
        save_outputs: bool = True,
    ):
        super().__init__("stock", save_outputs=save_outputs)
        self.input_path = (
            Path(input_path)
            if input_path is not None
            else settings.INPUT_DIR / settings.INPUT_FILENAME
        )
        self.price_threshold = (
            price_threshold if price_threshold is not None else settings.PRICE_THRESHOLD
        )
        self.summary: Optional[StockSummary] = None

    def extract(self) -> list[str] | None:
        logger.info(f"--- Reading stock file: {self.input_path} ---")
        try:
            return utils.read_lines(self.input_path)
        except FileNotFoundError:
            logger.error(f"❌ Stock file not found: {self.input_path}")
            return None

    def transform(self, lines: list[str]) -> ParseResult:
        result = parsers.parse_lines(lines)
        if result.issues:
            logger.warning(f"⚠️ {len(result.issues)} record(s) were skipped.")

        # Query 1: the report lists items from cheapest to most expensive.
        result.inventory.sort_by_price(ascending=True)

        self.summary = build_summary(
            result.inventory, self.price_threshold, skipped_records=len(result.issues)
        )
        return result

    def load(self, result: ParseResult) -> None:
        logger.info("\n--- Inventory Sorted By Price ---")
        logger.info(result.inventory.render())

        logger.info("--- Query Results ---")
        logger.info(data_handler.format_summary(self.summary))

        if self.save_outputs:
            data_handler.save_outputs(result.inventory, self.summary)
        else:
            logger.info("Skipping file outputs.")
