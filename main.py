import argparse
import sys
from pathlib import Path

from stock_program.logger import setup_logger
from stock_program.pipelines.stock import StockPipeline


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Load an electronics stock file and answer the stock queries."
    )
    parser.add_argument(
        "--input",
        type=Path,
        default=None,
        help="Stock file to load (defaults to INPUT_DIR/INPUT_FILENAME).",
    )
    parser.add_argument(
        "--threshold",
        type=int,
        default=None,
        help="Unit price in pence for the 'priced above' query.",
    )
    parser.add_argument(
        "--no-save",
        action="store_true",
        help="Print the report without writing CSV/JSON outputs.",
    )
    return parser.parse_args(argv)


def run_process(argv=None) -> int:
    """Main orchestration function: load, query and report on one stock file."""
    args = parse_args(argv)
    setup_logger("stock_program")

    pipeline = StockPipeline(
        input_path=args.input,
        price_threshold=args.threshold,
        save_outputs=not args.no_save,
    )
    result = pipeline.run()
    return 0 if result is not None else 1


if __name__ == "__main__":
    sys.exit(run_process())
