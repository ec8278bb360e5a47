import logging
from abc import ABC, abstractmethod
from typing import Any, Optional

logger = logging.getLogger(__name__)


class DataPipeline(ABC):
    """
    Abstract base class for report pipelines.
    Follows an Extract -> Transform -> Load (ETL) pattern.
    """

    def __init__(self, report_type: str, save_outputs: bool = True):
        self.report_type = report_type
        self.save_outputs = save_outputs

    def run(self) -> Optional[Any]:
        """
        Orchestrates the pipeline execution. Returns the transformed data,
        or None when nothing could be extracted.
        """
        logger.info(f"🚀 STEP: {self.report_type.upper()} REPORT")
        logger.info("-" * 30)

        # --- 1. EXTRACT ---
        raw_data = self.extract()
        if raw_data is None:
            logger.warning(f"⚠️ No data extracted for {self.report_type}.")
            return None

        # --- 2. TRANSFORM ---
        transformed = self.transform(raw_data)

        # --- 3. LOAD ---
        self.load(transformed)

        logger.info(f"✅ {self.report_type.capitalize()} Pipeline Finished.\n")
        logger.info("=" * 60)
        return transformed

    @abstractmethod
    def extract(self) -> Optional[Any]:
        """Reads the raw input. Returns None when the source is unavailable."""
        pass

    @abstractmethod
    def transform(self, raw_data: Any) -> Any:
        """Turns raw input into validated domain objects."""
        pass

    @abstractmethod
    def load(self, data: Any) -> None:
        """Reports and saves the transformed data."""
        pass
