from __future__ import annotations

import logging
from functools import lru_cache
from typing import TYPE_CHECKING

from data_designer.engine.column_generators.generators.base import ColumnGeneratorFullColumn

from data_designer_sonai.config import SonaiColumnConfig
from data_designer_sonai.core import Detector

if TYPE_CHECKING:
    import pandas as pd

logger = logging.getLogger(__name__)


@lru_cache(maxsize=None)
def _load_detector(model_dir: str) -> Detector:
    return Detector.from_directory(model_dir)


class SonaiColumnGenerator(ColumnGeneratorFullColumn[SonaiColumnConfig]):
    """Column generator that scores text for AI authorship with a cluster model."""

    def generate(self, data: pd.DataFrame) -> pd.DataFrame:
        logger.info(f"\U0001f50e Scoring column {self.config.name!r} for AI authorship")
        logger.info(f"   target columns: {self.config.target_columns}")
        logger.info(f"   model dir: {self.config.model_dir}")

        detector = _load_detector(self.config.model_dir)
        results = []
        for _, row in data[self.config.target_columns].iterrows():
            text = " ".join(str(v) for v in row.values if v is not None)
            prediction = detector.predict(text)
            output: dict = {
                "is_valid": prediction.chance_ai <= self.config.max_chance_ai,
                "chance_ai": prediction.chance_ai,
                "chance_human": prediction.chance_human,
                "label": prediction.label,
            }
            if self.config.include_metrics:
                output["metrics"] = prediction.metrics.to_payload()
            results.append(output)

        data = data.copy()
        data[self.config.name] = results
        return data
