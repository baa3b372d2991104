from __future__ import annotations

from typing import Literal

from pydantic import Field

from data_designer.config.column_configs import SingleColumnConfig


class SonaiColumnConfig(SingleColumnConfig):
    """Estimate how likely text columns are to be AI-written.

    Concatenates the target columns of each row, derives a stylistic feature
    vector and scores it against a pretrained two-centroid model.

    Attributes:
        target_columns: Columns whose text content will be concatenated and scored.
        model_dir: Directory holding ``model.kmeans``, ``model.scaler`` and
            ``model.ai.cluster``.
        max_chance_ai: Highest AI chance (0-100) for ``is_valid=True``. Defaults to 50.
        include_metrics: Include the per-text metrics the score was derived from.
    """

    target_columns: list[str]
    model_dir: str = Field(description="Directory holding the model, scaler and AI cluster artifacts")
    max_chance_ai: float = Field(default=50.0, ge=0, le=100, description="Highest AI chance for is_valid=True")
    include_metrics: bool = Field(default=False, description="Include raw text metrics in output")
    column_type: Literal["sonai-detector"] = "sonai-detector"

    @staticmethod
    def get_column_emoji() -> str:
        return "\U0001f50e"

    @property
    def required_columns(self) -> list[str]:
        return self.target_columns

    @property
    def side_effect_columns(self) -> list[str]:
        return []
