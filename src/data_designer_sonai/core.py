from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator

from data_designer_sonai.features import vectorize
from data_designer_sonai.lexicon import LexiconSet
from data_designer_sonai.metrics import Hyperparameters, TextMetricFactory, TextMetrics
from data_designer_sonai.scoring import (
    N_CLUSTERS,
    ArtifactError,
    ClusterModel,
    LinearScaler,
    load_artifacts,
    point_confidence,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Prediction:
    chance_ai: float
    chance_human: float
    metrics: TextMetrics

    @property
    def label(self) -> str:
        return "ai" if self.chance_ai >= self.chance_human else "human"

    def to_payload(self) -> dict[str, object]:
        return {
            "chance_ai": self.chance_ai,
            "chance_human": self.chance_human,
            "metrics": self.metrics.to_payload(),
        }


@dataclass(frozen=True, eq=False)
class Detector:
    """Everything needed to score text, built once and shared read-only.

    Attributes:
        factory: Metric aggregator holding the compiled lexicons.
        model: Two-centroid cluster model in scaled feature space.
        scaler: Linear scaler fit alongside ``model``.
        ai_cluster: Index of the centroid that represents AI-written text.
    """

    factory: TextMetricFactory
    model: ClusterModel
    scaler: LinearScaler
    ai_cluster: int

    def __post_init__(self) -> None:
        if self.ai_cluster not in range(N_CLUSTERS):
            raise ArtifactError(f"ai_cluster must be in [0, {N_CLUSTERS - 1}], got {self.ai_cluster}")
        if self.model.n_features != self.scaler.n_features:
            raise ArtifactError(
                f"Model has {self.model.n_features} features but scaler has {self.scaler.n_features}"
            )

    @classmethod
    def from_directory(
        cls,
        directory: str | Path,
        lexicons: LexiconSet | None = None,
        hyperparameters: Hyperparameters | None = None,
    ) -> Detector:
        model, scaler, ai_cluster = load_artifacts(directory)
        factory = TextMetricFactory(lexicons=lexicons, hyperparameters=hyperparameters)
        logger.debug(f"Detector ready with {len(model.centroids)} centroids from {directory}")
        return cls(factory=factory, model=model, scaler=scaler, ai_cluster=ai_cluster)

    def score(self, metrics: TextMetrics) -> Prediction:
        features = vectorize(metrics)
        scaled = self.scaler.transform(features)
        _, sims = point_confidence(self.model, scaled)

        chance_ai = float(sims[self.ai_cluster]) * 100.0
        return Prediction(chance_ai=chance_ai, chance_human=100.0 - chance_ai, metrics=metrics)

    def predict(self, text: str) -> Prediction:
        return self.score(self.factory.calculate(text))

    def predict_iter(self, texts: Iterable[str]) -> Iterator[Prediction]:
        return (self.predict(text) for text in texts)


def predict(text: str, detector: Detector) -> Prediction:
    """Estimate how likely ``text`` is to be AI-written.

    Args:
        text: Raw text, optionally markdown. Any string is accepted.
        detector: A ``Detector`` built once at startup.

    Returns:
        ``Prediction`` with ``chance_ai`` and ``chance_human`` (percentages
        summing to 100) and the ``TextMetrics`` they were derived from.
    """
    return detector.predict(text)
