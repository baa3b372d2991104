# SPDX-License-Identifier: Apache-2.0
"""AI-authorship detector plugin for NeMo Data Designer.

Adds a ``sonai-detector`` column type that turns text into a 15-feature
stylistic fingerprint (emoji, buzzwords, irregular punctuation, markdown
structure, ...) and scores it against a pretrained two-centroid model.
No LLM calls, no API dependencies.

Usage::

    from data_designer_sonai import Detector, SonaiColumnConfig

    detector = Detector.from_directory("models/")
    detector.predict("Devlog #3: shipped the new level editor!").chance_ai

    builder.add_column(SonaiColumnConfig(
        name="ai_check",
        target_columns=["devlog"],
        model_dir="models/",
    ))
"""

from data_designer_sonai.config import SonaiColumnConfig
from data_designer_sonai.core import Detector, Prediction, predict
from data_designer_sonai.features import vectorize
from data_designer_sonai.lexicon import LexiconError
from data_designer_sonai.metrics import Hyperparameters, TextMetricFactory, TextMetrics
from data_designer_sonai.scoring import ArtifactError, ClusterModel, Distance, LinearScaler

__all__ = [
    "SonaiColumnConfig",
    "Detector",
    "Prediction",
    "predict",
    "vectorize",
    "Hyperparameters",
    "TextMetricFactory",
    "TextMetrics",
    "ClusterModel",
    "LinearScaler",
    "Distance",
    "ArtifactError",
    "LexiconError",
]
