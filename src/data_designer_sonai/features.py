from __future__ import annotations

from typing import Sequence

import numpy as np

from data_designer_sonai.metrics import TextMetrics

# Bump whenever the columns or weights below change. Models and scalers are
# trained against exactly one version.
FEATURE_SCHEMA_VERSION = 2

# (TextMetrics field, manual weight) in column order.
FEATURE_COLUMNS: tuple[tuple[str, float], ...] = (
    ("emoji_rate", 2.0),
    ("buzzword_rate", 5.0),
    ("irregular_dashes", 10.0),
    ("irregular_quotations", 5.0),
    ("labels", 2.0),
    ("irregular_ellipsis", 5.0),
    ("html_escape_count", 10.0),
    ("not_just_count", 20.0),
    ("devlog_count", 1.0),
    ("irregular_markdown", 1.0),
    ("hashtags", 2.0),
    ("human_informality", 1.0),
    ("incorrect_perspective", 2.0),
    ("backstory_count", 5.0),
    ("irregular_arrows", 20.0),
)

FEATURE_NAMES = tuple(name for name, _ in FEATURE_COLUMNS)
FEATURE_WEIGHTS = np.array([weight for _, weight in FEATURE_COLUMNS], dtype=np.float64)
N_FEATURES = len(FEATURE_COLUMNS)


def features_from_metrics(data: Sequence[TextMetrics]) -> np.ndarray:
    """Build the weighted ``(n_samples, N_FEATURES)`` feature matrix."""
    array = np.zeros((len(data), N_FEATURES), dtype=np.float64)
    for i, sample in enumerate(data):
        array[i] = [getattr(sample, name) for name in FEATURE_NAMES]
    return array * FEATURE_WEIGHTS


def vectorize(metrics: TextMetrics | Sequence[TextMetrics]) -> np.ndarray:
    """Feature vector for one ``TextMetrics``, or a matrix for a sequence."""
    if isinstance(metrics, TextMetrics):
        return features_from_metrics([metrics])[0]
    return features_from_metrics(metrics)
