import numpy as np

from data_designer_sonai.features import FEATURE_COLUMNS, FEATURE_NAMES, N_FEATURES, vectorize
from data_designer_sonai.metrics import TextMetrics


def _metrics(offset: float = 0.0) -> TextMetrics:
    names = TextMetrics.field_names()
    return TextMetrics(**{name: float(i + 1) + offset for i, name in enumerate(names)})


class TestVectorize:
    def test_columns_cover_every_metric_once(self):
        assert N_FEATURES == 15
        assert sorted(FEATURE_NAMES) == sorted(TextMetrics.field_names())

    def test_single_vector(self):
        metrics = _metrics()
        vector = vectorize(metrics)
        assert vector.shape == (N_FEATURES,)
        for i, (name, weight) in enumerate(FEATURE_COLUMNS):
            assert vector[i] == getattr(metrics, name) * weight

    def test_matrix(self):
        batch = [_metrics(), _metrics(offset=10.0)]
        matrix = vectorize(batch)
        assert matrix.shape == (2, N_FEATURES)
        np.testing.assert_array_equal(matrix[1], vectorize(batch[1]))

    def test_empty_batch(self):
        assert vectorize([]).shape == (0, N_FEATURES)

    def test_column_order(self):
        assert FEATURE_NAMES[0] == "emoji_rate"
        assert FEATURE_NAMES[2] == "irregular_dashes"
        assert FEATURE_NAMES[14] == "irregular_arrows"
