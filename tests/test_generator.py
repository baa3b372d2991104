import numpy as np
import pandas as pd
import pytest
from pydantic import ValidationError

from data_designer_sonai.config import SonaiColumnConfig
from data_designer_sonai.core import Detector
from data_designer_sonai.features import N_FEATURES
from data_designer_sonai.generator import SonaiColumnGenerator
from data_designer_sonai.metrics import TextMetrics
from data_designer_sonai.scoring import ClusterModel, LinearScaler, save_artifacts

AI_TEXT = "Our seamless platform leverages cutting-edge tools — it's not just fast, it's robust."
HUMAN_TEXT = "went to the shop, forgot my wallet lol"


@pytest.fixture
def model_dir(tmp_path) -> str:
    model = ClusterModel(centroids=np.vstack([np.zeros(N_FEATURES), np.ones(N_FEATURES)]))
    scaler = LinearScaler(offsets=np.zeros(N_FEATURES), scales=np.ones(N_FEATURES))
    save_artifacts(tmp_path, model, scaler, 1)
    return str(tmp_path)


def _generate(model_dir: str, df: pd.DataFrame, **kwargs) -> pd.DataFrame:
    kwargs.setdefault("target_columns", ["text"])
    config = SonaiColumnConfig(name="ai_check", model_dir=model_dir, **kwargs)
    return SonaiColumnGenerator(config=config, resource_provider=None).generate(df)


class TestSonaiColumnGenerator:
    def test_emits_one_result_per_row(self, model_dir):
        df = pd.DataFrame({"text": [AI_TEXT, HUMAN_TEXT]})
        result = _generate(model_dir, df)

        assert list(result["text"]) == [AI_TEXT, HUMAN_TEXT]
        assert "ai_check" not in df.columns
        for output in result["ai_check"]:
            assert set(output) == {"is_valid", "chance_ai", "chance_human", "label"}
            assert output["chance_ai"] + output["chance_human"] == pytest.approx(100.0)
            assert output["label"] in ("ai", "human")

    def test_matches_detector(self, model_dir):
        detector = Detector.from_directory(model_dir)
        result = _generate(model_dir, pd.DataFrame({"text": [AI_TEXT]}))

        output = result["ai_check"].iloc[0]
        expected = detector.predict(AI_TEXT)
        assert output["chance_ai"] == pytest.approx(expected.chance_ai)
        assert output["label"] == expected.label

    def test_target_columns_are_joined(self, model_dir):
        df = pd.DataFrame({"title": ["Release notes:"], "body": [AI_TEXT]})
        result = _generate(model_dir, df, target_columns=["title", "body"])

        expected = Detector.from_directory(model_dir).predict(f"Release notes: {AI_TEXT}")
        assert result["ai_check"].iloc[0]["chance_ai"] == pytest.approx(expected.chance_ai)

    def test_is_valid_threshold(self, model_dir):
        df = pd.DataFrame({"text": [AI_TEXT]})
        chance_ai = Detector.from_directory(model_dir).predict(AI_TEXT).chance_ai

        assert _generate(model_dir, df, max_chance_ai=chance_ai)["ai_check"].iloc[0]["is_valid"]
        assert _generate(model_dir, df, max_chance_ai=100)["ai_check"].iloc[0]["is_valid"]
        assert not _generate(model_dir, df, max_chance_ai=0)["ai_check"].iloc[0]["is_valid"]

    def test_include_metrics(self, model_dir):
        df = pd.DataFrame({"text": [AI_TEXT]})

        without = _generate(model_dir, df)["ai_check"].iloc[0]
        assert "metrics" not in without

        output = _generate(model_dir, df, include_metrics=True)["ai_check"].iloc[0]
        assert set(output["metrics"]) == set(TextMetrics.field_names())


class TestSonaiColumnConfig:
    def test_defaults(self):
        config = SonaiColumnConfig(name="ai_check", target_columns=["text"], model_dir="models")
        assert config.max_chance_ai == 50.0
        assert config.include_metrics is False
        assert config.column_type == "sonai-detector"
        assert config.required_columns == ["text"]
        assert config.side_effect_columns == []

    @pytest.mark.parametrize("value", [-1, 150])
    def test_max_chance_ai_range(self, value):
        with pytest.raises(ValidationError):
            SonaiColumnConfig(name="ai_check", target_columns=["text"], model_dir="models", max_chance_ai=value)

    def test_fields_are_described(self):
        fields = SonaiColumnConfig.model_fields
        for name in ("model_dir", "max_chance_ai", "include_metrics"):
            assert fields[name].description
