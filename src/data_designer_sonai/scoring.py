from __future__ import annotations

import logging
import zipfile
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

import numpy as np

from data_designer_sonai.features import N_FEATURES

logger = logging.getLogger(__name__)

N_CLUSTERS = 2

MODEL_FILENAME = "model.kmeans"
SCALER_FILENAME = "model.scaler"
AI_CLUSTER_FILENAME = "model.ai.cluster"


class ArtifactError(ValueError):
    """Raised when a model, scaler or cluster-index artifact is unusable."""


class Distance(str, Enum):
    EUCLIDEAN = "euclidean"
    CHEBYSHEV = "chebyshev"

    def measure(self, a: np.ndarray, b: np.ndarray) -> float:
        diff = np.abs(np.asarray(a, dtype=np.float64) - np.asarray(b, dtype=np.float64))
        if self is Distance.CHEBYSHEV:
            return float(diff.max()) if diff.size else 0.0
        return float(np.sqrt(np.sum(diff * diff)))


def _load_npz(path: Path, keys: tuple[str, ...]) -> dict[str, np.ndarray]:
    try:
        data = np.load(path, allow_pickle=False)
    except (OSError, ValueError, zipfile.BadZipFile) as e:
        raise ArtifactError(f"Cannot read {path}: {e}") from e
    if not isinstance(data, np.lib.npyio.NpzFile):
        raise ArtifactError(f"{path} is not an .npz archive")
    with data:
        try:
            return {key: data[key] for key in keys}
        except (KeyError, ValueError, zipfile.BadZipFile) as e:
            raise ArtifactError(f"Cannot read {path}: {e}") from e


def _float_array(value: np.ndarray, name: str) -> np.ndarray:
    try:
        array = np.array(value, dtype=np.float64)
    except (TypeError, ValueError) as e:
        raise ArtifactError(f"{name} is not numeric: {e}") from e
    array.setflags(write=False)
    return array


# ---------------------------------------------------------------------------
# Artifacts
# ---------------------------------------------------------------------------


@dataclass(frozen=True, eq=False)
class ClusterModel:
    """Two centroids in scaled feature space and the distance they were fit with."""

    centroids: np.ndarray
    distance: Distance = Distance.EUCLIDEAN

    def __post_init__(self) -> None:
        centroids = _float_array(self.centroids, "centroids")
        if centroids.ndim != 2 or centroids.shape[0] != N_CLUSTERS:
            raise ArtifactError(f"Expected {N_CLUSTERS} centroid rows, got shape {centroids.shape}")
        object.__setattr__(self, "centroids", centroids)
        object.__setattr__(self, "distance", Distance(self.distance))

    @property
    def n_features(self) -> int:
        return self.centroids.shape[1]

    def distances(self, row: np.ndarray) -> np.ndarray:
        return np.array([self.distance.measure(row, centroid) for centroid in self.centroids])

    def predict(self, rows: np.ndarray) -> np.ndarray:
        """Index of the nearest centroid for each row."""
        rows = np.atleast_2d(rows)
        return np.array([int(np.argmin(self.distances(row))) for row in rows], dtype=np.intp)

    def save(self, path: str | Path) -> None:
        with open(path, "wb") as fh:
            np.savez(fh, centroids=self.centroids, distance=np.array(self.distance.value))

    @classmethod
    def load(cls, path: str | Path) -> ClusterModel:
        data = _load_npz(Path(path), ("centroids", "distance"))
        try:
            distance = Distance(str(data["distance"]))
        except ValueError as e:
            raise ArtifactError(f"Unknown distance function in {path}: {data['distance']!r}") from e
        return cls(centroids=data["centroids"], distance=distance)


@dataclass(frozen=True, eq=False)
class LinearScaler:
    """Per-feature affine transform: ``(x - offsets) * scales``."""

    offsets: np.ndarray
    scales: np.ndarray

    def __post_init__(self) -> None:
        offsets = _float_array(self.offsets, "offsets")
        scales = _float_array(self.scales, "scales")
        if offsets.ndim != 1 or offsets.shape != scales.shape:
            raise ArtifactError(f"Scaler offsets {offsets.shape} and scales {scales.shape} must be matching vectors")
        object.__setattr__(self, "offsets", offsets)
        object.__setattr__(self, "scales", scales)

    @property
    def n_features(self) -> int:
        return self.offsets.shape[0]

    def transform(self, features: np.ndarray) -> np.ndarray:
        return (np.asarray(features, dtype=np.float64) - self.offsets) * self.scales

    def save(self, path: str | Path) -> None:
        with open(path, "wb") as fh:
            np.savez(fh, offsets=self.offsets, scales=self.scales)

    @classmethod
    def load(cls, path: str | Path) -> LinearScaler:
        data = _load_npz(Path(path), ("offsets", "scales"))
        return cls(offsets=data["offsets"], scales=data["scales"])


def read_ai_cluster(path: str | Path) -> int:
    try:
        raw = Path(path).read_bytes()
    except OSError as e:
        raise ArtifactError(f"Cannot read {path}: {e}") from e
    if len(raw) != 1 or raw[0] >= N_CLUSTERS:
        raise ArtifactError(f"{path} must hold a single byte in [0, {N_CLUSTERS - 1}], got {raw!r}")
    return raw[0]


def load_artifacts(directory: str | Path) -> tuple[ClusterModel, LinearScaler, int]:
    """Load model, scaler and AI cluster index from ``directory``.

    Raises ``ArtifactError`` if any file is missing, malformed or does not
    match the current feature dimension.
    """
    directory = Path(directory)
    model = ClusterModel.load(directory / MODEL_FILENAME)
    scaler = LinearScaler.load(directory / SCALER_FILENAME)
    ai_cluster = read_ai_cluster(directory / AI_CLUSTER_FILENAME)

    if model.n_features != N_FEATURES or scaler.n_features != N_FEATURES:
        raise ArtifactError(
            f"Artifacts in {directory} have {model.n_features} model and {scaler.n_features} scaler "
            f"features, expected {N_FEATURES}"
        )
    logger.info(f"Loaded {model.distance.value} cluster model from {directory} (ai_cluster={ai_cluster})")
    return model, scaler, ai_cluster


def save_artifacts(directory: str | Path, model: ClusterModel, scaler: LinearScaler, ai_cluster: int) -> None:
    if ai_cluster not in range(N_CLUSTERS):
        raise ArtifactError(f"ai_cluster must be in [0, {N_CLUSTERS - 1}], got {ai_cluster}")
    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)
    model.save(directory / MODEL_FILENAME)
    scaler.save(directory / SCALER_FILENAME)
    (directory / AI_CLUSTER_FILENAME).write_bytes(bytes([ai_cluster]))


# ---------------------------------------------------------------------------
# Confidence
# ---------------------------------------------------------------------------


def point_confidence(model: ClusterModel, observation: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    """Distances to each centroid and their normalised similarities.

    Each distance ``d`` becomes ``1 / (1 + d)``. Similarities are scaled to sum
    to 1 only when their sum is positive; otherwise they are returned as is.
    """
    distances = model.distances(observation)
    sims = 1.0 / (1.0 + distances)
    total = sims.sum()
    if total > 0.0:
        sims = sims / total
    return distances, sims
