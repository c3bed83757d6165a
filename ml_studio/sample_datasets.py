"""
Sample Datasets Module
Generates synthetic binary-classification datasets for trying out AutoML.
"""

import numpy as np
from typing import Dict, Tuple
from dataclasses import dataclass
from sklearn.datasets import make_circles, make_classification, make_moons
from sklearn.preprocessing import StandardScaler

from .data import ProcessedData

TARGET_COLUMN = "target"


@dataclass
class DatasetInfo:
    """Information about a generated dataset."""
    name: str
    num_samples: int
    num_features: int
    difficulty: str
    description: str


class SampleDatasetGenerator:
    """
    Generates tabular binary datasets with named columns and a `target` column.
    """

    def __init__(self, seed: int = 42):
        self.seed = seed

    def _to_processed(self, X: np.ndarray, y: np.ndarray) -> ProcessedData:
        X = StandardScaler().fit_transform(X)
        names = [f"feature_{i + 1}" for i in range(X.shape[1])] + [TARGET_COLUMN]
        values = np.column_stack([X, y.astype(np.float32)])
        return ProcessedData(values=values, features=names)

    def generate_classification_dataset(
        self,
        n_samples: int = 500,
        n_features: int = 8,
        difficulty: str = "medium",
    ) -> Tuple[ProcessedData, DatasetInfo]:
        """
        Generate a linearly-structured binary classification dataset.

        Args:
            n_samples: Number of samples.
            n_features: Number of features.
            difficulty: 'easy', 'medium', or 'hard'.

        Returns:
            Tuple of (dataset, dataset_info).
        """
        difficulty_params = {
            "easy": {"n_informative": n_features, "n_redundant": 0, "class_sep": 2.0},
            "medium": {"n_informative": max(2, n_features // 2), "n_redundant": n_features // 4, "class_sep": 1.0},
            "hard": {"n_informative": max(2, n_features // 3), "n_redundant": n_features // 3, "class_sep": 0.5},
        }
        params = difficulty_params.get(difficulty, difficulty_params["medium"])

        X, y = make_classification(
            n_samples=n_samples,
            n_features=n_features,
            n_classes=2,
            n_informative=params["n_informative"],
            n_redundant=params["n_redundant"],
            n_clusters_per_class=1,
            class_sep=params["class_sep"],
            random_state=self.seed,
        )
        info = DatasetInfo(
            name=f"classification_{difficulty}",
            num_samples=n_samples,
            num_features=n_features,
            difficulty=difficulty,
            description=f"{difficulty.capitalize()} binary classification with {n_features} features",
        )
        return self._to_processed(X, y), info

    def generate_nonlinear_dataset(
        self,
        n_samples: int = 500,
        pattern: str = "moons",
    ) -> Tuple[ProcessedData, DatasetInfo]:
        """Two-feature datasets with a nonlinear boundary: 'moons' or 'circles'."""
        if pattern == "circles":
            X, y = make_circles(n_samples=n_samples, noise=0.1, factor=0.5, random_state=self.seed)
            description = "Concentric circles classification"
        else:
            pattern = "moons"
            X, y = make_moons(n_samples=n_samples, noise=0.1, random_state=self.seed)
            description = "Interleaving half-circles classification"

        info = DatasetInfo(
            name=f"nonlinear_{pattern}",
            num_samples=n_samples,
            num_features=2,
            difficulty="hard",
            description=description,
        )
        return self._to_processed(X, y), info

    def get_all_sample_datasets(self) -> Dict[str, Tuple[ProcessedData, DatasetInfo]]:
        """Every bundled demo dataset, keyed by name."""
        return {
            "easy": self.generate_classification_dataset(n_samples=400, n_features=6, difficulty="easy"),
            "hard": self.generate_classification_dataset(n_samples=600, n_features=12, difficulty="hard"),
            "moons": self.generate_nonlinear_dataset(n_samples=400, pattern="moons"),
            "circles": self.generate_nonlinear_dataset(n_samples=400, pattern="circles"),
        }
