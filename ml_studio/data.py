"""
Dataset Component
Loads tabular datasets and splits them into feature and target tensors.
"""

import logging
from dataclasses import dataclass
from typing import IO, List, Tuple, Union
from pathlib import Path

import numpy as np
import pandas as pd
import torch

from .exceptions import ConfigurationError, MissingTargetColumnError

logger = logging.getLogger(__name__)


@dataclass
class ProcessedData:
    """Numeric sample matrix plus the name of every column."""
    values: np.ndarray
    features: List[str]

    def __post_init__(self):
        self.values = np.asarray(self.values, dtype=np.float32)
        if self.values.ndim != 2:
            raise ConfigurationError(f"Expected a 2-D matrix, got shape {self.values.shape}")
        if self.values.shape[1] != len(self.features):
            raise ConfigurationError(
                f"Matrix has {self.values.shape[1]} columns but {len(self.features)} names were given"
            )

    @property
    def num_samples(self) -> int:
        return int(self.values.shape[0])


def load_csv(source: Union[str, Path, IO[str]]) -> ProcessedData:
    """
    Read a CSV file with a header row into a ProcessedData.

    Blank lines are skipped, cells are trimmed and anything that does not
    parse as a number becomes 0.
    """
    frame = pd.read_csv(source, skip_blank_lines=True, skipinitialspace=True, dtype=str)
    frame.columns = [str(column).strip() for column in frame.columns]
    numeric = frame.apply(lambda column: pd.to_numeric(column.str.strip(), errors="coerce"))
    numeric = numeric.fillna(0.0)

    logger.info("Loaded %d rows x %d columns", numeric.shape[0], numeric.shape[1])
    return ProcessedData(values=numeric.to_numpy(dtype=np.float32), features=list(frame.columns))


def split_feature_target(
    data: ProcessedData,
    target_column: str
) -> Tuple[torch.Tensor, torch.Tensor]:
    """
    Separate the target column from the feature columns.

    Args:
        data: Processed dataset
        target_column: Exact name of the target column

    Returns:
        Tuple of (features [n, d-1], target [n])

    Raises:
        MissingTargetColumnError: if no column has that name
    """
    try:
        target_index = data.features.index(target_column)
    except ValueError:
        raise MissingTargetColumnError(target_column) from None

    features = np.delete(data.values, target_index, axis=1)
    target = data.values[:, target_index]
    return (
        torch.from_numpy(np.ascontiguousarray(features, dtype=np.float32)),
        torch.from_numpy(np.ascontiguousarray(target, dtype=np.float32)),
    )
