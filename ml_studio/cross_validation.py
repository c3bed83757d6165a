"""
Cross-Validation Component
Contiguous k-fold evaluation of a model configuration.
"""

import logging
import traceback
from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np
import torch

from .config import ModelConfig
from .exceptions import ConfigurationError
from .model_catalog import build_model
from .trainer import ModelTrainer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CrossValidationResult:
    """Averaged fold metrics plus the per-fold values they came from."""
    accuracy: float
    loss: float
    fold_accuracies: Tuple[float, ...]
    fold_losses: Tuple[float, ...]

    @property
    def accuracy_std(self) -> float:
        return float(np.std(self.fold_accuracies))


def fold_bounds(num_samples: int, folds: int) -> List[Tuple[int, int]]:
    """
    Contiguous [start, end) blocks covering range(num_samples).

    Every block has num_samples // folds rows except the last, which also
    takes the remainder.
    """
    if folds < 2:
        raise ConfigurationError(f"folds must be >= 2, got {folds}")
    if folds > num_samples:
        raise ConfigurationError(f"folds ({folds}) cannot exceed the number of samples ({num_samples})")

    fold_size = num_samples // folds
    bounds = []
    for fold in range(folds):
        start = fold * fold_size
        end = num_samples if fold == folds - 1 else start + fold_size
        bounds.append((start, end))
    return bounds


def _run_fold(
    features: torch.Tensor,
    target: torch.Tensor,
    config: ModelConfig,
    start: int,
    end: int,
    trainer: ModelTrainer,
) -> Tuple[float, float]:
    # Fold tensors and the fold model are locals of this call only.
    num_samples = features.shape[0]
    train_idx = torch.cat([torch.arange(0, start), torch.arange(end, num_samples)])

    x_val, y_val = features[start:end], target[start:end]
    x_train = torch.index_select(features, 0, train_idx)
    y_train = torch.index_select(target, 0, train_idx)

    model = build_model(config.model_type, features.shape[1], config)
    trainer.train(model, x_train, y_train, config)
    return trainer.evaluate(model, x_val, y_val)


def cross_validate(
    features: torch.Tensor,
    target: torch.Tensor,
    config: ModelConfig,
    folds: int,
    trainer: Optional[ModelTrainer] = None,
) -> CrossValidationResult:
    """
    Train a fresh model per fold and average its held-out loss and accuracy.

    Args:
        features: Feature matrix [n, d]
        target: Binary target vector [n]
        config: Hyperparameters for every fold model
        folds: Number of contiguous folds (2 <= folds <= n)
        trainer: Trainer to use; a CPU trainer by default

    Returns:
        CrossValidationResult averaged over exactly `folds` evaluations
    """
    trainer = trainer or ModelTrainer()
    features = torch.as_tensor(features, dtype=torch.float32)
    target = torch.as_tensor(target, dtype=torch.float32).reshape(-1)

    fold_losses: List[float] = []
    fold_accuracies: List[float] = []
    for fold, (start, end) in enumerate(fold_bounds(features.shape[0], folds)):
        try:
            loss, accuracy = _run_fold(features, target, config, start, end, trainer)
        except Exception as e:
            # A stored traceback would otherwise keep the fold model alive.
            traceback.clear_frames(e.__traceback__)
            raise
        logger.info("Fold %d/%d rows [%d, %d): loss=%.4f acc=%.4f",
                    fold + 1, folds, start, end, loss, accuracy)
        fold_losses.append(loss)
        fold_accuracies.append(accuracy)

    return CrossValidationResult(
        accuracy=sum(fold_accuracies) / folds,
        loss=sum(fold_losses) / folds,
        fold_accuracies=tuple(fold_accuracies),
        fold_losses=tuple(fold_losses),
    )
