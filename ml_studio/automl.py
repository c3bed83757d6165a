"""
AutoML Optimizer Component
Runs every generated configuration through cross-validation and a final fit,
then ranks the trained models by accuracy.
"""

import logging
import time
import traceback
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

import numpy as np
import torch
import torch.nn as nn

from .config import AutoMLConfig, ModelConfig, ModelType
from .cross_validation import cross_validate, fold_bounds
from .exceptions import ConfigurationError
from .model_catalog import build_model
from .search_space import generate_model_configurations
from .trainer import ModelTrainer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ModelMetrics:
    accuracy: float
    loss: float
    val_accuracy: float
    val_loss: float


@dataclass(frozen=True)
class ModelResult:
    """Outcome of one completed trial. The caller owns `model`."""
    model: nn.Module
    config: ModelConfig
    metrics: ModelMetrics
    model_type: str
    training_time: float  # milliseconds


@dataclass(frozen=True)
class LeaderboardSummary:
    best_accuracy: float
    average_accuracy: float
    total_training_time: float  # milliseconds
    models_tested: int
    skipped_trials: int = 0


ProgressCallback = Callable[[float, int, Optional[ModelResult]], None]


def summarize_results(results: List[ModelResult], skipped_trials: int = 0) -> LeaderboardSummary:
    """Aggregate figures for a leaderboard."""
    if not results:
        return LeaderboardSummary(0.0, 0.0, 0.0, 0, skipped_trials)
    accuracies = [r.metrics.accuracy for r in results]
    return LeaderboardSummary(
        best_accuracy=max(accuracies),
        average_accuracy=float(np.mean(accuracies)),
        total_training_time=sum(r.training_time for r in results),
        models_tested=len(results),
        skipped_trials=skipped_trials,
    )


class AutoMLOptimizer:
    """
    Sequential grid-search AutoML over the model catalog.

    Each trial is scored by k-fold cross-validation and then retrained on the
    full dataset; the retrained model is what the caller receives.
    """

    def __init__(self, config: Optional[AutoMLConfig] = None, trainer: Optional[ModelTrainer] = None):
        self.config = config or AutoMLConfig()
        self.trainer = trainer or ModelTrainer()
        self.optimization_history: List[Dict[str, Any]] = []

    def run(
        self,
        features: torch.Tensor,
        target: torch.Tensor,
        base_config: ModelConfig,
        on_progress: Optional[ProgressCallback] = None,
    ) -> List[ModelResult]:
        """
        Search the configuration grid and return results sorted by accuracy.

        Args:
            features: Feature matrix [n, d]
            target: Binary target vector [n]
            base_config: Template every trial configuration is derived from
            on_progress: Called after each attempted trial with
                (percent complete, 1-based trial number, best result so far)

        Returns:
            Completed trials, best accuracy first

        Raises:
            ConfigurationError: If the data cannot support the run at all
        """
        features = torch.as_tensor(features, dtype=torch.float32)
        target = torch.as_tensor(target, dtype=torch.float32).reshape(-1)
        folds = self.config.cross_validation_folds
        self._check_inputs(features, target, folds)

        configurations = generate_model_configurations(base_config)
        trials_to_run = min(len(configurations), self.config.max_trials)

        if self.config.early_stopping_patience > 0:
            logger.info("early_stopping_patience=%d is not enforced; every fit runs all epochs",
                        self.config.early_stopping_patience)
        logger.info("Starting AutoML: %d trials, %d-fold cross-validation", trials_to_run, folds)

        run_start = time.perf_counter()
        results: List[ModelResult] = []
        best: Optional[ModelResult] = None
        skipped = 0

        for i in range(trials_to_run):
            trial_config = configurations[i]
            try:
                result = self._run_trial(features, target, trial_config, folds)
            except Exception as e:
                skipped += 1
                logger.warning("Trial %d/%d (%s) failed, skipping", i + 1, trials_to_run,
                               trial_config.model_type, exc_info=True)
                traceback.clear_frames(e.__traceback__)
            else:
                results.append(result)
                if best is None or result.metrics.accuracy > best.metrics.accuracy:
                    best = result
                logger.info("Trial %d/%d %s: acc=%.4f loss=%.4f (%.0f ms)", i + 1, trials_to_run,
                            result.model_type, result.metrics.accuracy, result.metrics.loss,
                            result.training_time)

            if on_progress is not None:
                on_progress((i + 1) / trials_to_run * 100, i + 1, best)

        results.sort(key=lambda r: r.metrics.accuracy, reverse=True)

        summary = summarize_results(results, skipped)
        self.optimization_history.append({
            "timestamp": time.time(),
            "trials_run": trials_to_run,
            "trials_skipped": skipped,
            "best_accuracy": summary.best_accuracy,
            "best_config": best.config.to_dict() if best else None,
            "optimization_time": time.perf_counter() - run_start,
        })
        logger.info("AutoML finished: %d models, %d skipped", len(results), skipped)
        return results

    @staticmethod
    def _check_inputs(features: torch.Tensor, target: torch.Tensor, folds: int) -> None:
        if features.dim() != 2 or features.shape[1] < 1:
            raise ConfigurationError(
                f"features must be a [n, d] matrix with d >= 1, got shape {tuple(features.shape)}"
            )
        if target.shape[0] != features.shape[0]:
            raise ConfigurationError(
                f"features have {features.shape[0]} rows but target has {target.shape[0]}"
            )
        fold_bounds(features.shape[0], folds)

    def _run_trial(
        self,
        features: torch.Tensor,
        target: torch.Tensor,
        config: ModelConfig,
        folds: int,
    ) -> ModelResult:
        start = time.perf_counter()
        cv = cross_validate(features, target, config, folds, trainer=self.trainer)

        model = build_model(config.model_type, features.shape[1], config)
        history = self.trainer.train(model, features, target, config)

        val_accuracy = history.final("val_acc")
        val_loss = history.final("val_loss")
        metrics = ModelMetrics(
            accuracy=cv.accuracy,
            loss=cv.loss,
            val_accuracy=val_accuracy if val_accuracy is not None else cv.accuracy,
            val_loss=val_loss if val_loss is not None else cv.loss,
        )
        return ModelResult(
            model=model,
            config=config,
            metrics=metrics,
            model_type=ModelType.resolve(config.model_type).value,
            training_time=(time.perf_counter() - start) * 1000.0,
        )

    def get_optimization_summary(self) -> Dict[str, Any]:
        """Get summary of the optimization runs so far."""
        if not self.optimization_history:
            return {"error": "No optimization has been run yet"}
        return {
            "n_runs": len(self.optimization_history),
            "last_run": self.optimization_history[-1],
            "optimization_history": self.optimization_history,
        }


def plot_leaderboard(results: List[ModelResult], save_path: Optional[str] = None) -> None:
    """Bar chart of accuracy per ranked trial (requires matplotlib)."""
    import matplotlib.pyplot as plt

    labels = [f"{i + 1}. {r.model_type}" for i, r in enumerate(results)]
    accuracies = [r.metrics.accuracy * 100 for r in results]

    fig, ax = plt.subplots(figsize=(max(6, len(results) * 0.6), 4))
    ax.bar(labels, accuracies, color="tab:blue")
    ax.set_ylabel("Cross-validated accuracy (%)")
    ax.set_ylim(0, 100)
    ax.set_title("AutoML Leaderboard")
    ax.tick_params(axis="x", rotation=45)
    fig.tight_layout()
    if save_path:
        fig.savefig(save_path, dpi=150, bbox_inches="tight")
    else:
        plt.show()
    plt.close(fig)
