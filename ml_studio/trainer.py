"""
Trainer Component
Fits binary classifiers with a tail hold-out split and per-epoch reporting.
"""

import logging
import math
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Tuple

import torch
import torch.nn as nn
from torch.utils.data import DataLoader, TensorDataset

from .config import ModelConfig, TRAINER_VALIDATION_SPLIT
from .exceptions import TrainingError
from .optimizers import resolve_optimizer

logger = logging.getLogger(__name__)

EpochCallback = Callable[[int, Dict[str, float]], None]


@dataclass
class TrainingHistory:
    """Per-epoch metrics of one fit, keyed like loss / acc / val_loss / val_acc."""
    history: Dict[str, List[float]] = field(default_factory=dict)

    def record(self, logs: Dict[str, float]) -> None:
        for key, value in logs.items():
            self.history.setdefault(key, []).append(value)

    def final(self, key: str) -> Optional[float]:
        """Value of `key` at the last epoch, or None when never recorded."""
        values = self.history.get(key)
        return values[-1] if values else None

    @property
    def epochs(self) -> int:
        return len(self.history.get("loss", []))


def binary_accuracy(outputs: torch.Tensor, targets: torch.Tensor) -> Tuple[int, int]:
    """Correct predictions at a 0.5 threshold, and the number of predictions."""
    predicted = (outputs > 0.5).float()
    return int((predicted == targets).sum().item()), targets.numel()


class ModelTrainer:
    """Handles compiling, fitting and evaluating catalog models."""

    def __init__(self, device: str = "cpu", validation_split: float = TRAINER_VALIDATION_SPLIT):
        self.device = device
        self.validation_split = validation_split
        self.criterion = nn.BCELoss()

    def train(
        self,
        model: nn.Module,
        features: torch.Tensor,
        target: torch.Tensor,
        config: ModelConfig,
        on_epoch_end: Optional[EpochCallback] = None,
    ) -> TrainingHistory:
        """
        Fit `model` for exactly `config.epochs` epochs.

        The last `validation_split` fraction of rows is held out, in order,
        for validation. `on_epoch_end(epoch, logs)` runs after every epoch
        before the next one starts.

        Returns:
            TrainingHistory with loss/acc and, when a hold-out exists, val_loss/val_acc
        """
        x, y = self._prepare(features, target)
        split_at = int(math.floor(len(x) * (1 - self.validation_split)))
        if split_at <= 0:
            raise TrainingError(f"No training samples left after the validation split ({len(x)} rows)")

        x_train, y_train = x[:split_at], y[:split_at]
        x_val, y_val = x[split_at:], y[split_at:]

        model = model.to(self.device)
        optimizer = resolve_optimizer(config.optimizer, config.learning_rate, model.parameters())
        train_loader = DataLoader(
            TensorDataset(x_train, y_train), batch_size=config.batch_size, shuffle=True
        )

        history = TrainingHistory()
        for epoch in range(config.epochs):
            # Training phase
            model.train()
            total_loss = 0.0
            correct = 0
            seen = 0
            for batch_x, batch_y in train_loader:
                optimizer.zero_grad()
                outputs = model(batch_x)
                loss = self.criterion(outputs, batch_y)
                loss.backward()
                optimizer.step()

                batch_correct, batch_size = binary_accuracy(outputs.detach(), batch_y)
                total_loss += loss.item() * batch_size
                correct += batch_correct
                seen += batch_size

            logs = {"loss": total_loss / seen, "acc": correct / seen}
            if not math.isfinite(logs["loss"]):
                raise TrainingError(f"Training loss diverged at epoch {epoch}")

            # Validation phase
            if len(x_val) > 0:
                logs["val_loss"], logs["val_acc"] = self._evaluate_tensors(model, x_val, y_val)

            history.record(logs)
            logger.debug("epoch %d/%d %s", epoch + 1, config.epochs, logs)
            if on_epoch_end is not None:
                on_epoch_end(epoch, logs)

        return history

    def evaluate(
        self,
        model: nn.Module,
        features: torch.Tensor,
        target: torch.Tensor,
    ) -> Tuple[float, float]:
        """Return (loss, accuracy) of `model` on the given rows."""
        x, y = self._prepare(features, target)
        return self._evaluate_tensors(model.to(self.device), x, y)

    def _evaluate_tensors(
        self, model: nn.Module, x: torch.Tensor, y: torch.Tensor
    ) -> Tuple[float, float]:
        model.eval()
        with torch.no_grad():
            outputs = model(x)
            loss = self.criterion(outputs, y).item()
            correct, total = binary_accuracy(outputs, y)
        return loss, correct / total

    def _prepare(self, features: torch.Tensor, target: torch.Tensor) -> Tuple[torch.Tensor, torch.Tensor]:
        x = torch.as_tensor(features, dtype=torch.float32).to(self.device)
        y = torch.as_tensor(target, dtype=torch.float32).reshape(-1, 1).to(self.device)
        if x.dim() != 2:
            x = x.reshape(x.size(0), -1)
        if len(x) != len(y):
            raise TrainingError(f"Feature rows ({len(x)}) and target rows ({len(y)}) differ")
        return x, y
