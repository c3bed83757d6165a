"""
Search Space Component
Deterministic, truncated grid of model configurations derived from a base config.
"""

import itertools
from typing import Any, Dict, Iterator, List

from .config import MAX_GENERATED_CONFIGURATIONS, MAX_TRIAL_EPOCHS, MODEL_TYPES, ModelConfig


class HyperparameterSearchSpace:
    """Defines the grid swept by AutoML, in nesting order (outermost first)."""

    MODEL_TYPES = MODEL_TYPES
    LEARNING_RATES = (0.001, 0.01, 0.1)
    BATCH_SIZES = (16, 32, 64)
    DROPOUT_RATES = (0.0, 0.1, 0.2, 0.3)
    OPTIMIZERS = ("adam", "sgd", "rmsprop")
    ACTIVATIONS = ("relu", "tanh", "sigmoid")
    HIDDEN_LAYERS = ((32,), (64, 32), (128, 64, 32), (256, 128, 64))

    @classmethod
    def get_default_search_space(cls) -> Dict[str, Dict[str, Any]]:
        """Get default hyperparameter search space."""
        return {
            "model_type": {"type": "categorical", "choices": list(cls.MODEL_TYPES)},
            "learning_rate": {"type": "categorical", "choices": list(cls.LEARNING_RATES)},
            "batch_size": {"type": "categorical", "choices": list(cls.BATCH_SIZES)},
            "dropout_rate": {"type": "categorical", "choices": list(cls.DROPOUT_RATES)},
            "optimizer": {"type": "categorical", "choices": list(cls.OPTIMIZERS)},
            "activation": {"type": "categorical", "choices": list(cls.ACTIVATIONS)},
            "hidden_layers": {"type": "categorical", "choices": [list(h) for h in cls.HIDDEN_LAYERS]},
        }

    @classmethod
    def size(cls) -> int:
        """Number of combinations in the full, untruncated grid."""
        return (len(cls.MODEL_TYPES) * len(cls.LEARNING_RATES) * len(cls.BATCH_SIZES)
                * len(cls.DROPOUT_RATES) * len(cls.OPTIMIZERS) * len(cls.ACTIVATIONS)
                * len(cls.HIDDEN_LAYERS))


def iter_model_configurations(base_config: ModelConfig) -> Iterator[ModelConfig]:
    """Lazily yield every grid combination applied to `base_config`."""
    space = HyperparameterSearchSpace
    epochs = min(base_config.epochs, MAX_TRIAL_EPOCHS)
    grid = itertools.product(
        space.MODEL_TYPES,
        space.LEARNING_RATES,
        space.BATCH_SIZES,
        space.DROPOUT_RATES,
        space.OPTIMIZERS,
        space.ACTIVATIONS,
        space.HIDDEN_LAYERS,
    )
    for model_type, lr, batch_size, dropout, optimizer, activation, hidden in grid:
        yield base_config.with_overrides(
            model_type=model_type,
            learning_rate=lr,
            batch_size=batch_size,
            dropout_rate=dropout,
            optimizer=optimizer,
            activation=activation,
            hidden_layers=hidden,
            epochs=epochs,
        )


def generate_model_configurations(
    base_config: ModelConfig,
    limit: int = MAX_GENERATED_CONFIGURATIONS,
) -> List[ModelConfig]:
    """The first `limit` configurations of the grid, in nesting order."""
    return list(itertools.islice(iter_model_configurations(base_config), limit))
