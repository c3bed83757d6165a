"""
Configuration Component
Hyperparameter bundles, search-run policy and the catalog tags shared by
every other component.
"""

import logging
from dataclasses import dataclass, asdict, fields, replace
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)


class _TaggedEnum(str, Enum):
    """String enum whose unknown tags resolve to a documented default."""

    @classmethod
    def default(cls) -> "_TaggedEnum":
        raise NotImplementedError

    @classmethod
    def resolve(cls, tag: Optional[str]) -> "_TaggedEnum":
        if isinstance(tag, cls):
            return tag
        if tag is not None:
            for member in cls:
                if member.value == str(tag).lower():
                    return member
        fallback = cls.default()
        logger.debug("Unknown %s %r, falling back to %s", cls.__name__, tag, fallback.value)
        return fallback


class ModelType(_TaggedEnum):
    """Catalog of model architectures."""
    SIMPLE = "simple"
    DEEP = "deep"
    WIDE = "wide"
    LINEAR = "linear"

    @classmethod
    def default(cls) -> "ModelType":
        return cls.SIMPLE


class OptimizerName(_TaggedEnum):
    """Supported optimizers."""
    ADAM = "adam"
    SGD = "sgd"
    RMSPROP = "rmsprop"
    ADAGRAD = "adagrad"

    @classmethod
    def default(cls) -> "OptimizerName":
        return cls.ADAM


class Activation(_TaggedEnum):
    """Hidden-layer activations."""
    RELU = "relu"
    TANH = "tanh"
    SIGMOID = "sigmoid"

    @classmethod
    def default(cls) -> "Activation":
        return cls.RELU


MODEL_TYPES = tuple(m.value for m in ModelType)
SUPPORTED_OPTIMIZERS = tuple(o.value for o in OptimizerName)
SUPPORTED_ACTIVATIONS = tuple(a.value for a in Activation)

# Search is truncated after this many configurations; trials never train longer
# than MAX_TRIAL_EPOCHS epochs.
MAX_GENERATED_CONFIGURATIONS = 50
MAX_TRIAL_EPOCHS = 20

# Hold-out fraction used by every fit, taken from the tail of the data.
TRAINER_VALIDATION_SPLIT = 0.2


@dataclass(frozen=True)
class ModelConfig:
    """Hyperparameters for a single model."""
    epochs: int = 10
    batch_size: int = 32
    learning_rate: float = 0.001
    target_variable: Optional[str] = None
    model_type: Optional[str] = None
    hidden_layers: Optional[Tuple[int, ...]] = None
    dropout_rate: Optional[float] = None
    optimizer: Optional[str] = None
    activation: Optional[str] = None

    def __post_init__(self):
        if self.epochs <= 0:
            raise ConfigurationError(f"epochs must be positive, got {self.epochs}")
        if self.batch_size <= 0:
            raise ConfigurationError(f"batch_size must be positive, got {self.batch_size}")
        if self.learning_rate <= 0:
            raise ConfigurationError(f"learning_rate must be positive, got {self.learning_rate}")
        if self.dropout_rate is not None and not 0.0 <= self.dropout_rate < 1.0:
            raise ConfigurationError(f"dropout_rate must be in [0, 1), got {self.dropout_rate}")
        if self.hidden_layers is not None:
            layers = tuple(int(width) for width in self.hidden_layers)
            if not layers or any(width <= 0 for width in layers):
                raise ConfigurationError(
                    f"hidden_layers must be a non-empty sequence of positive widths, got {self.hidden_layers}"
                )
            object.__setattr__(self, "hidden_layers", layers)

    def with_overrides(self, **changes: Any) -> "ModelConfig":
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        if self.hidden_layers is not None:
            data["hidden_layers"] = list(self.hidden_layers)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ModelConfig":
        known = {f.name for f in fields(cls)}
        return cls(**{key: value for key, value in data.items() if key in known})


@dataclass
class AutoMLConfig:
    """Policy for an AutoML search run."""
    max_trials: int = 20
    validation_split: float = 0.2  # advisory, cross-validation does not read it
    early_stopping_patience: int = 5  # 0 disables; not enforced by the trainer
    cross_validation_folds: int = 3

    def __post_init__(self):
        if self.max_trials <= 0:
            raise ConfigurationError(f"max_trials must be positive, got {self.max_trials}")
        if not 0.0 < self.validation_split < 1.0:
            raise ConfigurationError(f"validation_split must be in (0, 1), got {self.validation_split}")
        if self.early_stopping_patience < 0:
            raise ConfigurationError(
                f"early_stopping_patience must be >= 0, got {self.early_stopping_patience}"
            )
        if self.cross_validation_folds < 2:
            raise ConfigurationError(
                f"cross_validation_folds must be >= 2, got {self.cross_validation_folds}"
            )


DEFAULT_CONFIG: Dict[str, Any] = {
    "model": ModelConfig().to_dict(),
    "automl": asdict(AutoMLConfig()),
}
