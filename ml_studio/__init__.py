"""
ML Studio
=========

AutoML for small tabular binary classifiers built with PyTorch.

Main Components:
- build_model: Model catalog (simple, deep, wide, linear)
- resolve_optimizer: Optimizer tag to torch optimizer
- ModelTrainer: Fits and evaluates catalog models
- cross_validate: Contiguous k-fold evaluation
- generate_model_configurations: Truncated hyperparameter grid
- AutoMLOptimizer: Trial loop producing a ranked leaderboard

Usage:
    from ml_studio import load_csv, quick_automl

    data = load_csv("dataset.csv")
    leaderboard = quick_automl(data, "target", max_trials=5)
"""

import copy
import logging

__version__ = "1.0.0"

from .config import (
    Activation,
    AutoMLConfig,
    ModelConfig,
    ModelType,
    OptimizerName,
    DEFAULT_CONFIG,
    MAX_GENERATED_CONFIGURATIONS,
    MAX_TRIAL_EPOCHS,
    MODEL_TYPES,
    SUPPORTED_ACTIVATIONS,
    SUPPORTED_OPTIMIZERS,
)

from .exceptions import (
    ConfigurationError,
    MissingTargetColumnError,
    MLStudioError,
    PersistenceError,
    TrainingError,
)

from .data import ProcessedData, load_csv, split_feature_target
from .model_catalog import build_model, hidden_layer_widths
from .optimizers import resolve_optimizer
from .trainer import ModelTrainer, TrainingHistory
from .cross_validation import CrossValidationResult, cross_validate, fold_bounds
from .search_space import (
    HyperparameterSearchSpace,
    generate_model_configurations,
    iter_model_configurations,
)
from .automl import (
    AutoMLOptimizer,
    LeaderboardSummary,
    ModelMetrics,
    ModelResult,
    plot_leaderboard,
    summarize_results,
)
from .persistence import export_model, import_model

__all__ = [
    # Main classes
    'AutoMLOptimizer',
    'ModelTrainer',
    'HyperparameterSearchSpace',

    # Data classes and enums
    'ModelConfig',
    'AutoMLConfig',
    'ModelType',
    'OptimizerName',
    'Activation',
    'ProcessedData',
    'TrainingHistory',
    'CrossValidationResult',
    'ModelMetrics',
    'ModelResult',
    'LeaderboardSummary',

    # Functions
    'load_csv',
    'split_feature_target',
    'build_model',
    'hidden_layer_widths',
    'resolve_optimizer',
    'cross_validate',
    'fold_bounds',
    'generate_model_configurations',
    'iter_model_configurations',
    'summarize_results',
    'plot_leaderboard',
    'export_model',
    'import_model',

    # Exception classes
    'MLStudioError',
    'ConfigurationError',
    'MissingTargetColumnError',
    'TrainingError',
    'PersistenceError',

    # Configuration
    'DEFAULT_CONFIG',
    'MODEL_TYPES',
    'SUPPORTED_ACTIVATIONS',
    'SUPPORTED_OPTIMIZERS',
    'MAX_GENERATED_CONFIGURATIONS',
    'MAX_TRIAL_EPOCHS',
]


def get_version():
    """Return the version of the package."""
    return __version__


def get_supported_model_types():
    """Return list of supported model types."""
    return list(MODEL_TYPES)


def get_default_config():
    """Return a copy of the default configuration dictionary."""
    return copy.deepcopy(DEFAULT_CONFIG)


def create_optimizer(config=None, **kwargs):
    """
    Factory function to create an AutoMLOptimizer instance.

    Args:
        config: Optional AutoMLConfig
        **kwargs: AutoMLConfig fields overriding `config`

    Returns:
        AutoMLOptimizer instance
    """
    if config is None:
        config = AutoMLConfig(**kwargs)
    elif kwargs:
        config = AutoMLConfig(**{**config.__dict__, **kwargs})
    return AutoMLOptimizer(config)


def quick_automl(data, target_column, base_config=None, on_progress=None, **kwargs):
    """
    Quick AutoML run for simple use cases.

    Args:
        data: ProcessedData holding features and the target column
        target_column: Name of the target column
        base_config: Optional ModelConfig template
        on_progress: Optional progress callback
        **kwargs: AutoMLConfig fields

    Returns:
        Leaderboard sorted by accuracy
    """
    features, target = split_feature_target(data, target_column)
    base_config = base_config or ModelConfig(target_variable=target_column)
    return create_optimizer(**kwargs).run(features, target, base_config, on_progress)


logging.getLogger(__name__).addHandler(logging.NullHandler())
