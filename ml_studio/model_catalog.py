"""
Model Catalog Component
Builds untrained binary classifiers from a model-type tag and hyperparameters.
"""

import torch.nn as nn
from typing import Iterable, List, Optional, Union

from .config import Activation, ModelConfig, ModelType
from .exceptions import ConfigurationError

SIMPLE_HIDDEN_UNITS = 32
DEEP_DEFAULT_HIDDEN_LAYERS = (128, 64, 32)
WIDE_HIDDEN_LAYERS = (256, 128)


def _get_activation(name: Optional[str]) -> nn.Module:
    """Get activation module by name."""
    activations = {
        Activation.RELU: nn.ReLU,
        Activation.TANH: nn.Tanh,
        Activation.SIGMOID: nn.Sigmoid,
    }
    return activations[Activation.resolve(name)]()


def _dense_stack(
    input_features: int,
    widths: Iterable[int],
    activation: Optional[str],
    dropout_rate: float,
) -> List[nn.Module]:
    """Hidden dense layers, each followed by its activation and optional dropout."""
    layers: List[nn.Module] = []
    in_size = input_features
    for width in widths:
        layers.append(nn.Linear(in_size, width))
        layers.append(_get_activation(activation))
        if dropout_rate > 0:
            layers.append(nn.Dropout(dropout_rate))
        in_size = width
    # Sigmoid output unit
    layers.append(nn.Linear(in_size, 1))
    layers.append(nn.Sigmoid())
    return layers


def build_model(
    model_type: Union[str, ModelType, None],
    input_features: int,
    config: Optional[ModelConfig] = None,
) -> nn.Sequential:
    """
    Build an untrained classifier for the given catalog entry.

    Args:
        model_type: simple, deep, wide or linear; anything else builds simple
        input_features: Number of input columns
        config: Hyperparameters supplying activation, dropout and hidden layers

    Returns:
        nn.Sequential ending in a single sigmoid unit
    """
    if input_features is None or int(input_features) <= 0:
        raise ConfigurationError(f"input_features must be positive, got {input_features}")
    input_features = int(input_features)
    config = config or ModelConfig()
    dropout = config.dropout_rate or 0.0

    kind = ModelType.resolve(model_type)
    if kind is ModelType.LINEAR:
        widths: Iterable[int] = ()
    elif kind is ModelType.DEEP:
        widths = config.hidden_layers or DEEP_DEFAULT_HIDDEN_LAYERS
    elif kind is ModelType.WIDE:
        widths = WIDE_HIDDEN_LAYERS
    else:
        widths = (SIMPLE_HIDDEN_UNITS,)

    return nn.Sequential(*_dense_stack(input_features, widths, config.activation, dropout))


def hidden_layer_widths(model: nn.Sequential) -> List[int]:
    """Output widths of every dense layer except the output unit."""
    linears = [module for module in model if isinstance(module, nn.Linear)]
    return [layer.out_features for layer in linears[:-1]]


def count_parameters(model: nn.Module) -> int:
    return sum(p.numel() for p in model.parameters())
