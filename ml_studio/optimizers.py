"""
Optimizer Resolver Component
Maps an optimizer tag and learning rate onto a configured torch optimizer.
"""

import torch.optim as optim
from typing import Iterable, Union

import torch

from .config import OptimizerName


def resolve_optimizer(
    name: Union[str, OptimizerName, None],
    learning_rate: float,
    parameters: Iterable[torch.nn.Parameter],
) -> optim.Optimizer:
    """Create the optimizer named by `name`; unknown names get Adam."""
    kind = OptimizerName.resolve(name)

    if kind is OptimizerName.SGD:
        return optim.SGD(parameters, lr=learning_rate)
    elif kind is OptimizerName.RMSPROP:
        return optim.RMSprop(parameters, lr=learning_rate)
    elif kind is OptimizerName.ADAGRAD:
        return optim.Adagrad(parameters, lr=learning_rate, initial_accumulator_value=0.1)
    else:
        return optim.Adam(parameters, lr=learning_rate)
