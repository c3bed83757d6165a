"""
Model export and import.
"""

import logging
import pickle
from datetime import datetime, timezone
from pathlib import Path
from typing import Tuple, Union

import torch
import torch.nn as nn

from .config import ModelConfig, ModelType
from .exceptions import ConfigurationError, PersistenceError
from .model_catalog import build_model

logger = logging.getLogger(__name__)

FORMAT_VERSION = 1


def export_model(
    model: nn.Module,
    config: ModelConfig,
    path: Union[str, Path],
    input_features: int,
) -> str:
    """Save weights plus the config needed to rebuild them; returns the save timestamp."""
    saved_at = datetime.now(timezone.utc).isoformat()
    payload = {
        "format_version": FORMAT_VERSION,
        "saved_at": saved_at,
        "model_type": ModelType.resolve(config.model_type).value,
        "input_features": int(input_features),
        "config": config.to_dict(),
        "state_dict": model.state_dict(),
    }
    try:
        torch.save(payload, str(path))
    except (OSError, RuntimeError) as e:
        raise PersistenceError(f"Could not export model to {path}: {e}") from e
    logger.info("Exported %s model to %s", payload["model_type"], path)
    return saved_at


def import_model(path: Union[str, Path]) -> Tuple[nn.Sequential, ModelConfig]:
    """Rebuild a model written by export_model."""
    try:
        payload = torch.load(str(path), map_location="cpu", weights_only=False)
    except (OSError, RuntimeError, EOFError, pickle.UnpicklingError) as e:
        raise PersistenceError(f"Could not read model from {path}: {e}") from e

    if not isinstance(payload, dict) or "state_dict" not in payload:
        raise PersistenceError(f"{path} is not an exported ml_studio model")

    try:
        config = ModelConfig.from_dict(payload["config"])
        model = build_model(payload["model_type"], payload["input_features"], config)
        model.load_state_dict(payload["state_dict"])
    except (KeyError, TypeError, ConfigurationError, RuntimeError) as e:
        raise PersistenceError(f"Malformed model file {path}: {e}") from e

    model.eval()
    return model, config
