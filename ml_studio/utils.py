"""
Logging and reporting helpers.
"""

import logging
import sys
from typing import TYPE_CHECKING, List, Optional, Union

if TYPE_CHECKING:
    from .automl import ModelResult

LOG_FORMAT = '%(asctime)s | %(levelname)s | %(name)s:%(lineno)d | %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def setup_logging(level: Union[int, str] = logging.INFO) -> None:
    """
    Send ml_studio log records to stdout.

    Args:
        level: Logging level, as a number or a name such as "DEBUG"
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))

    package_logger = logging.getLogger("ml_studio")
    package_logger.handlers = [h for h in package_logger.handlers if isinstance(h, logging.NullHandler)]
    package_logger.addHandler(handler)
    package_logger.setLevel(level)


def format_leaderboard(results: List["ModelResult"], limit: Optional[int] = None) -> str:
    """Plain-text table of ranked results."""
    header = f"{'#':>3}  {'model':<7} {'acc %':>7} {'loss':>7} {'val acc %':>9} {'time s':>7}  config"
    lines = [header, "-" * len(header)]
    for rank, result in enumerate(results[:limit] if limit else results, 1):
        cfg = result.config
        details = (f"{cfg.optimizer} lr={cfg.learning_rate} batch={cfg.batch_size} "
                   f"epochs={cfg.epochs} dropout={cfg.dropout_rate} {cfg.activation} "
                   f"layers={list(cfg.hidden_layers or [])}")
        lines.append(
            f"{rank:>3}  {result.model_type:<7} {result.metrics.accuracy * 100:>7.2f} "
            f"{result.metrics.loss:>7.4f} {result.metrics.val_accuracy * 100:>9.2f} "
            f"{result.training_time / 1000:>7.1f}  {details}"
        )
    return "\n".join(lines)
