"""
Exception hierarchy for ML Studio.
"""


class MLStudioError(Exception):
    """Base class for every error raised by ml_studio."""


class ConfigurationError(MLStudioError, ValueError):
    """Invalid configuration; fatal to the operation that raised it."""


class MissingTargetColumnError(ConfigurationError):
    """The requested target column is not present in the dataset."""

    def __init__(self, column: str):
        self.column = column
        super().__init__(f'Target column "{column}" not found in dataset')


class TrainingError(MLStudioError):
    """Training could not proceed for a single model."""


class PersistenceError(MLStudioError):
    """A model could not be exported or imported."""
