import pytest

from ml_studio.config import (
    Activation,
    AutoMLConfig,
    ModelConfig,
    ModelType,
    OptimizerName,
)
from ml_studio.exceptions import ConfigurationError


@pytest.mark.parametrize(
    "enum_cls, tag, expected",
    [
        (ModelType, "deep", ModelType.DEEP),
        (ModelType, "LINEAR", ModelType.LINEAR),
        (ModelType, "transformer", ModelType.SIMPLE),
        (ModelType, None, ModelType.SIMPLE),
        (OptimizerName, "adagrad", OptimizerName.ADAGRAD),
        (OptimizerName, "lbfgs", OptimizerName.ADAM),
        (Activation, "tanh", Activation.TANH),
        (Activation, "gelu", Activation.RELU),
    ],
)
def test_tag_resolution_falls_back_to_default(enum_cls, tag, expected) -> None:
    assert enum_cls.resolve(tag) is expected


def test_resolve_accepts_members() -> None:
    assert ModelType.resolve(ModelType.WIDE) is ModelType.WIDE


def test_model_config_normalises_hidden_layers() -> None:
    config = ModelConfig(hidden_layers=[64, 32])
    assert config.hidden_layers == (64, 32)


@pytest.mark.parametrize(
    "kwargs",
    [
        {"epochs": 0},
        {"batch_size": -1},
        {"learning_rate": 0.0},
        {"dropout_rate": 1.0},
        {"dropout_rate": -0.1},
        {"hidden_layers": []},
        {"hidden_layers": [32, 0]},
    ],
)
def test_model_config_rejects_invalid_values(kwargs) -> None:
    with pytest.raises(ConfigurationError):
        ModelConfig(**kwargs)


def test_model_config_dict_round_trip() -> None:
    config = ModelConfig(epochs=5, model_type="deep", hidden_layers=(16, 8), dropout_rate=0.1)
    data = config.to_dict()
    assert data["hidden_layers"] == [16, 8]
    assert ModelConfig.from_dict({**data, "unknown": 1}) == config


def test_model_config_is_immutable() -> None:
    config = ModelConfig()
    with pytest.raises(AttributeError):
        config.epochs = 3


def test_automl_config_defaults() -> None:
    config = AutoMLConfig()
    assert config.max_trials == 20
    assert config.cross_validation_folds == 3
    assert config.validation_split == pytest.approx(0.2)


@pytest.mark.parametrize(
    "kwargs",
    [
        {"max_trials": 0},
        {"validation_split": 0.0},
        {"validation_split": 1.0},
        {"early_stopping_patience": -1},
        {"cross_validation_folds": 1},
    ],
)
def test_automl_config_rejects_invalid_values(kwargs) -> None:
    with pytest.raises(ConfigurationError):
        AutoMLConfig(**kwargs)


def test_configuration_error_is_value_error() -> None:
    with pytest.raises(ValueError):
        AutoMLConfig(max_trials=-3)
