import pytest

torch = pytest.importorskip("torch")
from torch import nn

from ml_studio.config import ModelConfig
from ml_studio.exceptions import ConfigurationError
from ml_studio.model_catalog import build_model, count_parameters, hidden_layer_widths


def _layer_types(model):
    return [type(module) for module in model]


def test_deep_model_uses_configured_layers_with_dropout() -> None:
    model = build_model("deep", 5, ModelConfig(hidden_layers=(64, 32), dropout_rate=0.2))
    assert hidden_layer_widths(model) == [64, 32]
    assert _layer_types(model) == [
        nn.Linear, nn.ReLU, nn.Dropout,
        nn.Linear, nn.ReLU, nn.Dropout,
        nn.Linear, nn.Sigmoid,
    ]
    assert all(m.p == pytest.approx(0.2) for m in model if isinstance(m, nn.Dropout))
    assert model[0].in_features == 5
    assert model[-2].out_features == 1


def test_deep_model_default_layers() -> None:
    model = build_model("deep", 4, ModelConfig())
    assert hidden_layer_widths(model) == [128, 64, 32]
    assert not any(isinstance(m, nn.Dropout) for m in model)


def test_linear_model_is_single_dense_layer() -> None:
    model = build_model("linear", 5, ModelConfig())
    linears = [m for m in model if isinstance(m, nn.Linear)]
    assert len(linears) == 1
    assert linears[0].in_features == 5
    assert linears[0].out_features == 1
    assert isinstance(model[-1], nn.Sigmoid)
    assert hidden_layer_widths(model) == []


def test_linear_model_ignores_hidden_layers_and_dropout() -> None:
    model = build_model("linear", 3, ModelConfig(hidden_layers=(64,), dropout_rate=0.3))
    assert _layer_types(model) == [nn.Linear, nn.Sigmoid]


def test_simple_model_has_one_hidden_layer_of_32() -> None:
    model = build_model("simple", 6, ModelConfig(hidden_layers=(256, 128, 64), activation="tanh",
                                                 dropout_rate=0.1))
    assert hidden_layer_widths(model) == [32]
    assert _layer_types(model) == [nn.Linear, nn.Tanh, nn.Dropout, nn.Linear, nn.Sigmoid]


def test_wide_model_fixed_layers() -> None:
    model = build_model("wide", 10, ModelConfig(hidden_layers=(8,), activation="sigmoid"))
    assert hidden_layer_widths(model) == [256, 128]
    assert _layer_types(model)[:2] == [nn.Linear, nn.Sigmoid]


@pytest.mark.parametrize("model_type", ["unknown", None, ""])
def test_unknown_model_type_builds_simple(model_type) -> None:
    model = build_model(model_type, 4)
    assert hidden_layer_widths(model) == [32]
    assert isinstance(model[1], nn.ReLU)


@pytest.mark.parametrize("input_features", [0, -3])
def test_non_positive_input_features_fail_fast(input_features) -> None:
    with pytest.raises(ConfigurationError):
        build_model("deep", input_features)


@pytest.mark.parametrize("model_type", ["simple", "deep", "wide", "linear"])
def test_outputs_are_probabilities(model_type) -> None:
    model = build_model(model_type, 7, ModelConfig(dropout_rate=0.1))
    model.eval()
    with torch.no_grad():
        outputs = model(torch.randn(9, 7))
    assert outputs.shape == (9, 1)
    assert torch.all((outputs >= 0) & (outputs <= 1))


def test_count_parameters_linear() -> None:
    assert count_parameters(build_model("linear", 5)) == 6
