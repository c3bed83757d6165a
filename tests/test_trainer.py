import pytest

torch = pytest.importorskip("torch")
from torch import nn

from ml_studio.config import ModelConfig
from ml_studio.exceptions import TrainingError
from ml_studio.model_catalog import build_model
from ml_studio.trainer import ModelTrainer, TrainingHistory, binary_accuracy


class RecordingModel(nn.Module):
    """Wraps a catalog model and remembers every row it saw while training."""

    def __init__(self, inner: nn.Module) -> None:
        super().__init__()
        self.inner = inner
        self.train_rows = []

    def forward(self, x: torch.Tensor) -> torch.Tensor:
        if self.training:
            self.train_rows.extend(x[:, 0].tolist())
        return self.inner(x)


def test_train_runs_every_epoch_and_reports_in_order(binary_data) -> None:
    features, target = binary_data
    config = ModelConfig(epochs=4, batch_size=8, learning_rate=0.01)
    model = build_model("simple", 3, config)
    seen = []

    history = ModelTrainer().train(model, features, target, config, on_epoch_end=lambda e, logs: seen.append((e, logs)))

    assert [epoch for epoch, _ in seen] == [0, 1, 2, 3]
    assert history.epochs == 4
    assert set(history.history) == {"loss", "acc", "val_loss", "val_acc"}
    assert seen[-1][1]["loss"] == history.final("loss")
    assert all(0.0 <= logs["acc"] <= 1.0 and 0.0 <= logs["val_acc"] <= 1.0 for _, logs in seen)


def test_validation_rows_come_from_the_tail(binary_data) -> None:
    features, target = binary_data
    features = features.clone()
    features[:, 0] = torch.arange(40, dtype=torch.float32)
    config = ModelConfig(epochs=2, batch_size=5)
    model = RecordingModel(build_model("linear", 3, config))

    ModelTrainer().train(model, features, target, config)

    assert sorted(set(model.train_rows)) == [float(i) for i in range(32)]
    assert len(model.train_rows) == 64


def test_no_validation_metrics_when_hold_out_is_empty() -> None:
    features = torch.randn(3, 2)
    target = torch.tensor([0.0, 1.0, 1.0])
    config = ModelConfig(epochs=1, batch_size=2)

    # floor(3 * 0.8) == 2 rows train, 1 row validates
    history = ModelTrainer().train(build_model("linear", 2, config), features, target, config)
    assert history.final("val_acc") is not None

    history = ModelTrainer(validation_split=0.0).train(build_model("linear", 2, config), features, target, config)
    assert history.final("val_acc") is None
    assert history.final("val_loss") is None


def test_training_without_rows_fails() -> None:
    config = ModelConfig(epochs=1)
    with pytest.raises(TrainingError):
        ModelTrainer().train(build_model("linear", 2, config), torch.randn(1, 2), torch.ones(1), config)


def test_mismatched_rows_fail(binary_data) -> None:
    features, target = binary_data
    config = ModelConfig(epochs=1)
    with pytest.raises(TrainingError):
        ModelTrainer().train(build_model("linear", 3, config), features, target[:-1], config)


def test_training_learns_separable_data(binary_data) -> None:
    features, target = binary_data
    config = ModelConfig(epochs=60, batch_size=8, learning_rate=0.1, optimizer="adam")
    model = build_model("linear", 3, config)
    trainer = ModelTrainer()

    trainer.train(model, features, target, config)
    loss, accuracy = trainer.evaluate(model, features, target)

    assert accuracy >= 0.85
    assert loss < 0.6


def test_evaluate_leaves_model_in_eval_mode(binary_data) -> None:
    features, target = binary_data
    model = build_model("simple", 3, ModelConfig(dropout_rate=0.2))
    loss, accuracy = ModelTrainer().evaluate(model, features, target)
    assert not model.training
    assert loss > 0
    assert 0.0 <= accuracy <= 1.0


def test_binary_accuracy_threshold() -> None:
    outputs = torch.tensor([[0.2], [0.7], [0.5], [0.9]])
    targets = torch.tensor([[0.0], [1.0], [1.0], [0.0]])
    assert binary_accuracy(outputs, targets) == (2, 4)


def test_history_final_defaults_to_none() -> None:
    history = TrainingHistory()
    assert history.final("loss") is None
    history.record({"loss": 1.0})
    history.record({"loss": 0.5})
    assert history.final("loss") == 0.5
    assert history.epochs == 2
