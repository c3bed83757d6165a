import numpy as np
import pytest

torch = pytest.importorskip("torch")

from ml_studio.trainer import ModelTrainer, TrainingHistory


@pytest.fixture(autouse=True)
def _seed() -> None:
    torch.manual_seed(0)
    np.random.seed(0)


@pytest.fixture
def binary_data():
    """40 rows, 3 features, target = first feature > 0."""
    generator = torch.Generator().manual_seed(1)
    features = torch.randn(40, 3, generator=generator)
    target = (features[:, 0] > 0).float()
    return features, target


class ScriptedTrainer(ModelTrainer):
    """Skips real optimisation; evaluate() replays scripted (loss, accuracy) pairs."""

    def __init__(self, scores=None, fail_on_train=None):
        super().__init__()
        self.scores = list(scores or [(0.5, 0.5)])
        self.fail_on_train = fail_on_train or (lambda call, config: False)
        self.train_calls = []
        self.evaluated_rows = []
        self._evaluations = 0

    def train(self, model, features, target, config, on_epoch_end=None):
        call = len(self.train_calls)
        self.train_calls.append((features.shape[0], config))
        if self.fail_on_train(call, config):
            raise RuntimeError(f"scripted failure on call {call}")
        history = TrainingHistory()
        history.record({"loss": 0.4, "acc": 0.8, "val_loss": 0.45, "val_acc": 0.75})
        return history

    def evaluate(self, model, features, target):
        self.evaluated_rows.append(features.clone())
        score = self.scores[self._evaluations % len(self.scores)]
        self._evaluations += 1
        return score


@pytest.fixture
def scripted_trainer():
    return ScriptedTrainer
