# examples/step2_cross_validation.py

from ml_studio import ModelConfig, cross_validate, fold_bounds, split_feature_target
from ml_studio.sample_datasets import TARGET_COLUMN, SampleDatasetGenerator


def main():
    data, info = SampleDatasetGenerator(seed=7).generate_nonlinear_dataset(n_samples=300, pattern="moons")
    features, target = split_feature_target(data, TARGET_COLUMN)
    print(f"Dataset: {info.description} {tuple(features.shape)}")

    folds = 4
    print(f"Fold blocks: {fold_bounds(features.shape[0], folds)}")

    config = ModelConfig(epochs=15, batch_size=16, learning_rate=0.01, model_type="deep",
                         hidden_layers=(64, 32), dropout_rate=0.1, optimizer="adam", activation="relu")
    result = cross_validate(features, target, config, folds)
    print(f"Cross-validated accuracy: {result.accuracy:.4f} (+/- {result.accuracy_std:.4f})")
    print(f"Cross-validated loss: {result.loss:.4f}")

if __name__ == "__main__":
    main()
