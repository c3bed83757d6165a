# examples/step3_automl.py

from ml_studio import AutoMLConfig, AutoMLOptimizer, ModelConfig, split_feature_target, summarize_results
from ml_studio.sample_datasets import TARGET_COLUMN, SampleDatasetGenerator
from ml_studio.utils import format_leaderboard, setup_logging


def main():
    setup_logging("INFO")
    data, _ = SampleDatasetGenerator(seed=42).generate_classification_dataset(n_samples=400, difficulty="easy")
    features, target = split_feature_target(data, TARGET_COLUMN)

    automl = AutoMLOptimizer(AutoMLConfig(max_trials=6, cross_validation_folds=3))
    base_config = ModelConfig(epochs=8, batch_size=32, learning_rate=0.001, target_variable=TARGET_COLUMN)

    print("Running AutoML optimization...")
    results = automl.run(
        features, target, base_config,
        on_progress=lambda pct, trial, best: print(f"  trial {trial}: {pct:.0f}%"),
    )
    print(format_leaderboard(results))
    print(summarize_results(results))

if __name__ == "__main__":
    main()
