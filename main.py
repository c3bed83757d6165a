#!/usr/bin/env python3
"""
Main execution script for ML Studio AutoML
"""

import argparse
import sys

from ml_studio import (
    AutoMLConfig,
    AutoMLOptimizer,
    MAX_GENERATED_CONFIGURATIONS,
    ModelConfig,
    MLStudioError,
    export_model,
    load_csv,
    plot_leaderboard,
    split_feature_target,
    summarize_results,
)
from ml_studio.sample_datasets import TARGET_COLUMN, SampleDatasetGenerator
from ml_studio.utils import format_leaderboard, setup_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Run AutoML over a tabular binary-classification dataset")
    parser.add_argument("csv", nargs="?", help="CSV file with a header row")
    parser.add_argument("--target", help="Name of the target column")
    parser.add_argument("--demo", choices=["easy", "hard", "moons", "circles"],
                        help="Use a bundled synthetic dataset instead of a CSV")
    parser.add_argument("--max-trials", type=int, default=20)
    parser.add_argument("--folds", type=int, default=3)
    parser.add_argument("--validation-split", type=float, default=0.2)
    parser.add_argument("--early-stopping-patience", type=int, default=5)
    parser.add_argument("--epochs", type=int, default=10)
    parser.add_argument("--batch-size", type=int, default=32)
    parser.add_argument("--learning-rate", type=float, default=0.001)
    parser.add_argument("--export", metavar="PATH", help="Save the best model to PATH")
    parser.add_argument("--plot", metavar="PATH", help="Save a leaderboard chart to PATH")
    parser.add_argument("--log-level", default="INFO", type=str.upper,
                        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"])
    return parser


def load_dataset(args: argparse.Namespace):
    """Return (dataset, target column) for the requested source."""
    if args.demo:
        generator = SampleDatasetGenerator(seed=42)
        data, info = generator.get_all_sample_datasets()[args.demo]
        print(f"📊 Using demo dataset: {info.description}")
        return data, args.target or TARGET_COLUMN
    if not args.csv:
        raise SystemExit("error: provide a CSV file or --demo")
    if not args.target:
        raise SystemExit("error: --target is required with a CSV file")
    return load_csv(args.csv), args.target


def main(argv=None) -> int:
    """Main execution function."""
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)

    print("🚀 ML Studio AutoML")
    try:
        data, target_column = load_dataset(args)
        features, target = split_feature_target(data, target_column)

        base_config = ModelConfig(
            epochs=args.epochs,
            batch_size=args.batch_size,
            learning_rate=args.learning_rate,
            target_variable=target_column,
        )
        automl_config = AutoMLConfig(
            max_trials=args.max_trials,
            validation_split=args.validation_split,
            early_stopping_patience=args.early_stopping_patience,
            cross_validation_folds=args.folds,
        )

        def report(percent, trial, best):
            best_text = f"best {best.metrics.accuracy * 100:.2f}% ({best.model_type})" if best else "no result yet"
            print(f"⚡ Trial {trial} of {min(automl_config.max_trials, MAX_GENERATED_CONFIGURATIONS)} [{percent:5.1f}%] {best_text}")

        optimizer = AutoMLOptimizer(automl_config)
        results = optimizer.run(features, target, base_config, on_progress=report)
    except MLStudioError as e:
        print(f"❌ {e}", file=sys.stderr)
        return 2

    if not results:
        print("❌ Every trial failed; no models were trained.", file=sys.stderr)
        return 1

    skipped = optimizer.optimization_history[-1]["trials_skipped"]
    summary = summarize_results(results, skipped)

    print("\n" + format_leaderboard(results))
    print(f"\n🏆 Best accuracy: {summary.best_accuracy * 100:.2f}%")
    print(f"📈 Average accuracy: {summary.average_accuracy * 100:.2f}%")
    print(f"⏱️ Total training time: {summary.total_training_time / 1000:.1f}s")
    print(f"🧪 Models tested: {summary.models_tested} (skipped: {summary.skipped_trials})")

    if args.export:
        best = results[0]
        saved_at = export_model(best.model, best.config, args.export, features.shape[1])
        print(f"💾 Exported best model to {args.export} at {saved_at}")
    if args.plot:
        plot_leaderboard(results, save_path=args.plot)
        print(f"🎨 Saved leaderboard chart to {args.plot}")

    print("\n🎉 Execution completed!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
