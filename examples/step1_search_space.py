# examples/step1_search_space.py

from ml_studio import HyperparameterSearchSpace, ModelConfig, build_model, generate_model_configurations
from ml_studio.model_catalog import count_parameters, hidden_layer_widths


def main():
    base_config = ModelConfig(epochs=30, batch_size=32, learning_rate=0.001, target_variable="target")

    configurations = generate_model_configurations(base_config)
    print(f"Full grid size: {HyperparameterSearchSpace.size()}")
    print(f"Configurations considered: {len(configurations)}")
    for config in configurations[:5]:
        print(f"  {config.model_type} lr={config.learning_rate} batch={config.batch_size} "
              f"dropout={config.dropout_rate} {config.optimizer}/{config.activation} "
              f"layers={list(config.hidden_layers)} epochs={config.epochs}")

    print("\nModel catalog:")
    for model_type in HyperparameterSearchSpace.MODEL_TYPES:
        model = build_model(model_type, 8, ModelConfig(hidden_layers=(64, 32), dropout_rate=0.2))
        print(f"  {model_type:<7} hidden={hidden_layer_widths(model)} params={count_parameters(model)}")

if __name__ == "__main__":
    main()
