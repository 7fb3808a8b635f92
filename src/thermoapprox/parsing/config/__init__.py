"""Model configuration loading."""

from .model_yaml_parser import ModelConfig, ModelYAMLParser, load_model_config

__all__ = [
    "ModelConfig",
    "ModelYAMLParser",
    "load_model_config"
]
