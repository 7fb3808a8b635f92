"""
Configuration and file handling for thermoapprox.

This package loads model configuration files and reads and writes offset
table files.
"""

from .config.model_yaml_parser import ModelConfig, ModelYAMLParser, load_model_config
from .io.data_handler import derive_path, load_table, save_table, save_text

__all__ = [
    'ModelConfig',
    'ModelYAMLParser',
    'load_model_config',
    'derive_path',
    'load_table',
    'save_table',
    'save_text'
]
