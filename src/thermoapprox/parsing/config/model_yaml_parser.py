import logging
import re
from dataclasses import dataclass
from difflib import get_close_matches
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from ruamel.yaml import YAML, constructor, scanner

from thermoapprox.core.exceptions import ConfigError
from thermoapprox.core.table import resample_grid
from thermoapprox.data.constants import PlotConstants, ProcessingConstants
from thermoapprox.parsing.config.yaml_keys import (GRID_KEY, START_KEY, STOP_KEY, STEP_KEY, PLOT_KEY, ENABLED_KEY,
                                                   X_LABEL_KEY, Y_LABEL_KEY, SERIAL_PATTERN_KEY, TOP_LEVEL_KEYS,
                                                   GRID_KEYS, PLOT_KEYS)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ModelConfig:
    """Settings for resampling, plotting and serial number detection."""
    grid_start: int = ProcessingConstants.GRID_START
    grid_stop: int = ProcessingConstants.GRID_STOP
    grid_step: int = ProcessingConstants.GRID_STEP
    plot_enabled: bool = True
    x_label: str = PlotConstants.X_LABEL
    y_label: str = PlotConstants.Y_LABEL
    serial_pattern: str = ProcessingConstants.SERIAL_PATTERN

    def __post_init__(self) -> None:
        for name in ("grid_start", "grid_stop", "grid_step"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigError(f"'{name}' must be an integer, got {value!r}")
        if self.grid_step <= 0:
            raise ConfigError(f"Grid step must be positive, got {self.grid_step}")
        if self.grid_stop < self.grid_start:
            raise ConfigError(f"Grid stop ({self.grid_stop}) is below grid start ({self.grid_start})")
        if not isinstance(self.plot_enabled, bool):
            raise ConfigError(f"'plot.enabled' must be true or false, got {self.plot_enabled!r}")
        try:
            re.compile(self.serial_pattern)
        except (re.error, TypeError) as e:
            raise ConfigError(f"Invalid serial pattern {self.serial_pattern!r}: {e}") from e

    @property
    def grid(self) -> List[int]:
        return resample_grid(self.grid_start, self.grid_stop, self.grid_step)


class BaseFileParser:
    """Base class for parsing configuration files."""

    def __init__(self, config_path: Union[str, Path]) -> None:
        self.config_path = Path(config_path)
        self.base_dir = self.config_path.parent
        self.config = self._load_config()
        logger.info("Successfully loaded configuration from: %s", self.config_path)

    def _load_config(self) -> Dict[str, Any]:
        raise NotImplementedError("Subclasses must implement _load_config method")


class YAMLFileParser(BaseFileParser):
    """Parser for YAML configuration files."""

    def _load_config(self) -> Dict[str, Any]:
        yaml = YAML(typ='safe')
        yaml.allow_duplicate_keys = False
        try:
            logger.debug("Loading YAML file: %s", self.config_path)
            with open(self.config_path, 'r', encoding='utf-8') as f:
                config = yaml.load(f)
        except FileNotFoundError as e:
            logger.error("YAML file not found: %s", self.config_path)
            raise FileNotFoundError(f"YAML file not found: {self.config_path}") from e
        except constructor.DuplicateKeyError as e:
            raise ConfigError(f"Duplicate key in {self.config_path}: {e}") from e
        except scanner.ScannerError as e:
            raise ConfigError(f"YAML syntax error in {self.config_path}: {e}") from e
        if config is None:
            logger.debug("YAML file %s is empty, using defaults", self.config_path)
            return {}
        if not isinstance(config, dict):
            raise ConfigError(f"Top level of {self.config_path} must be a mapping, got {type(config).__name__}")
        logger.debug("YAML file loaded successfully, found %d top-level keys", len(config))
        return config


class ModelYAMLParser(YAMLFileParser):
    """Parser for model configuration files in YAML format."""

    def __init__(self, yaml_path: Union[str, Path]) -> None:
        super().__init__(yaml_path)
        self._validate_keys(self.config, TOP_LEVEL_KEYS, "configuration")
        for section, allowed in ((GRID_KEY, GRID_KEYS), (PLOT_KEY, PLOT_KEYS)):
            value = self.config.get(section, {})
            if not isinstance(value, dict):
                raise ConfigError(f"'{section}' must be a mapping, got {type(value).__name__}")
            self._validate_keys(value, allowed, f"'{section}' section")

    @staticmethod
    def _validate_keys(section: Dict[str, Any], allowed: frozenset, where: str) -> None:
        unknown = set(section) - allowed
        if not unknown:
            return
        messages = []
        for key in sorted(unknown, key=str):
            suggestion = get_close_matches(str(key), sorted(allowed), n=1)
            hint = f" (did you mean '{suggestion[0]}'?)" if suggestion else ""
            messages.append(f"'{key}'{hint}")
        raise ConfigError(f"Unknown key(s) in {where}: {', '.join(messages)}")

    def create_config(self) -> ModelConfig:
        defaults = ModelConfig()
        grid = self.config.get(GRID_KEY, {})
        plot = self.config.get(PLOT_KEY, {})
        config = ModelConfig(
            grid_start=grid.get(START_KEY, defaults.grid_start),
            grid_stop=grid.get(STOP_KEY, defaults.grid_stop),
            grid_step=grid.get(STEP_KEY, defaults.grid_step),
            plot_enabled=plot.get(ENABLED_KEY, defaults.plot_enabled),
            x_label=str(plot.get(X_LABEL_KEY, defaults.x_label)),
            y_label=str(plot.get(Y_LABEL_KEY, defaults.y_label)),
            serial_pattern=self.config.get(SERIAL_PATTERN_KEY, defaults.serial_pattern),
        )
        logger.debug("Model configuration: %s", config)
        return config


def load_model_config(yaml_path: Optional[Union[str, Path]] = None) -> ModelConfig:
    """Load a model configuration, or the defaults when no path is given."""
    if yaml_path is None:
        return ModelConfig()
    return ModelYAMLParser(yaml_path).create_config()
