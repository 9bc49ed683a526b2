import os
from pathlib import Path
from typing import Optional
import yaml
from pydantic import ValidationError

from .schema import LogRangesConfig
from .defaults import CONFIG_ENV_VAR, DEFAULT_CONFIG_PATH
from ..errors import ConfigurationError


class ConfigLoader:
    def __init__(self, config_path: Path = DEFAULT_CONFIG_PATH):
        self.config_path = config_path

    def load(self) -> LogRangesConfig:
        """
        Load configuration from YAML file, validation with Pydantic schema.
        Returns default config if file does not exist.
        """
        if not self.config_path.exists():
            return LogRangesConfig()

        try:
            with open(self.config_path, "r", encoding="utf-8") as f:
                raw_config = yaml.safe_load(f) or {}

            if not isinstance(raw_config, dict):
                raise ConfigurationError(
                    f"Config file {self.config_path} must contain a mapping"
                )
            return LogRangesConfig(**raw_config)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Error parsing config file: {e}")
        except ValidationError as e:
            raise ConfigurationError(f"Invalid configuration: {e}")


def resolve_config_path(path: Optional[Path] = None) -> Path:
    if path:
        return Path(path)
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path)
    return DEFAULT_CONFIG_PATH


def load_config(path: Optional[Path] = None) -> LogRangesConfig:
    """Helper function to load config from a specific path, the environment, or default."""
    loader = ConfigLoader(resolve_config_path(path))
    return loader.load()
