"""Shared configuration utilities."""

import os
from pathlib import Path
from typing import TypeVar, Callable, Generic

import yaml

T = TypeVar('T')

# Repository-level directory holding the YAML configs
CONFIG_DIR = Path(__file__).resolve().parents[2] / "configs"


def find_config_path(
    config_name: str | None,
    config_dir: Path = CONFIG_DIR,
    default_name: str = "default",
    env_var: str | None = None,
) -> Path:
    """Find config file path, checking env var and defaults.

    Args:
        config_name: Name of config (without .yaml), a path to a YAML file,
            or None for default
        config_dir: Directory containing config files
        default_name: Default config name if config_name is None
        env_var: Environment variable to check for config name

    Returns:
        Path to the config file

    Raises:
        FileNotFoundError: If config file doesn't exist
    """
    if config_name is None:
        config_name = os.environ.get(env_var, default_name) if env_var else default_name

    if "/" in config_name or config_name.endswith((".yaml", ".yml")):
        config_path = Path(config_name)
    else:
        config_path = config_dir / f"{config_name}.yaml"

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    return config_path


def load_yaml(path: Path) -> dict:
    """Load YAML file and return dict (empty files load as {})."""
    with open(path) as f:
        return yaml.safe_load(f) or {}


class ConfigSingleton(Generic[T]):
    """Process-wide config holder for one pipeline stage.

    The stage module exposes the bound methods as its accessors:

        _manager = ConfigSingleton(load_config)
        get_config, set_config, reset_config = _manager.get, _manager.set, _manager.reset

    Tests call set_config() with a hand-built config and reset_config()
    afterwards so the next get_config() reads YAML again.
    """

    def __init__(self, loader: Callable[[], T] | None = None):
        self._loader = loader
        self._config: T | None = None

    @property
    def loaded(self) -> bool:
        return self._config is not None

    def get(self) -> T:
        if not self.loaded:
            if self._loader is None:
                raise RuntimeError("Config was never set and no loader is configured")
            self._config = self._loader()
        return self._config

    def set(self, config: T) -> None:
        self._config = config

    def reset(self) -> None:
        self._config = None
