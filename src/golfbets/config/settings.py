"""Configuration settings for the golf betting engine."""

from pathlib import Path

import yaml

from golfbets.config.env import EnvConfig
from golfbets.config.types import EngineSettings
from golfbets.config.utils import deep_merge
from golfbets.config.utils import get_config_dir
from golfbets.config.validation import validate_settings
from golfbets.error_codes import ErrorCode
from golfbets.exceptions import ConfigError


SETTINGS_FILE = "settings.yaml"

class ConfigurationManager:
    """Centralized configuration management with caching."""
    
    _instance = None
    
    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance
    
    def __init__(self):
        if self._initialized:
            return
            
        self._settings: EngineSettings | None = None
        self._config_path: Path | None = None
        self._initialized = True
    
    @property
    def settings(self) -> EngineSettings:
        """Get the current settings, loading them if necessary."""
        if self._settings is None:
            return self.load_config()
        return self._settings
    
    def load_config(self, config_dir: str | None = None) -> EngineSettings:
        """Load settings with caching."""
        if self._settings is not None:
            return self._settings
            
        self._config_path = get_config_dir(config_dir)
        self._settings = _load_settings(self._config_path)
        return self._settings
    
    def reload_config(self, config_dir: str | None = None) -> EngineSettings:
        """Force reload settings."""
        self._settings = None
        return self.load_config(config_dir)

def _load_settings(config_path: Path) -> EngineSettings:
    """Load settings from YAML file and environment."""
    settings_dict = EnvConfig.get_settings_config()
    
    settings_file = config_path / SETTINGS_FILE
    if settings_file.exists():
        with open(settings_file, encoding="utf-8") as f:
            try:
                loaded = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ConfigError(
                    f"Could not parse {settings_file}: {e}",
                    ErrorCode.CONFIG_INVALID,
                    {"file": str(settings_file)}
                ) from e
        if not isinstance(loaded, dict):
            raise ConfigError(
                f"Settings file must contain a mapping: {settings_file}",
                details={"file": str(settings_file)}
            )
        settings_dict = deep_merge(settings_dict, loaded)
    
    try:
        settings = EngineSettings.from_dict(settings_dict)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid settings value: {e}", details={"source": str(config_path)}) from e
    
    validate_settings(settings)
    return settings

def get_settings() -> EngineSettings:
    """Shortcut for the cached engine settings."""
    return ConfigurationManager().settings
