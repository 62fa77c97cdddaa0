"""Configuration management with lazy validation."""

from pathlib import Path
from functools import cached_property

from posteditor.models.config import Config, EditorConfig, StorageConfig
from posteditor.utils.logging import get_logger


logger = get_logger(__name__)

DEFAULT_CONFIG_PATH = Path.home() / ".config" / "posteditor" / "config.yaml"


class ConfigManager:
    """
    Configuration manager with lazy validation.

    Example:
        >>> config_mgr = ConfigManager.load_default()
        >>> editor_config = config_mgr.editor
        >>> posts_dir = config_mgr.storage.posts_dir
    """

    def __init__(self, config: Config):
        """
        Initialize config manager with loaded config.

        Args:
            config: Loaded and validated Config instance
        """
        self._config = config

    @classmethod
    def load_default(cls) -> "ConfigManager":
        """
        Load configuration from the default path (~/.config/posteditor/config.yaml).

        Falls back to built-in defaults when no config file exists.

        Raises:
            ValueError: If the config file exists but is invalid
        """
        if not DEFAULT_CONFIG_PATH.exists():
            logger.info("config_defaults_used", path=str(DEFAULT_CONFIG_PATH))
            return cls(Config())
        return cls.load_from_path(DEFAULT_CONFIG_PATH)

    @classmethod
    def load_from_path(cls, path: Path) -> "ConfigManager":
        """
        Load configuration from specific path.

        Args:
            path: Path to config.yaml file

        Returns:
            ConfigManager instance with loaded config

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If config is invalid
        """
        logger.info("config_loading", path=str(path))

        try:
            config = Config.load(path)
            logger.info("config_loaded", path=str(path))
            return cls(config)

        except FileNotFoundError as e:
            logger.error("config_not_found", path=str(path), error=str(e))
            raise

        except Exception as e:
            logger.error("config_validation_error", path=str(path), error=str(e))
            raise ValueError(f"Configuration validation failed: {e}") from e

    @cached_property
    def editor(self) -> EditorConfig:
        """Editor configuration (defaults if not specified)."""
        return self._config.editor

    @cached_property
    def storage(self) -> StorageConfig:
        """
        Get storage configuration.

        Returns:
            Validated storage configuration
        """
        return self._config.storage
