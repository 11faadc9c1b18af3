"""Configuration loading for the CLI."""

from functools import cached_property
from pathlib import Path

from taskigt.models.config import Config, DocumentConfig, StorageConfig, default_config_path
from taskigt.utils.logging import get_logger


logger = get_logger(__name__)


class ConfigManager:
    """
    Configuration manager used by the CLI.

    Wraps loading errors into ValueError with a readable message and logs
    where the configuration came from.

    Example:
        >>> config_mgr = ConfigManager.load_default()
        >>> config_mgr.storage.directory
        '/home/me/.local/share/taskigt/documents'
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
        Load configuration from default path (~/.config/taskigt/config.yaml).

        Returns:
            ConfigManager instance with loaded config

        Raises:
            ValueError: If config is invalid
        """
        return cls.load_from_path(default_config_path())

    @classmethod
    def load_from_path(cls, path: Path) -> "ConfigManager":
        """
        Load configuration from specific path.

        Args:
            path: Path to config.yaml file (may not exist)

        Returns:
            ConfigManager instance with loaded config

        Raises:
            PermissionError: If the config file cannot be read
            ValueError: If config is invalid
        """
        logger.info("config_loading", path=str(path), exists=path.exists())

        try:
            config = Config.load(path)
            logger.info("config_loaded", path=str(path))
            return cls(config)

        except PermissionError as e:
            logger.error("config_permission_error", path=str(path), error=str(e))
            raise

        except Exception as e:
            logger.error("config_validation_error", path=str(path), error=str(e))
            raise ValueError(f"Configuration validation failed: {e}") from e

    @property
    def config(self) -> Config:
        return self._config

    @cached_property
    def storage(self) -> StorageConfig:
        """Document store configuration."""
        return self._config.storage

    @cached_property
    def document(self) -> DocumentConfig:
        """Document defaults."""
        return self._config.document
