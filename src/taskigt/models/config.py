"""Configuration models for Taskigt."""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator


def default_config_path() -> Path:
    """Default config file location (~/.config/taskigt/config.yaml)."""
    return Path.home() / ".config" / "taskigt" / "config.yaml"


# Environment overrides: variable -> (section, key)
ENV_OVERRIDES = {
    "TASKIGT_STORAGE_DIRECTORY": ("storage", "directory"),
    "TASKIGT_DOCUMENT_DEFAULT_TITLE": ("document", "default_title"),
    "TASKIGT_DOCUMENT_PASTED_TITLE": ("document", "pasted_title"),
}


class StorageConfig(BaseModel):
    """Configuration for the document store."""

    directory: str = Field(
        default="~/.local/share/taskigt/documents",
        description="Directory holding saved documents (created on first save)"
    )

    @field_validator("directory")
    @classmethod
    def validate_directory(cls, v: str) -> str:
        """Expand ~ and reject paths that exist but are not directories."""
        path = Path(v).expanduser()
        if path.exists() and not path.is_dir():
            raise ValueError(
                f"Storage directory is not a directory: {path}\n"
                f"Please provide a valid directory path"
            )
        return str(path)

    model_config = {"frozen": True}


class DocumentConfig(BaseModel):
    """Defaults for new and imported documents."""

    default_title: str = Field(
        default="My items",
        min_length=1,
        description="Title of the document a new session starts with"
    )

    pasted_title: str = Field(
        default="Pasted",
        min_length=1,
        description="Title given to documents imported from text"
    )

    model_config = {"frozen": True}


class Config(BaseModel):
    """Root configuration for Taskigt."""

    storage: StorageConfig = Field(default_factory=StorageConfig, description="Document store settings")
    document: DocumentConfig = Field(default_factory=DocumentConfig, description="Document defaults")

    @classmethod
    def load(cls, path: Path) -> "Config":
        """
        Load configuration from YAML file with environment variable overrides.

        Every setting has a default, so a missing file is not an error.

        Args:
            path: Path to config.yaml file

        Returns:
            Validated Config instance

        Raises:
            ValueError: If YAML is invalid or validation fails
        """
        data: dict[str, Any] = {}
        if path.exists():
            with open(path) as f:
                try:
                    data = yaml.safe_load(f) or {}
                except yaml.YAMLError as e:
                    raise ValueError(f"Invalid YAML in {path}: {e}") from e
            if not isinstance(data, dict):
                raise ValueError(f"Configuration in {path} must be a mapping")

        return cls(**_apply_env_overrides(data))

    model_config = {"frozen": True}


def _apply_env_overrides(data: dict[str, Any]) -> dict[str, Any]:
    """Apply TASKIGT_SECTION_KEY environment variables on top of file data.

    Args:
        data: Configuration dictionary from YAML

    Returns:
        Configuration dictionary with environment overrides applied
    """
    for env_name, (section, key) in ENV_OVERRIDES.items():
        if value := os.getenv(env_name):
            data[section] = {**(data.get(section) or {}), key: value}
    return data
