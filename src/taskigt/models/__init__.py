"""Pydantic data models for Taskigt."""

from taskigt.models.config import Config, DocumentConfig, StorageConfig

__all__ = ["Config", "DocumentConfig", "StorageConfig"]
