"""Unit tests for configuration models."""

import pytest

from taskigt.models.config import Config, DocumentConfig, StorageConfig, default_config_path


class TestStorageConfig:
    """Test storage configuration model."""

    def test_default_directory(self, isolated_home):
        """Test the default directory is under the home directory."""
        config = StorageConfig()
        assert config.directory.endswith("taskigt/documents")

    def test_directory_expands_user(self, isolated_home):
        """Test ~ is expanded."""
        config = StorageConfig(directory="~/docs")
        assert not config.directory.startswith("~")

    def test_directory_that_is_a_file_is_rejected(self, tmp_path):
        """Test a file path is not accepted as storage directory."""
        file_path = tmp_path / "file.txt"
        file_path.write_text("content")

        with pytest.raises(ValueError, match="not a directory"):
            StorageConfig(directory=str(file_path))

    def test_storage_config_immutable(self, tmp_path):
        """Test that storage config is frozen (immutable)."""
        config = StorageConfig(directory=str(tmp_path))

        with pytest.raises(Exception):  # Pydantic ValidationError
            config.directory = "/elsewhere"


class TestDocumentConfig:
    """Test document defaults."""

    def test_defaults(self):
        config = DocumentConfig()
        assert config.default_title == "My items"
        assert config.pasted_title == "Pasted"

    def test_empty_title_rejected(self):
        with pytest.raises(ValueError):
            DocumentConfig(default_title="")


class TestConfigLoad:
    """Test Config.load with YAML files and environment overrides."""

    def test_missing_file_gives_defaults(self, tmp_path):
        """Test every setting has a default."""
        config = Config.load(tmp_path / "missing.yaml")
        assert config.document.default_title == "My items"

    def test_load_from_yaml(self, tmp_path):
        """Test loading settings from YAML."""
        docs = tmp_path / "docs"
        config_file = tmp_path / "config.yaml"
        config_file.write_text(f"""
storage:
  directory: {docs}

document:
  default_title: Inbox
""")

        config = Config.load(config_file)

        assert config.storage.directory == str(docs)
        assert config.document.default_title == "Inbox"
        assert config.document.pasted_title == "Pasted"

    def test_empty_file_gives_defaults(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("")
        assert Config.load(config_file) == Config()

    def test_invalid_yaml_raises(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("storage: [unclosed\n")
        with pytest.raises(ValueError, match="Invalid YAML"):
            Config.load(config_file)

    def test_non_mapping_raises(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("- just\n- a list\n")
        with pytest.raises(ValueError, match="must be a mapping"):
            Config.load(config_file)

    def test_env_overrides_file(self, tmp_path, monkeypatch):
        """Test TASKIGT_* variables win over file values."""
        config_file = tmp_path / "config.yaml"
        config_file.write_text("document:\n  default_title: From file\n")
        monkeypatch.setenv("TASKIGT_DOCUMENT_DEFAULT_TITLE", "From env")
        monkeypatch.setenv("TASKIGT_STORAGE_DIRECTORY", str(tmp_path / "env-docs"))

        config = Config.load(config_file)

        assert config.document.default_title == "From env"
        assert config.storage.directory == str(tmp_path / "env-docs")

    def test_env_override_with_empty_section(self, tmp_path, monkeypatch):
        """Test overrides work when the YAML section is empty."""
        config_file = tmp_path / "config.yaml"
        config_file.write_text("document:\n")
        monkeypatch.setenv("TASKIGT_DOCUMENT_PASTED_TITLE", "Clipboard")

        assert Config.load(config_file).document.pasted_title == "Clipboard"

    def test_default_config_path(self, isolated_home):
        assert default_config_path() == isolated_home / ".config" / "taskigt" / "config.yaml"
