"""
Configuration Unit Tests
Tests for merkletree/config/runtime.py
"""
import pytest

from merkletree.config import ENV_PREFIX, TreeConfig, get_default_config
from merkletree.crypto.hashing import SHA256, SHA512
from merkletree.schemas.errors import ConfigurationError


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in ("HASH_ALGORITHM", "LOG_LEVEL", "LOG_FILE", "OUTPUT_FORMAT"):
        monkeypatch.delenv(f"{ENV_PREFIX}{key}", raising=False)


class TestTreeConfig:
    """Tests for TreeConfig construction and validation."""

    def test_defaults(self):
        """Test default configuration values."""
        config = TreeConfig()

        assert config.hash_algorithm == "sha256"
        assert config.log_level == "INFO"
        assert config.log_file is None
        assert config.output_format == "human"
        assert config.hash_func() is SHA256

    def test_log_level_normalized(self):
        """Test log level is uppercased."""
        assert TreeConfig(log_level="debug").log_level == "DEBUG"

    def test_invalid_log_level(self):
        """Test an unknown log level is rejected."""
        with pytest.raises(ConfigurationError):
            TreeConfig(log_level="LOUD")

    def test_invalid_output_format(self):
        """Test an unknown output format is rejected."""
        with pytest.raises(ConfigurationError):
            TreeConfig(output_format="xml")

    def test_unknown_algorithm_fails_on_resolve(self):
        """Test an unknown algorithm fails when resolved."""
        config = TreeConfig(hash_algorithm="md4")

        with pytest.raises(ConfigurationError):
            config.hash_func()

    def test_to_dict_from_dict(self):
        """Test to_dict output loads back into an equal config."""
        config = TreeConfig(hash_algorithm="sha512", output_format="json", extra={"k": 1})

        assert TreeConfig.from_dict(config.to_dict()) == config


class TestEnvironment:
    """Tests for MERKLETREE_* environment overrides."""

    def test_from_env(self, monkeypatch):
        """Test loading from MERKLETREE_* variables."""
        monkeypatch.setenv("MERKLETREE_HASH_ALGORITHM", "sha512")
        monkeypatch.setenv("MERKLETREE_OUTPUT_FORMAT", "json")

        config = TreeConfig.from_env()

        assert config.hash_func() is SHA512
        assert config.output_format == "json"

    def test_from_env_empty(self):
        """Test an empty environment gives defaults."""
        assert TreeConfig.from_env() == TreeConfig()

    def test_with_env_overrides_keeps_file_values(self, monkeypatch):
        """Test env overrides apply on top of file values."""
        base = TreeConfig(hash_algorithm="sha512", log_level="WARNING", extra={"k": 1})
        monkeypatch.setenv("MERKLETREE_LOG_LEVEL", "ERROR")

        config = base.with_env_overrides()

        assert config.hash_algorithm == "sha512"
        assert config.log_level == "ERROR"
        assert config.extra == {"k": 1}
        assert config.extra is not base.extra

    def test_with_env_overrides_no_env_returns_self(self):
        """Test no overrides returns the same config."""
        config = TreeConfig()

        assert config.with_env_overrides() is config


class TestYaml:
    """Tests for YAML config files."""

    def test_from_yaml(self, tmp_path):
        """Test loading from a YAML file."""
        path = tmp_path / "merkletree.yaml"
        path.write_text("hash_algorithm: sha3_256\nlog_level: debug\n")

        config = TreeConfig.from_yaml(path)

        assert config.hash_algorithm == "sha3_256"
        assert config.log_level == "DEBUG"
        assert config.output_format == "human"

    def test_empty_yaml_gives_defaults(self, tmp_path):
        """Test an empty YAML file gives defaults."""
        path = tmp_path / "merkletree.yaml"
        path.write_text("")

        assert TreeConfig.from_yaml(path) == TreeConfig()

    def test_missing_file(self, tmp_path):
        """Test a missing YAML file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            TreeConfig.from_yaml(tmp_path / "absent.yaml")

    def test_non_mapping_rejected(self, tmp_path):
        """Test a YAML list is rejected."""
        path = tmp_path / "merkletree.yaml"
        path.write_text("- sha256\n")

        with pytest.raises(ConfigurationError):
            TreeConfig.from_yaml(path)


class TestDefaultConfig:
    """Tests for the process-wide default config."""

    def test_loaded_once_from_env(self, monkeypatch):
        """Test the default config is loaded once and cached."""
        from merkletree.config import runtime

        monkeypatch.setattr(runtime, "_default_config", None)
        monkeypatch.setenv("MERKLETREE_HASH_ALGORITHM", "blake2b")

        first = get_default_config()
        monkeypatch.setenv("MERKLETREE_HASH_ALGORITHM", "sha512")

        assert first.hash_algorithm == "blake2b"
        assert get_default_config() is first
