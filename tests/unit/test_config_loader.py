"""
Unit Tests for ConfigLoader.

Test Aspects Covered:
    ✅ Business Logic: Config loading, defaults and profile merging
    ✅ Error Handling: Invalid values, missing files
"""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from response_cache.config.loader import ConfigLoader, load_config
from response_cache.config.models import CacheSettings, PartitionConfig


class TestConfigLoader:
    """Test cases for ConfigLoader."""

    def test_loads_sample_config(self, sample_config_path: Path) -> None:
        """
        SCENARIO: Fixture YAML overriding one partition and adding another
        EXPECTED: Overrides applied, other defaults kept
        """
        config = load_config(sample_config_path)

        assert isinstance(config, CacheSettings)
        assert config.log_access is True
        assert config.partitions["incidents"].ttl_seconds == 120
        assert config.partitions["incidents"].max_size == 10
        assert config.partitions["audit"].max_size == 5
        assert config.partitions["exports"].max_size == 50

    def test_empty_file_gives_defaults(self, tmp_path: Path) -> None:
        """
        SCENARIO: Empty YAML file
        EXPECTED: Built-in defaults
        """
        (tmp_path / "cache.yaml").write_text("")

        config = ConfigLoader(base_path=tmp_path).load("cache.yaml")

        assert config.partitions["searches"].ttl_seconds == 300
        assert config.partitions["similar"].max_size == 300

    def test_profile_merged(self, tmp_path: Path) -> None:
        """
        SCENARIO: Profile overrides one field of a partition
        EXPECTED: Field replaced, sibling fields preserved
        """
        (tmp_path / "cache.yaml").write_text(
            "partitions:\n  incidents:\n    ttl_seconds: 600\n    max_size: 500\n"
        )
        profiles = tmp_path / "config" / "profiles"
        profiles.mkdir(parents=True)
        (profiles / "development.yaml").write_text(
            "log_access: true\npartitions:\n  incidents:\n    ttl_seconds: 30\n"
        )

        config = ConfigLoader(base_path=tmp_path).load("cache.yaml", profile="development")

        assert config.log_access is True
        assert config.partitions["incidents"].ttl_seconds == 30
        assert config.partitions["incidents"].max_size == 500

    def test_missing_profile_raises(self, tmp_path: Path) -> None:
        """
        SCENARIO: Unknown profile name
        EXPECTED: FileNotFoundError
        """
        (tmp_path / "cache.yaml").write_text("{}")

        with pytest.raises(FileNotFoundError, match="Profile not found"):
            ConfigLoader(base_path=tmp_path).load("cache.yaml", profile="nope")

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        """
        SCENARIO: Config path does not exist
        EXPECTED: FileNotFoundError
        """
        with pytest.raises(FileNotFoundError):
            ConfigLoader(base_path=tmp_path).load("missing.yaml")

    @pytest.mark.parametrize(
        "partition",
        [{"ttl_seconds": 0}, {"ttl_seconds": 10, "max_size": 0}, {"max_size": 5}],
    )
    def test_invalid_partition_rejected(self, partition: dict) -> None:
        """
        SCENARIO: Non-positive TTL, zero capacity or missing TTL
        EXPECTED: ValidationError
        """
        with pytest.raises(ValidationError):
            ConfigLoader().load_from_dict({"partitions": {"incidents": partition}})


class TestCacheSettings:
    """Test cases for CacheSettings."""

    def test_unknown_partition_fallback(self) -> None:
        """Unconfigured names get a 5 minute TTL and default size."""
        config = CacheSettings().partition("misc")
        assert config == PartitionConfig(ttl_seconds=300, max_size=1000)


class TestLoadConfigEnvironment:
    """Test cases for environment-driven loading."""

    def test_no_path_gives_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """
        SCENARIO: No path argument and no environment variable
        EXPECTED: Built-in defaults
        """
        monkeypatch.delenv("RESPONSE_CACHE_CONFIG", raising=False)

        config = load_config()

        assert config == CacheSettings()

    def test_path_from_environment(
        self, monkeypatch: pytest.MonkeyPatch, sample_config_path: Path
    ) -> None:
        """
        SCENARIO: RESPONSE_CACHE_CONFIG points to a file
        EXPECTED: That file is loaded
        """
        monkeypatch.setenv("RESPONSE_CACHE_CONFIG", str(sample_config_path))
        monkeypatch.delenv("RESPONSE_CACHE_PROFILE", raising=False)

        config = load_config()

        assert config.partitions["incidents"].ttl_seconds == 120

    def test_non_mapping_document_rejected(self, tmp_path: Path) -> None:
        """
        SCENARIO: YAML document is a list
        EXPECTED: ValueError naming the problem
        """
        (tmp_path / "cache.yaml").write_text("- incidents\n- searches\n")

        with pytest.raises(ValueError, match="must be a mapping"):
            ConfigLoader(base_path=tmp_path).load("cache.yaml")
