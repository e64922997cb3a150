"""
Configuration Loader - YAML Loading with Validation.

Loads cache settings from YAML and validates them with Pydantic models.
The config path may come from the RESPONSE_CACHE_CONFIG environment
variable; without any file the built-in partition defaults apply.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from response_cache.config.models import CacheSettings

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "RESPONSE_CACHE_CONFIG"
PROFILE_ENV_VAR = "RESPONSE_CACHE_PROFILE"


class ConfigLoader:
    """Loads and validates cache settings from YAML files."""

    def __init__(self, base_path: Optional[Path] = None) -> None:
        """
        Initialize config loader.

        Args:
            base_path: Base path for relative config paths and profiles
        """
        self._base_path = base_path or Path(".")

    def load(
        self,
        config_path: Union[str, Path],
        profile: Optional[str] = None,
    ) -> CacheSettings:
        """
        Load settings from a YAML file.

        Args:
            config_path: Path to YAML config file
            profile: Optional profile name merged on top

        Returns:
            Validated CacheSettings object

        Raises:
            FileNotFoundError: If config or profile file doesn't exist
            ValueError: If the YAML document is not a mapping
            ValidationError: If a value is invalid
        """
        settings = self._read_mapping(self._resolve_path(config_path))

        if profile:
            settings = self._merge(settings, self._read_profile(profile))

        logger.debug(f"Loaded cache settings from {config_path} (profile={profile})")
        return CacheSettings.model_validate(settings)

    def load_from_dict(self, config_dict: Dict[str, Any]) -> CacheSettings:
        """Validate settings given as a dictionary."""
        return CacheSettings.model_validate(config_dict)

    def _resolve_path(self, path: Union[str, Path]) -> Path:
        p = Path(path)
        return p if p.is_absolute() else self._base_path / p

    def _read_mapping(self, path: Path) -> Dict[str, Any]:
        with open(path, encoding="utf-8") as f:
            document = yaml.safe_load(f)
        if document is None:
            return {}
        if not isinstance(document, dict):
            raise ValueError(
                f"Cache config {path} must be a mapping, got {type(document).__name__}"
            )
        return document

    def _read_profile(self, profile: str) -> Dict[str, Any]:
        profile_path = self._base_path / "config" / "profiles" / f"{profile}.yaml"
        if not profile_path.exists():
            raise FileNotFoundError(f"Profile not found: {profile}")
        return self._read_mapping(profile_path)

    def _merge(
        self,
        base: Dict[str, Any],
        overlay: Dict[str, Any],
    ) -> Dict[str, Any]:
        """Recursively merge overlay into base; overlay wins on conflicts."""
        merged = dict(base)
        for key, value in overlay.items():
            current = merged.get(key)
            if isinstance(current, dict) and isinstance(value, dict):
                merged[key] = self._merge(current, value)
            else:
                merged[key] = value
        return merged


def load_config(
    config_path: Optional[Union[str, Path]] = None,
    profile: Optional[str] = None,
    base_path: Optional[Path] = None,
) -> CacheSettings:
    """
    Load cache settings.

    Args:
        config_path: YAML file; falls back to $RESPONSE_CACHE_CONFIG
        profile: Profile name; falls back to $RESPONSE_CACHE_PROFILE
        base_path: Base path for resolving relative paths

    Returns:
        Validated CacheSettings (built-in defaults when no file is given)
    """
    config_path = config_path or os.environ.get(CONFIG_ENV_VAR)
    profile = profile or os.environ.get(PROFILE_ENV_VAR)

    if not config_path:
        return CacheSettings()

    return ConfigLoader(base_path=base_path).load(config_path, profile)
