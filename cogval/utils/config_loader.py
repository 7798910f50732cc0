#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# ******************************************************************************
# Project: COG Validator (cogval)
# Author: Eric Robeck <robeckgeo@gmail.com>
#
# Copyright (c) 2025, Eric Robeck
# Licensed under the MIT License
# ******************************************************************************

"""
Configuration Management for the COG Validator.

This module provides a singleton configuration manager (`Config`) that loads,
parses, and provides access to settings from the packaged `config.toml` file.
It ensures that configuration values are loaded only once and are available
throughout the application.

Classes:
    Config: A singleton class for managing application-wide configuration.
"""
import copy
import logging
import sys
from pathlib import Path
from typing import Any, Dict


if sys.version_info >= (3, 11):
    import tomllib
else:
    try:
        import tomli as tomllib
    except ImportError:
        # Fallback if tomli is not installed
        tomllib = None

logger = logging.getLogger(__name__)

DEFAULT_CONFIG: Dict[str, Any] = {
    "validation": {
        "large_image_threshold": 512,
        "max_untiled_block_width": 1024,
        "tiff_drivers": ["GTiff", "COG"],
    },
    "report": {
        "suffix": "_cog",
    },
    "logging": {
        "level": "INFO",
    },
}

class Config:
    """Singleton configuration manager"""
    _instance = None
    _config: Dict[str, Any] = {}
    config_path: Path = Path(__file__).parent.parent / "config.toml"

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._load_config()
        return cls._instance

    def _load_config(self):
        """Load configuration from config.toml, layered over the defaults."""
        self._config = self._default_config()
        if self.config_path.exists() and tomllib is not None:
            try:
                with open(self.config_path, "rb") as f:
                    loaded = tomllib.load(f)
            except (OSError, tomllib.TOMLDecodeError) as e:
                logger.warning(f"Could not load {self.config_path.name}: {e}")
                return
            for section, values in loaded.items():
                if isinstance(values, dict):
                    self._config.setdefault(section, {}).update(values)
                else:
                    self._config[section] = values

    def _default_config(self) -> Dict[str, Any]:
        """Default configuration if config.toml doesn't exist"""
        return copy.deepcopy(DEFAULT_CONFIG)

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value using dot notation

        Args:
            key: Configuration key in dot notation (e.g., "validation.large_image_threshold")
            default: Default value if key is not found

        Returns:
            Configuration value or default

        Example:
            >>> config.get("validation.max_untiled_block_width")
            1024
        """
        keys = key.split(".")
        value = self._config
        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default
        return value

    def get_section(self, section: str) -> Dict[str, Any]:
        """Get entire configuration section

        Args:
            section: Section name (e.g., "validation", "report", "logging")

        Returns:
            Dictionary containing the section configuration
        """
        return self._config.get(section, {})

    def set(self, key: str, value: Any):
        """Set configuration value using dot notation

        Note:
            This only modifies the in-memory configuration.
            Changes are not persisted to config.toml.
        """
        keys = key.split(".")
        config = self._config
        for k in keys[:-1]:
            if k not in config:
                config[k] = {}
            config = config[k]
        config[keys[-1]] = value

    def reload(self):
        """Reload configuration from config.toml"""
        self._load_config()

# Singleton instance
config = Config()
