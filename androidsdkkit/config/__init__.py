"""Configuration module for AndroidSdkKit.

This module provides YAML parsing and validation for androidsdkkit.yaml,
the manifest declaring what a build needs from the SDK.
"""

from androidsdkkit.config.parser import (
    MANIFEST_FILE,
    find_manifest,
    parse_manifest,
)
from androidsdkkit.core.exceptions import ConfigError

__all__ = [
    "MANIFEST_FILE",
    "ConfigError",
    "find_manifest",
    "parse_manifest",
]
