"""
AndroidSdkKit CLI module.

This module provides the command-line interface for AndroidSdkKit.
"""

from .parser import CLI, main
from . import utils

__all__ = ["CLI", "main", "utils"]
