"""
Utilities module for Docker Utility.

This module provides common utilities like logging configuration.
"""

from __future__ import annotations

from docker_utility.utils.logger import get_logger, logger, set_debug

__all__ = ["get_logger", "logger", "set_debug"]
