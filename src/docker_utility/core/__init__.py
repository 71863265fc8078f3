"""
Core business logic for Docker Utility.

This module contains the managed-container operations and label encoding.
"""

from __future__ import annotations

from docker_utility.core.container_manager import ContainerManager

__all__ = ["ContainerManager"]
