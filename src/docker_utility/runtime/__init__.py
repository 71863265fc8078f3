"""
Runtime module for Docker Utility.

This module abstracts the external container runtime behind a protocol so
operations can run against the Docker CLI or a test double.
"""

from __future__ import annotations

from docker_utility.runtime.docker_cli import DockerCliRuntime
from docker_utility.runtime.protocol import ContainerRuntime, RuntimeResult

__all__ = ["ContainerRuntime", "DockerCliRuntime", "RuntimeResult"]
