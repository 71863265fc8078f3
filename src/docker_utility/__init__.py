"""
Docker Utility - manage a labelled subset of Docker containers from the command line.

This package provides:
- Creation of containers tagged with a "managed" marker label
- Storage of the original ``docker run`` arguments in a base64 label
- Recreating a container from an updated image with its original arguments
- JSON export and import of all managed containers
"""

from __future__ import annotations

__version__ = "1.0.0"

# Core exports
from docker_utility.core.container_manager import ContainerManager
from docker_utility.runtime import ContainerRuntime, DockerCliRuntime
from docker_utility.utils.logger import get_logger

__all__ = [
    "ContainerManager",
    "ContainerRuntime",
    "DockerCliRuntime",
    "get_logger",
    "__version__",
]
