"""
Configuration for Docker Utility.

Label names are fixed: containers created by earlier releases must stay
recognisable, so they are plain module constants. Everything else is read
once from the environment.
"""

from __future__ import annotations

import os

PROJECT_URL = "https://github.com/feedbee/docker-utility"
SERVICE_NAME = "docker-utility"

# Marker label attached to every container this tool creates
MANAGED_LABEL_KEY = "managed-by"
MANAGED_LABEL_VALUE = "docker-utility"
MANAGED_LABEL = f"{MANAGED_LABEL_KEY}={MANAGED_LABEL_VALUE}"

# Label holding the base64-encoded original run arguments
OPTIONS_LABEL_KEY = "docker-utility-options"

RESTART_POLICY = "always"

# Docker-compatible CLI used as the container runtime
RUNTIME_BIN = os.getenv("DOCKER_UTILITY_RUNTIME", "docker")

LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING")
LOG_FILE = os.getenv("LOG_FILE") or None
