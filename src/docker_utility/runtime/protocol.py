"""ContainerRuntime protocol definition."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Protocol, Sequence, runtime_checkable


@dataclass(frozen=True)
class RuntimeResult:
    """Outcome of a single runtime command."""

    returncode: int
    stdout: str = ""
    command: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.returncode == 0


@runtime_checkable
class ContainerRuntime(Protocol):
    """
    Protocol for container runtimes.

    A runtime is responsible for:
    - Creating and starting containers with labels and raw run arguments
    - Listing and inspecting containers
    - Start/stop/restart/remove of a single container
    - Pulling images

    Every method returns a RuntimeResult instead of raising on a non-zero
    exit status; callers decide which failures are fatal.
    """

    def run(
        self,
        name: str,
        image: str,
        labels: Dict[str, str],
        extra_args: Sequence[str] = (),
    ) -> RuntimeResult:
        """
        Create and start a detached container with an always-restart policy.

        Args:
            name: Container name
            image: Image reference
            labels: Labels to attach, in order
            extra_args: Raw run arguments, placed before the image

        Returns:
            Result whose stdout is the new container id
        """
        ...

    def ps(
        self,
        label_filter: str,
        all: bool = False,
        fmt: Optional[str] = None,
    ) -> RuntimeResult:
        """List containers carrying ``label_filter``."""
        ...

    def inspect(self, name: str, fmt: Optional[str] = None) -> RuntimeResult:
        """Inspect a container, optionally through a Go template."""
        ...

    def start(self, name: str) -> RuntimeResult:
        ...

    def stop(self, name: str) -> RuntimeResult:
        ...

    def restart(self, name: str) -> RuntimeResult:
        ...

    def rm(self, name: str) -> RuntimeResult:
        ...

    def pull(self, image: str) -> RuntimeResult:
        ...
