"""
Runtime test doubles and fixtures.

FakeRuntime keeps containers in memory and mimics the exit codes the Docker
CLI returns, so ContainerManager and the CLI can be exercised without
spawning processes.
"""

import json
import uuid
from typing import Any, Dict, List, Optional, Sequence

import pytest

from docker_utility.core.container_manager import ContainerManager
from docker_utility.runtime.protocol import RuntimeResult


class FakeRuntime:
    """In-memory ContainerRuntime."""

    def __init__(self) -> None:
        self.containers: Dict[str, Dict[str, Any]] = {}
        # image -> digest available locally / in the registry
        self.local_images: Dict[str, str] = {}
        self.registry: Dict[str, str] = {}
        # operation name -> exit code to return instead of running it
        self.failures: Dict[str, int] = {}
        self.calls: List[tuple] = []

    # ---------- helpers ----------
    def add_container(
        self,
        name: str,
        image: str,
        labels: Optional[Dict[str, str]] = None,
        running: bool = True,
    ) -> None:
        self.containers[name] = {
            "id": uuid.uuid4().hex,
            "image": image,
            "image_digest": self.local_images.get(image, "sha256:local"),
            "labels": dict(labels or {}),
            "args": [],
            "running": running,
        }

    def ops(self) -> List[str]:
        return [c[0] for c in self.calls]

    def _fail(self, op: str) -> Optional[RuntimeResult]:
        if op in self.failures:
            return RuntimeResult(self.failures[op], "", ["docker", op])
        return None

    # ---------- ContainerRuntime ----------
    def run(self, name: str, image: str, labels: Dict[str, str], extra_args: Sequence[str] = ()) -> RuntimeResult:
        self.calls.append(("run", name, image, dict(labels), list(extra_args)))
        failed = self._fail("run")
        if failed:
            return failed
        if name in self.containers:
            return RuntimeResult(125, "", ["docker", "run"])
        if image not in self.local_images:
            self.local_images[image] = self.registry.get(image, "sha256:local")
        self.add_container(name, image, labels)
        self.containers[name]["args"] = list(extra_args)
        return RuntimeResult(0, self.containers[name]["id"] + "\n", ["docker", "run"])

    def ps(self, label_filter: str, all: bool = False, fmt: Optional[str] = None) -> RuntimeResult:
        self.calls.append(("ps", label_filter, all, fmt))
        failed = self._fail("ps")
        if failed:
            return failed
        key, _, value = label_filter.partition("=")
        names = [
            n for n, c in self.containers.items()
            if c["labels"].get(key) == value and (all or c["running"])
        ]
        if fmt == "{{.Names}}":
            return RuntimeResult(0, "".join(f"{n}\n" for n in names), ["docker", "ps"])
        lines = ["CONTAINER ID   IMAGE   NAMES"]
        lines += [f"{self.containers[n]['id'][:12]}   {self.containers[n]['image']}   {n}" for n in names]
        return RuntimeResult(0, "\n".join(lines) + "\n", ["docker", "ps"])

    def inspect(self, name: str, fmt: Optional[str] = None) -> RuntimeResult:
        self.calls.append(("inspect", name, fmt))
        failed = self._fail("inspect")
        if failed:
            return failed
        c = self.containers.get(name)
        if c is None:
            return RuntimeResult(1, "\n", ["docker", "inspect"])
        doc = {
            "Id": c["id"],
            "Name": f"/{name}",
            "Image": c["image_digest"],
            "Config": {"Image": c["image"], "Labels": dict(c["labels"])},
        }
        return RuntimeResult(0, json.dumps(doc) + "\n", ["docker", "inspect"])

    def _lifecycle(self, op: str, name: str, running: Optional[bool]) -> RuntimeResult:
        self.calls.append((op, name))
        failed = self._fail(op)
        if failed:
            return failed
        c = self.containers.get(name)
        if c is None:
            return RuntimeResult(1, "", ["docker", op, name])
        if running is not None:
            c["running"] = running
        return RuntimeResult(0, f"{name}\n", ["docker", op, name])

    def start(self, name: str) -> RuntimeResult:
        return self._lifecycle("start", name, True)

    def stop(self, name: str) -> RuntimeResult:
        return self._lifecycle("stop", name, False)

    def restart(self, name: str) -> RuntimeResult:
        return self._lifecycle("restart", name, True)

    def rm(self, name: str) -> RuntimeResult:
        self.calls.append(("rm", name))
        failed = self._fail("rm")
        if failed:
            return failed
        c = self.containers.get(name)
        if c is None or c["running"]:
            return RuntimeResult(1, "", ["docker", "rm", name])
        del self.containers[name]
        return RuntimeResult(0, f"{name}\n", ["docker", "rm", name])

    def pull(self, image: str) -> RuntimeResult:
        self.calls.append(("pull", image))
        failed = self._fail("pull")
        if failed:
            return failed
        if image not in self.registry:
            return RuntimeResult(1, "", ["docker", "pull", image])
        self.local_images[image] = self.registry[image]
        return RuntimeResult(0, "", ["docker", "pull", image])


@pytest.fixture
def fake_runtime() -> FakeRuntime:
    """Empty in-memory runtime."""
    return FakeRuntime()


@pytest.fixture
def manager(fake_runtime: FakeRuntime) -> ContainerManager:
    """ContainerManager bound to the fake runtime."""
    return ContainerManager(runtime=fake_runtime)
