"""
Ordered pipeline of fallible runtime steps.

Steps run in the order they were added. The first step whose runtime command
exits non-zero raises RuntimeCommandError and nothing after it runs. There are
no compensating actions: a pipeline that fails half way leaves the runtime in
whatever state the completed steps produced.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List

from docker_utility.errors import RuntimeCommandError
from docker_utility.runtime.protocol import RuntimeResult
from docker_utility.utils.logger import logger


@dataclass(frozen=True)
class Step:
    name: str
    action: Callable[[], RuntimeResult]
    error_message: str


class Pipeline:
    """Sequence of named steps, each a zero-argument runtime call."""

    def __init__(self, name: str) -> None:
        self.name = name
        self._steps: List[Step] = []

    def step(self, name: str, action: Callable[[], RuntimeResult], error_message: str) -> "Pipeline":
        self._steps.append(Step(name, action, error_message))
        return self

    def run(self) -> List[RuntimeResult]:
        """
        Execute every step in order.

        Returns:
            Results of all steps.

        Raises:
            RuntimeCommandError: on the first step that fails.
        """
        results: List[RuntimeResult] = []
        for s in self._steps:
            logger.info(f"[{self.name}] {s.name}")
            result = s.action()
            if not result.ok:
                logger.info(f"[{self.name}] step '{s.name}' failed with exit code {result.returncode}")
                raise RuntimeCommandError(s.error_message, result.returncode, result.command)
            results.append(result)
        return results

    def __len__(self) -> int:
        return len(self._steps)

    def __repr__(self) -> str:
        names = ", ".join(s.name for s in self._steps)
        return f"Pipeline({self.name!r}, [{names}])"
