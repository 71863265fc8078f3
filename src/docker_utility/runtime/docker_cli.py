"""Docker CLI runtime backed by subprocess."""

from __future__ import annotations

import shlex
import subprocess
from typing import Dict, List, Optional, Sequence

from docker_utility.config import RESTART_POLICY, RUNTIME_BIN
from docker_utility.runtime.protocol import RuntimeResult
from docker_utility.utils.logger import logger

# Exit status a shell reports for a missing executable
COMMAND_NOT_FOUND = 127


class DockerCliRuntime:
    """
    Runs ``docker`` (or any docker-compatible CLI) as a child process.

    Standard error is never captured so the runtime's own error messages reach
    the terminal. Standard output is captured for commands whose output is
    parsed, and streamed for ``pull``.
    """

    def __init__(self, executable: str = RUNTIME_BIN) -> None:
        self.executable = executable

    def _run(self, args: List[str], capture: bool = True) -> RuntimeResult:
        cmd = [self.executable] + args
        logger.debug(f"+ {shlex.join(cmd)}")
        try:
            proc = subprocess.run(
                cmd,
                stdout=subprocess.PIPE if capture else None,
                text=True,
            )
        except FileNotFoundError:
            logger.error(f"{self.executable}: command not found")
            return RuntimeResult(COMMAND_NOT_FOUND, "", cmd)
        return RuntimeResult(proc.returncode, proc.stdout or "", cmd)

    def run(
        self,
        name: str,
        image: str,
        labels: Dict[str, str],
        extra_args: Sequence[str] = (),
    ) -> RuntimeResult:
        args = ["run", "-d", f"--restart={RESTART_POLICY}"]
        for key, value in labels.items():
            args.extend(["--label", f"{key}={value}"])
        args.extend(["--name", name])
        args.extend(extra_args)
        args.append(image)
        return self._run(args)

    def ps(
        self,
        label_filter: str,
        all: bool = False,
        fmt: Optional[str] = None,
    ) -> RuntimeResult:
        args = ["ps"]
        if all:
            args.append("-a")
        args.extend(["--filter", f"label={label_filter}"])
        if fmt:
            args.extend(["--format", fmt])
        return self._run(args)

    def inspect(self, name: str, fmt: Optional[str] = None) -> RuntimeResult:
        args = ["inspect"]
        if fmt:
            args.append(f"--format={fmt}")
        args.append(name)
        return self._run(args)

    def start(self, name: str) -> RuntimeResult:
        return self._run(["start", name])

    def stop(self, name: str) -> RuntimeResult:
        return self._run(["stop", name])

    def restart(self, name: str) -> RuntimeResult:
        return self._run(["restart", name])

    def rm(self, name: str) -> RuntimeResult:
        return self._run(["rm", name])

    def pull(self, image: str) -> RuntimeResult:
        return self._run(["pull", image], capture=False)
