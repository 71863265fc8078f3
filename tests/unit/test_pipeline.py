"""
Unit tests for the update pipeline.
"""

import pytest

from docker_utility.core.pipeline import Pipeline
from docker_utility.errors import RuntimeCommandError
from docker_utility.runtime.protocol import RuntimeResult


def test_steps_run_in_order():
    seen = []

    def action(label):
        def _run():
            seen.append(label)
            return RuntimeResult(0)
        return _run

    pipeline = Pipeline("demo").step("a", action("a"), "a failed").step("b", action("b"), "b failed")
    results = pipeline.run()

    assert seen == ["a", "b"]
    assert len(results) == 2
    assert len(pipeline) == 2


def test_first_failure_stops_pipeline():
    seen = []

    def ok():
        seen.append("ok")
        return RuntimeResult(0)

    def broken():
        seen.append("broken")
        return RuntimeResult(3, "", ["docker", "pull", "x"])

    def never():
        seen.append("never")
        return RuntimeResult(0)

    pipeline = (
        Pipeline("demo")
        .step("ok", ok, "ok failed")
        .step("broken", broken, "Failed to pull image x")
        .step("never", never, "never failed")
    )
    with pytest.raises(RuntimeCommandError) as exc_info:
        pipeline.run()

    assert seen == ["ok", "broken"]
    assert exc_info.value.exit_code == 3
    assert str(exc_info.value) == "Failed to pull image x (exit code 3)."
    assert exc_info.value.command == ["docker", "pull", "x"]


def test_repr_lists_steps():
    pipeline = Pipeline("update web").step("pull", lambda: RuntimeResult(0), "")
    assert repr(pipeline) == "Pipeline('update web', [pull])"
