from __future__ import annotations

import json
from typing import Any, Callable, Dict, Iterable, List, Optional

from docker_utility.config import MANAGED_LABEL
from docker_utility.core.labels import (
    build_labels,
    decode_options,
    encode_options,
    is_managed,
    join_args,
    options_label,
    split_args,
)
from docker_utility.core.pipeline import Pipeline
from docker_utility.errors import MissingMetadataError, RuntimeCommandError, UsageError
from docker_utility.models import ContainerRecord, ImportSummary, record_from_item
from docker_utility.runtime.docker_cli import DockerCliRuntime
from docker_utility.runtime.protocol import ContainerRuntime
from docker_utility.utils.logger import logger

# Called once per import item with (ok, message); ok is False for skips and failures
ImportReporter = Callable[[bool, str], None]


def _require(**values: Optional[str]) -> None:
    for field_name, value in values.items():
        if not value:
            raise UsageError(f"Missing required argument: {field_name}")


def _decode_label(value: str, name: str) -> str:
    try:
        return decode_options(value)
    except ValueError as e:
        raise MissingMetadataError(f"Options label of container {name} is not valid base64: {e}", name)


def _split_options(options: str, name: str) -> List[str]:
    try:
        return split_args(options)
    except ValueError as e:
        raise MissingMetadataError(f"Stored run arguments of container {name} cannot be split: {e}", name)


class ContainerManager:
    """Operations on managed containers, expressed against a ContainerRuntime."""

    def __init__(self, runtime: Optional[ContainerRuntime] = None) -> None:
        logger.debug("Initializing ContainerManager")
        self.runtime = runtime if runtime is not None else DockerCliRuntime()

    # ---------- helpers ----------
    def _inspect(self, name: str) -> Optional[Dict[str, Any]]:
        """Full inspect document of a container, or None if it cannot be inspected."""
        res = self.runtime.inspect(name, fmt="{{json .}}")
        if not res.ok:
            logger.debug(f"inspect {name} failed with exit code {res.returncode}")
            return None
        try:
            return self._inspect_document(res.stdout, name)
        except MissingMetadataError as e:
            logger.warning(str(e))
            return None

    @staticmethod
    def _config(data: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        if not data:
            return {}
        return data.get("Config") or {}

    def _create(self, name: str, image: str, extra_args: List[str], options: Optional[str] = None) -> str:
        # options is stored verbatim when given, otherwise the joined extra_args
        encoded = encode_options(join_args(extra_args) if options is None else options)
        res = self.runtime.run(name, image, build_labels(encoded), extra_args)
        if not res.ok:
            raise RuntimeCommandError(f"Failed to create container {name}", res.returncode, res.command)
        return res.stdout.strip()

    # -------- public API --------

    def create_container(self, name: str, image: str, extra_args: Iterable[str] = ()) -> str:
        """
        Create and start a managed container.

        Args:
            name: Container name.
            image: Image reference.
            extra_args: Raw ``docker run`` arguments, passed through verbatim.

        Returns:
            Container id reported by the runtime.
        """
        _require(name=name, image=image)
        extra_args = list(extra_args)
        logger.info(f"Creating container {name} from {image} with args {extra_args}")
        container_id = self._create(name, image, extra_args)
        logger.info(f"Container created: {container_id} ({name})")
        return container_id

    def list_managed_containers(self) -> str:
        """Runtime's own listing of managed containers, unmodified."""
        res = self.runtime.ps(MANAGED_LABEL)
        if not res.ok:
            raise RuntimeCommandError("Failed to list containers", res.returncode, res.command)
        return res.stdout

    def get_run_args(self, name: str) -> str:
        """Decoded options label of a container."""
        _require(name=name)
        encoded = options_label(self._config(self._inspect(name)).get("Labels"))
        if encoded is None:
            raise MissingMetadataError(f"No options label found for container {name}.", name)
        return _decode_label(encoded, name)

    def start_container(self, name: str) -> None:
        _require(name=name)
        res = self.runtime.start(name)
        if not res.ok:
            raise RuntimeCommandError(f"Failed to start container {name}", res.returncode, res.command)
        logger.info(f"Container {name} started")

    def stop_container(self, name: str) -> None:
        _require(name=name)
        res = self.runtime.stop(name)
        if not res.ok:
            raise RuntimeCommandError(f"Failed to stop container {name}", res.returncode, res.command)
        logger.info(f"Container {name} stopped")

    def restart_container(self, name: str) -> None:
        _require(name=name)
        res = self.runtime.restart(name)
        if not res.ok:
            raise RuntimeCommandError(f"Failed to restart container {name}", res.returncode, res.command)
        logger.info(f"Container {name} restarted")

    def update_container(self, name: str) -> str:
        """
        Pull the container's image and recreate it with its original run arguments.

        The steps are pull, stop, remove, run. A failing step aborts the rest;
        nothing is rolled back.

        Returns:
            The image the container was recreated from.
        """
        _require(name=name)
        data = self._inspect(name)
        config = self._config(data)

        image = config.get("Image") or ""
        if not image:
            raise MissingMetadataError(f"Error: Could not find image for container {name}.", name)

        labels = config.get("Labels") or {}
        encoded = options_label(labels)
        if encoded is None:
            raise MissingMetadataError(
                f"Error: No options label found for container {name}. Cannot recreate container.", name
            )
        if not is_managed(labels):
            logger.warning(f"Container {name} has no {MANAGED_LABEL} label; it will be recreated as managed")

        options = _decode_label(encoded, name)
        extra_args = _split_options(options, name)
        logger.info(f"Updating container {name} ({image}) with args {extra_args}")

        pipeline = (
            Pipeline(f"update {name}")
            .step("pull", lambda: self.runtime.pull(image), f"Failed to pull image {image}")
            .step("stop", lambda: self.runtime.stop(name), f"Failed to stop container {name}")
            .step("remove", lambda: self.runtime.rm(name), f"Failed to remove container {name}")
            .step(
                "create",
                lambda: self.runtime.run(name, image, build_labels(encode_options(options)), extra_args),
                f"Failed to update container {name}",
            )
        )
        pipeline.run()
        return image

    def remove_container(self, name: str) -> None:
        """Stop then remove a container. Only the remove result counts."""
        _require(name=name)
        stopped = self.runtime.stop(name)
        if not stopped.ok:
            logger.debug(f"Ignoring stop failure for {name} (exit code {stopped.returncode})")
        res = self.runtime.rm(name)
        if not res.ok:
            raise RuntimeCommandError(f"Failed to remove container {name}", res.returncode, res.command)
        logger.info(f"Container {name} removed")

    def export_containers(self) -> List[ContainerRecord]:
        """Records for every managed container, stopped ones included, in list order."""
        listed = self.runtime.ps(MANAGED_LABEL, all=True, fmt="{{.Names}}")
        if not listed.ok:
            raise RuntimeCommandError("Failed to export containers to stdout", listed.returncode, listed.command)

        records: List[ContainerRecord] = []
        for line in listed.stdout.splitlines():
            container = line.strip()
            if not container:
                continue
            res = self.runtime.inspect(container, fmt="{{json .}}")
            if not res.ok:
                raise RuntimeCommandError("Failed to export containers to stdout", res.returncode, res.command)
            data = self._inspect_document(res.stdout, container)
            config = self._config(data)
            encoded = options_label(config.get("Labels")) or ""
            records.append(ContainerRecord(
                name=data.get("Name") or container,
                image=config.get("Image") or "",
                args=_decode_label(encoded, container),
            ))
        logger.info(f"Exported {len(records)} managed containers")
        return records

    @staticmethod
    def _inspect_document(stdout: str, name: str) -> Dict[str, Any]:
        try:
            data = json.loads(stdout)
        except json.JSONDecodeError as e:
            raise MissingMetadataError(f"Could not parse inspect output for container {name}: {e}", name)
        if isinstance(data, list):
            data = data[0] if data else {}
        if not isinstance(data, dict):
            raise MissingMetadataError(f"Unexpected inspect output for container {name}", name)
        return data

    @staticmethod
    def parse_import_document(text: str) -> List[Any]:
        """Decode an import document; it must be a JSON array."""
        try:
            items = json.loads(text)
        except json.JSONDecodeError as e:
            raise UsageError(f"Invalid import document: {e}")
        if not isinstance(items, list):
            raise UsageError("Invalid import document: expected a JSON array")
        return items

    def import_containers(self, items: Iterable[Any], report: Optional[ImportReporter] = None) -> ImportSummary:
        """
        Create a managed container for every valid item, one at a time.

        Invalid items are skipped and failed creates are counted; neither
        stops the loop.
        """
        summary = ImportSummary()
        for item in items:
            summary.total += 1
            record = record_from_item(item)
            if record is None or not record.is_valid:
                summary.skipped += 1
                entry = json.dumps(item, ensure_ascii=False, separators=(",", ":"))
                message = f"Skipping invalid entry: {entry}"
                logger.info(message)
                if report:
                    report(False, message)
                continue

            try:
                extra_args = _split_options(record.args, record.name)
                self._create(record.name, record.image, extra_args, options=record.args)
            except (RuntimeCommandError, MissingMetadataError) as e:
                summary.failed += 1
                if isinstance(e, RuntimeCommandError):
                    message = f"Failed to import container {record.name} (exit code {e.exit_code})."
                else:
                    message = f"Failed to import container {record.name}: {e}"
                logger.info(message)
                if report:
                    report(False, message)
                continue

            summary.imported += 1
            if report:
                report(True, f"Imported container {record.name} from stdin.")
        logger.info(f"Import finished: {summary.model_dump()}")
        return summary
