"""Command-line interface for Docker Utility."""

from __future__ import annotations

import argparse
import json
import sys
from typing import List, Optional, TextIO

from docker_utility import __version__
from docker_utility.config import PROJECT_URL
from docker_utility.core.container_manager import ContainerManager
from docker_utility.errors import DockerUtilityError, UsageError
from docker_utility.utils.logger import logger, set_debug

PROG = "docker-utility"

DESCRIPTION = (
    f"Docker Utility v{__version__}. {PROJECT_URL}\n"
    "A simple tool to manage Docker containers on a server using the Docker CLI.\n"
    "Containers are managed with a special label and can be created, listed, restarted, "
    "updated, removed, exported, and imported using this utility."
)

# command -> (argument synopsis, help)
COMMANDS = {
    "create": ("<name> <image> [docker run args...]", "Create a persistent managed container"),
    "list": ("", "List all managed containers"),
    "args": ("<name>", "Show original docker run args for container"),
    "start": ("<name>", "Start a managed container"),
    "stop": ("<name>", "Stop a managed container"),
    "restart": ("<name>", "Restart a managed container"),
    "update": ("<name>", "Update (update image and recreate) a managed container"),
    "remove": ("<name>", "Remove a managed container"),
    "export": ("", "Export all managed containers to JSON (stdout)"),
    "import": ("", "Import containers from JSON (stdin)"),
    "version": ("", "Show utility version"),
}

NAMED_COMMANDS = ("args", "start", "stop", "restart", "update", "remove")


class _ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that reports problems as UsageError instead of exiting with 2."""

    def error(self, message: str) -> None:  # type: ignore[override]
        raise UsageError(message)


def build_parser(prog: str = PROG) -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog=prog,
        usage=f"%(prog)s [--debug] {{{'|'.join(COMMANDS)}}} [options]",
        description=DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        add_help=False,
        allow_abbrev=False,
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Print traced docker commands before execution",
    )

    subparsers = parser.add_subparsers(
        dest="command",
        metavar="<command>",
        parser_class=_ArgumentParser,
    )

    def add(command: str) -> argparse.ArgumentParser:
        synopsis, help_text = COMMANDS[command]
        return subparsers.add_parser(
            command,
            help=f"{help_text}: {command} {synopsis}" if synopsis else help_text,
            add_help=False,
            allow_abbrev=False,
        )

    create_parser = add("create")
    create_parser.add_argument("name", nargs="?")
    create_parser.add_argument("image", nargs="?")
    create_parser.add_argument("extra_args", nargs=argparse.REMAINDER)

    add("list")

    for command in NAMED_COMMANDS:
        add(command).add_argument("name", nargs="?")

    add("export")
    add("import")
    add("version")

    return parser


def _command_usage(prog: str, command: str) -> str:
    synopsis = COMMANDS[command][0]
    return f"Usage: {prog} {command} {synopsis}".rstrip()


def _success(message: str) -> None:
    print(message)


def _error(message: str) -> None:
    print(message, file=sys.stderr)


def main(
    argv: Optional[List[str]] = None,
    manager: Optional[ContainerManager] = None,
    stdin: Optional[TextIO] = None,
) -> int:
    """
    Run the Docker Utility CLI.

    Args:
        argv: Command-line arguments. If None, uses sys.argv.
        manager: ContainerManager to use. If None, one backed by the Docker CLI is created.
        stdin: Stream the import document is read from. If None, uses sys.stdin.

    Returns:
        Exit code (0 for success, 1 for failure).
    """
    parser = build_parser()
    prog = parser.prog

    try:
        args = parser.parse_args(argv)
    except UsageError as e:
        logger.debug(f"Argument error: {e}")
        parser.print_help()
        return 1

    if args.command is None:
        parser.print_help()
        return 1

    if args.debug:
        set_debug()

    if args.command == "version":
        print(f"Docker Utility v{__version__}")
        return 0

    if args.command == "create" and (not args.name or not args.image):
        print(_command_usage(prog, "create"))
        return 1
    if args.command in NAMED_COMMANDS and not args.name:
        print(_command_usage(prog, args.command))
        return 1

    if manager is None:
        manager = ContainerManager()

    try:
        return _dispatch(args, manager, stdin or sys.stdin)
    except DockerUtilityError as e:
        _error(str(e))
        return 1


def _dispatch(args: argparse.Namespace, manager: ContainerManager, stdin: TextIO) -> int:
    command = args.command

    if command == "create":
        manager.create_container(args.name, args.image, args.extra_args)
        _success(f"Container {args.name} created with image {args.image}.")

    elif command == "list":
        sys.stdout.write(manager.list_managed_containers())

    elif command == "args":
        options = manager.get_run_args(args.name)
        print(f"Original docker run arguments for {args.name}:")
        print(options)

    elif command == "start":
        manager.start_container(args.name)
        _success(f"Container {args.name} started.")

    elif command == "stop":
        manager.stop_container(args.name)
        _success(f"Container {args.name} stopped.")

    elif command == "restart":
        manager.restart_container(args.name)
        _success(f"Container {args.name} restarted.")

    elif command == "update":
        image = manager.update_container(args.name)
        _success(f"Container {args.name} updated with image {image}.")

    elif command == "remove":
        manager.remove_container(args.name)
        _success(f"Container {args.name} removed.")

    elif command == "export":
        records = manager.export_containers()
        document = [r.model_dump() for r in records]
        print(json.dumps(document, indent=2, ensure_ascii=False))

    elif command == "import":
        items = manager.parse_import_document(stdin.read())

        def report(ok: bool, message: str) -> None:
            if ok:
                _success(message)
            else:
                _error(message)

        summary = manager.import_containers(items, report=report)
        _success(f"Imported {summary.imported} of {summary.total} containers.")

    return 0


if __name__ == "__main__":
    sys.exit(main())
