"""
CLI App - Main entry point for the todosync command line tool.
"""

import argparse
import asyncio
import logging
import sys
from collections.abc import Awaitable, Callable
from pathlib import Path

from todosync import __version__
from todosync.adapters import EnvironmentConfigProvider, TasksApiAdapter
from todosync.application import SyncEngine
from todosync.core.domain import TaskId
from todosync.core.exceptions import TodoSyncError
from todosync.core.ports.config_provider import AppConfig

from .exit_codes import ExitCode
from .logging import get_logger, setup_logging
from .output import Console


def parse_task_id(value: str) -> TaskId:
    """Task ids are numeric in the REST contract; anything else is passed through."""
    value = value.strip()
    if value.startswith("#"):
        value = value[1:]
    if not value:
        raise argparse.ArgumentTypeError("task id must not be empty")
    return int(value) if value.isdigit() else value


def create_parser() -> argparse.ArgumentParser:
    """
    Create the command-line argument parser for todosync.

    Global options go before the subcommand.

    Returns:
        Configured ArgumentParser instance.
    """
    parser = argparse.ArgumentParser(
        prog="todosync",
        description="Manage the five most recent pending tasks of a remote task store",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Show the pending tasks
  todosync list

  # Create a task
  todosync add "Buy milk" --description "Semi-skimmed"

  # Mark task 7 as done, then delete task 3
  todosync done 7
  todosync delete 3

  # Talk to another store, with JSON output for scripts
  todosync --api-url http://tasks.internal:8080 --output json list

  # Check that the store is up
  todosync health
        """,
    )

    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    # Configuration
    config_group = parser.add_argument_group("configuration")
    config_group.add_argument(
        "--config",
        "-c",
        type=str,
        help="Path to a config file (.todosync.yaml, .todosync.toml)",
    )
    config_group.add_argument(
        "--env-file",
        type=str,
        help="Path to a .env file (default: ./.env)",
    )
    config_group.add_argument(
        "--api-url",
        type=str,
        help="Task store base URL (overrides TODOSYNC_API_URL)",
    )
    config_group.add_argument(
        "--timeout",
        type=float,
        help="Request timeout in seconds",
    )
    config_group.add_argument(
        "--max-retries",
        type=int,
        help="Retries for transient failures (429, 5xx, connection errors)",
    )
    config_group.add_argument(
        "--settle-delay",
        type=float,
        help="Seconds to wait before reloading after done/delete",
    )

    # Output
    output_group = parser.add_argument_group("output")
    output_group.add_argument("--verbose", "-v", action="store_true", help="Verbose output")
    output_group.add_argument(
        "--quiet",
        "-q",
        action="store_true",
        help="Only print results and errors",
    )
    output_group.add_argument("--no-color", action="store_true", help="Disable colored output")
    output_group.add_argument(
        "--output",
        "-o",
        choices=["text", "json"],
        default="text",
        help="Result format (default: text)",
    )
    output_group.add_argument(
        "--log-format",
        choices=["text", "json"],
        default="text",
        help="Log format (default: text)",
    )
    output_group.add_argument("--log-file", type=str, help="Also write logs to this file")

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    subparsers.add_parser("list", help="Show the pending tasks (newest first)")

    add_parser = subparsers.add_parser("add", help="Create a task")
    add_parser.add_argument("title", help="Task title")
    add_parser.add_argument("--description", "-d", default="", help="Task description")

    done_parser = subparsers.add_parser("done", help="Mark a task as completed")
    done_parser.add_argument("task_id", type=parse_task_id, help="Task id")

    delete_parser = subparsers.add_parser("delete", help="Delete a task")
    delete_parser.add_argument("task_id", type=parse_task_id, help="Task id")

    show_parser = subparsers.add_parser("show", help="Show a single task")
    show_parser.add_argument("task_id", type=parse_task_id, help="Task id")

    subparsers.add_parser("health", help="Check that the task store is reachable")

    return parser


# =============================================================================
# Commands
# =============================================================================


async def run_list(console: Console, args: argparse.Namespace, engine: SyncEngine) -> int:
    tasks = await engine.refresh()
    console.task_list(tasks)
    return ExitCode.SUCCESS


async def run_add(console: Console, args: argparse.Namespace, engine: SyncEngine) -> int:
    task = await engine.create_task(args.title, args.description)
    _report(console, engine, f"Created {task}", task=task.to_dict())
    return ExitCode.SUCCESS


async def run_done(console: Console, args: argparse.Namespace, engine: SyncEngine) -> int:
    task = await engine.complete_task(args.task_id)
    _report(console, engine, f"Completed {task}", task=task.to_dict())
    return ExitCode.SUCCESS


async def run_delete(console: Console, args: argparse.Namespace, engine: SyncEngine) -> int:
    await engine.delete_task(args.task_id)
    _report(console, engine, f"Deleted task #{args.task_id}")
    return ExitCode.SUCCESS


async def run_show(console: Console, args: argparse.Namespace, engine: SyncEngine) -> int:
    task = await engine.get_task(args.task_id)
    console.task_detail(task)
    return ExitCode.SUCCESS


COMMANDS: dict[str, Callable[[Console, argparse.Namespace, SyncEngine], Awaitable[int]]] = {
    "list": run_list,
    "add": run_add,
    "done": run_done,
    "delete": run_delete,
    "show": run_show,
}


def _report(console: Console, engine: SyncEngine, message: str, **data) -> None:
    """Print the outcome of a change followed by the reconciled task list."""
    tasks = [task.to_dict() for task in engine.tasks]
    if console.json_mode:
        console.result(message, tasks=tasks, warning=engine.error or None, **data)
        return

    console.success(message)
    # The change went through but the follow-up reload did not.
    if engine.error:
        console.warning(f"Could not reload tasks: {engine.error}")
        return
    console.print()
    console.task_list(engine.tasks)


async def run_health(console: Console, service: TasksApiAdapter) -> int:
    url = service.client.base_url
    if await service.test_connection():
        console.result(f"Task service at {url} is UP", url=url)
        return ExitCode.SUCCESS
    console.error(f"Task service at {url} is not reachable")
    return ExitCode.CONNECTION_ERROR


async def run_command(console: Console, args: argparse.Namespace, config: AppConfig) -> int:
    """
    Run one subcommand against the configured task store.

    Returns:
        Exit code.
    """
    logger = get_logger("CLI", command=args.command)
    service = TasksApiAdapter(config.service)
    engine = SyncEngine(service, settle_delay=config.sync.settle_delay)
    logger.debug(f"Using task service at {config.service.url}")

    try:
        if args.command == "health":
            return await run_health(console, service)
        return await COMMANDS[args.command](console, args, engine)
    except TodoSyncError as e:
        logger.debug(f"Command failed: {e}")
        console.error(engine.error or e.message)
        console.debug(str(e))
        return ExitCode.from_exception(e)
    finally:
        service.close()


def main(argv: list[str] | None = None) -> int:
    """
    Main entry point for the todosync CLI.

    Parses arguments, loads configuration, sets up logging, and runs the
    requested subcommand.

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return ExitCode.ERROR

    console = Console(
        color=not args.no_color,
        verbose=args.verbose,
        quiet=args.quiet,
        json_mode=args.output == "json",
    )

    config_provider = EnvironmentConfigProvider(
        config_file=Path(args.config) if args.config else None,
        env_file=Path(args.env_file) if args.env_file else None,
        cli_overrides=vars(args),
    )
    errors = config_provider.validate()
    if errors:
        console.config_errors(errors)
        return ExitCode.CONFIG_ERROR

    config = config_provider.load()
    verbose = args.verbose or config.sync.verbose
    if verbose and not console.quiet:
        console.verbose = True

    if verbose:
        log_level = logging.DEBUG
    elif args.quiet or console.json_mode:
        log_level = logging.WARNING
    else:
        log_level = logging.INFO
    setup_logging(
        level=log_level,
        log_format=args.log_format,
        log_file=args.log_file,
        static_fields={"service": "todosync", "version": __version__}
        if args.log_format == "json"
        else None,
    )

    if config_provider.config_file_path:
        console.debug(f"Config: {config_provider.config_file_path}")
    console.debug(f"Task store: {config.service.url}")

    try:
        return asyncio.run(run_command(console, args, config))

    except KeyboardInterrupt:
        console.print()
        console.warning("Interrupted by user")
        return ExitCode.SIGINT


def run() -> None:
    """
    Entry point for the console script.

    Calls main() and exits with its return code.
    """
    sys.exit(main())


if __name__ == "__main__":
    run()
