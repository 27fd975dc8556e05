"""
Main entry point for vboxctl.

    vboxctl <command> <target>

Any other number of positional arguments behaves as `vboxctl list help`.
"""
import argparse
import logging
import os
import sys

from rich.table import Table

from . import __version__
from .config import load_config
from .core_utils import console, print_error, print_header, print_info, print_warning
from .dispatch import COMMANDS, Dispatcher, RunSummary
from .environment import probe
from .error_handling import ValidationError, VBoxCtlError, get_error_handler
from .inventory import fetch_inventory
from .log_setup import setup_logging
from .targets import RESERVED_TARGETS, TargetKind, parse_arguments, resolve_target
from .texts import COPYRIGHT, PROGRAM_NAME, USAGE
from .vboxmanage import VBoxManage

logger = logging.getLogger(__name__)

FAILURE_MESSAGE = "An error was encountered. This command could not be completed as requested."


def build_parser():
    parser = argparse.ArgumentParser(
        prog=PROGRAM_NAME,
        description="Run a VBoxManage lifecycle command against every matching VM.",
    )
    parser.add_argument('args', nargs='*', metavar='command target',
                        help="command and target; see `vboxctl list help`")
    parser.add_argument('--config', metavar='PATH',
                        help="JSON file overriding the default settings")
    parser.add_argument('--verbose', action='store_true',
                        help="mirror the log file on the console")
    parser.add_argument('--version', action='version', version=f"%(prog)s {__version__}")
    return parser


def show_program():
    print_header(f"{PROGRAM_NAME} {__version__}")
    print_info(f"Installed at {os.path.dirname(os.path.abspath(__file__))}")

    table = Table(title="Commands and targets")
    table.add_column("Kind", style="cyan")
    table.add_column("Values", style="white")
    table.add_row("command", " ".join(COMMANDS))
    table.add_row("reserved target", " ".join(RESERVED_TARGETS))
    table.add_row("other target", "VM name fragment, or a file listing VMs one per line")
    console.print(table)


def show_meta(kind):
    if kind is TargetKind.PROGRAM:
        show_program()
    elif kind is TargetKind.COPYRIGHT:
        console.print(COPYRIGHT, markup=False, highlight=False, soft_wrap=True)
    else:
        console.print(USAGE, markup=False, highlight=False, soft_wrap=True)


def print_summary(summary: RunSummary):
    succeeded = len(summary.succeeded)
    failed = summary.failed
    print_info(f"{succeeded} succeeded, {len(failed)} failed, {len(summary.skipped)} skipped")
    for action in failed:
        print_error(f"{action.command} {action.vm}: {action.error}")


def run(command, target, config, verbose=False):
    """Probe, fetch inventory, resolve the target and dispatch. Returns the exit code."""
    log = setup_logging(
        config['LOG_FILE'],
        max_bytes=config['MAX_LOG_FILE_SIZE'],
        backup_count=config['LOG_BACKUP_COUNT'],
        level=config['LOG_LEVEL'],
        verbose=verbose,
    )
    env = probe(config, log)
    logger.info(f"Running {command} on {target}")

    client = VBoxManage(env.vboxmanage, timeout=config['COMMAND_TIMEOUT'])
    inventory = fetch_inventory(client, env.cache_file)
    resolution = resolve_target(target, inventory)

    if resolution.is_meta:
        show_meta(resolution.kind)
        return 0

    if resolution.kind is TargetKind.UNSUPPORTED:
        get_error_handler().handle_error(ValidationError(
            f"Command {command} is not supported. Skipping {target}...",
            code="VBOX-E803",
        ))
        return 0

    dispatcher = Dispatcher(client, inventory, start_type=config['START_TYPE'])
    summary = RunSummary()
    for fragment in resolution.fragments:
        if resolution.kind is TargetKind.FILE:
            logger.info(f"Processing {fragment}")
        summary.add(dispatcher.dispatch(command, fragment, exact=resolution.exact))

    if summary.actions and command != "list":
        print_summary(summary)
    if summary.failed:
        logger.error(FAILURE_MESSAGE)
        print_error(FAILURE_MESSAGE)
    return summary.exit_code


def main(argv=None):
    parser = build_parser()
    ns = parser.parse_args(argv)
    command, target = parse_arguments(ns.args)

    try:
        config = load_config(ns.config)
        return run(command, target, config, verbose=ns.verbose)
    except (VBoxCtlError, OSError, ValueError) as e:
        get_error_handler().handle_error(e, {'command': command, 'target': target})
        return 1
    except KeyboardInterrupt:
        print_warning("Operation cancelled by user")
        return 130


if __name__ == "__main__":
    sys.exit(main())
