"""
Target resolution.

Turns the second command line argument into the ordered list of name
fragments the dispatcher works through.
"""
import logging
import os
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Sequence, Tuple

from .error_handling import ResourceError
from .inventory import Inventory

logger = logging.getLogger(__name__)

DEFAULT_COMMAND = "list"
DEFAULT_TARGET = "help"


class TargetKind(Enum):
    FILE = "file"
    ALL = "*"
    RUNNING = "running"
    UNSUPPORTED = "unsupported"
    PROGRAM = "program"
    COPYRIGHT = "copyright"
    HELP = "help"
    FRAGMENT = "fragment"


RESERVED_TARGETS = {
    "*": TargetKind.ALL,
    "running": TargetKind.RUNNING,
    "saved": TargetKind.UNSUPPORTED,
    "off": TargetKind.UNSUPPORTED,
    "program": TargetKind.PROGRAM,
    "copyright": TargetKind.COPYRIGHT,
    "help": TargetKind.HELP,
}

META_KINDS = (TargetKind.PROGRAM, TargetKind.COPYRIGHT, TargetKind.HELP)

# Kinds whose fragments are whole inventory names
EXACT_KINDS = (TargetKind.ALL, TargetKind.RUNNING)


@dataclass
class Resolution:
    kind: TargetKind
    target: str
    fragments: List[str] = field(default_factory=list)

    @property
    def is_meta(self) -> bool:
        return self.kind in META_KINDS

    @property
    def exact(self) -> bool:
        return self.kind in EXACT_KINDS


def parse_arguments(args: Sequence[str]) -> Tuple[str, str]:
    """Exactly two arguments are command and target; anything else means list help."""
    if len(args) == 2:
        return args[0], args[1]
    return DEFAULT_COMMAND, DEFAULT_TARGET


def read_target_file(path: str) -> List[str]:
    """Non-empty lines of a name-list file, in file order."""
    try:
        with open(path, 'r', encoding='utf-8') as f:
            return [line.strip() for line in f if line.strip()]
    except (OSError, UnicodeDecodeError) as e:
        raise ResourceError(
            f"Cannot read target file {path}: {e}",
            code="VBOX-E303",
            suggestions=["Save the file as UTF-8 text with one VM name per line"],
            original_exception=e,
        ) from e


def resolve_target(target: str, inventory: Inventory) -> Resolution:
    """
    Resolve a target in order of precedence: an existing file, a reserved
    keyword, then a free-text name fragment.
    """
    if os.path.isfile(target):
        logger.info("Target is a file...")
        return Resolution(TargetKind.FILE, target, read_target_file(target))

    logger.info(f"Target is {target}...")
    kind = RESERVED_TARGETS.get(target)
    if kind is TargetKind.ALL:
        return Resolution(kind, target, list(inventory.all_vms))
    if kind is TargetKind.RUNNING:
        return Resolution(kind, target, list(inventory.running_vms))
    if kind is not None:
        return Resolution(kind, target)
    return Resolution(TargetKind.FRAGMENT, target, [target])
