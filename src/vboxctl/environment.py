"""
Environment probe.

Runs before anything else touches VirtualBox: checks the required
executables, locates VBoxManage, makes sure the cache and log files exist
and keeps the log under its size limit.
"""
import logging
import os
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List

from .error_handling import DependencyError, ResourceError
from .log_setup import rotate_if_oversized

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Environment:
    vboxmanage: str
    cache_file: Path
    log_file: Path
    log_rotated: bool = False


def check_requirements(required: List[str]) -> None:
    """Raise DependencyError for the first executable that is not on PATH."""
    for req in required:
        if shutil.which(req) is None:
            raise DependencyError(
                f"{req} does not appear to be installed. Required: {' '.join(required)}",
                code="VBOX-E901",
                suggestions=[
                    "Install VirtualBox and make sure VBoxManage is in your PATH",
                    "Set VBOXMANAGE_BINARY in vbox-manage.json to its full path",
                ],
                context={'missing': req},
            )


def resolve_binary(binary: str) -> str:
    """Absolute path of the VBoxManage executable."""
    path = shutil.which(binary)
    if path is None:
        raise DependencyError(
            f"Could not locate {binary}",
            code="VBOX-E902",
            context={'binary': binary},
        )
    return os.path.abspath(path)


def ensure_file(path) -> Path:
    """Create an empty file at path unless one is already there."""
    file_path = Path(path)
    try:
        if not file_path.exists():
            file_path.parent.mkdir(parents=True, exist_ok=True)
            file_path.touch()
    except OSError as e:
        raise ResourceError(f"Cannot create {file_path}: {e}", original_exception=e) from e
    return file_path


def probe(config: Dict[str, Any], log=None) -> Environment:
    """
    Verify the host before inventory is fetched.

    Args:
        config: Loaded configuration dictionary
        log: Logger carrying the rotating file handler; the package logger
            when omitted

    Returns:
        Environment: resolved binary path and state file locations
    """
    log = log or logging.getLogger("vboxctl")

    required = list(config['REQUIRED_COMMANDS'])
    binary = config['VBOXMANAGE_BINARY']
    if binary not in required:
        required.insert(0, binary)
    check_requirements(required)

    vboxmanage = resolve_binary(binary)

    cache_file = ensure_file(config['CACHE_FILE'])
    log_file = ensure_file(config['LOG_FILE'])
    # Before anything is written to the log
    rotated = rotate_if_oversized(log, log_file, config['MAX_LOG_FILE_SIZE'])
    logger.debug(f"Using {vboxmanage}")

    return Environment(
        vboxmanage=vboxmanage,
        cache_file=cache_file,
        log_file=log_file,
        log_rotated=rotated,
    )
