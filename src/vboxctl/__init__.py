"""
vboxctl

Runs VirtualBox lifecycle commands (start, pause, resume, reset,
acpipowerbutton, poweroff, savestate, list) against every VM whose name
matches a fragment, a reserved keyword or a list file.
"""

__version__ = "1.0.0"

import logging

logging.getLogger(__name__).addHandler(logging.NullHandler())

from .error_handling import (
    VBoxCtlError, ErrorSeverity, ErrorCategory, get_error_handler,
    ConfigurationError, ResourceError, ProcessError, ValidationError,
    DependencyError
)
from .vboxmanage import VBoxManage, extract_names, filter_names, matches
from .inventory import Inventory, fetch_inventory
from .targets import Resolution, TargetKind, parse_arguments, resolve_target
from .dispatch import COMMANDS, Dispatcher, DispatchResult, RunSummary

__all__ = [
    'VBoxCtlError', 'ErrorSeverity', 'ErrorCategory', 'get_error_handler',
    'ConfigurationError', 'ResourceError', 'ProcessError', 'ValidationError',
    'DependencyError',
    'VBoxManage', 'extract_names', 'filter_names', 'matches',
    'Inventory', 'fetch_inventory',
    'Resolution', 'TargetKind', 'parse_arguments', 'resolve_target',
    'COMMANDS', 'Dispatcher', 'DispatchResult', 'RunSummary',
]
