"""
Error Handling and Messaging System for vboxctl

This module provides error classification and reporting for VirtualBox
operations, with actionable messages and troubleshooting suggestions.
"""

import logging
import traceback
from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional, Any
from dataclasses import dataclass

from rich.markup import escape
from rich.panel import Panel

from .core_utils import error_console as console, print_error, print_info, print_warning

logger = logging.getLogger(__name__)


class ErrorSeverity(Enum):
    """Error severity levels for classification"""
    INFO = "info"           # Informational message, not an error
    WARNING = "warning"     # Warning that doesn't prevent operation
    ERROR = "error"         # Error that prevents current operation
    CRITICAL = "critical"   # Error that ends the run


class ErrorCategory(Enum):
    """Error categories for systematic classification"""
    CONFIGURATION = "configuration" # Configuration-related errors
    DEPENDENCY = "dependency"       # Missing external executables
    PROCESS = "process"             # Failed VBoxManage invocations
    RESOURCE = "resource"           # Files that cannot be read or written
    VALIDATION = "validation"       # Unsupported commands or targets
    INTERNAL = "internal"           # Internal application errors
    UNKNOWN = "unknown"             # Unclassified errors


@dataclass
class ErrorInfo:
    """Comprehensive error information structure"""
    message: str                            # User-friendly error message
    code: str                               # Unique error code
    severity: ErrorSeverity                 # Error severity level
    category: ErrorCategory                 # Error category
    details: Optional[str] = None           # Detailed error information
    suggestions: List[str] = None           # Troubleshooting suggestions
    exception: Optional[Exception] = None   # Original exception if applicable
    context: Optional[Dict[str, Any]] = None # Additional context information

    def __post_init__(self):
        if self.suggestions is None:
            self.suggestions = []
        if self.context is None:
            self.context = {}


class VBoxCtlError(Exception):
    """Base exception class for all vboxctl errors"""
    def __init__(self,
                 message: str,
                 code: str = "VBOX-E000",
                 severity: ErrorSeverity = ErrorSeverity.ERROR,
                 category: ErrorCategory = ErrorCategory.UNKNOWN,
                 details: Optional[str] = None,
                 suggestions: List[str] = None,
                 context: Dict[str, Any] = None,
                 original_exception: Exception = None):
        """
        Initialize a VBoxCtlError with comprehensive information

        Args:
            message: User-friendly error message
            code: Unique error code
            severity: Error severity level
            category: Error category
            details: Detailed error information (stderr of a failed command)
            suggestions: Troubleshooting suggestions
            context: Additional context information
            original_exception: Original exception if applicable
        """
        self.error_info = ErrorInfo(
            message=message,
            code=code,
            severity=severity,
            category=category,
            details=details,
            suggestions=suggestions or [],
            exception=original_exception,
            context=context or {}
        )
        super().__init__(message)

    @property
    def code(self) -> str:
        return self.error_info.code

    @property
    def severity(self) -> ErrorSeverity:
        return self.error_info.severity

    @property
    def category(self) -> ErrorCategory:
        return self.error_info.category

    @property
    def suggestions(self) -> List[str]:
        return self.error_info.suggestions

    @property
    def details(self) -> Optional[str]:
        return self.error_info.details

    @property
    def context(self) -> Dict[str, Any]:
        return self.error_info.context


class ConfigurationError(VBoxCtlError):
    """Configuration-related errors"""
    def __init__(self, message: str, **kwargs):
        kwargs.setdefault('category', ErrorCategory.CONFIGURATION)
        kwargs.setdefault('code', 'VBOX-E200')
        super().__init__(message, **kwargs)


class ResourceError(VBoxCtlError):
    """Cache, log or target files that cannot be used"""
    def __init__(self, message: str, **kwargs):
        kwargs.setdefault('category', ErrorCategory.RESOURCE)
        kwargs.setdefault('code', 'VBOX-E300')
        super().__init__(message, **kwargs)


class ProcessError(VBoxCtlError):
    """A VBoxManage invocation failed"""
    def __init__(self, message: str, **kwargs):
        kwargs.setdefault('category', ErrorCategory.PROCESS)
        kwargs.setdefault('code', 'VBOX-E700')
        super().__init__(message, **kwargs)

    @property
    def returncode(self) -> Optional[int]:
        return self.context.get('returncode')


class ValidationError(VBoxCtlError):
    """Unsupported command or target"""
    def __init__(self, message: str, **kwargs):
        kwargs.setdefault('category', ErrorCategory.VALIDATION)
        kwargs.setdefault('code', 'VBOX-E800')
        kwargs.setdefault('severity', ErrorSeverity.WARNING)
        super().__init__(message, **kwargs)


class DependencyError(VBoxCtlError):
    """Missing dependency errors"""
    def __init__(self, message: str, **kwargs):
        kwargs.setdefault('category', ErrorCategory.DEPENDENCY)
        kwargs.setdefault('code', 'VBOX-E900')
        kwargs.setdefault('severity', ErrorSeverity.CRITICAL)
        super().__init__(message, **kwargs)


class ErrorHandler:
    """
    Centralized error handling for vboxctl

    Converts exceptions into VBoxCtlError, logs them and renders them on
    the console.
    """

    def __init__(self):
        self.logger = logging.getLogger('vboxctl.error_handler')
        self.error_history: List[ErrorInfo] = []
        self.max_history_size = 100

    def handle_error(self, error: Exception, context: Dict[str, Any] = None) -> VBoxCtlError:
        """
        Log, record and display an exception

        Args:
            error: The exception to handle
            context: Additional context information

        Returns:
            VBoxCtlError: the handled error, converted if necessary
        """
        if not isinstance(error, VBoxCtlError):
            error = self._convert_exception(error, context)

        if context:
            error.error_info.context.update(context)
        error.error_info.context.setdefault('timestamp', datetime.now())

        self._log_error(error)
        self._add_to_error_history(error.error_info)
        self.display_error(error)
        return error

    def _convert_exception(self,
                           exception: Exception,
                           context: Dict[str, Any] = None) -> VBoxCtlError:
        """Convert a standard exception to a VBoxCtlError"""
        category = ErrorCategory.UNKNOWN
        code = "VBOX-E000"
        severity = ErrorSeverity.ERROR

        if isinstance(exception, FileNotFoundError):
            category = ErrorCategory.RESOURCE
            code = "VBOX-E301"
            message = f"File or resource not found: {exception.filename or exception}"
            suggestions = [
                "Verify the file path is correct",
                "File targets are relative to the working directory"
            ]
        elif isinstance(exception, PermissionError):
            category = ErrorCategory.RESOURCE
            code = "VBOX-E302"
            message = f"Permission denied: {exception.filename or exception}"
            suggestions = [
                "Check that the cache and log files are writable"
            ]
        elif isinstance(exception, (ValueError, TypeError)):
            category = ErrorCategory.VALIDATION
            code = "VBOX-E801"
            message = str(exception) or "Invalid input or parameter"
            suggestions = []
        else:
            message = str(exception) or "An unknown error occurred"
            suggestions = [
                "Check the log file for more details"
            ]

        return VBoxCtlError(
            message=message,
            code=code,
            severity=severity,
            category=category,
            details=traceback.format_exc(),
            suggestions=suggestions,
            original_exception=exception,
            context=context
        )

    def _log_error(self, error: VBoxCtlError):
        log_message = f"[{error.code}] {error.severity.value.upper()}: {error}"

        if error.severity == ErrorSeverity.CRITICAL:
            self.logger.critical(log_message)
        elif error.severity == ErrorSeverity.ERROR:
            self.logger.error(log_message)
        elif error.severity == ErrorSeverity.WARNING:
            self.logger.warning(log_message)
        else:
            self.logger.info(log_message)

    def _add_to_error_history(self, error_info: ErrorInfo):
        self.error_history.append(error_info)
        if len(self.error_history) > self.max_history_size:
            self.error_history.pop(0)

    def display_error(self, error: VBoxCtlError):
        """Display error information to the user"""
        if error.severity == ErrorSeverity.INFO:
            print_info(f"{error}")
        elif error.severity == ErrorSeverity.WARNING:
            print_warning(f"{error}")
            for suggestion in error.suggestions:
                print_info(f"  • {suggestion}")
        elif error.severity == ErrorSeverity.ERROR:
            print_error(f"{error}")
            if error.details:
                console.print(f"[dim]{escape(error.details.strip())}[/]", highlight=False)
        else:
            self._display_critical(error)

    def _display_critical(self, error: VBoxCtlError):
        summary = ERROR_CODES.get(error.code, "Unknown error")
        error_panel = f"[bold red]Error {error.code}[/] ({summary}): {escape(str(error))}\n"

        if error.details:
            error_panel += f"\n[dim]{escape(error.details.strip())}[/]"

        if error.suggestions:
            error_panel += "\n\n[yellow]Suggested Solutions:[/]"
            for suggestion in error.suggestions:
                error_panel += f"\n  • {escape(suggestion)}"

        console.print(Panel(
            error_panel,
            title=f"[red]{error.category.value.upper()} ERROR[/]",
            border_style="red"
        ))

    def get_error_history(self, limit: int = None) -> List[ErrorInfo]:
        """Return the recorded errors, newest last"""
        if limit:
            return self.error_history[-limit:]
        return self.error_history


_error_handler = None

def get_error_handler() -> ErrorHandler:
    """
    Get the global error handler instance

    Returns:
        ErrorHandler: The global error handler
    """
    global _error_handler
    if _error_handler is None:
        _error_handler = ErrorHandler()
    return _error_handler


ERROR_CODES = {
    "VBOX-E000": "Unknown error",

    "VBOX-E200": "Generic configuration error",
    "VBOX-E201": "Invalid configuration file",

    "VBOX-E300": "Generic resource error",
    "VBOX-E301": "Resource not found",
    "VBOX-E302": "Permission denied",
    "VBOX-E303": "Target file could not be read",

    "VBOX-E700": "VBoxManage exited with a non-zero status",
    "VBOX-E701": "VBoxManage could not be executed",
    "VBOX-E702": "VBoxManage timed out",

    "VBOX-E800": "Generic validation error",
    "VBOX-E801": "Invalid input parameter",
    "VBOX-E802": "Unsupported command",
    "VBOX-E803": "Unsupported target",

    "VBOX-E900": "Generic dependency error",
    "VBOX-E901": "Missing required executable",
    "VBOX-E902": "VBoxManage binary could not be located",
}
