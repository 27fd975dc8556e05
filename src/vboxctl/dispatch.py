"""
Command dispatch.

Maps a command plus a name fragment to VBoxManage invocations against the
inventory captured at the start of the run. Every command path selects
VMs with the same substring predicate, except that names taken from the
inventory itself (the `*` and `running` targets) are matched exactly. A
failed invocation is recorded without stopping the rest of the run.
"""
import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Set, Tuple

from .core_utils import print_plain, print_success
from .error_handling import ErrorHandler, ProcessError, ValidationError, get_error_handler
from .inventory import Inventory
from .vboxmanage import VBoxManage, extract_names, filter_names

logger = logging.getLogger(__name__)

CONTROL_COMMANDS = ("pause", "resume", "reset", "acpipowerbutton", "poweroff", "savestate")
COMMANDS = ("start",) + CONTROL_COMMANDS + ("list",)


@dataclass
class ActionResult:
    command: str
    vm: str
    succeeded: bool
    error: Optional[str] = None


@dataclass
class DispatchResult:
    command: str
    fragment: str
    matched: List[str] = field(default_factory=list)
    actions: List[ActionResult] = field(default_factory=list)
    skipped: bool = False

    @property
    def failed(self) -> List[ActionResult]:
        return [a for a in self.actions if not a.succeeded]


@dataclass
class RunSummary:
    results: List[DispatchResult] = field(default_factory=list)

    def add(self, result: DispatchResult) -> None:
        self.results.append(result)

    @property
    def actions(self) -> List[ActionResult]:
        return [a for r in self.results for a in r.actions]

    @property
    def succeeded(self) -> List[ActionResult]:
        return [a for a in self.actions if a.succeeded]

    @property
    def failed(self) -> List[ActionResult]:
        return [a for a in self.actions if not a.succeeded]

    @property
    def skipped(self) -> List[DispatchResult]:
        return [r for r in self.results if r.skipped]

    @property
    def exit_code(self) -> int:
        return 1 if self.failed else 0


class Dispatcher:
    """Runs commands against the VMs of one inventory snapshot."""

    def __init__(self, client: VBoxManage, inventory: Inventory,
                 start_type: str = "headless",
                 emit: Callable[[str], None] = print_plain,
                 error_handler: Optional[ErrorHandler] = None):
        self.client = client
        self.inventory = inventory
        self.start_type = start_type
        self.emit = emit
        self.error_handler = error_handler or get_error_handler()
        # (command, vm) pairs already handled during this run
        self._handled: Set[Tuple[str, str]] = set()

    def dispatch(self, command: str, fragment: str, exact: bool = False) -> DispatchResult:
        """
        Apply command to every inventory VM whose name contains fragment.

        Args:
            command: One of COMMANDS; anything else is skipped with a warning
            fragment: Case-sensitive substring of the VM names to act on
            exact: Treat fragment as a complete VM name instead of a substring

        Returns:
            DispatchResult: matched names and one ActionResult per invocation
        """
        logger.info(f"Command is {command}...")
        result = DispatchResult(command=command, fragment=fragment)

        if command not in COMMANDS:
            self.error_handler.handle_error(ValidationError(
                f"Command {command} is not supported. Skipping {fragment}...",
                code="VBOX-E802",
            ))
            result.skipped = True
            return result

        logger.info(f"Processing {command} on {fragment}...")
        if command == "list":
            return self._list(result, exact)

        result.matched = filter_names(self.inventory.all_vms, fragment, exact)
        for vm in result.matched:
            if self._claim(command, vm):
                result.actions.append(self._act(command, vm))
        return result

    def _claim(self, command: str, vm: str) -> bool:
        key = (command, vm)
        if key in self._handled:
            logger.debug(f"Already processed {command} on {vm}")
            return False
        self._handled.add(key)
        return True

    def _act(self, command: str, vm: str) -> ActionResult:
        try:
            if command == "start":
                self.client.start_vm(vm, self.start_type)
            else:
                self.client.control_vm(vm, command)
        except ProcessError as e:
            self.error_handler.handle_error(e, {'command': command, 'vm': vm})
            return ActionResult(command, vm, succeeded=False, error=str(e))

        logger.info(f"{command} completed on {vm}")
        print_success(f"{vm}: {command}")
        return ActionResult(command, vm, succeeded=True)

    def _list(self, result: DispatchResult, exact: bool = False) -> DispatchResult:
        # One bulk query per call, not one per VM
        try:
            output = self.client.run("list", "vms").stdout or ""
        except ProcessError as e:
            self.error_handler.handle_error(e, {'command': "list", 'vm': result.fragment})
            result.actions.append(ActionResult("list", result.fragment, succeeded=False, error=str(e)))
            return result

        result.matched = filter_names(extract_names(output), result.fragment, exact)
        for name in result.matched:
            if self._claim("list", name):
                self.emit(name)
        result.actions.append(ActionResult("list", result.fragment, succeeded=True))
        return result
