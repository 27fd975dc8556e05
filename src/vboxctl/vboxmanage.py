"""
VBoxManage command line client.

Wraps the handful of VBoxManage sub-commands vboxctl needs and parses the
quoted VM names out of its text output.
"""
import logging
import re
import shlex
import subprocess
from typing import Callable, Iterable, List, Optional

from .error_handling import ProcessError

logger = logging.getLogger(__name__)

# Greedy: `"my "quoted" vm" {uuid}` yields `my "quoted" vm`
QUOTED_NAME = re.compile(r'"(.*)"')


def extract_names(output: str) -> List[str]:
    """Return the double-quoted name found on each line of VBoxManage output."""
    names = []
    for line in output.splitlines():
        match = QUOTED_NAME.search(line)
        if match:
            names.append(match.group(1))
    return names


def matches(name: str, fragment: str) -> bool:
    """Case-sensitive plain substring test shared by every command."""
    return fragment in name


def filter_names(names: Iterable[str], fragment: str, exact: bool = False) -> List[str]:
    if exact:
        return [name for name in names if name == fragment]
    return [name for name in names if matches(name, fragment)]


def _format_command(cmd_list):
    return ' '.join(shlex.quote(s) for s in cmd_list)


class VBoxManage:
    """Thin wrapper around the VBoxManage executable."""

    def __init__(self, binary: str = "VBoxManage",
                 runner: Optional[Callable[..., subprocess.CompletedProcess]] = None,
                 timeout: Optional[float] = None):
        self.binary = binary
        self.runner = runner or subprocess.run
        self.timeout = timeout

    def run(self, *args: str, check: bool = True) -> subprocess.CompletedProcess:
        """
        Runs VBoxManage with the given arguments and returns the result.

        Raises ProcessError when the executable is missing, times out, or
        (with check) exits with a non-zero status.
        """
        cmd_list = [self.binary, *args]
        cmd_str = _format_command(cmd_list)
        logger.debug(f"Executing: {cmd_str}")

        try:
            result = self.runner(
                cmd_list,
                capture_output=True,
                text=True,
                encoding='utf-8',
                errors='ignore',
                timeout=self.timeout,
            )
        except FileNotFoundError as e:
            raise ProcessError(
                f"Command not found: '{self.binary}'",
                code="VBOX-E701",
                suggestions=["Ensure VirtualBox is installed and VBoxManage is in your PATH"],
                context={'command': cmd_str},
                original_exception=e,
            ) from e
        except subprocess.TimeoutExpired as e:
            raise ProcessError(
                f"Command timed out after {e.timeout} seconds: {cmd_str}",
                code="VBOX-E702",
                context={'command': cmd_str},
                original_exception=e,
            ) from e

        if check and result.returncode != 0:
            raise ProcessError(
                f"Command failed with exit code {result.returncode}: {cmd_str}",
                details=(result.stderr or "").strip() or None,
                context={'command': cmd_str, 'returncode': result.returncode},
            )
        return result

    def _list(self, kind: str) -> List[str]:
        try:
            result = self.run("list", kind)
        except ProcessError as e:
            logger.warning(f"Could not list {kind}: {e}")
            return []
        return extract_names(result.stdout or "")

    def list_vms(self) -> List[str]:
        """Names of every registered VM."""
        return self._list("vms")

    def list_running_vms(self) -> List[str]:
        """Names of the VMs running right now."""
        return self._list("runningvms")

    def start_vm(self, name: str, start_type: str = "headless") -> subprocess.CompletedProcess:
        return self.run("startvm", name, "--type", start_type)

    def control_vm(self, name: str, action: str) -> subprocess.CompletedProcess:
        return self.run("controlvm", name, action)
