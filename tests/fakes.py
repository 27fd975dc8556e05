"""Test doubles standing in for the VBoxManage executable."""
import logging
import subprocess

from vboxctl.log_setup import LOGGER_NAME

FAKE_UUID = "3a4f1b2c-0d9e-4c1a-9b7e-5f6a7b8c9d0e"


def list_output(names):
    """Text shaped like `VBoxManage list vms`."""
    return "".join(f'"{name}" {{{FAKE_UUID}}}\n' for name in names)


class FakeRunner:
    """Callable with the subprocess.run signature that records every command."""

    def __init__(self, all_vms=(), running_vms=(), failures=None):
        self.outputs = {
            ("list", "vms"): list_output(all_vms),
            ("list", "runningvms"): list_output(running_vms),
        }
        # argument tuple -> exit status
        self.failures = dict(failures or {})
        self.calls = []
        self.kwargs = []

    def __call__(self, cmd_list, **kwargs):
        self.calls.append(list(cmd_list))
        self.kwargs.append(kwargs)
        args = tuple(cmd_list[1:])
        code = self.failures.get(args, 0)
        return subprocess.CompletedProcess(
            cmd_list,
            code,
            stdout="" if code else self.outputs.get(args, ""),
            stderr=f"VBoxManage: error: {args}" if code else "",
        )

    def invocations(self, verb):
        """Argument lists (binary dropped) of the calls to one sub-command."""
        return [call[1:] for call in self.calls if len(call) > 1 and call[1] == verb]


def reset_logging():
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.addHandler(logging.NullHandler())
