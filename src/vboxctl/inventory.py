"""VM inventory captured once per run."""
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from .error_handling import ResourceError
from .vboxmanage import VBoxManage

logger = logging.getLogger(__name__)


@dataclass
class Inventory:
    all_vms: List[str] = field(default_factory=list)
    running_vms: List[str] = field(default_factory=list)


def write_cache(cache_file, names: List[str]) -> None:
    try:
        Path(cache_file).write_text("".join(f"{name}\n" for name in names), encoding="utf-8")
    except OSError as e:
        raise ResourceError(f"Cannot write cache file {cache_file}: {e}", original_exception=e) from e


def read_cache(cache_file) -> List[str]:
    """Names stored by the last run, blank lines dropped."""
    try:
        content = Path(cache_file).read_text(encoding="utf-8")
    except FileNotFoundError:
        return []
    return [line for line in content.splitlines() if line]


def fetch_inventory(client: VBoxManage, cache_file: Optional[Path] = None) -> Inventory:
    """
    Query all and running VMs.

    Both lists are fetched regardless of the target. A failing VBoxManage
    leaves the corresponding list empty.
    """
    all_vms = client.list_vms()
    running_vms = client.list_running_vms()
    logger.info(f"Found {len(all_vms)} VMs, {len(running_vms)} running")

    if cache_file is not None:
        write_cache(cache_file, all_vms)

    return Inventory(all_vms=all_vms, running_vms=running_vms)
