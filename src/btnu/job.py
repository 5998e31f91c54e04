from dataclasses import dataclass, replace
from typing import Optional

from btnu.config import RemoteTarget
from btnu.globals import Globals


@dataclass(frozen=True)
class JobSpec:
    """
    Resolved execution intent of one invocation.

    Attributes:
        group_name (str): Name of the directory group to back up.
        mirror (bool): Delete files at the destination that do not exist at the source.
        dry_run (bool): Only simulate the transfer.
        target_name (str): Target selection ("onsite", "offsite" or "both").
        target (Optional[RemoteTarget]): Concrete destination, set by `bind()`.

    Methods:
        bind(target) -> JobSpec:
            Returns a copy of the job pointing at `target`.

        describe() -> str:
            Returns a human-readable description of the run type.
    """
    group_name: str = Globals.DEFAULT_GROUP
    mirror: bool = False
    dry_run: bool = False
    target_name: str = "onsite"
    target: Optional[RemoteTarget] = None

    def bind(self, target: RemoteTarget) -> "JobSpec":
        return replace(self, target=target)

    @property
    def is_bound(self) -> bool:
        return self.target is not None

    def describe(self) -> str:
        run_type = "mirror" if self.mirror else "regular"
        if self.dry_run:
            return f"DRY-RUN {run_type} backup of {self.group_name}"
        return f"{run_type} backup of {self.group_name}"


@dataclass(frozen=True)
class TransferOutcome:
    path: str
    succeeded: bool
    message: str = ""
    target: str = ""

    def describe(self) -> str:
        status = "OK" if self.succeeded else "FAILED"
        destination = f" -> {self.target}" if self.target else ""
        return f"[{status}] {self.path}{destination}: {self.message}"
