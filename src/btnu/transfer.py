import os
import shlex
import subprocess
from typing import Protocol

from btnu.config import RemoteTarget
from btnu.globals import Globals
from btnu.job import TransferOutcome
from btnu.log import logger

DRY_RUN_FLAG = "--dry-run"
DELETE_FLAG = "--delete"


class TransferInvoker(Protocol):
    def sync(self, source: str, destination: RemoteTarget, mirror: bool, dry_run: bool) -> TransferOutcome: ...


class RsyncInvoker:
    """
    Transfers a local path to a remote target with rsync over ssh.

    Keyword arguments:
    command -- rsync executable
               (default "rsync")
    options -- options passed to every rsync call
               (default `Globals.RSYNC_OPTIONS`: archive, verbose, compress,
               human readable, partial/progress, permissions)
    """

    def __init__(self, command: str = "rsync", options=None):
        self.command = command
        self.options = list(options) if options is not None else list(Globals.RSYNC_OPTIONS)

    def shell(self, destination: RemoteTarget) -> list[str]:
        return ["-e", f"ssh -i {shlex.quote(os.path.expanduser(destination.ssh_key_path))}"]

    def build_command(self, source: str, destination: RemoteTarget, mirror: bool = False, dry_run: bool = False) -> list[str]:
        """
        Assembles the rsync command for one transfer.

        Returns:
            list[str]: A list of rsync command components ready to be executed via subprocess.
        """
        return (
            [self.command]
            + self.options
            + ([DELETE_FLAG] if mirror else [])
            + ([DRY_RUN_FLAG] if dry_run else [])
            + self.shell(destination)
            + ["--", os.path.expanduser(source), destination.destination()]
        )

    def sync(self, source: str, destination: RemoteTarget, mirror: bool = False, dry_run: bool = False) -> TransferOutcome:
        cmd = self.build_command(source, destination, mirror, dry_run)
        if dry_run and DRY_RUN_FLAG not in cmd:
            raise RuntimeError(f"Refusing to run a dry run without {DRY_RUN_FLAG}: {cmd}")
        logger.debug(cmd)

        # stdout (file list, progress) goes straight to the terminal
        try:
            result = subprocess.run(
                cmd, stderr=subprocess.PIPE, check=False, text=True, errors="replace"
            )
        except FileNotFoundError:
            return TransferOutcome(source, False, f"{self.command} is not installed.", destination.host)

        if result.returncode == 0:
            for line in result.stderr.strip().splitlines():
                logger.warning(line)
            return TransferOutcome(source, True, "Transfer complete.", destination.host)

        stderr = result.stderr.strip().splitlines()
        for line in stderr:
            logger.error(line)
        reason = stderr[-1] if stderr else "no error output"
        return TransferOutcome(
            source, False, f"rsync exited with code {result.returncode}: {reason}", destination.host
        )
