"""
Checks that have to pass before any transfer starts.

Every check raises on the first problem it finds, so a failing check aborts
the whole run before a single file is sent.
"""

import os
import shutil
import subprocess
from typing import Callable

from btnu.config import Config, DirectoryGroup, RemoteTarget
from btnu.errors import HostUnreachable, MissingDependency, MissingRequiredConfig, PathNotFound
from btnu.globals import Globals
from btnu.job import JobSpec
from btnu.log import logger


def check_system_dependencies(binaries=None):
    """
    Checks whether all required system binaries are available in the system's PATH.

    Raises:
        MissingDependency: For the first binary `shutil.which` cannot find.
    """
    for current_bin in binaries or Globals.REQUIRED_SYSTEM_BINS:
        if shutil.which(current_bin) is None:
            raise MissingDependency(current_bin)


def check_required_fields(config: Config):
    """
    Makes sure the bare-minimum configuration is set.

    The default directory group needs at least one path and every onsite value
    must be set. The offsite target is optional, but if any of its values is set
    all of them have to be.

    Raises:
        MissingRequiredConfig: Listing every missing key.
    """
    missing = []
    if not config.groups.get(Globals.DEFAULT_GROUP):
        missing.append(Globals.DEFAULT_GROUP)

    missing += config.onsite.missing_fields()

    offsite = config.offsite
    if not offsite.is_empty():
        missing += offsite.missing_fields()

    if missing:
        raise MissingRequiredConfig(missing)


def check_group_exists(config: Config, group_name: str) -> DirectoryGroup:
    # Config.group raises UnknownGroup
    return config.group(group_name)


def check_local_paths(group: DirectoryGroup):
    """
    Checks that every path of a directory group exists on the local file system.

    Read permissions, sizes and symlink targets are not checked; rsync reports those.

    Raises:
        PathNotFound: For the first path that does not exist.
    """
    for path in group:
        if not os.path.exists(os.path.expanduser(path)):
            raise PathNotFound(path)
        logger.debug(f"Path {path} exists.")


def ping_host(host: str, timeout: int = Globals.PING_TIMEOUT) -> bool:
    """Sends a single ping to `host` and waits at most `timeout` seconds for the answer."""
    try:
        result = subprocess.run(
            ["ping", "-c", "1", "-W", str(timeout), host],
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            timeout=timeout,
        )
    except subprocess.TimeoutExpired:
        return False
    except FileNotFoundError:
        logger.error("ping is not installed, cannot check whether hosts are up.")
        return False
    return result.returncode == 0


def check_host_reachable(target: RemoteTarget, probe: Callable = ping_host, timeout: int = Globals.PING_TIMEOUT):
    """
    Raises:
        HostUnreachable: If the liveness probe does not get an answer from `target.host`.
    """
    if not probe(target.host, timeout):
        raise HostUnreachable(target.host)
    print(f"{target.host} looks to be up!")


def validate(config: Config, job: JobSpec, targets: list, probe: Callable = ping_host) -> DirectoryGroup:
    """
    Runs all checks in order: required fields, group existence, local paths and
    host reachability of every target in use.

    Parameters:
        config (Config): Loaded configuration.
        job (JobSpec): The resolved job.
        targets (list): RemoteTargets the job will run against.
        probe (Callable): Liveness probe, called as `probe(host, timeout)`.

    Returns:
        DirectoryGroup: The paths of the selected group.
    """
    check_required_fields(config)
    group = check_group_exists(config, job.group_name)

    print("Checking filepaths...")
    check_local_paths(group)
    print("All filepaths are valid!\n")

    print("Checking server status...")
    for target in targets:
        check_host_reachable(target, probe)
    print("")

    return group
