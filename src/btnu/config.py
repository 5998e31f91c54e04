import os
from types import MappingProxyType
from dataclasses import dataclass, field
from typing import Optional

import yaml

from btnu.errors import ConfigMissing, InvalidConfig, MissingRequiredConfig, UnknownGroup
from btnu.globals import Globals
from btnu.log import logger

DirectoryGroup = tuple[str, ...]

TARGET_FIELDS = {
    "host": "BACKUP_HOST",
    "remote_path": "BACKUP_PATH",
    "username": "USERNAME",
    "ssh_key_path": "SSHKEY_PATH",
}


@dataclass(frozen=True)
class RemoteTarget:
    """
    A remote backup destination reachable over ssh.

    Attributes:
        name (str): "onsite" or "offsite".
        host (str): IP address or hostname of the backup host.
        remote_path (str): Path on the host where the backup is stored.
        username (str): ssh user on the host.
        ssh_key_path (str): Path to the private key used to log in.
    """
    name: str
    host: str = ""
    remote_path: str = ""
    username: str = ""
    ssh_key_path: str = ""

    @classmethod
    def from_config(cls, name: str, raw: dict) -> "RemoteTarget":
        prefix = name.upper()
        values = {}
        for attr, suffix in TARGET_FIELDS.items():
            value = raw.get(f"{prefix}_{suffix}")
            values[attr] = "" if value is None else str(value).strip()
        return cls(name=name, **values)

    def config_key(self, attr: str) -> str:
        return f"{self.name.upper()}_{TARGET_FIELDS[attr]}"

    def missing_fields(self) -> list[str]:
        """Returns the configuration keys of all empty fields."""
        return [self.config_key(attr) for attr in TARGET_FIELDS if not getattr(self, attr)]

    def is_empty(self) -> bool:
        return len(self.missing_fields()) == len(TARGET_FIELDS)

    def is_complete(self) -> bool:
        return not self.missing_fields()

    def destination(self) -> str:
        return f"{self.username}@{self.host}:{self.remote_path}"

    def __str__(self) -> str:
        return f"{self.name} ({self.destination()})"


@dataclass(frozen=True)
class Config:
    """
    Parsed configuration document.

    `groups` maps every group name to its ordered paths, in document order.
    """
    groups: MappingProxyType = field(default_factory=lambda: MappingProxyType({}))
    onsite: RemoteTarget = field(default_factory=lambda: RemoteTarget("onsite"))
    offsite: RemoteTarget = field(default_factory=lambda: RemoteTarget("offsite"))
    path: Optional[str] = None

    @classmethod
    def from_dict(cls, raw: dict, path: Optional[str] = None) -> "Config":
        if raw is None:
            raw = {}
        if not isinstance(raw, dict):
            raise InvalidConfig(f"Configuration file \"{path}\" must contain a mapping of settings.")

        groups = {}
        for key, value in raw.items():
            if not isinstance(value, list):
                continue
            if not all(isinstance(entry, (str, int, float)) for entry in value):
                raise InvalidConfig(f"Directory group \"{key}\" must be a list of paths.")
            groups[str(key)] = tuple(str(entry) for entry in value)

        return cls(
            groups=MappingProxyType(groups),
            onsite=RemoteTarget.from_config("onsite", raw),
            offsite=RemoteTarget.from_config("offsite", raw),
            path=path,
        )

    def group_names(self) -> list[str]:
        return list(self.groups)

    def has_group(self, name: str) -> bool:
        return name in self.groups

    def group(self, name: str) -> DirectoryGroup:
        if name not in self.groups:
            raise UnknownGroup(name, self.group_names())
        return self.groups[name]

    def onsite_target(self) -> RemoteTarget:
        return self.onsite

    def offsite_target(self) -> Optional[RemoteTarget]:
        if self.offsite.is_empty():
            return None
        return self.offsite

    def targets(self, selection: str = "onsite") -> list[RemoteTarget]:
        """
        Returns the remote targets for a target selection ("onsite", "offsite" or "both").

        Raises:
            MissingRequiredConfig: If the offsite target is selected but not configured.
        """
        if selection not in Globals.TARGETS:
            raise ValueError(f"Unknown target selection: {selection}")

        selected = []
        if selection in ("onsite", "both"):
            selected.append(self.onsite_target())
        if selection in ("offsite", "both"):
            offsite = self.offsite_target()
            if offsite is None:
                raise MissingRequiredConfig(self.offsite.missing_fields())
            selected.append(offsite)
        return selected


def default_config_path() -> str:
    return os.path.expanduser(Globals.DEFAULT_CONFIG_FILE)


def load_configuration(path: Optional[str] = None) -> Config:
    """
    Reads the YAML configuration document.

    Parameters:
        path (str): Location of the document, defaults to `Globals.DEFAULT_CONFIG_FILE`.

    Returns:
        Config: The parsed configuration.

    Raises:
        ConfigMissing: If no document exists at `path`.
        InvalidConfig: If the document is not valid YAML or has the wrong shape.
    """
    path = os.path.expanduser(path) if path else default_config_path()

    try:
        with open(path) as f:
            raw = yaml.safe_load(f)
    except FileNotFoundError:
        raise ConfigMissing(path)
    except yaml.YAMLError as e:
        raise InvalidConfig(f"Configuration file \"{path}\" is not valid YAML: {e}")

    config = Config.from_dict(raw, path)
    logger.debug(f"Configuration contains {len(config.groups)} directory group(s).")
    return config

