import pytest

from btnu.config import Config
from btnu.job import TransferOutcome


class RecordingInvoker:
    """Records every sync call and answers with scripted outcomes."""

    def __init__(self, failing=()):
        self.failing = set(failing)
        self.calls = []

    def sync(self, source, destination, mirror, dry_run):
        self.calls.append({
            "source": source,
            "destination": destination,
            "mirror": mirror,
            "dry_run": dry_run,
        })
        if source in self.failing:
            return TransferOutcome(source, False, "rsync exited with code 23", destination.host)
        return TransferOutcome(source, True, "Transfer complete.", destination.host)


ONSITE = {
    "ONSITE_BACKUP_HOST": "nas.local",
    "ONSITE_BACKUP_PATH": "/volume1/backup",
    "ONSITE_USERNAME": "backup",
    "ONSITE_SSHKEY_PATH": "~/.ssh/id_nas",
}

OFFSITE = {
    "OFFSITE_BACKUP_HOST": "offsite.example.org",
    "OFFSITE_BACKUP_PATH": "/srv/backup",
    "OFFSITE_USERNAME": "remote",
    "OFFSITE_SSHKEY_PATH": "~/.ssh/id_offsite",
}


@pytest.fixture
def invoker():
    return RecordingInvoker()


@pytest.fixture
def source_dirs(tmp_path):
    a = tmp_path / "a"
    b = tmp_path / "b"
    a.mkdir()
    b.mkdir()
    return [str(a), str(b)]


@pytest.fixture
def raw_config(source_dirs):
    return {"DIRECTORIES": list(source_dirs), **ONSITE}


@pytest.fixture
def config(raw_config):
    return Config.from_dict(raw_config)
