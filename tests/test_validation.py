import subprocess
from unittest.mock import MagicMock, patch

import pytest

from btnu.config import Config
from btnu.errors import HostUnreachable, MissingDependency, MissingRequiredConfig, PathNotFound, UnknownGroup
from btnu.job import JobSpec
from btnu.validation import (
    check_group_exists, check_host_reachable, check_local_paths, check_required_fields,
    check_system_dependencies, ping_host, validate,
)
from tests.conftest import OFFSITE, ONSITE


def test_required_fields_ok(config):
    check_required_fields(config)


def test_required_fields_with_complete_offsite(source_dirs):
    check_required_fields(Config.from_dict({"DIRECTORIES": source_dirs, **ONSITE, **OFFSITE}))


@pytest.mark.parametrize("key", list(ONSITE))
def test_missing_onsite_field(raw_config, key):
    raw_config[key] = ""
    with pytest.raises(MissingRequiredConfig) as e:
        check_required_fields(Config.from_dict(raw_config))
    assert e.value.fields == [key]


def test_missing_default_group(raw_config):
    raw_config["DIRECTORIES"] = []
    with pytest.raises(MissingRequiredConfig) as e:
        check_required_fields(Config.from_dict(raw_config))
    assert e.value.fields == ["DIRECTORIES"]


def test_partial_offsite_is_rejected(raw_config):
    raw_config["OFFSITE_BACKUP_HOST"] = "offsite.example.org"
    raw_config["OFFSITE_USERNAME"] = "remote"
    with pytest.raises(MissingRequiredConfig) as e:
        check_required_fields(Config.from_dict(raw_config))
    assert e.value.fields == ["OFFSITE_BACKUP_PATH", "OFFSITE_SSHKEY_PATH"]


def test_group_exists(config, source_dirs):
    assert check_group_exists(config, "DIRECTORIES") == tuple(source_dirs)
    with pytest.raises(UnknownGroup):
        check_group_exists(config, "backups2")


def test_local_paths(source_dirs, tmp_path):
    check_local_paths(tuple(source_dirs))
    missing = str(tmp_path / "missing")
    with pytest.raises(PathNotFound) as e:
        check_local_paths((source_dirs[0], missing, source_dirs[1]))
    assert e.value.path == missing


def test_local_file_counts_as_existing(tmp_path):
    f = tmp_path / "notes.txt"
    f.write_text("hello")
    check_local_paths((str(f),))


def test_host_reachable(config):
    probe = MagicMock(return_value=True)
    check_host_reachable(config.onsite_target(), probe)
    probe.assert_called_once_with("nas.local", 2)


def test_host_unreachable(config):
    with pytest.raises(HostUnreachable) as e:
        check_host_reachable(config.onsite_target(), lambda host, timeout: False)
    assert e.value.host == "nas.local"


@patch("btnu.validation.subprocess.run")
def test_ping_host(mock_run):
    mock_run.return_value = subprocess.CompletedProcess([], 0)
    assert ping_host("nas.local") is True
    cmd = mock_run.call_args[0][0]
    assert cmd == ["ping", "-c", "1", "-W", "2", "nas.local"]
    assert mock_run.call_args[1]["timeout"] == 2


@patch("btnu.validation.subprocess.run")
def test_ping_host_down(mock_run):
    mock_run.return_value = subprocess.CompletedProcess([], 1)
    assert ping_host("nas.local") is False


@patch("btnu.validation.subprocess.run", side_effect=subprocess.TimeoutExpired("ping", 2))
def test_ping_host_timeout(mock_run):
    assert ping_host("nas.local") is False


@patch("btnu.validation.subprocess.run", side_effect=FileNotFoundError)
def test_ping_not_installed(mock_run):
    assert ping_host("nas.local") is False


@patch("btnu.validation.shutil.which", side_effect=lambda b: None if b == "rsync" else f"/usr/bin/{b}")
def test_missing_system_dependency(mock_which):
    with pytest.raises(MissingDependency) as e:
        check_system_dependencies()
    assert e.value.binary == "rsync"


@patch("btnu.validation.shutil.which", return_value="/usr/bin/x")
def test_system_dependencies_present(mock_which):
    check_system_dependencies(["rsync", "ssh"])
    assert mock_which.call_count == 2


def test_validate_returns_group(config, source_dirs):
    group = validate(config, JobSpec(), config.targets("onsite"), lambda host, timeout: True)
    assert group == tuple(source_dirs)


def test_validate_stops_before_probe_on_missing_path(raw_config, tmp_path):
    raw_config["DIRECTORIES"].append(str(tmp_path / "missing"))
    config = Config.from_dict(raw_config)
    probe = MagicMock(return_value=True)
    with pytest.raises(PathNotFound):
        validate(config, JobSpec(), config.targets("onsite"), probe)
    probe.assert_not_called()


def test_validate_probes_every_target(source_dirs):
    config = Config.from_dict({"DIRECTORIES": source_dirs, **ONSITE, **OFFSITE})
    probed = []

    def probe(host, timeout):
        probed.append(host)
        return host == "nas.local"

    with pytest.raises(HostUnreachable) as e:
        validate(config, JobSpec(target_name="both"), config.targets("both"), probe)
    assert probed == ["nas.local", "offsite.example.org"]
    assert e.value.host == "offsite.example.org"
