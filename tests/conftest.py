import io
import tarfile
import zipfile

import pytest

from firstboot_installer.config import InstallerConfig
from firstboot_installer.logging_utils import close_logging


@pytest.fixture(autouse=True)
def _reset_logging():
    yield
    close_logging()


def make_zip(path, files):
    """Write a zip at path with {arcname: bytes|str} entries."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with zipfile.ZipFile(path, "w") as zf:
        for name, data in files.items():
            zf.writestr(name, data)
    return path


def make_tar(path, files):
    """Write a tar.gz at path with {arcname: (bytes, mode)} entries."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with tarfile.open(path, "w:gz") as tf:
        for name, (data, mode) in files.items():
            info = tarfile.TarInfo(name)
            info.size = len(data)
            info.mode = mode
            tf.addfile(info, io.BytesIO(data))
    return path


class FakeProcess:
    def __init__(self, owner):
        self.owner = owner

    def wait(self, timeout=None):
        self.owner.timeouts.append(timeout)
        if self.owner.wait_exc is not None and timeout is not None:
            raise self.owner.wait_exc
        return self.owner.returncode

    def kill(self):
        self.owner.killed = True


class FakePopen:
    """Stands in for subprocess.Popen inside lib.command."""

    def __init__(self):
        self.calls = []
        self.timeouts = []
        self.returncode = 0
        self.exc = None
        self.wait_exc = None
        self.killed = False

    def __call__(self, argv, **kwargs):
        self.calls.append((list(argv), kwargs))
        if self.exc is not None:
            raise self.exc
        return FakeProcess(self)


@pytest.fixture
def fake_run(monkeypatch):
    fake = FakePopen()
    monkeypatch.setattr("firstboot_installer.lib.command.subprocess.Popen", fake)
    return fake


@pytest.fixture
def handoff_dir(tmp_path, monkeypatch):
    """Directory the provisioning layer stages files into; also the cwd."""
    d = tmp_path / "handoff"
    d.mkdir()
    monkeypatch.chdir(d)
    return d


@pytest.fixture
def config(tmp_path, handoff_dir):
    return InstallerConfig(
        raw={
            "log_path": str(tmp_path / "logs" / "install.log"),
            "work_dir": str(tmp_path / "work"),
        }
    )


def read_log(config):
    with open(config.log_path, encoding="utf-8") as f:
        return f.read().splitlines()
