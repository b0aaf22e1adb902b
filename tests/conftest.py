import os
from pathlib import Path

import pytest

from gpm.environment import Settings

# Creates the workspace the way `go get -d -u <import path>` would
FAKE_GO_GET = 'if [ "$1" = get ]; then mkdir -p "${GOPATH%%:*}/src/$4/.git"; fi'


class FakeBin:
    """Shell scripts on PATH that record how they were called."""

    def __init__(self, directory: Path) -> None:
        self.directory = directory
        self.log = directory / "calls.log"

    def add(self, name: str, body: str = "", exit_code: int = 0) -> Path:
        script = self.directory / name
        with open(script, "w") as f:
            f.write(
                "#!/bin/sh\n"
                f'echo "{name} $*" >> "{self.log}"\n'
                f"{body}\n"
                f"exit {exit_code}\n"
            )
        os.chmod(script, 0o755)
        return script

    def calls(self) -> list[str]:
        if not self.log.exists():
            return []
        with open(self.log, "r") as f:
            return f.read().splitlines()


@pytest.fixture
def fake_bin(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> FakeBin:
    directory = tmp_path / "bin"
    directory.mkdir()
    monkeypatch.setenv("PATH", f"{directory}{os.pathsep}{os.environ.get('PATH', '')}")
    return FakeBin(directory)


@pytest.fixture
def gopath(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    path = tmp_path / "go"
    (path / "src").mkdir(parents=True)
    monkeypatch.setenv("GOPATH", f"{path}:{tmp_path / 'other'}")
    for variable in ("GPM_JOBS", "GPM_POLL_INTERVAL", "GPM_VERBOSE"):
        monkeypatch.delenv(variable, raising=False)
    return path


@pytest.fixture
def settings(gopath: Path, fake_bin: FakeBin) -> Settings:
    fake_bin.add("go", FAKE_GO_GET)
    return Settings(gopath=gopath, go="go", poll_interval=0.01)
