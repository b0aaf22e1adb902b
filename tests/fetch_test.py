from pathlib import Path

import pytest

from conftest import FakeBin
from gpm.environment import Settings
from gpm.fetch import fetch_dependencies
from gpm.manifest import DependencyEntry

ENTRIES = [
    DependencyEntry("github.com/nu7hatch/gotrail", "v0.0.2"),
    DependencyEntry("github.com/replicon/fast-archiver", "v1.02"),
    DependencyEntry(
        "github.com/nu7hatch/gotrail", "2eb79d1f03ab24bacbc32b15b75769880629a865"
    ),
]


def test_fetch(
    settings: Settings, fake_bin: FakeBin, capsys: pytest.CaptureFixture[str]
) -> None:
    report = fetch_dependencies(ENTRIES, settings)

    assert report
    assert [r.entry for r in report.results] == ENTRIES
    assert sorted(fake_bin.calls()) == [
        "go get -d -u github.com/nu7hatch/gotrail",
        "go get -d -u github.com/nu7hatch/gotrail",
        "go get -d -u github.com/replicon/fast-archiver",
    ]
    gotrail = settings.gopath / "src" / "github.com" / "nu7hatch" / "gotrail"
    assert (gotrail / ".git").is_dir()
    out = capsys.readouterr().out
    assert ">> Getting package github.com/replicon/fast-archiver" in out


def test_fetch_failure(gopath: Path, fake_bin: FakeBin) -> None:
    fake_bin.add("go", exit_code=3)
    settings = Settings(gopath=gopath)

    report = fetch_dependencies(ENTRIES[:2], settings)

    assert not report
    assert [r.returncode for r in report.results] == [3, 3]
    assert report.summary()[0].startswith("Failed to get github.com/nu7hatch/gotrail")


def test_fetch_without_go(gopath: Path, tmp_path: Path) -> None:
    settings = Settings(gopath=gopath, go=str(tmp_path / "no-such-go"))

    report = fetch_dependencies(ENTRIES[:1], settings)

    assert not report
    assert report.results[0].returncode == 127


def test_fetch_nothing(settings: Settings, fake_bin: FakeBin) -> None:
    assert fetch_dependencies([], settings)
    assert fake_bin.calls() == []
