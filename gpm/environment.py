from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from shutil import which
from typing import Mapping

from gpm.errors import EnvironmentMisconfigured

DEFAULT_POLL_INTERVAL = 0.1


@dataclass(frozen=True, kw_only=True)
class Settings:
    """Everything the drivers need to know about the host, built once.

    Attributes:
        gopath (Path):
            first element of GOPATH, workspaces live under gopath/src
        go (str):
            the go executable used to fetch and install packages
        poll_interval (float):
            seconds between two checks of a workspace's lock markers
        jobs (int | None):
            maximum number of concurrent checkouts, None for no limit
        verbose (bool):
            whether to log diagnostics
    """

    gopath: Path
    go: str = "go"
    poll_interval: float = DEFAULT_POLL_INTERVAL
    jobs: int | None = None
    verbose: bool = False

    @staticmethod
    def from_environ(
        environ: Mapping[str, str] | None = None, go: str | None = None
    ) -> Settings:
        """Validate the host environment and build the settings.

        Args:
            environ (Mapping[str, str] | None):
                the environment, if empty os.environ will be used
            go (str | None):
                go executable, if empty "go" will be used

        Returns:
            Settings: the settings for this run
        """
        if environ is None:
            environ = os.environ
        go = go if go else "go"

        if not which(go):
            raise EnvironmentMisconfigured(
                "Go is currently not installed or in your PATH"
            )

        gopath = environ.get("GOPATH", "").split(":")[0]
        if not gopath:
            raise EnvironmentMisconfigured("GOPATH is not set")

        return Settings(
            gopath=Path(gopath),
            go=go,
            poll_interval=parse_poll_interval(environ.get("GPM_POLL_INTERVAL")),
            jobs=parse_jobs(environ.get("GPM_JOBS")),
            verbose=environ.get("GPM_VERBOSE", "") not in ("", "0"),
        )


def parse_poll_interval(value: str | None) -> float:
    if not value:
        return DEFAULT_POLL_INTERVAL
    try:
        interval = float(value)
    except ValueError:
        raise EnvironmentMisconfigured(f"Invalid GPM_POLL_INTERVAL: {value}")
    if interval <= 0:
        raise EnvironmentMisconfigured(f"Invalid GPM_POLL_INTERVAL: {value}")
    return interval


def parse_jobs(value: str | None) -> int | None:
    if not value:
        return None
    try:
        jobs = int(value)
    except ValueError:
        raise EnvironmentMisconfigured(f"Invalid GPM_JOBS: {value}")
    if jobs < 1:
        raise EnvironmentMisconfigured(f"Invalid GPM_JOBS: {value}")
    return jobs
