from __future__ import annotations

import logging
import time
from enum import Enum
from pathlib import Path


class VCS(Enum):
    """Version control systems a workspace can be owned by.

    Members are declared in detection priority order.
    """

    BAZAAR = "bzr"
    GIT = "git"
    MERCURIAL = "hg"
    SUBVERSION = "svn"

    @property
    def executable(self) -> str:
        return self.value

    @property
    def metadata_dir(self) -> str:
        return "." + self.value

    @property
    def lock_marker(self) -> Path:
        match self:
            case VCS.BAZAAR:
                return Path(".bzr") / "checkout" / "lock"
            case VCS.GIT:
                return Path(".git") / "index.lock"
            case VCS.MERCURIAL:
                return Path(".hg") / "store" / "lock"
            case VCS.SUBVERSION:
                return Path(".svn") / "wc.db-journal"

    def checkout_command(self, revision: str) -> list[str]:
        """The quiet "set working copy to `revision`" command.

        The revision is passed through literally, even when empty.
        """
        match self:
            case VCS.BAZAAR:
                return ["bzr", "revert", "-q", "-r", revision]
            case VCS.GIT:
                return ["git", "checkout", "-q", revision]
            case VCS.MERCURIAL:
                return ["hg", "update", "-q", revision]
            case VCS.SUBVERSION:
                return ["svn", "update", "-q", "-r", revision]


def is_in_use(path: Path) -> bool:
    """Whether some version control operation seems to hold `path`.

    This only looks for lock marker files, it is not atomic and a lock may
    appear right after it returns False.
    """
    return any((path / vcs.lock_marker).exists() for vcs in VCS)


def wait_until_free(path: Path, poll_interval: float = 0.1) -> None:
    if not is_in_use(path):
        return
    logging.info(f"{path} is locked, waiting")
    while is_in_use(path):
        time.sleep(poll_interval)


def detect_vcs(path: Path) -> VCS | None:
    for vcs in VCS:
        if (path / vcs.metadata_dir).is_dir():
            return vcs
    return None
