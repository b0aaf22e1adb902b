from __future__ import annotations

import logging
import subprocess

from gpm.environment import Settings
from gpm.manifest import DependencyEntry
from gpm.report import EntryResult, Stage, StageReport


def install_dependencies(
    entries: list[DependencyEntry], settings: Settings
) -> StageReport:
    """Build and install every entry's package, one at a time.

    Revisions are ignored, the workspaces are expected to be checked out
    already.
    """
    results = []
    for entry in entries:
        print(f">> Building package {entry.import_path}")
        cmd = [settings.go, "install", entry.import_path]
        logging.debug(f"Running {' '.join(cmd)}")
        try:
            returncode = subprocess.run(cmd).returncode
            message = f"go install exited with {returncode}" if returncode else ""
        except OSError as e:
            returncode, message = 127, str(e)
        results.append(
            EntryResult(
                entry=entry, stage=Stage.INSTALL, returncode=returncode, message=message
            )
        )

    report = StageReport(Stage.INSTALL, results)
    if report.ok:
        print(">> All Done")
    return report
