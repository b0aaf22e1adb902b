from __future__ import annotations

import logging
import subprocess
from typing import Any

from gpm.environment import Settings
from gpm.manifest import DependencyEntry
from gpm.report import EntryResult, Stage, StageReport
from gpm.utils import run_cmd_async


def fetch_command(entry: DependencyEntry, settings: Settings) -> list[str]:
    # -d: download only, -u: update existing clones from upstream
    return [settings.go, "get", "-d", "-u", entry.import_path]


def fetch_dependencies(
    entries: list[DependencyEntry], settings: Settings
) -> StageReport:
    """Download or update every entry's package, one go process per entry.

    All processes are started before any of them is waited on. Their
    output goes straight to the terminal.

    Args:
        entries (list[DependencyEntry]): the manifest entries
        settings (Settings): run settings

    Returns:
        StageReport: one result per entry, in manifest order
    """
    processes: list[tuple[DependencyEntry, subprocess.Popen[Any] | None, str]] = []
    for entry in entries:
        print(f">> Getting package {entry.import_path}")
        cmd = fetch_command(entry, settings)
        logging.debug(f"Running {' '.join(cmd)}")
        try:
            processes.append((entry, run_cmd_async(cmd), ""))
        except OSError as e:
            processes.append((entry, None, str(e)))

    results = []
    for entry, process, error in processes:
        if process is None:
            results.append(
                EntryResult(
                    entry=entry, stage=Stage.FETCH, returncode=127, message=error
                )
            )
            continue
        returncode = process.wait()
        results.append(
            EntryResult(
                entry=entry,
                stage=Stage.FETCH,
                returncode=returncode,
                message=f"go get exited with {returncode}" if returncode else "",
            )
        )
    return StageReport(Stage.FETCH, results)
