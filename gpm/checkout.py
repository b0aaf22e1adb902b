from __future__ import annotations

import logging
import subprocess
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from gpm.environment import Settings
from gpm.manifest import DependencyEntry
from gpm.report import EntryResult, Stage, StageReport
from gpm.utils import last_line, run_cmd
from gpm.vcs import detect_vcs, wait_until_free

WILDCARD_SUFFIX = "/..."


def workspace_path(import_path: str, gopath: Path) -> Path:
    """Where `go get` puts the repository holding `import_path`.

    Only the first three path segments name the repository
    (host/owner/repo), a trailing "/..." wildcard is ignored.

    Args:
        import_path (str): package import path
        gopath (Path): first element of GOPATH

    Returns:
        Path: the workspace directory
    """
    if import_path.endswith(WILDCARD_SUFFIX):
        import_path = import_path[: -len(WILDCARD_SUFFIX)]
    repo = "/".join(import_path.split("/")[:3])
    return gopath / "src" / repo


def checkout_entry(entry: DependencyEntry, settings: Settings) -> EntryResult:
    workspace = workspace_path(entry.import_path, settings.gopath)

    def failure(returncode: int, message: str) -> EntryResult:
        return EntryResult(
            entry=entry, stage=Stage.CHECKOUT, returncode=returncode, message=message
        )

    if not workspace.is_dir():
        return failure(1, f"{workspace} does not exist")

    wait_until_free(workspace, settings.poll_interval)

    vcs = detect_vcs(workspace)
    if vcs is None:
        return failure(1, f"no version control metadata in {workspace}")

    print(f">> Setting {entry.import_path} to version {entry.revision}")
    cmd = vcs.checkout_command(entry.revision)
    logging.debug(f"Running {' '.join(cmd)} in {workspace}")
    try:
        run_cmd(cmd, working_dir=workspace)
    except subprocess.CalledProcessError as e:
        stderr = e.stderr.decode("utf-8", errors="replace") if e.stderr else ""
        return failure(e.returncode, last_line(stderr) or f"{vcs.executable} failed")
    except FileNotFoundError:
        return failure(127, f"{vcs.executable} is not installed or in your PATH")
    except OSError as e:
        return failure(126, str(e))

    return EntryResult(entry=entry, stage=Stage.CHECKOUT, returncode=0)


def checkout_group(
    entries: list[DependencyEntry], settings: Settings
) -> list[EntryResult]:
    return [checkout_entry(entry, settings) for entry in entries]


def group_by_workspace(
    entries: list[DependencyEntry], gopath: Path
) -> dict[Path, list[tuple[int, DependencyEntry]]]:
    groups: dict[Path, list[tuple[int, DependencyEntry]]] = {}
    for index, entry in enumerate(entries):
        groups.setdefault(workspace_path(entry.import_path, gopath), []).append(
            (index, entry)
        )
    return groups


def checkout_dependencies(
    entries: list[DependencyEntry], settings: Settings
) -> StageReport:
    """Set every entry's workspace to the entry's revision.

    Distinct workspaces are handled concurrently. Entries sharing a
    workspace run one after the other in manifest order, so the last of
    them decides the final revision.

    Args:
        entries (list[DependencyEntry]): the manifest entries
        settings (Settings): run settings

    Returns:
        StageReport: one result per entry, in manifest order
    """
    groups = list(group_by_workspace(entries, settings.gopath).values())
    if not groups:
        return StageReport(Stage.CHECKOUT)

    results: list[EntryResult | None] = [None] * len(entries)
    workers = settings.jobs if settings.jobs else len(groups)
    with ThreadPoolExecutor(max_workers=workers) as executor:
        futures = [
            (group, executor.submit(checkout_group, [e for _, e in group], settings))
            for group in groups
        ]
        for group, future in futures:
            for (index, _), result in zip(group, future.result()):
                results[index] = result

    return StageReport(Stage.CHECKOUT, [r for r in results if r is not None])
