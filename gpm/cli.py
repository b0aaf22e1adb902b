from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from shutil import which
from typing import Callable

from gpm.checkout import checkout_dependencies
from gpm.environment import Settings
from gpm.errors import GpmError
from gpm.fetch import fetch_dependencies
from gpm.install import install_dependencies
from gpm.manifest import DEFAULT_MANIFEST, DependencyEntry, read_manifest
from gpm.report import StageReport

NAME = "gpm"
VERSION = "1.3.2"

USAGE = f"""SYNOPSIS

    {NAME} leverages the power of the go get command and the underlying version
    control systems used by it to set your Go dependencies to desired versions,
    thus allowing easily reproducible builds in your Go projects.

    A Godeps file in the root of your Go application is expected containing
    the import paths of your packages and a specific tag or commit hash
    from its version control system, an example Godeps file looks like this:

    $ cat Godeps
    # This is a comment
    github.com/nu7hatch/gotrail         v0.0.2
    github.com/replicon/fast-archiver   v1.02   # This is another comment!

USAGE

    $ {NAME}                    # Same as 'install'.
    $ {NAME} install [Godeps]   # Parses the Godeps file, fetches the dependencies,
                               # sets them to the appropriate version and
                               # installs them.
    $ {NAME} get [Godeps]       # Same as 'install' without installing.
    $ {NAME} version            # Outputs version information.
    $ {NAME} help               # Prints this message.
    $ {NAME} <plugin> [args]    # Runs the {NAME}-<plugin> executable from your PATH.

ENVIRONMENT

    GOPATH                 required, only its first element is used
    GPM_JOBS               maximum number of concurrent checkouts
    GPM_POLL_INTERVAL      seconds between checks of a locked repository
    GPM_VERBOSE            log every command that is run
"""

Handler = Callable[[list[str]], int]

COMMANDS: dict[str, Handler] = {}


def command(*names: str) -> Callable[[Handler], Handler]:
    """Register a handler for the verbs `names`."""

    def register(handler: Handler) -> Handler:
        for name in names:
            COMMANDS[name] = handler
        return handler

    return register


def fail(message: str) -> None:
    print(f">> {message}", file=sys.stderr)


def parse_manifest_argument(verb: str, args: list[str]) -> Path:
    parser = argparse.ArgumentParser(prog=f"{NAME} {verb}", add_help=False)
    parser.add_argument("manifest", nargs="?", type=Path, default=DEFAULT_MANIFEST)
    return Path(parser.parse_args(args).manifest)


def resolve(manifest: Path, install: bool) -> int:
    """Fetch the manifest's dependencies, pin them and optionally install them.

    Each stage runs for every entry. If any entry fails, the failures are
    reported and the following stages are skipped.
    """
    entries = read_manifest(manifest)
    settings = Settings.from_environ()
    if settings.verbose:
        logging.getLogger().setLevel(logging.DEBUG)
    logging.info(f"Read {len(entries)} dependencies from {manifest}")

    stages: list[Callable[[list[DependencyEntry], Settings], StageReport]] = [
        fetch_dependencies,
        checkout_dependencies,
    ]
    if install:
        stages.append(install_dependencies)

    for stage in stages:
        report = stage(entries, settings)
        if not report:
            for line in report.summary():
                fail(line)
            return 1
    return 0


@command("install")
def install_command(args: list[str]) -> int:
    return resolve(parse_manifest_argument("install", args), install=True)


@command("get")
def get_command(args: list[str]) -> int:
    return resolve(parse_manifest_argument("get", args), install=False)


@command("version")
def version_command(args: list[str]) -> int:
    print(f">> {NAME} v{VERSION}")
    return 0


@command("help", "-h", "--help")
def help_command(args: list[str]) -> int:
    print(USAGE)
    return 0


def run_plugin(verb: str, args: list[str]) -> int:
    """Replace this process with the `gpm-<verb>` executable, if any."""
    plugin = which(f"{NAME}-{verb}")
    if plugin is None:
        fail(f"No command '{NAME} {verb}'")
        print(USAGE)
        return 1
    logging.debug(f"Delegating to {plugin}")
    sys.stdout.flush()
    sys.stderr.flush()
    os.execv(plugin, [plugin] + args)
    return 0  # unreachable, execv does not return


def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]
    verb, args = (argv[0], argv[1:]) if argv else ("install", [])

    handler = COMMANDS.get(verb)
    if handler is None:
        return run_plugin(verb, args)
    try:
        return handler(args)
    except GpmError as e:
        fail(str(e))
        return 1


def run() -> None:
    logging.basicConfig(format="%(levelname)s: %(message)s", level=logging.WARNING)
    sys.exit(main())
