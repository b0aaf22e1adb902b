from gpm import checkout, cli, environment, fetch, install, manifest, report, vcs

__version__ = cli.VERSION

__all__ = [
    "manifest",
    "vcs",
    "fetch",
    "checkout",
    "install",
    "report",
    "environment",
    "cli",
]
