from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from gpm.manifest import DependencyEntry


class Stage(Enum):
    FETCH = "get"
    CHECKOUT = "set"
    INSTALL = "install"


@dataclass(frozen=True, kw_only=True)
class EntryResult:
    """The outcome of one stage for one manifest entry"""

    entry: DependencyEntry
    stage: Stage
    returncode: int
    message: str = ""

    def __bool__(self) -> bool:
        """True indicates that the entry went through the stage"""
        return self.ok

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    def describe(self) -> str:
        line = f"Failed to {self.stage.value} {self.entry.import_path}"
        if self.stage == Stage.CHECKOUT:
            line += f" to version {self.entry.revision}"
        if self.message:
            line += f": {self.message}"
        return line


@dataclass(frozen=True)
class StageReport:
    stage: Stage
    results: list[EntryResult] = field(default_factory=list)

    def __bool__(self) -> bool:
        return self.ok

    @property
    def ok(self) -> bool:
        return all(result.ok for result in self.results)

    @property
    def failures(self) -> list[EntryResult]:
        return [result for result in self.results if not result.ok]

    def summary(self) -> list[str]:
        return [failure.describe() for failure in self.failures]
