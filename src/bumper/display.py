"""Plain text rendering of pipeline results.

Every package owns one PackageDisplay slot, written only by that
package's task, so the observer callbacks need no locking.
"""

import collections.abc
import typing

from bumper import models

LINE_SEP = '\n'


class PackageDisplay:
    """Results collected for a single package."""

    def __init__(self, name: str) -> None:
        self.name = name
        self.results: list[models.ActionResult] = []
        self.finished = False

    def add_result(self, result: models.ActionResult) -> None:
        self.results.append(result)

    def set_finished(self) -> None:
        self.finished = True

    @property
    def failed(self) -> bool:
        return bool(self.results) and self.results[-1].is_failed

    @property
    def skipped(self) -> bool:
        return len(self.results) == 1 and self.results[0].is_skipped

    @property
    def error(self) -> Exception | None:
        return self.results[-1].error if self.failed else None

    def __str__(self) -> str:
        texts = [str(result) for result in self.results if str(result)]
        if not self.finished:
            bullet = '…'
            texts.append('...')
        elif self.failed:
            bullet = '✗'
        elif self.skipped:
            bullet = '∅'
        else:
            bullet = '✓'
        line = f'{bullet} {self.name}: {", ".join(texts)}'
        if self.error is not None:
            first, *rest = str(self.error).split(LINE_SEP)
            lines = [f'  ⤷ {first}', *(f'    {other}' for other in rest)]
            line += LINE_SEP + LINE_SEP.join(lines)
        return line


class PackageListDisplay:
    """Collects results for a list of packages, indexed like the list."""

    def __init__(self, names: collections.abc.Iterable[str]) -> None:
        self.packages = [PackageDisplay(name) for name in names]

    def on_result(self, index: int, result: models.ActionResult) -> None:
        self.packages[index].add_result(result)

    def on_finished(self, index: int) -> None:
        self.packages[index].set_finished()

    @property
    def any_failed(self) -> bool:
        return any(package.failed for package in self.packages)

    def render(self) -> str:
        return LINE_SEP.join(str(package) for package in self.packages)

    def display(self, out: typing.TextIO) -> None:
        for package in self.packages:
            print(package, file=out)
