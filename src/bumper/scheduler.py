"""Concurrent execution of the action pipeline across packages.

Every package gets its own asyncio task. Results are delivered to the
observer callbacks as they are produced: in pipeline order for a single
package, with no ordering guarantee between packages.
"""

import asyncio
import collections
import collections.abc
import contextlib
import inspect
import logging
import typing

from bumper import actions as actions_, mixins, models, pipeline

LOGGER = logging.getLogger(__name__)

ResultHandler = typing.Callable[
    [int, models.ActionResult], typing.Awaitable[None] | None
]
FinishedHandler = typing.Callable[[int], typing.Awaitable[None] | None]


async def _call(handler: typing.Callable[..., typing.Any], *args) -> None:
    """Invoke a plain or coroutine callback."""
    value = handler(*args)
    if inspect.isawaitable(value):
        await value


class Scheduler(mixins.VerboseLoggerMixin):
    """Runs one pipeline per package, all packages concurrently.

    Callbacks may be invoked from several package tasks, so whatever they
    write to must tolerate that; the simplest way is to only ever write to
    a slot owned by the package index passed in.
    """

    def __init__(
        self,
        actions: collections.abc.Sequence[actions_.Action],
        max_concurrency: int | None = None,
        verbose: bool = False,
    ) -> None:
        super().__init__(verbose)
        self.counter = collections.Counter()
        self.max_concurrency = max_concurrency
        self.pipeline = pipeline.ActionPipeline(actions, verbose)

    async def run(
        self,
        packages: collections.abc.Sequence[models.Package],
        on_result: ResultHandler,
        on_finished: FinishedHandler,
    ) -> None:
        """Run the pipeline for every package.

        Returns once every package finished and all of its results and its
        finished event have been delivered. A callback raising for one
        package is logged and stops only that package.
        """
        self.counter = collections.Counter()
        semaphore = (
            asyncio.Semaphore(self.max_concurrency)
            if self.max_concurrency
            else None
        )

        async def run_package(index: int, package: models.Package) -> None:
            async with semaphore or contextlib.nullcontext():
                async for result in self.pipeline.run(package):
                    self.counter[result.status.value] += 1
                    await _call(on_result, index, result)
                await _call(on_finished, index)

        outcomes = await asyncio.gather(
            *[
                asyncio.create_task(run_package(index, package))
                for index, package in enumerate(packages)
            ],
            return_exceptions=True,
        )
        for package, outcome in zip(packages, outcomes, strict=True):
            if isinstance(outcome, Exception):
                self.logger.error(
                    '%s result handling failed: %s', package.name, outcome
                )

        self._log_verbose_info(
            'Processed %i packages: %i succeeded, %i skipped, %i failed '
            'actions',
            len(packages),
            self.counter['success'],
            self.counter['skipped'],
            self.counter['failed'],
        )


async def run(
    packages: collections.abc.Sequence[models.Package],
    actions: collections.abc.Sequence[actions_.Action],
    on_result: ResultHandler,
    on_finished: FinishedHandler,
    max_concurrency: int | None = None,
) -> None:
    """Run the actions against all packages concurrently.

    See :class:`Scheduler`.
    """
    scheduler = Scheduler(actions, max_concurrency)
    await scheduler.run(packages, on_result, on_finished)


def run_sync(
    packages: collections.abc.Sequence[models.Package],
    actions: collections.abc.Sequence[actions_.Action],
    on_result: ResultHandler,
    on_finished: FinishedHandler,
    max_concurrency: int | None = None,
) -> None:
    """Blocking variant of :func:`run` for callers without an event loop."""
    asyncio.run(
        run(packages, actions, on_result, on_finished, max_concurrency)
    )
