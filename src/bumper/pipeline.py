"""Sequential execution of actions against a single package."""

import collections.abc
import logging
import typing

from bumper import actions as actions_, mixins, models

LOGGER = logging.getLogger(__name__)


class ActionPipeline(mixins.VerboseLoggerMixin):
    """Runs an ordered list of actions against one package at a time.

    Each result is handed out before the next action starts, and the
    pipeline stops at the first result that is not a success. A skipped
    result halts the pipeline just like a failed one, which is how the
    check action ends the run for packages that are up to date.
    """

    def __init__(
        self,
        actions: collections.abc.Sequence[actions_.Action],
        verbose: bool = False,
    ) -> None:
        super().__init__(verbose)
        self.actions = list(actions)

    async def run(
        self, package: models.Package
    ) -> typing.AsyncIterator[models.ActionResult]:
        """Execute the actions against the package, yielding each result."""
        for index, action in enumerate(self.actions, start=1):
            self.logger.debug(
                '%s [%i/%i] executing %s',
                package.name,
                index,
                len(self.actions),
                type(action).__name__,
            )
            try:
                result = await action.execute(package)
            except Exception as exc:  # noqa: BLE001
                self.logger.exception(
                    '%s error executing %s: %s',
                    package.name,
                    type(action).__name__,
                    exc,
                )
                result = models.ActionResult.failed(exc)

            yield result

            if not result.is_success:
                self._log_verbose_info(
                    '%s stopping after %s (%s)',
                    package.name,
                    type(action).__name__,
                    result.status.value,
                )
                break


async def run_package_actions(
    package: models.Package,
    actions: collections.abc.Sequence[actions_.Action],
) -> typing.AsyncIterator[models.ActionResult]:
    """Run the actions against a single package, yielding each result.

    See :class:`ActionPipeline`.
    """
    async for result in ActionPipeline(actions).run(package):
        yield result
