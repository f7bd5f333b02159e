"""Package build action."""

from bumper import errors, models
from bumper.actions import base


class MakeAction(base.CommandAction):
    """Builds an outdated package with ``makepkg``."""

    async def execute(self, package: models.Package) -> models.ActionResult:
        if not package.is_outdated:
            return models.MakeActionResult.skipped()

        try:
            await self.command_runner(
                package.path, 'makepkg', '--force', '--clean'
            )
        except errors.CommandError as exc:
            self.logger.error('%s build failed: %s', package.name, exc)
            return models.MakeActionResult.failed(
                base.wrap_error(errors.MakeActionError, exc)
            )

        self._log_verbose_info('%s built', package.name)
        return models.MakeActionResult.success()
