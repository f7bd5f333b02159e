"""Git push action for committed bumps."""

from bumper import errors, models
from bumper.actions import base

MASTER_BRANCH = 'master'
DIFF_TARGET = f'{MASTER_BRANCH}...origin/{MASTER_BRANCH}'


class PushAction(base.CommandAction):
    """Pushes the bump commit when the local master is ahead of origin."""

    async def execute(self, package: models.Package) -> models.ActionResult:
        if not package.is_outdated:
            return models.PushActionResult.skipped()

        try:
            if not await self._is_on_master(package):
                return self._failed(
                    package,
                    errors.PushActionError(f'not on {MASTER_BRANCH} branch'),
                )
            if not await self._is_ahead_of_origin(package):
                self.logger.debug('%s has nothing to push', package.name)
                return models.PushActionResult.skipped()
            await self.command_runner(package.path, 'git', 'push')
        except errors.PushActionError as exc:
            return self._failed(package, exc)
        except errors.CommandError as exc:
            return self._failed(
                package, base.wrap_error(errors.PushActionError, exc)
            )

        self._log_verbose_info('%s pushed', package.name)
        return models.PushActionResult.success()

    def _failed(
        self, package: models.Package, error: Exception
    ) -> models.ActionResult:
        self.logger.error('%s push failed: %s', package.name, error)
        return models.PushActionResult.failed(error)

    async def _is_on_master(self, package: models.Package) -> bool:
        branch = await self.command_runner(
            package.path, 'git', 'branch', '--show-current'
        )
        return branch.decode('utf-8').strip() == MASTER_BRANCH

    async def _is_ahead_of_origin(self, package: models.Package) -> bool:
        output = await self.command_runner(
            package.path,
            'git',
            'rev-list',
            '--left-right',
            '--count',
            DIFF_TARGET,
        )
        counts = output.decode('utf-8').split()
        if not counts:
            raise errors.PushActionError(
                f'unexpected rev-list output: {output!r}'
            )
        return counts[0] != '0'
