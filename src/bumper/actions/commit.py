"""Git commit action for bumped packages."""

import jinja2

from bumper import commands, errors, models
from bumper.actions import base

EXPECTED_GIT_STATUS = ' M .SRCINFO\x00 M PKGBUILD\x00'


class CommitAction(base.CommandAction):
    """Commits the bumped PKGBUILD and .SRCINFO.

    Nothing is committed unless exactly those two files are modified, so
    unrelated work in progress never ends up in the bump commit.
    """

    def __init__(
        self,
        command_runner: commands.CommandRunner = commands.run_command,
        commit_config: models.CommitConfiguration | None = None,
        verbose: bool = False,
    ) -> None:
        super().__init__(command_runner, verbose)
        self.commit_config = commit_config or models.CommitConfiguration()

    async def execute(self, package: models.Package) -> models.ActionResult:
        if not package.is_outdated:
            return models.CommitActionResult.skipped()

        try:
            is_changed = await self._is_changed(package)
            if not is_changed:
                self.logger.debug('%s has nothing to commit', package.name)
                return models.CommitActionResult.skipped()
            await self._commit(package)
        except errors.CommitActionError as exc:
            self.logger.error('%s commit failed: %s', package.name, exc)
            return models.CommitActionResult.failed(exc)
        except (errors.CommandError, jinja2.TemplateError) as exc:
            self.logger.error('%s commit failed: %s', package.name, exc)
            return models.CommitActionResult.failed(
                base.wrap_error(errors.CommitActionError, exc)
            )

        self._log_verbose_info('%s committed', package.name)
        return models.CommitActionResult.success()

    async def _is_changed(self, package: models.Package) -> bool:
        status = await self.command_runner(
            package.path,
            'git',
            'status',
            '--porcelain',
            '--null',
            '--untracked-files=no',
        )
        if not status:
            return False
        if status.decode('utf-8', errors='replace') != EXPECTED_GIT_STATUS:
            raise errors.CommitActionError(
                'unexpected changes in the repository'
            )
        return True

    def render_message(self, package: models.Package) -> str:
        env = jinja2.Environment(
            autoescape=False,  # noqa: S701
            undefined=jinja2.StrictUndefined,
        )
        template = env.from_string(self.commit_config.message_template)
        return template.render(
            package=package, version=package.upstream_version
        )

    async def _commit(self, package: models.Package) -> None:
        await self.command_runner(
            package.path, 'git', 'add', 'PKGBUILD', '.SRCINFO'
        )
        commit_args = ['commit', '--message', self.render_message(package)]
        if self.commit_config.author:
            commit_args.extend(['--author', self.commit_config.author])
        await self.command_runner(package.path, 'git', *commit_args)
