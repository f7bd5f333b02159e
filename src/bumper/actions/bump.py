"""Version bump action rewriting PKGBUILD and regenerating .SRCINFO."""

import re

from bumper import errors, models
from bumper.actions import base

PKGREL_PATTERN = re.compile(r'pkgrel=[0-9.]+')
NEW_PKGREL = 'pkgrel=1'


class BumpAction(base.CommandAction):
    """Updates an outdated package to its upstream version.

    Replaces the current pkgver with the upstream one everywhere in the
    PKGBUILD, resets pkgrel to 1, updates the checksums with
    ``updpkgsums`` and regenerates .SRCINFO with ``makepkg``.
    """

    async def execute(self, package: models.Package) -> models.ActionResult:
        if not package.is_outdated:
            return models.BumpActionResult.skipped()

        try:
            self._bump(package)
        except OSError as exc:
            return self._failed(package, exc)

        try:
            await self.command_runner(package.path, 'updpkgsums')
        except errors.CommandError as exc:
            return self._failed(package, exc, bump_ok=True)

        try:
            await self._makepkg(package)
        except (errors.CommandError, OSError) as exc:
            return self._failed(
                package, exc, bump_ok=True, updpkgsums_ok=True
            )

        self._log_verbose_info(
            '%s bumped to %s', package.name, package.upstream_version
        )
        return models.BumpActionResult.success(
            bump_ok=True, updpkgsums_ok=True, makepkg_ok=True
        )

    def _failed(
        self, package: models.Package, exc: Exception, **stages: bool
    ) -> models.ActionResult:
        self.logger.error('%s bump failed: %s', package.name, exc)
        return models.BumpActionResult.failed(
            base.wrap_error(errors.BumpActionError, exc), **stages
        )

    @staticmethod
    def _bump(package: models.Package) -> None:
        pkgbuild = package.pkgbuild_path.read_text(encoding='utf-8')
        pkgbuild = pkgbuild.replace(package.pkgver, package.upstream_version)
        if package.pkgrel != '1':
            pkgbuild = PKGREL_PATTERN.sub(NEW_PKGREL, pkgbuild)
        package.pkgbuild_path.write_text(pkgbuild, encoding='utf-8')

    async def _makepkg(self, package: models.Package) -> None:
        srcinfo = await self.command_runner(
            package.path, 'makepkg', '--printsrcinfo'
        )
        package.srcinfo_path.write_bytes(srcinfo)
