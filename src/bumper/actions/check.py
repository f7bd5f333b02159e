"""Upstream version check action."""

from bumper import errors, models, resolver, version
from bumper.actions import base


class CheckAction(base.Action):
    """Resolves the upstream version and marks the package as outdated.

    VCS packages are skipped since they have no fixed upstream version.
    """

    def __init__(
        self, version_resolver: resolver.VersionResolver, verbose: bool = False
    ) -> None:
        super().__init__(verbose)
        self.resolver = version_resolver

    async def execute(self, package: models.Package) -> models.ActionResult:
        if package.is_vcs:
            self.logger.debug('%s is a VCS package, skipping', package.name)
            return models.CheckActionResult.skipped(
                current_version=package.pkgver
            )

        try:
            upstream_version = await self.resolver.resolve(package)
        except errors.BumperError as exc:
            self.logger.warning(
                '%s upstream version check failed: %s', package.name, exc
            )
            return models.CheckActionResult.failed(
                exc, current_version=package.pkgver
            )

        comparison = version.compare(upstream_version, package.pkgver)
        package.upstream_version = upstream_version
        package.is_outdated = resolver.is_outdated(
            upstream_version, package.pkgver
        )

        self._log_verbose_info(
            '%s current version %s, upstream version %s',
            package.name,
            package.pkgver,
            upstream_version,
        )
        return models.CheckActionResult.success(
            current_version=package.pkgver,
            upstream_version=upstream_version,
            comparison=comparison,
        )
