"""Upstream version resolution.

Builds version providers for every URL a package declares, drops the ones
pointing at the same upstream project, and asks them in turn for the
latest version until one of them answers.
"""

import logging
import typing

from bumper import errors, models, upstream, version

LOGGER = logging.getLogger(__name__)

SOURCE_SEPARATOR = '::'

ProviderFactory = typing.Callable[[str], upstream.VersionProvider | None]


def package_urls(package: models.Package) -> list[str]:
    """Return the package URL followed by all of its source URLs.

    Source entries may be in the ``file.tar.gz::https://...`` form, in
    which case only the URL part is kept.
    """
    urls = [package.url]
    for source in package.source:
        _label, separator, url = source.partition(SOURCE_SEPARATOR)
        urls.append(url if separator else source)
    return urls


def is_outdated(upstream_version: str, current_version: str) -> bool:
    return version.compare(upstream_version, current_version) == 1


class VersionResolver:
    """Resolves the latest upstream version of a package.

    Args:
        provider_factory: Maps a single URL to a provider, or None when no
            provider handles the URL
        version_overrides: Versions to use instead of querying upstream,
            keyed by pkgbase

    """

    def __init__(
        self,
        provider_factory: ProviderFactory,
        version_overrides: dict[str, str] | None = None,
    ) -> None:
        self.provider_factory = provider_factory
        self.version_overrides = dict(version_overrides or {})

    def providers(
        self, urls: typing.Iterable[str]
    ) -> list[upstream.VersionProvider]:
        """Build the unique providers for the given URLs, in URL order."""
        providers: list[upstream.VersionProvider] = []
        for url in urls:
            provider = self.provider_factory(url)
            if provider is not None and provider not in providers:
                providers.append(provider)
        return providers

    async def latest_version(
        self, urls: typing.Iterable[str]
    ) -> version.Version:
        """Query the providers for the given URLs.

        Raises:
            errors.NoUpstreamProviderError: If no URL maps to a provider
            errors.AllProvidersFailedError: If every provider failed

        """
        providers = self.providers(urls)
        if not providers:
            raise errors.NoUpstreamProviderError()

        failures: list[Exception] = []
        for provider in providers:
            try:
                latest = await provider.latest_version()
            except Exception as exc:  # noqa: BLE001 - aggregated below
                LOGGER.debug('%r failed: %s', provider, exc)
                failures.append(exc)
            else:
                LOGGER.debug('%r found version %s', provider, latest)
                return latest
        raise errors.AllProvidersFailedError(failures)

    async def resolve(
        self, package: models.Package
    ) -> version.Version | None:
        """Resolve the upstream version of a package.

        A version override for the package takes precedence over querying
        upstream. VCS packages have no upstream version to compare with.

        Returns:
            The upstream version, or None for VCS packages

        Raises:
            errors.InvalidVersionOverrideError: If the override for the
                package is not a valid version
            errors.NoUpstreamProviderError: If no URL maps to a provider
            errors.AllProvidersFailedError: If every provider failed

        """
        if package.is_vcs:
            return None

        override = self.version_overrides.get(package.pkgbase)
        if override is not None:
            parsed = version.parse(override)
            if parsed is None:
                raise errors.InvalidVersionOverrideError(override)
            LOGGER.debug(
                '%s using version override %s', package.name, parsed
            )
            return parsed

        return await self.latest_version(package_urls(package))
