"""Upstream version providers.

Each provider knows how to recognise the URLs of one kind of upstream and
how to query it for the latest released version.
"""

import httpx

from bumper import models
from bumper.upstream.base import VersionProvider
from bumper.upstream.github import GitHubProvider
from bumper.upstream.gitlab import GitLabProvider
from bumper.upstream.pypi import PyPIProvider

__all__ = [
    'GitHubProvider',
    'GitLabProvider',
    'PyPIProvider',
    'VersionProvider',
    'new_version_provider',
]


def new_version_provider(
    url: str,
    config: models.ProvidersConfiguration | None = None,
    client: httpx.AsyncClient | None = None,
) -> VersionProvider | None:
    """Create a provider for the given URL.

    Returns:
        The first applicable provider, or None if no provider handles it

    """
    config = config or models.ProvidersConfiguration()
    return (
        GitHubProvider.from_url(url, config.github, client)
        or GitLabProvider.from_url(url, config.gitlab, client)
        or PyPIProvider.from_url(url, client)
    )
