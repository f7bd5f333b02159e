"""GitHub releases and tags version provider."""

import re
import typing

import httpx

from bumper import errors, models, version
from bumper.upstream import base

URL_PATTERN = re.compile(r'github\.com/([^/#?]+)/([^/#?]+)')
API_URL = 'https://api.github.com'


class GitHubProvider(base.VersionProvider):
    """Finds the latest version in the releases, then the tags, of a repo.

    Drafts and prereleases are ignored. Tags are only consulted when no
    release carries a valid version.
    """

    kind = 'github'

    def __init__(
        self,
        owner: str,
        repo: str,
        api_key: str | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        super().__init__(client)
        self.owner = owner
        self.repo = repo
        self.api_key = api_key

    @classmethod
    def from_url(
        cls,
        url: str,
        config: models.GitHubConfiguration | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> typing.Self | None:
        match = URL_PATTERN.search(url)
        if not match:
            return None
        api_key = None
        if config and config.api_key:
            api_key = config.api_key.get_secret_value()
        return cls(
            match.group(1),
            match.group(2).removesuffix('.git'),
            api_key=api_key,
            client=client,
        )

    @property
    def identity(self) -> tuple[str, ...]:
        return self.kind, self.owner, self.repo

    @property
    def releases_url(self) -> str:
        return f'{API_URL}/repos/{self.owner}/{self.repo}/releases'

    @property
    def tags_url(self) -> str:
        return f'{API_URL}/repos/{self.owner}/{self.repo}/tags'

    async def latest_version(self) -> version.Version:
        try:
            return await self._latest_release_version()
        except errors.VersionNotFoundError as release_error:
            try:
                return await self._latest_tag_version()
            except errors.UpstreamError as tag_error:
                raise type(tag_error)(
                    f'{release_error}; {tag_error}'
                ) from release_error

    async def _latest_release_version(self) -> version.Version:
        releases = await self._get_json(
            self.releases_url, base.bearer_headers(self.api_key)
        )
        for release in base.json_objects(releases):
            if release.get('draft') or release.get('prerelease'):
                continue
            found = base.first_version(
                release.get('tag_name'), release.get('name')
            )
            if found:
                return found
        raise errors.VersionNotFoundError(
            f'upstream version not found: no valid release in '
            f'{self.owner}/{self.repo}'
        )

    async def _latest_tag_version(self) -> version.Version:
        tags = await self._get_json(
            self.tags_url, base.bearer_headers(self.api_key)
        )
        for tag in base.json_objects(tags):
            found = base.first_version(tag.get('name'))
            if found:
                return found
        raise errors.VersionNotFoundError(
            f'upstream version not found: no valid tag in '
            f'{self.owner}/{self.repo}'
        )
