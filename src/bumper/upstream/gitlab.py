"""GitLab releases and tags version provider.

Works with gitlab.com as well as self-hosted instances: any URL whose host
contains ``git`` is considered a potential GitLab project.
"""

import re
import typing
from urllib import parse

import httpx

from bumper import errors, models, version
from bumper.upstream import base

URL_PATTERN = re.compile(
    r'([^/#?]*git[^/#?]*)/([^/#?]+)/([^#?]+?)(/-/.*)?$'
)


class GitLabProvider(base.VersionProvider):
    """Finds the latest version in the releases, then the tags, of a
    project. Upcoming releases are ignored."""

    kind = 'gitlab'

    def __init__(
        self,
        netloc: str,
        owner: str,
        repo: str,
        api_key: str | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        super().__init__(client)
        self.netloc = netloc
        self.owner = owner
        self.repo = repo
        self.api_key = api_key

    @classmethod
    def from_url(
        cls,
        url: str,
        config: models.GitLabConfiguration | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> typing.Self | None:
        match = URL_PATTERN.search(url)
        if not match:
            return None
        netloc = match.group(1)
        api_key = None
        if config and netloc in config.api_keys:
            api_key = config.api_keys[netloc].get_secret_value()
        return cls(
            netloc,
            match.group(2),
            match.group(3).removesuffix('.git'),
            api_key=api_key,
            client=client,
        )

    @property
    def identity(self) -> tuple[str, ...]:
        return self.kind, self.netloc, self.owner, self.repo

    @property
    def api_url(self) -> str:
        return f'https://{self.netloc}/api/v4'

    @property
    def project_id(self) -> str:
        return parse.quote(f'{self.owner}/{self.repo}', safe='')

    @property
    def releases_url(self) -> str:
        return f'{self.api_url}/projects/{self.project_id}/releases'

    @property
    def tags_url(self) -> str:
        return f'{self.api_url}/projects/{self.project_id}/repository/tags'

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
            if release.get('upcoming_release'):
                continue
            found = base.first_version(
                release.get('tag_name'), release.get('name')
            )
            if found:
                return found
        raise errors.VersionNotFoundError(
            f'upstream version not found: no valid release in '
            f'{self.netloc}/{self.owner}/{self.repo}'
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
            f'{self.netloc}/{self.owner}/{self.repo}'
        )
