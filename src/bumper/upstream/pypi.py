"""PyPI version provider for packages sourced from sdist URLs."""

import re
import typing

import httpx

from bumper import errors, version
from bumper.upstream import base

URL_PATTERN = re.compile(
    r'(files\.pythonhosted\.org|pypi\.python\.org|pypi\.org|pypi\.io)'
    r'/packages/source/[a-z]/([^/#?]+)/'
)
API_URL = 'https://pypi.org/pypi'


class PyPIProvider(base.VersionProvider):
    """Reads the current release of a PyPI project."""

    kind = 'pypi'

    def __init__(
        self, package_name: str, client: httpx.AsyncClient | None = None
    ) -> None:
        super().__init__(client)
        self.package_name = package_name

    @classmethod
    def from_url(
        cls, url: str, client: httpx.AsyncClient | None = None
    ) -> typing.Self | None:
        match = URL_PATTERN.search(url)
        if not match:
            return None
        return cls(match.group(2), client=client)

    @property
    def identity(self) -> tuple[str, ...]:
        return self.kind, self.package_name

    @property
    def package_info_url(self) -> str:
        return f'{API_URL}/{self.package_name}/json'

    async def latest_version(self) -> version.Version:
        package_info = await self._get_json(self.package_info_url)
        info = {}
        if isinstance(package_info, dict):
            info = package_info.get('info') or {}
        found = base.first_version(info.get('version'))
        if found is None:
            raise errors.VersionNotFoundError(
                f'upstream version not found: no valid version for '
                f'{self.package_name} on PyPI'
            )
        return found
