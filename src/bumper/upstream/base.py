"""Base class and HTTP helpers shared by the upstream version providers."""

import abc
import contextlib
import logging
import typing

import httpx

from bumper import errors, version

LOGGER = logging.getLogger(__name__)

DEFAULT_TIMEOUT = httpx.Timeout(30.0)


class VersionProvider(abc.ABC):
    """Finds the latest released version of a single upstream project.

    Two providers are equal when they query the same project of the same
    kind of upstream, regardless of the credentials they use.
    """

    kind: typing.ClassVar[str]

    def __init__(self, client: httpx.AsyncClient | None = None) -> None:
        self.client = client

    @property
    @abc.abstractmethod
    def identity(self) -> tuple[str, ...]:
        """The project this provider queries, including its kind."""

    @abc.abstractmethod
    async def latest_version(self) -> version.Version:
        """Return the latest upstream version.

        Raises:
            errors.UpstreamError: If no version could be determined

        """

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, VersionProvider):
            return NotImplemented
        return self.identity == other.identity

    def __hash__(self) -> int:
        return hash(self.identity)

    def __repr__(self) -> str:
        return f'<{type(self).__name__} {"/".join(self.identity[1:])}>'

    @contextlib.asynccontextmanager
    async def _http_client(self) -> typing.AsyncIterator[httpx.AsyncClient]:
        if self.client is not None:
            yield self.client
            return
        async with httpx.AsyncClient(
            timeout=DEFAULT_TIMEOUT, follow_redirects=True
        ) as client:
            yield client

    async def _get_json(
        self, url: str, headers: dict[str, str] | None = None
    ) -> typing.Any:
        """Send a GET request and decode the JSON response.

        Raises:
            errors.UpstreamRequestError: If the request could not be sent
            errors.UpstreamProviderError: On server errors or invalid JSON
            errors.VersionNotFoundError: On any other non-200 status

        """
        LOGGER.debug('GET %s', url)
        async with self._http_client() as client:
            try:
                response = await client.get(url, headers=headers or {})
            except httpx.HTTPError as exc:
                raise errors.UpstreamRequestError(
                    f'request error: GET {url} {exc}'
                ) from exc

        if response.status_code >= httpx.codes.INTERNAL_SERVER_ERROR:
            raise errors.UpstreamProviderError(
                f'version provider error: GET {url} '
                f'status {response.status_code}'
            )
        if response.status_code != httpx.codes.OK:
            raise errors.VersionNotFoundError(
                f'upstream version not found: GET {url} '
                f'status {response.status_code}'
            )
        try:
            return response.json()
        except ValueError as exc:
            raise errors.UpstreamProviderError(
                f'version provider error: GET {url} invalid JSON: {exc}'
            ) from exc


def bearer_headers(api_key: str | None) -> dict[str, str]:
    if api_key:
        return {'Authorization': f'Bearer {api_key}'}
    return {}


def first_version(*candidates: typing.Any) -> version.Version | None:
    """Return the first candidate that parses as a version."""
    for candidate in candidates:
        if isinstance(candidate, str):
            parsed = version.parse(candidate)
            if parsed is not None:
                return parsed
    return None


def json_objects(data: typing.Any) -> list[dict[str, typing.Any]]:
    """Return the JSON objects of a decoded JSON array, ignoring anything
    else."""
    if not isinstance(data, list):
        return []
    return [item for item in data if isinstance(item, dict)]
