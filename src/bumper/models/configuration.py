"""Configuration models with Pydantic validation.

Defines the configuration consumed by the check and commit actions, plus
the immutable run options selecting which actions are enabled. API keys
use SecretStr and fall back to environment variables where sensible.
"""

import os
import typing

import pydantic


class GitHubConfiguration(pydantic.BaseModel):
    """GitHub API configuration.

    The API key is optional, unauthenticated requests are rate limited but
    work for public repositories. Defaults to the ``GITHUB_TOKEN``
    environment variable when not set explicitly.
    """

    api_key: pydantic.SecretStr | None = None

    @pydantic.model_validator(mode='before')
    @classmethod
    def _set_api_key_from_env(cls, data: typing.Any) -> typing.Any:
        if isinstance(data, dict) and 'api_key' not in data:
            env_key = os.environ.get('GITHUB_TOKEN')
            if env_key:
                data['api_key'] = env_key
        return data


class GitLabConfiguration(pydantic.BaseModel):
    """GitLab API configuration.

    GitLab instances are self-hostable, so API keys are keyed by the
    instance hostname (e.g. ``gitlab.com`` or ``gitlab.gnome.org``).
    """

    api_keys: dict[str, pydantic.SecretStr] = pydantic.Field(
        default_factory=dict
    )


class ProvidersConfiguration(pydantic.BaseModel):
    """Configuration for the upstream version providers."""

    github: GitHubConfiguration = pydantic.Field(
        default_factory=GitHubConfiguration
    )
    gitlab: GitLabConfiguration = pydantic.Field(
        default_factory=GitLabConfiguration
    )


class CheckConfiguration(pydantic.BaseModel):
    """Configuration of the upstream version check.

    ``version_overrides`` maps a pkgbase to a version which is used instead
    of querying the upstream providers.
    """

    providers: ProvidersConfiguration = pydantic.Field(
        default_factory=ProvidersConfiguration
    )
    version_overrides: dict[str, str] = pydantic.Field(default_factory=dict)


class CommitConfiguration(pydantic.BaseModel):
    """Git commit configuration.

    The message template is rendered with Jinja2 and receives the
    ``package`` and the new ``version``.
    """

    author: str | None = None
    message_template: str = 'Bump version to {{ version }}'


class Configuration(pydantic.BaseModel):
    """Main application configuration."""

    check: CheckConfiguration = pydantic.Field(
        default_factory=CheckConfiguration
    )
    commit: CommitConfiguration = pydantic.Field(
        default_factory=CommitConfiguration
    )

    def with_version_overrides(
        self, overrides: dict[str, str]
    ) -> 'Configuration':
        """Return a copy with the given overrides merged in."""
        if not overrides:
            return self
        check = self.check.model_copy(
            update={
                'version_overrides': {
                    **self.check.version_overrides,
                    **overrides,
                }
            }
        )
        return self.model_copy(update={'check': check})


class RunOptions(pydantic.BaseModel):
    """Which actions run after the check, built once before scheduling."""

    model_config = pydantic.ConfigDict(frozen=True)

    bump: bool = True
    make: bool = True
    commit: bool = False
    push: bool = False
    max_concurrency: int | None = pydantic.Field(default=None, ge=1)
    verbose: bool = False
