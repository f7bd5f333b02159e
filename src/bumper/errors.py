"""Exception hierarchy for bumper.

Upstream and resolution errors stay local to a single package: the check
action wraps them into a failed result and the remaining packages keep
running.
"""


class BumperError(Exception):
    """Base class for all bumper errors."""


class UpstreamError(BumperError):
    """Raised when an upstream version provider fails."""


class UpstreamRequestError(UpstreamError):
    """The request to the upstream API could not be completed."""


class UpstreamProviderError(UpstreamError):
    """The upstream API responded with a server error."""


class VersionNotFoundError(UpstreamError):
    """The upstream API did not report any valid version."""


class NoUpstreamProviderError(BumperError):
    """None of the package URLs maps to a known version provider."""

    def __init__(self) -> None:
        super().__init__('no upstream provider found')


class AllProvidersFailedError(BumperError):
    """Every version provider failed; keeps each individual failure."""

    def __init__(self, errors: list[Exception]) -> None:
        self.errors = list(errors)
        super().__init__(
            '\n'.join(
                f'upstream provider error: {error}' for error in self.errors
            )
        )


class InvalidVersionOverrideError(BumperError):
    """A version override was supplied but is not a valid version."""

    def __init__(self, override: str) -> None:
        self.override = override
        super().__init__(
            f"version override '{override}' is not a valid version"
        )


class CommandError(BumperError):
    """An external command exited with a non-zero status."""

    def __init__(
        self,
        command: str,
        args: tuple[str, ...],
        returncode: int | None,
        stderr: str,
    ) -> None:
        self.command = command
        self.command_args = args
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(
            f'{" ".join((command, *args))} error '
            f'(exit status {returncode}): {stderr.strip()}'
        )


class ActionError(BumperError):
    """Base class for errors reported by pipeline actions."""

    prefix = 'action error'

    def __init__(self, message: str) -> None:
        super().__init__(f'{self.prefix}: {message}')


class BumpActionError(ActionError):
    prefix = 'bump action error'


class MakeActionError(ActionError):
    prefix = 'make action error'


class CommitActionError(ActionError):
    prefix = 'commit action error'


class PushActionError(ActionError):
    prefix = 'push action error'


class InvalidPackagePathError(BumperError):
    """The path does not exist or is not a directory."""


class NotAPackageError(BumperError):
    """The directory is missing PKGBUILD or .SRCINFO."""


class InvalidSrcinfoError(BumperError):
    """The .SRCINFO file is missing a required field."""


class InvalidOverrideError(BumperError):
    """A command line version override is not in PKG=VERSION form."""


class InvalidConfigPathError(BumperError):
    """An explicitly requested configuration file does not exist."""
