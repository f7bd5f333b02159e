"""Base class for the actions run against a package."""

import abc

from bumper import commands, mixins, models


class Action(mixins.VerboseLoggerMixin, abc.ABC):
    """A single stage of a package's maintenance pipeline.

    Executing an action produces exactly one result. The only state an
    action may change, besides the outside world, is the package itself.
    """

    @abc.abstractmethod
    async def execute(self, package: models.Package) -> models.ActionResult:
        """Run the action against the package."""


class CommandAction(Action, abc.ABC):
    """An action driving external programs through a command runner."""

    def __init__(
        self,
        command_runner: commands.CommandRunner = commands.run_command,
        verbose: bool = False,
    ) -> None:
        super().__init__(verbose)
        self.command_runner = command_runner


def wrap_error(
    error_class: type[Exception], exc: BaseException
) -> Exception:
    """Wrap ``exc`` in ``error_class``, keeping it as the cause."""
    error = error_class(str(exc))
    error.__cause__ = exc
    return error
