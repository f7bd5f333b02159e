"""Action result models.

Every action execution produces exactly one immutable ActionResult. The
pipeline only ever looks at the status; the error and the rendered text
are for whoever observes the results.
"""

import enum
import typing

import pydantic


class ActionStatus(enum.Enum):
    """Terminal status of a single action execution."""

    success = 'success'
    skipped = 'skipped'
    failed = 'failed'


class ActionResult(pydantic.BaseModel):
    """Result of executing one action against one package.

    A failed result always carries an error, a skipped one never does.
    """

    model_config = pydantic.ConfigDict(
        arbitrary_types_allowed=True, frozen=True
    )

    status: ActionStatus
    error: Exception | None = None
    detail: str = ''

    @pydantic.model_validator(mode='after')
    def _validate_error(self) -> typing.Self:
        if self.status == ActionStatus.failed and self.error is None:
            raise ValueError('failed result requires an error')
        if self.status == ActionStatus.skipped and self.error is not None:
            raise ValueError('skipped result can not carry an error')
        return self

    @property
    def is_success(self) -> bool:
        return self.status == ActionStatus.success

    @property
    def is_skipped(self) -> bool:
        return self.status == ActionStatus.skipped

    @property
    def is_failed(self) -> bool:
        return self.status == ActionStatus.failed

    @classmethod
    def success(cls, **kwargs: typing.Any) -> typing.Self:
        return cls(status=ActionStatus.success, **kwargs)

    @classmethod
    def skipped(cls, **kwargs: typing.Any) -> typing.Self:
        return cls(status=ActionStatus.skipped, **kwargs)

    @classmethod
    def failed(cls, error: Exception, **kwargs: typing.Any) -> typing.Self:
        return cls(status=ActionStatus.failed, error=error, **kwargs)

    def __str__(self) -> str:
        return self.detail


class CheckActionResult(ActionResult):
    """Result of the upstream version check."""

    current_version: str = ''
    upstream_version: str | None = None
    comparison: int = 0  # -1 (upstream older), 0 (equal), 1 (newer)

    def __str__(self) -> str:
        if self.is_failed:
            return '?'
        if self.is_skipped:
            return self.current_version
        if self.comparison == 1:
            return f'{self.current_version} → {self.upstream_version}'
        if self.comparison == 0:
            return self.current_version
        return f'{self.upstream_version} < {self.current_version} !'


class BumpActionResult(ActionResult):
    """Result of rewriting the package files to the upstream version."""

    bump_ok: bool = False
    updpkgsums_ok: bool = False
    makepkg_ok: bool = False

    def __str__(self) -> str:
        if self.is_skipped:
            return ''
        if not self.bump_ok:
            return 'bump failed'
        if not self.updpkgsums_ok:
            return 'updpkgsums failed'
        if not self.makepkg_ok:
            return 'makepkg failed'
        return 'bumped'


class _StageActionResult(ActionResult):
    """Result rendered as one of a fixed set of words per status."""

    done_text: typing.ClassVar[str] = ''
    failed_text: typing.ClassVar[str] = ''

    def __str__(self) -> str:
        if self.is_skipped:
            return ''
        if self.is_failed:
            return self.failed_text
        return self.done_text


class MakeActionResult(_StageActionResult):
    done_text = 'built'
    failed_text = 'build failed'


class CommitActionResult(_StageActionResult):
    done_text = 'committed'
    failed_text = 'commit failed'


class PushActionResult(_StageActionResult):
    done_text = 'pushed'
    failed_text = 'push failed'
