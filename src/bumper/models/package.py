"""Package model.

A package is a directory with a PKGBUILD and a .SRCINFO. It is created
before the pipeline runs and only the check action mutates it, recording
the upstream version and whether the package is outdated.
"""

import pathlib

import pydantic


class Package(pydantic.BaseModel):
    """A single AUR-style package managed by bumper."""

    path: pathlib.Path = pathlib.Path('.')
    pkgbase: str = ''
    pkgname: str = ''
    url: str = ''
    source: list[str] = pydantic.Field(default_factory=list)
    pkgver: str = ''
    pkgrel: str = ''
    is_vcs: bool = False
    upstream_version: str | None = None
    is_outdated: bool = False

    @property
    def pkgbuild_path(self) -> pathlib.Path:
        return self.path / 'PKGBUILD'

    @property
    def srcinfo_path(self) -> pathlib.Path:
        return self.path / '.SRCINFO'

    @property
    def name(self) -> str:
        """Name used when reporting on the package."""
        return self.pkgbase or self.pkgname or self.path.name
