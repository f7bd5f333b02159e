"""Minimal .SRCINFO reader.

Only the handful of fields bumper needs are extracted; everything else in
the file is ignored.
"""

import collections
import pathlib

import pydantic

from bumper import errors

SEPARATOR = ' = '
REQUIRED_FIELDS = ('pkgbase', 'pkgname', 'pkgver', 'pkgrel', 'url')


class Srcinfo(pydantic.BaseModel):
    """Fields extracted from a .SRCINFO file."""

    pkgbase: str
    pkgname: str
    pkgver: str
    pkgrel: str
    url: str
    source: list[str] = pydantic.Field(default_factory=list)


def read_fields(text: str) -> dict[str, list[str]]:
    """Collect every ``key = value`` line, keeping repeated keys."""
    fields: dict[str, list[str]] = collections.defaultdict(list)
    for line in text.splitlines():
        name, separator, value = line.strip().partition(SEPARATOR)
        if separator:
            fields[name.strip()].append(value.strip())
    return fields


def parse(path: pathlib.Path) -> Srcinfo:
    """Parse the .SRCINFO file at the given path.

    Raises:
        errors.InvalidSrcinfoError: If a required field is missing or
            appears more than once
        OSError: If the file can not be read

    """
    fields = read_fields(path.read_text(encoding='utf-8'))
    for name in REQUIRED_FIELDS:
        if len(fields.get(name, [])) != 1:
            raise errors.InvalidSrcinfoError(
                f"invalid .SRCINFO: {path} missing/invalid '{name}' value"
            )
    return Srcinfo(
        **{name: fields[name][0] for name in REQUIRED_FIELDS},
        source=fields.get('source', []),
    )
