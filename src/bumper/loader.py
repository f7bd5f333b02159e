"""Package discovery and loading."""

import logging
import pathlib

from bumper import errors, models, srcinfo

LOGGER = logging.getLogger(__name__)

VCS_TOKEN = 'pkgver()'


def validate_is_dir(path: pathlib.Path) -> None:
    if not path.exists():
        raise errors.InvalidPackagePathError(
            f"invalid package path: {path} doesn't exist or not accessible"
        )
    if not path.is_dir():
        raise errors.InvalidPackagePathError(
            f'invalid package path: {path} is not a directory'
        )


def validate_is_package(path: pathlib.Path) -> None:
    for name in ('PKGBUILD', '.SRCINFO'):
        if not (path / name).is_file():
            raise errors.NotAPackageError(
                f'not a package: {path} missing {name}'
            )


def load_package(path: str | pathlib.Path) -> models.Package:
    """Load the package in the given directory.

    Raises:
        errors.InvalidPackagePathError: If the path is not a directory
        errors.NotAPackageError: If PKGBUILD or .SRCINFO is missing
        errors.InvalidSrcinfoError: If .SRCINFO lacks a required field

    """
    path = pathlib.Path(path)
    validate_is_dir(path)
    validate_is_package(path)

    info = srcinfo.parse(path / '.SRCINFO')
    pkgbuild = (path / 'PKGBUILD').read_text(encoding='utf-8')
    return models.Package(
        path=path.resolve(),
        is_vcs=VCS_TOKEN in pkgbuild,
        **info.model_dump(),
    )


def collect_packages(
    path: str | pathlib.Path, depth: int
) -> list[models.Package]:
    """Find packages in the given directory, recursing up to ``depth``.

    Depth 0 only checks the directory itself, depth 1 its subdirectories
    as well, and so on. Hidden directories are never entered.

    Raises:
        errors.InvalidPackagePathError: If the path is not a directory

    """
    path = pathlib.Path(path)
    validate_is_dir(path)
    return _collect(path, depth)


def _collect(path: pathlib.Path, depth: int) -> list[models.Package]:
    try:
        return [load_package(path)]
    except (errors.BumperError, OSError) as exc:
        LOGGER.debug('%s is not a package: %s', path, exc)

    if depth <= 0:
        return []

    packages: list[models.Package] = []
    try:
        entries = sorted(path.iterdir())
    except OSError as exc:
        LOGGER.warning('Unable to list %s: %s', path, exc)
        return packages
    for entry in entries:
        if entry.name.startswith('.') or not entry.is_dir():
            continue
        packages.extend(_collect(entry, depth - 1))
    return packages
