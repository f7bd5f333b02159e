"""Command line interface for bumper."""

import argparse
import asyncio
import functools
import logging
import pathlib
import sys
import tomllib

import httpx
import pydantic

import bumper
from bumper import (
    actions,
    config,
    display,
    errors,
    loader,
    models,
    resolver,
    scheduler,
    upstream,
)

LOGGER = logging.getLogger(__name__)

OVERRIDE_SEPARATOR = '='


def parse_version_overrides(values: list[str] | None) -> dict[str, str]:
    """Turn ``PKG=VERSION`` strings into a pkgbase to version mapping.

    Raises:
        errors.InvalidOverrideError: If a value lacks the separator

    """
    overrides: dict[str, str] = {}
    for value in values or []:
        pkgbase, separator, override = value.partition(OVERRIDE_SEPARATOR)
        if not separator:
            raise errors.InvalidOverrideError(
                f"invalid version override: '{value}'"
            )
        overrides[pkgbase] = override
    return overrides


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog='bumper',
        description='Check AUR packages for updates and bump their pkgver',
    )
    parser.add_argument(
        'paths',
        nargs='*',
        type=pathlib.Path,
        default=[pathlib.Path('.')],
        help='Package directories or directories containing packages',
    )
    parser.add_argument(
        '-D',
        '--depth',
        type=int,
        default=1,
        help='How deep to search for packages (default: %(default)s)',
    )
    parser.add_argument(
        '-b',
        '--no-bump',
        dest='bump',
        action='store_false',
        help='Do not bump outdated packages',
    )
    parser.add_argument(
        '-m',
        '--no-make',
        dest='make',
        action='store_false',
        help='Do not build bumped packages',
    )
    parser.add_argument(
        '-c', '--commit', action='store_true', help='Commit bumped packages'
    )
    parser.add_argument(
        '-p', '--push', action='store_true', help='Push committed packages'
    )
    parser.add_argument(
        '-o',
        '--override',
        action='append',
        metavar='PKG=VERSION',
        help='Use VERSION as the upstream version of PKG',
    )
    parser.add_argument(
        '--config', type=pathlib.Path, help='Configuration file path'
    )
    parser.add_argument(
        '--max-concurrency',
        type=int,
        help='Maximum number of packages processed at once',
    )
    parser.add_argument('-v', '--verbose', action='store_true')
    parser.add_argument(
        '-V',
        '--version',
        action='version',
        version=f'%(prog)s {bumper.__version__}',
    )
    args = parser.parse_args(argv)
    if args.max_concurrency is not None and args.max_concurrency < 1:
        parser.error('--max-concurrency must be at least 1')
    try:
        args.overrides = parse_version_overrides(args.override)
    except errors.InvalidOverrideError as exc:
        parser.error(str(exc))
    return args


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )
    for logger in ('httpcore', 'httpx'):
        logging.getLogger(logger).setLevel(logging.WARNING)


def build_actions(
    configuration: models.Configuration,
    options: models.RunOptions,
    client: httpx.AsyncClient | None = None,
) -> list[actions.Action]:
    """Build the ordered action list enabled by the run options."""
    version_resolver = resolver.VersionResolver(
        functools.partial(
            upstream.new_version_provider,
            config=configuration.check.providers,
            client=client,
        ),
        configuration.check.version_overrides,
    )
    enabled: list[actions.Action] = [
        actions.CheckAction(version_resolver, verbose=options.verbose)
    ]
    if options.bump:
        enabled.append(actions.BumpAction(verbose=options.verbose))
    if options.make:
        enabled.append(actions.MakeAction(verbose=options.verbose))
    if options.commit:
        enabled.append(
            actions.CommitAction(
                commit_config=configuration.commit, verbose=options.verbose
            )
        )
    if options.push:
        enabled.append(actions.PushAction(verbose=options.verbose))
    return enabled


def collect(
    paths: list[pathlib.Path], depth: int
) -> list[models.Package]:
    packages: list[models.Package] = []
    for path in paths:
        packages.extend(loader.collect_packages(path, depth))
    return packages


async def run(
    packages: list[models.Package],
    configuration: models.Configuration,
    options: models.RunOptions,
) -> display.PackageListDisplay:
    package_display = display.PackageListDisplay(
        package.name for package in packages
    )
    async with httpx.AsyncClient(
        timeout=upstream.base.DEFAULT_TIMEOUT, follow_redirects=True
    ) as client:
        await scheduler.run(
            packages,
            build_actions(configuration, options, client),
            package_display.on_result,
            package_display.on_finished,
            options.max_concurrency,
        )
    return package_display


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    configure_logging(args.verbose)

    try:
        configuration = config.load_configuration(args.config)
    except (
        errors.InvalidConfigPathError,
        tomllib.TOMLDecodeError,
        pydantic.ValidationError,
    ) as exc:
        print(f'Configuration error: {exc}', file=sys.stderr)
        return 2
    configuration = configuration.with_version_overrides(args.overrides)

    options = models.RunOptions(
        bump=args.bump,
        make=args.make,
        commit=args.commit,
        push=args.push,
        max_concurrency=args.max_concurrency,
        verbose=args.verbose,
    )

    try:
        packages = collect(args.paths, args.depth)
    except errors.InvalidPackagePathError as exc:
        print(f'Error: {exc}', file=sys.stderr)
        return 2
    if not packages:
        print('No packages found', file=sys.stderr)
        return 1
    LOGGER.debug('Found %i packages', len(packages))

    package_display = asyncio.run(run(packages, configuration, options))
    package_display.display(sys.stdout)
    return 1 if package_display.any_failed else 0


def entrypoint() -> None:
    sys.exit(main())
