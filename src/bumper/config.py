"""Configuration file loading."""

import logging
import os
import pathlib
import tomllib

import pydantic

from bumper import errors, models

LOGGER = logging.getLogger(__name__)

DEFAULT_CONFIG_DIR = '.config'
RELATIVE_CONFIG_PATH = pathlib.Path('bumper') / 'config.toml'


def default_config_path() -> pathlib.Path | None:
    """Return the default configuration path, honoring XDG_CONFIG_HOME."""
    config_home = os.environ.get('XDG_CONFIG_HOME')
    if config_home:
        return pathlib.Path(config_home) / RELATIVE_CONFIG_PATH
    home = os.environ.get('HOME')
    if home:
        return pathlib.Path(home) / DEFAULT_CONFIG_DIR / RELATIVE_CONFIG_PATH
    return None


def load_configuration(
    path: pathlib.Path | None = None,
) -> models.Configuration:
    """Load the configuration from the given or the default location.

    An explicitly requested file has to exist, a missing default file
    results in the default configuration.

    Raises:
        errors.InvalidConfigPathError: If the requested file does not exist
        tomllib.TOMLDecodeError: If the file is not valid TOML
        pydantic.ValidationError: If the file content is invalid

    """
    if path is not None:
        if not path.is_file():
            raise errors.InvalidConfigPathError(
                f'invalid configuration path: {path} does not exist'
            )
    else:
        path = default_config_path()
        if path is None or not path.is_file():
            LOGGER.debug('No configuration file found, using defaults')
            return models.Configuration()

    LOGGER.debug('Loading configuration from %s', path)
    with path.open('rb') as handle:
        data = tomllib.load(handle)
    try:
        return models.Configuration.model_validate(data)
    except pydantic.ValidationError as exc:
        LOGGER.error('Invalid configuration in %s: %s', path, exc)
        raise
