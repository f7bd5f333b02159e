"""Tests for configuration models and loading."""

import os
import pathlib
import tempfile
import unittest
from unittest import mock

import pydantic

from bumper import config, errors, models


class ConfigurationModelTestCase(unittest.TestCase):
    """Test cases for the configuration models."""

    def test_defaults(self) -> None:
        with mock.patch.dict(os.environ, {}, clear=True):
            configuration = models.Configuration()
        self.assertIsNone(configuration.check.providers.github.api_key)
        self.assertEqual(configuration.check.providers.gitlab.api_keys, {})
        self.assertEqual(configuration.check.version_overrides, {})
        self.assertIsNone(configuration.commit.author)
        self.assertEqual(
            configuration.commit.message_template,
            'Bump version to {{ version }}',
        )

    def test_github_token_from_environment(self) -> None:
        with mock.patch.dict(os.environ, {'GITHUB_TOKEN': 'env-token'}):
            github = models.GitHubConfiguration()
            explicit = models.GitHubConfiguration(api_key='explicit')
        self.assertEqual(github.api_key.get_secret_value(), 'env-token')
        self.assertEqual(explicit.api_key.get_secret_value(), 'explicit')

    def test_api_keys_are_not_shown(self) -> None:
        gitlab = models.GitLabConfiguration(api_keys={'gitlab.com': 'key'})
        self.assertNotIn('key', str(gitlab.api_keys['gitlab.com']))

    def test_with_version_overrides(self) -> None:
        configuration = models.Configuration.model_validate(
            {'check': {'version_overrides': {'a': '1.0', 'b': '2.0'}}}
        )
        merged = configuration.with_version_overrides({'b': '3.0'})
        self.assertEqual(
            merged.check.version_overrides, {'a': '1.0', 'b': '3.0'}
        )
        self.assertEqual(
            configuration.check.version_overrides, {'a': '1.0', 'b': '2.0'}
        )
        self.assertIs(configuration.with_version_overrides({}), configuration)

    def test_run_options(self) -> None:
        options = models.RunOptions()
        self.assertTrue(options.bump)
        self.assertTrue(options.make)
        self.assertFalse(options.commit)
        self.assertFalse(options.push)
        with self.assertRaises(pydantic.ValidationError):
            options.bump = False
        with self.assertRaises(pydantic.ValidationError):
            models.RunOptions(max_concurrency=0)


class LoadConfigurationTestCase(unittest.TestCase):
    """Test cases for reading the TOML configuration file."""

    def setUp(self) -> None:
        super().setUp()
        self.temp_dir = tempfile.TemporaryDirectory()
        self.addCleanup(self.temp_dir.cleanup)
        self.path = pathlib.Path(self.temp_dir.name)

    def test_default_path_uses_xdg_config_home(self) -> None:
        with mock.patch.dict(
            os.environ, {'XDG_CONFIG_HOME': '/xdg', 'HOME': '/home/u'}
        ):
            self.assertEqual(
                config.default_config_path(),
                pathlib.Path('/xdg/bumper/config.toml'),
            )

    def test_default_path_falls_back_to_home(self) -> None:
        with mock.patch.dict(os.environ, {'HOME': '/home/u'}, clear=True):
            self.assertEqual(
                config.default_config_path(),
                pathlib.Path('/home/u/.config/bumper/config.toml'),
            )

    def test_missing_default_file(self) -> None:
        with mock.patch.dict(
            os.environ, {'XDG_CONFIG_HOME': str(self.path)}, clear=True
        ):
            configuration = config.load_configuration()
            self.assertEqual(configuration, models.Configuration())

    def test_load_default_file(self) -> None:
        (self.path / 'bumper').mkdir()
        (self.path / 'bumper' / 'config.toml').write_text(
            '[commit]\nauthor = "Jane Doe <jane@example.com>"\n'
        )
        with mock.patch.dict(
            os.environ, {'XDG_CONFIG_HOME': str(self.path)}, clear=True
        ):
            configuration = config.load_configuration()
        self.assertEqual(
            configuration.commit.author, 'Jane Doe <jane@example.com>'
        )

    def test_load_explicit_file(self) -> None:
        path = self.path / 'custom.toml'
        path.write_text(
            '[check.providers.github]\n'
            'api_key = "gh-key"\n'
            '\n'
            '[check.providers.gitlab.api_keys]\n'
            '"gitlab.gnome.org" = "gl-key"\n'
            '\n'
            '[check.version_overrides]\n'
            'foopkg = "1.2.3"\n'
        )
        configuration = config.load_configuration(path)
        providers = configuration.check.providers
        self.assertEqual(providers.github.api_key.get_secret_value(), 'gh-key')
        self.assertEqual(
            providers.gitlab.api_keys['gitlab.gnome.org'].get_secret_value(),
            'gl-key',
        )
        self.assertEqual(
            configuration.check.version_overrides, {'foopkg': '1.2.3'}
        )

    def test_missing_explicit_file(self) -> None:
        with self.assertRaises(errors.InvalidConfigPathError):
            config.load_configuration(self.path / 'missing.toml')

    def test_invalid_content(self) -> None:
        path = self.path / 'invalid.toml'
        path.write_text('[check]\nversion_overrides = 5\n')
        with self.assertLogs('bumper.config', level='ERROR'):
            with self.assertRaises(pydantic.ValidationError):
                config.load_configuration(path)
