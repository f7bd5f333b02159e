"""Tests for the command line interface."""

import contextlib
import io
import os
import pathlib
import unittest
from unittest import mock

from bumper import actions, cli, errors, models
from tests import base


class ParseArgsTestCase(unittest.TestCase):
    """Test cases for argument parsing."""

    def test_defaults(self) -> None:
        args = cli.parse_args([])
        self.assertEqual(args.paths, [pathlib.Path('.')])
        self.assertEqual(args.depth, 1)
        self.assertTrue(args.bump)
        self.assertTrue(args.make)
        self.assertFalse(args.commit)
        self.assertFalse(args.push)
        self.assertEqual(args.overrides, {})
        self.assertIsNone(args.config)
        self.assertIsNone(args.max_concurrency)

    def test_flags(self) -> None:
        args = cli.parse_args(
            [
                '-D',
                '0',
                '-b',
                '-m',
                '-c',
                '-p',
                '-o',
                'foo=1.2',
                '--override',
                'bar=v3',
                '--max-concurrency',
                '4',
                '-v',
                'one',
                'two',
            ]
        )
        self.assertEqual(
            args.paths, [pathlib.Path('one'), pathlib.Path('two')]
        )
        self.assertEqual(args.depth, 0)
        self.assertFalse(args.bump)
        self.assertFalse(args.make)
        self.assertTrue(args.commit)
        self.assertTrue(args.push)
        self.assertEqual(args.overrides, {'foo': '1.2', 'bar': 'v3'})
        self.assertEqual(args.max_concurrency, 4)
        self.assertTrue(args.verbose)

    def test_invalid_arguments(self) -> None:
        for argv in [['-o', 'foo'], ['--max-concurrency', '0']]:
            with self.subTest(argv=argv):
                with contextlib.redirect_stderr(io.StringIO()):
                    with self.assertRaises(SystemExit) as context:
                        cli.parse_args(argv)
                self.assertEqual(context.exception.code, 2)

    def test_parse_version_overrides(self) -> None:
        self.assertEqual(
            cli.parse_version_overrides(['a=1', 'b=2=3']),
            {'a': '1', 'b': '2=3'},
        )
        with self.assertRaises(errors.InvalidOverrideError):
            cli.parse_version_overrides(['a'])


class BuildActionsTestCase(unittest.TestCase):
    """Test cases for turning run options into the action list."""

    def action_types(self, **options) -> list[type]:
        return [
            type(action)
            for action in cli.build_actions(
                models.Configuration(), models.RunOptions(**options)
            )
        ]

    def test_default_actions(self) -> None:
        self.assertEqual(
            self.action_types(),
            [actions.CheckAction, actions.BumpAction, actions.MakeAction],
        )

    def test_all_actions(self) -> None:
        self.assertEqual(
            self.action_types(commit=True, push=True),
            [
                actions.CheckAction,
                actions.BumpAction,
                actions.MakeAction,
                actions.CommitAction,
                actions.PushAction,
            ],
        )

    def test_check_only(self) -> None:
        self.assertEqual(
            self.action_types(bump=False, make=False), [actions.CheckAction]
        )

    def test_commit_uses_configuration(self) -> None:
        configuration = models.Configuration(
            commit=models.CommitConfiguration(author='A <a@example.com>')
        )
        commit = cli.build_actions(
            configuration, models.RunOptions(commit=True)
        )[-1]
        self.assertEqual(commit.commit_config.author, 'A <a@example.com>')


class MainTestCase(base.PackageDirectoryMixin, unittest.TestCase):
    """Runs the whole command without touching the network."""

    def setUp(self) -> None:
        super().setUp()
        patcher = mock.patch.dict(
            os.environ, {'XDG_CONFIG_HOME': str(self.temp_path)}, clear=True
        )
        patcher.start()
        self.addCleanup(patcher.stop)
        self.stdout = io.StringIO()
        self.stderr = io.StringIO()

    def main(self, *argv: str) -> int:
        with (
            contextlib.redirect_stdout(self.stdout),
            contextlib.redirect_stderr(self.stderr),
        ):
            return cli.main(list(argv))

    def test_check_with_override(self) -> None:
        self.make_package_dir('packages/foopkg')
        exit_code = self.main(
            '-b', '-m', '-o', 'foopkg=1.2.0', str(self.temp_path / 'packages')
        )
        self.assertEqual(exit_code, 0)
        self.assertEqual(
            self.stdout.getvalue(), '✓ foopkg: 1.0.0 → 1.2.0\n'
        )

    def test_invalid_override_fails_package(self) -> None:
        path = self.make_package_dir()
        exit_code = self.main('-o', 'foopkg=latest', str(path))
        self.assertEqual(exit_code, 1)
        self.assertEqual(
            self.stdout.getvalue(),
            "✗ foopkg: ?\n"
            "  ⤷ version override 'latest' is not a valid version\n",
        )

    def test_vcs_package_skipped(self) -> None:
        path = self.make_package_dir(
            'foopkg-git', pkgbuild=self.PKGBUILD + 'pkgver() {\n}\n'
        )
        self.assertEqual(self.main('-D', '0', str(path)), 0)
        self.assertEqual(self.stdout.getvalue(), '∅ foopkg: 1.0.0\n')

    def test_no_packages(self) -> None:
        self.assertEqual(self.main(str(self.temp_path)), 1)
        self.assertIn('No packages found', self.stderr.getvalue())

    def test_invalid_path(self) -> None:
        self.assertEqual(self.main(str(self.temp_path / 'missing')), 2)
        self.assertIn('invalid package path', self.stderr.getvalue())

    def test_missing_config_file(self) -> None:
        path = self.make_package_dir()
        exit_code = self.main(
            '--config', str(self.temp_path / 'missing.toml'), str(path)
        )
        self.assertEqual(exit_code, 2)
        self.assertIn('Configuration error', self.stderr.getvalue())

    def test_invalid_config_file(self) -> None:
        config_path = self.temp_path / 'bumper.toml'
        config_path.write_text('[check\n')
        exit_code = self.main(
            '--config', str(config_path), str(self.temp_path)
        )
        self.assertEqual(exit_code, 2)
