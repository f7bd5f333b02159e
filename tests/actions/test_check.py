"""Tests for the upstream version check action."""

from unittest import mock

from bumper import actions, errors, models, resolver
from tests import base


class CheckActionTestCase(base.AsyncTestCase):
    """Test cases for CheckAction."""

    def make_action(self, **providers: base.FakeProvider) -> actions.Action:
        return actions.CheckAction(
            resolver.VersionResolver(
                lambda url: providers.get(url.rpartition('/')[2])
            )
        )

    def make_package(self, **kwargs) -> models.Package:
        return models.Package(
            pkgbase='foopkg',
            pkgver='1.0.0',
            url='https://example.com/up',
            **kwargs,
        )

    async def test_outdated(self) -> None:
        action = self.make_action(up=base.FakeProvider('up', '1.2.0'))
        package = self.make_package()
        result = await action.execute(package)

        self.assertTrue(result.is_success)
        self.assertEqual(result.comparison, 1)
        self.assertEqual(result.current_version, '1.0.0')
        self.assertEqual(result.upstream_version, '1.2.0')
        self.assertEqual(str(result), '1.0.0 → 1.2.0')
        self.assertTrue(package.is_outdated)
        self.assertEqual(package.upstream_version, '1.2.0')

    async def test_up_to_date(self) -> None:
        action = self.make_action(up=base.FakeProvider('up', '1.0.0'))
        package = self.make_package()
        result = await action.execute(package)

        self.assertTrue(result.is_success)
        self.assertEqual(result.comparison, 0)
        self.assertEqual(str(result), '1.0.0')
        self.assertFalse(package.is_outdated)

    async def test_upstream_older(self) -> None:
        action = self.make_action(up=base.FakeProvider('up', '0.9'))
        package = self.make_package()
        result = await action.execute(package)

        self.assertEqual(result.comparison, -1)
        self.assertEqual(str(result), '0.9 < 1.0.0 !')
        self.assertFalse(package.is_outdated)

    async def test_vcs_package_skipped(self) -> None:
        provider = base.FakeProvider('up', '2.0')
        action = self.make_action(up=provider)
        result = await action.execute(self.make_package(is_vcs=True))

        self.assertTrue(result.is_skipped)
        self.assertIsNone(result.error)
        self.assertEqual(str(result), '1.0.0')
        self.assertEqual(provider.calls, 0)

    async def test_resolution_failure(self) -> None:
        action = self.make_action(
            up=base.FakeProvider('up', error=errors.UpstreamProviderError('x'))
        )
        package = self.make_package()
        with self.assertLogs('bumper.actions.check', level='WARNING'):
            result = await action.execute(package)

        self.assertTrue(result.is_failed)
        self.assertIsInstance(result.error, errors.AllProvidersFailedError)
        self.assertEqual(str(result), '?')
        self.assertFalse(package.is_outdated)
        self.assertIsNone(package.upstream_version)

    async def test_no_provider(self) -> None:
        action = self.make_action()
        with self.assertLogs('bumper.actions.check', level='WARNING'):
            result = await action.execute(self.make_package())
        self.assertIsInstance(result.error, errors.NoUpstreamProviderError)

    async def test_outdated_flag_uses_resolver_ordering(self) -> None:
        action = self.make_action(up=base.FakeProvider('up', '1.2.0'))
        package = self.make_package()
        with mock.patch.object(
            resolver, 'is_outdated', return_value=False
        ) as is_outdated:
            result = await action.execute(package)

        is_outdated.assert_called_once_with('1.2.0', '1.0.0')
        self.assertFalse(package.is_outdated)
        self.assertEqual(result.comparison, 1)
