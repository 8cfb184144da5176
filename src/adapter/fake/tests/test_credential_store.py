"""Unit tests for MockCredentialStore against the CredentialStore contract."""

import asyncio
import unittest
from unittest.mock import patch

from adapter.fake.credential_store import SEED_ACCOUNTS, MockCredentialStore
from domain.model.errors import InvalidCredentialsError, UserExistsError
from domain.model.user import User


class TestMockCredentialStore(unittest.IsolatedAsyncioTestCase):
    """Tests that MockCredentialStore correctly implements the CredentialStore Protocol."""

    def setUp(self):
        self.store = MockCredentialStore(min_delay=0, max_delay=0)

    # ── seeding ───────────────────────────────────────────

    def test_seeds_fixed_accounts(self):
        self.assertEqual(len(self.store), len(SEED_ACCOUNTS))
        self.assertTrue(self.store.has_account('test@cliniq.com'))
        self.assertTrue(self.store.has_account('demo@cliniq.com'))

    def test_each_instance_is_seeded_independently(self):
        other = MockCredentialStore(min_delay=0, max_delay=0)
        self.assertNotEqual(
            self.store.records['test@cliniq.com'].user.id,
            other.records['test@cliniq.com'].user.id,
        )

    def test_seed_false_starts_empty(self):
        self.assertEqual(len(MockCredentialStore(min_delay=0, max_delay=0, seed=False)), 0)

    # ── authenticate ──────────────────────────────────────

    async def test_authenticate_seeded_account(self):
        user = await self.store.authenticate('test@cliniq.com', 'password123')

        self.assertIsInstance(user, User)
        self.assertEqual(user.email, 'test@cliniq.com')
        self.assertIs(user, self.store.records['test@cliniq.com'].user)

    async def test_authenticate_normalizes_email(self):
        user = await self.store.authenticate('  TEST@CLINIQ.com ', 'password123')
        self.assertEqual(user.id, self.store.records['test@cliniq.com'].user.id)

    async def test_authenticate_unknown_email_raises(self):
        with self.assertRaises(InvalidCredentialsError):
            await self.store.authenticate('nobody@cliniq.com', 'password123')

    async def test_authenticate_wrong_password_raises(self):
        with self.assertRaises(InvalidCredentialsError):
            await self.store.authenticate('test@cliniq.com', 'wrong-password')

    async def test_authenticate_password_is_case_sensitive(self):
        with self.assertRaises(InvalidCredentialsError):
            await self.store.authenticate('test@cliniq.com', 'PASSWORD123')

    # ── create_account ────────────────────────────────────

    async def test_create_account_stores_normalized_email(self):
        user = await self.store.create_account('New@Example.COM', 'longenough1')

        self.assertEqual(user.email, 'new@example.com')
        self.assertTrue(self.store.has_account('new@example.com'))
        self.assertEqual(len(self.store), len(SEED_ACCOUNTS) + 1)

    async def test_create_account_then_authenticate_returns_same_user(self):
        created = await self.store.create_account('new@x.com', 'longenough1')
        authenticated = await self.store.authenticate('new@x.com', 'longenough1')
        self.assertEqual(created.id, authenticated.id)

    async def test_create_account_existing_email_raises(self):
        with self.assertRaises(UserExistsError):
            await self.store.create_account('TEST@cliniq.com', 'password123')

    async def test_concurrent_create_for_same_email_admits_one(self):
        # both calls suspend in the delay before either writes
        store = MockCredentialStore(min_delay=0.001, max_delay=0.001)
        results = await asyncio.gather(
            store.create_account('race@x.com', 'longenough1'),
            store.create_account('RACE@x.com', 'longenough2'),
            return_exceptions=True,
        )

        users = [r for r in results if isinstance(r, User)]
        errors = [r for r in results if isinstance(r, UserExistsError)]
        self.assertEqual(len(users), 1)
        self.assertEqual(len(errors), 1)
        self.assertIs(store.records['race@x.com'].user, users[0])

    # ── simulated delay ───────────────────────────────────

    @patch('adapter.fake.credential_store.random.uniform', return_value=0.0)
    async def test_delay_drawn_from_configured_range(self, mock_uniform):
        store = MockCredentialStore(min_delay=0.5, max_delay=1.5)
        await store.authenticate('test@cliniq.com', 'password123')
        mock_uniform.assert_called_once_with(0.5, 1.5)

    async def test_delay_suspends_call(self):
        store = MockCredentialStore(min_delay=0.02, max_delay=0.02)
        loop = asyncio.get_running_loop()

        started = loop.time()
        await store.authenticate('demo@cliniq.com', 'demo123')
        self.assertGreaterEqual(loop.time() - started, 0.015)

    @patch.dict('os.environ', {'MOCK_AUTH_MIN_DELAY': '0.1', 'MOCK_AUTH_MAX_DELAY': '0.2'})
    def test_delay_bounds_read_from_environment(self):
        store = MockCredentialStore()
        self.assertEqual((store.min_delay, store.max_delay), (0.1, 0.2))

    @patch.dict('os.environ', {'MOCK_AUTH_MIN_DELAY': 'fast'})
    def test_malformed_delay_env_raises_clear_error(self):
        with self.assertRaises(ValueError) as ctx:
            MockCredentialStore()
        self.assertIn('MOCK_AUTH_MIN_DELAY', str(ctx.exception))

    @patch.dict('os.environ', {'MOCK_AUTH_MIN_DELAY': 'fast'})
    def test_explicit_delay_ignores_environment(self):
        store = MockCredentialStore(min_delay=0, max_delay=0)
        self.assertEqual(store.min_delay, 0)

    def test_invalid_delay_range_raises(self):
        with self.assertRaises(ValueError):
            MockCredentialStore(min_delay=2.0, max_delay=1.0)
        with self.assertRaises(ValueError):
            MockCredentialStore(min_delay=-1.0, max_delay=1.0)


if __name__ == '__main__':
    unittest.main()
