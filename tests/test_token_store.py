#!/usr/bin/env python3
"""
Tests for:
* DeviceIdentity
* AuthToken / TokenTier
* TokenStore

Run with:
    python -m pytest tests/test_token_store.py
"""
import re
import unittest

from drama_providers.base.auth import AuthToken, DeviceIdentity, TokenStore, TokenTier


class FakeClock:
    def __init__(self, now=1_700_000_000.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


def _token(value='abc', expires_at=1_700_003_600.0, tier=TokenTier.LIVE):
    return AuthToken(value=value, expires_at=expires_at, tier=tier, issued_at=1_700_000_000.0)


# ===========================================================================
# DeviceIdentity
# ===========================================================================

class TestDeviceIdentity(unittest.TestCase):

    def test_identity_is_32_hex_chars(self):
        device = DeviceIdentity()
        self.assertRegex(device.identity(), r'^[0-9a-f]{32}$')

    def test_identity_is_stable(self):
        device = DeviceIdentity()
        self.assertEqual(device.identity(), device.identity())

    def test_identities_differ_between_instances(self):
        self.assertNotEqual(DeviceIdentity().identity(), DeviceIdentity().identity())

    def test_generator_asked_for_16_bytes(self):
        requested = []

        def gen(n):
            requested.append(n)
            return 'f' * (n * 2)

        device = DeviceIdentity(generator=gen)
        self.assertEqual(requested, [16])
        self.assertEqual(device.identity(), 'f' * 32)


# ===========================================================================
# AuthToken
# ===========================================================================

class TestAuthToken(unittest.TestCase):

    def test_valid_before_expiry(self):
        self.assertTrue(_token().is_valid(now=1_700_003_599.0))

    def test_invalid_at_expiry(self):
        self.assertFalse(_token().is_valid(now=1_700_003_600.0))

    def test_empty_value_never_valid(self):
        self.assertFalse(_token(value='').is_valid(now=0))

    def test_expiry_time_is_iso_utc(self):
        token = _token(expires_at=0.0)
        self.assertEqual(token.expiry_time, '1970-01-01T00:00:00.000Z')

    def test_emergency_tier_not_cacheable(self):
        self.assertTrue(TokenTier.LIVE.cacheable)
        self.assertTrue(TokenTier.FALLBACK.cacheable)
        self.assertFalse(TokenTier.EMERGENCY.cacheable)


# ===========================================================================
# TokenStore
# ===========================================================================

class TestTokenStore(unittest.TestCase):

    def setUp(self):
        self.clock = FakeClock()
        self.store = TokenStore('dramabox', clock=self.clock)

    def test_empty_store_reports_absent(self):
        self.assertIsNone(self.store.get())
        self.assertTrue(self.store.is_expired())
        self.assertIsNone(self.store.peek())

    def test_set_then_get(self):
        token = _token()
        self.store.set(token)
        self.assertIs(self.store.get(), token)
        self.assertFalse(self.store.is_expired())

    def test_get_absent_after_expiry(self):
        token = _token(expires_at=self.clock.now + 3600)
        self.store.set(token)
        self.clock.advance(3599)
        self.assertIs(self.store.get(), token)
        self.clock.advance(1)
        self.assertIsNone(self.store.get())
        self.assertTrue(self.store.is_expired())
        # Expired token stays in the slot for inspection
        self.assertIs(self.store.peek(), token)

    def test_set_replaces_unconditionally(self):
        first = _token(value='first')
        second = _token(value='second', expires_at=self.clock.now + 10)
        self.store.set(first)
        self.store.set(second)
        self.assertIs(self.store.get(), second)

    def test_clear(self):
        self.store.set(_token())
        self.store.clear()
        self.assertIsNone(self.store.get())
        self.assertIsNone(self.store.peek())


if __name__ == '__main__':
    unittest.main()
