"""Tests for the per-buyer checkout lock."""

import redis

from bazaar.services.lock_service import LockService


class FlakyRedis:
    """Pierwsze wywolanie konczy sie bledem polaczenia, kolejne przechodza."""

    def __init__(self, inner):
        self.inner = inner
        self.calls = 0

    def set(self, **kwargs):
        self.calls += 1
        if self.calls == 1:
            raise redis.ConnectionError("connection reset")
        return self.inner.set(**kwargs)


class TestCheckoutLock:
    def test_acquire_once(self, lock_service):
        assert lock_service.acquire_checkout_lock(7, "token-a") is True
        assert lock_service.acquire_checkout_lock(7, "token-b") is False

    def test_locks_are_per_buyer(self, lock_service):
        assert lock_service.acquire_checkout_lock(7, "token-a") is True
        assert lock_service.acquire_checkout_lock(8, "token-b") is True

    def test_release_requires_owner_token(self, lock_service, fake_redis):
        lock_service.acquire_checkout_lock(7, "token-a")

        assert lock_service.release_checkout_lock(7, "token-b") is False
        assert fake_redis.store == {"checkout:7:lock": "token-a"}

        assert lock_service.release_checkout_lock(7, "token-a") is True
        assert fake_redis.store == {}

    def test_acquire_after_release(self, lock_service):
        lock_service.acquire_checkout_lock(7, "token-a")
        lock_service.release_checkout_lock(7, "token-a")

        assert lock_service.acquire_checkout_lock(7, "token-b") is True

    def test_tokens_are_unique(self):
        assert LockService.new_token() != LockService.new_token()

    def test_transient_redis_error_is_retried(self, fake_redis):
        flaky = FlakyRedis(fake_redis)
        service = LockService(client=flaky)

        assert service.acquire_checkout_lock(7, "token-a") is True
        assert flaky.calls == 2
