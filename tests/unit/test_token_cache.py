"""
Unit tests for the bearer token cache

Time is driven through an injected clock so expiry is deterministic.
"""
import threading
import time

from models import CachedToken
from utils.token_cache import TokenCache, clear_token_caches, get_token_cache


class FakeClock:
    def __init__(self, now=1000.0):
        self.now = now

    def __call__(self):
        return self.now


class CountingLogin:
    def __init__(self, token="tok-1", expires_in=3600, delay=0.0):
        self.calls = 0
        self.token = token
        self.expires_in = expires_in
        self.delay = delay
        self._lock = threading.Lock()

    def __call__(self):
        with self._lock:
            self.calls += 1
            call = self.calls
        if self.delay:
            time.sleep(self.delay)
        return f"{self.token}-{call}", self.expires_in


class TestCachedToken:
    def test_fresh_until_margin(self):
        token = CachedToken(token="t", expires_at=4600, refresh_margin=300)

        assert token.is_fresh(4299) is True
        assert token.is_fresh(4300) is False


class TestTokenCache:
    def test_first_call_logs_in(self):
        login = CountingLogin()
        cache = TokenCache(login, clock=FakeClock())

        assert cache.get_token() == "tok-1-1"
        assert login.calls == 1
        assert cache.cached.expires_at == 4600

    def test_ten_minutes_left_reuses_token(self):
        """A token with more life than the margin is never refreshed"""
        clock = FakeClock()
        login = CountingLogin()
        cache = TokenCache(login, refresh_margin=300, clock=clock)
        cache.get_token()

        clock.now += 3600 - 600
        assert cache.get_token() == "tok-1-1"
        assert login.calls == 1

    def test_token_inside_margin_is_refreshed(self):
        clock = FakeClock()
        login = CountingLogin()
        cache = TokenCache(login, refresh_margin=300, clock=clock)
        cache.get_token()

        clock.now += 3600 - 30
        assert cache.get_token() == "tok-1-2"
        assert login.calls == 2

    def test_concurrent_refresh_logs_in_once(self):
        """Fifty callers hitting a nearly expired token share one login"""
        clock = FakeClock()
        login = CountingLogin(delay=0.05)
        cache = TokenCache(login, refresh_margin=300, clock=clock)
        cache.get_token()
        clock.now += 3600 - 30

        barrier = threading.Barrier(50)
        tokens = []
        tokens_lock = threading.Lock()

        def worker():
            barrier.wait()
            token = cache.get_token()
            with tokens_lock:
                tokens.append(token)

        threads = [threading.Thread(target=worker) for _ in range(50)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert login.calls == 2
        assert len(tokens) == 50
        assert set(tokens) == {"tok-1-2"}

    def test_short_lived_token_is_shared_by_concurrent_callers(self):
        """A token living less than the margin is still fetched once for fifty callers"""
        clock = FakeClock()
        login = CountingLogin(expires_in=200, delay=0.05)
        cache = TokenCache(login, refresh_margin=300, clock=clock)

        barrier = threading.Barrier(50)
        tokens = []
        tokens_lock = threading.Lock()

        def worker():
            barrier.wait()
            token = cache.get_token()
            with tokens_lock:
                tokens.append(token)

        threads = [threading.Thread(target=worker) for _ in range(50)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert login.calls == 1
        assert set(tokens) == {"tok-1-1"}
        assert cache.cached.refresh_margin == 100

    def test_short_lived_token_refreshes_at_half_life(self):
        clock = FakeClock()
        login = CountingLogin(expires_in=200)
        cache = TokenCache(login, refresh_margin=300, clock=clock)
        cache.get_token()

        clock.now += 99
        assert cache.get_token() == "tok-1-1"
        clock.now += 1
        assert cache.get_token() == "tok-1-2"

    def test_failed_login_returns_none_and_retries(self):
        outcomes = [None, ("tok-ok", 3600)]
        cache = TokenCache(lambda: outcomes.pop(0), clock=FakeClock())

        assert cache.get_token() is None
        assert cache.cached is None
        assert cache.get_token() == "tok-ok"

    def test_login_exception_is_absorbed(self):
        def login():
            raise RuntimeError("connection reset")

        cache = TokenCache(login, clock=FakeClock())
        assert cache.get_token() is None

    def test_invalidate_forces_login(self):
        login = CountingLogin()
        cache = TokenCache(login, clock=FakeClock())
        cache.get_token()

        cache.invalidate()

        assert cache.get_token() == "tok-1-2"
        assert login.calls == 2


class TestCacheRegistry:
    def test_same_key_shares_cache(self):
        first = get_token_cache("navlungo:a:key", CountingLogin())
        second = get_token_cache("navlungo:a:key", CountingLogin())

        assert first is second

    def test_different_keys_are_isolated(self):
        first = get_token_cache("navlungo:a:key", CountingLogin())
        second = get_token_cache("navlungo:b:key", CountingLogin())

        assert first is not second

    def test_clear_drops_caches(self):
        first = get_token_cache("navlungo:a:key", CountingLogin())
        clear_token_caches()

        assert get_token_cache("navlungo:a:key", CountingLogin()) is not first
