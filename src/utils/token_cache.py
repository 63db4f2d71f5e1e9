"""
Bearer token cache for carriers that authenticate with a login exchange.

One cache exists per carrier credential key. Refresh is single-flight: under
concurrent callers only one of them performs the login while the others wait
on the lock and then reuse the stored token.
"""
import logging as log
import threading
import time
from typing import Callable, Dict, Optional, Tuple

from models import CachedToken

LoginResult = Optional[Tuple[str, int]]


class TokenCache:
    def __init__(
        self,
        login: Callable[[], LoginResult],
        refresh_margin: int = 300,
        clock: Callable[[], float] = time.time,
    ):
        self._login = login
        self._refresh_margin = refresh_margin
        self._clock = clock
        self._lock = threading.Lock()
        self._token: Optional[CachedToken] = None

    @property
    def cached(self) -> Optional[CachedToken]:
        return self._token

    def get_token(self) -> Optional[str]:
        """Return a token that will not expire mid-request, or None."""
        token = self._token
        if token and token.is_fresh(self._clock()):
            return token.token

        with self._lock:
            # another caller may have refreshed while we waited
            token = self._token
            if token and token.is_fresh(self._clock()):
                return token.token

            try:
                result = self._login()
            except Exception as e:
                log.warning(f"Token login raised: {str(e)}", exc_info=True)
                result = None

            if not result:
                self._token = None
                return None

            value, expires_in = result
            expires_in = int(expires_in)
            # the margin never exceeds half of the token lifetime
            margin = min(self._refresh_margin, max(expires_in // 2, 0))
            self._token = CachedToken(
                token=value,
                expires_at=self._clock() + expires_in,
                refresh_margin=margin,
            )
            return value

    def invalidate(self) -> None:
        with self._lock:
            self._token = None


_caches: Dict[str, TokenCache] = {}
_caches_lock = threading.Lock()


def get_token_cache(
    key: str, login: Callable[[], LoginResult], refresh_margin: int = 300
) -> TokenCache:
    """Return the process-wide cache for a credential key, creating it once."""
    with _caches_lock:
        cache = _caches.get(key)
        if cache is None:
            cache = TokenCache(login=login, refresh_margin=refresh_margin)
            _caches[key] = cache
        return cache


def clear_token_caches() -> None:
    with _caches_lock:
        _caches.clear()
