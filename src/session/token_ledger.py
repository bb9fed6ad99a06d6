"""
Token Ledger

Rendezvous point between request handlers that mint a session token and the
boundary middleware that turns it into a Set-Cookie header. Handlers never see
the transport response, so they deliver the token under their request id and
the middleware awaits it under the same id.

Every mutation is a single dict operation performed without yielding to the
event loop, which makes resolve-or-register atomic per key. Running this from
several OS threads would need a lock.
"""

import asyncio
import logging
from typing import Optional

logger = logging.getLogger('menu.session.token_ledger')

DEFAULT_RETENTION_SECONDS = 5.0


class TokenLedger:
    """
    Maps a request id to either a delivered token or a pending wait.

    A request id is never both pending and delivered. Entries are removed when
    consumed, when a wait times out, or when the retention window elapses.
    """

    def __init__(self, retention_seconds: float = DEFAULT_RETENTION_SECONDS):
        self.retention_seconds = retention_seconds
        self._delivered: dict[str, str] = {}
        self._pending: dict[str, asyncio.Future] = {}

    def deliver(self, request_id: str, token: str) -> None:
        """
        Hand over a token for request_id.

        Resolves a waiting consumer immediately when there is one, otherwise
        stores the token until it is awaited. Residual entries are dropped
        after the retention window either way.
        """
        waiter = self._pending.pop(request_id, None)
        if waiter is not None and not waiter.done():
            waiter.set_result(token)
            logger.debug(f"Token delivered to waiting request {request_id}")
        else:
            self._delivered[request_id] = token
            logger.debug(f"Token stored for request {request_id}")

        asyncio.get_running_loop().call_later(self.retention_seconds, self._expire, request_id)

    async def await_token(self, request_id: str, timeout: float) -> Optional[str]:
        """
        Wait up to timeout seconds for the token of request_id.

        Returns:
            The token, or None if nothing was delivered in time.
        """
        if request_id in self._delivered:
            return self._delivered.pop(request_id)

        waiter = self._pending.get(request_id)
        if waiter is None:
            waiter = asyncio.get_running_loop().create_future()
            self._pending[request_id] = waiter

        try:
            return await asyncio.wait_for(asyncio.shield(waiter), timeout)
        except asyncio.TimeoutError:
            logger.debug(f"No token delivered for request {request_id} within {timeout}s")
            return None
        finally:
            if self._pending.get(request_id) is waiter:
                del self._pending[request_id]

    def _expire(self, request_id: str) -> None:
        self._delivered.pop(request_id, None)
        self._pending.pop(request_id, None)

    def get_stats(self) -> dict:
        """
        Get statistics about ledger state.

        Returns:
            Dictionary with pending and delivered counts
        """
        return {
            "pending": len(self._pending),
            "delivered": len(self._delivered),
        }
