import asyncio
import logging

logger = logging.getLogger('menu.session.logout_ledger')

DEFAULT_RETENTION_SECONDS = 5.0


class LogoutLedger:
    """
    Request ids whose response must clear the session cookie.

    Flags are never cleared by readers; each one expires on its own after the
    retention window.
    """

    def __init__(self, retention_seconds: float = DEFAULT_RETENTION_SECONDS):
        self.retention_seconds = retention_seconds
        self._flagged: set[str] = set()

    def mark_for_logout(self, request_id: str) -> None:
        self._flagged.add(request_id)
        asyncio.get_running_loop().call_later(self.retention_seconds, self._flagged.discard, request_id)
        logger.info(f"Logout requested for request {request_id}")

    def is_marked_for_logout(self, request_id: str) -> bool:
        return request_id in self._flagged

    def get_stats(self) -> dict:
        return {"flagged": len(self._flagged)}
