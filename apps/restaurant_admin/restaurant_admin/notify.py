from __future__ import annotations

import logging
from collections import deque

from .schemas import Toast
from .settings import MAX_PENDING_TOASTS

logger = logging.getLogger(__name__)


class Notifier:
    """Pending toasts for the screen; the HTTP layer drains them.

    Only the newest ``maxlen`` toasts are kept.
    """

    def __init__(self, maxlen: int = MAX_PENDING_TOASTS):
        self._pending: deque[Toast] = deque(maxlen=maxlen)

    def success(self, message: str) -> None:
        logger.info(message)
        self._pending.append(Toast(kind="success", message=message))

    def error(self, message: str) -> None:
        logger.warning(message)
        self._pending.append(Toast(kind="error", message=message))

    def peek(self) -> list[Toast]:
        return list(self._pending)

    def drain(self) -> list[Toast]:
        out = list(self._pending)
        self._pending.clear()
        return out
