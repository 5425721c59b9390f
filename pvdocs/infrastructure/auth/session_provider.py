"""Bearer credential sources for calls to the OCR service."""
from __future__ import annotations

import threading
from typing import Optional, Protocol


class SessionProvider(Protocol):
    def get_access_token(self) -> Optional[str]:
        """Return the current bearer token, or None when there is no session."""
        ...


class StaticSessionProvider:
    """Always returns the same token (service accounts, scripts, tests)."""

    def __init__(self, access_token: Optional[str]) -> None:
        self._access_token = access_token or None

    def get_access_token(self) -> Optional[str]:
        return self._access_token


class SessionStore:
    """Holds the most recent user session token; read fresh before every call."""

    def __init__(self, access_token: Optional[str] = None) -> None:
        self._lock = threading.Lock()
        self._access_token = access_token or None

    def set_access_token(self, access_token: Optional[str]) -> None:
        with self._lock:
            self._access_token = access_token or None

    def get_access_token(self) -> Optional[str]:
        with self._lock:
            return self._access_token
