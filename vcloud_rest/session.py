"""
Read-only lookup of active sessions by host
"""

from typing import Iterator, Mapping, Optional


class SessionRegistry(Mapping):
    """Host name to session token mapping populated by an earlier login.

    The registry is never written to by the library. Host names compare
    case-insensitively.
    """

    def __init__(self, sessions: Optional[Mapping[str, str]] = None):
        self._sessions = {
            host.lower(): token for host, token in (sessions or {}).items() if token
        }

    def __getitem__(self, host: str) -> str:
        return self._sessions[host.lower()]

    def __iter__(self) -> Iterator[str]:
        return iter(self._sessions)

    def __len__(self) -> int:
        return len(self._sessions)

    def token_for(self, host: Optional[str]) -> Optional[str]:
        """Session token for host, None if there is no active session"""
        if not host:
            return None
        return self._sessions.get(host.lower())
