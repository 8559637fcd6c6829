"""
Connection registry module.

Keeps the live set of chat connections. The server adds a connection on
accept and every handler removes its own on close, while other handlers
iterate the set for broadcasts and listings.
"""

import asyncio
import threading
from typing import Awaitable, Callable, Dict, List


class ConnectionRegistry:
    """Live connections, in join order."""
    
    def __init__(self):
        # dict keeps insertion order; values unused
        self._conns: Dict[object, None] = {}
        self._lock = threading.Lock()
    
    def add(self, conn):
        with self._lock:
            self._conns[conn] = None
    
    def remove(self, conn):
        with self._lock:
            self._conns.pop(conn, None)
    
    def __contains__(self, conn) -> bool:
        with self._lock:
            return conn in self._conns
    
    def __len__(self) -> int:
        with self._lock:
            return len(self._conns)
    
    def snapshot(self) -> List[object]:
        """Return the current members."""
        with self._lock:
            return list(self._conns)
    
    def snapshot_logins(self) -> List[str]:
        """Return the login of every member, empty for unauthenticated ones."""
        with self._lock:
            return [conn.login for conn in self._conns]
    
    async def for_each(self, fn: Callable[[object], Awaitable]) -> int:
        """
        Await fn(conn) for every member, concurrently.

        Works on a snapshot; members removed after the snapshot was taken
        are skipped. Returns how many members fn was called for.
        """
        members = [conn for conn in self.snapshot() if not conn.closed]
        if members:
            await asyncio.gather(*(fn(conn) for conn in members))
        return len(members)
    
    async def close_all(self):
        """Close every member connection."""
        for conn in self.snapshot():
            await conn.close()
