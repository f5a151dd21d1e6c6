"""
Per-user critical sections.

Habit writes and streak evaluation for one user run one at a time inside this
process; the database row locks taken in the use-cases cover other processes.
Different users never share a lock.
"""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

_locks: dict[int, asyncio.Lock] = {}
# Holders + waiters per user; the lock is dropped when the last one leaves
_users: dict[int, int] = {}


@asynccontextmanager
async def user_lock(user_id: int) -> AsyncIterator[None]:
    lock = _locks.setdefault(user_id, asyncio.Lock())
    _users[user_id] = _users.get(user_id, 0) + 1
    try:
        async with lock:
            yield
    finally:
        _users[user_id] -= 1
        if _users[user_id] == 0:
            del _users[user_id]
            del _locks[user_id]
