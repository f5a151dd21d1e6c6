import asyncio

import pytest

from src.services import user_locks
from src.services.user_locks import user_lock


@pytest.mark.asyncio
async def test_lock_is_released_after_use() -> None:
    async with user_lock(1):
        assert 1 in user_locks._locks

    assert user_locks._locks == {}
    assert user_locks._users == {}


@pytest.mark.asyncio
async def test_same_user_is_serialized_and_cleaned_up() -> None:
    active = 0
    max_active = 0

    async def critical_section() -> None:
        nonlocal active, max_active
        async with user_lock(7):
            active += 1
            max_active = max(max_active, active)
            await asyncio.sleep(0)
            active -= 1

    await asyncio.gather(*[critical_section() for _ in range(5)])

    assert max_active == 1
    assert user_locks._locks == {}
    assert user_locks._users == {}


@pytest.mark.asyncio
async def test_different_users_do_not_block_each_other() -> None:
    async with user_lock(1):
        await asyncio.wait_for(_enter(2), timeout=1)
    assert user_locks._locks == {}


@pytest.mark.asyncio
async def test_lock_is_dropped_when_body_raises() -> None:
    with pytest.raises(ValueError):
        async with user_lock(3):
            raise ValueError("boom")

    assert user_locks._locks == {}
    assert user_locks._users == {}


async def _enter(user_id: int) -> None:
    async with user_lock(user_id):
        pass
