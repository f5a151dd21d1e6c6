import os
import sys

import pytest
import pytest_asyncio
from tortoise import Tortoise

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)


@pytest.fixture(autouse=True)
def reset_user_locks():
    """asyncio.Lock binds to the running loop; each test gets a fresh loop."""
    from src.services import user_locks

    user_locks._locks.clear()
    user_locks._users.clear()
    yield
    user_locks._locks.clear()
    user_locks._users.clear()


@pytest_asyncio.fixture(scope="function")
async def db() -> None:
    """Lightweight in-memory DB per test."""
    await Tortoise.init(
        db_url="sqlite://:memory:",
        modules={"models": ["src.database.models"]},
        use_tz=True,
    )
    await Tortoise.generate_schemas()
    yield
    await Tortoise.close_connections()


@pytest_asyncio.fixture
async def user(db):
    """Create a test user with a level 1 mascot."""
    from src.database.models import User

    user = await User.create(
        name="Test",
        timezone="UTC",
        bmi_category="normal",
        mascot_id=2,
        mascot_name="Energetic Fox",
        mascot_stage=1,
    )
    return user
