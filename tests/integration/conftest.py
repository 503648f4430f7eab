"""Fixtures shared by the integration suites.

Integration tests run against the PostgreSQL database configured through
``DATABASE__URL`` with migrations applied (``scripts/run_migrations.py``).
Each test module defines its own ``integration_env`` fixture.
"""

import pytest
import pytest_asyncio
from sqlalchemy import text
from sqlalchemy.exc import DBAPIError
from sqlalchemy.ext.asyncio import AsyncSession


@pytest_asyncio.fixture(autouse=True)
async def clean_database(integration_env):
    """Empty the account store before each test."""
    session = await integration_env.get(AsyncSession)

    try:
        await session.execute(text("TRUNCATE TABLE accounts, profiles CASCADE"))
    except (OSError, DBAPIError) as e:
        pytest.skip(f"PostgreSQL not available: {e}")
    await session.commit()

    yield
    # Next test truncates again
