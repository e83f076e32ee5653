"""
Database access for CLI commands.
"""

import asyncio
from collections.abc import Awaitable, Callable
from typing import TypeVar

from sqlalchemy.ext.asyncio import AsyncSession

from kashmir_tours.backend.core.database import dispose_engine, get_session_factory

T = TypeVar("T")


async def _run(operation: Callable[[AsyncSession], Awaitable[T]]) -> T:
    try:
        async with get_session_factory()() as session:
            try:
                result = await operation(session)
                await session.commit()
            except Exception:
                await session.rollback()
                raise
            return result
    finally:
        await dispose_engine()


def run_in_session(operation: Callable[[AsyncSession], Awaitable[T]]) -> T:
    """
    Run ``operation`` in one committed transaction on a fresh event loop.

    The engine is disposed afterwards because it is bound to that loop.
    """
    return asyncio.run(_run(operation))
