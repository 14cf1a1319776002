"""Общие зависимости FastAPI."""

from typing import Annotated, AsyncIterator

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from base.orm import get_session_factory


async def get_db() -> AsyncIterator[AsyncSession]:
    """Сессия на время запроса; незафиксированные изменения откатываются."""
    async with get_session_factory()() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise


DatabaseDependency = Annotated[AsyncSession, Depends(get_db)]
