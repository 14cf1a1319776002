"""Асинхронный движок, фабрика сессий и декларативная база моделей."""

import logging

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from base.config import get_db_echo, get_db_url

logger = logging.getLogger(__name__)

Base = declarative_base()

# Подключение открывается лениво, при первом запросе к базе
engine = create_async_engine(get_db_url(), echo=get_db_echo(), pool_pre_ping=True)

async_session = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Фабрика сессий для репозиториев и UoW."""
    return async_session


async def init_db() -> None:
    """Создание таблиц заказов, если их еще нет."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database schema is up to date")
