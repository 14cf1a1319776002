"""Модуль для единицы работы (Unit of Work) заказов."""

import abc

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from orders.adapters.repositories import (
    OrderAbstractDatabaseRepository,
    OrderSqlAlchemyDatabaseRepository,
)


class OrderAbstractUnitOfWork(abc.ABC):
    """Абстракция над атомарной операцией (единицей работы)."""

    @property
    @abc.abstractmethod
    def orders(self) -> OrderAbstractDatabaseRepository:
        """Репозиторий для работы с заказами."""

    async def __aenter__(self) -> "OrderAbstractUnitOfWork":
        """Инициализация UoW через менеджер контекста."""
        return self

    async def __aexit__(self, *args):
        """Откат незафиксированной транзакции."""
        await self.rollback()

    @abc.abstractmethod
    async def commit(self):
        """Фиксация транзакции."""

    @abc.abstractmethod
    async def rollback(self):
        """Откат транзакции."""


class SqlAlchemyOrderUnitOfWork(OrderAbstractUnitOfWork):
    """UoW для SQLAlchemy."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self.session_factory = session_factory

    @property
    def orders(self) -> OrderAbstractDatabaseRepository:
        return OrderSqlAlchemyDatabaseRepository(self._session)

    async def __aenter__(self) -> "SqlAlchemyOrderUnitOfWork":
        """Инициализация UoW через менеджер контекста."""
        self._session: AsyncSession = self.session_factory()
        return self

    async def __aexit__(self, *args) -> None:
        """Откат транзакции в случае исключения."""
        await super().__aexit__(*args)
        await self._session.close()

    async def commit(self) -> None:
        """Фиксация транзакции."""
        await self._session.commit()

    async def rollback(self) -> None:
        """Откат транзакции."""
        await self._session.rollback()
