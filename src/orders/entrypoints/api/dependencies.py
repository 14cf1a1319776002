"""Зависимости для API заказов."""

from typing import Annotated

from fastapi import Depends

from base.dependencies import DatabaseDependency
from orders.services.services import OrderService
from orders.services.unit_of_work import SqlAlchemyOrderUnitOfWork
from pricing.entrypoints.api.dependencies import PricingServiceDependency


async def get_order_service(
    pricing: PricingServiceDependency, db: DatabaseDependency
) -> OrderService:
    """Получение сервиса для работы с заказами."""
    uow = SqlAlchemyOrderUnitOfWork(lambda: db)
    return OrderService(uow, pricing)


OrderServiceDependency = Annotated[OrderService, Depends(get_order_service)]
