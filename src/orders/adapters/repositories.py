"""Репозитории для работы с заказами."""

from abc import ABC, abstractmethod

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from base.exceptions import DoesntExistException
from orders.domain.models import Order, OrderCreate
from pricing.domain.models import CartLineItem, PriceBreakdown

from .orm import OrderORM


class OrderAbstractDatabaseRepository(ABC):
    """Абстракция репозитория для заказов."""

    @abstractmethod
    async def get(self, order_id: int) -> Order:
        """Получение заказа по ID."""

    @abstractmethod
    async def add(self, order_data: OrderCreate, breakdown: PriceBreakdown) -> Order:
        """Добавление заказа со снимком расчета."""


def order_from_orm(order_orm: OrderORM) -> Order:
    """Преобразование ORM модели в доменную."""
    return Order(
        id=order_orm.id,
        design_id=order_orm.design_id,
        customer_email=order_orm.customer_email,
        status=order_orm.status,
        items=[CartLineItem.model_validate(item) for item in order_orm.items],
        total_amount=order_orm.total_amount,
        currency=order_orm.currency,
        price_breakdown=PriceBreakdown.model_validate(order_orm.price_breakdown),
        created_at=order_orm.created_at,
    )


class OrderSqlAlchemyDatabaseRepository(OrderAbstractDatabaseRepository):
    """Репозиторий SQLAlchemy для заказов."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get(self, order_id: int) -> Order:
        """Получение заказа по ID."""
        stmt = select(OrderORM).filter_by(id=order_id)
        result = await self.session.execute(stmt)
        order_orm = result.scalar_one_or_none()

        if not order_orm:
            raise DoesntExistException("Order not found")

        return order_from_orm(order_orm)

    async def add(self, order_data: OrderCreate, breakdown: PriceBreakdown) -> Order:
        """Добавление заказа со снимком расчета."""
        order_orm = OrderORM(
            design_id=order_data.design_id,
            customer_email=order_data.customer_email,
            items=[
                item.model_dump(mode="json", by_alias=True) for item in order_data.cart
            ],
            total_amount=breakdown.grand_total,
            currency=breakdown.currency,
            price_breakdown=breakdown.model_dump(mode="json", by_alias=True),
        )

        self.session.add(order_orm)
        await self.session.flush()
        await self.session.refresh(order_orm)

        return order_from_orm(order_orm)
