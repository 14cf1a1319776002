"""Сервисы для работы с заказами."""

import logging

from base.exceptions import DatabaseError, DoesntExistException, OrderNotFoundError
from orders.domain.models import Order, OrderCreate
from orders.services.unit_of_work import OrderAbstractUnitOfWork
from pricing.services.services import PricingService

logger = logging.getLogger(__name__)


class OrderService:
    """Сервис оформления заказов.

    Цена заказа рассчитывается один раз при создании и сохраняется снимком.
    При чтении заказа возвращается сохраненный снимок, даже если правила
    ценообразования с тех пор изменились.
    """

    def __init__(self, uow: OrderAbstractUnitOfWork, pricing: PricingService):
        """Инициализация сервиса."""
        self._uow = uow
        self._pricing = pricing

    async def create_order(self, order_data: OrderCreate) -> Order:
        """Создание заказа со снимком расчета цены."""
        # Ошибки корзины пробрасываются до обращения к базе
        breakdown = self._pricing.calculate_breakdown(
            order_data.cart, order_data.is_subscriber
        )
        try:
            async with self._uow as uow:
                order = await uow.orders.add(order_data, breakdown)
                await uow.commit()
        except Exception as e:
            logger.error(f"Failed to create order: {e}")
            raise DatabaseError(f"Ошибка при создании заказа: {str(e)}")

        logger.info(
            f"Order {order.id} created: total={order.total_amount} {order.currency}"
        )
        return order

    async def get_order(self, order_id: int) -> Order:
        """Получение заказа с сохраненным снимком цены."""
        try:
            async with self._uow as uow:
                return await uow.orders.get(order_id)
        except DoesntExistException:
            raise OrderNotFoundError(f"Заказ с ID {order_id} не найден")
        except Exception as e:
            raise DatabaseError(f"Ошибка при получении заказа: {str(e)}")
