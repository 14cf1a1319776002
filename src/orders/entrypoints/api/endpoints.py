"""API эндпоинты для работы с заказами."""

from fastapi import APIRouter, status

from base.data_structures import ErrorResponse
from orders.domain.models import Order, OrderCreate
from orders.entrypoints.api.dependencies import OrderServiceDependency

router = APIRouter()


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=Order,
    responses={400: {"model": ErrorResponse}},
)
async def create_order(order_data: OrderCreate, service: OrderServiceDependency) -> Order:
    """Оформление заказа со снимком расчета цены."""
    return await service.create_order(order_data)


@router.get(
    "/{order_id}",
    response_model=Order,
    responses={404: {"model": ErrorResponse}},
)
async def get_order(order_id: int, service: OrderServiceDependency) -> Order:
    """Получение заказа с сохраненной детализацией цены."""
    return await service.get_order(order_id)
