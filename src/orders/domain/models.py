"""Доменные модели заказов."""

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from base.config import OrderStatus
from base.data_structures import CamelModel
from pricing.domain.models import CartLineItem, PriceBreakdown


class OrderCreate(CamelModel):
    """DTO для создания заказа."""

    design_id: Optional[int] = None
    customer_email: Optional[str] = None
    cart: List[CartLineItem] = Field(min_length=1)
    is_subscriber: bool = False


class Order(CamelModel):
    """Заказ со снимком расчета цены на момент оформления."""

    id: int
    design_id: Optional[int] = None
    customer_email: Optional[str] = None
    status: OrderStatus
    items: List[CartLineItem]
    total_amount: int
    currency: str
    price_breakdown: PriceBreakdown
    created_at: datetime
