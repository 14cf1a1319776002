"""ORM модели заказов."""

from datetime import datetime
from typing import Optional

from sqlalchemy import JSON, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column

from base.config import OrderStatus
from base.orm import Base


class OrderORM(Base):
    """Модель заказа."""

    __tablename__ = "orders"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    design_id: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    customer_email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    status: Mapped[OrderStatus] = mapped_column(default=OrderStatus.PENDING)
    items: Mapped[list] = mapped_column(JSON, nullable=False)
    total_amount: Mapped[int] = mapped_column(Integer, nullable=False)
    currency: Mapped[str] = mapped_column(String(3), default="USD")
    # Снимок расчета хранится как есть и не пересчитывается при чтении
    price_breakdown: Mapped[dict] = mapped_column(JSON, nullable=False)
    created_at: Mapped[datetime] = mapped_column(default=func.now(), nullable=False)
