"""Конфигурация для тестов."""

import json
import os
import shutil
from datetime import datetime, timezone
from decimal import Decimal
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

# Устанавливаем тестовые переменные окружения
os.environ.setdefault("DB_USER", "test")
os.environ.setdefault("DB_PASSWORD", "test")
os.environ.setdefault("DB_NAME", "test_db")
os.environ.setdefault("DB_HOST", "localhost")
os.environ.setdefault("DB_PORT", "5432")
os.environ.setdefault("SUBSCRIPTION_DISCOUNT_RATE", "0.10")

from base.config import OrderStatus
from base.exceptions import DoesntExistException
from base.orm import Base
from kits.adapters.catalog import load_catalog
from kits.entrypoints.api.dependencies import get_kit_config_service
from kits.services.services import KitConfigService
from orders.adapters.orm import OrderORM  # noqa: F401
from orders.adapters.repositories import OrderAbstractDatabaseRepository
from orders.domain.models import Order
from orders.entrypoints.api.dependencies import get_order_service
from orders.services.services import OrderService
from orders.services.unit_of_work import OrderAbstractUnitOfWork
from pricing.domain.models import CartLineItem, PricingRules
from pricing.services.rules_store import (
    PricingRulesStore,
    build_default_rule_sets,
    build_rules,
    get_rules_store,
)
from pricing.services.services import PricingService

DATABASE_URL = "sqlite:///:memory:"
CATALOG_DIR = Path(__file__).resolve().parents[2] / "data" / "config"

SHIPPING_TIERS = [
    {"threshold": 0, "cost": 3000},
    {"threshold": 20000, "cost": 2000},
    {"threshold": 50000, "cost": 0},
]


def make_item(unit_price: int, quantity: int, product_id: str = "PFJS01") -> CartLineItem:
    """Позиция корзины для тестов."""
    return CartLineItem(
        product_id=product_id,
        product_type="jersey",
        unit_price=unit_price,
        quantity=quantity,
    )


@pytest.fixture
def standard_rules() -> PricingRules:
    """Стандартные правила: 5/10/15%, подписка 10%, доставка 30/20/0."""
    return build_rules(
        {
            "name": "standard",
            "tierDiscounts": [
                {"threshold": 10, "rate": Decimal("0.05")},
                {"threshold": 20, "rate": Decimal("0.10")},
                {"threshold": 50, "rate": Decimal("0.15")},
            ],
            "subscriptionDiscountRate": Decimal("0.10"),
            "shippingTiers": SHIPPING_TIERS,
        }
    )


@pytest.fixture
def example_rules() -> PricingRules:
    """Правила из сквозного примера: 5% от 10 шт., подписка 15%."""
    return build_rules(
        {
            "name": "standard",
            "tierDiscounts": [{"threshold": 10, "rate": Decimal("0.05")}],
            "subscriptionDiscountRate": Decimal("0.15"),
            "shippingTiers": SHIPPING_TIERS,
        }
    )


@pytest.fixture
def rules_store() -> PricingRulesStore:
    """Хранилище с наборами правил по умолчанию."""
    return PricingRulesStore(build_default_rule_sets())


@pytest.fixture
def catalog_dir(tmp_path):
    """Копия тестового каталога комплектов во временной папке."""
    target = tmp_path / "config"
    target.mkdir()
    for name in ("product-schema.json", "kit-mappings.json", "sku-prices.csv"):
        shutil.copy(CATALOG_DIR / name, target / name)
    return target


@pytest.fixture
def catalog(catalog_dir):
    """Загруженный каталог комплектов."""
    return load_catalog(str(catalog_dir))


@pytest.fixture
def kit_service(catalog, rules_store) -> KitConfigService:
    """Сервис конфигуратора комплектов на тестовом каталоге."""
    return KitConfigService(lambda: catalog, rules_store, rule_set="kit_config")


class FakeOrderRepository(OrderAbstractDatabaseRepository):
    """Репозиторий заказов в памяти."""

    def __init__(self):
        self.orders = {}

    async def get(self, order_id: int) -> Order:
        if order_id not in self.orders:
            raise DoesntExistException("Order not found")
        return self.orders[order_id]

    async def add(self, order_data, breakdown) -> Order:
        order = Order(
            id=len(self.orders) + 1,
            design_id=order_data.design_id,
            customer_email=order_data.customer_email,
            status=OrderStatus.PENDING,
            items=order_data.cart,
            total_amount=breakdown.grand_total,
            currency=breakdown.currency,
            price_breakdown=breakdown,
            created_at=datetime.now(timezone.utc),
        )
        self.orders[order.id] = order
        return order


class FakeOrderUnitOfWork(OrderAbstractUnitOfWork):
    """UoW в памяти."""

    def __init__(self):
        self._orders = FakeOrderRepository()
        self.committed = False

    @property
    def orders(self) -> FakeOrderRepository:
        return self._orders

    async def commit(self):
        self.committed = True

    async def rollback(self):
        pass


@pytest.fixture
def order_uow() -> FakeOrderUnitOfWork:
    """UoW заказов в памяти."""
    return FakeOrderUnitOfWork()


@pytest.fixture
def client(rules_store, kit_service, order_uow):
    """Тестовый клиент с замоканными зависимостями."""
    from main import app

    app.dependency_overrides[get_rules_store] = lambda: rules_store
    app.dependency_overrides[get_kit_config_service] = lambda: kit_service
    app.dependency_overrides[get_order_service] = lambda: OrderService(
        order_uow, PricingService(rules_store, rule_set="standard", locale="en_US")
    )
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def rules_file(tmp_path):
    """JSON файл с наборами правил."""
    path = tmp_path / "pricing-rules.json"
    path.write_text(
        json.dumps(
            {
                "ruleSets": [
                    {
                        "name": "standard",
                        "tierDiscounts": [{"threshold": 5, "rate": "0.20"}],
                        "subscriptionDiscountRate": "0.15",
                        "shippingTiers": SHIPPING_TIERS,
                    }
                ]
            }
        ),
        encoding="utf-8",
    )
    return path


@pytest.fixture(scope="function")
def session():
    """Создает тестовую сессию базы данных."""
    engine = create_engine(DATABASE_URL, echo=False)
    Base.metadata.create_all(bind=engine)

    TestingSessionLocal = sessionmaker(bind=engine)
    db = TestingSessionLocal()
    yield db
    db.close()
