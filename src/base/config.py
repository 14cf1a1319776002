"""Конфигурация приложения."""

from decimal import Decimal
from enum import Enum
from typing import List, Optional

from pydantic_settings import BaseSettings


class OrderStatus(Enum):
    """Статусы заказа."""

    PENDING = "pending"
    PAID = "paid"
    CANCELLED = "cancelled"


class Settings(BaseSettings):
    """Настройки приложения."""

    # Database
    db_host: str = "localhost"
    db_port: int = 5432
    db_name: str = "jersey_store"
    db_user: str = "jersey_user"
    db_password: str = "jersey_password"
    db_echo: bool = False

    # API
    allowed_hosts: str = "*"
    api_prefix: str = "/api"

    # Pricing
    pricing_rules_path: Optional[str] = None
    subscription_discount_rate: Decimal = Decimal("0.10")
    currency: str = "USD"
    locale: str = "en_US"
    estimate_rule_set: str = "standard"
    kit_config_rule_set: str = "kit_config"

    # Kit configuration catalog
    kit_config_dir: str = "data/config"

    model_config = {
        "env_file": ".env",
        "extra": "ignore"
    }


_settings = Settings()


def get_settings() -> Settings:
    """Получение настроек."""
    return _settings


def get_db_url() -> str:
    """Получение URL базы данных."""
    return f"postgresql+asyncpg://{_settings.db_user}:{_settings.db_password}@{_settings.db_host}:{_settings.db_port}/{_settings.db_name}"


def get_db_echo() -> bool:
    """Логирование SQL запросов."""
    return _settings.db_echo


def get_allowed_hosts() -> List[str]:
    """Получение разрешенных хостов."""
    if _settings.allowed_hosts == "*":
        return ["*"]
    return [host.strip() for host in _settings.allowed_hosts.split(",")]


def get_api_prefix() -> str:
    """Получение префикса API."""
    return _settings.api_prefix


def get_locale() -> str:
    """Получение локали для форматирования цен."""
    return _settings.locale


def get_estimate_rule_set() -> str:
    """Получение набора правил для расчета корзины."""
    return _settings.estimate_rule_set


def get_kit_config_rule_set() -> str:
    """Получение набора правил для конфигуратора комплектов."""
    return _settings.kit_config_rule_set


def get_kit_config_dir() -> str:
    """Получение каталога с конфигурацией комплектов."""
    return _settings.kit_config_dir
