"""Хранилище правил ценообразования.

Правила собираются один раз при старте (из настроек или JSON файла),
проходят проверку и публикуются как неизменяемый снимок. Перезагрузка
заменяет снимок целиком, поэтому параллельные расчеты никогда не видят
наполовину обновленный набор.
"""

import json
import logging
import threading
from decimal import Decimal
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping, Optional

from pydantic import ValidationError as PydanticValidationError

from base.config import Settings, get_settings
from base.exceptions import InvalidRulesConfiguration, RuleSetNotFoundError
from pricing.domain.models import PricingRules

logger = logging.getLogger(__name__)

STANDARD_RULE_SET = "standard"
KIT_CONFIG_RULE_SET = "kit_config"

# Скидки корзины: 5% от 10 шт., 10% от 20 шт., 15% от 50 шт.
STANDARD_TIERS = (
    {"threshold": 10, "rate": Decimal("0.05")},
    {"threshold": 20, "rate": Decimal("0.10")},
    {"threshold": 50, "rate": Decimal("0.15")},
)

# Скидки конфигуратора комплектов: 10% от 10 шт., 15% от 20 шт., 25% от 50 шт.
KIT_CONFIG_TIERS = (
    {"threshold": 10, "rate": Decimal("0.10")},
    {"threshold": 20, "rate": Decimal("0.15")},
    {"threshold": 50, "rate": Decimal("0.25")},
)

# Доставка: $30 до $200, $20 до $500, бесплатно от $500
SHIPPING_TIERS = (
    {"threshold": 0, "cost": 3000},
    {"threshold": 20000, "cost": 2000},
    {"threshold": 50000, "cost": 0},
)


def build_rules(data: Mapping[str, Any]) -> PricingRules:
    """Сборка и проверка набора правил из словаря."""
    try:
        return PricingRules.model_validate(data)
    except PydanticValidationError as e:
        raise InvalidRulesConfiguration(
            f"Invalid pricing rules '{data.get('name', '?')}': {e}"
        ) from e


def build_default_rule_sets(settings: Optional[Settings] = None) -> List[PricingRules]:
    """Наборы правил по умолчанию."""
    settings = settings or get_settings()
    common = {
        "subscriptionDiscountRate": settings.subscription_discount_rate,
        "shippingTiers": SHIPPING_TIERS,
        "currency": settings.currency,
    }
    return [
        build_rules({"name": STANDARD_RULE_SET, "tierDiscounts": STANDARD_TIERS, **common}),
        build_rules({"name": KIT_CONFIG_RULE_SET, "tierDiscounts": KIT_CONFIG_TIERS, **common}),
    ]


def load_rule_sets_from_file(path: str) -> List[PricingRules]:
    """Загрузка наборов правил из JSON файла вида {"ruleSets": [...]}."""
    file_path = Path(path)
    try:
        document = json.loads(file_path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise InvalidRulesConfiguration(f"Pricing rules file not found: {path}") from e
    except json.JSONDecodeError as e:
        raise InvalidRulesConfiguration(f"Pricing rules file is not valid JSON: {e}") from e

    rule_sets = document.get("ruleSets") if isinstance(document, dict) else None
    if not isinstance(rule_sets, list) or not rule_sets:
        raise InvalidRulesConfiguration(
            f"Pricing rules file {path} must contain a non-empty 'ruleSets' list"
        )
    return [build_rules(item) for item in rule_sets]


class PricingRulesStore:
    """Потокобезопасное хранилище неизменяемых наборов правил."""

    def __init__(self, rule_sets: Iterable[PricingRules]):
        """Инициализация хранилища."""
        self._lock = threading.Lock()
        self._snapshot: Mapping[str, PricingRules] = self._index(rule_sets)

    @staticmethod
    def _index(rule_sets: Iterable[PricingRules]) -> Mapping[str, PricingRules]:
        indexed: Dict[str, PricingRules] = {}
        for rules in rule_sets:
            if not isinstance(rules, PricingRules):
                raise InvalidRulesConfiguration(
                    f"Expected PricingRules, got {type(rules).__name__}"
                )
            if rules.name in indexed:
                raise InvalidRulesConfiguration(f"Duplicate rule set name: {rules.name}")
            indexed[rules.name] = rules
        if not indexed:
            raise InvalidRulesConfiguration("At least one rule set is required")
        return MappingProxyType(indexed)

    def get(self, name: str = STANDARD_RULE_SET) -> PricingRules:
        """Получение набора правил по имени."""
        rules = self._snapshot.get(name)
        if rules is None:
            raise RuleSetNotFoundError(f"Pricing rule set '{name}' not found")
        return rules

    def names(self) -> List[str]:
        """Имена доступных наборов правил."""
        return list(self._snapshot)

    def snapshot(self) -> Mapping[str, PricingRules]:
        """Текущий снимок всех наборов правил."""
        return self._snapshot

    def reload(self, rule_sets: Iterable[PricingRules]) -> None:
        """Атомарная замена всех наборов правил."""
        new_snapshot = self._index(rule_sets)
        with self._lock:
            self._snapshot = new_snapshot
        logger.info(f"Pricing rules reloaded: {', '.join(new_snapshot)}")

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "PricingRulesStore":
        """Создание хранилища из настроек приложения."""
        settings = settings or get_settings()
        if settings.pricing_rules_path:
            logger.info(f"Loading pricing rules from {settings.pricing_rules_path}")
            rule_sets = load_rule_sets_from_file(settings.pricing_rules_path)
        else:
            rule_sets = build_default_rule_sets(settings)
        return cls(rule_sets)


_store: Optional[PricingRulesStore] = None
_store_lock = threading.Lock()


def get_rules_store() -> PricingRulesStore:
    """Глобальное хранилище правил, создается при первом обращении."""
    global _store
    if _store is None:
        with _store_lock:
            if _store is None:
                _store = PricingRulesStore.from_settings()
    return _store
