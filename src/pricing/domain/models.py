"""Доменные модели ценообразования.

Все денежные значения хранятся в центах (целые числа), ставки скидок хранятся
как Decimal в диапазоне [0, 1].
"""

from decimal import Decimal
from typing import Annotated, List, Optional, Tuple

from pydantic import AliasChoices, Field, PlainSerializer, model_validator

from base.data_structures import CamelModel, FrozenCamelModel
from base.exceptions import InvalidRulesConfiguration, NegativeSubtotal

# Ставка сериализуется в JSON числом, а не строкой
Rate = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


def format_percentage(rate: Decimal) -> str:
    """Представление ставки в процентах: Decimal("0.05") -> "5%"."""
    pct = (Decimal(rate) * 100).normalize()
    return f"{pct:f}%"


class CartLineItem(CamelModel):
    """Позиция корзины."""

    product_id: str
    product_type: str = "jersey"
    # Старые клиенты присылают цену в поле basePrice
    unit_price: int = Field(
        validation_alias=AliasChoices("unitPrice", "basePrice", "unit_price"),
        serialization_alias="unitPrice",
    )
    quantity: int


class TierDiscount(FrozenCamelModel):
    """Порог количественной скидки."""

    threshold: int
    rate: Rate

    @property
    def label(self) -> str:
        return f"{format_percentage(self.rate)} off {self.threshold}+ items"


class ShippingTier(FrozenCamelModel):
    """Порог стоимости доставки (порог и цена в центах)."""

    threshold: int
    cost: int


def _check_ascending(thresholds: List[int], what: str) -> None:
    for threshold in thresholds:
        if threshold < 0:
            raise InvalidRulesConfiguration(
                f"{what} threshold must be non-negative, got {threshold}"
            )
    for prev, curr in zip(thresholds, thresholds[1:]):
        if curr <= prev:
            raise InvalidRulesConfiguration(
                f"{what} thresholds must be strictly ascending: {prev} then {curr}"
            )


def _check_rate(rate: Decimal, what: str) -> None:
    if not rate.is_finite() or rate < 0 or rate > 1:
        raise InvalidRulesConfiguration(f"{what} rate must be in [0, 1], got {rate}")


def validate_rules(rules: "PricingRules") -> None:
    """Проверка инвариантов набора правил."""
    _check_ascending([t.threshold for t in rules.tier_discounts], "Tier discount")
    for tier in rules.tier_discounts:
        _check_rate(tier.rate, f"Tier discount {tier.threshold}")
    _check_rate(rules.subscription_discount_rate, "Subscription discount")
    if not rules.shipping_tiers:
        raise InvalidRulesConfiguration("At least one shipping tier is required")
    _check_ascending([t.threshold for t in rules.shipping_tiers], "Shipping")
    for tier in rules.shipping_tiers:
        if tier.cost < 0:
            raise InvalidRulesConfiguration(
                f"Shipping cost must be non-negative, got {tier.cost}"
            )


class PricingRules(FrozenCamelModel):
    """Неизменяемый набор правил ценообразования."""

    name: str = "standard"
    tier_discounts: Tuple[TierDiscount, ...] = ()
    subscription_discount_rate: Rate = Decimal("0")
    shipping_tiers: Tuple[ShippingTier, ...]
    currency: str = "USD"

    @model_validator(mode="after")
    def check_invariants(self) -> "PricingRules":
        validate_rules(self)
        return self


class PriceBreakdown(FrozenCamelModel):
    """Детализация расчета цены."""

    base_total: int
    total_quantity: int
    tier_discount_rate: Rate
    tier_discount_applied: str
    tier_discount_amount: int
    is_subscriber: bool
    subscription_discount_rate: Rate
    subscription_discount_applied: str
    subscription_discount_amount: int
    subtotal_after_discounts: int
    shipping_cost: int
    grand_total: int
    currency: str = "USD"
    rule_set: str = "standard"

    @model_validator(mode="after")
    def check_non_negative_subtotal(self) -> "PriceBreakdown":
        if self.subtotal_after_discounts < 0:
            raise NegativeSubtotal(
                f"Subtotal after discounts is negative: {self.subtotal_after_discounts}"
            )
        return self


class FormattedPriceBreakdown(FrozenCamelModel):
    """Детализация цены в виде строк для отображения."""

    base_total: str
    tier_discount: str
    subscription_discount: str
    subtotal: str
    shipping: str
    grand_total: str


class PriceEstimateRequest(CamelModel):
    """Запрос на расчет стоимости корзины."""

    cart: List[CartLineItem]
    is_subscriber: bool = False


class PriceEstimateResponse(CamelModel):
    """Ответ расчета стоимости корзины."""

    success: bool
    breakdown: Optional[PriceBreakdown] = None
    formatted: Optional[FormattedPriceBreakdown] = None


class TierDiscountView(CamelModel):
    """Порог скидки для отображения."""

    threshold: int
    rate: Rate
    discount: str
    label: str


class PricingRulesView(CamelModel):
    """Текущие правила ценообразования для отображения."""

    name: str
    tier_discounts: List[TierDiscountView]
    subscription_discount_rate: Rate
    subscription_discount: str
    shipping: List[ShippingTier]
    currency: str

    @classmethod
    def from_rules(cls, rules: PricingRules) -> "PricingRulesView":
        return cls(
            name=rules.name,
            tier_discounts=[
                TierDiscountView(
                    threshold=tier.threshold,
                    rate=tier.rate,
                    discount=format_percentage(tier.rate),
                    label=tier.label,
                )
                for tier in rules.tier_discounts
            ],
            subscription_discount_rate=rules.subscription_discount_rate,
            subscription_discount=format_percentage(rules.subscription_discount_rate),
            shipping=list(rules.shipping_tiers),
            currency=rules.currency,
        )
