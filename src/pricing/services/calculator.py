"""Калькулятор цены корзины.

Порядок этапов фиксирован: базовая сумма -> количественная скидка ->
скидка подписчика -> доставка -> итог. Каждая сумма округляется до цента
(ROUND_HALF_UP) сразу на своем этапе, поэтому строки детализации в сумме
дают ровно итоговую цену.
"""

import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional, Sequence

from base.exceptions import InvalidCartItem, InvalidRules, InvalidRulesConfiguration
from pricing.domain.models import (
    CartLineItem,
    PriceBreakdown,
    PricingRules,
    ShippingTier,
    TierDiscount,
    format_percentage,
    validate_rules,
)

logger = logging.getLogger(__name__)

NO_DISCOUNT = "None"


def apply_rate(amount: int, rate: Decimal) -> int:
    """Сумма скидки в центах, округленная до цента по правилу half-up."""
    return int((Decimal(amount) * Decimal(rate)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def select_tier(tiers: Sequence[TierDiscount], quantity: int) -> Optional[TierDiscount]:
    """Порог с наибольшим значением, не превышающим количество."""
    selected = None
    for tier in tiers:
        if tier.threshold <= quantity:
            selected = tier
        else:
            break
    return selected


def select_shipping_tier(tiers: Sequence[ShippingTier], subtotal: int) -> ShippingTier:
    """Тариф доставки для суммы после скидок.

    Если сумма меньше всех порогов, используется тариф с наименьшим порогом.
    """
    selected = tiers[0]
    for tier in tiers:
        if tier.threshold <= subtotal:
            selected = tier
        else:
            break
    return selected


def validate_cart(cart: Sequence[CartLineItem]) -> None:
    """Проверка позиций корзины."""
    for index, item in enumerate(cart):
        if isinstance(item.unit_price, bool) or not isinstance(item.unit_price, int):
            raise InvalidCartItem(
                "unit_price",
                f"Cart item {index} ({item.product_id}): unit price must be an integer amount of cents",
                index,
            )
        if item.unit_price < 0:
            raise InvalidCartItem(
                "unit_price",
                f"Cart item {index} ({item.product_id}): unit price must be non-negative, got {item.unit_price}",
                index,
            )
        if isinstance(item.quantity, bool) or not isinstance(item.quantity, int) or item.quantity < 1:
            raise InvalidCartItem(
                "quantity",
                f"Cart item {index} ({item.product_id}): quantity must be a positive integer, got {item.quantity}",
                index,
            )


def _check_rules(rules: PricingRules) -> None:
    if rules is None:
        raise InvalidRules("Pricing rules are required")
    if rules.tier_discounts is None:
        raise InvalidRules("Pricing rules must define a tier discount list")
    if rules.shipping_tiers is None:
        raise InvalidRules("Pricing rules must define shipping tiers")
    try:
        validate_rules(rules)
    except InvalidRulesConfiguration as e:
        raise InvalidRules(str(e)) from e


def calculate(
    cart: Sequence[CartLineItem],
    rules: PricingRules,
    is_subscriber: bool = False,
) -> PriceBreakdown:
    """Расчет детализации цены корзины.

    Args:
        cart: Позиции корзины, цены в центах. Может быть пустой.
        rules: Набор правил ценообразования.
        is_subscriber: Признак подписчика Pro.

    Returns:
        PriceBreakdown с базовой суммой, скидками, доставкой и итогом.

    Raises:
        InvalidCartItem: Отрицательная цена или неположительное количество.
        InvalidRules: Правила не заданы или нарушают инварианты.
    """
    validate_cart(cart)
    _check_rules(rules)

    total_quantity = sum(item.quantity for item in cart)
    base_total = sum(item.unit_price * item.quantity for item in cart)

    tier = select_tier(rules.tier_discounts, total_quantity)
    if tier is None:
        tier_rate = Decimal("0")
        tier_applied = NO_DISCOUNT
    else:
        tier_rate = tier.rate
        tier_applied = tier.label
    tier_discount_amount = apply_rate(base_total, tier_rate)

    subtotal_after_tier = base_total - tier_discount_amount
    if is_subscriber:
        subscription_rate = rules.subscription_discount_rate
        subscription_applied = (
            f"{format_percentage(subscription_rate)} Pro subscriber discount"
        )
    else:
        subscription_rate = Decimal("0")
        subscription_applied = NO_DISCOUNT
    subscription_discount_amount = apply_rate(subtotal_after_tier, subscription_rate)

    subtotal = subtotal_after_tier - subscription_discount_amount
    # Не срабатывает: ставки уже проверены в _check_rules и лежат в [0, 1]
    if subtotal < 0:
        logger.error(
            f"Negative subtotal {subtotal} for rule set '{rules.name}': "
            f"base={base_total}, tier={tier_discount_amount}, "
            f"subscription={subscription_discount_amount}; clamping to 0"
        )
        subtotal = 0

    shipping_cost = select_shipping_tier(rules.shipping_tiers, subtotal).cost

    return PriceBreakdown(
        base_total=base_total,
        total_quantity=total_quantity,
        tier_discount_rate=tier_rate,
        tier_discount_applied=tier_applied,
        tier_discount_amount=tier_discount_amount,
        is_subscriber=bool(is_subscriber),
        subscription_discount_rate=subscription_rate,
        subscription_discount_applied=subscription_applied,
        subscription_discount_amount=subscription_discount_amount,
        subtotal_after_discounts=subtotal,
        shipping_cost=shipping_cost,
        grand_total=subtotal + shipping_cost,
        currency=rules.currency,
        rule_set=rules.name,
    )
