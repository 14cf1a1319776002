"""Форматирование сумм в центах для отображения."""

import math
from decimal import ROUND_HALF_UP, Decimal
from typing import NamedTuple, Union

from base.exceptions import InvalidAmount
from pricing.domain.models import FormattedPriceBreakdown, PriceBreakdown

FREE_SHIPPING = "FREE"


class LocaleFormat(NamedTuple):
    """Разделители и положение символа валюты."""

    group: str
    decimal: str
    symbol_first: bool


LOCALES = {
    "en_US": LocaleFormat(group=",", decimal=".", symbol_first=True),
    "en_GB": LocaleFormat(group=",", decimal=".", symbol_first=True),
    "de_DE": LocaleFormat(group=".", decimal=",", symbol_first=False),
}

CURRENCY_SYMBOLS = {
    "USD": "$",
    "GBP": "£",
    "EUR": "€",
}


def _to_decimal(cents: Union[int, float, Decimal]) -> Decimal:
    if isinstance(cents, bool) or not isinstance(cents, (int, float, Decimal)):
        raise InvalidAmount(f"Amount must be numeric, got {cents!r}")
    if isinstance(cents, float) and not math.isfinite(cents):
        raise InvalidAmount(f"Amount must be finite, got {cents!r}")
    if isinstance(cents, Decimal) and not cents.is_finite():
        raise InvalidAmount(f"Amount must be finite, got {cents!r}")
    return Decimal(str(cents)) if isinstance(cents, float) else Decimal(cents)


def format_amount(
    cents: Union[int, float, Decimal],
    currency: str = "USD",
    locale: str = "en_US",
) -> str:
    """Форматирование суммы в центах: 46605 -> "$466.05"."""
    amount = _to_decimal(cents)
    fmt = LOCALES.get(locale, LOCALES["en_US"])
    symbol = CURRENCY_SYMBOLS.get(currency.upper(), f"{currency.upper()} ")

    major = (abs(amount) / 100).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    whole, fraction = f"{major:f}".split(".")
    grouped = f"{int(whole):,}".replace(",", fmt.group)
    number = f"{grouped}{fmt.decimal}{fraction}"

    if fmt.symbol_first:
        text = f"{symbol}{number}"
    else:
        text = f"{number} {symbol.strip()}"
    return f"-{text}" if amount < 0 else text


def format_breakdown(
    breakdown: PriceBreakdown, locale: str = "en_US"
) -> FormattedPriceBreakdown:
    """Строковое представление детализации цены."""
    currency = breakdown.currency

    def fmt(value: int) -> str:
        return format_amount(value, currency, locale)

    return FormattedPriceBreakdown(
        base_total=fmt(breakdown.base_total),
        tier_discount=fmt(breakdown.tier_discount_amount),
        subscription_discount=fmt(breakdown.subscription_discount_amount),
        subtotal=fmt(breakdown.subtotal_after_discounts),
        shipping=(
            FREE_SHIPPING if breakdown.shipping_cost == 0 else fmt(breakdown.shipping_cost)
        ),
        grand_total=fmt(breakdown.grand_total),
    )
