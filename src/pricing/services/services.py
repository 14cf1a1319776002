"""Сервис расчета цен для API."""

import logging
from typing import Optional, Sequence

from base.config import get_estimate_rule_set, get_locale
from pricing.domain.models import (
    CartLineItem,
    PriceBreakdown,
    PriceEstimateResponse,
    PricingRulesView,
)
from pricing.services.calculator import calculate
from pricing.services.formatter import format_breakdown
from pricing.services.rules_store import PricingRulesStore

logger = logging.getLogger(__name__)


class PricingService:
    """Сервис для расчета стоимости корзины по текущим правилам."""

    def __init__(
        self,
        store: PricingRulesStore,
        rule_set: Optional[str] = None,
        locale: Optional[str] = None,
    ):
        """Инициализация сервиса."""
        self.store = store
        self.rule_set = rule_set or get_estimate_rule_set()
        self.locale = locale or get_locale()

    def get_rules_view(self, rule_set: Optional[str] = None) -> PricingRulesView:
        """Получение правил для отображения."""
        return PricingRulesView.from_rules(self.store.get(rule_set or self.rule_set))

    def calculate_breakdown(
        self, cart: Sequence[CartLineItem], is_subscriber: bool = False
    ) -> PriceBreakdown:
        """Расчет детализации цены по текущему снимку правил."""
        rules = self.store.get(self.rule_set)
        return calculate(cart, rules, is_subscriber)

    def estimate(
        self, cart: Sequence[CartLineItem], is_subscriber: bool = False
    ) -> PriceEstimateResponse:
        """Расчет стоимости корзины с форматированием."""
        breakdown = self.calculate_breakdown(cart, is_subscriber)
        logger.info(
            f"Price estimate: {len(cart)} lines, qty={breakdown.total_quantity}, "
            f"subscriber={is_subscriber}, total={breakdown.grand_total}"
        )
        return PriceEstimateResponse(
            success=True,
            breakdown=breakdown,
            formatted=format_breakdown(breakdown, self.locale),
        )
