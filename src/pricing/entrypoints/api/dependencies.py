"""Зависимости для API ценообразования."""

from typing import Annotated

from fastapi import Depends

from pricing.services.rules_store import PricingRulesStore, get_rules_store
from pricing.services.services import PricingService


def get_pricing_service(
    store: PricingRulesStore = Depends(get_rules_store),
) -> PricingService:
    """Получение сервиса расчета цен."""
    return PricingService(store)


PricingServiceDependency = Annotated[PricingService, Depends(get_pricing_service)]
