"""API эндпоинты для расчета цен."""

from typing import Optional

from fastapi import APIRouter, Query

from base.data_structures import ErrorResponse
from pricing.domain.models import (
    PriceEstimateRequest,
    PriceEstimateResponse,
    PricingRulesView,
)
from pricing.entrypoints.api.dependencies import PricingServiceDependency

router = APIRouter()


@router.get("/rules", response_model=PricingRulesView)
async def get_pricing_rules(
    service: PricingServiceDependency,
    rule_set: Optional[str] = Query(None, alias="ruleSet"),
) -> PricingRulesView:
    """Текущие правила ценообразования."""
    return service.get_rules_view(rule_set)


@router.post(
    "/estimate",
    response_model=PriceEstimateResponse,
    responses={400: {"model": ErrorResponse}},
)
async def estimate_price(
    request: PriceEstimateRequest,
    service: PricingServiceDependency,
) -> PriceEstimateResponse:
    """Расчет стоимости корзины с детализацией."""
    return service.estimate(request.cart, request.is_subscriber)
