"""Сервис конфигурации комплектов и расчета их стоимости по SKU."""

import logging
from decimal import Decimal
from typing import Callable, Dict, List, Optional

from base.config import get_kit_config_rule_set
from base.exceptions import InvalidCartItem, KitNotFoundError
from kits.adapters.catalog import KitCatalog
from kits.domain.models import (
    KitConfigRequest,
    KitConfigResponse,
    KitRecommendation,
    KitSchemaView,
    SportSchema,
)
from pricing.services.calculator import NO_DISCOUNT, apply_rate, select_tier
from pricing.services.rules_store import PricingRulesStore

logger = logging.getLogger(__name__)


class KitConfigService:
    """Сервис для работы с конфигуратором комплектов."""

    def __init__(
        self,
        catalog_loader: Callable[[], KitCatalog],
        store: PricingRulesStore,
        rule_set: Optional[str] = None,
    ):
        """Инициализация сервиса."""
        self._catalog_loader = catalog_loader
        self.store = store
        self.rule_set = rule_set or get_kit_config_rule_set()

    @property
    def catalog(self) -> KitCatalog:
        return self._catalog_loader()

    def _get_sport(self, sport: str) -> SportSchema:
        schema = self.catalog.product_schema.get(sport)
        if schema is None:
            raise KitNotFoundError(f'Sport "{sport}" not found in schema')
        return schema

    def get_sports(self) -> List[str]:
        """Список видов спорта."""
        return list(self.catalog.product_schema)

    def get_kit_types(self, sport: str) -> List[str]:
        """Список типов комплектов для вида спорта."""
        return list(self._get_sport(sport).kit_types)

    def get_kit_schema(self, sport: str, kit_type: str) -> KitSchemaView:
        """Схема комплекта вместе с общими опциями вида спорта."""
        sport_schema = self._get_sport(sport)
        kit_schema = sport_schema.kit_types.get(kit_type)
        if kit_schema is None:
            raise KitNotFoundError(
                f'Kit type "{kit_type}" not found for sport "{sport}"'
            )
        return KitSchemaView(
            sport=sport,
            kit_type=kit_type,
            common_options=sport_schema.common_options,
            **kit_schema.model_dump(),
        )

    def configure_kit(self, request: KitConfigRequest) -> KitConfigResponse:
        """Подбор SKU для комплекта и расчет стоимости с количественной скидкой."""
        if request.quantity < 1:
            raise InvalidCartItem(
                "quantity",
                f"Kit quantity must be a positive integer, got {request.quantity}",
            )

        catalog = self.catalog
        kit_schema = self.get_kit_schema(request.sport, request.kit_type)

        matched_skus = catalog.kit_mappings.get(request.kit_type.lower()) or kit_schema.skus
        if not matched_skus:
            raise KitNotFoundError(f'No SKUs found for kit type "{request.kit_type}"')

        item_prices: Dict[str, int] = {}
        for sku in matched_skus:
            sku_price = catalog.find_sku(sku)
            if sku_price is not None:
                item_prices[sku] = sku_price.base_price
            else:
                logger.warning(f"No price configured for SKU {sku}")

        addon_prices: Dict[str, int] = {}
        for addon in request.selected_addons:
            addon_sku = catalog.find_addon(addon)
            if addon_sku is not None:
                addon_prices[addon] = addon_sku.base_price

        subtotal = (
            sum(item_prices.values()) + sum(addon_prices.values())
        ) * request.quantity

        rules = self.store.get(self.rule_set)
        tier = select_tier(rules.tier_discounts, request.quantity)
        rate = tier.rate if tier is not None else Decimal("0")
        quantity_discount = apply_rate(subtotal, rate)

        return KitConfigResponse(
            matched_skus=list(matched_skus),
            item_prices=item_prices,
            addon_prices=addon_prices,
            subtotal=subtotal,
            quantity_discount=quantity_discount,
            discounted_percentage=rate * 100,
            tier_discount_applied=tier.label if tier is not None else NO_DISCOUNT,
            total_price=subtotal - quantity_discount,
            currency=rules.currency,
        )

    def get_recommended_products(
        self, sport: str, kit_type: str
    ) -> List[KitRecommendation]:
        """Другие комплекты того же вида спорта."""
        sport_schema = self._get_sport(sport)
        recommendations = []
        for other_type, schema in sport_schema.kit_types.items():
            if other_type == kit_type or not schema.skus:
                continue
            recommendations.append(
                KitRecommendation(
                    kit_type=other_type,
                    skus=schema.skus,
                    base_price=schema.base_price,
                )
            )
        return recommendations
