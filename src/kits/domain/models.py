"""Доменные модели конфигуратора комплектов."""

from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, List, Optional

from pydantic import Field

from base.data_structures import CamelModel
from pricing.domain.models import Rate


class KitTypeSchema(CamelModel):
    """Схема типа комплекта (цена в центах)."""

    form_options: List[str] = Field(default_factory=list)
    skus: List[str] = Field(default_factory=list)
    sleeve_length: List[str] = Field(default_factory=list)
    collar_style: List[str] = Field(default_factory=list)
    fabric: List[str] = Field(default_factory=list)
    fit_type: List[str] = Field(default_factory=list)
    style: List[str] = Field(default_factory=list)
    base_price: int = 0


class CommonOptions(CamelModel):
    """Общие опции вида спорта."""

    gender: List[str] = Field(default_factory=list)
    colors: List[str] = Field(default_factory=list)
    pattern_styles: List[str] = Field(default_factory=list)
    design_inspiration: List[str] = Field(default_factory=list)


class SportSchema(CamelModel):
    """Схема вида спорта."""

    kit_types: Dict[str, KitTypeSchema] = Field(default_factory=dict)
    common_options: CommonOptions = Field(default_factory=CommonOptions)


class KitSchemaView(KitTypeSchema):
    """Схема комплекта вместе с общими опциями вида спорта."""

    sport: str
    kit_type: str
    common_options: CommonOptions


class SkuPrice(CamelModel):
    """Цена SKU из прайс-листа (base_price в центах)."""

    sku_id: str
    product_name: str
    product_type: str = ""
    sports: str = ""
    base_price: int
    allowed_ai_designer: bool = False
    add_ons_allowed: str = ""
    sizes_available: str = ""
    gender: str = ""
    quantity_tiers: str = ""
    currency: str = "USD"


class KitOptions(CamelModel):
    """Выбранные опции комплекта."""

    sleeve: Optional[str] = None
    collar: Optional[str] = None
    pattern: Optional[str] = None
    fabric: Optional[str] = None
    fit: Optional[str] = None
    gender: Optional[str] = None
    colors: List[str] = Field(default_factory=list)


class KitConfigRequest(CamelModel):
    """Запрос на конфигурацию комплекта."""

    sport: str
    kit_type: str
    quantity: int
    selected_addons: List[str] = Field(default_factory=list)
    options: Optional[KitOptions] = None


class KitConfigResponse(CamelModel):
    """Результат конфигурации комплекта (суммы в центах)."""

    matched_skus: List[str]
    item_prices: Dict[str, int]
    addon_prices: Dict[str, int]
    subtotal: int
    quantity_discount: int
    discounted_percentage: Rate
    tier_discount_applied: str
    total_price: int
    currency: str


class KitRecommendation(CamelModel):
    """Рекомендованный комплект того же вида спорта."""

    kit_type: str
    skus: List[str]
    base_price: int


def dollars_to_cents(value) -> int:
    """Перевод цены в долларах в центы."""
    return int((Decimal(str(value)) * 100).to_integral_value(rounding=ROUND_HALF_UP))
