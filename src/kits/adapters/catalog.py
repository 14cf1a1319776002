"""Загрузка каталога комплектов из файлов конфигурации."""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

import pandas as pd
from pydantic import TypeAdapter, ValidationError as PydanticValidationError

from base.exceptions import CatalogUnavailableError
from kits.domain.models import SkuPrice, SportSchema, dollars_to_cents

logger = logging.getLogger(__name__)

PRODUCT_SCHEMA_FILE = "product-schema.json"
KIT_MAPPINGS_FILE = "kit-mappings.json"
SKU_PRICES_FILE = "sku-prices.json"
SKU_PRICES_CSV_FILE = "sku-prices.csv"

_product_schema_adapter = TypeAdapter(Dict[str, SportSchema])
_kit_mappings_adapter = TypeAdapter(Dict[str, List[str]])
_sku_prices_adapter = TypeAdapter(List[SkuPrice])


@dataclass(frozen=True)
class KitCatalog:
    """Каталог: схемы видов спорта, соответствия комплектов и SKU, прайс."""

    product_schema: Dict[str, SportSchema] = field(default_factory=dict)
    kit_mappings: Dict[str, List[str]] = field(default_factory=dict)
    sku_prices: List[SkuPrice] = field(default_factory=list)

    def find_sku(self, sku_id: str) -> Optional[SkuPrice]:
        """Поиск цены SKU по идентификатору."""
        for price in self.sku_prices:
            if price.sku_id == sku_id:
                return price
        return None

    def find_addon(self, addon: str) -> Optional[SkuPrice]:
        """Поиск доп. товара по вхождению названия без учета регистра."""
        needle = addon.lower()
        for price in self.sku_prices:
            if needle in price.product_name.lower():
                return price
        return None


def parse_sku_prices_csv(path: str) -> List[SkuPrice]:
    """Разбор выгрузки прайс-листа SKU (цены в долларах) в модели с ценами в центах."""
    df = pd.read_csv(path, dtype=str, keep_default_na=False)
    df.columns = [" ".join(str(col).split()) for col in df.columns]

    if "sku id" not in df.columns:
        raise CatalogUnavailableError(f"SKU price file {path} has no 'sku id' column")

    if "Base Price" in df.columns:
        df["Base Price"] = pd.to_numeric(df["Base Price"], errors="coerce").fillna(0)
    else:
        df["Base Price"] = 0

    sku_prices = []
    for _, row in df.iterrows():
        sku_id = str(row.get("sku id", "")).strip()
        if not sku_id:
            continue
        sku_prices.append(
            SkuPrice(
                sku_id=sku_id,
                product_name=str(row.get("Product name", "")).strip(),
                product_type=str(row.get("product type", "")).strip(),
                sports=str(row.get("sports", "")).strip(),
                base_price=dollars_to_cents(row.get("Base Price", 0)),
                allowed_ai_designer=str(row.get("allowed ai designer", "")).strip().lower() == "yes",
                add_ons_allowed=str(row.get("Add-Ons Allowed", "")).strip(),
                sizes_available=str(row.get("Sizes Available", "")).strip(),
                gender=str(row.get("Gender", "")).strip(),
                quantity_tiers=str(row.get("Quantity Tiers", "")).strip(),
                currency=str(row.get("Currency", "")).strip() or "USD",
            )
        )
    logger.info(f"Parsed {len(sku_prices)} SKU prices from {path}")
    return sku_prices


def _read_json(path: Path):
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise CatalogUnavailableError(f"Invalid JSON in {path}: {e}") from e


def load_catalog(config_dir: str) -> KitCatalog:
    """Загрузка каталога из каталога конфигурации.

    Прайс берется из sku-prices.json, а при его отсутствии из sku-prices.csv.
    """
    directory = Path(config_dir)
    schema_path = directory / PRODUCT_SCHEMA_FILE
    if not schema_path.exists():
        raise CatalogUnavailableError(f"Product schema not found in {config_dir}")

    try:
        product_schema = _product_schema_adapter.validate_python(_read_json(schema_path))

        mappings_path = directory / KIT_MAPPINGS_FILE
        kit_mappings = (
            _kit_mappings_adapter.validate_python(_read_json(mappings_path))
            if mappings_path.exists()
            else {}
        )

        prices_path = directory / SKU_PRICES_FILE
        csv_path = directory / SKU_PRICES_CSV_FILE
        if prices_path.exists():
            sku_prices = _sku_prices_adapter.validate_python(_read_json(prices_path))
        elif csv_path.exists():
            sku_prices = parse_sku_prices_csv(str(csv_path))
        else:
            sku_prices = []
    except PydanticValidationError as e:
        raise CatalogUnavailableError(f"Invalid kit catalog in {config_dir}: {e}") from e

    logger.info(
        f"Kit catalog loaded: {len(product_schema)} sports, "
        f"{len(kit_mappings)} kit mappings, {len(sku_prices)} SKU prices"
    )
    return KitCatalog(
        product_schema=product_schema,
        kit_mappings={key.lower(): value for key, value in kit_mappings.items()},
        sku_prices=sku_prices,
    )
