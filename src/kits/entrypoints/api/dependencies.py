"""Зависимости для API конфигуратора комплектов."""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from base.config import get_kit_config_dir
from kits.adapters.catalog import KitCatalog, load_catalog
from kits.services.services import KitConfigService
from pricing.services.rules_store import PricingRulesStore, get_rules_store


@lru_cache(maxsize=1)
def get_catalog() -> KitCatalog:
    """Каталог комплектов, загружается один раз."""
    return load_catalog(get_kit_config_dir())


def get_kit_config_service(
    store: PricingRulesStore = Depends(get_rules_store),
) -> KitConfigService:
    """Получение сервиса конфигуратора комплектов."""
    return KitConfigService(get_catalog, store)


KitConfigServiceDependency = Annotated[
    KitConfigService, Depends(get_kit_config_service)
]
