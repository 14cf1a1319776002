"""API эндпоинты конфигуратора комплектов."""

from typing import List

from fastapi import APIRouter

from base.data_structures import ErrorResponse
from kits.domain.models import (
    KitConfigRequest,
    KitConfigResponse,
    KitRecommendation,
    KitSchemaView,
)
from kits.entrypoints.api.dependencies import KitConfigServiceDependency

router = APIRouter()


@router.post(
    "/configure",
    response_model=KitConfigResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def configure_kit(
    request: KitConfigRequest, service: KitConfigServiceDependency
) -> KitConfigResponse:
    """Подбор SKU и расчет стоимости комплекта."""
    return service.configure_kit(request)


@router.get("/sports", response_model=List[str])
async def get_sports(service: KitConfigServiceDependency) -> List[str]:
    """Список видов спорта."""
    return service.get_sports()


@router.get("/sports/{sport}/kit-types", response_model=List[str])
async def get_kit_types(sport: str, service: KitConfigServiceDependency) -> List[str]:
    """Типы комплектов вида спорта."""
    return service.get_kit_types(sport)


@router.get("/sports/{sport}/kit-types/{kit_type}", response_model=KitSchemaView)
async def get_kit_schema(
    sport: str, kit_type: str, service: KitConfigServiceDependency
) -> KitSchemaView:
    """Схема комплекта."""
    return service.get_kit_schema(sport, kit_type)


@router.get(
    "/sports/{sport}/kit-types/{kit_type}/recommendations",
    response_model=List[KitRecommendation],
)
async def get_recommendations(
    sport: str, kit_type: str, service: KitConfigServiceDependency
) -> List[KitRecommendation]:
    """Рекомендованные комплекты."""
    return service.get_recommended_products(sport, kit_type)
