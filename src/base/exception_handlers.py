"""Обработчики исключений для FastAPI."""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from .exceptions import (
    AppException,
    CatalogUnavailableError,
    DatabaseError,
    InvalidAmount,
    InvalidCartItem,
    InvalidRulesConfiguration,
    KitNotFoundError,
    NegativeSubtotal,
    OrderNotFoundError,
    RuleSetNotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)


def _error(status_code: int, exc: Exception, error_type: str, **extra) -> JSONResponse:
    content = {"success": False, "detail": str(exc), "type": error_type}
    content.update(extra)
    return JSONResponse(status_code=status_code, content=content)


def add_exception_handlers(app: FastAPI) -> None:
    """Добавление обработчиков исключений в приложение."""

    @app.exception_handler(AppException)
    async def app_exception_handler(
        request: Request, exc: AppException
    ) -> JSONResponse:
        """Базовый обработчик исключений приложения."""
        return _error(500, exc, "app_error")

    @app.exception_handler(ValidationError)
    async def validation_exception_handler(
        request: Request, exc: ValidationError
    ) -> JSONResponse:
        """Обработчик ошибок валидации."""
        return _error(400, exc, "validation_error")

    @app.exception_handler(InvalidCartItem)
    async def cart_item_exception_handler(
        request: Request, exc: InvalidCartItem
    ) -> JSONResponse:
        """Обработчик некорректных позиций корзины."""
        return _error(
            400, exc, "invalid_cart_item", field=exc.field, index=exc.index
        )

    @app.exception_handler(InvalidAmount)
    async def amount_exception_handler(
        request: Request, exc: InvalidAmount
    ) -> JSONResponse:
        """Обработчик некорректных сумм."""
        return _error(400, exc, "invalid_amount")

    @app.exception_handler(RuleSetNotFoundError)
    async def rule_set_not_found_handler(
        request: Request, exc: RuleSetNotFoundError
    ) -> JSONResponse:
        """Обработчик отсутствующего набора правил."""
        return _error(404, exc, "rule_set_not_found")

    @app.exception_handler(KitNotFoundError)
    async def kit_not_found_handler(
        request: Request, exc: KitNotFoundError
    ) -> JSONResponse:
        """Обработчик отсутствующего комплекта."""
        return _error(404, exc, "kit_not_found")

    @app.exception_handler(OrderNotFoundError)
    async def order_not_found_handler(
        request: Request, exc: OrderNotFoundError
    ) -> JSONResponse:
        """Обработчик отсутствующего заказа."""
        return _error(404, exc, "order_not_found")

    @app.exception_handler(InvalidRulesConfiguration)
    async def rules_exception_handler(
        request: Request, exc: InvalidRulesConfiguration
    ) -> JSONResponse:
        """Обработчик ошибок конфигурации правил."""
        logger.error(f"Pricing rules misconfigured: {exc}")
        return _error(500, exc, "invalid_rules_configuration")

    @app.exception_handler(NegativeSubtotal)
    async def negative_subtotal_handler(
        request: Request, exc: NegativeSubtotal
    ) -> JSONResponse:
        """Обработчик нарушения инварианта расчета."""
        return _error(500, "Price calculation not available", "pricing_error")

    @app.exception_handler(CatalogUnavailableError)
    async def catalog_exception_handler(
        request: Request, exc: CatalogUnavailableError
    ) -> JSONResponse:
        """Обработчик недоступного каталога комплектов."""
        return _error(500, exc, "catalog_unavailable")

    @app.exception_handler(DatabaseError)
    async def db_exception_handler(
        request: Request, exc: DatabaseError
    ) -> JSONResponse:
        """Обработчик ошибок базы данных."""
        return _error(500, exc, "database_error")
