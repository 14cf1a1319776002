"""Кастомные исключения приложения."""

from typing import Optional


class AppException(Exception):
    """Базовое исключение приложения."""
    pass


class ValidationError(AppException):
    """Ошибка валидации данных."""
    pass


class DatabaseError(AppException):
    """Ошибка работы с базой данных."""
    pass


class InvalidCartItem(ValidationError):
    """Некорректная позиция корзины."""

    def __init__(self, field: str, detail: str, index: Optional[int] = None) -> None:
        """Инициализация исключения."""
        super().__init__(detail)
        self.field = field
        self.index = index
        self.detail = detail


class InvalidAmount(ValidationError):
    """Некорректная сумма для форматирования."""
    pass


class InvalidRulesConfiguration(AppException):
    """Некорректная конфигурация правил ценообразования."""
    pass


class InvalidRules(InvalidRulesConfiguration):
    """Правила, переданные в калькулятор, не прошли проверку."""
    pass


class NegativeSubtotal(AppException):
    """Нарушение инварианта: сумма после скидок стала отрицательной."""
    pass


class RuleSetNotFoundError(AppException):
    """Набор правил ценообразования не найден."""
    pass


class KitNotFoundError(AppException):
    """Вид спорта, тип комплекта или SKU не найдены."""
    pass


class CatalogUnavailableError(AppException):
    """Каталог комплектов не загружен."""
    pass


class OrderNotFoundError(AppException):
    """Заказ не найден."""
    pass


class DoesntExistException(AppException):
    """Исключение о том, что сущность не существует."""

    def __init__(self, detail: str = "Entity doesn't exist") -> None:
        """Инициализация исключения."""
        super().__init__(detail)
        self.detail = detail
