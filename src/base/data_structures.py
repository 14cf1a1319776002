"""Структуры данных для приложения."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Базовая модель API: camelCase на границе, snake_case внутри."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class FrozenCamelModel(CamelModel):
    """Неизменяемая модель значения."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True
    )


class ErrorResponse(BaseModel):
    """Ответ с описанием ошибки."""

    success: bool = False
    detail: str
    type: str
