from __future__ import annotations

import math
import re
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

# как parseFloat: берём ведущее число, хвост ("12.50 USD") игнорируем
_LEADING_NUMBER = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


def parse_price(value: Any) -> float:
    """
    Строка цены из API -> float.
    Пусто, мусор, отрицательное или inf/nan -> 0.0, исключений не бросает.
    """
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        match = _LEADING_NUMBER.match(str(value).strip())
        if not match:
            return 0.0
        try:
            number = float(match.group(0))
        except (OverflowError, ValueError):
            return 0.0
    if not math.isfinite(number) or number < 0:
        return 0.0
    return number


class FlatProduct(BaseModel):
    """Упрощённая запись товара, готовая к вставке в БД."""
    product_id: str = Field(..., description="Глобальный id товара в магазине")
    title: str = Field("", description="Название")
    vendor: str = Field("", description="Производитель")
    description: Optional[str] = Field(None, description="Описание")
    image: Optional[str] = Field(None, description="URL первой картинки")
    price: float = Field(0.0, ge=0, description="Цена первого варианта")

    @field_validator("price", mode="before")
    @classmethod
    def _price_to_float(cls, v):
        return parse_price(v)

    @field_validator("title", "vendor", mode="before")
    @classmethod
    def _none_to_empty(cls, v):
        return "" if v is None else v


class ProductOut(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: int
    product_id: str = Field(..., alias="productId")
    title: str
    vendor: str
    description: Optional[str] = None
    image: Optional[str] = None
    price: float


class Envelope(BaseModel):
    """Единый ответ для всех операций с товарами."""
    status: int
    success: bool
    message: str
    data: Optional[Any] = None
    error: Optional[str] = None

    def to_response(self) -> dict:
        return self.model_dump(exclude_none=True)
