"""
Product API schemas (request/response models).
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Annotated

from pydantic import BaseModel, Field, StringConstraints, field_validator

Name = Annotated[str, StringConstraints(strip_whitespace=True, min_length=2, max_length=150)]
Description = Annotated[str, StringConstraints(strip_whitespace=True)]
# DECIMAL(10,2) column: at most 8 integer digits.
Price = Annotated[Decimal, Field(ge=0, lt=Decimal("100000000"))]


class ProductCreate(BaseModel):
    nombre: Name
    descripcion: Description | None = None
    precio: Price = Decimal("0.00")


class ProductUpdate(BaseModel):
    """
    Partial update: only fields present in the request body are applied.
    `descripcion` may be set to null to clear it; the other fields may not.
    """

    nombre: Name | None = None
    descripcion: Description | None = None
    precio: Price | None = None

    @field_validator("nombre", "precio", mode="before")
    @classmethod
    def _reject_null(cls, value: object) -> object:
        if value is None:
            raise ValueError("must not be null")
        return value

    def changes(self) -> dict[str, object]:
        return self.model_dump(exclude_unset=True)


class ProductResponse(BaseModel):
    id: int
    nombre: str
    descripcion: str | None = None
    precio: float
    fecha_creacion: datetime | None = None


class ProductCreatedResponse(BaseModel):
    id: int
    nombre: str
    descripcion: str | None = None
    precio: float
