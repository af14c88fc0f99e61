# backend/modules/menu/schemas/menu_schemas.py

from pydantic import BaseModel, Field, ConfigDict
from typing import Optional
from decimal import Decimal

from core.types import Money


class MenuGroupCreate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=1, max_length=100)
    sort: Optional[int] = Field(None, ge=0)


class MenuGroupResponse(BaseModel):
    id: int
    name: str
    sort: int

    model_config = ConfigDict(from_attributes=True)


class MenuItemCreate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    group_id: int
    name: str = Field(..., min_length=1, max_length=200)
    price: Decimal = Field(..., gt=0, max_digits=12, decimal_places=2)
    sort: Optional[int] = Field(None, ge=0)


class MenuItemUpdate(BaseModel):
    is_active: bool


class MenuItemResponse(BaseModel):
    id: int
    group_id: int
    name: str
    price: Money
    is_active: bool
    sort: int

    model_config = ConfigDict(from_attributes=True)
