# backend/modules/tables/schemas/table_schemas.py

from typing import Optional
from pydantic import BaseModel, Field, ConfigDict

from ..models.table_models import TableStatus


# Area Schemas
class AreaCreate(BaseModel):
    """Area creation schema"""

    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=1, max_length=100)
    sort: Optional[int] = Field(
        None, ge=0, description="Position in the area tabs; appended when omitted"
    )


class AreaResponse(BaseModel):
    id: int
    name: str
    sort: int
    model_config = ConfigDict(from_attributes=True)


# Table Schemas
class TableCreate(BaseModel):
    """Table creation schema; new tables always start empty"""

    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=1, max_length=50)


class TableResponse(BaseModel):
    id: int
    area_id: int
    name: str
    status: TableStatus
    model_config = ConfigDict(from_attributes=True)
