from pydantic import BaseModel, ConfigDict
from typing import Optional, List

from core.types import Money, UtcDateTime
from modules.tables.schemas.table_schemas import TableResponse
from ..enums.order_enums import OrderStatus


class AddItemRequest(BaseModel):
    menu_item_id: int


class OrderLineOut(BaseModel):
    id: int
    order_id: int
    item_name: str
    price: Money
    qty: int
    amount: Money
    created_at: UtcDateTime

    model_config = ConfigDict(from_attributes=True)


class GroupedLineOut(BaseModel):
    """One display row per item name"""
    name: str
    price: Money
    qty: int
    total: Money


class OrderOut(BaseModel):
    id: int
    table_id: int
    table_name: str
    status: OrderStatus
    created_at: UtcDateTime
    lines: List[OrderLineOut] = []
    grouped_lines: List[GroupedLineOut] = []
    total: Money

    model_config = ConfigDict(from_attributes=True)


class TableOrderOut(BaseModel):
    """A table with its current open order, if any"""
    table: TableResponse
    order: Optional[OrderOut] = None


class LineChangeOut(BaseModel):
    """Result of a quantity change; line is None once removed"""
    line: Optional[OrderLineOut] = None
    removed: bool = False
    order: OrderOut
