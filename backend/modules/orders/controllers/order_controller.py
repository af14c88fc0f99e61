from sqlalchemy.orm import Session
from modules.tables.schemas.table_schemas import TableResponse
from ..services.order_service import (
    get_order_by_id as get_order_service, get_line_by_id, get_table_with_order,
    ensure_open_order, add_menu_item_to_table, increase_quantity,
    decrease_quantity, compute_total
)
from ..models.order_models import Order
from ..schemas.order_schemas import (
    OrderOut, OrderLineOut, GroupedLineOut, TableOrderOut, LineChangeOut
)
from ..utils.line_math import group_lines


def serialize_order(order: Order) -> OrderOut:
    """Order with its lines, the by-name grouping and the total"""
    return OrderOut(
        id=order.id,
        table_id=order.table_id,
        table_name=order.table_name,
        status=order.status,
        created_at=order.created_at,
        lines=[OrderLineOut.model_validate(line) for line in order.lines],
        grouped_lines=[GroupedLineOut(**row)
                       for row in group_lines(order.lines)],
        total=compute_total(order),
    )


async def get_order_by_id(db: Session, order_id: int) -> OrderOut:
    order = await get_order_service(db, order_id)
    return serialize_order(order)


async def get_table_order(db: Session, table_id: int) -> TableOrderOut:
    table, order = await get_table_with_order(db, table_id)
    return TableOrderOut(
        table=TableResponse.model_validate(table),
        order=serialize_order(order) if order else None,
    )


async def open_table_order(db: Session, table_id: int) -> OrderOut:
    order = await ensure_open_order(db, table_id)
    return serialize_order(order)


async def add_item_to_table(
    db: Session, table_id: int, menu_item_id: int
) -> OrderOut:
    order, _ = await add_menu_item_to_table(db, table_id, menu_item_id)
    return serialize_order(order)


async def increase_line(db: Session, line_id: int) -> LineChangeOut:
    line = await increase_quantity(db, line_id)
    return LineChangeOut(
        line=OrderLineOut.model_validate(line),
        order=serialize_order(line.order),
    )


async def decrease_line(db: Session, line_id: int) -> LineChangeOut:
    order_id = (await get_line_by_id(db, line_id)).order_id
    line = await decrease_quantity(db, line_id)
    order = await get_order_service(db, order_id)
    return LineChangeOut(
        line=OrderLineOut.model_validate(line) if line else None,
        removed=line is None,
        order=serialize_order(order),
    )
