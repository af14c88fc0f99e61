from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from core.database import get_db
from ..controllers.order_controller import (
    get_order_by_id, get_table_order, open_table_order, add_item_to_table,
    increase_line, decrease_line
)
from ..schemas.order_schemas import (
    OrderOut, TableOrderOut, AddItemRequest, LineChangeOut
)

router = APIRouter(tags=["Orders"])


@router.get("/tables/{table_id}/order", response_model=TableOrderOut)
async def get_current_order(table_id: int, db: Session = Depends(get_db)):
    """
    The table and its open order, if it has one.

    `order` is null for an empty table.
    """
    return await get_table_order(db, table_id)


@router.post("/tables/{table_id}/order", response_model=OrderOut)
async def open_order(table_id: int, db: Session = Depends(get_db)):
    """Return the open order for the table, opening one if needed"""
    return await open_table_order(db, table_id)


@router.post("/tables/{table_id}/order/items", response_model=OrderOut,
             status_code=status.HTTP_201_CREATED)
async def add_order_item(
    table_id: int,
    request: AddItemRequest,
    db: Session = Depends(get_db)
):
    """
    Add one unit of a menu item to the table's order.

    - Opens the order and marks the table in use on the first item
    - Merges into an existing line with the same name and price
    - Inactive menu items are rejected with 400
    """
    return await add_item_to_table(db, table_id, request.menu_item_id)


@router.post("/orders/lines/{line_id}/increase", response_model=LineChangeOut)
async def increase_order_line(line_id: int, db: Session = Depends(get_db)):
    return await increase_line(db, line_id)


@router.post("/orders/lines/{line_id}/decrease", response_model=LineChangeOut)
async def decrease_order_line(line_id: int, db: Session = Depends(get_db)):
    """Take one unit off the line; a line at quantity 1 is removed"""
    return await decrease_line(db, line_id)


@router.get("/orders/{order_id}", response_model=OrderOut)
async def get_order(order_id: int, db: Session = Depends(get_db)):
    return await get_order_by_id(db, order_id)
