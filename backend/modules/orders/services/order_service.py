import logging
from decimal import Decimal
from typing import Optional, Tuple
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from core.exceptions import NotFoundError, ConflictError, ValidationError
from modules.tables.models.table_models import CafeTable
from modules.menu.models.menu_models import MenuItem
from ..enums.order_enums import OrderStatus
from ..models.order_models import Order, OrderLine
from ..utils.line_math import (
    find_matching_line, line_amount, next_quantity, total_of
)

logger = logging.getLogger(__name__)


def _get_table(db: Session, table_id: int) -> CafeTable:
    table = db.query(CafeTable).filter(CafeTable.id == table_id).first()
    if not table:
        raise NotFoundError(f"Table {table_id} not found")
    return table


def _get_menu_item(db: Session, menu_item_id: int) -> MenuItem:
    item = db.query(MenuItem).filter(MenuItem.id == menu_item_id).first()
    if not item:
        raise NotFoundError(f"Menu item {menu_item_id} not found")
    return item


def _ensure_orderable(item: MenuItem) -> None:
    if not item.is_active:
        logger.warning(f"Rejected inactive menu item {item.id} '{item.name}'")
        raise ValidationError(
            f"Menu item '{item.name}' is not available",
            error_code="ITEM_INACTIVE"
        )


def _ensure_open(order: Order) -> None:
    if not order.is_open:
        logger.warning(f"Rejected change to closed order {order.id}")
        raise ConflictError(
            f"Order {order.id} is already {order.status}",
            error_code="ORDER_CLOSED"
        )


def compute_total(order: Order) -> Decimal:
    """Sum of line amounts; safe to call any number of times"""
    return total_of(order.lines)


def _claim_open_order(db: Session, order_id: int) -> None:
    """
    Re-check at write time that the order is still open.

    The guarded UPDATE holds the order row until commit, so a payment
    either finished before this point or waits for the line change.
    """
    claimed = db.query(Order).filter(
        Order.id == order_id,
        Order.status == OrderStatus.OPEN.value
    ).update({Order.status: OrderStatus.OPEN.value}, synchronize_session=False)
    if not claimed:
        db.rollback()
        logger.warning(f"Order {order_id} was settled before the line change")
        raise ConflictError(
            f"Order {order_id} is already paid",
            error_code="ORDER_CLOSED"
        )


async def get_order_by_id(
        db: Session, order_id: int, for_update: bool = False) -> Order:
    query = db.query(Order).filter(Order.id == order_id)
    if for_update:
        query = query.with_for_update().populate_existing()
    order = query.first()
    if not order:
        raise NotFoundError(f"Order {order_id} not found")
    return order


async def _lock_open_order(db: Session, order_id: int) -> Order:
    """Load the order with a row lock and make sure lines may still change"""
    order = await get_order_by_id(db, order_id, for_update=True)
    _ensure_open(order)
    _claim_open_order(db, order_id)
    return order


async def get_line_by_id(db: Session, line_id: int) -> OrderLine:
    line = db.query(OrderLine).filter(OrderLine.id == line_id).first()
    if not line:
        raise NotFoundError(f"Order line {line_id} not found")
    return line


async def get_open_order(db: Session, table_id: int) -> Optional[Order]:
    return db.query(Order).filter(
        Order.table_id == table_id,
        Order.status == OrderStatus.OPEN.value
    ).first()


async def get_table_with_order(
        db: Session, table_id: int) -> Tuple[CafeTable, Optional[Order]]:
    table = _get_table(db, table_id)
    return table, await get_open_order(db, table.id)


async def ensure_open_order(
        db: Session, table_id: int, commit: bool = True) -> Order:
    """
    Return the table's open order, creating it if there is none.

    Creating the order also marks the table in use. If another session
    opened an order for the same table first, the unique index rejects
    our insert and the existing order is returned instead.
    """
    table = _get_table(db, table_id)
    order = await get_open_order(db, table.id)
    if order:
        return order

    try:
        with db.begin_nested():
            order = Order(
                table_id=table.id,
                table_name=table.name,
                status=OrderStatus.OPEN.value
            )
            db.add(order)
            table.occupy()
            db.flush()
        logger.info(f"Opened order {order.id} for table {table.id} "
                    f"'{table.name}'")
    except IntegrityError:
        logger.warning(
            f"Open order for table {table.id} was created concurrently, "
            f"reusing it"
        )
        order = await get_open_order(db, table.id)
        if order is None:
            raise
        table.occupy()

    if commit:
        db.commit()
        db.refresh(order)
    return order


async def add_item(
        db: Session, order_id: int, menu_item_id: int,
        commit: bool = True) -> OrderLine:
    """
    Add one unit of a menu item to an open order.

    Lines merge on (item name, unit price): a matching line gets qty + 1,
    otherwise a new line with qty 1 is created.
    """
    order = await _lock_open_order(db, order_id)
    item = _get_menu_item(db, menu_item_id)
    _ensure_orderable(item)

    line = find_matching_line(order.lines, item.name, item.price)
    if line:
        line.set_quantity(line.qty + 1)
    else:
        line = OrderLine(
            item_name=item.name,
            price=item.price,
            qty=1,
            amount=line_amount(item.price, 1)
        )
        order.lines.append(line)

    if commit:
        db.commit()
        db.refresh(line)
    else:
        db.flush()

    logger.info(f"Order {order.id}: '{line.item_name}' x{line.qty}")
    return line


async def add_menu_item_to_table(
        db: Session, table_id: int,
        menu_item_id: int) -> Tuple[Order, OrderLine]:
    """Open the table's order if needed and add the item, in one commit"""
    _ensure_orderable(_get_menu_item(db, menu_item_id))

    order = await ensure_open_order(db, table_id, commit=False)
    line = await add_item(db, order.id, menu_item_id, commit=False)

    db.commit()
    db.refresh(order)
    return order, line


async def increase_quantity(db: Session, line_id: int) -> OrderLine:
    line = await get_line_by_id(db, line_id)
    await _lock_open_order(db, line.order_id)
    db.refresh(line)

    line.set_quantity(line.qty + 1)
    db.commit()
    db.refresh(line)

    logger.info(f"Order {line.order_id}: '{line.item_name}' increased "
                f"to {line.qty}")
    return line


async def decrease_quantity(db: Session, line_id: int) -> Optional[OrderLine]:
    """
    Take one unit off a line.

    A line at qty 1 is deleted and None is returned. The order itself
    stays open even when its last line goes.
    """
    line = await get_line_by_id(db, line_id)
    order = await _lock_open_order(db, line.order_id)
    db.refresh(line)

    new_qty = next_quantity(line.qty, -1)
    if new_qty is None:
        item_name = line.item_name
        order.lines.remove(line)
        db.commit()
        logger.info(f"Order {order.id}: removed '{item_name}'")
        return None

    line.set_quantity(new_qty)
    db.commit()
    db.refresh(line)

    logger.info(f"Order {order.id}: '{line.item_name}' decreased "
                f"to {line.qty}")
    return line
