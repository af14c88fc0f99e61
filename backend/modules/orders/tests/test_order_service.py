import pytest
from decimal import Decimal
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from core.exceptions import APIError
from modules.orders.services import order_service
from modules.orders.services.order_service import (
    get_open_order, ensure_open_order, add_item, add_menu_item_to_table,
    increase_quantity, decrease_quantity, compute_total, get_order_by_id
)
from modules.orders.models.order_models import Order, OrderLine
from modules.orders.enums.order_enums import OrderStatus
from modules.tables.models.table_models import TableStatus
from modules.payments.models.payment_models import Payment, PaymentMethod
from modules.orders.tests.factories import (
    CafeTableFactory, OrderFactory, OrderLineFactory, MenuItemFactory
)


class TestOpenOrder:

    @pytest.mark.asyncio
    async def test_empty_table_has_no_open_order(self, db_session, table):
        assert await get_open_order(db_session, table.id) is None

    @pytest.mark.asyncio
    async def test_ensure_open_order_creates_and_occupies(self, db_session, table):
        order = await ensure_open_order(db_session, table.id)

        assert order.status == OrderStatus.OPEN.value
        assert order.table_name == "B01"
        assert order.created_at is not None
        db_session.refresh(table)
        assert table.status == TableStatus.IN_USE.value

    @pytest.mark.asyncio
    async def test_ensure_open_order_is_idempotent(self, db_session, table):
        first = await ensure_open_order(db_session, table.id)
        second = await ensure_open_order(db_session, table.id)

        assert first.id == second.id
        assert db_session.query(Order).count() == 1

    @pytest.mark.asyncio
    async def test_ensure_open_order_unknown_table(self, db_session):
        with pytest.raises(APIError) as exc_info:
            await ensure_open_order(db_session, 999)
        assert exc_info.value.status_code == 404

    def test_second_open_order_rejected_by_database(self, db_session):
        table = CafeTableFactory(status=TableStatus.IN_USE.value)
        OrderFactory(table=table, status=OrderStatus.PAID.value)
        OrderFactory(table=table)

        db_session.add(Order(
            table_id=table.id, table_name=table.name,
            status=OrderStatus.OPEN.value
        ))
        with pytest.raises(IntegrityError):
            db_session.commit()
        db_session.rollback()

        open_orders = db_session.query(Order).filter(
            Order.table_id == table.id,
            Order.status == OrderStatus.OPEN.value
        ).count()
        assert open_orders == 1

    @pytest.mark.asyncio
    async def test_concurrent_open_reuses_existing_order(
            self, db_session, monkeypatch):
        table = CafeTableFactory(status=TableStatus.IN_USE.value)
        existing = OrderFactory(table=table)
        existing_id = existing.id

        real_get_open_order = order_service.get_open_order
        calls = []

        async def stale_then_real(db, table_id):
            # First lookup misses, as if another terminal inserted meanwhile
            calls.append(table_id)
            if len(calls) == 1:
                return None
            return await real_get_open_order(db, table_id)

        monkeypatch.setattr(order_service, "get_open_order", stale_then_real)

        order = await order_service.ensure_open_order(db_session, table.id)

        assert order.id == existing_id
        assert len(calls) == 2
        assert db_session.query(Order).count() == 1


class TestAddItem:

    @pytest.mark.asyncio
    async def test_same_item_merges_into_one_line(self, db_session, table, coffee):
        order, _ = await add_menu_item_to_table(db_session, table.id, coffee.id)
        order, line = await add_menu_item_to_table(db_session, table.id, coffee.id)

        assert len(order.lines) == 1
        assert line.item_name == "Coffee"
        assert line.qty == 2
        assert line.amount == Decimal("40000.00")
        assert compute_total(order) == Decimal("40000.00")
        db_session.refresh(table)
        assert table.status == TableStatus.IN_USE.value

    @pytest.mark.asyncio
    async def test_repeated_adds_keep_amount_in_step(self, db_session, table, coffee):
        order = await ensure_open_order(db_session, table.id)
        for _ in range(5):
            line = await add_item(db_session, order.id, coffee.id)

        assert line.qty == 5
        assert line.amount == line.price * 5

    @pytest.mark.asyncio
    async def test_distinct_items_get_distinct_lines(
            self, db_session, table, coffee, tea):
        await add_menu_item_to_table(db_session, table.id, coffee.id)
        order, _ = await add_menu_item_to_table(db_session, table.id, tea.id)

        assert [line.item_name for line in order.lines] == ["Coffee", "Tea"]
        assert compute_total(order) == Decimal("35000.00")

    @pytest.mark.asyncio
    async def test_price_change_starts_new_line(self, db_session, table, coffee):
        await add_menu_item_to_table(db_session, table.id, coffee.id)

        repriced = MenuItemFactory(
            name="Coffee", price=Decimal("25000.00"), group=coffee.group
        )
        order, line = await add_menu_item_to_table(
            db_session, table.id, repriced.id
        )

        assert len(order.lines) == 2
        assert line.price == Decimal("25000.00")
        assert line.qty == 1
        assert compute_total(order) == Decimal("45000.00")

    @pytest.mark.asyncio
    async def test_inactive_item_rejected_without_opening_order(
            self, db_session, table, inactive_item):
        with pytest.raises(APIError) as exc_info:
            await add_menu_item_to_table(db_session, table.id, inactive_item.id)

        assert exc_info.value.status_code == 400
        assert exc_info.value.error_code == "ITEM_INACTIVE"
        assert await get_open_order(db_session, table.id) is None
        db_session.refresh(table)
        assert table.status == TableStatus.EMPTY.value

    @pytest.mark.asyncio
    async def test_add_to_paid_order_conflicts(self, db_session, coffee):
        order = OrderFactory(status=OrderStatus.PAID.value)

        with pytest.raises(APIError) as exc_info:
            await add_item(db_session, order.id, coffee.id)
        assert exc_info.value.status_code == 409

    @pytest.mark.asyncio
    async def test_deleting_menu_item_keeps_line_snapshot(
            self, db_session, table, coffee):
        order, line = await add_menu_item_to_table(db_session, table.id, coffee.id)
        line_id = line.id

        db_session.delete(coffee)
        db_session.commit()

        kept = db_session.get(OrderLine, line_id)
        assert kept.item_name == "Coffee"
        assert kept.price == Decimal("20000.00")


class TestQuantityChanges:

    @pytest.mark.asyncio
    async def test_increase_recomputes_amount(self, db_session):
        line = OrderLineFactory(item_name="Coffee", price=Decimal("20000"))

        line = await increase_quantity(db_session, line.id)

        assert line.qty == 2
        assert line.amount == Decimal("40000.00")

    @pytest.mark.asyncio
    async def test_decrease_above_one(self, db_session):
        line = OrderLineFactory(item_name="Coffee", price=Decimal("20000"), qty=2)

        line = await decrease_quantity(db_session, line.id)

        assert line.qty == 1
        assert line.amount == Decimal("20000.00")

    @pytest.mark.asyncio
    async def test_decrease_at_one_removes_line(self, db_session):
        line = OrderLineFactory(item_name="Coffee", price=Decimal("20000"))
        line_id, order_id = line.id, line.order_id

        assert await decrease_quantity(db_session, line_id) is None

        assert db_session.get(OrderLine, line_id) is None
        order = await get_order_by_id(db_session, order_id)
        assert order.status == OrderStatus.OPEN.value
        assert order.lines == []
        assert compute_total(order) == Decimal("0.00")

    @pytest.mark.asyncio
    async def test_line_of_paid_order_is_locked(self, db_session):
        order = OrderFactory(status=OrderStatus.PAID.value)
        line = OrderLineFactory(order=order, qty=2)

        with pytest.raises(APIError) as exc_info:
            await decrease_quantity(db_session, line.id)
        assert exc_info.value.status_code == 409
        assert exc_info.value.error_code == "ORDER_CLOSED"

        db_session.refresh(line)
        assert line.qty == 2

    @pytest.mark.asyncio
    async def test_unknown_line(self, db_session):
        with pytest.raises(APIError) as exc_info:
            await increase_quantity(db_session, 12345)
        assert exc_info.value.status_code == 404


class TestComputeTotal:

    def test_total_is_idempotent(self, db_session):
        order = OrderFactory()
        OrderLineFactory(order=order, price=Decimal("20000"), qty=2,
                         amount=Decimal("40000"))
        OrderLineFactory(order=order, price=Decimal("15000"), qty=1,
                         amount=Decimal("15000"))
        db_session.refresh(order)

        assert compute_total(order) == Decimal("55000.00")
        assert compute_total(order) == compute_total(order)

    def test_empty_order_totals_zero(self, db_session):
        assert compute_total(OrderFactory()) == Decimal("0.00")


def settle_on_another_terminal(db_session, monkeypatch):
    """Pay the order from a second session right after the open check passes"""
    real_ensure_open = order_service._ensure_open
    settled = []

    def check_then_settle(order):
        real_ensure_open(order)
        if settled:
            return
        settled.append(order.id)

        other = Session(bind=db_session.get_bind())
        try:
            paid = other.get(Order, order.id)
            other.add(Payment(
                order_id=paid.id,
                method=PaymentMethod.CASH.value,
                paid_amount=compute_total(paid)
            ))
            paid.mark_paid()
            paid.table.release()
            other.commit()
        finally:
            other.close()

    monkeypatch.setattr(order_service, "_ensure_open", check_then_settle)
    return settled


class TestLineChangesDuringPayment:

    def assert_bill_untouched(self, db_session, order_id, lines):
        db_session.expire_all()
        order = db_session.get(Order, order_id)
        payment = db_session.query(Payment).filter(
            Payment.order_id == order_id
        ).one()

        assert order.status == OrderStatus.PAID.value
        assert [(line.item_name, line.qty) for line in order.lines] == lines
        assert payment.paid_amount == compute_total(order)

    @pytest.mark.asyncio
    async def test_add_item_after_settlement_is_rejected(
            self, db_session, coffee, monkeypatch):
        order = OrderFactory()
        OrderLineFactory(order=order, item_name="Coffee",
                         price=Decimal("20000"), qty=1)
        order_id = order.id
        settled = settle_on_another_terminal(db_session, monkeypatch)

        with pytest.raises(APIError) as exc_info:
            await add_item(db_session, order_id, coffee.id)

        assert settled == [order_id]
        assert exc_info.value.status_code == 409
        assert exc_info.value.error_code == "ORDER_CLOSED"
        self.assert_bill_untouched(db_session, order_id, [("Coffee", 1)])

    @pytest.mark.asyncio
    async def test_increase_after_settlement_is_rejected(
            self, db_session, monkeypatch):
        line = OrderLineFactory(item_name="Tea", price=Decimal("15000"), qty=2)
        line_id, order_id = line.id, line.order_id
        settle_on_another_terminal(db_session, monkeypatch)

        with pytest.raises(APIError) as exc_info:
            await increase_quantity(db_session, line_id)

        assert exc_info.value.error_code == "ORDER_CLOSED"
        self.assert_bill_untouched(db_session, order_id, [("Tea", 2)])

    @pytest.mark.asyncio
    async def test_decrease_after_settlement_is_rejected(
            self, db_session, monkeypatch):
        line = OrderLineFactory(item_name="Tea", price=Decimal("15000"), qty=1)
        line_id, order_id = line.id, line.order_id
        settle_on_another_terminal(db_session, monkeypatch)

        with pytest.raises(APIError) as exc_info:
            await decrease_quantity(db_session, line_id)

        assert exc_info.value.error_code == "ORDER_CLOSED"
        self.assert_bill_untouched(db_session, order_id, [("Tea", 1)])
