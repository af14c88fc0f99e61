from sqlalchemy import (Column, Integer, String, ForeignKey, DateTime,
                        Numeric, Index, CheckConstraint, text)
from sqlalchemy.orm import relationship
from core.database import Base
from core.mixins import CreatedAtMixin, utcnow
from ..enums.order_enums import OrderStatus
from ..utils.line_math import line_amount


class Order(Base, CreatedAtMixin):
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, index=True)
    table_id = Column(Integer, ForeignKey("cafe_tables.id"),
                      nullable=False, index=True)
    # Snapshot, so history survives table renames
    table_name = Column(String(50), nullable=False)
    status = Column(String(20), nullable=False,
                    default=OrderStatus.OPEN.value, index=True)

    table = relationship("CafeTable")
    lines = relationship(
        "OrderLine",
        back_populates="order",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="(OrderLine.created_at, OrderLine.id)",
    )

    __table_args__ = (
        # At most one open order per table
        Index(
            "uq_orders_open_per_table",
            "table_id",
            unique=True,
            postgresql_where=text("status = 'open'"),
            sqlite_where=text("status = 'open'"),
        ),
        CheckConstraint("status IN ('open', 'paid')",
                        name="chk_order_status"),
    )

    @property
    def is_open(self) -> bool:
        return self.status == OrderStatus.OPEN.value

    def mark_paid(self):
        self.status = OrderStatus.PAID.value

    def __repr__(self):
        return (f"<Order(id={self.id}, table_id={self.table_id}, "
                f"status='{self.status}')>")


class OrderLine(Base):
    __tablename__ = "order_items"

    id = Column(Integer, primary_key=True, index=True)
    order_id = Column(Integer, ForeignKey("orders.id", ondelete="CASCADE"),
                      nullable=False, index=True)
    # Name and price are copied from the menu item; no FK to menu_items
    item_name = Column(String(200), nullable=False)
    price = Column(Numeric(12, 2), nullable=False)
    qty = Column(Integer, nullable=False, default=1)
    amount = Column(Numeric(12, 2), nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)

    order = relationship("Order", back_populates="lines")

    __table_args__ = (
        CheckConstraint("qty >= 1", name="chk_order_item_qty"),
        CheckConstraint("price >= 0", name="chk_order_item_price"),
    )

    def set_quantity(self, qty: int):
        """Set qty and rewrite amount from price * qty"""
        self.qty = qty
        self.amount = line_amount(self.price, qty)

    def __repr__(self):
        return (f"<OrderLine(id={self.id}, item_name='{self.item_name}', "
                f"qty={self.qty}, amount={self.amount})>")
