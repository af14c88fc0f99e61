# backend/modules/menu/models/menu_models.py

from sqlalchemy import (Column, Integer, String, ForeignKey, Boolean,
                        Numeric, CheckConstraint)
from sqlalchemy.orm import relationship
from core.database import Base


class MenuGroup(Base):
    """Menu groups for organizing menu items (Coffee, Tea, Juice...)"""
    __tablename__ = "menu_groups"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    sort = Column(Integer, nullable=False, default=0)

    # Deleting a group deletes its items; order lines keep their snapshots
    items = relationship(
        "MenuItem",
        back_populates="group",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="MenuItem.sort",
    )

    def __repr__(self):
        return f"<MenuGroup(id={self.id}, name='{self.name}')>"


class MenuItem(Base):
    """A priced item that can be added to an order"""
    __tablename__ = "menu_items"

    id = Column(Integer, primary_key=True, index=True)
    group_id = Column(Integer, ForeignKey("menu_groups.id", ondelete="CASCADE"),
                      nullable=False, index=True)
    name = Column(String(200), nullable=False)
    price = Column(Numeric(12, 2), nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)
    sort = Column(Integer, nullable=False, default=0)

    group = relationship("MenuGroup", back_populates="items")

    __table_args__ = (
        CheckConstraint("price > 0", name="chk_menu_item_price_positive"),
    )

    def __repr__(self):
        return f"<MenuItem(id={self.id}, name='{self.name}', price={self.price})>"
