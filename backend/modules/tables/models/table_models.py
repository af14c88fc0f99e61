# backend/modules/tables/models/table_models.py

from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    UniqueConstraint,
    CheckConstraint,
)
from sqlalchemy.orm import relationship
from enum import Enum

from core.database import Base


class TableStatus(str, Enum):
    """Table occupancy, driven by the table's open order"""

    EMPTY = "empty"
    IN_USE = "in_use"


class Area(Base):
    """A named seating zone (e.g. Khu A, Mang ve)"""

    __tablename__ = "areas"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    sort = Column(Integer, nullable=False, default=0)

    tables = relationship(
        "CafeTable", back_populates="area", order_by="CafeTable.name"
    )

    def __repr__(self):
        return f"<Area(id={self.id}, name='{self.name}')>"


class CafeTable(Base):
    """A seating unit; holds at most one open order at a time"""

    __tablename__ = "cafe_tables"

    id = Column(Integer, primary_key=True, index=True)
    area_id = Column(Integer, ForeignKey("areas.id"), nullable=False, index=True)
    name = Column(String(50), nullable=False)
    status = Column(String(20), nullable=False, default=TableStatus.EMPTY.value)

    area = relationship("Area", back_populates="tables")

    __table_args__ = (
        UniqueConstraint("area_id", "name", name="uix_cafe_table_area_name"),
        CheckConstraint(
            "status IN ('empty', 'in_use')", name="chk_cafe_table_status"
        ),
    )

    @property
    def is_in_use(self) -> bool:
        return self.status == TableStatus.IN_USE.value

    def occupy(self):
        self.status = TableStatus.IN_USE.value

    def release(self):
        self.status = TableStatus.EMPTY.value

    def __repr__(self):
        return f"<CafeTable(id={self.id}, name='{self.name}', status='{self.status}')>"
