# backend/modules/tables/services/directory_service.py

import logging
from typing import List

from sqlalchemy import func
from sqlalchemy.orm import Session

from core.exceptions import ConflictError, NotFoundError
from ..models.table_models import Area, CafeTable, TableStatus
from ..schemas.table_schemas import AreaCreate, TableCreate

logger = logging.getLogger(__name__)


class DirectoryService:
    """Seating areas and the tables inside them"""

    def __init__(self, db: Session):
        self.db = db

    # Areas
    def list_areas(self) -> List[Area]:
        return self.db.query(Area).order_by(Area.sort, Area.id).all()

    def get_area(self, area_id: int) -> Area:
        area = self.db.query(Area).filter(Area.id == area_id).first()
        if not area:
            raise NotFoundError(f"Area {area_id} not found")
        return area

    def create_area(self, area_data: AreaCreate) -> Area:
        sort = area_data.sort
        if sort is None:
            sort = (self.db.query(func.max(Area.sort)).scalar() or 0) + 1

        area = Area(name=area_data.name, sort=sort)
        self.db.add(area)
        self.db.commit()
        self.db.refresh(area)

        logger.info(f"Created area {area.id} '{area.name}'")
        return area

    # Tables
    def list_tables(self, area_id: int) -> List[CafeTable]:
        self.get_area(area_id)
        return (
            self.db.query(CafeTable)
            .filter(CafeTable.area_id == area_id)
            .order_by(CafeTable.name)
            .all()
        )

    def get_table(self, table_id: int) -> CafeTable:
        table = self.db.query(CafeTable).filter(CafeTable.id == table_id).first()
        if not table:
            raise NotFoundError(f"Table {table_id} not found")
        return table

    def create_table(self, area_id: int, table_data: TableCreate) -> CafeTable:
        self.get_area(area_id)

        existing = self.db.query(CafeTable).filter(
            CafeTable.area_id == area_id,
            CafeTable.name == table_data.name,
        ).first()
        if existing:
            raise ConflictError(
                f"Table '{table_data.name}' already exists in this area",
                error_code="DUPLICATE_TABLE",
            )

        table = CafeTable(
            area_id=area_id,
            name=table_data.name,
            status=TableStatus.EMPTY.value,
        )
        self.db.add(table)
        self.db.commit()
        self.db.refresh(table)

        logger.info(f"Created table {table.id} '{table.name}' in area {area_id}")
        return table
