# backend/modules/menu/services/menu_service.py

import logging
from typing import List

from sqlalchemy import func
from sqlalchemy.orm import Session

from core.exceptions import NotFoundError
from ..models.menu_models import MenuGroup, MenuItem
from ..schemas.menu_schemas import MenuGroupCreate, MenuItemCreate

logger = logging.getLogger(__name__)


class MenuService:
    """Service class for menu catalog operations"""

    def __init__(self, db: Session):
        self.db = db

    # Menu Group operations
    def list_groups(self) -> List[MenuGroup]:
        return self.db.query(MenuGroup).order_by(MenuGroup.sort, MenuGroup.id).all()

    def get_group(self, group_id: int) -> MenuGroup:
        group = self.db.query(MenuGroup).filter(MenuGroup.id == group_id).first()
        if not group:
            raise NotFoundError(f"Menu group {group_id} not found")
        return group

    def create_group(self, group_data: MenuGroupCreate) -> MenuGroup:
        sort = group_data.sort
        if sort is None:
            sort = (self.db.query(func.max(MenuGroup.sort)).scalar() or 0) + 1

        group = MenuGroup(name=group_data.name, sort=sort)
        self.db.add(group)
        self.db.commit()
        self.db.refresh(group)

        logger.info(f"Created menu group {group.id} '{group.name}'")
        return group

    def delete_group(self, group_id: int) -> None:
        """Delete a group together with all of its items"""
        group = self.get_group(group_id)
        item_count = len(group.items)

        self.db.delete(group)
        self.db.commit()

        logger.info(
            f"Deleted menu group {group_id} '{group.name}' and {item_count} items"
        )

    # Menu Item operations
    def list_items(self, group_id: int, include_inactive: bool = False) -> List[MenuItem]:
        self.get_group(group_id)

        query = self.db.query(MenuItem).filter(MenuItem.group_id == group_id)
        if not include_inactive:
            query = query.filter(MenuItem.is_active.is_(True))

        return query.order_by(MenuItem.sort, MenuItem.id).all()

    def get_item(self, item_id: int) -> MenuItem:
        item = self.db.query(MenuItem).filter(MenuItem.id == item_id).first()
        if not item:
            raise NotFoundError(f"Menu item {item_id} not found")
        return item

    def create_item(self, item_data: MenuItemCreate) -> MenuItem:
        self.get_group(item_data.group_id)

        sort = item_data.sort
        if sort is None:
            current_max = self.db.query(func.max(MenuItem.sort)).filter(
                MenuItem.group_id == item_data.group_id
            ).scalar()
            sort = (current_max or 0) + 1

        item = MenuItem(
            group_id=item_data.group_id,
            name=item_data.name,
            price=item_data.price,
            is_active=True,
            sort=sort,
        )
        self.db.add(item)
        self.db.commit()
        self.db.refresh(item)

        logger.info(f"Created menu item {item.id} '{item.name}' @ {item.price}")
        return item

    def set_item_active(self, item_id: int, is_active: bool) -> MenuItem:
        """Soft delete / restore an item without touching existing orders"""
        item = self.get_item(item_id)
        item.is_active = is_active
        self.db.commit()
        self.db.refresh(item)
        return item

    def delete_item(self, item_id: int) -> None:
        item = self.get_item(item_id)
        self.db.delete(item)
        self.db.commit()

        logger.info(f"Deleted menu item {item_id} '{item.name}'")
