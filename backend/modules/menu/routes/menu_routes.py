# backend/modules/menu/routes/menu_routes.py

from fastapi import APIRouter, Depends, status, Query
from sqlalchemy.orm import Session
from typing import List

from core.database import get_db
from ..services.menu_service import MenuService
from ..schemas.menu_schemas import (
    MenuGroupCreate, MenuGroupResponse,
    MenuItemCreate, MenuItemUpdate, MenuItemResponse
)


router = APIRouter(prefix="/menu", tags=["Menu Management"])


def get_menu_service(db: Session = Depends(get_db)) -> MenuService:
    """Dependency to get menu service instance"""
    return MenuService(db)


# Menu Groups
@router.get("/groups", response_model=List[MenuGroupResponse])
async def list_groups(
    menu_service: MenuService = Depends(get_menu_service)
):
    """Get all menu groups in display order"""
    return menu_service.list_groups()


@router.post("/groups", response_model=MenuGroupResponse, status_code=status.HTTP_201_CREATED)
async def create_group(
    group_data: MenuGroupCreate,
    menu_service: MenuService = Depends(get_menu_service)
):
    """Create a new menu group"""
    return menu_service.create_group(group_data)


@router.delete("/groups/{group_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_group(
    group_id: int,
    menu_service: MenuService = Depends(get_menu_service)
):
    """Delete a menu group and every item in it"""
    menu_service.delete_group(group_id)


@router.get("/groups/{group_id}/items", response_model=List[MenuItemResponse])
async def list_group_items(
    group_id: int,
    include_inactive: bool = Query(False, description="Also return deactivated items"),
    menu_service: MenuService = Depends(get_menu_service)
):
    return menu_service.list_items(group_id, include_inactive)


# Menu Items
@router.post("/items", response_model=MenuItemResponse, status_code=status.HTTP_201_CREATED)
async def create_menu_item(
    item_data: MenuItemCreate,
    menu_service: MenuService = Depends(get_menu_service)
):
    """Create a new menu item"""
    return menu_service.create_item(item_data)


@router.patch("/items/{item_id}", response_model=MenuItemResponse)
async def update_menu_item(
    item_id: int,
    item_data: MenuItemUpdate,
    menu_service: MenuService = Depends(get_menu_service)
):
    """Activate or deactivate a menu item"""
    return menu_service.set_item_active(item_id, item_data.is_active)


@router.delete("/items/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_menu_item(
    item_id: int,
    menu_service: MenuService = Depends(get_menu_service)
):
    """Delete a menu item"""
    menu_service.delete_item(item_id)
