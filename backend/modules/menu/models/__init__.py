# backend/modules/menu/models/__init__.py

from .menu_models import MenuGroup, MenuItem

__all__ = [
    "MenuGroup",
    "MenuItem",
]
