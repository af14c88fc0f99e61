from .order_models import Order, OrderLine

__all__ = ["Order", "OrderLine"]
