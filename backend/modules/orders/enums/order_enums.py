from enum import Enum


class OrderStatus(str, Enum):
    OPEN = "open"
    PAID = "paid"
