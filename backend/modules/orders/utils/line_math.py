# backend/modules/orders/utils/line_math.py

"""
Pure helpers for order line consolidation.

A line is identified by its (item name, unit price) snapshot. Its amount
is always derived from ``price * qty``; nothing here touches the database.
"""

from decimal import Decimal
from typing import Iterable, List, Optional, Sequence, Any

from core.types import to_money


def line_amount(price, qty: int) -> Decimal:
    return to_money(to_money(price) * qty)


def next_quantity(qty: int, delta: int) -> Optional[int]:
    """New quantity after applying delta, or None when the line should go"""
    new_qty = qty + delta
    if new_qty < 1:
        return None
    return new_qty


def find_matching_line(lines: Sequence[Any], item_name: str, price) -> Optional[Any]:
    """
    Latest line with the same name and unit price.

    Lines are expected in creation order, so the last match wins.
    """
    wanted = to_money(price)
    matches = [
        line for line in lines
        if line.item_name == item_name and to_money(line.price) == wanted
    ]
    return matches[-1] if matches else None


def total_of(lines: Iterable[Any]) -> Decimal:
    return to_money(sum((to_money(line.amount) for line in lines), Decimal("0")))


def group_lines(lines: Iterable[Any]) -> List[dict]:
    """
    Collapse lines by item name for display.

    Rows keep first-seen order; ``price`` is the price of the latest line
    with that name.
    """
    grouped = {}
    for line in lines:
        row = grouped.setdefault(
            line.item_name,
            {"name": line.item_name, "price": to_money(line.price),
             "qty": 0, "total": Decimal("0.00")},
        )
        row["qty"] += line.qty
        row["total"] = to_money(row["total"] + to_money(line.amount))
        row["price"] = to_money(line.price)
    return list(grouped.values())
