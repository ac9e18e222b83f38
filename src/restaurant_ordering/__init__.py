"""Swad's Delight ordering CLI: menu, orders and the interactive session."""

from .enums import OrderStatus, PaymentMethod, PostOrderAction, PromptKind
from .exceptions import (
    DuplicateItemError,
    MenuLoadError,
    OrderingError,
    OrderNotFoundError,
    OrderNotPendingError,
)
from .models import Customer, MenuCatalog, MenuItem, Order, OrderBook, OrderIdSequence

__all__ = [
    "Customer",
    "DuplicateItemError",
    "MenuCatalog",
    "MenuItem",
    "MenuLoadError",
    "Order",
    "OrderBook",
    "OrderIdSequence",
    "OrderNotFoundError",
    "OrderNotPendingError",
    "OrderStatus",
    "OrderingError",
    "PaymentMethod",
    "PostOrderAction",
    "PromptKind",
]
