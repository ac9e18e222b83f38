import json
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Self

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .enums import OrderStatus
from .exceptions import DuplicateItemError, MenuLoadError, OrderNotFoundError, OrderNotPendingError
from .rendering import format_price

DEFAULT_CATEGORY = "Main Course"


class MenuItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    description: str = ""
    price: int = Field(ge=0)
    category: str = DEFAULT_CATEGORY
    availability: bool = True
    emoji: str = ""  # Menu card decoration only

    @property
    def display_label(self) -> str:
        """Label shown in the selection list, e.g. "Kheer - Rs 799"."""
        return f"{self.name} - {format_price(self.price)}"


class Customer(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    email: str
    phone: str


class MenuCatalog(BaseModel):
    items: list[MenuItem] = Field(default_factory=list)

    def add_item(self, item: MenuItem) -> None:
        if any(existing.name == item.name for existing in self.items):
            raise DuplicateItemError(item.name)
        self.items.append(item)

    def seed(self, entries: Iterable[Mapping]) -> None:
        """Bulk-add {name, price} entries as available main courses."""
        for entry in entries:
            self.add_item(
                MenuItem(
                    name=entry["name"],
                    description="",
                    price=entry["price"],
                    category=DEFAULT_CATEGORY,
                )
            )

    def available_items(self) -> list[MenuItem]:
        return [item for item in self.items if item.availability]

    def labels(self) -> list[str]:
        """Selection choices: labels of the available items, in catalog order."""
        return [item.display_label for item in self.available_items()]

    def find_by_display_label(self, label: str) -> MenuItem | None:
        """Resolve a rendered "name - Rs price" label back to an available item."""
        return next((item for item in self.available_items() if item.display_label == label), None)

    def __len__(self) -> int:
        return len(self.items)

    @classmethod
    def from_dict(cls, data: dict) -> "MenuCatalog":
        """Build a catalog from the "items" list of a menu file."""
        catalog = cls()
        for entry in data["items"]:
            catalog.add_item(MenuItem(**entry))
        return catalog


class OrderIdSequence(BaseModel):
    """Monotonic order id allocator. Ids start at 1 and are never reused."""

    next_value: int = Field(default=1, ge=1)

    def allocate(self) -> int:
        value = self.next_value
        self.next_value += 1
        return value


class Order(BaseModel):
    order_id: int
    items: list[MenuItem] = Field(default_factory=list)
    customer: Customer
    status: OrderStatus = OrderStatus.PENDING
    payment_details: str | None = None

    @classmethod
    def create(
        cls,
        customer: Customer,
        items: Iterable[MenuItem],
        payment_details: str | None = None,
        *,
        id_sequence: OrderIdSequence,
    ) -> Self:
        """Create a pending order with the next id from ``id_sequence``.

        The items are copied, so the caller's list can keep growing without
        touching the new order.
        """
        return cls(
            order_id=id_sequence.allocate(),
            items=list(items),
            customer=customer,
            status=OrderStatus.PENDING,
            payment_details=payment_details,
        )

    def add_item(self, item: MenuItem) -> None:
        if self.status != OrderStatus.PENDING:
            raise OrderNotPendingError(self.order_id, self.status.value)
        self.items.append(item)

    def calculate_total_price(self) -> int:
        return sum(item.price for item in self.items)

    def confirm_order(self) -> None:
        # Confirming twice is allowed.
        self.status = OrderStatus.CONFIRMED

    def cancel_order(self) -> None:
        self.status = OrderStatus.CANCELLED

    def format_order_details(self) -> str:
        """Customer block, one line per ordered unit, then the total."""
        customer = self.customer
        lines = [
            "Customer:",
            f"  {customer.name} ({customer.email}, {customer.phone})",
            "Items:",
        ]
        lines.extend(f"- {item.name} ({format_price(item.price)})" for item in self.items)
        lines.append(f"Total Price: {format_price(self.calculate_total_price())}")
        return "\n".join(lines)


class OrderBook(BaseModel):
    """The restaurant: its catalog, the orders placed so far and id allocation."""

    name: str
    location: str
    catalog: MenuCatalog = Field(default_factory=MenuCatalog)
    orders: list[Order] = Field(default_factory=list)
    order_ids: OrderIdSequence = Field(default_factory=OrderIdSequence)

    def create_order(
        self,
        customer: Customer,
        items: Iterable[MenuItem],
        payment_details: str | None = None,
    ) -> Order:
        order = Order.create(customer, items, payment_details, id_sequence=self.order_ids)
        self.orders.append(order)
        logger.info("Order {} created for {} ({} items)", order.order_id, customer.name, len(order.items))
        return order

    def get_order(self, order_id: int) -> Order:
        for order in self.orders:
            if order.order_id == order_id:
                return order
        raise OrderNotFoundError(order_id)

    def menu_labels(self) -> list[str]:
        return self.catalog.labels()

    def find_by_display_label(self, label: str) -> MenuItem | None:
        return self.catalog.find_by_display_label(label)

    @classmethod
    def from_dict(cls, data: dict) -> "OrderBook":
        """Load an OrderBook from a dictionary (matching the menu JSON structure)."""
        metadata = data["metadata"]
        return cls(
            name=metadata["name"],
            location=metadata["location"],
            catalog=MenuCatalog.from_dict(data),
        )

    @classmethod
    def from_menu_file(cls, path: str | Path) -> "OrderBook":
        """Load an OrderBook from a menu JSON file path."""
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
            book = cls.from_dict(data)
        except (OSError, json.JSONDecodeError, KeyError, TypeError, ValidationError, DuplicateItemError) as exc:
            raise MenuLoadError(f"Could not load menu from {path}: {exc}") from exc
        logger.debug("Loaded menu {} with {} items", path, len(book.catalog))
        return book
