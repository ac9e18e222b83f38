"""Rendering helpers for the console: prices, banners and the menu card."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.table import Table
from rich.text import Text

if TYPE_CHECKING:
    from .models import MenuItem, OrderBook

CURRENCY_PREFIX = "Rs"


def format_price(amount: int) -> str:
    """Render an amount as "Rs <integer>"; no decimals, no locale."""
    return f"{CURRENCY_PREFIX} {amount}"


def welcome_banner(restaurant_name: str) -> Text:
    return Text(f"\t\t*-*-*-*-*-Welcome to {restaurant_name}!-*-*-*-*-*\n", style="yellow")


def menu_card_header() -> Text:
    return Text("\t\t*-*-*-*-*-*-( MENU CARD )-*-*-*-*-*-*\n", style="bold black on bright_green")


def menu_card(book: OrderBook) -> Table:
    """Build the menu card table: one row per available item."""
    table = Table(title=f"{book.name}, {book.location}", border_style="blue", show_lines=False)
    table.add_column("Dish", style="bold")
    table.add_column("Description")
    table.add_column("", justify="center")
    table.add_column("Price", justify="right", style="green")
    for item in book.catalog.available_items():
        table.add_row(item.name, item.description, item.emoji, format_price(item.price))
    return table


def summary_lines(items: list[MenuItem]) -> list[str]:
    """One "- name, Rs price" line per ordered unit."""
    return [f"- {item.name}, {format_price(item.price)}" for item in items]
