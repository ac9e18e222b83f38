"""LangGraph ordering session graph.

One node per session step:

    welcome -> collect_customer -> select_item -> enter_quantity
      -> continue_or_checkout --(more)--> select_item
                              --(done)--> summary -> confirm_order
      -> payment -> finalize -> post_order --(update)--> select_item

The interaction driver is not part of the state. It is passed per run in
``config["configurable"]["driver"]`` so the same compiled graph serves the
console and scripted test drivers.

Exported as `graph`.
"""

import time
import uuid
from typing import TypedDict

from langchain_core.runnables import RunnableConfig
from langgraph.graph import END, START, StateGraph
from loguru import logger

from .enums import PostOrderAction
from .models import Customer, MenuItem, Order, OrderBook
from .payment import choose_payment_method, collect_payment
from .prompts import InteractionDriver, confirm_prompt, list_prompt, text_prompt
from .rendering import menu_card, menu_card_header, summary_lines, welcome_banner
from .validators import is_positive_quantity

DEFAULT_RECURSION_LIMIT = 10_000

# ---------------------------------------------------------------------------
# State Schema
# ---------------------------------------------------------------------------


class OrderingState(TypedDict, total=False):
    """State for one ordering session."""

    order_book: OrderBook  # Restaurant catalog and placed orders
    customer: Customer
    pending_items: list[MenuItem]  # Accumulator, one entry per unit
    selected_item: MenuItem  # Item picked in the latest selection step
    add_more: bool
    confirmed: bool
    payment_details: str
    order: Order  # Most recently placed order
    post_order_action: PostOrderAction


def _driver(config: RunnableConfig) -> InteractionDriver:
    return config["configurable"]["driver"]


def _pending_total(state: OrderingState) -> int:
    return sum(item.price for item in state.get("pending_items", []))


# ---------------------------------------------------------------------------
# Nodes
# ---------------------------------------------------------------------------


def welcome(state: OrderingState, config: RunnableConfig) -> dict:
    """Print the welcome banner and the menu card."""
    driver = _driver(config)
    book = state["order_book"]
    pause = config["configurable"].get("intro_pause_seconds", 0.0)

    driver.say(welcome_banner(book.name))
    time.sleep(pause)
    driver.say(" " + "-" * 72 + " ")
    driver.say(menu_card_header())
    time.sleep(pause)
    driver.say(menu_card(book))
    return {"pending_items": list(state.get("pending_items", []))}


def collect_customer(state: OrderingState, config: RunnableConfig) -> dict:
    driver = _driver(config)
    customer = Customer(
        name=driver.ask(text_prompt("Please enter your name:")),
        email=driver.ask(text_prompt("Please enter your email:")),
        phone=driver.ask(text_prompt("Please enter your phone number:")),
    )
    logger.debug("Customer collected: {}", customer.name)
    return {"customer": customer}


def select_item(state: OrderingState, config: RunnableConfig) -> dict:
    """Ask for a menu item until the answer resolves to a catalog entry.

    Unresolvable answers leave the accumulator untouched.
    """
    driver = _driver(config)
    book = state["order_book"]
    while True:
        label = driver.ask(list_prompt("Select an item to order:", book.menu_labels()))
        item = book.find_by_display_label(label)
        if item is not None:
            logger.debug("Selected {}", item.name)
            return {"selected_item": item}
        logger.debug("Unresolvable selection: {!r}", label)
        driver.say("Invalid item selection. Please select a valid item from the menu.", style="red")


def enter_quantity(state: OrderingState, config: RunnableConfig) -> dict:
    driver = _driver(config)
    item = state["selected_item"]
    answer = driver.ask(
        text_prompt(
            f"Enter quantity for {item.name}:",
            validator=is_positive_quantity,
            error_message="Please enter a whole number greater than zero.",
        )
    )
    quantity = int(answer)
    driver.say(f"{quantity} {item.name}(s) added to your order.", style="green")
    return {"pending_items": [*state.get("pending_items", []), *([item] * quantity)]}


def continue_or_checkout(state: OrderingState, config: RunnableConfig) -> dict:
    add_more = _driver(config).ask(confirm_prompt("Do you want to add more items to your order?", default=False))
    return {"add_more": bool(add_more)}


def summary(state: OrderingState, config: RunnableConfig) -> dict:
    driver = _driver(config)
    driver.say("Your order summary:", style="green")
    for line in summary_lines(state.get("pending_items", [])):
        driver.say(line, style="yellow")
    return {}


def confirm_order(state: OrderingState, config: RunnableConfig) -> dict:
    confirmed = _driver(config).ask(confirm_prompt("Do you want to proceed with this order?", default=False))
    return {"confirmed": bool(confirmed)}


def payment(state: OrderingState, config: RunnableConfig) -> dict:
    driver = _driver(config)
    method = choose_payment_method(driver)
    details = collect_payment(driver, method, _pending_total(state))
    return {"payment_details": details}


def finalize(state: OrderingState, config: RunnableConfig) -> dict:
    """Place the order with the accumulated items and confirm it right away."""
    driver = _driver(config)
    order = state["order_book"].create_order(state["customer"], state["pending_items"], state["payment_details"])
    order.confirm_order()
    logger.info("Order {} confirmed: {}", order.order_id, order.payment_details)

    driver.say(f"Payment confirmed. Order placed successfully! Order ID: {order.order_id}", style="green")
    driver.say(order.format_order_details(), style="yellow")
    driver.say("Thank you for placing your order!", style="green")
    return {"order": order}


def post_order(state: OrderingState, config: RunnableConfig) -> dict:
    """Offer cancel / update / no after an order is placed.

    Cancelling only prints a notice; the order keeps its confirmed status.
    """
    driver = _driver(config)
    answer = driver.ask(
        list_prompt("Do you want to cancel or update your order?", [action.value for action in PostOrderAction])
    )
    action = PostOrderAction(answer)
    if action == PostOrderAction.CANCEL:
        logger.info("Customer asked to cancel order {}", state["order"].order_id)
        driver.say("Order has been cancelled.", style="red")
    elif action == PostOrderAction.UPDATE:
        driver.say("You can update your order.", style="yellow")
    return {"post_order_action": action}


# ---------------------------------------------------------------------------
# Routing
# ---------------------------------------------------------------------------


def should_add_more(state: OrderingState) -> str:
    """Returns "more" to pick another item, "checkout" to show the summary."""
    if state.get("add_more"):
        logger.debug("should_add_more -> more")
        return "more"
    logger.debug("should_add_more -> checkout")
    return "checkout"


def should_pay(state: OrderingState) -> str:
    """Returns "pay" when the customer confirmed the order, "end" otherwise."""
    if state.get("confirmed"):
        return "pay"
    logger.info("Order not confirmed, ending session")
    return "end"


def should_update(state: OrderingState) -> str:
    """Returns "update" to re-enter item selection, "end" otherwise."""
    if state.get("post_order_action") == PostOrderAction.UPDATE:
        return "update"
    return "end"


# ---------------------------------------------------------------------------
# Graph Construction
# ---------------------------------------------------------------------------

_builder = StateGraph(OrderingState)
_builder.add_node("welcome", welcome)
_builder.add_node("collect_customer", collect_customer)
_builder.add_node("select_item", select_item)
_builder.add_node("enter_quantity", enter_quantity)
_builder.add_node("continue_or_checkout", continue_or_checkout)
_builder.add_node("summary", summary)
_builder.add_node("confirm_order", confirm_order)
_builder.add_node("payment", payment)
_builder.add_node("finalize", finalize)
_builder.add_node("post_order", post_order)

_builder.add_edge(START, "welcome")
_builder.add_edge("welcome", "collect_customer")
_builder.add_edge("collect_customer", "select_item")
_builder.add_edge("select_item", "enter_quantity")
_builder.add_edge("enter_quantity", "continue_or_checkout")
_builder.add_conditional_edges(
    "continue_or_checkout",
    should_add_more,
    {
        "more": "select_item",
        "checkout": "summary",
    },
)
_builder.add_edge("summary", "confirm_order")
_builder.add_conditional_edges(
    "confirm_order",
    should_pay,
    {
        "pay": "payment",
        "end": END,
    },
)
_builder.add_edge("payment", "finalize")
_builder.add_edge("finalize", "post_order")
_builder.add_conditional_edges(
    "post_order",
    should_update,
    {
        "update": "select_item",
        "end": END,
    },
)

graph = _builder.compile()


def run_session(
    order_book: OrderBook,
    driver: InteractionDriver,
    *,
    intro_pause_seconds: float = 0.0,
    recursion_limit: int = DEFAULT_RECURSION_LIMIT,
) -> OrderingState:
    """Run one ordering session to completion and return the final state."""
    session_id = f"cli-{uuid.uuid4()}"
    logger.info("Session started (session_id={})", session_id)
    config: RunnableConfig = {
        "configurable": {
            "session_id": session_id,
            "driver": driver,
            "intro_pause_seconds": intro_pause_seconds,
        },
        "recursion_limit": recursion_limit,
    }
    result = graph.invoke({"order_book": order_book, "pending_items": []}, config=config)
    logger.info("Session ended (session_id={}, orders={})", session_id, len(order_book.orders))
    return result
