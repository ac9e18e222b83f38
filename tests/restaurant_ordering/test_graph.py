"""Session tests for the ordering graph.

Every test drives the compiled graph end to end with a scripted driver, so
no terminal is needed.
"""

from restaurant_ordering import graph as graph_module
from restaurant_ordering.enums import OrderStatus, PostOrderAction
from restaurant_ordering.graph import graph, run_session, should_add_more, should_pay, should_update
from restaurant_ordering.models import MenuItem, OrderBook

PASTA = "Pasta Carbonara - Rs 1299"
KHEER = "Kheer - Rs 799"
SELECT_PROMPT = "Select an item to order:"


class TestGraphCompiles:
    """Verify the graph compiles and has the expected structure."""

    def test_graph_is_compiled(self):
        """Graph should be a compiled StateGraph."""
        assert graph is not None

    def test_graph_has_expected_nodes(self):
        """Graph should have one node per session step."""
        node_names = set(graph.get_graph().nodes)
        for name in (
            "welcome",
            "collect_customer",
            "select_item",
            "enter_quantity",
            "continue_or_checkout",
            "summary",
            "confirm_order",
            "payment",
            "finalize",
            "post_order",
        ):
            assert name in node_names


class TestRouting:
    def test_should_add_more(self):
        """Adding more loops to selection, otherwise checkout."""
        assert should_add_more({"add_more": True}) == "more"
        assert should_add_more({"add_more": False}) == "checkout"

    def test_should_pay(self):
        """A confirmed order goes to payment, a declined one ends."""
        assert should_pay({"confirmed": True}) == "pay"
        assert should_pay({"confirmed": False}) == "end"

    def test_should_update(self):
        """Only Update Order loops back to selection."""
        assert should_update({"post_order_action": PostOrderAction.UPDATE}) == "update"
        assert should_update({"post_order_action": PostOrderAction.CANCEL}) == "end"
        assert should_update({"post_order_action": PostOrderAction.NO}) == "end"


class TestCheckout:
    def test_cash_on_delivery_scenario(self, order_book: OrderBook, customer_answers, make_driver):
        """Pasta x2 + Kheer x1 paid cash on delivery gives one confirmed order of 3397."""
        driver = make_driver(
            [*customer_answers, PASTA, "2", True, KHEER, "1", False, True, "Cash on Delivery", "No"]
        )
        result = run_session(order_book, driver)

        order = result["order"]
        assert order.order_id == 1
        assert order.status == OrderStatus.CONFIRMED
        assert len(order.items) == 3
        assert order.calculate_total_price() == 3397
        assert order.payment_details == "Cash on Delivery"
        assert order.customer.name == "Ayesha"
        assert order_book.orders == [order]
        assert "Payment confirmed. Order placed successfully! Order ID: 1" in driver.said_text
        assert order.format_order_details() in driver.said_text

    def test_summary_lists_every_unit(self, order_book: OrderBook, customer_answers, make_driver):
        """Summary prints one line per ordered unit."""
        driver = make_driver([*customer_answers, PASTA, "2", False, False])
        run_session(order_book, driver)
        summary_start = driver.said_text.index("Your order summary:")
        assert driver.said_text[summary_start + 1 :] == [
            "- Pasta Carbonara, Rs 1299",
            "- Pasta Carbonara, Rs 1299",
        ]

    def test_declining_confirmation_places_nothing(self, order_book: OrderBook, customer_answers, make_driver):
        """Declining the order ends the session without placing it."""
        driver = make_driver([*customer_answers, KHEER, "1", False, False])
        result = run_session(order_book, driver)
        assert order_book.orders == []
        assert result.get("order") is None
        assert len(result["pending_items"]) == 1

    def test_invalid_quantity_is_asked_again(self, order_book: OrderBook, customer_answers, make_driver):
        """Rejected quantities are asked again until valid."""
        driver = make_driver([*customer_answers, KHEER, "0", "abc", "3.5", "3", False, False])
        result = run_session(order_book, driver)
        assert [answer for _, answer in driver.rejected] == ["0", "abc", "3.5"]
        assert len(result["pending_items"]) == 3
        assert "3 Kheer(s) added to your order." in driver.said_text

    def test_unresolvable_selection_is_asked_again(self, order_book: OrderBook, customer_answers, make_driver):
        """An unknown label leaves the accumulator alone and re-asks the selection."""
        driver = make_driver([*customer_answers, "Haleem - Rs 1599", KHEER, "1", False, False])
        result = run_session(order_book, driver)
        assert driver.asked_messages().count(SELECT_PROMPT) == 2
        assert "Invalid item selection. Please select a valid item from the menu." in driver.said_text
        assert [item.name for item in result["pending_items"]] == ["Kheer"]

    def test_bank_account_payment(self, order_book: OrderBook, customer_answers, make_driver):
        """Bank payment rejects bad accounts and amounts before placing the order."""
        driver = make_driver(
            [
                *customer_answers,
                KHEER, "1", False, True,
                "Bank Account", "12345", "1234567890123", "800", "799",
                "No",
            ]
        )
        result = run_session(order_book, driver)
        assert result["order"].payment_details == "Bank Account: 1234567890123, Amount Paid: Rs 799"
        assert [answer for _, answer in driver.rejected] == ["12345", "800"]

    def test_overlong_amount_is_asked_again(self, order_book: OrderBook, customer_answers, make_driver):
        """A digit string too long for int() is rejected and the amount asked again."""
        driver = make_driver(
            [
                *customer_answers,
                KHEER, "1", False, True,
                "EasyPaisa", "03001234567", "9" * 5000, "799",
                "No",
            ]
        )
        result = run_session(order_book, driver)
        assert result["order"].payment_details == "EasyPaisa: 03001234567, Amount Paid: Rs 799"
        assert [answer for _, answer in driver.rejected] == ["9" * 5000]

    def test_unavailable_item_is_not_offered(self, order_book: OrderBook, customer_answers, make_driver):
        """Unavailable dishes are missing from the choices and cannot be selected."""
        order_book.catalog.add_item(MenuItem(name="Haleem", price=1599, availability=False))
        driver = make_driver([*customer_answers, "Haleem - Rs 1599", KHEER, "1", False, False])
        result = run_session(order_book, driver)
        assert driver.asked[3].choices == [PASTA, KHEER]
        assert [item.name for item in result["pending_items"]] == ["Kheer"]

    def test_run_config_carries_session_id(self, order_book: OrderBook, make_driver, monkeypatch):
        """The run config names the session and injects the driver."""
        seen = {}

        class RecordingGraph:
            def invoke(self, state, config):
                seen["config"] = config
                return state

        monkeypatch.setattr(graph_module, "graph", RecordingGraph())
        driver = make_driver([])
        run_session(order_book, driver, recursion_limit=500)
        configurable = seen["config"]["configurable"]
        assert configurable["session_id"].startswith("cli-")
        assert configurable["driver"] is driver
        assert "thread_id" not in configurable
        assert seen["config"]["recursion_limit"] == 500


class TestPostOrderManagement:
    def test_cancel_keeps_order_confirmed(self, order_book: OrderBook, customer_answers, make_driver):
        """Cancel Order only prints a notice; the placed order stays confirmed."""
        driver = make_driver([*customer_answers, KHEER, "1", False, True, "Cash on Delivery", "Cancel Order"])
        result = run_session(order_book, driver)
        assert "Order has been cancelled." in driver.said_text
        assert result["order"].status == OrderStatus.CONFIRMED
        assert order_book.get_order(1).status == OrderStatus.CONFIRMED

    def test_update_grows_the_same_accumulator(self, order_book: OrderBook, customer_answers, make_driver):
        """Update Order appends to the session items and places a second order."""
        driver = make_driver(
            [
                *customer_answers,
                KHEER, "1", False, True, "Cash on Delivery", "Update Order",
                PASTA, "1", False, True, "Cash on Delivery", "No",
            ]
        )
        result = run_session(order_book, driver)

        first, second = order_book.orders
        assert "You can update your order." in driver.said_text
        assert [item.name for item in first.items] == ["Kheer"]
        assert [item.name for item in second.items] == ["Kheer", "Pasta Carbonara"]
        assert second.order_id == 2
        assert second.calculate_total_price() == 799 + 1299
        assert result["order"] is second

    def test_second_checkout_charges_the_whole_accumulator(
        self, order_book: OrderBook, customer_answers, make_driver
    ):
        """After Update Order the amount to pay covers the first order's items again."""
        driver = make_driver(
            [
                *customer_answers,
                KHEER, "1", False, True, "Bank Account", "1234567890123", "799", "Update Order",
                PASTA, "1", False, True, "Bank Account", "1234567890123", "1299", "2098", "No",
            ]
        )
        run_session(order_book, driver)
        amount_prompts = [m for m in driver.asked_messages() if m.startswith("Enter the amount to pay")]
        assert amount_prompts == ["Enter the amount to pay (Rs 799):", "Enter the amount to pay (Rs 2098):"]
        assert driver.rejected[-1][1] == "1299"
        assert order_book.orders[1].payment_details == "Bank Account: 1234567890123, Amount Paid: Rs 2098"

    def test_no_ends_session(self, order_book: OrderBook, customer_answers, make_driver):
        """Answering No ends the session after the management prompt."""
        driver = make_driver([*customer_answers, KHEER, "1", False, True, "Cash on Delivery", "No"])
        run_session(order_book, driver)
        assert not driver.answers
        assert driver.asked_messages()[-1] == "Do you want to cancel or update your order?"
