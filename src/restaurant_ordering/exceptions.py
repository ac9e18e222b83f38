"""Exception hierarchy for the ordering core.

Invalid user input is never raised; drivers re-prompt instead. These
errors signal misuse of the model or a broken menu file.
"""


class OrderingError(Exception):
    """Base class for all ordering errors."""


class DuplicateItemError(OrderingError):
    def __init__(self, name: str) -> None:
        super().__init__(f"Menu already contains an item named {name!r}")
        self.name = name


class OrderNotPendingError(OrderingError):
    def __init__(self, order_id: int, status: str) -> None:
        super().__init__(f"Order {order_id} is {status}; items can only be added while pending")
        self.order_id = order_id
        self.status = status


class OrderNotFoundError(OrderingError):
    def __init__(self, order_id: int) -> None:
        super().__init__(f"No order with id {order_id}")
        self.order_id = order_id


class MenuLoadError(OrderingError):
    """Menu file could not be read or does not match the expected structure."""
