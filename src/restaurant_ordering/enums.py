from enum import StrEnum


class OrderStatus(StrEnum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"


class PaymentMethod(StrEnum):
    CASH_ON_DELIVERY = "Cash on Delivery"
    BANK_ACCOUNT = "Bank Account"
    CREDIT_CARD = "Credit Card"
    EASYPAISA = "EasyPaisa"


class PostOrderAction(StrEnum):
    CANCEL = "Cancel Order"
    UPDATE = "Update Order"
    NO = "No"


class PromptKind(StrEnum):
    LIST = "list"
    TEXT = "text"
    MASKED = "masked"
    CONFIRM = "confirm"
