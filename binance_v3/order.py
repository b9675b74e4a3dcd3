from datetime import datetime
from decimal import Decimal

from .util.enums import OrderSide, OrderStatus, OrderType, TimeInForce
from .util.helpers import auto_repr, to_decimal


class Order:
    """An order, as returned when it's submitted with a `RESULT` response type.

    Attributes:
        client_order_id (str): The client order ID, yours or generated.
        cummulative_quote_qty (:class:`~decimal.Decimal`): The quote asset
            amount filled so far. (The misspelling is the exchange's.)
        executed_qty (:class:`~decimal.Decimal`): The base asset amount filled.
        order_id (int): The exchange's ID for the order.
        orig_qty (:class:`~decimal.Decimal`): The base asset amount ordered.
        price (:class:`~decimal.Decimal`): The limit price, `0` for market orders.
        side (:class:`~binance_v3.util.enums.OrderSide`): ...
        status (:class:`~binance_v3.util.enums.OrderStatus`): ...
        symbol (str): The trading pair.
        time_in_force (:class:`~binance_v3.util.enums.TimeInForce`): ...
        transact_time (int): When the order was placed, in epoch ms.
        type (:class:`~binance_v3.util.enums.OrderType`): ...

    """

    client_order_id: str
    cummulative_quote_qty: Decimal
    executed_qty: Decimal
    order_id: int
    orig_qty: Decimal
    price: Decimal
    side: OrderSide
    status: OrderStatus
    symbol: str
    time_in_force: TimeInForce
    transact_time: int
    type: OrderType

    def __init__(self, **data):
        self.symbol                = data["symbol"]
        self.order_id              = int(data["orderId"])
        self.client_order_id       = data["clientOrderId"]
        self.transact_time         = int(data["transactTime"])
        self.price                 = to_decimal(data["price"])
        self.orig_qty              = to_decimal(data["origQty"])
        self.executed_qty          = to_decimal(data["executedQty"])
        self.cummulative_quote_qty = to_decimal(data["cummulativeQuoteQty"])
        self.status                = OrderStatus(data["status"])
        self.time_in_force         = TimeInForce(data["timeInForce"])
        self.type                  = OrderType(data["type"])
        self.side                  = OrderSide(data["side"])

    @property
    def transacted_at(self) -> datetime:
        return datetime.fromtimestamp(self.transact_time / 1000)

    def __repr__(self) -> str:
        return auto_repr(self)

    def __str__(self) -> str:
        return f"{self.side.value} {self.orig_qty} {self.symbol} @ {self.price} " + \
            f"({self.status.value})"


class OrderInfo:
    """An order, as returned when querying it.

    Not every field is returned for every order; those missing are `None`.

    """

    client_order_id: str
    cummulative_quote_qty: Decimal
    executed_qty: Decimal
    iceberg_qty: Decimal
    is_working: bool
    order_id: int
    order_list_id: int
    orig_qty: Decimal
    orig_quote_order_qty: Decimal
    price: Decimal
    side: OrderSide
    status: OrderStatus
    stop_price: Decimal
    symbol: str
    time: int
    time_in_force: TimeInForce
    type: OrderType
    update_time: int

    def __init__(self, **data):
        self.symbol                = data["symbol"]
        self.order_id              = int(data["orderId"])
        self.order_list_id         = data.get("orderListId")
        self.client_order_id       = data["clientOrderId"]
        self.price                 = to_decimal(data["price"])
        self.orig_qty              = to_decimal(data["origQty"])
        self.executed_qty          = to_decimal(data["executedQty"])
        self.cummulative_quote_qty = to_decimal(data["cummulativeQuoteQty"])
        self.status                = OrderStatus(data["status"])
        self.time_in_force         = TimeInForce(data["timeInForce"])
        self.type                  = OrderType(data["type"])
        self.side                  = OrderSide(data["side"])
        self.stop_price            = _optional_decimal(data.get("stopPrice"))
        self.iceberg_qty           = _optional_decimal(data.get("icebergQty"))
        self.time                  = data.get("time")
        self.update_time           = data.get("updateTime")
        self.is_working            = data.get("isWorking")
        self.orig_quote_order_qty  = _optional_decimal(data.get("origQuoteOrderQty"))

    def __repr__(self) -> str:
        return auto_repr(self)

    def __str__(self) -> str:
        return f"{self.side.value} {self.orig_qty} {self.symbol} @ {self.price} " + \
            f"({self.status.value})"


class CancelledOrder:

    client_order_id: str
    cummulative_quote_qty: Decimal
    executed_qty: Decimal
    order_id: int
    order_list_id: int
    orig_client_order_id: str
    orig_qty: Decimal
    price: Decimal
    side: OrderSide
    status: OrderStatus
    symbol: str
    time_in_force: TimeInForce
    type: OrderType

    def __init__(self, **data):
        self.symbol                = data["symbol"]
        self.orig_client_order_id  = data["origClientOrderId"]
        self.order_id              = int(data["orderId"])
        self.order_list_id         = data.get("orderListId")
        self.client_order_id       = data["clientOrderId"]
        self.price                 = to_decimal(data["price"])
        self.orig_qty              = to_decimal(data["origQty"])
        self.executed_qty          = to_decimal(data["executedQty"])
        self.cummulative_quote_qty = to_decimal(data["cummulativeQuoteQty"])
        self.status                = OrderStatus(data["status"])
        self.time_in_force         = TimeInForce(data["timeInForce"])
        self.type                  = OrderType(data["type"])
        self.side                  = OrderSide(data["side"])

    def __repr__(self) -> str:
        return auto_repr(self)

    def __str__(self) -> str:
        return self.orig_client_order_id


def _optional_decimal(value):
    return None if value is None else to_decimal(value)
