import copy
import urllib.parse
from datetime import datetime
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Tuple, Type, Union

from .errors import InvalidArguments
from .util.enums import Interval, OrderSide, OrderType, ResponseType, TimeInForce
from .util.helpers import current_millis

_DECIMAL_TYPEHINT = Union[Decimal, str, int]
_TIMESTAMP_TYPEHINT = Union[int, datetime]


def _format_value(value: Any) -> str:
    if isinstance(value, Enum):
        return str(value.value)

    if isinstance(value, bool):
        return "true" if value else "false"

    if isinstance(value, Decimal):
        return format(value, "f")

    if isinstance(value, datetime):
        return str(int(value.timestamp() * 1000))

    return str(value)


class Query:
    """The parameters of a single request.

    Subclasses list their fields in `__fields__` as
    `(attribute, parameter name)` pairs. The query string always follows that
    order, since a signature covers the exact string that's sent.

    """

    __fields__: Tuple[Tuple[str, str], ...] = ()

    def to_query_string(self) -> str:
        """Serialise the query into `key=value` pairs joined by `&`.

        Fields set to `None` are left out.

        """

        pairs = []

        for attr, key in self.__fields__:
            value = getattr(self, attr)

            if value is None:
                continue

            pairs.append((key, _format_value(value)))

        return urllib.parse.urlencode(pairs)

    def __str__(self) -> str:
        return self.to_query_string()

    def __repr__(self) -> str:
        attrs = " ".join(f"{attr}={getattr(self, attr)!r}" for attr, _ in self.__fields__)
        return f"<{type(self).__name__} {attrs}>"


class SignedQuery(Query):
    """A query for a `SIGNED` endpoint.

    Args:
        recv_window: How many ms after `timestamp` the request stays valid.
            The exchange defaults to 5000 if left out.
        timestamp: When the request was made, in epoch ms. Defaults to now.

    """

    recv_window: int
    timestamp: int

    def __init__(self, *, recv_window: int=None, timestamp: _TIMESTAMP_TYPEHINT=None):
        if isinstance(timestamp, datetime):
            timestamp = int(timestamp.timestamp() * 1000)

        self.recv_window = recv_window
        self.timestamp = current_millis() if timestamp is None else timestamp

    def with_timestamp(self, timestamp: int) -> "SignedQuery":
        """Return a copy of this query with a different timestamp."""

        query = copy.copy(self)
        query.timestamp = timestamp

        return query


class KlinesQuery(Query):

    __fields__ = (
        ("symbol", "symbol"),
        ("interval", "interval"),
        ("start_time", "startTime"),
        ("end_time", "endTime"),
        ("limit", "limit")
    )

    def __init__(self,
            symbol: str,
            interval: Union[str, Interval]=Interval.ONE_MINUTE,
            *,
            start_time: _TIMESTAMP_TYPEHINT=None,
            end_time: _TIMESTAMP_TYPEHINT=None,
            limit: int=None
        ):
        if not symbol:
            raise InvalidArguments("A symbol is required for klines.")

        self.symbol = symbol
        self.interval = _enum_member(Interval, interval)
        self.start_time = start_time
        self.end_time = end_time
        self.limit = limit


class DepthQuery(Query):

    __fields__ = (
        ("symbol", "symbol"),
        ("limit", "limit")
    )

    def __init__(self, symbol: str, limit: int=None):
        if not symbol:
            raise InvalidArguments("A symbol is required for the order book.")

        self.symbol = symbol
        self.limit = limit


class AccountQuery(SignedQuery):

    __fields__ = (
        ("recv_window", "recvWindow"),
        ("timestamp", "timestamp")
    )


class OpenOrdersQuery(SignedQuery):
    """Open orders for `symbol`, or for every symbol if left out."""

    __fields__ = (
        ("symbol", "symbol"),
        ("recv_window", "recvWindow"),
        ("timestamp", "timestamp")
    )

    def __init__(self, symbol: str=None, **kwargs):
        super().__init__(**kwargs)

        self.symbol = symbol


class CancelOpenOrdersQuery(SignedQuery):

    __fields__ = (
        ("symbol", "symbol"),
        ("recv_window", "recvWindow"),
        ("timestamp", "timestamp")
    )

    def __init__(self, symbol: str, **kwargs):
        if not symbol:
            raise InvalidArguments("A symbol is required to cancel open orders.")

        super().__init__(**kwargs)

        self.symbol = symbol


class OrderQuery(SignedQuery):
    """Look up an order by either its order ID or its client order ID."""

    __fields__ = (
        ("symbol", "symbol"),
        ("order_id", "orderId"),
        ("orig_client_order_id", "origClientOrderId"),
        ("recv_window", "recvWindow"),
        ("timestamp", "timestamp")
    )

    def __init__(self,
            symbol: str,
            *,
            order_id: int=None,
            orig_client_order_id: str=None,
            **kwargs
        ):
        if not symbol:
            raise InvalidArguments("A symbol is required to query an order.")

        if order_id is None and not orig_client_order_id:
            raise InvalidArguments(
                "Either `order_id` or `orig_client_order_id` must be supplied."
            )

        super().__init__(**kwargs)

        self.symbol = symbol
        self.order_id = order_id
        self.orig_client_order_id = orig_client_order_id


class CancelOrderQuery(OrderQuery):

    __fields__ = (
        ("symbol", "symbol"),
        ("order_id", "orderId"),
        ("orig_client_order_id", "origClientOrderId"),
        ("new_client_order_id", "newClientOrderId"),
        ("recv_window", "recvWindow"),
        ("timestamp", "timestamp")
    )

    def __init__(self, symbol: str, *, new_client_order_id: str=None, **kwargs):
        super().__init__(symbol, **kwargs)

        self.new_client_order_id = new_client_order_id


class NewOrderQuery(SignedQuery):
    """A new order, for either the matching engine or the test endpoint.

    Args:
        symbol: The trading pair, e.g. `"BTCUSDT"`.
        side: Buy or sell.
        type: The order type. Limit orders need `price` and `time_in_force`.
        quantity: The base asset amount.
        quote_order_qty: The quote asset amount, for market orders only.
        price: The limit price.
        time_in_force: How long the order stays active.
        new_client_order_id: A unique ID of your own for the order.
        stop_price: The trigger price for stop and take-profit orders.
        iceberg_qty: The visible quantity of an iceberg order.
        new_order_resp_type: How much detail the response should contain.
            Defaults to `RESULT`, which :class:`~binance_v3.order.Order`
            is modelled on.

    Raises:
        InvalidArguments: A combination the exchange would reject anyway.

    """

    __fields__ = (
        ("symbol", "symbol"),
        ("side", "side"),
        ("type", "type"),
        ("time_in_force", "timeInForce"),
        ("quantity", "quantity"),
        ("quote_order_qty", "quoteOrderQty"),
        ("price", "price"),
        ("new_client_order_id", "newClientOrderId"),
        ("stop_price", "stopPrice"),
        ("iceberg_qty", "icebergQty"),
        ("new_order_resp_type", "newOrderRespType"),
        ("recv_window", "recvWindow"),
        ("timestamp", "timestamp")
    )

    def __init__(self,
            symbol: str,
            side: Union[str, OrderSide],
            type: Union[str, OrderType],
            *,
            quantity: _DECIMAL_TYPEHINT=None,
            quote_order_qty: _DECIMAL_TYPEHINT=None,
            price: _DECIMAL_TYPEHINT=None,
            time_in_force: Union[str, TimeInForce]=None,
            new_client_order_id: str=None,
            stop_price: _DECIMAL_TYPEHINT=None,
            iceberg_qty: _DECIMAL_TYPEHINT=None,
            new_order_resp_type: Union[str, ResponseType]=ResponseType.RESULT,
            **kwargs
        ):
        if not symbol:
            raise InvalidArguments("A symbol is required to place an order.")

        side = _enum_member(OrderSide, side)
        type = _enum_member(OrderType, type)

        if type is OrderType.LIMIT and (price is None or time_in_force is None):
            raise InvalidArguments("Limit orders need both a price and a time in force.")

        if type is OrderType.MARKET and quantity is None and quote_order_qty is None:
            raise InvalidArguments("Market orders need a quantity or a quote order quantity.")

        super().__init__(**kwargs)

        self.symbol = symbol
        self.side = side
        self.type = type
        self.time_in_force = None if time_in_force is None else _enum_member(TimeInForce, time_in_force)
        self.quantity = _decimal_or_none(quantity)
        self.quote_order_qty = _decimal_or_none(quote_order_qty)
        self.price = _decimal_or_none(price)
        self.new_client_order_id = new_client_order_id
        self.stop_price = _decimal_or_none(stop_price)
        self.iceberg_qty = _decimal_or_none(iceberg_qty)
        self.new_order_resp_type = None if new_order_resp_type is None \
            else _enum_member(ResponseType, new_order_resp_type)


def _decimal_or_none(value: _DECIMAL_TYPEHINT):
    if value is None:
        return None

    if isinstance(value, float):
        raise InvalidArguments(f"Use a Decimal or a string instead of float {value!r}.")

    try:
        return Decimal(str(value))
    except InvalidOperation:
        raise InvalidArguments(f"{value!r} isn't a valid decimal.") from None


def _enum_member(enum: Type[Enum], value: Any):
    try:
        return enum(value)
    except ValueError:
        raise InvalidArguments(f"{value!r} isn't a valid {enum.__name__}.") from None
