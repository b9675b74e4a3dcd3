from datetime import datetime
from decimal import Decimal
from typing import List, Tuple

from .util import auto_repr, to_decimal, to_snake_case


class RateLimit:

    interval: str
    interval_num: int
    limit: int
    rate_limit_type: str

    def __init__(self, **data):
        for k in data.keys():
            setattr(self, to_snake_case(k), data[k])

    def __repr__(self) -> str:
        return auto_repr(self)


class SymbolInfo:
    """A trading pair's rules, as listed in the exchange information.

    Filters are kept as the raw dictionaries the API returns, keyed by
    their `filterType`.

    """

    base_asset: str
    base_asset_precision: int
    filters: dict
    order_types: List[str]
    quote_asset: str
    quote_asset_precision: int
    status: str
    symbol: str

    def __init__(self, **data):
        for k in data.keys():
            if k == "filters":
                self.filters = {f["filterType"]: f for f in data[k]}
            else:
                setattr(self, to_snake_case(k), data[k])

    def __repr__(self) -> str:
        return auto_repr(self)

    def __str__(self) -> str:
        return self.symbol


class ExchangeInfo:

    rate_limits: List[RateLimit]
    server_time: int
    symbols: List[SymbolInfo]
    timezone: str

    def __init__(self, **data):
        self.timezone    = data["timezone"]
        self.server_time = int(data["serverTime"])
        self.rate_limits = [RateLimit(**r) for r in data.get("rateLimits", [])]
        self.symbols     = [SymbolInfo(**s) for s in data["symbols"]]

    def symbol(self, name: str) -> SymbolInfo:
        """Get a single trading pair by name.

        Raises:
            KeyError: The exchange doesn't list `name`.

        """

        for s in self.symbols:
            if s.symbol == name:
                return s

        raise KeyError(name)

    def __repr__(self) -> str:
        return f"<timezone='{self.timezone}' server_time={self.server_time} " + \
            f"symbols={len(self.symbols)}>"


class Candlestick:

    """A kline model class.

    Klines are returned as plain arrays, so the positional order of the
    arguments matters.

    """

    close: Decimal
    close_time: int
    high: Decimal
    low: Decimal
    number_of_trades: int
    open: Decimal
    open_time: int
    quote_asset_volume: Decimal
    taker_buy_base_asset_volume: Decimal
    taker_buy_quote_asset_volume: Decimal
    volume: Decimal

    def __init__(self,
    open_time,
    open,
    high,
    low,
    close,
    volume,
    close_time,
    quote_asset_volume,
    number_of_trades,
    taker_buy_base_asset_volume,
    taker_buy_quote_asset_volume,
    *_):
        self.open_time = int(open_time)
        self.open = to_decimal(open)
        self.high = to_decimal(high)
        self.low = to_decimal(low)
        self.close = to_decimal(close)
        self.volume = to_decimal(volume)
        self.close_time = int(close_time)
        self.quote_asset_volume = to_decimal(quote_asset_volume)
        self.number_of_trades = int(number_of_trades)
        self.taker_buy_base_asset_volume = to_decimal(taker_buy_base_asset_volume)
        self.taker_buy_quote_asset_volume = to_decimal(taker_buy_quote_asset_volume)

    @property
    def start_time(self) -> datetime:
        return datetime.fromtimestamp(self.open_time / 1000)

    def __repr__(self) -> str:
        return auto_repr(self)

    def __str__(self) -> str:
        return f"High: {self.high} Low: {self.low} " + \
            f"Open: {self.open} Close: {self.close}"


class OrderBook:
    """The order book of a trading pair.

    Attributes:
        asks: `(price, quantity)` pairs, lowest price first.
        bids: `(price, quantity)` pairs, highest price first.
        last_update_id (int): ...

    """

    asks: List[Tuple[Decimal, Decimal]]
    bids: List[Tuple[Decimal, Decimal]]
    last_update_id: int

    def __init__(self, **data):
        self.last_update_id = int(data["lastUpdateId"])
        self.bids = [(to_decimal(p), to_decimal(q)) for p, q in data["bids"]]
        self.asks = [(to_decimal(p), to_decimal(q)) for p, q in data["asks"]]

    def __repr__(self) -> str:
        return f"<last_update_id={self.last_update_id} " + \
            f"bids={len(self.bids)} asks={len(self.asks)}>"


class DepthTicker:
    """The best bid and ask currently on a trading pair's order book."""

    ask_price: Decimal
    ask_qty: Decimal
    bid_price: Decimal
    bid_qty: Decimal
    symbol: str

    def __init__(self, **data):
        self.symbol    = data["symbol"]
        self.bid_price = to_decimal(data["bidPrice"])
        self.bid_qty   = to_decimal(data["bidQty"])
        self.ask_price = to_decimal(data["askPrice"])
        self.ask_qty   = to_decimal(data["askQty"])

    def __repr__(self) -> str:
        return auto_repr(self)

    def __str__(self) -> str:
        return f"({self.symbol}) Bid: {self.bid_price}, Ask: {self.ask_price}"
