from .account import Account, Balance
from .auth import Authenticated, Unauthenticated
from .client import Client
from .errors import *
from .market import Candlestick, DepthTicker, ExchangeInfo, OrderBook, RateLimit, SymbolInfo
from .order import CancelledOrder, Order, OrderInfo
from .query import AccountQuery, CancelOpenOrdersQuery, CancelOrderQuery, DepthQuery, KlinesQuery, NewOrderQuery, OpenOrdersQuery, OrderQuery
from .util.enums import Endpoints, Interval, OrderSide, OrderStatus, OrderType, ResponseType, TimeInForce
