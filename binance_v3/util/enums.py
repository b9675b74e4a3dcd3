from enum import Enum, IntEnum


class Endpoints(str, Enum):
    MAINNET = "https://api.binance.com"

    TESTNET = "https://testnet.binance.vision"


class ErrorCodes(IntEnum):
    """An Enumeration class containing the error codes returned from the API.

    Only the codes a spot trading client is likely to run into are listed;
    any other code is still surfaced, just as a plain
    :exc:`~binance_v3.errors.APIError`.

    Examples:
        Letting `resp` be a returned response from the API;

        >>> resp = {"code": -1021, "msg": "Timestamp for this request is outside of the recvWindow."}
        >>> resp["code"] == ErrorCodes.INVALID_TIMESTAMP
        True

    """

    # General server or network issues
    UNKNOWN = -1000
    DISCONNECTED = -1001
    UNAUTHORIZED = -1002
    TOO_MANY_REQUESTS = -1003
    UNEXPECTED_RESPONSE = -1006
    TIMEOUT = -1007
    INVALID_TIMESTAMP = -1021
    INVALID_SIGNATURE = -1022

    # Request issues
    ILLEGAL_CHARS = -1100
    TOO_MANY_PARAMETERS = -1101
    MANDATORY_PARAM_EMPTY_OR_MALFORMED = -1102
    UNKNOWN_PARAM = -1103
    BAD_SYMBOL = -1121

    # Trading
    NEW_ORDER_REJECTED = -2010
    CANCEL_REJECTED = -2011
    NO_SUCH_ORDER = -2013
    BAD_API_KEY_FMT = -2014
    REJECTED_MBX_KEY = -2015


class Paths(str, Enum):
    """All paths available on the API."""

    ACCOUNT = "/api/v3/account"
    BOOK_TICKER = "/api/v3/ticker/bookTicker"
    DEPTH = "/api/v3/depth"
    EXCHANGE_INFO = "/api/v3/exchangeInfo"
    KLINES = "/api/v3/klines"
    OPEN_ORDERS = "/api/v3/openOrders"
    ORDER = "/api/v3/order"
    ORDER_TEST = "/api/v3/order/test"
    PING = "/api/v3/ping"
    TIME = "/api/v3/time"


class Method(str, Enum):

    DELETE = "DELETE"
    GET = "GET"
    POST = "POST"
    PUT = "PUT"


class OrderSide(str, Enum):

    BUY = "BUY"
    SELL = "SELL"


class OrderStatus(str, Enum):

    NEW = "NEW"
    PARTIALLY_FILLED = "PARTIALLY_FILLED"
    FILLED = "FILLED"
    CANCELED = "CANCELED"
    PENDING_CANCEL = "PENDING_CANCEL"
    REJECTED = "REJECTED"
    EXPIRED = "EXPIRED"
    EXPIRED_IN_MATCH = "EXPIRED_IN_MATCH"


class OrderType(str, Enum):

    LIMIT = "LIMIT"
    MARKET = "MARKET"
    STOP_LOSS = "STOP_LOSS"
    STOP_LOSS_LIMIT = "STOP_LOSS_LIMIT"
    TAKE_PROFIT = "TAKE_PROFIT"
    TAKE_PROFIT_LIMIT = "TAKE_PROFIT_LIMIT"
    LIMIT_MAKER = "LIMIT_MAKER"


class TimeInForce(str, Enum):
    """How long an order stays active before it's executed or expires."""

    GTC = "GTC"  # Good 'til cancelled
    IOC = "IOC"  # Immediate or cancel
    FOK = "FOK"  # Fill or kill


class ResponseType(str, Enum):
    """The level of detail returned when submitting a new order."""

    ACK = "ACK"
    RESULT = "RESULT"
    FULL = "FULL"


class Interval(str, Enum):

    ONE_SECOND = "1s"
    ONE_MINUTE = "1m"
    THREE_MINUTES = "3m"
    FIVE_MINUTES = "5m"
    FIFTEEN_MINUTES = "15m"
    THIRTY_MINUTES = "30m"
    ONE_HOUR = "1h"
    TWO_HOURS = "2h"
    FOUR_HOURS = "4h"
    SIX_HOURS = "6h"
    EIGHT_HOURS = "8h"
    TWELVE_HOURS = "12h"
    ONE_DAY = "1d"
    THREE_DAYS = "3d"
    ONE_WEEK = "1w"
    ONE_MONTH = "1M"
