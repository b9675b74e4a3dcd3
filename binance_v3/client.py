import asyncio
import logging
from typing import Any, Callable, Dict, List, TypeVar, Union

import aiohttp
from yarl import URL

from .account import Account
from .auth import Authenticated, Credentials, credentials_from_keys
from .errors import *
from .market import Candlestick, DepthTicker, ExchangeInfo, OrderBook
from .order import CancelledOrder, Order, OrderInfo
from .query import AccountQuery, CancelOpenOrdersQuery, CancelOrderQuery, DepthQuery, KlinesQuery, NewOrderQuery, OpenOrdersQuery, OrderQuery, SignedQuery
from .util.enums import Endpoints as ENDPOINT
from .util.enums import Method as METHOD
from .util.enums import Paths as PATH
from .util.helpers import auto_repr, compute_timestamp_offset, current_millis, decode_envelope, monotonic_millis
from .util.signature import sign

T = TypeVar("T")

API_KEY_HEADER = "X-MBX-APIKEY"

_PATH_TYPEHINT = Union[str, PATH]


def _empty(content: Any) -> None:
    if content != {}:
        raise ValueError(f"Expected an empty object, got {content!r}.")


def _list_of(build: Callable[[Any], T]) -> Callable[[Any], List[T]]:
    def parse(content: Any) -> List[T]:
        if not isinstance(content, list):
            raise TypeError(f"Expected an array, got {type(content).__name__}.")

        return [build(item) for item in content]

    return parse


class Client:
    """The main class interacting with Binance's spot API endpoints.

    Creating a client measures how far the local clock is from the
    exchange's, which takes one request to the server time endpoint. That
    offset is subtracted from the timestamp of every signed request. If the
    exchange can't be reached, the client can't be created.

    .. note:: The constructor blocks while it calibrates, and runs its
        requests on its own event loop (:attr:`loop`). From inside a running
        event loop, use :meth:`create` instead.

    Args:
        api_key (str): The API key, sent with every signed request.
        secret_key (str): The secret key used to sign requests.
        endpoint (:class:`~binance_v3.util.enums.Endpoints`): The API \
            endpoint to interact with. Defaults to the mainnet.
        session (:class:`aiohttp.ClientSession`): An existing session to make \
            requests with. The client creates (and closes) its own if omitted.
        **config (dict): A dictionary-based version of the positional arguments, \
            passed as `config={...}`.

    Raises:
        BinanceError: Any error from the server time request is raised as is.

    """

    credentials: Credentials
    endpoint: str

    def __init__(self,
            api_key: str=None,
            secret_key: str=None,
            endpoint: Union[str, ENDPOINT]=None,
            *,
            session: aiohttp.ClientSession=None,
            **config
        ):
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            pass
        else:
            raise RuntimeError(
                "Client() blocks while it calibrates. Use `await Client.create()` " + \
                "from inside a running event loop."
            )

        self._configure(api_key, secret_key, endpoint, session, config)

        self._loop = asyncio.new_event_loop()

        # Blocking, so that nothing can be signed before the offset is known
        try:
            self._loop.run_until_complete(self.__init_timestamp_offset())
        except Exception:
            self._loop.close()
            raise

    @classmethod
    async def create(cls,
            api_key: str=None,
            secret_key: str=None,
            endpoint: Union[str, ENDPOINT]=None,
            *,
            session: aiohttp.ClientSession=None,
            **config
        ) -> "Client":
        """Create a client from inside a running event loop.

        Takes the same arguments as the constructor.

        """

        client = cls.__new__(cls)
        client._configure(api_key, secret_key, endpoint, session, config)
        client._loop = asyncio.get_running_loop()

        await client.__init_timestamp_offset()

        return client

    def _configure(self, api_key, secret_key, endpoint, session, config) -> None:
        cfg = config.get("config", {})

        self.credentials = credentials_from_keys(
            cfg.get("api_key", api_key),
            cfg.get("secret_key", secret_key)
        )

        endpoint = cfg.get("endpoint", endpoint) or ENDPOINT.MAINNET

        if isinstance(endpoint, ENDPOINT):
            endpoint = endpoint.value

        self.endpoint = endpoint.rstrip("/")

        self._session = session
        self._owns_session = session is None

    @property
    def is_authenticated(self) -> bool:
        """Whether the client can make requests to signed endpoints."""

        return isinstance(self.credentials, Authenticated)

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        """The event loop the client was created on."""

        return self._loop

    @property
    def timestamp_offset(self) -> int:
        """The number of ms subtracted from signed timestamps.

        It's the local clock's lead over the exchange's, measured once when
        the client was created, plus
        :data:`~binance_v3.util.helpers.SAFETY_MARGIN_MS`.

        """

        return self.__timestamp_offset

    async def cancel_open_orders(self, query: CancelOpenOrdersQuery) -> List[CancelledOrder]:
        """Cancel all open orders on a symbol.

        Returns:
            The orders that were cancelled.

        Raises:
            MissingCredentials: The client has no API key and secret key.
            CancelRejected: There weren't any orders to cancel.

        """

        path = self._signed_path(PATH.OPEN_ORDERS, query)

        return await self._execute_signed(
            METHOD.DELETE, path, _list_of(lambda o: CancelledOrder(**o))
        )

    async def cancel_order(self, query: CancelOrderQuery) -> CancelledOrder:
        """Cancel an active order.

        Raises:
            MissingCredentials: The client has no API key and secret key.
            CancelRejected: The order couldn't be cancelled, e.g. it's \
                already filled.

        """

        path = self._signed_path(PATH.ORDER, query)

        return await self._execute_signed(
            METHOD.DELETE, path, lambda c: CancelledOrder(**c)
        )

    async def close(self) -> None:
        """Close the client's connection session, if the client opened it."""

        if self._owns_session and self._session is not None and not self._session.closed:
            await self._session.close()

    async def create_order(self, query: NewOrderQuery) -> Order:
        """Send in a new order.

        Returns:
            The placed order. Its fields follow the `RESULT` response type, \
            so leave :attr:`~binance_v3.query.NewOrderQuery.new_order_resp_type` \
            as it is.

        Raises:
            MissingCredentials: The client has no API key and secret key.
            NewOrderRejected: The exchange refused the order, e.g. for an \
                insufficient balance.

        """

        path = self._signed_path(PATH.ORDER, query)

        return await self._execute_signed(METHOD.POST, path, lambda c: Order(**c))

    async def get_account(self, query: AccountQuery=None) -> Account:
        """Get the account's information and balances.

        Raises:
            MissingCredentials: The client has no API key and secret key.
            InvalidTimestamp: The request reached the exchange outside of \
                its receive window.

        """

        path = self._signed_path(PATH.ACCOUNT, query or AccountQuery())

        return await self._execute_signed(METHOD.GET, path, lambda c: Account(**c))

    async def get_book_tickers(self) -> List[DepthTicker]:
        """Get the best bid and ask of every symbol on the exchange."""

        return await self._execute(
            METHOD.GET, PATH.BOOK_TICKER, _list_of(lambda t: DepthTicker(**t))
        )

    async def get_depth(self, query: DepthQuery) -> OrderBook:
        """Get the order book of a symbol.

        Raises:
            InvalidSymbol: The symbol isn't listed.

        """

        return await self._execute(
            METHOD.GET, PATH.DEPTH.value + "?" + query.to_query_string(),
            lambda c: OrderBook(**c)
        )

    async def get_exchange_info(self) -> ExchangeInfo:
        """Get the exchange's trading rules and symbol information."""

        logging.debug("Fetching exchange information...")

        return await self._execute(
            METHOD.GET, PATH.EXCHANGE_INFO, lambda c: ExchangeInfo(**c)
        )

    async def get_klines(self, query: KlinesQuery) -> List[Candlestick]:
        """Get kline/candlestick bars for a symbol.

        Klines are uniquely identified by their open time.

        Raises:
            InvalidSymbol: The symbol isn't listed.

        """

        return await self._execute(
            METHOD.GET, PATH.KLINES.value + "?" + query.to_query_string(),
            _list_of(lambda k: Candlestick(*k))
        )

    async def get_open_orders(self, query: OpenOrdersQuery=None) -> List[OrderInfo]:
        """Get the account's open orders, for one symbol or all of them.

        Raises:
            MissingCredentials: The client has no API key and secret key.

        """

        path = self._signed_path(PATH.OPEN_ORDERS, query or OpenOrdersQuery())

        return await self._execute_signed(
            METHOD.GET, path, _list_of(lambda o: OrderInfo(**o))
        )

    async def get_order(self, query: OrderQuery) -> OrderInfo:
        """Check an order's status.

        Raises:
            MissingCredentials: The client has no API key and secret key.
            NoSuchOrder: The order doesn't exist.

        """

        path = self._signed_path(PATH.ORDER, query)

        return await self._execute_signed(METHOD.GET, path, lambda c: OrderInfo(**c))

    async def get_server_time(self) -> int:
        """Get the exchange's current time, in epoch ms."""

        return await self._execute(
            METHOD.GET, PATH.TIME, lambda c: int(c["serverTime"])
        )

    async def ping(self) -> None:
        """Test connectivity to the REST API."""

        return await self._execute(METHOD.GET, PATH.PING, _empty)

    async def test_order(self, query: NewOrderQuery) -> None:
        """Test a new order.

        The order is validated and its signature checked, but it's never
        sent to the matching engine.

        Raises:
            MissingCredentials: The client has no API key and secret key.
            NewOrderRejected: The order would have been refused.

        """

        path = self._signed_path(PATH.ORDER_TEST, query)

        return await self._execute_signed(METHOD.POST, path, _empty)

    def _signed_path(self, path: PATH, query: SignedQuery) -> str:
        """Apply the offset to `query`, sign it, and append it to `path`.

        The signature covers the whole query string, so it's always the
        last parameter.

        Raises:
            MissingCredentials: The client has no API key and secret key.

        """

        if not isinstance(self.credentials, Authenticated):
            raise MissingCredentials()

        query = query.with_timestamp(query.timestamp - self.timestamp_offset)

        params = query.to_query_string()
        params += "&signature=" + sign(params, self.credentials.secret_key)

        return path.value + "?" + params

    def _build_url(self, path: str) -> URL:
        url = f"{self.endpoint}{path}"

        if not path.startswith("/"):
            raise UrlParsingError(url, f"Path '{path}' must start with '/'.")

        try:
            # `encoded` keeps the query exactly as it was signed
            parsed = URL(url, encoded=True)
        except (TypeError, ValueError) as e:
            raise UrlParsingError(url) from e

        if not (parsed.scheme and parsed.host):
            raise UrlParsingError(url)

        return parsed

    @staticmethod
    def _check_request(method: str, headers: Dict[str, str]) -> None:
        try:
            METHOD(method)
        except ValueError:
            raise RequestBuildingError(f"Unsupported HTTP method {method!r}.") from None

        for k, v in headers.items():
            if any(c in f"{k}{v}" for c in "\r\n"):
                raise RequestBuildingError(f"Header {k!r} contains a line break.")

    async def _execute(self,
            method: Union[str, METHOD],
            path: _PATH_TYPEHINT,
            parse: Callable[[Any], T],
            *,
            headers: Dict[str, str]=None
        ) -> T:
        """Make a single request and decode its response.

        Args:
            method: The HTTP method.
            path: The path, query string included, relative to the endpoint.
            parse: Builds the expected payload from the decoded JSON.
            headers: Any extra headers.

        Raises:
            UrlParsingError: The endpoint and path don't make a valid URL.
            RequestBuildingError: The method or headers are malformed.
            RequestExecutionError: The request couldn't be sent.
            ResponseReadingError: The response body couldn't be read.
            ResponseParsingError: The response body isn't what was expected.
            APIError: The exchange returned an error.

        """

        if isinstance(method, METHOD):
            method = method.value

        if isinstance(path, PATH):
            path = path.value

        headers = headers or {}

        url = self._build_url(path)
        self._check_request(method, headers)

        logging.debug(f"{method} {url.path}")

        try:
            response = await self._session.request(method, url, headers=headers)
        except (aiohttp.ClientError, asyncio.TimeoutError, OSError) as e:
            raise RequestExecutionError(f"{method} {url.path} failed: {e!r}") from e

        try:
            async with response:
                raw = await response.text()
        except (aiohttp.ClientError, asyncio.TimeoutError, UnicodeDecodeError) as e:
            raise ResponseReadingError(
                f"Couldn't read the response to {method} {url.path}: {e!r}"
            ) from e

        logging.debug(f"{method} {url.path} returned HTTP {response.status}")

        return decode_envelope(raw, parse)

    async def _execute_signed(self,
            method: Union[str, METHOD],
            path: str,
            parse: Callable[[Any], T]
        ) -> T:
        """Make a single request with the API key header attached.

        The path must already carry its signature.

        Raises:
            MissingCredentials: The client has no API key and secret key.

        """

        if not isinstance(self.credentials, Authenticated):
            raise MissingCredentials()

        headers = {
            API_KEY_HEADER: self.credentials.api_key
        }

        return await self._execute(method, path, parse, headers=headers)

    async def __init_timestamp_offset(self) -> None:
        """Create the session if needed and calibrate the timestamp offset."""

        if self._session is None:
            self._session = aiohttp.ClientSession()

        logging.debug("Calibrating timestamp offset...")

        try:
            local_start = current_millis()
            started = monotonic_millis()

            server_time = await self.get_server_time()

            round_trip = monotonic_millis() - started
        except BinanceError as e:
            logging.error(f"Couldn't calibrate the timestamp offset: {e}")
            await self.close()
            raise

        self.__timestamp_offset = compute_timestamp_offset(local_start, server_time, round_trip)

        logging.info(
            f"Finished calibration (offset {self.__timestamp_offset}ms, " + \
            f"round trip {round_trip}ms)"
        )

    def __repr__(self) -> str:
        return auto_repr(self)
