import asyncio
import json
import re

import aiohttp
import pytest

from binance_v3 import AccountQuery, CancelOpenOrdersQuery, CancelOrderQuery, Client, DepthQuery, KlinesQuery, NewOrderQuery, OpenOrdersQuery, OrderQuery
from binance_v3.errors import *
from binance_v3.util import OrderStatus, sign

from conftest import SERVER_TIME, FakeResponse, FakeSession

OFFSET = 1600

ORDER = {
    "symbol": "BTCUSDT",
    "orderId": 28,
    "orderListId": -1,
    "clientOrderId": "6gCrw2kRUAF9CvJDGP16IP",
    "transactTime": 1507725176595,
    "price": "0.00000000",
    "origQty": "10.00000000",
    "executedQty": "10.00000000",
    "cummulativeQuoteQty": "10.00000000",
    "status": "FILLED",
    "timeInForce": "GTC",
    "type": "MARKET",
    "side": "SELL"
}


def _signed_calls():
    return [
        lambda c: c.get_account(AccountQuery()),
        lambda c: c.get_open_orders(OpenOrdersQuery()),
        lambda c: c.cancel_open_orders(CancelOpenOrdersQuery("BTCUSDT")),
        lambda c: c.get_order(OrderQuery("BTCUSDT", order_id=1)),
        lambda c: c.create_order(NewOrderQuery("BTCUSDT", "BUY", "MARKET", quantity=1)),
        lambda c: c.cancel_order(CancelOrderQuery("BTCUSDT", order_id=1)),
        lambda c: c.test_order(NewOrderQuery("BTCUSDT", "BUY", "MARKET", quantity=1)),
    ]


async def test_offset_is_calibrated_on_creation(client, session):
    assert client.timestamp_offset == OFFSET
    assert session.paths == ["/api/v3/time"]


async def test_unauthenticated_client_is_calibrated_too(public_client, session):
    assert public_client.timestamp_offset == OFFSET
    assert not public_client.is_authenticated
    assert session.paths == ["/api/v3/time"]


async def test_offset_cannot_be_reassigned(client):
    with pytest.raises(AttributeError):
        client.timestamp_offset = 0


async def test_calibration_api_error_is_fatal(fixed_clocks):
    session = FakeSession({"/api/v3/time": '{"code": -1001, "msg": "Internal error."}'})

    with pytest.raises(Disconnected):
        await Client.create("key", "secret", session=session)


async def test_calibration_transport_error_is_fatal(fixed_clocks):
    session = FakeSession({"/api/v3/time": aiohttp.ClientConnectionError("refused")})

    with pytest.raises(RequestExecutionError):
        await Client.create(session=session)


async def test_calibration_with_unusable_endpoint_is_fatal(session):
    with pytest.raises(UrlParsingError):
        await Client.create(endpoint="not a url", session=session)

    assert session.calls == []


async def test_blocking_constructor_refuses_a_running_loop(session):
    with pytest.raises(RuntimeError):
        Client(session=session)


def test_blocking_constructor_calibrates(fixed_clocks):
    session = FakeSession({"/api/v3/ping": "{}"})
    client = Client(config={"api_key": "key", "secret_key": "secret"}, session=session)

    try:
        assert client.timestamp_offset == OFFSET
        assert client.is_authenticated
        assert client.loop.run_until_complete(client.ping()) is None
    finally:
        client.loop.close()


def test_blocking_constructor_raises_calibration_errors():
    session = FakeSession({"/api/v3/time": "not json"})

    with pytest.raises(ResponseParsingError):
        Client(session=session)


async def test_endpoint_config(fixed_clocks, session):
    client = await Client.create(session=session, config={"endpoint": "https://example.com/"})

    assert client.endpoint == "https://example.com"
    assert str(session.calls[0].url) == "https://example.com/api/v3/time"


async def test_ping(public_client, session):
    session.routes["/api/v3/ping"] = "{}"

    assert await public_client.ping() is None
    assert session.calls[-1].method == "GET"
    assert session.calls[-1].headers == {}


async def test_ping_error(public_client, session):
    session.routes["/api/v3/ping"] = FakeResponse('{"code": -1, "msg": "boom"}', status=500)

    with pytest.raises(APIError) as exc:
        await public_client.ping()

    assert exc.value.code == -1
    assert exc.value.msg == "boom"


async def test_status_code_does_not_pick_the_arm(public_client, session):
    session.routes["/api/v3/ping"] = FakeResponse("{}", status=503)

    assert await public_client.ping() is None


async def test_get_server_time(public_client):
    assert await public_client.get_server_time() == SERVER_TIME


async def test_get_klines(public_client, session):
    kline = [1499040000000, "0.01634790", "0.80000000", "0.01575800", "0.01577100",
             "148976.11427815", 1499644799999, "2434.19055334", 308, "1756.87402397",
             "28.46694368", "0"]
    session.routes["/api/v3/klines"] = json.dumps([kline])

    klines = await public_client.get_klines(KlinesQuery("BNBBTC", "1d", limit=1))

    assert session.calls[-1].url.raw_query_string == "symbol=BNBBTC&interval=1d&limit=1"
    assert len(klines) == 1
    assert str(klines[0].high) == "0.80000000"
    assert klines[0].number_of_trades == 308


async def test_get_depth(public_client, session):
    session.routes["/api/v3/depth"] = json.dumps({
        "lastUpdateId": 1027024,
        "bids": [["4.00000000", "431.00000000"]],
        "asks": [["4.00000200", "12.00000000"]]
    })

    book = await public_client.get_depth(DepthQuery("BNBBTC", limit=5))

    assert session.calls[-1].url.raw_query_string == "symbol=BNBBTC&limit=5"
    assert book.last_update_id == 1027024
    assert str(book.asks[0][0]) == "4.00000200"


async def test_get_book_tickers(public_client, session):
    session.routes["/api/v3/ticker/bookTicker"] = json.dumps([{
        "symbol": "LTCBTC",
        "bidPrice": "4.00000000",
        "bidQty": "431.00000000",
        "askPrice": "4.00000200",
        "askQty": "9.00000000"
    }])

    tickers = await public_client.get_book_tickers()

    assert [t.symbol for t in tickers] == ["LTCBTC"]
    assert str(tickers[0].ask_price) == "4.00000200"


async def test_book_tickers_must_be_an_array(public_client, session):
    session.routes["/api/v3/ticker/bookTicker"] = '{"symbol": "LTCBTC"}'

    with pytest.raises(ResponseParsingError):
        await public_client.get_book_tickers()


async def test_get_exchange_info(public_client, session):
    session.routes["/api/v3/exchangeInfo"] = json.dumps({
        "timezone": "UTC",
        "serverTime": 1565246363776,
        "rateLimits": [{"rateLimitType": "REQUEST_WEIGHT", "interval": "MINUTE",
                        "intervalNum": 1, "limit": 1200}],
        "symbols": [{"symbol": "ETHBTC", "status": "TRADING", "baseAsset": "ETH",
                     "quoteAsset": "BTC", "filters": [{"filterType": "PRICE_FILTER",
                                                       "tickSize": "0.00000100"}]}]
    })

    info = await public_client.get_exchange_info()

    assert info.rate_limits[0].interval_num == 1
    assert info.symbol("ETHBTC").base_asset == "ETH"
    assert info.symbol("ETHBTC").filters["PRICE_FILTER"]["tickSize"] == "0.00000100"


async def test_signed_request_shape(client, session):
    session.routes["/api/v3/account"] = json.dumps({
        "makerCommission": 15, "takerCommission": 15, "buyerCommission": 0,
        "sellerCommission": 0, "canTrade": True, "canWithdraw": True, "canDeposit": True,
        "updateTime": 123456789, "accountType": "SPOT",
        "balances": [{"asset": "BTC", "free": "4723846.89208129", "locked": "0.00000000"}],
        "permissions": ["SPOT"]
    })
    query = AccountQuery(timestamp=SERVER_TIME + 10_000)

    account = await client.get_account(query)

    call = session.calls[-1]
    params, signature = call.url.raw_query_string.rsplit("&", 1)

    assert call.method == "GET"
    assert call.url.path == "/api/v3/account"
    assert call.headers == {"X-MBX-APIKEY": "key"}
    assert params == f"timestamp={SERVER_TIME + 10_000 - OFFSET}"
    assert re.fullmatch(r"signature=[0-9a-f]{64}", signature)
    assert signature == "signature=" + sign(params, "secret")

    # The caller's query keeps its own timestamp
    assert query.timestamp == SERVER_TIME + 10_000
    assert str(account.balance("BTC").free) == "4723846.89208129"


@pytest.mark.parametrize("method,path,call", [
    ("GET", "/api/v3/openOrders", lambda c: c.get_open_orders(OpenOrdersQuery("BTCUSDT", timestamp=1))),
    ("DELETE", "/api/v3/openOrders", lambda c: c.cancel_open_orders(CancelOpenOrdersQuery("BTCUSDT", timestamp=1))),
    ("GET", "/api/v3/order", lambda c: c.get_order(OrderQuery("BTCUSDT", order_id=28, timestamp=1))),
    ("POST", "/api/v3/order", lambda c: c.create_order(NewOrderQuery("BTCUSDT", "SELL", "MARKET", quantity=10, timestamp=1))),
    ("DELETE", "/api/v3/order", lambda c: c.cancel_order(CancelOrderQuery("BTCUSDT", order_id=28, timestamp=1))),
    ("POST", "/api/v3/order/test", lambda c: c.test_order(NewOrderQuery("BTCUSDT", "SELL", "MARKET", quantity=10, timestamp=1))),
])
async def test_signed_endpoints(client, session, method, path, call):
    cancelled = dict(ORDER, origClientOrderId="myOrder1", status="CANCELED")
    session.routes.update({
        "/api/v3/openOrders": json.dumps([cancelled]),
        "/api/v3/order": json.dumps(cancelled if method == "DELETE" else ORDER),
        "/api/v3/order/test": "{}",
    })

    result = await call(client)

    last = session.calls[-1]
    assert (last.method, last.url.path) == (method, path)
    assert last.headers == {"X-MBX-APIKEY": "key"}
    assert f"timestamp={1 - OFFSET}&signature=" in last.url.raw_query_string

    if path == "/api/v3/order/test":
        assert result is None
    elif method == "DELETE" and path == "/api/v3/order":
        assert result.status is OrderStatus.CANCELED
        assert result.orig_client_order_id == "myOrder1"


async def test_create_order_result(client, session):
    session.routes["/api/v3/order"] = json.dumps(ORDER)

    order = await client.create_order(NewOrderQuery("BTCUSDT", "SELL", "MARKET", quantity=10))

    assert order.order_id == 28
    assert order.status is OrderStatus.FILLED
    assert str(order.cummulative_quote_qty) == "10.00000000"


@pytest.mark.parametrize("call", _signed_calls())
async def test_signed_endpoints_need_credentials(public_client, session, call):
    with pytest.raises(MissingCredentials):
        await call(public_client)

    assert session.paths == ["/api/v3/time"]


@pytest.mark.parametrize("keys", [{"api_key": "key"}, {"secret_key": "secret"}])
async def test_half_credentials_fail_before_any_request(fixed_clocks, keys):
    session = FakeSession()
    client = await Client.create(session=session, **keys)

    assert not client.is_authenticated

    for call in _signed_calls():
        with pytest.raises(MissingCredentials):
            await call(client)

    assert session.paths == ["/api/v3/time"]


async def test_signed_executor_checks_credentials(public_client, session):
    with pytest.raises(MissingCredentials):
        await public_client._execute_signed("GET", "/api/v3/account?timestamp=1", lambda c: c)

    assert session.paths == ["/api/v3/time"]


async def test_transport_error(public_client, session):
    error = aiohttp.ClientConnectionError("connection reset")
    session.routes["/api/v3/ping"] = error

    with pytest.raises(RequestExecutionError) as exc:
        await public_client.ping()

    assert exc.value.__cause__ is error


async def test_transport_timeout(public_client, session):
    session.routes["/api/v3/ping"] = asyncio.TimeoutError()

    with pytest.raises(RequestExecutionError):
        await public_client.ping()


async def test_read_error(public_client, session):
    response = FakeResponse(error=aiohttp.ClientPayloadError("truncated"))
    session.routes["/api/v3/ping"] = response

    with pytest.raises(ResponseReadingError):
        await public_client.ping()

    assert response.released


async def test_parse_error_carries_body(public_client, session):
    session.routes["/api/v3/ping"] = "<html>oops</html>"

    with pytest.raises(ResponseParsingError) as exc:
        await public_client.ping()

    assert exc.value.raw == "<html>oops</html>"


async def test_unknown_enum_is_a_parse_error(client, session):
    session.routes["/api/v3/order"] = json.dumps(dict(ORDER, status="SOMETHING_NEW"))

    with pytest.raises(ResponseParsingError):
        await client.get_order(OrderQuery("BTCUSDT", order_id=28))


async def test_relative_path_is_a_url_error(public_client, session):
    with pytest.raises(UrlParsingError):
        await public_client._execute("GET", "api/v3/ticker/bookTicker", lambda c: c)

    assert session.paths == ["/api/v3/time"]


async def test_bad_method_is_a_build_error(public_client, session):
    with pytest.raises(RequestBuildingError):
        await public_client._execute("FETCH", "/api/v3/ping", lambda c: c)

    assert session.paths == ["/api/v3/time"]


async def test_bad_api_key_is_a_build_error(fixed_clocks, session):
    client = await Client.create("key\r\nX-Injected: 1", "secret", session=session)

    with pytest.raises(RequestBuildingError):
        await client.get_account()

    assert session.paths == ["/api/v3/time"]


async def test_close_leaves_supplied_session_open(client, session):
    await client.close()

    assert not session.closed
