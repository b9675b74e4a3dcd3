import asyncio
import json
from decimal import Decimal

import binance_v3
from binance_v3 import NewOrderQuery, OrderQuery, OrderSide, OrderType, TimeInForce
from binance_v3.errors import NewOrderRejected
from binance_v3.util import Endpoints


async def main():
    """Submit an order, selling 0.5 ETH @ 4000 USDT/ETH, on the testnet."""

    with open("account.json", "r") as fp:
        cfg = json.load(fp)

    cfg["endpoint"] = Endpoints.TESTNET

    client = await binance_v3.Client.create(config=cfg)

    order = NewOrderQuery(
        "ETHUSDT",
        OrderSide.SELL,
        OrderType.LIMIT,
        quantity=Decimal("0.5"),
        price=Decimal("4000"),
        time_in_force=TimeInForce.GTC
    )

    try:
        # Validate it without it reaching the matching engine first
        await client.test_order(order)

        submitted = await client.create_order(order)
        print(repr(submitted))

        # See the order's status
        status = await client.get_order(OrderQuery("ETHUSDT", order_id=submitted.order_id))
        print(status)
    except NewOrderRejected as e:
        print(f"Rejected: {e.msg}")
    finally:
        await client.close()


if __name__ == "__main__":
    asyncio.run(main())
