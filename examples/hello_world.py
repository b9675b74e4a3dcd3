import json

import binance_v3
from binance_v3 import DepthQuery
from binance_v3.util import Endpoints


with open("account.json", "r") as fp:
    cfg = json.load(fp)

cfg["endpoint"] = Endpoints.MAINNET

# Blocks until the timestamp offset has been calibrated
client = binance_v3.Client(config=cfg)


async def main():

    print(f"Local clock is {client.timestamp_offset}ms ahead (margin included)")

    book = await client.get_depth(DepthQuery("BTCUSDT", limit=5))
    print(book.bids[0], book.asks[0])

    account = await client.get_account()
    for balance in account.balances:
        if balance.total:
            print(balance)


if __name__ == "__main__":
    try:
        client.loop.run_until_complete(main())
    except KeyboardInterrupt:
        print("Exiting...")
    finally:
        # Prevents errors complaining about unclosed client sessions
        client.loop.run_until_complete(client.close())
