from decimal import Decimal
from typing import List

from .util import auto_repr, to_decimal


class Balance:

    asset: str
    free: Decimal
    locked: Decimal

    def __init__(self, **data):
        self.asset  = data["asset"]
        self.free   = to_decimal(data["free"])
        self.locked = to_decimal(data["locked"])

    @property
    def total(self) -> Decimal:
        return self.free + self.locked

    def __repr__(self) -> str:
        return f"<asset='{self.asset}' free={self.free} locked={self.locked}>"

    def __str__(self) -> str:
        return f"{self.total} {self.asset}"


class Account:
    """A model used to describe a Binance spot account."""

    account_type: str
    balances: List[Balance]
    buyer_commission: int
    can_deposit: bool
    can_trade: bool
    can_withdraw: bool
    maker_commission: int
    permissions: List[str]
    seller_commission: int
    taker_commission: int
    update_time: int

    def __init__(self, **data):
        self.maker_commission  = data["makerCommission"]
        self.taker_commission  = data["takerCommission"]
        self.buyer_commission  = data["buyerCommission"]
        self.seller_commission = data["sellerCommission"]
        self.can_trade         = data["canTrade"]
        self.can_withdraw      = data["canWithdraw"]
        self.can_deposit       = data["canDeposit"]
        self.update_time       = data["updateTime"]
        self.account_type      = data["accountType"]
        self.balances          = [Balance(**b) for b in data["balances"]]
        self.permissions       = data.get("permissions", [])

    def balance(self, asset: str) -> Balance:
        """Get the balance of a single asset.

        Raises:
            KeyError: The account holds no balance entry for `asset`.

        """

        for b in self.balances:
            if b.asset == asset:
                return b

        raise KeyError(asset)

    def __repr__(self) -> str:
        return auto_repr(self)

    def __str__(self) -> str:
        return self.account_type
