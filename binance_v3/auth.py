import logging
from typing import Union


class Unauthenticated:
    """Credentials of a client that can only reach public endpoints."""

    __slots__ = []

    def __repr__(self) -> str:
        return "<Unauthenticated>"


class Authenticated:
    """An API key together with its secret key.

    Both are always present; an instance can't be created with only one.

    """

    __slots__ = [
        "api_key",
        "secret_key"
    ]

    api_key: str
    secret_key: str

    def __init__(self, api_key: str, secret_key: str):
        if not (api_key and secret_key):
            raise ValueError("Both an API key and a secret key are required.")

        self.api_key = api_key
        self.secret_key = secret_key

    def __repr__(self) -> str:
        return f"<Authenticated api_key='{self.api_key[:4]}...'>"


Credentials = Union[Unauthenticated, Authenticated]


def credentials_from_keys(api_key: str=None, secret_key: str=None) -> Credentials:
    """Pick the credentials variant for the supplied keys.

    Supplying just one of the two keys leaves the client unauthenticated,
    so signed endpoints fail with
    :exc:`~binance_v3.errors.MissingCredentials` rather than sending a
    request that can't be signed or can't be identified.

    """

    if api_key and secret_key:
        return Authenticated(api_key, secret_key)

    if api_key or secret_key:
        logging.warning(
            "Only one of the API key and secret key was supplied; "
            "signed endpoints will be unavailable."
        )

    return Unauthenticated()
