import json
import time
from datetime import datetime
from decimal import Decimal
from typing import Any, Callable, TypeVar

from ..errors import APIError, ResponseParsingError
from ..util.mappings import Mappings

T = TypeVar("T")

SAFETY_MARGIN_MS = 1000
"""Pushes signed timestamps this far into the past, so that a little clock
drift or jitter can't put them ahead of the server's `recvWindow`."""


def auto_repr(obj: object):
    """A lazy '__repr__()' substitute."""
    attrs = []

    for a in obj.__annotations__.keys():
        try:
            if isinstance(getattr(obj, a), datetime):
                attrs.append(f"{a}='{getattr(obj, a)}'")
            else:
                attrs.append(f"{a}={repr(getattr(obj, a))}")

        except AttributeError:
            continue

    return f"<{' '.join(attrs)}>"


def current_millis() -> int:
    """The local wall-clock time in epoch milliseconds."""

    return int(time.time() * 1000)


def monotonic_millis() -> int:
    """A monotonic clock reading in milliseconds, for measuring durations."""

    return int(time.perf_counter() * 1000)


def compute_timestamp_offset(local_start: int, server_time: int, round_trip: int) -> int:
    """Work out how far the local clock is ahead of the server's.

    The server is assumed to have read its clock half way through the
    round trip, so the reported time is pulled back by half of it before
    comparing with the local time taken just before the request went out.

    Examples:
        >>> compute_timestamp_offset(1_000_500, 1_000_000, 200)
        1600

    Args:
        local_start: Local epoch ms, read right before the request.
        server_time: The server's reported epoch ms.
        round_trip: How long the request took, in ms.

    Returns:
        int: The number of milliseconds to subtract from any local
        timestamp before signing it, safety margin included.

    """

    server_estimate = server_time - round_trip // 2

    return (local_start - server_estimate) + SAFETY_MARGIN_MS


def is_error_payload(content: Any) -> bool:
    """Whether the decoded JSON is the exchange's error object.

    The error object is recognised by its two fields: an integer `code`
    and a string `msg`. None of the success payloads carry both.

    """

    if not isinstance(content, dict):
        return False

    code = content.get("code")

    return isinstance(code, int) and not isinstance(code, bool) and \
        isinstance(content.get("msg"), str)


def raise_errors_in(content: Any) -> None:
    """Raise the appropriate error from an API response.

    Exceptions are accessed from a mapping, using the returned code. Codes
    that aren't registered in :class:`~binance_v3.util.enums.ErrorCodes` are
    raised as a plain :exc:`~binance_v3.errors.APIError`.

    Raises:
        APIError: The exchange rejected the request.

    """

    if not is_error_payload(content):
        return

    code = content["code"]
    error = Mappings.ERROR_MAPPINGS.get(code, APIError)

    raise error(code, content["msg"])


def decode_envelope(raw: str, parse: Callable[[Any], T]) -> T:
    """Decode a response body into either a payload or an error.

    The error arm is checked first; an empty object such as the one
    returned by `ping` would otherwise also accept an error object.

    Args:
        raw: The response body.
        parse: Builds the expected payload from the decoded JSON.

    Raises:
        APIError: The body is the exchange's error object.
        ResponseParsingError: The body isn't JSON, or doesn't fit `parse`.

    """

    try:
        content = json.loads(raw, parse_float=Decimal)
    except ValueError as e:
        raise ResponseParsingError(raw, f"Invalid JSON ({e}).") from e

    raise_errors_in(content)

    try:
        return parse(content)
    except (ArithmeticError, KeyError, TypeError, ValueError) as e:
        raise ResponseParsingError(
            raw, f"Unexpected payload shape ({type(e).__name__}: {e})."
        ) from e


def to_decimal(value: Any) -> Decimal:
    """Convert a decimal string from the API into a :class:`~decimal.Decimal`.

    Raises:
        TypeError: `value` is a float, which would have lost precision already.

    """

    if isinstance(value, float):
        raise TypeError(f"Refusing to convert float {value!r} to Decimal.")

    if isinstance(value, Decimal):
        return value

    return Decimal(str(value))


def to_snake_case(camel: str) -> str:
    """Take a 'camelCase' string and return its 'snake_case' format.

    This is primarily used in conjunction with :py:func:`setattr()`
    when dynamically instantiating classes when interacting with the
    API.

    Examples:
        >>> to_snake_case("baseAssetPrecision")
        'base_asset_precision'

    Args:
        camel (str): The target camelCase string to turn into snake_case.

    Returns:
        str: The snake_case equivalent of the `camel` input.

    """

    snake = ""

    for _ in list(camel):
        if _.isupper():
            snake += f"_{_.lower()}"
            continue
        snake += _

    return snake
