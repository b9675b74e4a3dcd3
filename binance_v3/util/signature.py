import hashlib
import hmac
from typing import Union


def sign(message: str, secret: Union[str, bytes]) -> str:
    """Generate the signature for a `SIGNED` endpoint.

    The signature is a HMAC-SHA256 digest of the canonical query string,
    keyed by the account's secret key.

    Examples:
        >>> sig = sign("symbol=LTCBTC&timestamp=1499827319559", "secret")
        >>> len(sig)
        64

    Args:
        message: The canonical query string, exactly as it'll be sent.
        secret: The secret key belonging to the API key.

    Returns:
        str: The lowercase hex digest.

    """

    if isinstance(secret, str):
        secret = secret.encode("utf-8")

    return hmac.new(secret, message.encode("utf-8"), hashlib.sha256).hexdigest()
