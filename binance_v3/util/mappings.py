from binance_v3.errors import *

from .enums import ErrorCodes as ERR


class Mappings:

    """A class containing some useful dictionaries.

    There shouldn't be any real reason to be using this, unless you're
    decoding raw responses yourself.

    """

    ERROR_MAPPINGS = {
        ERR.UNKNOWN: UnknownError,
        ERR.DISCONNECTED: Disconnected,
        ERR.UNAUTHORIZED: Unauthorized,
        ERR.TOO_MANY_REQUESTS: TooManyRequests,
        ERR.UNEXPECTED_RESPONSE: UnexpectedResponse,
        ERR.TIMEOUT: RequestTimeout,
        ERR.INVALID_TIMESTAMP: InvalidTimestamp,
        ERR.INVALID_SIGNATURE: InvalidSignature,

        ERR.ILLEGAL_CHARS: IllegalCharacters,
        ERR.TOO_MANY_PARAMETERS: TooManyParameters,
        ERR.MANDATORY_PARAM_EMPTY_OR_MALFORMED: MandatoryParameterMissing,
        ERR.UNKNOWN_PARAM: UnknownParameter,
        ERR.BAD_SYMBOL: InvalidSymbol,

        ERR.NEW_ORDER_REJECTED: NewOrderRejected,
        ERR.CANCEL_REJECTED: CancelRejected,
        ERR.NO_SUCH_ORDER: NoSuchOrder,
        ERR.BAD_API_KEY_FMT: BadAPIKeyFormat,
        ERR.REJECTED_MBX_KEY: RejectedAPIKey
    }
    """dict[:class:`~binance_v3.util.enums.ErrorCodes`, \
    :exc:`~binance_v3.errors.APIError`]"""
