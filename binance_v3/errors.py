class BinanceError(Exception):
    """The default base class for all Binance exceptions."""
    pass


class InvalidArguments(BinanceError):

    def __init__(self, message: str=None):
        if not message:
            message = "Invalid arguments supplied."
        super().__init__(message)


class MissingCredentials(BinanceError):

    def __init__(self, message: str=None):
        if not message:
            message = "Both an API key and a secret key are required " + \
                "for signed endpoints."
        super().__init__(message)


class UrlParsingError(BinanceError):
    """The request URL couldn't be composed from the endpoint and path.

    Attributes:
        url (str): The offending URL.

    """

    def __init__(self, url: str, message: str=None):
        self.url = url

        if not message:
            message = f"Couldn't parse URL '{url}'."
        super().__init__(message)


class RequestBuildingError(BinanceError):

    def __init__(self, message: str=None):
        if not message:
            message = "Couldn't build the request."
        super().__init__(message)


class RequestExecutionError(BinanceError):

    def __init__(self, message: str=None):
        if not message:
            message = "The request couldn't be sent."
        super().__init__(message)


class ResponseReadingError(BinanceError):

    def __init__(self, message: str=None):
        if not message:
            message = "The response body couldn't be read."
        super().__init__(message)


class ResponseParsingError(BinanceError):
    """The response body matched neither the expected payload nor an error.

    Attributes:
        raw (str): The response body, exactly as it was received.

    """

    def __init__(self, raw: str, message: str=None):
        self.raw = raw

        if not message:
            message = "Couldn't parse the response body."
        super().__init__(f"{message} Body: {raw!r}")


class APIError(BinanceError):
    """An error object returned by the exchange itself.

    Attributes:
        code (int): The exchange's error code, e.g. `-1021`.
        msg (str): The exchange's message, untouched.

    """

    def __init__(self, code: int, msg: str=None):
        self.code = code
        self.msg = msg

        super().__init__(f"({code}) {msg}")


class UnknownError(APIError):
    pass


class Disconnected(APIError):
    pass


class Unauthorized(APIError):
    pass


class TooManyRequests(APIError):
    pass


class UnexpectedResponse(APIError):
    pass


class RequestTimeout(APIError):
    pass


class InvalidTimestamp(APIError):
    """The signed timestamp fell outside of the server's `recvWindow`."""
    pass


class InvalidSignature(APIError):
    pass


class IllegalCharacters(APIError):
    pass


class TooManyParameters(APIError):
    pass


class MandatoryParameterMissing(APIError):
    pass


class UnknownParameter(APIError):
    pass


class InvalidSymbol(APIError):
    pass


class NewOrderRejected(APIError):
    pass


class CancelRejected(APIError):
    pass


class NoSuchOrder(APIError):
    pass


class BadAPIKeyFormat(APIError):
    pass


class RejectedAPIKey(APIError):
    pass
