"""
Domain exceptions raised by the services.

Each exception carries the HTTP status and error code the controllers use
when turning it into a response.
"""


class PriceServiceError(Exception):
    """Base class for errors surfaced by the price services."""

    status_code = 500
    code = "INTERNAL_ERROR"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class FetchError(PriceServiceError):
    """The tariff API is unreachable, failed, or sent an unexpected payload."""

    status_code = 502
    code = "UPSTREAM_ERROR"


class InvalidInputError(PriceServiceError):
    """A request parameter is out of its accepted range."""

    status_code = 400
    code = "BAD_REQUEST"


class InvalidDateError(InvalidInputError):
    """A date supplied by the client is not a valid calendar date."""

    code = "INVALID_DATE"


class NoDataError(PriceServiceError):
    """The price store holds no tuples at all."""

    status_code = 404
    code = "NO_DATA"
