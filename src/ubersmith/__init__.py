"""Client for the Ubersmith HTTP/JSON API."""

from ubersmith.client import Request, UbersmithClient, new
from ubersmith.errors import ConfigurationError, DecodeError, UbersmithError
from ubersmith.response import INTERNAL_ERROR_CODE, Response

__all__ = [
    "INTERNAL_ERROR_CODE",
    "ConfigurationError",
    "DecodeError",
    "Request",
    "Response",
    "UbersmithClient",
    "UbersmithError",
    "new",
]

__version__ = "0.1.0"
