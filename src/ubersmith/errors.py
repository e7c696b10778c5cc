"""Exception types raised by the ubersmith package.

Transport failures are never raised from `UbersmithClient.call`; they come back as a
failed `Response`. The exceptions below cover the remaining cases: typed decoding and
startup configuration.
"""

from __future__ import annotations


class UbersmithError(Exception):
    """Base class for errors raised by this package."""


class DecodeError(UbersmithError, ValueError):
    """The response payload cannot be decoded into the requested type."""


class ConfigurationError(UbersmithError, RuntimeError):
    """Client settings are incomplete or invalid."""
