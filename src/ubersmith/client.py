"""
Ubersmith API client.

This module is responsible only for:
- turning a method name + parameter mapping into an authenticated HTTP POST,
- normalizing whatever happens into a `Response` (success, remote error, or local failure).

Navigating the returned payload lives in `ubersmith.response`.

    api = UbersmithClient("https://billing.example.com/api/2.0/", "username", "token")
    r = api.call("support.ticket_submit", {
        "subject": "subject",
        "body": "message here",
        "name": "Admin",
    })
"""

from __future__ import annotations

import logging
from typing import Any, Mapping
from urllib.parse import urlencode

import httpx

from ubersmith.config.settings import Settings, get_settings
from ubersmith.core.http import encode_json_body, post_json
from ubersmith.errors import ConfigurationError
from ubersmith.response import Response


# Parameters for one remote method call.
Request = Mapping[str, Any]


class UbersmithClient:
    """HTTP/JSON client for the Ubersmith API.

    Configuration is fixed at construction time, so one instance can serve calls from
    several threads.

    Args:
        host: Base endpoint URL (e.g. `https://billing.example.com/api/2.0/`).
        user: Account used for HTTP basic auth.
        token: API token, sent as the basic-auth password.
        debug: Log request URL/body and raw response body at INFO.
        verify_tls: Verify the server certificate. Only turn off for hosts with
            self-signed certificates.
        timeout_seconds: Per-request timeout; None keeps the httpx default.
        logger: Logger for request/response diagnostics (defaults to this module's).
        http_client: Pre-configured httpx client to send requests through. The caller
            owns it; `verify_tls` and `timeout_seconds` do not apply to it.
    """

    def __init__(
        self,
        host: str,
        user: str,
        token: str,
        *,
        debug: bool = False,
        verify_tls: bool = True,
        timeout_seconds: float | None = None,
        logger: logging.Logger | None = None,
        http_client: httpx.Client | None = None,
    ):
        self._host = host
        self._user = user
        self._token = token
        self._debug_on = bool(debug)
        self._verify_tls = bool(verify_tls)
        self._timeout_seconds = timeout_seconds
        self._logger = logger or logging.getLogger(__name__)
        self._http_client = http_client

    @classmethod
    def from_settings(
        cls,
        settings: Settings | None = None,
        *,
        logger: logging.Logger | None = None,
        http_client: httpx.Client | None = None,
    ) -> "UbersmithClient":
        """Build a client from `Settings` (defaults to `get_settings()`)."""
        settings = settings or get_settings()
        api = settings.api
        missing = [name for name in ("host", "user", "token") if not getattr(api, name)]
        if missing:
            env_names = ", ".join(f"UBERSMITH_{name.upper()}" for name in missing)
            raise ConfigurationError(f"Ubersmith API settings are incomplete. Set {env_names}.")

        return cls(
            api.host,
            api.user,
            api.token,
            debug=api.debug,
            verify_tls=api.verify_tls,
            timeout_seconds=api.timeout_seconds,
            logger=logger,
            http_client=http_client,
        )

    @property
    def host(self) -> str:
        return self._host

    @property
    def user(self) -> str:
        return self._user

    @property
    def debug(self) -> bool:
        return self._debug_on

    @property
    def verify_tls(self) -> bool:
        return self._verify_tls

    def __repr__(self) -> str:
        return f"UbersmithClient(host={self._host!r}, user={self._user!r}, debug={self._debug_on})"

    def build_url(self, method: str) -> str:
        """Return the request URL for `method` (`host?method=<urlencoded>`)."""
        return self._host + "?" + urlencode({"method": method})

    def call(self, method: str, params: Request | None = None) -> Response:
        """Invoke remote `method` with `params` and return the normalized response.

        Problems encoding `params`, building the request (including a host that fails
        URL or IDNA encoding), or talking to the server are reported in the returned
        `Response` (`status=False`, `error_code=500`), never raised. A body that is not
        an envelope comes back with `decode_error` set.

        The one exception is an empty `method`: it is a caller bug, detected before any
        request is built, and raised rather than returned.

        Raises:
            ValueError: If `method` is empty.
        """
        if not method:
            raise ValueError("method must be a non-empty string")

        url = self.build_url(method)
        self._debug("[API REQUEST]: %s", url)

        try:
            body = encode_json_body(params)
        except (TypeError, ValueError) as exc:
            self._logger.warning("Could not encode parameters for %s: %s", method, exc)
            return Response.failure(exc)

        self._debug("[API REQUEST DATA]: %s", body.decode("utf-8"))

        try:
            resp = post_json(
                url,
                content=body,
                auth=(self._user, self._token),
                timeout_seconds=self._timeout_seconds,
                verify=self._verify_tls,
                client=self._http_client,
            )
        except (httpx.HTTPError, httpx.InvalidURL, ValueError) as exc:
            # ValueError covers UnicodeError/idna.IDNAError raised while encoding the host.
            self._logger.warning("Ubersmith call %s failed: %s", method, exc)
            return Response.failure(exc)

        self._debug("[API RESPONSE]: %s", resp.text)
        r = Response.from_body(resp.content, http_status=resp.status_code)
        if r.decode_error:
            self._logger.warning("Could not decode response envelope for %s: %s", method, r.decode_error)
        return r

    def _debug(self, msg: str, *args: Any) -> None:
        if self._debug_on:
            self._logger.info(msg, *args)


def new(host: str, user: str, token: str, debug: bool = False) -> UbersmithClient:
    """Shorthand for `UbersmithClient(host, user, token, debug=debug)`."""
    return UbersmithClient(host, user, token, debug=debug)
